"""Project persisted User entities onto UserResponse DTOs."""

import logging
from collections.abc import Iterable

from userhub.core.exceptions import InternalError
from userhub.models.user import User
from userhub.schemas.user import PhotographResponse, UserResponse

logger = logging.getLogger(__name__)


def parse_to_dto(entity: User) -> UserResponse:
    """
    Convert one User entity (with its photograph loaded) to a UserResponse.

    Ids are coerced to int. Raises InternalError if the entity is malformed,
    e.g. has no photograph; no partial DTO is produced.
    """
    try:
        photograph = entity.photograph
        return UserResponse(
            user_id=int(entity.user_id),
            username=entity.username,
            user_role=entity.user_role,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            photograph=PhotographResponse(
                media_id=int(photograph.media_id),
                source=photograph.source,
                media_type=photograph.media_type,
                created_at=photograph.created_at,
                updated_at=photograph.updated_at,
            ),
        )
    except (AttributeError, TypeError, ValueError) as e:
        logger.exception("Failed to map user entity to DTO: %s", e)
        raise InternalError("Error converting entity to DTO") from e


def parse_entities_to_dto(entities: Iterable[User]) -> list[UserResponse]:
    """Convert entities in order. If any one fails the whole call raises InternalError."""
    try:
        return [parse_to_dto(entity) for entity in entities]
    except InternalError as e:
        raise InternalError("Error converting entities to DTOs") from e
