"""User use cases: combine the repository with the DTO mapper and password hashing."""

import logging

from sqlalchemy.orm import Session

from userhub.core.exceptions import NotFoundError
from userhub.core.security import hash_password, verify_password
from userhub.models import User
from userhub.repositories.user_repository import UserRepository
from userhub.schemas.user import (
    UserCreateRequest,
    UserCredentials,
    UserPageResponse,
    UserPagination,
    UserResponse,
    UserUpdateRequest,
)
from userhub.services.user_mapper import parse_entities_to_dto, parse_to_dto

logger = logging.getLogger(__name__)


class UserService:
    """Entry point used by the API routes and the create_user script."""

    def __init__(self, db: Session, repository: UserRepository | None = None) -> None:
        self.repository = repository or UserRepository(db)

    def list_users(self, pagination: UserPagination) -> UserPageResponse:
        page = self.repository.find_all(pagination)
        total_count = self.repository.count(pagination.search)
        return UserPageResponse(
            items=parse_entities_to_dto(page.results),
            total_items=page.total_items,
            total_count=total_count,
            pagination=page.pagination,
        )

    def get_user(self, user_id: int) -> UserResponse:
        """Return the active user or raise NotFoundError."""
        return parse_to_dto(self._require_active(user_id))

    def create_user(self, request: UserCreateRequest) -> UserResponse:
        """Hash the password and persist a new active user with its photograph."""
        hashed = request.model_copy(update={"password": hash_password(request.password)})
        user = self.repository.create(hashed)
        return parse_to_dto(user)

    def update_user(self, user_id: int, request: UserUpdateRequest) -> UserResponse:
        self._require_active(user_id)
        return parse_to_dto(self.repository.update(user_id, request))

    def deactivate_user(self, user_id: int) -> UserResponse:
        """Soft-delete an active user; returns the user as it was deactivated."""
        self._require_active(user_id)
        return parse_to_dto(self.repository.deactivate(user_id))

    def authenticate(self, username: str, password: str) -> UserCredentials | None:
        """
        Check a username/password pair against the stored bcrypt hash.

        Returns the credential projection on success, None for an unknown,
        inactive or wrong-password user.
        """
        row = self.repository.find_user_by_username(username)
        if row is None or not verify_password(password, row.password):
            logger.info("Credential check failed for username=%s", username)
            return None
        return UserCredentials.model_validate(row._asdict())

    def _require_active(self, user_id: int) -> User:
        user = self.repository.find_one(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user
