"""Persistence access for users and their photographs.

Every method translates database failures into domain errors: unique-constraint
violations become ConflictError, anything else becomes InternalError with a fixed
message. Absence is not an error here; reads return None.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from userhub.core.exceptions import ConflictError, InternalError
from userhub.models import AccountStatus, Photograph, User, UserRole
from userhub.schemas.user import UserCreateRequest, UserPagination, UserUpdateRequest

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "user_id": User.user_id,
    "username": User.username,
    "created_at": User.created_at,
    "updated_at": User.updated_at,
}


@dataclass
class UserPage:
    """One page of users. total_items counts this page only, not every match."""

    results: list[User]
    total_items: int
    pagination: UserPagination


def _active_matching(search: str):
    return (
        User.account_status == AccountStatus.ACTIVE,
        User.username.icontains(search, autoescape=True),
    )


class UserRepository:
    """CRUD over the users and photographs tables for a single session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_all(self, pagination: UserPagination) -> UserPage:
        """Return one page of active users whose username contains the search text."""
        skip = pagination.offset
        logger.info(
            "Listing users: page=%s size=%s sort=%s order=%s search=%r skip=%s",
            pagination.page,
            pagination.size,
            pagination.sort,
            pagination.order,
            pagination.search,
            skip,
        )
        column = SORT_COLUMNS[pagination.sort]
        order_by = [column.desc() if pagination.order == "desc" else column.asc()]
        if column is not User.user_id:
            # Timestamps and usernames alone do not give a stable order across pages.
            order_by.append(User.user_id.asc())
        try:
            results = (
                self.db.query(User)
                .options(joinedload(User.photograph))
                .filter(*_active_matching(pagination.search))
                .order_by(*order_by)
                .offset(skip)
                .limit(pagination.size)
                .all()
            )
        except Exception as e:
            logger.exception("Failed to list users: %s", e)
            raise InternalError("Error listing users") from e

        logger.info("Found %s user(s)", len(results))
        return UserPage(results=results, total_items=len(results), pagination=pagination)

    def count(self, search: str = "") -> int:
        """Count all active users whose username contains the search text."""
        try:
            return self.db.query(User).filter(*_active_matching(search)).count()
        except Exception as e:
            logger.exception("Failed to count users: %s", e)
            raise InternalError("Error counting users") from e

    def find_one(self, user_id: int) -> User | None:
        """Return the active user with its photograph, or None."""
        try:
            return (
                self.db.query(User)
                .options(joinedload(User.photograph))
                .filter(
                    User.user_id == user_id,
                    User.account_status == AccountStatus.ACTIVE,
                )
                .first()
            )
        except Exception as e:
            logger.exception("Failed to fetch user_id=%s: %s", user_id, e)
            raise InternalError("Error fetching user by ID") from e

    def find_user_by_username(self, username: str):
        """Return the (username, password, user_role) row of an active user, or None."""
        logger.info("Looking up credentials for username=%s", username)
        try:
            return (
                self.db.query(User.username, User.password, User.user_role)
                .filter(
                    User.username == username,
                    User.account_status == AccountStatus.ACTIVE,
                )
                .first()
            )
        except Exception as e:
            logger.exception("Failed to fetch username=%s: %s", username, e)
            raise InternalError("Error fetching user by username") from e

    def create(self, request: UserCreateRequest) -> User:
        """
        Insert an active USER and its photograph in one transaction.

        request.password must already be hashed.
        """
        logger.info("Saving user username=%s", request.username)
        now = datetime.now(UTC)
        user = User(
            username=request.username,
            password=request.password,
            user_role=UserRole.USER,
            account_status=AccountStatus.ACTIVE,
            created_at=now,
            updated_at=now,
            photograph=Photograph(
                source=request.photograph.source,
                media_type=request.photograph.media_type,
                created_at=now,
                updated_at=now,
            ),
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Username already in use: %s", request.username)
            raise ConflictError("Username already in use") from e
        except Exception as e:
            self.db.rollback()
            logger.exception("Failed to save user: %s", e)
            raise InternalError("Error saving user") from e

        logger.info("Saved user_id=%s", user.user_id)
        return user

    def update(self, user_id: int, request: UserUpdateRequest) -> User:
        """
        Update username and the user's photograph in one transaction.

        Fails with InternalError if the user does not exist or
        request.photograph.media_id is not the user's photograph.
        """
        logger.info("Updating user_id=%s", user_id)
        try:
            user = (
                self.db.query(User)
                .options(joinedload(User.photograph))
                .filter(User.user_id == user_id)
                .one()
            )
            photograph = user.photograph
            if photograph is None or photograph.media_id != request.photograph.media_id:
                raise ValueError(
                    f"media_id={request.photograph.media_id} is not the photograph of user_id={user_id}"
                )
            now = datetime.now(UTC)
            user.username = request.username
            user.updated_at = now
            photograph.source = request.photograph.source
            photograph.media_type = request.photograph.media_type
            photograph.updated_at = now
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Username already in use: %s", request.username)
            raise ConflictError("Username already in use") from e
        except Exception as e:
            self.db.rollback()
            logger.exception("Failed to update user_id=%s: %s", user_id, e)
            raise InternalError("Error updating user") from e

        logger.info("Updated user_id=%s", user_id)
        return user

    def deactivate(self, user_id: int) -> User:
        """Flip account_status to INACTIVE. There is no way back from here."""
        logger.info("Deactivating user_id=%s", user_id)
        try:
            user = self.db.query(User).filter(User.user_id == user_id).one()
            user.account_status = AccountStatus.INACTIVE
            user.updated_at = datetime.now(UTC)
            self.db.commit()
            self.db.refresh(user)
        except Exception as e:
            self.db.rollback()
            logger.exception("Failed to deactivate user_id=%s: %s", user_id, e)
            raise InternalError("Error deactivating user") from e

        logger.info("Deactivated user_id=%s", user_id)
        return user
