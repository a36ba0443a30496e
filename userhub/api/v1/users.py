"""User CRUD routes. Thin wiring over UserService; domain errors become HTTP errors here."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from userhub.core.database import get_db
from userhub.core.exceptions import ConflictError, InternalError, NotFoundError, UserHubError
from userhub.schemas.user import (
    UserCreateRequest,
    UserPageResponse,
    UserPagination,
    UserResponse,
    UserUpdateRequest,
)
from userhub.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter()


def get_user_service(db: Annotated[Session, Depends(get_db)]) -> UserService:
    """Dependency: a UserService bound to the request's DB session."""
    return UserService(db)


def _to_http(e: UserHubError) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    if isinstance(e, InternalError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message
        )
    logger.error("Unmapped domain error: %s", e)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.get("", response_model=UserPageResponse)
def list_users(
    pagination: Annotated[UserPagination, Query()],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserPageResponse:
    """
    List active users, one page at a time.

    total_items is the number of users on this page; total_count is every active
    user matching the search, for computing the number of pages.
    """
    try:
        return service.list_users(pagination)
    except UserHubError as e:
        raise _to_http(e) from e


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Return one active user; 404 if missing or deactivated."""
    try:
        return service.get_user(user_id)
    except UserHubError as e:
        raise _to_http(e) from e


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreateRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create an active USER with its photograph; 409 if the username is taken."""
    try:
        return service.create_user(body)
    except UserHubError as e:
        raise _to_http(e) from e


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    try:
        return service.update_user(user_id, body)
    except UserHubError as e:
        raise _to_http(e) from e


@router.delete("/{user_id}", response_model=UserResponse)
def deactivate_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Soft-delete: the user is marked INACTIVE and disappears from every read."""
    try:
        return service.deactivate_user(user_id)
    except UserHubError as e:
        raise _to_http(e) from e
