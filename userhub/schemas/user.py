"""Request/response schemas for user endpoints and repository inputs."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from userhub.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from userhub.models.enums import UserRole

# Columns a listing may be ordered by.
SortField = Literal["user_id", "username", "created_at", "updated_at"]
SortOrder = Literal["asc", "desc"]

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Largest page whose offset still fits a signed 64-bit OFFSET at the maximum page size.
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE - 1


class PhotographRequest(BaseModel):
    """Photograph data supplied when creating a user."""

    source: str = Field(..., min_length=1, max_length=2048, description="URI or path of the image")
    media_type: str = Field(..., min_length=1, max_length=255, description="MIME type, e.g. image/png")


class PhotographUpdateRequest(PhotographRequest):
    """Photograph data for an update; media_id must be the user's own photograph."""

    media_id: int = Field(..., ge=1, description="ID of the photograph being updated")


class UserCreateRequest(BaseModel):
    """Body for POST /users."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    photograph: PhotographRequest


class UserUpdateRequest(BaseModel):
    """Body for PUT /users/{user_id}."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    photograph: PhotographUpdateRequest


class UserPagination(BaseModel):
    """Listing parameters: zero-based page, page size, ordering and username search."""

    page: int = Field(default=0, ge=0, le=MAX_PAGE, description="Zero-based page index")
    size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size")
    sort: SortField = Field(default="username", description="Column to order by")
    order: SortOrder = Field(default="asc", description="Sort direction")
    search: str = Field(
        default="",
        max_length=USERNAME_MAX_LEN,
        description="Case-insensitive substring matched against username",
    )

    @property
    def offset(self) -> int:
        return self.page * self.size


class PhotographResponse(BaseModel):
    """Photograph projection nested in UserResponse."""

    media_id: int
    source: str
    media_type: str
    created_at: datetime
    updated_at: datetime


class UserResponse(BaseModel):
    """User as returned to API callers (no password, no account status)."""

    user_id: int
    username: str
    user_role: UserRole
    created_at: datetime
    updated_at: datetime
    photograph: PhotographResponse


class UserPageResponse(BaseModel):
    """Response for GET /users."""

    items: list[UserResponse]
    total_items: int = Field(..., description="Number of users on this page")
    total_count: int = Field(..., description="Number of active users matching the search")
    pagination: UserPagination


class UserCredentials(BaseModel):
    """Username, password hash and role of an active user, for credential checks."""

    username: str
    password: str
    user_role: UserRole
