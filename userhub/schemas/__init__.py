"""Pydantic request/response schemas."""

from userhub.schemas.health import HealthResponse
from userhub.schemas.user import (
    PhotographRequest,
    PhotographResponse,
    PhotographUpdateRequest,
    UserCreateRequest,
    UserCredentials,
    UserPageResponse,
    UserPagination,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "HealthResponse",
    "PhotographRequest",
    "PhotographResponse",
    "PhotographUpdateRequest",
    "UserCreateRequest",
    "UserCredentials",
    "UserPageResponse",
    "UserPagination",
    "UserResponse",
    "UserUpdateRequest",
]
