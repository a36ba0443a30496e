"""Enums for user model fields."""

from enum import Enum


class UserRole(str, Enum):
    """Role assigned to a user account."""

    USER = "USER"
    ADMIN = "ADMIN"


class AccountStatus(str, Enum):
    """Soft-delete flag. Only ACTIVE users are visible to read paths."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
