"""SQLAlchemy ORM models."""

from userhub.models.base import Base
from userhub.models.enums import AccountStatus, UserRole
from userhub.models.user import Photograph, User

__all__ = ["AccountStatus", "Base", "Photograph", "User", "UserRole"]
