"""Repositories: database access for the service layer."""

from userhub.repositories.user_repository import UserPage, UserRepository

__all__ = ["UserPage", "UserRepository"]
