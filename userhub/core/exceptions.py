"""Domain exceptions raised by the repository, mapper and service layers.

Routes translate these into HTTP responses; nothing below the API layer
knows about status codes.
"""


class UserHubError(Exception):
    """Base class for userhub errors. `message` is safe to show to API callers."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(UserHubError):
    """Raised when a requested user does not exist or is no longer active."""


class ConflictError(UserHubError):
    """Raised when a write violates a unique constraint (e.g. duplicate username)."""


class InternalError(UserHubError):
    """Raised for any unexpected failure while mapping or accessing persistence."""
