"""Application error taxonomy.

Every error raised by the services carries the HTTP status it maps to.
The handler registered in src.main renders them as ``{"ok": false, "error": ...}``.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that are reported to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """A required field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppError):
    """Bad credentials or no valid session."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class ConflictError(AppError):
    """A uniqueness rule was violated (e.g. duplicate email)."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class StorageError(AppError):
    """The underlying store failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database error"
