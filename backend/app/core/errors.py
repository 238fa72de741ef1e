# backend/app/core/errors.py
"""
Domain error taxonomy.

Services raise these; the handler registered in main.py turns each into a
JSON response of the form {"error": message} with the carried status code.
"""
from typing import Optional


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 422
    default_message = "Invalid input"


class ConflictError(AppError):
    """Duplicate email, or a second file for the same account."""

    status_code = 409
    default_message = "Resource already exists"


class AuthError(AppError):
    """
    Authentication failure.

    `reason` is one of "missing", "expired", "invalid" or "credentials".
    """

    status_code = 401
    default_message = "Access denied"

    def __init__(
        self,
        message: Optional[str] = None,
        reason: str = "invalid",
        status_code: Optional[int] = None,
    ):
        self.reason = reason
        super().__init__(message, status_code)


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class StorageError(AppError):
    """Blob sink put/delete failure."""

    status_code = 502
    default_message = "Storage backend error"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal Server Error"
