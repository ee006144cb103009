"""
Typed error taxonomy.

Every error the service raises on purpose derives from ``AppError`` and
carries the HTTP status it maps to.  The mapping to responses happens once,
in ``api.error_handlers``.
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    """Base for all expected, request-terminating failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token."


class AuthzError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied."


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StorageError(AppError):
    """The document is missing, unreadable or malformed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage unavailable"
