"""Errors raised by the admin services.

Every error carries an HTTP status and a message that is safe to show to
clients. Details meant for operators go to the log, not into ``message``.
"""
from fastapi import status


class AdminServiceError(Exception):
    """Base class for all admin service errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(AdminServiceError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AdminServiceError):
    """Bad credentials or a missing/expired/unknown session token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(AdminServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AdminServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(AdminServiceError):
    """The database rejected or failed an operation."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
