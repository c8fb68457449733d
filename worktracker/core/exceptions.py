"""HTTP errors raised by services and dependencies."""
from typing import Dict, Optional
from fastapi import HTTPException, status
from worktracker.localization.helpers import get_translation


class AppError(HTTPException):
    """HTTPException whose default detail comes from the message catalogue."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message_key: str = "errors.internal"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None, locale: str = "en"):
        super().__init__(
            status_code=type(self).status_code,
            detail=detail if detail is not None else get_translation(self.message_key, locale),
            headers=type(self).headers,
        )


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message_key = "errors.resource_not_found"


class UnauthorizedError(AppError):
    """Missing, expired or otherwise unusable credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message_key = "errors.not_authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(AppError):
    """Authenticated, but the caller's role or relation to the record does not allow it."""

    status_code = status.HTTP_403_FORBIDDEN
    message_key = "errors.permission_denied"


class InvalidRequestError(AppError):
    """Request is well-formed but cannot be applied in the current state."""

    status_code = status.HTTP_400_BAD_REQUEST
    message_key = "errors.invalid_request"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    message_key = "errors.resource_conflict"
