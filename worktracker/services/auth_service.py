"""Authentication service: credentials check and token issuing."""
import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from worktracker.config import settings
from worktracker.core.exceptions import UnauthorizedError
from worktracker.crud.user import user as user_crud
from worktracker.localization.helpers import get_translation
from worktracker.models.user import User
from worktracker.utils.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    verify_password,
)

logger = logging.getLogger(__name__)


def _access_token(user: User) -> str:
    return create_access_token(
        data={"sub": str(user.id), "email": user.email},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


class AuthService:
    """Authentication service."""

    @staticmethod
    async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
        """Return the user for valid credentials, otherwise None."""
        user = await user_crud.get_by_email(db, email=email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info(f"Failed login for {email.lower()}")
            return None
        return user

    @staticmethod
    async def create_tokens(user: User) -> dict:
        """Access and refresh tokens for a freshly authenticated user."""
        return {
            "access_token": _access_token(user),
            "refresh_token": create_refresh_token(data={"sub": str(user.id)}),
            "token_type": "bearer",
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        }

    @staticmethod
    async def refresh_access_token(db: AsyncSession, refresh_token: str, locale: str = "en") -> dict:
        """Exchange a refresh token for a new access token."""
        rejected = UnauthorizedError(get_translation("errors.not_authenticated", locale))
        try:
            payload = decode_token(refresh_token)
            user_id = UUID(payload.get("sub") or "")
        except ValueError:
            raise rejected

        if payload.get("type") != "refresh":
            raise rejected

        user = await user_crud.get(db, id=user_id)
        if user is None:
            raise rejected

        return {
            "access_token": _access_token(user),
            "token_type": "bearer",
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        }

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password."""
        return get_password_hash(password)
