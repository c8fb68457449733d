"""FastAPI dependencies for authentication and authorization."""
from typing import Optional
from uuid import UUID
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from worktracker.database import get_db
from worktracker.models.user import User
from worktracker.crud.user import user as user_crud
from worktracker.utils.security import decode_token
from worktracker.utils.permissions import Principal, has_permission
from worktracker.core.security import Permission
from worktracker.core.exceptions import UnauthorizedError, ForbiddenError
from worktracker.localization.helpers import get_locale_from_request

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def get_locale(request: Request) -> str:
    """Locale for error messages, taken from Accept-Language."""
    return get_locale_from_request(request)


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from JWT token."""
    credentials_exception = UnauthorizedError("Could not validate credentials")

    try:
        payload = decode_token(token)
    except ValueError:
        raise credentials_exception

    user_id: Optional[str] = payload.get("sub")
    token_type: Optional[str] = payload.get("type")
    if user_id is None or token_type != "access":
        raise credentials_exception

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        raise credentials_exception

    user = await user_crud.get(db, id=user_uuid)

    if user is None:
        raise credentials_exception

    return user


def require_permission(permission: Permission):
    """Dependency factory for requiring a specific permission."""

    async def permission_checker(
        current_user: User = Depends(get_current_user),
    ) -> User:
        if not has_permission(Principal.from_user(current_user), permission):
            raise ForbiddenError(f"Permission required: {permission.value}")
        return current_user

    return permission_checker
