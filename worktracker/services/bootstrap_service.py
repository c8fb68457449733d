"""Bootstrap utilities for ensuring the default admin exists."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from worktracker.models.user import User, UserRole
from worktracker.services.auth_service import AuthService

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_FIRST_NAME = "System"
DEFAULT_ADMIN_LAST_NAME = "Administrator"


async def ensure_default_admin(
    db: AsyncSession,
    *,
    email: str,
    password: str,
    first_name: str = DEFAULT_ADMIN_FIRST_NAME,
    last_name: str = DEFAULT_ADMIN_LAST_NAME,
) -> User:
    """Ensure that the administrator account exists and return it."""
    email = email.lower()
    result = await db.execute(select(User).where(User.email == email))
    admin_user = result.scalar_one_or_none()
    if admin_user:
        # Ensure admin role assignment is present.
        if admin_user.role != UserRole.ADMIN:
            admin_user.role = UserRole.ADMIN
            await db.commit()
            logger.info(f"Promoted {email} to admin")
        return admin_user

    admin_user = User(
        email=email,
        password_hash=AuthService.hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=UserRole.ADMIN,
    )
    db.add(admin_user)
    await db.commit()
    await db.refresh(admin_user)
    logger.info(f"Created default admin {email}")
    return admin_user
