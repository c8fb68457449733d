"""Users API endpoints."""
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from worktracker.database import get_db
from worktracker.dependencies import get_current_user, get_locale, require_permission
from worktracker.localization.helpers import get_translation
from worktracker.models.user import User
from worktracker.core.security import Permission
from worktracker.schemas.user import (
    MessageResponse,
    UserCreate,
    UserProfileResponse,
    UserResponse,
    UserUpdate,
    UserWithStatsResponse,
)
from worktracker.services.user_service import user_service

router = APIRouter()


@router.get("", response_model=List[UserWithStatsResponse])
async def list_users(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission(Permission.USER_LIST)),
):
    """List all users with their task statistics."""
    return await user_service.list_with_stats(db)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
    current_user: User = Depends(require_permission(Permission.USER_CREATE)),
):
    """Create a user with any role."""
    return await user_service.create_user(db, user_in=user_data, locale=locale)


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
    current_user: User = Depends(require_permission(Permission.USER_VIEW)),
):
    """Get a user profile with assigned tasks and statistics."""
    return await user_service.get_profile(db, user_id=user_id, locale=locale)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
    current_user: User = Depends(get_current_user),
):
    """Update a user profile (self or admin)."""
    return await user_service.update_user(
        db,
        user_id=user_id,
        user_in=user_data,
        caller=current_user,
        locale=locale,
    )


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
    current_user: User = Depends(get_current_user),
):
    """Delete an account (self or admin) together with its assigned tasks."""
    await user_service.delete_account(db, user_id=user_id, caller=current_user, locale=locale)
    return MessageResponse(message=get_translation("users.deleted", locale))
