"""User account service: registration, profiles and account deletion."""
from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from worktracker.core.exceptions import ConflictError, ForbiddenError, InvalidRequestError, NotFoundError
from worktracker.core.security import Permission
from worktracker.crud.task import task as task_crud
from worktracker.crud.user import user as user_crud
from worktracker.localization.helpers import get_translation
from worktracker.models.task import TaskStatus
from worktracker.models.user import User
from worktracker.schemas.user import (
    UserCreate,
    UserProfileResponse,
    UserResponse,
    UserTaskItem,
    UserUpdate,
    UserWithStatsResponse,
)
from worktracker.services.stats_service import compute_task_stats
from worktracker.utils.permissions import Principal, can_manage_user, has_permission

logger = logging.getLogger(__name__)


class UserService:
    """High-level user account operations."""

    @staticmethod
    async def create_user(db: AsyncSession, *, user_in: UserCreate, locale: str = "en") -> User:
        """Create an account, rejecting duplicate emails."""
        if await user_crud.get_by_email(db, email=user_in.email):
            raise ConflictError(get_translation("users.already_exists", locale))
        new_user = await user_crud.create(db, obj_in=user_in)
        logger.info(f"User {new_user.id} created with role {new_user.role.value}")
        return new_user

    @staticmethod
    async def get_user(db: AsyncSession, *, user_id: UUID, locale: str = "en") -> User:
        """Get a user or raise NotFoundError."""
        user_obj = await user_crud.get(db, id=user_id)
        if user_obj is None:
            raise NotFoundError(get_translation("users.not_found", locale))
        return user_obj

    async def get_profile(
        self,
        db: AsyncSession,
        *,
        user_id: UUID,
        locale: str = "en",
    ) -> UserProfileResponse:
        """Profile with assigned tasks and their statistics."""
        user_obj = await self.get_user(db, user_id=user_id, locale=locale)
        tasks = await task_crud.get_assigned(db, user_id=user_obj.id)
        return UserProfileResponse(
            **UserResponse.model_validate(user_obj).model_dump(),
            task_stats=compute_task_stats(tasks),
            tasks=[UserTaskItem.model_validate(item) for item in tasks],
        )

    @staticmethod
    async def list_with_stats(db: AsyncSession) -> List[UserWithStatsResponse]:
        """Every user with statistics over their assigned tasks."""
        users = await user_crud.list_newest_first(db)
        rows = []
        for user_obj in users:
            tasks = await task_crud.get_assigned(db, user_id=user_obj.id)
            rows.append(
                UserWithStatsResponse(
                    **UserResponse.model_validate(user_obj).model_dump(),
                    task_stats=compute_task_stats(tasks),
                )
            )
        return rows

    async def update_user(
        self,
        db: AsyncSession,
        *,
        user_id: UUID,
        user_in: UserUpdate,
        caller: User,
        locale: str = "en",
    ) -> User:
        """Update a profile; callers edit themselves unless they are admins."""
        if not can_manage_user(Principal.from_user(caller), user_id, Permission.USER_UPDATE_ANY):
            raise ForbiddenError(get_translation("errors.permission_denied", locale))

        user_obj = await self.get_user(db, user_id=user_id, locale=locale)

        if user_in.email and user_in.email.lower() != user_obj.email:
            if await user_crud.get_by_email(db, email=user_in.email):
                raise ConflictError(get_translation("users.already_exists", locale))

        return await user_crud.update(db, db_obj=user_obj, obj_in=user_in)

    async def delete_account(
        self,
        db: AsyncSession,
        *,
        user_id: UUID,
        caller: User,
        locale: str = "en",
    ) -> None:
        """Delete an account and clean up the tasks assigned to it.

        Admins remove every assigned task. Anyone else is refused while an
        assigned task is not completed, and only completed tasks are purged.
        """
        principal = Principal.from_user(caller)
        if not can_manage_user(principal, user_id, Permission.USER_DELETE_ANY):
            raise ForbiddenError(get_translation("errors.permission_denied", locale))

        user_obj = await self.get_user(db, user_id=user_id, locale=locale)
        tasks = await task_crud.get_assigned(db, user_id=user_obj.id)

        if has_permission(principal, Permission.USER_DELETE_ANY):
            removed = await task_crud.remove_many(
                db, filters={"assigned_to_id": user_obj.id}
            )
        else:
            if any(item.status != TaskStatus.COMPLETED for item in tasks):
                raise InvalidRequestError(get_translation("users.active_tasks", locale))
            removed = await task_crud.remove_many(
                db,
                filters={"assigned_to_id": user_obj.id, "status": TaskStatus.COMPLETED},
            )

        await db.delete(user_obj)
        await db.commit()
        logger.info(f"User {user_id} deleted by {caller.id}, {removed} assigned tasks removed")


user_service = UserService()
