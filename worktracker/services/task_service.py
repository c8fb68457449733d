"""Task service: persistence around the status workflow."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from worktracker.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from worktracker.crud.task import task as task_crud
from worktracker.crud.user import user as user_crud
from worktracker.localization.helpers import get_translation
from worktracker.middleware.metrics import task_workflow_events_total
from worktracker.models.task import Task, TaskPriority, TaskStatus
from worktracker.models.user import User
from worktracker.schemas.task import TaskCreate, TaskUpdate
from worktracker.services.task_workflow import (
    UpdatePlan,
    completed_at_after,
    plan_approval,
    plan_update,
)
from worktracker.utils.permissions import Principal, task_capabilities

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskService:
    """High-level task operations used by the API layer."""

    @staticmethod
    async def create_task(
        db: AsyncSession,
        *,
        task_in: TaskCreate,
        creator: User,
    ) -> Task:
        """Create a task assigned to its creator."""
        now = utcnow()
        data = task_in.model_dump()
        data.update(
            {
                "created_by_id": creator.id,
                "assigned_to_id": creator.id,
                "completed_at": completed_at_after(task_in.status, now, None),
                "updated_at": now,
            }
        )
        new_task = await task_crud.create(db, obj_in=data)
        logger.info(f"Task {new_task.id} created by {creator.id} with status {task_in.status.value}")
        return await task_crud.get_fresh(db, id=new_task.id)

    @staticmethod
    async def list_tasks(
        db: AsyncSession,
        *,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        assigned_to: Optional[UUID] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Task]:
        """List tasks with optional filtering."""
        return await task_crud.list_filtered(
            db,
            status=status,
            priority=priority,
            assigned_to_id=assigned_to,
            skip=skip,
            limit=limit,
        )

    @staticmethod
    async def get_task(db: AsyncSession, *, task_id: UUID, locale: str = "en") -> Task:
        """Get a task or raise NotFoundError."""
        task_obj = await task_crud.get_fresh(db, id=task_id)
        if task_obj is None:
            raise NotFoundError(get_translation("tasks.not_found", locale))
        return task_obj

    @staticmethod
    async def _apply(db: AsyncSession, task_obj: Task, plan: UpdatePlan, locale: str) -> Task:
        """Write a plan's changes to the task in a single commit."""
        task_id = task_obj.id
        for field, value in plan.changes.items():
            setattr(task_obj, field, value)
        db.add(task_obj)
        try:
            await db.commit()
        except StaleDataError:
            await db.rollback()
            logger.warning(f"Concurrent update rejected for task {task_id}")
            raise ConflictError(get_translation("tasks.concurrent_update", locale))
        task_workflow_events_total.labels(plan.path.value).inc()
        # Related users may have changed with the foreign keys
        db.expire(task_obj)
        return await task_crud.get_fresh(db, id=task_id)

    async def update_task(
        self,
        db: AsyncSession,
        *,
        task_id: UUID,
        task_in: TaskUpdate,
        caller: User,
        locale: str = "en",
    ) -> Task:
        """Apply an update request through the status workflow."""
        task_obj = await self.get_task(db, task_id=task_id, locale=locale)
        principal = Principal.from_user(caller)

        plan = plan_update(
            principal,
            task_obj,
            task_in.model_dump(exclude_unset=True),
            utcnow(),
            locale=locale,
        )

        new_assignee = plan.changes.get("assigned_to_id")
        if new_assignee is not None and new_assignee != task_obj.assigned_to_id:
            if await user_crud.get(db, id=new_assignee) is None:
                raise NotFoundError(get_translation("users.not_found", locale))

        logger.info(f"Task {task_id} updated by {caller.id} via {plan.path.value} path")
        return await self._apply(db, task_obj, plan, locale)

    async def approve_status(
        self,
        db: AsyncSession,
        *,
        task_id: UUID,
        caller: User,
        locale: str = "en",
    ) -> Task:
        """Commit the pending status request of a task."""
        task_obj = await self.get_task(db, task_id=task_id, locale=locale)
        plan = plan_approval(Principal.from_user(caller), task_obj, utcnow(), locale=locale)

        logger.info(
            f"Task {task_id} status {task_obj.status.value} -> "
            f"{plan.changes['status'].value} approved by {caller.id}"
        )
        return await self._apply(db, task_obj, plan, locale)

    async def delete_task(
        self,
        db: AsyncSession,
        *,
        task_id: UUID,
        caller: User,
        locale: str = "en",
    ) -> None:
        """Delete a task if the caller created it or is an admin."""
        task_obj = await self.get_task(db, task_id=task_id, locale=locale)
        if not task_capabilities(Principal.from_user(caller), task_obj).can_delete:
            raise ForbiddenError(get_translation("errors.permission_denied", locale))

        await db.delete(task_obj)
        try:
            await db.commit()
        except StaleDataError:
            await db.rollback()
            logger.warning(f"Concurrent update rejected deleting task {task_id}")
            raise ConflictError(get_translation("tasks.concurrent_update", locale))
        logger.info(f"Task {task_id} deleted by {caller.id}")


task_service = TaskService()
