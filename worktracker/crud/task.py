"""Task CRUD operations."""
from typing import List, Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from worktracker.crud.base import CRUDBase
from worktracker.models.task import Task, TaskPriority, TaskStatus
from worktracker.schemas.task import TaskCreate, TaskUpdate


class CRUDTask(CRUDBase[Task, TaskCreate, TaskUpdate]):
    """CRUD operations for Task."""

    async def get_fresh(self, db: AsyncSession, *, id: UUID) -> Optional[Task]:
        """Get a task, overwriting any stale copy held by the session."""
        result = await db.execute(
            select(Task)
            .where(Task.id == id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_filtered(
        self,
        db: AsyncSession,
        *,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        assigned_to_id: Optional[UUID] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Task]:
        """List tasks, most recently updated first."""
        query = select(Task)
        if status is not None:
            query = query.where(Task.status == status)
        if priority is not None:
            query = query.where(Task.priority == priority)
        if assigned_to_id is not None:
            query = query.where(Task.assigned_to_id == assigned_to_id)
        result = await db.execute(
            query.order_by(Task.updated_at.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def get_assigned(self, db: AsyncSession, *, user_id: UUID) -> List[Task]:
        """All tasks assigned to a user, earliest due date first."""
        result = await db.execute(
            select(Task)
            .where(Task.assigned_to_id == user_id)
            .order_by(Task.due_date.asc())
        )
        return list(result.scalars().all())


task = CRUDTask(Task)
