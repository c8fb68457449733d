"""Tasks API endpoints."""
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from worktracker.database import get_db
from worktracker.dependencies import get_current_user, get_locale, require_permission
from worktracker.localization.helpers import get_translation
from worktracker.models.task import TaskPriority, TaskStatus
from worktracker.models.user import User
from worktracker.core.security import Permission
from worktracker.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from worktracker.schemas.user import MessageResponse
from worktracker.services.task_service import task_service

router = APIRouter()


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    status_filter: Optional[TaskStatus] = Query(default=None, alias="status"),
    priority: Optional[TaskPriority] = None,
    assigned_to: Optional[UUID] = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission(Permission.TASK_VIEW)),
):
    """List tasks, most recently updated first."""
    return await task_service.list_tasks(
        db,
        status=status_filter,
        priority=priority,
        assigned_to=assigned_to,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_in: TaskCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission(Permission.TASK_CREATE)),
):
    """Create a task assigned to the caller."""
    return await task_service.create_task(db, task_in=task_in, creator=current_user)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: UUID,
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
    current_user: User = Depends(require_permission(Permission.TASK_VIEW)),
):
    """Get a task by ID."""
    return await task_service.get_task(db, task_id=task_id, locale=locale)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    task_in: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
    current_user: User = Depends(get_current_user),
):
    """Update a task.

    Admins change ``status`` directly. For everyone else a ``status`` in the
    payload is stored as a pending request awaiting approval, while the
    other fields apply immediately.
    """
    return await task_service.update_task(
        db,
        task_id=task_id,
        task_in=task_in,
        caller=current_user,
        locale=locale,
    )


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: UUID,
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
    current_user: User = Depends(get_current_user),
):
    """Delete a task (creator or admin)."""
    await task_service.delete_task(db, task_id=task_id, caller=current_user, locale=locale)
    return MessageResponse(message=get_translation("tasks.removed", locale))


@router.put("/{task_id}/approve-status", response_model=TaskResponse)
async def approve_status(
    task_id: UUID,
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
    current_user: User = Depends(require_permission(Permission.TASK_APPROVE_STATUS)),
):
    """Approve the pending status change of a task."""
    return await task_service.approve_status(
        db,
        task_id=task_id,
        caller=current_user,
        locale=locale,
    )
