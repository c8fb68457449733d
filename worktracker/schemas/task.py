"""Task schemas."""
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field
from datetime import datetime

from worktracker.models.task import TaskPriority, TaskStatus
from worktracker.schemas.user import UserSummary


class TaskBase(BaseModel):
    """Base task schema."""

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None


class TaskCreate(TaskBase):
    """Task creation schema."""

    pass


class TaskUpdate(BaseModel):
    """Task update schema; every field is optional and only set fields apply."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    assigned_to: Optional[UUID] = None


class PendingStatusResponse(BaseModel):
    """Status change awaiting admin approval."""

    requested_status: TaskStatus
    requested_by: Optional[UserSummary] = None
    requested_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskResponse(TaskBase):
    """Task response schema."""

    id: UUID
    completed_at: Optional[datetime] = None
    created_by: Optional[UserSummary] = None
    assigned_to: Optional[UserSummary] = None
    pending_status: Optional[PendingStatusResponse] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
