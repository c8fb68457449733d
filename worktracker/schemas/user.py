"""User schemas."""
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime

from worktracker.models.task import TaskPriority, TaskStatus
from worktracker.models.user import UserRole
from worktracker.schemas.stats import TaskStats


class UserSummary(BaseModel):
    """Display-name projection of a user embedded in other resources."""

    id: UUID
    first_name: str
    last_name: str

    class Config:
        from_attributes = True


class UserBase(BaseModel):
    """Base user schema."""

    email: EmailStr
    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)


class UserRegister(UserBase):
    """Self-service registration schema."""

    password: str = Field(min_length=6)


class UserCreate(UserRegister):
    """Admin user creation schema."""

    role: UserRole = UserRole.EMPLOYEE


class UserUpdate(BaseModel):
    """User profile update schema."""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=255)


class UserResponse(UserBase):
    """User response schema."""

    id: UUID
    role: UserRole
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserWithStatsResponse(UserResponse):
    """User with aggregated statistics over their assigned tasks."""

    task_stats: TaskStats


class UserTaskItem(BaseModel):
    """Compact task row shown on a profile page."""

    id: UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserProfileResponse(UserWithStatsResponse):
    """User profile with assigned tasks ordered by due date."""

    tasks: List[UserTaskItem] = []


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
