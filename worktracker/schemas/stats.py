"""Task statistics schemas."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel

from worktracker.models.task import TaskStatus


class TaskStats(BaseModel):
    """Counters over a set of tasks."""

    total: int = 0
    completed: int = 0
    ongoing: int = 0
    in_progress: int = 0
    pending: int = 0
    on_hold: int = 0
    on_time: int = 0
    completion_rate: float = 0.0
    # Mean days from start_date to completed_at over completed tasks
    avg_completion_time: float = 0.0


class RecentTask(BaseModel):
    """Recently updated task shown next to an employee's statistics."""

    id: UUID
    title: str
    status: TaskStatus
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EmployeePerformance(BaseModel):
    """Per-employee statistics row."""

    user_id: UUID
    first_name: str
    last_name: str
    stats: TaskStats
    recent_tasks: List[RecentTask] = []


class DashboardSummary(BaseModel):
    """Organisation-wide task summary."""

    total: int
    completed: int
    in_progress: int
    pending: int
    on_hold: int
    high_priority: int
    overdue: int
    completion_rate: float
    employees: List[EmployeePerformance] = []
