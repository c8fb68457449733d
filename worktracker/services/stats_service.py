"""Task statistics for profiles and dashboards."""
from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from worktracker.crud.task import task as task_crud
from worktracker.crud.user import user as user_crud
from worktracker.models.task import Task, TaskPriority, TaskStatus
from worktracker.models.user import User
from worktracker.schemas.stats import DashboardSummary, EmployeePerformance, RecentTask, TaskStats

SECONDS_PER_DAY = 24 * 60 * 60
RECENT_TASKS_LIMIT = 3


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def completion_rate(completed: int, total: int) -> float:
    """Completed share in percent, 0 for an empty set."""
    if total == 0:
        return 0.0
    return round(completed / total * 100, 1)


def is_on_time(task: Task) -> bool:
    """Completed no later than its due date; tasks without one never count."""
    if task.status != TaskStatus.COMPLETED or task.completed_at is None or task.due_date is None:
        return False
    return _as_utc(task.completed_at) <= _as_utc(task.due_date)


def is_overdue(task: Task, now: datetime) -> bool:
    """Due date has passed and the task is not completed."""
    if task.status == TaskStatus.COMPLETED or task.due_date is None:
        return False
    return _as_utc(task.due_date) < now


def completion_days(task: Task) -> Optional[float]:
    """Days from start to completion, None when either date is missing."""
    if task.start_date is None or task.completed_at is None:
        return None
    delta = _as_utc(task.completed_at) - _as_utc(task.start_date)
    return delta.total_seconds() / SECONDS_PER_DAY


def compute_task_stats(tasks: Iterable[Task]) -> TaskStats:
    """Count tasks by status.

    ``avg_completion_time`` averages over completed tasks that have both a
    start date and a completion stamp; it is 0 when there are none.
    """
    counts: Dict[TaskStatus, int] = defaultdict(int)
    on_time = 0
    total = 0
    durations: List[float] = []
    for item in tasks:
        total += 1
        counts[item.status] += 1
        if is_on_time(item):
            on_time += 1
        if item.status == TaskStatus.COMPLETED:
            days = completion_days(item)
            if days is not None:
                durations.append(days)

    completed = counts[TaskStatus.COMPLETED]
    return TaskStats(
        total=total,
        completed=completed,
        ongoing=total - completed,
        in_progress=counts[TaskStatus.IN_PROGRESS],
        pending=counts[TaskStatus.PENDING],
        on_hold=counts[TaskStatus.ON_HOLD],
        on_time=on_time,
        completion_rate=completion_rate(completed, total),
        avg_completion_time=round(sum(durations) / len(durations), 1) if durations else 0.0,
    )


def recent_tasks(tasks: Iterable[Task], limit: int = RECENT_TASKS_LIMIT) -> List[Task]:
    """Most recently updated tasks first."""
    oldest = datetime.min.replace(tzinfo=timezone.utc)
    ordered = sorted(tasks, key=lambda item: _as_utc(item.updated_at) or oldest, reverse=True)
    return ordered[:limit]


def build_summary(
    tasks: List[Task],
    users: List[User],
    now: Optional[datetime] = None,
) -> DashboardSummary:
    """Organisation-wide counters plus a per-employee ranking."""
    now = now or datetime.now(timezone.utc)
    overall = compute_task_stats(tasks)

    by_assignee: Dict[UUID, List[Task]] = defaultdict(list)
    for item in tasks:
        by_assignee[item.assigned_to_id].append(item)

    employees = [
        EmployeePerformance(
            user_id=user_obj.id,
            first_name=user_obj.first_name,
            last_name=user_obj.last_name,
            stats=compute_task_stats(by_assignee.get(user_obj.id, [])),
            recent_tasks=[
                RecentTask.model_validate(item) for item in recent_tasks(by_assignee.get(user_obj.id, []))
            ],
        )
        for user_obj in users
    ]
    employees.sort(key=lambda row: row.stats.completion_rate, reverse=True)

    return DashboardSummary(
        total=overall.total,
        completed=overall.completed,
        in_progress=overall.in_progress,
        pending=overall.pending,
        on_hold=overall.on_hold,
        high_priority=sum(1 for item in tasks if item.priority == TaskPriority.HIGH),
        overdue=sum(1 for item in tasks if is_overdue(item, now)),
        completion_rate=overall.completion_rate,
        employees=employees,
    )


class StatsService:
    """Database-backed statistics queries."""

    @staticmethod
    async def user_stats(db: AsyncSession, *, user_id: UUID) -> TaskStats:
        """Statistics over tasks assigned to one user."""
        return compute_task_stats(await task_crud.get_assigned(db, user_id=user_id))

    @staticmethod
    async def summary(db: AsyncSession) -> DashboardSummary:
        """Statistics over every task and user."""
        tasks = await task_crud.get_all(db)
        users = await user_crud.list_newest_first(db)
        return build_summary(tasks, users)


stats_service = StatsService()
