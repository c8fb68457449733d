"""Model modules."""
from worktracker.models.user import User, UserRole
from worktracker.models.task import Task, TaskPriority, TaskStatus

__all__ = [
    "User",
    "UserRole",
    "Task",
    "TaskPriority",
    "TaskStatus",
]
