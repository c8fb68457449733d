"""Security constants and permissions."""
from enum import Enum


class Permission(str, Enum):
    """Permission constants for RBAC."""

    # Task permissions
    TASK_VIEW = "task.view"
    TASK_CREATE = "task.create"
    TASK_UPDATE_ANY = "task.update_any"
    TASK_DELETE_ANY = "task.delete_any"
    TASK_SET_STATUS = "task.set_status"
    TASK_APPROVE_STATUS = "task.approve_status"

    # User management
    USER_VIEW = "user.view"
    USER_LIST = "user.list"
    USER_CREATE = "user.create"
    USER_UPDATE_ANY = "user.update_any"
    USER_DELETE_ANY = "user.delete_any"

    # Dashboards
    REPORT_VIEW = "report.view"


# Role definitions with permissions
ROLE_PERMISSIONS = {
    "admin": [
        Permission.TASK_VIEW,
        Permission.TASK_CREATE,
        Permission.TASK_UPDATE_ANY,
        Permission.TASK_DELETE_ANY,
        Permission.TASK_SET_STATUS,
        Permission.TASK_APPROVE_STATUS,
        Permission.USER_VIEW,
        Permission.USER_LIST,
        Permission.USER_CREATE,
        Permission.USER_UPDATE_ANY,
        Permission.USER_DELETE_ANY,
        Permission.REPORT_VIEW,
    ],
    "employee": [
        Permission.TASK_VIEW,
        Permission.TASK_CREATE,
        Permission.USER_VIEW,
    ],
}
