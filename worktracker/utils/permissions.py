"""RBAC permission helpers and task-level authorization rules.

Everything here is a pure function of the caller and the target record, so
the rules can be checked without a database or a request.
"""
from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from worktracker.core.security import Permission, ROLE_PERMISSIONS


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as seen by authorization checks."""

    user_id: UUID
    role: str

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(user_id=user.id, role=_role_name(user.role))


@dataclass(frozen=True)
class TaskCapabilities:
    """What a caller may do with one task."""

    can_update: bool
    can_delete: bool
    can_approve: bool
    # False means a status in an update payload becomes a pending request
    can_set_status: bool


def _role_name(role) -> str:
    return getattr(role, "value", role)


def get_user_permissions(principal) -> List[str]:
    """Get all permissions granted by the caller's role."""
    return [perm.value for perm in ROLE_PERMISSIONS.get(_role_name(principal.role), [])]


def has_permission(principal, permission: Permission) -> bool:
    """Check if the caller's role grants a specific permission."""
    return permission.value in get_user_permissions(principal)


def is_self(principal, user_id: Optional[UUID]) -> bool:
    """Check whether the caller is the given user."""
    return user_id is not None and principal.user_id == user_id


def task_capabilities(principal: Principal, task) -> TaskCapabilities:
    """Resolve the caller's capabilities on a task.

    Creator and assignee may update; only the creator may delete. Role
    permissions extend both to every task.
    """
    is_creator = is_self(principal, task.created_by_id)
    is_assignee = is_self(principal, task.assigned_to_id)

    return TaskCapabilities(
        can_update=has_permission(principal, Permission.TASK_UPDATE_ANY) or is_creator or is_assignee,
        can_delete=has_permission(principal, Permission.TASK_DELETE_ANY) or is_creator,
        can_approve=has_permission(principal, Permission.TASK_APPROVE_STATUS),
        can_set_status=has_permission(principal, Permission.TASK_SET_STATUS),
    )


def can_manage_user(principal: Principal, user_id: UUID, permission: Permission) -> bool:
    """Users manage their own account; the permission covers everyone else's."""
    return is_self(principal, user_id) or has_permission(principal, permission)
