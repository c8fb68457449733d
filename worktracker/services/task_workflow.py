"""Task status workflow.

A task is either settled (no pending request) or carries one pending status
change requested by a non-admin. Admins write ``status`` directly, which
discards any pending request when the value actually changes; everyone else
only ever replaces the pending request. Approval commits the pending value.

The functions here compute the column changes for a mutation and never touch
the session, so callers apply the returned changes and persist them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from worktracker.core.exceptions import ForbiddenError, InvalidRequestError
from worktracker.localization.helpers import get_translation
from worktracker.models.task import TaskStatus
from worktracker.utils.permissions import Principal, task_capabilities

# Request field -> column; anything else in a payload is dropped
UPDATABLE_FIELDS = {
    "title": "title",
    "description": "description",
    "priority": "priority",
    "status": "status",
    "start_date": "start_date",
    "due_date": "due_date",
    "assigned_to": "assigned_to_id",
}

# Columns that cannot hold NULL; an explicit null means "leave unchanged"
NON_NULLABLE = {"title", "priority", "status", "assigned_to_id"}

PENDING_CLEARED = {
    "pending_requested_status": None,
    "pending_requested_by_id": None,
    "pending_requested_at": None,
}


class UpdatePath(str, Enum):
    """Which branch of the workflow an update took."""

    DIRECT = "direct"
    DEFERRED = "deferred"
    FIELDS_ONLY = "fields_only"
    APPROVAL = "approval"


@dataclass
class UpdatePlan:
    """Column changes to apply to a task in one write."""

    path: UpdatePath
    changes: Dict[str, Any] = field(default_factory=dict)


def completed_at_after(
    new_status: TaskStatus,
    now: datetime,
    previous: Optional[datetime],
) -> Optional[datetime]:
    """Value of ``completed_at`` once ``new_status`` is committed.

    Entering ``completed`` stamps ``now``. Leaving it keeps the previous
    stamp; nothing clears it.
    """
    if new_status == TaskStatus.COMPLETED:
        return now
    return previous


def shape_update_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Map request fields onto task columns."""
    shaped: Dict[str, Any] = {}
    for name, value in payload.items():
        column = UPDATABLE_FIELDS.get(name)
        if column is None:
            continue
        if value is None and column in NON_NULLABLE:
            continue
        shaped[column] = value
    return shaped


def plan_update(
    principal: Principal,
    task,
    payload: Dict[str, Any],
    now: datetime,
    *,
    locale: str = "en",
) -> UpdatePlan:
    """Decide how an update request applies to a task.

    Raises:
        ForbiddenError: caller is neither creator, assignee nor admin.
    """
    capabilities = task_capabilities(principal, task)
    if not capabilities.can_update:
        raise ForbiddenError(get_translation("errors.permission_denied", locale))

    changes = shape_update_payload(payload)
    requested_status = changes.pop("status", None)
    changes["updated_at"] = now

    if requested_status is None:
        return UpdatePlan(path=UpdatePath.FIELDS_ONLY, changes=changes)

    if not capabilities.can_set_status:
        changes.update(
            {
                "pending_requested_status": requested_status,
                "pending_requested_by_id": principal.user_id,
                "pending_requested_at": now,
            }
        )
        return UpdatePlan(path=UpdatePath.DEFERRED, changes=changes)

    if requested_status != task.status:
        changes["status"] = requested_status
        changes["completed_at"] = completed_at_after(requested_status, now, task.completed_at)
        changes.update(PENDING_CLEARED)
    return UpdatePlan(path=UpdatePath.DIRECT, changes=changes)


def plan_approval(
    principal: Principal,
    task,
    now: datetime,
    *,
    locale: str = "en",
) -> UpdatePlan:
    """Commit the pending status request of a task.

    Raises:
        ForbiddenError: caller may not approve status changes.
        InvalidRequestError: the task has no pending request.
    """
    if not task_capabilities(principal, task).can_approve:
        raise ForbiddenError(get_translation("errors.permission_denied", locale))

    requested_status = task.pending_requested_status
    if requested_status is None:
        raise InvalidRequestError(get_translation("tasks.nothing_to_approve", locale))

    changes = {
        "status": requested_status,
        "completed_at": completed_at_after(requested_status, now, task.completed_at),
        "updated_at": now,
        **PENDING_CLEARED,
    }
    return UpdatePlan(path=UpdatePath.APPROVAL, changes=changes)
