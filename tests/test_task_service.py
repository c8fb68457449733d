"""Tests for task service persistence around the status workflow."""
from uuid import uuid4

import pytest
from sqlalchemy import update

from worktracker.core.exceptions import ConflictError, ForbiddenError, InvalidRequestError, NotFoundError
from worktracker.models.task import Task, TaskPriority, TaskStatus
from worktracker.schemas.task import TaskCreate, TaskUpdate
from worktracker.services.task_service import task_service
from worktracker.services.task_workflow import plan_update
from worktracker.utils.permissions import Principal


@pytest.mark.asyncio
async def test_create_task_assigns_creator(db_session, employee_user):
    """New tasks are created by and assigned to the caller."""
    created = await task_service.create_task(
        db_session,
        task_in=TaskCreate(title="Order printer toner", priority=TaskPriority.HIGH),
        creator=employee_user,
    )

    assert created.created_by_id == employee_user.id
    assert created.assigned_to_id == employee_user.id
    assert created.assigned_to.first_name == "Emma"
    assert created.status == TaskStatus.PENDING
    assert created.pending_status is None
    assert created.completed_at is None


@pytest.mark.asyncio
async def test_create_completed_task_stamps_completed_at(db_session, employee_user):
    created = await task_service.create_task(
        db_session,
        task_in=TaskCreate(title="Already done", status=TaskStatus.COMPLETED),
        creator=employee_user,
    )

    assert created.completed_at is not None


@pytest.mark.asyncio
async def test_employee_request_then_admin_approval(db_session, admin_user, employee_user, make_task):
    """Employee asks for completion, admin approves, second approval is refused."""
    task = await make_task(employee_user)
    first_updated_at = task.updated_at

    requested = await task_service.update_task(
        db_session,
        task_id=task.id,
        task_in=TaskUpdate(status=TaskStatus.COMPLETED),
        caller=employee_user,
    )

    assert requested.status == TaskStatus.PENDING
    assert requested.pending_requested_status == TaskStatus.COMPLETED
    assert requested.pending_requested_by_id == employee_user.id
    assert requested.pending_status["requested_by"].first_name == "Emma"
    assert requested.updated_at >= first_updated_at

    approved = await task_service.approve_status(db_session, task_id=task.id, caller=admin_user)

    assert approved.status == TaskStatus.COMPLETED
    assert approved.completed_at is not None
    assert approved.pending_status is None

    with pytest.raises(InvalidRequestError):
        await task_service.approve_status(db_session, task_id=task.id, caller=admin_user)


@pytest.mark.asyncio
async def test_admin_direct_status_change(db_session, admin_user, employee_user, make_task):
    """Admin status changes are immediate and never create a pending request."""
    task = await make_task(admin_user, employee_user)

    updated = await task_service.update_task(
        db_session,
        task_id=task.id,
        task_in=TaskUpdate(status=TaskStatus.ON_HOLD),
        caller=admin_user,
    )

    assert updated.status == TaskStatus.ON_HOLD
    assert updated.pending_status is None


@pytest.mark.asyncio
async def test_admin_status_change_discards_pending_request(db_session, admin_user, employee_user, make_task):
    task = await make_task(employee_user)
    await task_service.update_task(
        db_session,
        task_id=task.id,
        task_in=TaskUpdate(status=TaskStatus.COMPLETED),
        caller=employee_user,
    )

    updated = await task_service.update_task(
        db_session,
        task_id=task.id,
        task_in=TaskUpdate(status=TaskStatus.IN_PROGRESS),
        caller=admin_user,
    )

    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.pending_status is None


@pytest.mark.asyncio
async def test_outsider_update_leaves_task_unchanged(db_session, employee_user, other_employee, make_task):
    task = await make_task(employee_user, title="Book meeting room")
    before = (task.title, task.status, task.updated_at, task.version)

    with pytest.raises(ForbiddenError):
        await task_service.update_task(
            db_session,
            task_id=task.id,
            task_in=TaskUpdate(title="Mine now", status=TaskStatus.COMPLETED),
            caller=other_employee,
        )

    await db_session.refresh(task)
    assert (task.title, task.status, task.updated_at, task.version) == before
    assert task.pending_status is None


@pytest.mark.asyncio
async def test_reassign_to_missing_user_fails(db_session, admin_user, employee_user, make_task):
    task = await make_task(admin_user, employee_user)

    with pytest.raises(NotFoundError):
        await task_service.update_task(
            db_session,
            task_id=task.id,
            task_in=TaskUpdate(assigned_to=uuid4()),
            caller=admin_user,
        )


@pytest.mark.asyncio
async def test_reassign_task(db_session, admin_user, employee_user, other_employee, make_task):
    task = await make_task(admin_user, employee_user)

    updated = await task_service.update_task(
        db_session,
        task_id=task.id,
        task_in=TaskUpdate(assigned_to=other_employee.id),
        caller=admin_user,
    )

    assert updated.assigned_to_id == other_employee.id
    assert updated.assigned_to.first_name == "Oscar"


@pytest.mark.asyncio
async def test_update_unknown_task(db_session, admin_user):
    with pytest.raises(NotFoundError):
        await task_service.update_task(
            db_session,
            task_id=uuid4(),
            task_in=TaskUpdate(title="Ghost"),
            caller=admin_user,
        )


@pytest.mark.asyncio
async def test_delete_rules(db_session, admin_user, employee_user, make_task):
    """Assignees cannot delete; creators and admins can."""
    own = await make_task(employee_user)
    assigned = await make_task(admin_user, employee_user)

    with pytest.raises(ForbiddenError):
        await task_service.delete_task(db_session, task_id=assigned.id, caller=employee_user)

    await task_service.delete_task(db_session, task_id=own.id, caller=employee_user)
    await task_service.delete_task(db_session, task_id=assigned.id, caller=admin_user)

    assert await db_session.get(Task, own.id) is None
    assert await db_session.get(Task, assigned.id) is None


@pytest.mark.asyncio
async def test_concurrent_modification_is_rejected(db_session, admin_user, employee_user, make_task):
    """A write based on a stale read fails instead of overwriting."""
    task = await make_task(employee_user)
    plan = plan_update(
        Principal.from_user(employee_user),
        task,
        {"status": TaskStatus.COMPLETED},
        task.updated_at,
    )

    # Another request commits in between
    await db_session.execute(
        update(Task)
        .where(Task.id == task.id)
        .values(version=Task.version + 1)
        .execution_options(synchronize_session=False)
    )
    await db_session.commit()

    with pytest.raises(ConflictError):
        await task_service._apply(db_session, task, plan, "en")


@pytest.mark.asyncio
async def test_list_tasks_filters(db_session, admin_user, employee_user, make_task):
    await make_task(employee_user, status=TaskStatus.IN_PROGRESS)
    await make_task(admin_user, status=TaskStatus.COMPLETED, priority=TaskPriority.HIGH)

    in_progress = await task_service.list_tasks(db_session, status=TaskStatus.IN_PROGRESS)
    high = await task_service.list_tasks(db_session, priority=TaskPriority.HIGH)
    mine = await task_service.list_tasks(db_session, assigned_to=employee_user.id)

    assert [item.status for item in in_progress] == [TaskStatus.IN_PROGRESS]
    assert [item.priority for item in high] == [TaskPriority.HIGH]
    assert [item.assigned_to_id for item in mine] == [employee_user.id]


@pytest.mark.asyncio
async def test_conflict_leaves_session_usable(db_session, employee_user, make_task):
    """After a rejected write the task reloads with the competing version."""
    task = await make_task(employee_user)
    plan = plan_update(Principal.from_user(employee_user), task, {"title": "Stale edit"}, task.updated_at)
    await db_session.execute(
        update(Task)
        .where(Task.id == task.id)
        .values(title="Winning edit", version=Task.version + 1)
        .execution_options(synchronize_session=False)
    )
    await db_session.commit()

    with pytest.raises(ConflictError):
        await task_service._apply(db_session, task, plan, "en")

    current = await task_service.get_task(db_session, task_id=task.id)
    assert current.title == "Winning edit"
    assert current.version == 2


@pytest.mark.asyncio
async def test_delete_based_on_stale_read_is_rejected(db_session, employee_user, make_task, monkeypatch):
    task = await make_task(employee_user)

    async def stale_get_task(db, *, task_id, locale="en"):
        return task

    monkeypatch.setattr(task_service, "get_task", stale_get_task)
    await db_session.execute(
        update(Task)
        .where(Task.id == task.id)
        .values(version=Task.version + 1)
        .execution_options(synchronize_session=False)
    )
    await db_session.commit()

    with pytest.raises(ConflictError):
        await task_service.delete_task(db_session, task_id=task.id, caller=employee_user)

    monkeypatch.undo()
    assert await task_service.get_task(db_session, task_id=task.id) is not None
