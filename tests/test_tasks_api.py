"""Integration tests for tasks API endpoints."""
from uuid import uuid4

import pytest

from worktracker.models.task import TaskStatus


@pytest.mark.asyncio
async def test_create_task_returns_resolved_users(client, employee_headers):
    response = client.post(
        "/api/v1/tasks",
        json={"title": "Prepare onboarding pack", "priority": "high"},
        headers=employee_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Prepare onboarding pack"
    assert data["priority"] == "high"
    assert data["status"] == "pending"
    assert data["created_by"]["first_name"] == "Emma"
    assert data["assigned_to"]["first_name"] == "Emma"
    assert data["pending_status"] is None


@pytest.mark.asyncio
async def test_create_task_requires_title(client, employee_headers):
    response = client.post("/api/v1/tasks", json={"priority": "low"}, headers=employee_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_requires_authentication(client):
    response = client.get("/api/v1/tasks")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_employee_status_change_needs_approval(
    client, admin_user, employee_user, make_task, admin_headers, employee_headers
):
    """Employee asks for completion, admin approves, a second approval is refused."""
    task = await make_task(employee_user)

    response = client.put(
        f"/api/v1/tasks/{task.id}",
        json={"status": "completed", "description": "Draft attached"},
        headers=employee_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "pending"
    assert data["description"] == "Draft attached"
    assert data["pending_status"]["requested_status"] == "completed"
    assert data["pending_status"]["requested_by"]["first_name"] == "Emma"

    response = client.put(f"/api/v1/tasks/{task.id}/approve-status", headers=employee_headers)
    assert response.status_code == 403

    response = client.put(f"/api/v1/tasks/{task.id}/approve-status", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "completed"
    assert data["completed_at"] is not None
    assert data["pending_status"] is None

    response = client.put(f"/api/v1/tasks/{task.id}/approve-status", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "No pending status change to approve"


@pytest.mark.asyncio
async def test_admin_status_change_is_immediate(client, admin_user, employee_user, make_task, admin_headers):
    task = await make_task(admin_user, employee_user)

    response = client.put(
        f"/api/v1/tasks/{task.id}",
        json={"status": "in_progress"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "in_progress"
    assert response.json()["pending_status"] is None


@pytest.mark.asyncio
async def test_outsider_cannot_update(client, employee_user, make_task, other_headers, db_session):
    task = await make_task(employee_user, title="Water the plants")

    response = client.put(
        f"/api/v1/tasks/{task.id}",
        json={"title": "Taken over"},
        headers=other_headers,
    )

    assert response.status_code == 403
    await db_session.refresh(task)
    assert task.title == "Water the plants"


@pytest.mark.asyncio
async def test_list_tasks_with_status_filter(client, employee_user, make_task, employee_headers):
    await make_task(employee_user, status=TaskStatus.ON_HOLD)
    await make_task(employee_user, status=TaskStatus.PENDING)

    response = client.get("/api/v1/tasks", params={"status": "on_hold"}, headers=employee_headers)

    assert response.status_code == 200
    assert [item["status"] for item in response.json()] == ["on_hold"]


@pytest.mark.asyncio
async def test_get_unknown_task(client, employee_headers):
    response = client.get(f"/api/v1/tasks/{uuid4()}", headers=employee_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Task not found"


@pytest.mark.asyncio
async def test_error_messages_follow_accept_language(client, employee_headers):
    response = client.get(
        f"/api/v1/tasks/{uuid4()}",
        headers={**employee_headers, "Accept-Language": "ru-RU,ru;q=0.9"},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Задача не найдена"


@pytest.mark.asyncio
async def test_delete_task(client, admin_user, employee_user, make_task, employee_headers):
    own = await make_task(employee_user)
    assigned = await make_task(admin_user, employee_user)

    response = client.delete(f"/api/v1/tasks/{assigned.id}", headers=employee_headers)
    assert response.status_code == 403

    response = client.delete(f"/api/v1/tasks/{own.id}", headers=employee_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Task removed"}

    response = client.get(f"/api/v1/tasks/{own.id}", headers=employee_headers)
    assert response.status_code == 404
