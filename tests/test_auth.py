"""Tests for authentication."""
from datetime import timedelta

import pytest

from worktracker.services.auth_service import AuthService
from worktracker.utils.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    verify_password,
)


def test_password_hashing():
    """Test password hashing and verification."""
    password = "testpassword123"
    hashed = AuthService.hash_password(password)

    assert hashed != password
    assert verify_password(password, hashed)
    assert not verify_password("wrongpassword", hashed)
    assert not verify_password(password, "not-a-bcrypt-hash")


def test_jwt_token_creation():
    """Test JWT token creation and decoding."""
    data = {"sub": "user123", "email": "test@example.com"}
    token = create_access_token(data)

    decoded = decode_token(token)
    assert decoded["sub"] == "user123"
    assert decoded["email"] == "test@example.com"
    assert decoded["type"] == "access"
    assert decode_token(create_refresh_token({"sub": "user123"}))["type"] == "refresh"


def test_expired_or_tampered_token_is_rejected():
    expired = create_access_token({"sub": "user123"}, expires_delta=timedelta(seconds=-1))
    with pytest.raises(ValueError):
        decode_token(expired)
    with pytest.raises(ValueError):
        decode_token(create_access_token({"sub": "user123"}) + "x")


@pytest.mark.asyncio
async def test_authenticate_user(db_session, employee_user):
    """Test user authentication."""
    user = await AuthService.authenticate_user(db_session, "Emma@example.com", "testpassword")
    assert user is not None
    assert user.id == employee_user.id

    assert await AuthService.authenticate_user(db_session, "emma@example.com", "wrongpassword") is None
    assert await AuthService.authenticate_user(db_session, "nobody@example.com", "testpassword") is None


@pytest.mark.asyncio
async def test_register_login_refresh_flow(client):
    response = client.post(
        "/api/v1/auth/register",
        json={
            "email": "Newbie@example.com",
            "first_name": "Nora",
            "last_name": "Newbie",
            "password": "secret123",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == "newbie@example.com"
    assert data["user"]["role"] == "employee"
    assert data["access_token"]

    response = client.post(
        "/api/v1/auth/login",
        data={"username": "newbie@example.com", "password": "secret123"},
    )
    assert response.status_code == 200
    tokens = response.json()

    response = client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {tokens['access_token']}"},
    )
    assert response.status_code == 200
    assert response.json()["first_name"] == "Nora"

    response = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 200
    assert response.json()["access_token"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client, employee_user):
    response = client.post(
        "/api/v1/auth/register",
        json={
            "email": "emma@example.com",
            "first_name": "Emma",
            "last_name": "Twin",
            "password": "secret123",
        },
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_login_with_bad_password(client, employee_user):
    response = client.post(
        "/api/v1/auth/login",
        data={"username": "emma@example.com", "password": "nope"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect email or password"


@pytest.mark.asyncio
async def test_refresh_token_cannot_authenticate_requests(client, employee_user):
    token = create_refresh_token({"sub": str(employee_user.id)})
    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_access_token_cannot_refresh(client, employee_user):
    token = create_access_token({"sub": str(employee_user.id)})
    response = client.post("/api/v1/auth/refresh", json={"refresh_token": token})
    assert response.status_code == 401
