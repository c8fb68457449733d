"""Pytest configuration and fixtures."""
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

TEST_DB_PATH = Path("test_app.db")
if TEST_DB_PATH.exists():
    TEST_DB_PATH.unlink()

TEST_DATABASE_URL = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("ENCRYPTION_SECRET", "YWFhYWFhYWFhYWFhYWFhYWFhYWFhYWFhYWFhYWFhYWE=")
os.environ.setdefault("DEFAULT_ADMIN_EMAIL", "")
os.environ.setdefault("LOG_FORMAT", "text")

from worktracker.main import app  # noqa: E402
from worktracker.database import Base, get_db  # noqa: E402
from worktracker.models.task import Task, TaskPriority, TaskStatus  # noqa: E402
from worktracker.models.user import User, UserRole  # noqa: E402
from worktracker.services.auth_service import AuthService  # noqa: E402
from worktracker.utils.security import create_access_token  # noqa: E402


# Create test engine
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest_asyncio.fixture(scope="function")
async def db_session():
    """Create a test database session."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
def client(db_session: AsyncSession):
    """Create a test client overriding database dependency."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


async def _create_user(db_session: AsyncSession, *, email: str, first_name: str, role: UserRole) -> User:
    user = User(
        id=uuid.uuid4(),
        email=email,
        password_hash=AuthService.hash_password("testpassword"),
        first_name=first_name,
        last_name="Tester",
        role=role,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession):
    """Create an admin."""
    return await _create_user(db_session, email="admin@example.com", first_name="Ada", role=UserRole.ADMIN)


@pytest_asyncio.fixture
async def employee_user(db_session: AsyncSession):
    """Create an employee."""
    return await _create_user(db_session, email="emma@example.com", first_name="Emma", role=UserRole.EMPLOYEE)


@pytest_asyncio.fixture
async def other_employee(db_session: AsyncSession):
    """Create an employee unrelated to the test tasks."""
    return await _create_user(db_session, email="oscar@example.com", first_name="Oscar", role=UserRole.EMPLOYEE)


@pytest.fixture
def make_task(db_session: AsyncSession):
    """Factory persisting a task created by and assigned to the given users."""

    async def _make_task(creator: User, assignee: User = None, **fields) -> Task:
        task = Task(
            id=uuid.uuid4(),
            title=fields.pop("title", "Prepare quarterly report"),
            priority=fields.pop("priority", TaskPriority.MEDIUM),
            status=fields.pop("status", TaskStatus.PENDING),
            created_by_id=creator.id,
            assigned_to_id=(assignee or creator).id,
            updated_at=datetime.now(timezone.utc),
            **fields,
        )
        db_session.add(task)
        await db_session.commit()
        await db_session.refresh(task)
        return task

    return _make_task


def headers_for(user: User) -> dict:
    """Bearer headers for a user."""
    token = create_access_token({"sub": str(user.id), "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    """Get authentication headers for the admin."""
    return headers_for(admin_user)


@pytest.fixture
def employee_headers(employee_user):
    """Get authentication headers for the employee."""
    return headers_for(employee_user)


@pytest.fixture
def other_headers(other_employee):
    """Get authentication headers for the unrelated employee."""
    return headers_for(other_employee)
