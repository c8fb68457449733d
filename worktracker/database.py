"""Async engine, session factory and schema bootstrap."""
import logging
from typing import Any, AsyncIterator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from worktracker.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.DATABASE_ECHO, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # One shared connection so every session sees the same SQLite database
        options.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
    else:
        options.update(pool_size=10, max_overflow=20)
    return options


engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    """Request-scoped session; uncommitted work is rolled back on errors."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create missing tables and make sure the default admin exists."""
    import worktracker.models  # noqa: F401  (registers mappers on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not settings.DEFAULT_ADMIN_EMAIL:
        logger.info("Default admin bootstrap disabled")
        return

    from worktracker.services.bootstrap_service import ensure_default_admin

    async with AsyncSessionLocal() as session:
        await ensure_default_admin(
            session,
            email=settings.DEFAULT_ADMIN_EMAIL,
            password=settings.DEFAULT_ADMIN_PASSWORD,
        )


async def close_db() -> None:
    """Dispose of pooled connections."""
    await engine.dispose()
