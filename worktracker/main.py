"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from worktracker.api.v1 import auth, dashboards, tasks, users
from worktracker.config import settings
from worktracker.core.logging import configure_logging
from worktracker.database import close_db, get_db, init_db
from worktracker.localization.helpers import get_locale_from_request, get_translation
from worktracker.middleware.metrics import setup_metrics

logger = logging.getLogger(__name__)

ROUTERS = (
    (auth.router, "auth"),
    (tasks.router, "tasks"),
    (users.router, "users"),
    (dashboards.router, "dashboards"),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_db()
    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} started")
    yield
    await close_db()
    logger.info(f"{settings.APP_NAME} stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_metrics(app)

for router, name in ROUTERS:
    app.include_router(router, prefix=f"{settings.API_V1_PREFIX}/{name}", tags=[name])


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures become a generic 500; details go to the log only."""
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    detail = get_translation("errors.internal", get_locale_from_request(request))
    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.APP_NAME} API", "docs": "/docs"}


@app.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Liveness plus a database round trip."""
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.warning(f"Health check database probe failed: {e}")
        database = "error"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "checks": {"database": database},
    }
