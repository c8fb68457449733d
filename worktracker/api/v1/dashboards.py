"""Dashboard API endpoints for admin and user dashboards."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from worktracker.core.security import Permission
from worktracker.database import get_db
from worktracker.dependencies import get_current_user, require_permission
from worktracker.models.user import User
from worktracker.schemas.stats import DashboardSummary, TaskStats
from worktracker.services.stats_service import stats_service

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
async def summary_dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission(Permission.REPORT_VIEW)),
):
    """Organisation-wide task KPIs and per-employee performance."""
    return await stats_service.summary(db)


@router.get("/me", response_model=TaskStats)
async def my_dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Statistics over the caller's assigned tasks."""
    return await stats_service.user_stats(db, user_id=current_user.id)
