"""
Admin dashboard.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context
from webacademy.domain.schemas.settings import DashboardStats
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.dashboard import DashboardService

router = APIRouter()


@router.get("", response_model=DashboardStats)
async def dashboard_stats(
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    """Counters for the caller's institute, or the whole platform for the super-admin."""
    return await DashboardService(db).stats(ctx)
