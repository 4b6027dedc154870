"""
Platform settings administration.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context
from webacademy.domain.schemas.settings import SettingsRead, SettingsUpdate
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.platform_settings import PlatformSettingsService

router = APIRouter()


@router.get("", response_model=SettingsRead)
async def get_settings(
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return SettingsRead.model_validate(await PlatformSettingsService(db).get())


@router.put("", response_model=SettingsRead)
async def update_settings(
    payload: SettingsUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    """Super-admin only."""
    return SettingsRead.model_validate(await PlatformSettingsService(db).update(ctx, payload))
