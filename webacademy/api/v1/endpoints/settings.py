"""
Public view of the current academic term.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.domain.schemas.settings import PublicSettings
from webacademy.infrastructure.database.base import get_db
from webacademy.services.platform_settings import PlatformSettingsService

router = APIRouter()


@router.get("", response_model=PublicSettings)
async def current_term(db: AsyncSession = Depends(get_db)):
    return PublicSettings.model_validate(await PlatformSettingsService(db).get())
