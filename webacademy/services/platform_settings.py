"""
Platform settings: current term and upload size policy.
"""
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.domain.schemas.settings import SettingsUpdate
from webacademy.infrastructure.database.models import PlatformSettings
from webacademy.repositories.settings import SettingsRepository
from webacademy.services.auth.authorization.policies import ensure_can_change_settings
from webacademy.services.auth.authorization.tenant import RequestContext

logger = structlog.get_logger(__name__)


class PlatformSettingsService:
    def __init__(self, db: AsyncSession):
        self.repo = SettingsRepository(db)

    async def get(self) -> PlatformSettings:
        return await self.repo.get_or_create()

    async def max_upload_size_mb(self) -> int:
        return (await self.get()).max_upload_size_mb

    async def update(self, ctx: RequestContext, payload: SettingsUpdate) -> PlatformSettings:
        """Super-admin only; omitted fields keep their value."""
        ensure_can_change_settings(ctx)
        row = await self.repo.get_or_create()
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(row, field, value)
        row = await self.repo.save(row)
        logger.info("settings_updated", fields=sorted(changes), by=str(ctx.principal.user_id))
        return row
