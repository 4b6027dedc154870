"""
Platform settings repository.
"""
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.domain.constants import DEFAULT_MAX_UPLOAD_SIZE_MB, DEFAULT_SEMESTER
from webacademy.infrastructure.database.models import PlatformSettings


class SettingsRepository:
    """Access to the singleton settings row."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_or_create(self) -> PlatformSettings:
        """Return the settings row, creating it with defaults on first read."""
        result = await self.db.execute(select(PlatformSettings).limit(1))
        row = result.scalar_one_or_none()
        if row is not None:
            return row

        row = PlatformSettings(
            id=1,
            current_semester=DEFAULT_SEMESTER.value,
            current_academic_year=datetime.now(timezone.utc).year,
            max_upload_size_mb=DEFAULT_MAX_UPLOAD_SIZE_MB,
        )
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError:
            # Created concurrently by another request
            await self.db.rollback()
            result = await self.db.execute(select(PlatformSettings).limit(1))
            return result.scalar_one()
        return row

    async def save(self, row: PlatformSettings) -> PlatformSettings:
        await self.db.commit()
        await self.db.refresh(row)
        return row
