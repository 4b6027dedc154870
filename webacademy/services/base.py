"""
Helpers shared by the resource services.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import ConflictError

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def conflict_on_integrity(
    db: AsyncSession,
    message: str,
    entity: Optional[str] = None,
) -> AsyncIterator[None]:
    """Translate a uniqueness violation raised inside the block into ConflictError."""
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        logger.info("integrity_conflict", entity=entity, error=str(e.orig))
        raise ConflictError(message) from e
