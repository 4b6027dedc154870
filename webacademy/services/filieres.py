"""
Filieres (academic programs), unique by institute and name.
"""
from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import NotFoundError, ValidationError
from webacademy.core.pagination import PageParams, search_clause
from webacademy.domain.schemas.taxonomy import FiliereCreate, FiliereUpdate
from webacademy.infrastructure.database.models import Filiere
from webacademy.repositories.base import BaseRepository
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.base import conflict_on_integrity

logger = structlog.get_logger(__name__)

FILIERE_NOT_FOUND = "Filière non trouvée"
FILIERE_EXISTS = "Une filière avec ce nom existe déjà pour cet institut."


class FiliereService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BaseRepository(Filiere, db)

    def _ordered(self, stmt):
        return stmt.order_by(Filiere.institute, Filiere.order, Filiere.name)

    async def list_public(self, institute: Optional[str] = None) -> List[Filiere]:
        stmt = self.repo.select()
        if institute:
            stmt = stmt.where(Filiere.institute == institute)
        items, _ = await self.repo.list(self._ordered(stmt))
        return items

    async def list(
        self,
        ctx: RequestContext,
        institute: Optional[str] = None,
        search: Optional[str] = None,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[Filiere], int]:
        stmt = self.repo.apply(
            self.repo.select(),
            [
                ctx.strict_scope(Filiere.institute),
                ctx.institute_filter(Filiere.institute, institute),
                search_clause(search, Filiere.name),
            ],
        )
        return await self.repo.list(self._ordered(stmt), params)

    async def get(self, ctx: RequestContext, filiere_id: UUID) -> Filiere:
        filiere = await self.repo.get(filiere_id)
        if not filiere:
            raise NotFoundError(FILIERE_NOT_FOUND)
        ctx.ensure_in_tenant(filiere.institute, FILIERE_NOT_FOUND)
        return filiere

    async def create(self, ctx: RequestContext, payload: FiliereCreate) -> Filiere:
        institute = ctx.institute_for_write(payload.institute)
        if not institute:
            raise ValidationError("Institut invalide (A, B ou C).", field="institute")

        async with conflict_on_integrity(self.db, FILIERE_EXISTS, entity="filiere"):
            filiere = await self.repo.create(
                {"institute": institute, "name": payload.name, "order": payload.order}
            )
        logger.info("filiere_created", filiere_id=str(filiere.id), institute=institute)
        return filiere

    async def update(self, ctx: RequestContext, filiere_id: UUID, payload: FiliereUpdate) -> Filiere:
        filiere = await self.get(ctx, filiere_id)
        data = payload.model_dump(exclude_unset=True, exclude_none=True)
        async with conflict_on_integrity(self.db, FILIERE_EXISTS, entity="filiere"):
            filiere = await self.repo.update(filiere, data)
        logger.info("filiere_updated", filiere_id=str(filiere.id), fields=sorted(data))
        return filiere

    async def delete(self, ctx: RequestContext, filiere_id: UUID) -> None:
        filiere = await self.get(ctx, filiere_id)
        await self.repo.delete(filiere)
        logger.info("filiere_deleted", filiere_id=str(filiere_id))
