"""
Course categories. Global categories (no institute) are readable by every
institute but only managed by the super-admin.
"""
from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import ConflictError, NotFoundError
from webacademy.core.pagination import PageParams, search_clause
from webacademy.domain.schemas.taxonomy import CategoryCreate, CategoryUpdate
from webacademy.infrastructure.database.models import Category
from webacademy.repositories.base import BaseRepository
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.base import conflict_on_integrity

logger = structlog.get_logger(__name__)

CATEGORY_NOT_FOUND = "Catégorie non trouvée"
CATEGORY_EXISTS = "Une catégorie avec ce nom existe déjà."


class CategoryService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BaseRepository(Category, db)

    async def list(
        self,
        ctx: RequestContext,
        search: Optional[str] = None,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[Category], int]:
        stmt = self.repo.apply(
            self.repo.select(),
            [ctx.shared_scope(Category.institute), search_clause(search, Category.name, Category.description)],
        ).order_by(Category.order, Category.name)
        return await self.repo.list(stmt, params)

    async def get(self, ctx: RequestContext, category_id: UUID) -> Category:
        category = await self.repo.get(category_id)
        if not category:
            raise NotFoundError(CATEGORY_NOT_FOUND)
        ctx.ensure_in_tenant(category.institute, CATEGORY_NOT_FOUND, shared=True)
        return category

    async def _get_writable(self, ctx: RequestContext, category_id: UUID) -> Category:
        category = await self.repo.get(category_id)
        if not category:
            raise NotFoundError(CATEGORY_NOT_FOUND)
        ctx.ensure_in_tenant(category.institute, CATEGORY_NOT_FOUND)
        return category

    async def _ensure_unique(self, institute: Optional[str], name: str, exclude_id: Optional[UUID] = None) -> None:
        # NULL institutes never collide in a SQL unique index
        if institute is not None:
            return
        stmt = select(Category.id).where(Category.institute.is_(None), Category.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        if (await self.db.execute(stmt)).first() is not None:
            raise ConflictError(CATEGORY_EXISTS)

    async def create(self, ctx: RequestContext, payload: CategoryCreate) -> Category:
        data = payload.model_dump()
        data["institute"] = ctx.institute_for_write(payload.institute)
        await self._ensure_unique(data["institute"], data["name"])

        async with conflict_on_integrity(self.db, CATEGORY_EXISTS, entity="category"):
            category = await self.repo.create(data)
        logger.info("category_created", category_id=str(category.id), institute=category.institute)
        return category

    async def update(self, ctx: RequestContext, category_id: UUID, payload: CategoryUpdate) -> Category:
        category = await self._get_writable(ctx, category_id)
        data = payload.model_dump(exclude_unset=True)
        for field in ("name", "description", "order"):
            if field in data and data[field] is None:
                data.pop(field)
        if ctx.tenant is not None:
            ctx.ensure_institute_allowed(data.get("institute"))
            data["institute"] = ctx.tenant

        institute = data.get("institute", category.institute)
        await self._ensure_unique(institute, data.get("name", category.name), exclude_id=category.id)

        async with conflict_on_integrity(self.db, CATEGORY_EXISTS, entity="category"):
            category = await self.repo.update(category, data)
        logger.info("category_updated", category_id=str(category.id), fields=sorted(data))
        return category

    async def delete(self, ctx: RequestContext, category_id: UUID) -> None:
        category = await self._get_writable(ctx, category_id)
        await self.repo.delete(category)
        logger.info("category_deleted", category_id=str(category_id))
