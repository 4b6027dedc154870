"""
Institute news, student guides and external tools.

All three are shared content: rows without an institute are visible to every
institute, while writes from an institute admin stay inside its institute.
"""
from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import AuthorizationError, NotFoundError
from webacademy.core.pagination import PageParams, search_clause
from webacademy.domain.constants import PublicationStatus
from webacademy.domain.schemas.content import (
    GuideCreate,
    GuideUpdate,
    NewsCreate,
    NewsUpdate,
    OutilCreate,
    OutilUpdate,
)
from webacademy.infrastructure.database.models import Guide, News, Outil
from webacademy.repositories.base import BaseRepository
from webacademy.services.auth.authorization.tenant import RequestContext

logger = structlog.get_logger(__name__)

NEWS_NOT_FOUND = "Actualité non trouvée"
GUIDE_NOT_FOUND = "Guide non trouvé"
OUTIL_NOT_FOUND = "Outil non trouvé"


class NewsService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BaseRepository(News, db)

    async def list(
        self,
        ctx: RequestContext,
        institute: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[News], int]:
        """Published news for everyone; admins may also see and filter drafts."""
        conditions = [
            ctx.shared_scope(News.institute),
            ctx.institute_filter(News.institute, institute),
            search_clause(search, News.title, News.content),
        ]
        if not ctx.is_admin:
            conditions.append(News.status == PublicationStatus.PUBLISHED.value)
        elif status:
            conditions.append(News.status == status)

        stmt = self.repo.apply(self.repo.select(), conditions).order_by(News.created_at.desc())
        return await self.repo.list(stmt, params)

    async def get(self, ctx: RequestContext, news_id: UUID) -> News:
        news = await self.repo.get(news_id)
        if not news:
            raise NotFoundError(NEWS_NOT_FOUND)
        ctx.ensure_in_tenant(news.institute, NEWS_NOT_FOUND, shared=True)
        if news.status != PublicationStatus.PUBLISHED.value and not ctx.is_admin:
            raise AuthorizationError("Accès refusé")
        return news

    async def _get_writable(self, ctx: RequestContext, news_id: UUID) -> News:
        news = await self.repo.get(news_id)
        if not news:
            raise NotFoundError(NEWS_NOT_FOUND)
        ctx.ensure_in_tenant(news.institute, NEWS_NOT_FOUND)
        return news

    async def create(self, ctx: RequestContext, payload: NewsCreate) -> News:
        principal = ctx.require_principal()
        data = payload.model_dump()
        data["institute"] = ctx.institute_for_write(payload.institute)
        data["created_by_id"] = principal.user_id

        news = await self.repo.create(data)
        logger.info("news_created", news_id=str(news.id), institute=news.institute, status=news.status)
        return news

    async def update(self, ctx: RequestContext, news_id: UUID, payload: NewsUpdate) -> News:
        news = await self._get_writable(ctx, news_id)
        data = payload.model_dump(exclude_unset=True)
        for field in ("title", "content", "status"):
            if field in data and data[field] is None:
                data.pop(field)
        news = await self.repo.update(news, data)
        logger.info("news_updated", news_id=str(news.id), fields=sorted(data))
        return news

    async def delete(self, ctx: RequestContext, news_id: UUID) -> None:
        news = await self._get_writable(ctx, news_id)
        await self.repo.delete(news)
        logger.info("news_deleted", news_id=str(news_id))


class GuideService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BaseRepository(Guide, db)

    async def list(
        self,
        ctx: RequestContext,
        search: Optional[str] = None,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[Guide], int]:
        conditions = [
            ctx.shared_scope(Guide.institute),
            search_clause(search, Guide.title, Guide.content),
        ]
        if not ctx.is_admin:
            conditions.append(Guide.status == PublicationStatus.PUBLISHED.value)

        stmt = self.repo.apply(self.repo.select(), conditions).order_by(
            Guide.order, Guide.created_at.desc()
        )
        return await self.repo.list(stmt, params)

    async def get(self, ctx: RequestContext, guide_id: UUID) -> Guide:
        guide = await self.repo.get(guide_id)
        if not guide:
            raise NotFoundError(GUIDE_NOT_FOUND)
        ctx.ensure_in_tenant(guide.institute, GUIDE_NOT_FOUND, shared=True)
        if guide.status != PublicationStatus.PUBLISHED.value and not ctx.is_admin:
            raise NotFoundError(GUIDE_NOT_FOUND)
        return guide

    async def _get_writable(self, ctx: RequestContext, guide_id: UUID) -> Guide:
        guide = await self.repo.get(guide_id)
        if not guide:
            raise NotFoundError(GUIDE_NOT_FOUND)
        ctx.ensure_in_tenant(guide.institute, GUIDE_NOT_FOUND)
        return guide

    async def create(self, ctx: RequestContext, payload: GuideCreate) -> Guide:
        data = payload.model_dump()
        data["institute"] = ctx.institute_for_write(payload.institute)
        guide = await self.repo.create(data)
        logger.info("guide_created", guide_id=str(guide.id), institute=guide.institute)
        return guide

    async def update(self, ctx: RequestContext, guide_id: UUID, payload: GuideUpdate) -> Guide:
        guide = await self._get_writable(ctx, guide_id)
        data = payload.model_dump(exclude_unset=True, exclude_none=True)
        guide = await self.repo.update(guide, data)
        logger.info("guide_updated", guide_id=str(guide.id), fields=sorted(data))
        return guide

    async def delete(self, ctx: RequestContext, guide_id: UUID) -> None:
        guide = await self._get_writable(ctx, guide_id)
        await self.repo.delete(guide)
        logger.info("guide_deleted", guide_id=str(guide_id))


class OutilService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BaseRepository(Outil, db)

    async def list(
        self,
        ctx: RequestContext,
        search: Optional[str] = None,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[Outil], int]:
        stmt = self.repo.apply(
            self.repo.select(),
            [
                ctx.shared_scope(Outil.institute),
                search_clause(search, Outil.title, Outil.description),
            ],
        ).order_by(Outil.order, Outil.title)
        return await self.repo.list(stmt, params)

    async def _get_writable(self, ctx: RequestContext, outil_id: UUID) -> Outil:
        outil = await self.repo.get(outil_id)
        if not outil:
            raise NotFoundError(OUTIL_NOT_FOUND)
        ctx.ensure_in_tenant(outil.institute, OUTIL_NOT_FOUND)
        return outil

    async def create(self, ctx: RequestContext, payload: OutilCreate) -> Outil:
        data = payload.model_dump()
        data["institute"] = ctx.institute_for_write(payload.institute)
        outil = await self.repo.create(data)
        logger.info("outil_created", outil_id=str(outil.id), institute=outil.institute)
        return outil

    async def update(self, ctx: RequestContext, outil_id: UUID, payload: OutilUpdate) -> Outil:
        outil = await self._get_writable(ctx, outil_id)
        data = payload.model_dump(exclude_unset=True, exclude_none=True)
        outil = await self.repo.update(outil, data)
        logger.info("outil_updated", outil_id=str(outil.id), fields=sorted(data))
        return outil

    async def delete(self, ctx: RequestContext, outil_id: UUID) -> None:
        outil = await self._get_writable(ctx, outil_id)
        await self.repo.delete(outil)
        logger.info("outil_deleted", outil_id=str(outil_id))
