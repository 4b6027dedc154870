"""
Course-optional discussion threads and their replies.
"""
from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import AuthorizationError, NotFoundError
from webacademy.core.pagination import PageParams, search_clause
from webacademy.domain.schemas.discussion import DiscussionCreate, DiscussionUpdate, ReplyCreate
from webacademy.infrastructure.database.models import Discussion, DiscussionReply
from webacademy.repositories.discussion import DiscussionRepository
from webacademy.services.auth.authorization.tenant import RequestContext

logger = structlog.get_logger(__name__)

DISCUSSION_NOT_FOUND = "Discussion non trouvée"


class DiscussionService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = DiscussionRepository(db)

    async def list(
        self,
        course_id: Optional[UUID] = None,
        search: Optional[str] = None,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[Discussion], int]:
        stmt = self.repo.apply(
            self.repo.select(),
            [
                Discussion.course_id == course_id if course_id else None,
                search_clause(search, Discussion.title, Discussion.content),
            ],
        ).order_by(Discussion.is_pinned.desc(), Discussion.created_at.desc())
        return await self.repo.list(stmt, params)

    async def get(self, discussion_id: UUID) -> Discussion:
        discussion = await self.repo.get(discussion_id)
        if not discussion:
            raise NotFoundError(DISCUSSION_NOT_FOUND)
        return discussion

    async def _get_owned(self, ctx: RequestContext, discussion_id: UUID) -> Discussion:
        principal = ctx.require_principal()
        discussion = await self.get(discussion_id)
        if discussion.author_id != principal.user_id and not principal.is_admin:
            logger.warning(
                "discussion_edit_denied",
                user_id=str(principal.user_id),
                discussion_id=str(discussion_id),
            )
            raise AuthorizationError("Accès refusé")
        return discussion

    async def create(self, ctx: RequestContext, payload: DiscussionCreate) -> Discussion:
        principal = ctx.require_principal()
        discussion = await self.repo.create(
            {
                "title": payload.title,
                "content": payload.content,
                "course_id": payload.course_id,
                "is_pinned": payload.is_pinned and principal.is_admin,
                "author_id": principal.user_id,
            }
        )
        logger.info("discussion_created", discussion_id=str(discussion.id), author_id=str(principal.user_id))
        return discussion

    async def update(self, ctx: RequestContext, discussion_id: UUID, payload: DiscussionUpdate) -> Discussion:
        discussion = await self._get_owned(ctx, discussion_id)
        data = payload.model_dump(exclude_unset=True)
        for field in ("title", "content", "is_pinned"):
            if field in data and data[field] is None:
                data.pop(field)
        # Pinning is moderation
        if not ctx.is_admin:
            data.pop("is_pinned", None)

        discussion = await self.repo.update(discussion, data)
        logger.info("discussion_updated", discussion_id=str(discussion.id), fields=sorted(data))
        return discussion

    async def delete(self, ctx: RequestContext, discussion_id: UUID) -> None:
        await self._get_owned(ctx, discussion_id)
        await self.repo.delete_with_replies(discussion_id)
        logger.info("discussion_deleted", discussion_id=str(discussion_id))

    async def add_reply(self, ctx: RequestContext, discussion_id: UUID, payload: ReplyCreate) -> DiscussionReply:
        principal = ctx.require_principal()
        discussion = await self.get(discussion_id)
        reply = await self.repo.add_reply(discussion.id, principal.user_id, payload.content)
        logger.info("discussion_reply_added", discussion_id=str(discussion.id), reply_id=str(reply.id))
        return reply
