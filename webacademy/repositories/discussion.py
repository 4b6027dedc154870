"""
Discussion repository.
"""
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.infrastructure.database.models import Discussion, DiscussionReply
from webacademy.repositories.base import BaseRepository


class DiscussionRepository(BaseRepository[Discussion]):
    """Discussion repository."""

    def __init__(self, db: AsyncSession):
        super().__init__(Discussion, db)

    async def add_reply(self, discussion_id: UUID, author_id: UUID, content: str) -> DiscussionReply:
        reply = DiscussionReply(discussion_id=discussion_id, author_id=author_id, content=content)
        self.db.add(reply)
        await self.db.commit()
        stmt = (
            select(DiscussionReply)
            .where(DiscussionReply.id == reply.id)
            .execution_options(populate_existing=True)
        )
        return (await self.db.execute(stmt)).scalar_one()

    async def delete_with_replies(self, discussion_id: UUID) -> None:
        """
        Delete replies, then the discussion.

        Two separate commits: a failure in between leaves the discussion
        without replies rather than orphaned replies.
        """
        await self.db.execute(
            delete(DiscussionReply).where(DiscussionReply.discussion_id == discussion_id)
        )
        await self.db.commit()
        await self.db.execute(delete(Discussion).where(Discussion.id == discussion_id))
        await self.db.commit()
