"""
User repository.
"""
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.infrastructure.database.models import User
from webacademy.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_email(
        self,
        email: str,
    ) -> Optional[User]:
        """
        Get user by email.

        Args:
            email: Normalized (lowercase) email

        Returns:
            User if found
        """
        stmt = select(User).where(User.email == email)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def email_taken(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        stmt = select(User.id).where(User.email == email)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return (await self.db.execute(stmt)).first() is not None

    async def student_number_taken(self, student_number: str) -> bool:
        stmt = select(User.id).where(User.student_number == student_number)
        return (await self.db.execute(stmt)).first() is not None

    async def set_reset_token(self, user: User, token: str, expires: datetime) -> None:
        user.password_reset_token = token
        user.password_reset_expires = expires
        await self.db.commit()

    async def consume_reset_token(self, token: str, password_hash: str) -> bool:
        """
        Set a new password for the holder of a live reset token.

        The match, the password change and the token clearing happen in one
        conditional UPDATE, so a token is accepted at most once.

        Returns:
            True if a user was updated
        """
        stmt = (
            update(User)
            .where(
                User.password_reset_token == token,
                User.password_reset_expires > datetime.now(timezone.utc),
            )
            .values(
                password_hash=password_hash,
                password_reset_token=None,
                password_reset_expires=None,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount == 1
