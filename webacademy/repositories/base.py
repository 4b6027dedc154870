"""
Base repository implementation.
"""
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.pagination import PageParams
from webacademy.infrastructure.database.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations."""

    def __init__(
        self,
        model: Type[ModelType],
        db: AsyncSession,
    ):
        self.model = model
        self.db = db

    async def create(
        self,
        data: Dict[str, Any],
    ) -> ModelType:
        """
        Create a new record.

        Args:
            data: Record data

        Returns:
            Created record with its relationships loaded
        """
        db_obj = self.model(**data)
        self.db.add(db_obj)
        await self.db.commit()
        return await self.get(db_obj.id)

    async def get(
        self,
        id: UUID,
    ) -> Optional[ModelType]:
        """
        Get record by ID.

        Rows already in the session are reloaded so relationships reflect
        the latest commit.
        """
        stmt = (
            select(self.model)
            .where(self.model.id == id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def update(
        self,
        db_obj: ModelType,
        data: Dict[str, Any],
    ) -> ModelType:
        """
        Update record fields and reload it.

        Args:
            db_obj: Record to update
            data: Fields to set

        Returns:
            Updated record
        """
        for field, value in data.items():
            setattr(db_obj, field, value)
        await self.db.commit()
        return await self.get(db_obj.id)

    async def delete(
        self,
        db_obj: ModelType,
    ) -> None:
        await self.db.delete(db_obj)
        await self.db.commit()

    async def list(
        self,
        stmt: Select,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[ModelType], int]:
        """
        Run a filtered and ordered select, optionally paginated.

        Returns:
            Items of the requested page and the unpaginated total
        """
        if params is None or not params.enabled:
            result = await self.db.execute(stmt)
            items = list(result.scalars().all())
            return items, len(items)

        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.db.execute(count_stmt)).scalar_one()
        result = await self.db.execute(stmt.offset(params.offset).limit(params.limit))
        return list(result.scalars().all()), total

    async def count(self, *conditions) -> int:
        stmt = select(func.count()).select_from(self.model).where(*conditions)
        return (await self.db.execute(stmt)).scalar_one()

    def select(self, *conditions) -> Select:
        return select(self.model).where(*conditions)

    @staticmethod
    def apply(stmt: Select, conditions: Sequence[Any]) -> Select:
        """Append non-null WHERE conditions."""
        for condition in conditions:
            if condition is not None:
                stmt = stmt.where(condition)
        return stmt
