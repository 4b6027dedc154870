"""
Course and instructor assignment repositories.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.infrastructure.database.models import Course, CourseResource, InstructorAssignment
from webacademy.repositories.base import BaseRepository


class CourseRepository(BaseRepository[Course]):
    """Course repository."""

    def __init__(self, db: AsyncSession):
        super().__init__(Course, db)

    async def add_resource(self, course: Course, data: dict) -> CourseResource:
        resource = CourseResource(course_id=course.id, **data)
        self.db.add(resource)
        await self.db.commit()
        await self.db.refresh(resource)
        return resource

    async def get_resource(self, course_id: UUID, resource_id: UUID) -> Optional[CourseResource]:
        stmt = select(CourseResource).where(
            CourseResource.id == resource_id,
            CourseResource.course_id == course_id,
        )
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def delete_resource(self, resource: CourseResource) -> None:
        await self.db.delete(resource)
        await self.db.commit()


class InstructorAssignmentRepository(BaseRepository[InstructorAssignment]):
    """Instructor assignment repository."""

    def __init__(self, db: AsyncSession):
        super().__init__(InstructorAssignment, db)

    def _for_instructor(self, user_id: UUID, institute: Optional[str]):
        stmt = select(InstructorAssignment.course_id).where(InstructorAssignment.user_id == user_id)
        if institute:
            stmt = stmt.where(InstructorAssignment.institute == institute)
        return stmt

    async def is_assigned(self, user_id: UUID, course_id: UUID, institute: Optional[str]) -> bool:
        stmt = self._for_instructor(user_id, institute).where(
            InstructorAssignment.course_id == course_id
        )
        return (await self.db.execute(stmt.limit(1))).first() is not None

    async def assigned_course_ids(self, user_id: UUID, institute: Optional[str]) -> List[UUID]:
        result = await self.db.execute(self._for_instructor(user_id, institute).distinct())
        return list(result.scalars().all())
