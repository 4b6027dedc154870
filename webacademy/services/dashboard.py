"""
Admin dashboard counters, scoped to the caller's institute.
"""
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.domain.constants import UserRole
from webacademy.domain.schemas.common import UserSummary
from webacademy.domain.schemas.settings import CategoryCount, DashboardStats, RecentCourse
from webacademy.infrastructure.database.models import Category, Course, User
from webacademy.repositories.base import BaseRepository
from webacademy.services.auth.authorization.tenant import RequestContext

RECENT_COURSES = 6


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


class DashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = BaseRepository(User, db)
        self.courses = BaseRepository(Course, db)

    async def stats(self, ctx: RequestContext) -> DashboardStats:
        user_scope = [c for c in (ctx.strict_scope(User.institute),) if c is not None]
        course_scope = [c for c in (ctx.strict_scope(Course.institute),) if c is not None]
        students = User.role == UserRole.STUDENT.value

        month_start = start_of_month(datetime.now(timezone.utc))
        total_students = await self.users.count(students, *user_scope)
        new_students = await self.users.count(students, User.created_at >= month_start, *user_scope)
        total_instructors = await self.users.count(User.role == UserRole.INSTRUCTOR.value, *user_scope)
        total_courses = await self.courses.count(*course_scope)

        recent_stmt = (
            self.courses.select(*course_scope).order_by(Course.created_at.desc()).limit(RECENT_COURSES)
        )
        recent, _ = await self.courses.list(recent_stmt)

        course_count = (
            select(func.count(Course.id))
            .where(Course.category == Category.name, *course_scope)
            .scalar_subquery()
        )
        category_stmt = BaseRepository.apply(
            select(Category.id, Category.name, course_count.label("course_count")),
            [ctx.shared_scope(Category.institute)],
        ).order_by(Category.order, Category.name)
        categories = (await self.db.execute(category_stmt)).all()

        return DashboardStats(
            total_students=total_students,
            new_students_this_month=new_students,
            total_instructors=total_instructors,
            total_courses=total_courses,
            recent_courses=[
                RecentCourse(
                    id=course.id,
                    title=course.title,
                    category=course.category,
                    created_by=UserSummary.model_validate(course.creator) if course.creator else None,
                )
                for course in recent
            ],
            categories=[
                CategoryCount(id=row.id, name=row.name, course_count=row.course_count)
                for row in categories
            ],
        )
