"""
Weekly timetables and evaluation calendars.

Both are strictly institute scoped: a caller with an institute only sees
rows of that institute, anonymous callers and the super-admin see all.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy import case
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import NotFoundError
from webacademy.core.pagination import PageParams, search_clause
from webacademy.domain.constants import DAY_ORDER
from webacademy.domain.schemas.schedule import (
    EvaluationCalendarCreate,
    EvaluationCalendarUpdate,
    TimetableCreate,
    TimetableUpdate,
)
from webacademy.infrastructure.database.models import Course, EvaluationCalendar, Timetable
from webacademy.repositories.base import BaseRepository
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.courses import COURSE_NOT_FOUND

logger = structlog.get_logger(__name__)

TIMETABLE_NOT_FOUND = "Emploi du temps non trouvé"
CALENDAR_NOT_FOUND = "Calendrier non trouvé"


@dataclass
class ScheduleFilters:
    institute: Optional[str] = None
    filiere: Optional[str] = None
    niveau: Optional[str] = None
    semester: Optional[str] = None
    academic_year: Optional[int] = None
    day_of_week: Optional[str] = None
    course_id: Optional[UUID] = None
    search: Optional[str] = None


def _common_conditions(ctx: RequestContext, model, filters: ScheduleFilters) -> list:
    return [
        ctx.strict_scope(model.institute),
        ctx.institute_filter(model.institute, filters.institute),
        model.filiere == filters.filiere if filters.filiere else None,
        model.niveau == filters.niveau if filters.niveau else None,
        model.semester == filters.semester if filters.semester else None,
        model.academic_year == filters.academic_year if filters.academic_year else None,
    ]


async def _ensure_course(db: AsyncSession, ctx: RequestContext, course_id: Optional[UUID]) -> None:
    if course_id is None:
        return
    course = await db.get(Course, course_id)
    if course is None or (course.institute is not None and not ctx.owns_row(course.institute)):
        raise NotFoundError(COURSE_NOT_FOUND)


class TimetableService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BaseRepository(Timetable, db)

    async def list(
        self,
        ctx: RequestContext,
        filters: ScheduleFilters,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[Timetable], int]:
        conditions = _common_conditions(ctx, Timetable, filters) + [
            Timetable.day_of_week == filters.day_of_week if filters.day_of_week else None,
            search_clause(filters.search, Timetable.room, Timetable.instructor, Timetable.filiere),
        ]
        day_rank = case(DAY_ORDER, value=Timetable.day_of_week, else_=len(DAY_ORDER))
        stmt = self.repo.apply(self.repo.select(), conditions).order_by(day_rank, Timetable.start_time)
        return await self.repo.list(stmt, params)

    async def get(self, ctx: RequestContext, timetable_id: UUID) -> Timetable:
        timetable = await self.repo.get(timetable_id)
        if not timetable:
            raise NotFoundError(TIMETABLE_NOT_FOUND)
        ctx.ensure_in_tenant(timetable.institute, TIMETABLE_NOT_FOUND)
        return timetable

    async def create(self, ctx: RequestContext, payload: TimetableCreate) -> Timetable:
        await _ensure_course(self.db, ctx, payload.course_id)
        data = payload.model_dump()
        data["institute"] = ctx.institute_for_write(payload.institute)
        timetable = await self.repo.create(data)
        logger.info("timetable_created", timetable_id=str(timetable.id), institute=timetable.institute)
        return timetable

    async def update(self, ctx: RequestContext, timetable_id: UUID, payload: TimetableUpdate) -> Timetable:
        timetable = await self.get(ctx, timetable_id)
        data = payload.model_dump(exclude_unset=True)
        for field in ("course_id", "start_time", "end_time", "day_of_week"):
            if field in data and data[field] is None:
                data.pop(field)
        if "course_id" in data:
            await _ensure_course(self.db, ctx, data["course_id"])

        timetable = await self.repo.update(timetable, data)
        logger.info("timetable_updated", timetable_id=str(timetable.id), fields=sorted(data))
        return timetable

    async def delete(self, ctx: RequestContext, timetable_id: UUID) -> None:
        timetable = await self.get(ctx, timetable_id)
        await self.repo.delete(timetable)
        logger.info("timetable_deleted", timetable_id=str(timetable_id))


class EvaluationCalendarService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BaseRepository(EvaluationCalendar, db)

    async def list(
        self,
        ctx: RequestContext,
        filters: ScheduleFilters,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[EvaluationCalendar], int]:
        conditions = _common_conditions(ctx, EvaluationCalendar, filters) + [
            EvaluationCalendar.course_id == filters.course_id if filters.course_id else None,
            search_clause(
                filters.search,
                EvaluationCalendar.title,
                EvaluationCalendar.description,
                EvaluationCalendar.location,
            ),
        ]
        stmt = self.repo.apply(self.repo.select(), conditions).order_by(
            EvaluationCalendar.evaluation_date, EvaluationCalendar.start_time
        )
        return await self.repo.list(stmt, params)

    async def get(self, ctx: RequestContext, calendar_id: UUID) -> EvaluationCalendar:
        calendar = await self.repo.get(calendar_id)
        if not calendar:
            raise NotFoundError(CALENDAR_NOT_FOUND)
        ctx.ensure_in_tenant(calendar.institute, CALENDAR_NOT_FOUND)
        return calendar

    async def create(self, ctx: RequestContext, payload: EvaluationCalendarCreate) -> EvaluationCalendar:
        await _ensure_course(self.db, ctx, payload.course_id)
        data = payload.model_dump()
        data["institute"] = ctx.institute_for_write(payload.institute)
        calendar = await self.repo.create(data)
        logger.info("evaluation_calendar_created", calendar_id=str(calendar.id), institute=calendar.institute)
        return calendar

    async def update(
        self,
        ctx: RequestContext,
        calendar_id: UUID,
        payload: EvaluationCalendarUpdate,
    ) -> EvaluationCalendar:
        calendar = await self.get(ctx, calendar_id)
        data = payload.model_dump(exclude_unset=True)
        for field in ("title", "evaluation_date", "type"):
            if field in data and data[field] is None:
                data.pop(field)
        if data.get("course_id") is not None:
            await _ensure_course(self.db, ctx, data["course_id"])

        calendar = await self.repo.update(calendar, data)
        logger.info("evaluation_calendar_updated", calendar_id=str(calendar.id), fields=sorted(data))
        return calendar

    async def delete(self, ctx: RequestContext, calendar_id: UUID) -> None:
        calendar = await self.get(ctx, calendar_id)
        await self.repo.delete(calendar)
        logger.info("evaluation_calendar_deleted", calendar_id=str(calendar_id))
