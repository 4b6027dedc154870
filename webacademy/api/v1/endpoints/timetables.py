"""
Weekly timetables.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context, get_optional_context
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.constants import DayOfWeek, Institute, Niveau, Semester
from webacademy.domain.schemas.schedule import TimetableCreate, TimetableRead, TimetableUpdate
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.schedule import ScheduleFilters, TimetableService

router = APIRouter()


def timetable_filters(
    institute: Optional[Institute] = Query(None),
    filiere: Optional[str] = Query(None),
    niveau: Optional[Niveau] = Query(None),
    day_of_week: Optional[DayOfWeek] = Query(None),
    semester: Optional[Semester] = Query(None),
    academic_year: Optional[int] = Query(None),
    search: Optional[str] = Query(None),
) -> ScheduleFilters:
    return ScheduleFilters(
        institute=institute.value if institute else None,
        filiere=filiere,
        niveau=niveau.value if niveau else None,
        day_of_week=day_of_week.value if day_of_week else None,
        semester=semester.value if semester else None,
        academic_year=academic_year,
        search=search,
    )


@router.get("", response_model=Union[List[TimetableRead], Page[TimetableRead]])
async def list_timetables(
    filters: ScheduleFilters = Depends(timetable_filters),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_optional_context),
    db: AsyncSession = Depends(get_db),
):
    """Slots ordered Monday to Saturday, then by start time."""
    items, total = await TimetableService(db).list(ctx, filters, params)
    return paginated([TimetableRead.model_validate(t) for t in items], total, params)


@router.get("/{timetable_id}", response_model=TimetableRead)
async def get_timetable(
    timetable_id: UUID,
    ctx: RequestContext = Depends(get_optional_context),
    db: AsyncSession = Depends(get_db),
):
    return TimetableRead.model_validate(await TimetableService(db).get(ctx, timetable_id))


@router.post("", response_model=TimetableRead, status_code=status.HTTP_201_CREATED)
async def create_timetable(
    payload: TimetableCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return TimetableRead.model_validate(await TimetableService(db).create(ctx, payload))


@router.put("/{timetable_id}", response_model=TimetableRead)
async def update_timetable(
    timetable_id: UUID,
    payload: TimetableUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    timetable = await TimetableService(db).update(ctx, timetable_id, payload)
    return TimetableRead.model_validate(timetable)


@router.delete("/{timetable_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_timetable(
    timetable_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    await TimetableService(db).delete(ctx, timetable_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
