"""
Evaluation calendars (exams, tests, practicals, projects).
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context, get_optional_context
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.constants import Institute, Niveau, Semester
from webacademy.domain.schemas.schedule import (
    EvaluationCalendarCreate,
    EvaluationCalendarRead,
    EvaluationCalendarUpdate,
)
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.schedule import EvaluationCalendarService, ScheduleFilters

router = APIRouter()


def calendar_filters(
    institute: Optional[Institute] = Query(None),
    filiere: Optional[str] = Query(None),
    niveau: Optional[Niveau] = Query(None),
    course_id: Optional[UUID] = Query(None),
    semester: Optional[Semester] = Query(None),
    academic_year: Optional[int] = Query(None),
    search: Optional[str] = Query(None),
) -> ScheduleFilters:
    return ScheduleFilters(
        institute=institute.value if institute else None,
        filiere=filiere,
        niveau=niveau.value if niveau else None,
        course_id=course_id,
        semester=semester.value if semester else None,
        academic_year=academic_year,
        search=search,
    )


@router.get("", response_model=Union[List[EvaluationCalendarRead], Page[EvaluationCalendarRead]])
async def list_calendars(
    filters: ScheduleFilters = Depends(calendar_filters),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_optional_context),
    db: AsyncSession = Depends(get_db),
):
    items, total = await EvaluationCalendarService(db).list(ctx, filters, params)
    return paginated([EvaluationCalendarRead.model_validate(e) for e in items], total, params)


@router.get("/{calendar_id}", response_model=EvaluationCalendarRead)
async def get_calendar(
    calendar_id: UUID,
    ctx: RequestContext = Depends(get_optional_context),
    db: AsyncSession = Depends(get_db),
):
    calendar = await EvaluationCalendarService(db).get(ctx, calendar_id)
    return EvaluationCalendarRead.model_validate(calendar)


@router.post("", response_model=EvaluationCalendarRead, status_code=status.HTTP_201_CREATED)
async def create_calendar(
    payload: EvaluationCalendarCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    calendar = await EvaluationCalendarService(db).create(ctx, payload)
    return EvaluationCalendarRead.model_validate(calendar)


@router.put("/{calendar_id}", response_model=EvaluationCalendarRead)
async def update_calendar(
    calendar_id: UUID,
    payload: EvaluationCalendarUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    calendar = await EvaluationCalendarService(db).update(ctx, calendar_id, payload)
    return EvaluationCalendarRead.model_validate(calendar)


@router.delete("/{calendar_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_calendar(
    calendar_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    await EvaluationCalendarService(db).delete(ctx, calendar_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
