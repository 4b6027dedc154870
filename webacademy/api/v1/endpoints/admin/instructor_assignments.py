"""
Admin management of instructor assignments.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.constants import Institute, Semester
from webacademy.domain.schemas.assignment import AssignmentCreate, AssignmentRead, AssignmentUpdate
from webacademy.infrastructure.database.base import get_db
from webacademy.services.assignments import AssignmentService
from webacademy.services.auth.authorization.tenant import RequestContext

router = APIRouter()


@router.get("", response_model=Union[List[AssignmentRead], Page[AssignmentRead]])
async def list_assignments(
    institute: Optional[Institute] = Query(None),
    user_id: Optional[UUID] = Query(None),
    course_id: Optional[UUID] = Query(None),
    semester: Optional[Semester] = Query(None),
    academic_year: Optional[int] = Query(None),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    items, total = await AssignmentService(db).list(
        ctx,
        institute=institute.value if institute else None,
        user_id=user_id,
        course_id=course_id,
        semester=semester.value if semester else None,
        academic_year=academic_year,
        params=params,
    )
    return paginated([AssignmentRead.model_validate(a) for a in items], total, params)


@router.get("/{assignment_id}", response_model=AssignmentRead)
async def get_assignment(
    assignment_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return AssignmentRead.model_validate(await AssignmentService(db).get(ctx, assignment_id))


@router.post("", response_model=AssignmentRead, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    payload: AssignmentCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return AssignmentRead.model_validate(await AssignmentService(db).create(ctx, payload))


@router.put("/{assignment_id}", response_model=AssignmentRead)
async def update_assignment(
    assignment_id: UUID,
    payload: AssignmentUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    assignment = await AssignmentService(db).update(ctx, assignment_id, payload)
    return AssignmentRead.model_validate(assignment)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignment(
    assignment_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    await AssignmentService(db).delete(ctx, assignment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
