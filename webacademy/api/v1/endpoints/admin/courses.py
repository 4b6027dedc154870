"""
Admin course listing, drafts and archived courses included.
"""
from typing import List, Union

from fastapi import APIRouter, Depends

from webacademy.api.v1.endpoints.courses import course_filters, get_course_service
from webacademy.core.dependencies import get_admin_context
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.schemas.course import CourseRead
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.courses import CourseFilters, CourseService

router = APIRouter()


@router.get("", response_model=Union[List[CourseRead], Page[CourseRead]])
async def list_courses(
    filters: CourseFilters = Depends(course_filters),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_admin_context),
    service: CourseService = Depends(get_course_service),
):
    items, total = await service.list_for_admin(ctx, filters, params)
    return paginated([CourseRead.model_validate(c) for c in items], total, params)
