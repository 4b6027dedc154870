"""
Course catalogue, authoring and course resources.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_optional_context, get_request_context, get_storage
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.constants import CourseStatus, Institute, Niveau, Semester
from webacademy.domain.schemas.course import CourseCreate, CourseRead, CourseUpdate, ResourceRead
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.courses import CourseFilters, CourseService
from webacademy.services.storage.uploads import UploadStorage

router = APIRouter()


def course_filters(
    filiere: Optional[str] = Query(None),
    niveau: Optional[Niveau] = Query(None),
    institution: Optional[str] = Query(None),
    institute: Optional[Institute] = Query(None),
    status: Optional[CourseStatus] = Query(None),
    semester: Optional[Semester] = Query(None),
    academic_year: Optional[int] = Query(None),
    search: Optional[str] = Query(None),
) -> CourseFilters:
    return CourseFilters(
        filiere=filiere,
        niveau=niveau.value if niveau else None,
        institution=institution,
        institute=institute.value if institute else None,
        status=status.value if status else None,
        semester=semester.value if semester else None,
        academic_year=academic_year,
        search=search,
    )


def get_course_service(
    db: AsyncSession = Depends(get_db),
    storage: UploadStorage = Depends(get_storage),
) -> CourseService:
    return CourseService(db, storage)


@router.get("", response_model=Union[List[CourseRead], Page[CourseRead]])
async def list_courses(
    filters: CourseFilters = Depends(course_filters),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_optional_context),
    service: CourseService = Depends(get_course_service),
):
    """Published courses of the caller's institute; admins also see drafts."""
    items, total = await service.list(ctx, filters, params)
    return paginated([CourseRead.model_validate(c) for c in items], total, params)


@router.get("/mine", response_model=List[CourseRead])
async def my_courses(
    search: Optional[str] = Query(None),
    ctx: RequestContext = Depends(get_request_context),
    service: CourseService = Depends(get_course_service),
):
    items = await service.list_mine(ctx, search)
    return [CourseRead.model_validate(c) for c in items]


@router.get("/{course_id}", response_model=CourseRead)
async def get_course(
    course_id: UUID,
    ctx: RequestContext = Depends(get_optional_context),
    service: CourseService = Depends(get_course_service),
):
    return CourseRead.model_validate(await service.get(ctx, course_id))


@router.post("", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
async def create_course(
    payload: CourseCreate,
    ctx: RequestContext = Depends(get_request_context),
    service: CourseService = Depends(get_course_service),
):
    return CourseRead.model_validate(await service.create(ctx, payload))


@router.put("/{course_id}", response_model=CourseRead)
async def update_course(
    course_id: UUID,
    payload: CourseUpdate,
    ctx: RequestContext = Depends(get_request_context),
    service: CourseService = Depends(get_course_service),
):
    return CourseRead.model_validate(await service.update(ctx, course_id, payload))


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    service: CourseService = Depends(get_course_service),
):
    await service.delete(ctx, course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{course_id}/resources",
    response_model=ResourceRead,
    status_code=status.HTTP_201_CREATED,
)
async def upload_resource(
    course_id: UUID,
    file: UploadFile = File(...),
    ctx: RequestContext = Depends(get_request_context),
    service: CourseService = Depends(get_course_service),
):
    """Attach an uploaded file (image, PDF, office document or ZIP) to a course."""
    resource = await service.add_resource(ctx, course_id, file)
    return ResourceRead.model_validate(resource)


@router.delete("/{course_id}/resources/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(
    course_id: UUID,
    resource_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    service: CourseService = Depends(get_course_service),
):
    await service.delete_resource(ctx, course_id, resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
