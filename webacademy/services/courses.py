"""
Course management.

Reads are intersected with the caller's institute; drafts and archived
courses stay hidden from viewers that are neither admin nor creator.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from fastapi import UploadFile
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import AuthorizationError, NotFoundError
from webacademy.core.pagination import PageParams, search_clause
from webacademy.domain.constants import DEFAULT_INSTITUTION_LABEL, CourseStatus
from webacademy.domain.schemas.course import CourseCreate, CourseUpdate
from webacademy.infrastructure.database.models import Course, CourseResource
from webacademy.repositories.course import CourseRepository, InstructorAssignmentRepository
from webacademy.services.auth.authorization.policies import can_view_course, ensure_can_edit_course
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.platform_settings import PlatformSettingsService
from webacademy.services.storage.uploads import UploadStorage

logger = structlog.get_logger(__name__)

COURSE_NOT_FOUND = "Cours non trouvé"


@dataclass
class CourseFilters:
    filiere: Optional[str] = None
    niveau: Optional[str] = None
    institution: Optional[str] = None
    institute: Optional[str] = None
    status: Optional[str] = None
    semester: Optional[str] = None
    academic_year: Optional[int] = None
    search: Optional[str] = None


class CourseService:
    """Service for course operations."""

    def __init__(self, db: AsyncSession, storage: UploadStorage):
        self.db = db
        self.repo = CourseRepository(db)
        self.assignments = InstructorAssignmentRepository(db)
        self.settings = PlatformSettingsService(db)
        self.storage = storage

    def _base_conditions(self, ctx: RequestContext, filters: CourseFilters) -> list:
        return [
            ctx.strict_scope(Course.institute),
            ctx.institute_filter(Course.institute, filters.institute),
            Course.semester == filters.semester if filters.semester else None,
            Course.academic_year == filters.academic_year if filters.academic_year else None,
            search_clause(filters.search, Course.title, Course.category, Course.description),
        ]

    async def list(
        self,
        ctx: RequestContext,
        filters: CourseFilters,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[Course], int]:
        """Catalogue listing: published only, unless the caller is an admin."""
        conditions = self._base_conditions(ctx, filters) + [
            Course.filiere == filters.filiere if filters.filiere else None,
            Course.niveau == filters.niveau if filters.niveau else None,
            Course.institution == filters.institution if filters.institution else None,
        ]
        if not ctx.is_admin:
            conditions.append(Course.status == CourseStatus.PUBLISHED.value)
        elif filters.status:
            conditions.append(Course.status == filters.status)

        stmt = self.repo.apply(self.repo.select(), conditions).order_by(Course.created_at.desc())
        return await self.repo.list(stmt, params)

    async def list_for_admin(
        self,
        ctx: RequestContext,
        filters: CourseFilters,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[Course], int]:
        stmt = self.repo.apply(self.repo.select(), self._base_conditions(ctx, filters))
        return await self.repo.list(stmt.order_by(Course.created_at.desc()), params)

    async def list_mine(self, ctx: RequestContext, search: Optional[str] = None) -> List[Course]:
        """
        Courses an instructor created or is assigned to; for an admin, the
        courses it created.
        """
        principal = ctx.require_principal()
        if not principal.is_staff:
            raise AuthorizationError("Accès réservé aux formateurs")

        if principal.is_instructor:
            assigned = await self.assignments.assigned_course_ids(principal.user_id, principal.institute)
            ownership = or_(Course.created_by_id == principal.user_id, Course.id.in_(assigned))
        else:
            ownership = Course.created_by_id == principal.user_id

        stmt = self.repo.apply(
            self.repo.select(ownership),
            [
                ctx.strict_scope(Course.institute),
                search_clause(search, Course.title, Course.category, Course.description),
            ],
        ).order_by(Course.created_at.desc())
        items, _ = await self.repo.list(stmt)
        return items

    async def _get_or_404(self, course_id: UUID) -> Course:
        course = await self.repo.get(course_id)
        if not course:
            raise NotFoundError(COURSE_NOT_FOUND)
        return course

    async def get(self, ctx: RequestContext, course_id: UUID) -> Course:
        course = await self._get_or_404(course_id)
        if course.institute is not None:
            ctx.ensure_in_tenant(course.institute, COURSE_NOT_FOUND)
        if not can_view_course(ctx.principal, course):
            raise AuthorizationError("Accès refusé")
        return course

    async def create(self, ctx: RequestContext, payload: CourseCreate) -> Course:
        principal = ctx.require_principal()
        if not principal.is_staff:
            raise AuthorizationError("Accès refusé.")

        data = payload.model_dump()
        data["institute"] = ctx.institute_for_write(payload.institute)
        data["institution"] = payload.institution or DEFAULT_INSTITUTION_LABEL
        data["created_by_id"] = principal.user_id

        course = await self.repo.create(data)
        logger.info(
            "course_created",
            course_id=str(course.id),
            institute=course.institute,
            created_by=str(principal.user_id),
        )
        return course

    async def update(self, ctx: RequestContext, course_id: UUID, payload: CourseUpdate) -> Course:
        principal = ctx.require_principal()
        course = await self._get_or_404(course_id)
        await ensure_can_edit_course(principal, course, self.assignments)

        data = payload.model_dump(exclude_unset=True)
        for field in ("title", "category", "description", "institution", "status"):
            if field in data and data[field] is None:
                data.pop(field)
        if ctx.tenant is not None:
            ctx.ensure_institute_allowed(data.get("institute"))
            data["institute"] = ctx.tenant

        course = await self.repo.update(course, data)
        logger.info("course_updated", course_id=str(course.id), fields=sorted(data))
        return course

    async def delete(self, ctx: RequestContext, course_id: UUID) -> None:
        """Admins delete within their institute; others only their own courses."""
        principal = ctx.require_principal()
        course = await self._get_or_404(course_id)
        if principal.is_admin:
            ctx.ensure_in_tenant(course.institute, COURSE_NOT_FOUND)
        elif course.created_by_id != principal.user_id:
            raise AuthorizationError("Accès refusé")

        await self.repo.delete(course)
        await self.storage.delete_course_files(str(course_id))
        logger.info("course_deleted", course_id=str(course_id), by=str(principal.user_id))

    async def add_resource(self, ctx: RequestContext, course_id: UUID, upload: UploadFile) -> CourseResource:
        """Store an uploaded file and attach it to the course."""
        principal = ctx.require_principal()
        course = await self._get_or_404(course_id)
        await ensure_can_edit_course(principal, course, self.assignments)

        max_size_mb = await self.settings.max_upload_size_mb()
        stored = await self.storage.save_course_file(str(course.id), upload, max_size_mb)
        resource = await self.repo.add_resource(
            course,
            {"name": stored.name, "type": stored.type, "url": stored.url},
        )
        logger.info("course_resource_added", course_id=str(course.id), resource_id=str(resource.id))
        return resource

    async def delete_resource(self, ctx: RequestContext, course_id: UUID, resource_id: UUID) -> None:
        principal = ctx.require_principal()
        course = await self._get_or_404(course_id)
        await ensure_can_edit_course(principal, course, self.assignments)

        resource = await self.repo.get_resource(course.id, resource_id)
        if not resource:
            raise NotFoundError("Ressource non trouvée")

        await self.storage.delete_by_url(resource.url)
        await self.repo.delete_resource(resource)
        logger.info("course_resource_deleted", course_id=str(course.id), resource_id=str(resource_id))
