"""
Instructor assignments: which instructor may edit which course, per term.
"""
from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import NotFoundError, ValidationError
from webacademy.core.pagination import PageParams
from webacademy.domain.constants import UserRole
from webacademy.domain.schemas.assignment import AssignmentCreate, AssignmentUpdate
from webacademy.infrastructure.database.models import Course, InstructorAssignment, User
from webacademy.repositories.course import InstructorAssignmentRepository
from webacademy.services.auth.authorization.policies import USER_NOT_FOUND
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.courses import COURSE_NOT_FOUND

logger = structlog.get_logger(__name__)

ASSIGNMENT_NOT_FOUND = "Affectation non trouvée"


class AssignmentService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = InstructorAssignmentRepository(db)

    async def list(
        self,
        ctx: RequestContext,
        institute: Optional[str] = None,
        user_id: Optional[UUID] = None,
        course_id: Optional[UUID] = None,
        semester: Optional[str] = None,
        academic_year: Optional[int] = None,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[InstructorAssignment], int]:
        model = InstructorAssignment
        stmt = self.repo.apply(
            self.repo.select(),
            [
                ctx.strict_scope(model.institute),
                ctx.institute_filter(model.institute, institute),
                model.user_id == user_id if user_id else None,
                model.course_id == course_id if course_id else None,
                model.semester == semester if semester else None,
                model.academic_year == academic_year if academic_year else None,
            ],
        ).order_by(model.academic_year.desc(), model.semester, model.institute)
        return await self.repo.list(stmt, params)

    async def get(self, ctx: RequestContext, assignment_id: UUID) -> InstructorAssignment:
        assignment = await self.repo.get(assignment_id)
        if not assignment:
            raise NotFoundError(ASSIGNMENT_NOT_FOUND)
        ctx.ensure_in_tenant(assignment.institute, ASSIGNMENT_NOT_FOUND)
        return assignment

    async def _check_targets(self, ctx: RequestContext, user_id: UUID, course_id: UUID) -> None:
        """The instructor and the course must both be visible from the tenant."""
        user = await self.db.get(User, user_id)
        if user is None or not ctx.owns_row(user.institute):
            raise NotFoundError(USER_NOT_FOUND)
        if user.role != UserRole.INSTRUCTOR.value:
            raise ValidationError("Seul un formateur peut être affecté à un cours.", field="user_id")

        course = await self.db.get(Course, course_id)
        if course is None or (course.institute is not None and not ctx.owns_row(course.institute)):
            raise NotFoundError(COURSE_NOT_FOUND)

    async def create(self, ctx: RequestContext, payload: AssignmentCreate) -> InstructorAssignment:
        institute = ctx.institute_for_write(payload.institute)
        await self._check_targets(ctx, payload.user_id, payload.course_id)

        assignment = await self.repo.create(
            {
                "user_id": payload.user_id,
                "course_id": payload.course_id,
                "institute": institute,
                "semester": payload.semester,
                "academic_year": payload.academic_year,
            }
        )
        logger.info(
            "instructor_assigned",
            assignment_id=str(assignment.id),
            user_id=str(assignment.user_id),
            course_id=str(assignment.course_id),
            institute=institute,
        )
        return assignment

    async def update(
        self,
        ctx: RequestContext,
        assignment_id: UUID,
        payload: AssignmentUpdate,
    ) -> InstructorAssignment:
        assignment = await self.get(ctx, assignment_id)
        data = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "institute" in data:
            ctx.ensure_institute_allowed(data["institute"])
        if "user_id" in data or "course_id" in data:
            await self._check_targets(
                ctx,
                data.get("user_id", assignment.user_id),
                data.get("course_id", assignment.course_id),
            )

        assignment = await self.repo.update(assignment, data)
        logger.info("assignment_updated", assignment_id=str(assignment.id), fields=sorted(data))
        return assignment

    async def delete(self, ctx: RequestContext, assignment_id: UUID) -> None:
        assignment = await self.get(ctx, assignment_id)
        await self.repo.delete(assignment)
        logger.info("assignment_deleted", assignment_id=str(assignment_id))
