"""
Authorization rules shared by the resource services.

Every rule takes the caller explicitly; denials are logged as structured
events and raised as AuthorizationError / NotFoundError.
"""
from typing import Optional

import structlog

from webacademy.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from webacademy.domain.constants import INSTITUTES, CourseStatus, UserRole
from webacademy.infrastructure.database.models import Course, User
from webacademy.repositories.course import InstructorAssignmentRepository
from webacademy.services.auth.authorization.principal import Principal
from webacademy.services.auth.authorization.tenant import RequestContext

logger = structlog.get_logger(__name__)

USER_NOT_FOUND = "Utilisateur non trouvé"


async def can_edit_course(
    principal: Principal,
    course: Course,
    assignments: InstructorAssignmentRepository,
) -> bool:
    """
    Check whether the principal may modify a course.

    Admins may edit any course of their institute (every course for the
    super-admin). Others need to be the creator, or an instructor holding an
    assignment for the course within their own institute.
    """
    if principal.is_admin:
        return principal.institute is None or principal.institute == course.institute

    if course.created_by_id is not None and course.created_by_id == principal.user_id:
        return True

    if principal.is_instructor:
        return await assignments.is_assigned(principal.user_id, course.id, principal.institute)

    return False


async def ensure_can_edit_course(
    principal: Principal,
    course: Course,
    assignments: InstructorAssignmentRepository,
) -> None:
    if not await can_edit_course(principal, course, assignments):
        logger.warning(
            "course_edit_denied",
            user_id=str(principal.user_id),
            course_id=str(course.id),
            kind=principal.kind.value,
        )
        raise AuthorizationError("Accès refusé")


def can_view_course(principal: Optional[Principal], course: Course) -> bool:
    """Drafts and archived courses are visible to admins and the creator only."""
    if course.status == CourseStatus.PUBLISHED.value:
        return True
    if principal is None:
        return False
    return principal.is_admin or course.created_by_id == principal.user_id


def ensure_valid_admin_institute(institute: Optional[str], message: str) -> None:
    if not institute or institute not in INSTITUTES:
        raise ValidationError(message, field="institute")


def ensure_can_create_user(ctx: RequestContext, role: str, institute: Optional[str]) -> None:
    """
    Only the super-admin creates admins, and an admin is always bound to an
    institute.
    """
    if role != UserRole.ADMIN.value:
        return
    if not ctx.is_super_admin:
        logger.warning("admin_creation_denied", user_id=_caller(ctx))
        raise AuthorizationError("Seul le super-admin peut créer un administrateur d'institut.")
    ensure_valid_admin_institute(
        institute,
        "L'institut est requis pour un administrateur (A, B ou C).",
    )


def ensure_can_modify_user(
    ctx: RequestContext,
    user: User,
    new_role: Optional[str],
    new_institute: Optional[str],
    institute_set: bool,
) -> None:
    """
    Guard role and institute changes on an existing user.

    Args:
        new_role: Requested role, None when unchanged
        new_institute: Requested institute
        institute_set: Whether the institute field was sent at all
    """
    if user.role == UserRole.ADMIN.value or new_role == UserRole.ADMIN.value:
        if not ctx.is_super_admin:
            logger.warning("admin_modification_denied", user_id=_caller(ctx), target_id=str(user.id))
            raise AuthorizationError("Seul le super-admin peut modifier un administrateur.")

        resulting_role = new_role or user.role
        resulting_institute = new_institute if institute_set else user.institute
        if resulting_role == UserRole.ADMIN.value:
            ensure_valid_admin_institute(
                resulting_institute,
                "Un administrateur d'institut doit avoir un institut (A, B ou C).",
            )
        return

    if institute_set and ctx.tenant is not None and new_institute != ctx.tenant:
        raise AuthorizationError("Institut non autorisé")


def ensure_can_delete_user(ctx: RequestContext, user: User) -> None:
    """
    Deleting an admin needs the super-admin; other users outside the tenant
    do not exist for the caller.
    """
    if user.role == UserRole.ADMIN.value:
        if not ctx.is_super_admin:
            logger.warning("admin_deletion_denied", user_id=_caller(ctx), target_id=str(user.id))
            raise AuthorizationError("Seul le super-admin peut supprimer un administrateur.")
        return
    if not ctx.owns_row(user.institute):
        raise NotFoundError(USER_NOT_FOUND)


def ensure_can_change_settings(ctx: RequestContext) -> None:
    if not ctx.is_super_admin:
        logger.warning("settings_update_denied", user_id=_caller(ctx))
        raise AuthorizationError("Seul le super-admin peut modifier les paramètres globaux.")


def _caller(ctx: RequestContext) -> Optional[str]:
    return str(ctx.principal.user_id) if ctx.principal else None
