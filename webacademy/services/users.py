"""
Administrative user management.
"""
from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import ConflictError, NotFoundError, ValidationError
from webacademy.core.pagination import PageParams, search_clause
from webacademy.core.security import get_password_hash
from webacademy.domain.constants import UserRole
from webacademy.domain.schemas.user import UserCreate, UserUpdate
from webacademy.infrastructure.database.models import User
from webacademy.repositories.user import UserRepository
from webacademy.services.auth.auth_service import EMAIL_TAKEN, STUDENT_NUMBER_TAKEN, normalize_email
from webacademy.services.auth.authorization.policies import (
    USER_NOT_FOUND,
    ensure_can_create_user,
    ensure_can_delete_user,
    ensure_can_modify_user,
)
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.base import conflict_on_integrity
from webacademy.services.notifications import NotificationService

logger = structlog.get_logger(__name__)

IDENTITY_CONFIRMED = "Identité confirmée. Un email a été envoyé à l'étudiant."


class UserService:
    """Tenant-scoped user administration."""

    def __init__(self, db: AsyncSession, notifier: NotificationService):
        self.db = db
        self.repo = UserRepository(db)
        self.notifier = notifier

    async def list(
        self,
        ctx: RequestContext,
        role: Optional[UserRole] = None,
        search: Optional[str] = None,
        params: Optional[PageParams] = None,
    ) -> Tuple[List[User], int]:
        stmt = self.repo.apply(
            self.repo.select(),
            [
                ctx.strict_scope(User.institute),
                User.role == role.value if role else None,
                search_clause(search, User.name, User.email, User.student_number),
            ],
        ).order_by(User.created_at.desc())
        return await self.repo.list(stmt, params)

    async def get(self, ctx: RequestContext, user_id: UUID) -> User:
        user = await self.repo.get(user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND)
        ctx.ensure_in_tenant(user.institute, USER_NOT_FOUND)
        return user

    async def create(self, ctx: RequestContext, payload: UserCreate) -> User:
        """
        Create a user on behalf of an administrator.

        Accounts created here are verified. Non-admin users land in the
        caller's institute when the caller has one.
        """
        ensure_can_create_user(ctx, payload.role, payload.institute)

        if payload.role == UserRole.ADMIN.value:
            institute = payload.institute
        else:
            institute = ctx.institute_for_write(payload.institute)

        email = normalize_email(payload.email)
        if await self.repo.email_taken(email):
            raise ConflictError(EMAIL_TAKEN)
        student_number = (payload.student_number or "").strip() or None
        if student_number and await self.repo.student_number_taken(student_number):
            raise ConflictError(STUDENT_NUMBER_TAKEN)

        async with conflict_on_integrity(self.db, EMAIL_TAKEN, entity="user"):
            user = await self.repo.create(
                {
                    "name": payload.name,
                    "email": email,
                    "password_hash": get_password_hash(payload.password),
                    "role": payload.role,
                    "institute": institute,
                    "filiere": payload.filiere,
                    "niveau": payload.niveau,
                    "student_number": student_number,
                    "phone": payload.phone or None,
                    "address": payload.address or None,
                    "identity_verified": True,
                }
            )

        logger.info(
            "user_created",
            user_id=str(user.id),
            role=user.role,
            institute=user.institute,
            created_by=str(ctx.principal.user_id),
        )
        return user

    async def update(self, ctx: RequestContext, user_id: UUID, payload: UserUpdate) -> User:
        user = await self.get(ctx, user_id)
        data = payload.model_dump(exclude_unset=True)

        for field in ("name", "email", "role"):
            if field in data and data[field] is None:
                data.pop(field)

        ensure_can_modify_user(
            ctx,
            user,
            new_role=data.get("role"),
            new_institute=data.get("institute"),
            institute_set="institute" in data,
        )

        if "email" in data:
            data["email"] = normalize_email(data["email"])
            if await self.repo.email_taken(data["email"], exclude_id=user.id):
                raise ConflictError(EMAIL_TAKEN)
        if "student_number" in data:
            data["student_number"] = (data["student_number"] or "").strip() or None

        async with conflict_on_integrity(self.db, "Cet email ou ce numéro matricule est déjà utilisé", entity="user"):
            user = await self.repo.update(user, data)

        logger.info("user_updated", user_id=str(user.id), fields=sorted(data), by=str(ctx.principal.user_id))
        return user

    async def verify_identity(
        self,
        ctx: RequestContext,
        user_id: UUID,
        background: BackgroundTasks,
    ) -> User:
        """
        Confirm a student's identity (one-way) and notify the student.

        Raises:
            ValidationError: Not a student, or already verified
        """
        user = await self.get(ctx, user_id)
        if user.role != UserRole.STUDENT.value:
            raise ValidationError("Seuls les comptes étudiants peuvent être vérifiés.")
        if user.identity_verified:
            raise ValidationError("L'identité de cet étudiant est déjà confirmée.")

        user = await self.repo.update(user, {"identity_verified": True})
        background.add_task(self.notifier.send_identity_confirmed, user.email, user.name)
        logger.info("identity_verified", user_id=str(user.id), by=str(ctx.principal.user_id))
        return user

    async def delete(self, ctx: RequestContext, user_id: UUID) -> None:
        user = await self.repo.get(user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND)
        ensure_can_delete_user(ctx, user)
        await self.repo.delete(user)
        logger.info("user_deleted", user_id=str(user_id), by=str(ctx.principal.user_id))
