"""
Registration, login and self-service profile.
"""
from typing import List, Tuple

import structlog
from fastapi import BackgroundTasks
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import (
    AuthorizationError,
    ConflictError,
    IdentityNotVerifiedError,
    InvalidCredentialsError,
    NotFoundError,
)
from webacademy.core.security import create_access_token, get_password_hash, verify_password
from webacademy.domain.constants import UserRole
from webacademy.domain.schemas.auth import MyAssignment, ProfileUpdate, RegisterRequest
from webacademy.infrastructure.database.models import InstructorAssignment, User
from webacademy.repositories.user import UserRepository
from webacademy.services.auth.authorization.principal import Principal
from webacademy.services.base import conflict_on_integrity
from webacademy.services.notifications import NotificationService

logger = structlog.get_logger(__name__)

EMAIL_TAKEN = "Cet email est déjà utilisé"
STUDENT_NUMBER_TAKEN = "Ce numéro matricule est déjà utilisé"
PENDING_VERIFICATION = (
    "Compte créé. Un email vous a été envoyé. Vous pourrez vous connecter après "
    "confirmation de votre identité par l'administration."
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession, notifier: NotificationService):
        self.db = db
        self.user_repo = UserRepository(db)
        self.notifier = notifier

    async def register(
        self,
        payload: RegisterRequest,
        background: BackgroundTasks,
    ) -> Tuple[User, str | None]:
        """
        Register a student or instructor account.

        Students start unverified and receive no token until an administrator
        confirms their identity.

        Returns:
            The new user and its access token, or None for a pending student

        Raises:
            AuthorizationError: If an admin account is requested
            ConflictError: If email or student number is already used
        """
        if payload.role == UserRole.ADMIN.value:
            logger.warning("admin_self_registration_denied", email=payload.email)
            raise AuthorizationError("Impossible de créer un compte administrateur par inscription.")

        # "student", "etudiant" and no role all register a student
        role = UserRole.STUDENT.value
        if payload.role == UserRole.INSTRUCTOR.value:
            role = UserRole.INSTRUCTOR.value
        is_student = role == UserRole.STUDENT.value

        email = normalize_email(payload.email)
        if await self.user_repo.email_taken(email):
            raise ConflictError(EMAIL_TAKEN)
        student_number = (payload.student_number or "").strip() or None
        if student_number and await self.user_repo.student_number_taken(student_number):
            raise ConflictError(STUDENT_NUMBER_TAKEN)

        async with conflict_on_integrity(self.db, EMAIL_TAKEN, entity="user"):
            user = await self.user_repo.create(
                {
                    "name": payload.name,
                    "email": email,
                    "password_hash": get_password_hash(payload.password),
                    "role": role,
                    "institute": payload.institute,
                    "filiere": payload.filiere,
                    "niveau": payload.niveau,
                    "student_number": student_number,
                    "identity_verified": not is_student,
                }
            )

        logger.info("user_registered", user_id=str(user.id), role=role, institute=user.institute)

        if is_student:
            background.add_task(self.notifier.send_student_account_created, user.email, user.name)
            return user, None

        return user, create_access_token(str(user.id))

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate a user.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            IdentityNotVerifiedError: Student awaiting identity confirmation
        """
        normalized_email = normalize_email(email)
        user = await self.user_repo.get_by_email(normalized_email)
        if not user:
            logger.warning("login_attempt_unknown_email", email=normalized_email)
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            logger.warning("login_attempt_invalid_password", user_id=str(user.id))
            raise InvalidCredentialsError()

        if user.role == UserRole.STUDENT.value and not user.identity_verified:
            logger.info("login_attempt_unverified_student", user_id=str(user.id))
            raise IdentityNotVerifiedError()

        logger.info("user_logged_in", user_id=str(user.id), role=user.role)
        return user, create_access_token(str(user.id))

    async def update_profile(self, principal: Principal, payload: ProfileUpdate) -> User:
        user = await self.user_repo.get(principal.user_id)
        if not user:
            raise NotFoundError("Utilisateur non trouvé")

        data = payload.model_dump(exclude_unset=True)
        if data.get("name") is None:
            data.pop("name", None)
        if "email" in data:
            if data["email"] is None:
                data.pop("email")
            else:
                data["email"] = normalize_email(data["email"])
                if await self.user_repo.email_taken(data["email"], exclude_id=user.id):
                    raise ConflictError(EMAIL_TAKEN)
        for field in ("phone", "address"):
            if field in data:
                data[field] = (data[field] or "").strip() or None

        async with conflict_on_integrity(self.db, EMAIL_TAKEN, entity="user"):
            user = await self.user_repo.update(user, data)
        logger.info("profile_updated", user_id=str(user.id), fields=sorted(data))
        return user

    async def my_assignments(self, principal: Principal) -> List[MyAssignment]:
        """Assignments of the calling instructor; empty for everyone else."""
        if not principal.is_instructor:
            return []
        stmt = (
            select(InstructorAssignment)
            .where(InstructorAssignment.user_id == principal.user_id)
            .order_by(
                InstructorAssignment.academic_year.desc(),
                InstructorAssignment.semester,
                InstructorAssignment.institute,
            )
        )
        result = await self.db.execute(stmt)
        return [
            MyAssignment(
                id=a.id,
                institute=a.institute,
                semester=a.semester,
                academic_year=a.academic_year,
                course_id=a.course_id,
                course_title=a.course.title if a.course else "—",
            )
            for a in result.scalars().all()
        ]
