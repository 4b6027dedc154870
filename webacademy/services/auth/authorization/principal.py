"""
Authenticated principal.

The stored ``(role, institute)`` pair is folded once into a tagged kind so
that no caller has to recompute whether an admin is bound to an institute.
"""
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from webacademy.domain.constants import UserRole


class PrincipalKind(str, Enum):
    """Principal kinds in ascending order of power."""
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    INSTITUTE_ADMIN = "institute_admin"
    SUPER_ADMIN = "super_admin"


_RANK = {
    PrincipalKind.STUDENT: 0,
    PrincipalKind.INSTRUCTOR: 1,
    PrincipalKind.INSTITUTE_ADMIN: 2,
    PrincipalKind.SUPER_ADMIN: 3,
}


def principal_kind(role: str, institute: Optional[str]) -> PrincipalKind:
    if role == UserRole.ADMIN.value:
        return PrincipalKind.INSTITUTE_ADMIN if institute else PrincipalKind.SUPER_ADMIN
    if role == UserRole.INSTRUCTOR.value:
        return PrincipalKind.INSTRUCTOR
    return PrincipalKind.STUDENT


class Principal(BaseModel):
    """Identity and capabilities of the caller."""
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    kind: PrincipalKind
    institute: Optional[str] = None
    email: str
    name: str

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(
            user_id=user.id,
            kind=principal_kind(user.role, user.institute),
            institute=user.institute or None,
            email=user.email,
            name=user.name,
        )

    @property
    def is_admin(self) -> bool:
        return self.kind in (PrincipalKind.INSTITUTE_ADMIN, PrincipalKind.SUPER_ADMIN)

    @property
    def is_super_admin(self) -> bool:
        return self.kind == PrincipalKind.SUPER_ADMIN

    @property
    def is_instructor(self) -> bool:
        return self.kind == PrincipalKind.INSTRUCTOR

    @property
    def is_staff(self) -> bool:
        """Instructors and admins."""
        return self.at_least(PrincipalKind.INSTRUCTOR)

    def at_least(self, kind: PrincipalKind) -> bool:
        return _RANK[self.kind] >= _RANK[kind]
