"""
User schemas.
"""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from webacademy.core.config import settings
from webacademy.domain.constants import Institute, Niveau, UserRole
from webacademy.domain.schemas.common import InputModel, NonEmptyStr, TimestampedRead


class UserRead(TimestampedRead):
    name: str
    email: str
    role: str
    institute: Optional[str] = None
    filiere: Optional[str] = None
    niveau: Optional[str] = None
    student_number: Optional[str] = None
    identity_verified: bool
    phone: Optional[str] = None
    address: Optional[str] = None


class UserCreate(InputModel):
    """User created by an administrator."""
    name: NonEmptyStr
    email: EmailStr
    password: str = Field(..., min_length=settings.PASSWORD_MIN_LENGTH)
    role: UserRole = UserRole.INSTRUCTOR
    institute: Optional[Institute] = None
    filiere: Optional[str] = None
    niveau: Optional[Niveau] = None
    student_number: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class UserUpdate(InputModel):
    """
    Administrative update. Password and verification state are not part of
    this payload.
    """
    name: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    institute: Optional[Institute] = None
    filiere: Optional[str] = None
    niveau: Optional[Niveau] = None
    student_number: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class VerifyIdentityResponse(BaseModel):
    id: UUID
    identity_verified: bool
    message: str
