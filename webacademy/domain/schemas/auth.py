"""
Authentication and profile schemas.
"""
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from webacademy.core.config import settings
from webacademy.domain.constants import Institute, Niveau
from webacademy.domain.schemas.common import InputModel, NonEmptyStr, ORMModel


class RegisterRequest(InputModel):
    name: NonEmptyStr
    email: EmailStr
    password: str = Field(..., min_length=settings.PASSWORD_MIN_LENGTH)
    role: Optional[Literal["student", "etudiant", "formateur", "admin"]] = None
    institute: Optional[Institute] = None
    filiere: Optional[str] = None
    niveau: Optional[Niveau] = None
    student_number: Optional[str] = None


class LoginRequest(InputModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(InputModel):
    email: EmailStr


class ResetPasswordRequest(InputModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=settings.PASSWORD_MIN_LENGTH)


class AuthUser(ORMModel):
    id: UUID
    name: str
    email: str
    role: str
    filiere: Optional[str] = None
    niveau: Optional[str] = None
    student_number: Optional[str] = None
    institute: Optional[str] = None
    identity_verified: bool


class CurrentUser(AuthUser):
    phone: Optional[str] = None
    address: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    user: AuthUser


class RegisterResponse(BaseModel):
    """Token is omitted while a student waits for identity verification."""
    token: Optional[str] = None
    user: AuthUser
    message: Optional[str] = None


class ProfileUpdate(InputModel):
    name: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class MyAssignment(BaseModel):
    id: UUID
    institute: str
    semester: str
    academic_year: int
    course_id: Optional[UUID] = None
    course_title: str
