"""
Course schemas.
"""
from typing import List, Optional
from uuid import UUID

from pydantic import AliasChoices, Field

from webacademy.domain.constants import CourseStatus, Institute, Niveau, Semester
from webacademy.domain.schemas.common import (
    InputModel,
    NonEmptyStr,
    ORMModel,
    TimestampedRead,
    UserSummary,
)


class ResourceRead(ORMModel):
    id: UUID
    name: str
    type: str
    url: str


class CourseRead(TimestampedRead):
    title: str
    category: str
    filiere: Optional[str] = None
    niveau: Optional[str] = None
    institute: Optional[str] = None
    semester: Optional[str] = None
    academic_year: Optional[int] = None
    institution: str
    description: str
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    status: str
    created_by: Optional[UserSummary] = Field(
        default=None, validation_alias=AliasChoices("creator", "created_by")
    )
    resources: List[ResourceRead] = []


class CourseCreate(InputModel):
    title: NonEmptyStr
    category: NonEmptyStr
    description: NonEmptyStr
    filiere: Optional[str] = None
    niveau: Optional[Niveau] = None
    institute: Optional[Institute] = None
    semester: Optional[Semester] = None
    academic_year: Optional[int] = Field(default=None, ge=1900, le=2200)
    institution: Optional[NonEmptyStr] = None
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    status: CourseStatus = CourseStatus.DRAFT


class CourseUpdate(InputModel):
    """Resources and creator are managed elsewhere and never patched."""
    title: Optional[NonEmptyStr] = None
    category: Optional[NonEmptyStr] = None
    description: Optional[NonEmptyStr] = None
    filiere: Optional[str] = None
    niveau: Optional[Niveau] = None
    institute: Optional[Institute] = None
    semester: Optional[Semester] = None
    academic_year: Optional[int] = Field(default=None, ge=1900, le=2200)
    institution: Optional[NonEmptyStr] = None
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    status: Optional[CourseStatus] = None
