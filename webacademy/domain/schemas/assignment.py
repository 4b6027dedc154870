"""
Instructor assignment schemas.
"""
from typing import Optional
from uuid import UUID

from pydantic import Field

from webacademy.domain.constants import Institute, Semester
from webacademy.domain.schemas.common import CourseSummary, InputModel, TimestampedRead, UserSummary


class AssignmentRead(TimestampedRead):
    user_id: UUID
    course_id: UUID
    user: Optional[UserSummary] = None
    course: Optional[CourseSummary] = None
    institute: str
    semester: str
    academic_year: int


class AssignmentCreate(InputModel):
    user_id: UUID
    course_id: UUID
    institute: Institute
    semester: Semester
    academic_year: int = Field(..., ge=1900, le=2200)


class AssignmentUpdate(InputModel):
    user_id: Optional[UUID] = None
    course_id: Optional[UUID] = None
    institute: Optional[Institute] = None
    semester: Optional[Semester] = None
    academic_year: Optional[int] = Field(default=None, ge=1900, le=2200)
