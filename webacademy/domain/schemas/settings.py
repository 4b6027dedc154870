"""
Platform settings and dashboard schemas.
"""
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from webacademy.domain.constants import MAX_UPLOAD_SIZE_MB, MIN_UPLOAD_SIZE_MB, Semester
from webacademy.domain.schemas.common import InputModel, ORMModel, UserSummary


class PublicSettings(ORMModel):
    current_semester: str
    current_academic_year: int


class SettingsRead(PublicSettings):
    max_upload_size_mb: int


class SettingsUpdate(InputModel):
    current_semester: Optional[Semester] = None
    current_academic_year: Optional[int] = Field(default=None, ge=1900, le=2200)
    max_upload_size_mb: Optional[int] = Field(
        default=None, ge=MIN_UPLOAD_SIZE_MB, le=MAX_UPLOAD_SIZE_MB
    )


class RecentCourse(BaseModel):
    id: UUID
    title: str
    category: str
    created_by: Optional[UserSummary] = None


class CategoryCount(BaseModel):
    id: UUID
    name: str
    course_count: int


class DashboardStats(BaseModel):
    total_students: int
    new_students_this_month: int
    total_instructors: int
    total_courses: int
    recent_courses: List[RecentCourse]
    categories: List[CategoryCount]
