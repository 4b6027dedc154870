"""
Timetable and evaluation calendar schemas.
"""
from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import Field

from webacademy.domain.constants import DayOfWeek, EvaluationType, Institute, Niveau, Semester
from webacademy.domain.schemas.common import (
    CourseSummary,
    InputModel,
    NonEmptyStr,
    TimeOfDay,
    TimestampedRead,
)


class TimetableRead(TimestampedRead):
    institute: Optional[str] = None
    filiere: Optional[str] = None
    niveau: Optional[str] = None
    course_id: UUID
    course: Optional[CourseSummary] = None
    day_of_week: str
    start_time: str
    end_time: str
    room: Optional[str] = None
    instructor: Optional[str] = None
    semester: Optional[str] = None
    academic_year: Optional[int] = None


class TimetableCreate(InputModel):
    course_id: UUID
    start_time: TimeOfDay
    end_time: TimeOfDay
    day_of_week: DayOfWeek = DayOfWeek.MONDAY
    institute: Optional[Institute] = None
    filiere: Optional[str] = None
    niveau: Optional[Niveau] = None
    room: Optional[str] = None
    instructor: Optional[str] = None
    semester: Optional[Semester] = None
    academic_year: Optional[int] = Field(default=None, ge=1900, le=2200)


class TimetableUpdate(InputModel):
    course_id: Optional[UUID] = None
    start_time: Optional[TimeOfDay] = None
    end_time: Optional[TimeOfDay] = None
    day_of_week: Optional[DayOfWeek] = None
    filiere: Optional[str] = None
    niveau: Optional[Niveau] = None
    room: Optional[str] = None
    instructor: Optional[str] = None
    semester: Optional[Semester] = None
    academic_year: Optional[int] = Field(default=None, ge=1900, le=2200)


class EvaluationCalendarRead(TimestampedRead):
    title: str
    description: Optional[str] = None
    institute: Optional[str] = None
    filiere: Optional[str] = None
    niveau: Optional[str] = None
    evaluation_date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    type: str
    course_id: Optional[UUID] = None
    course: Optional[CourseSummary] = None
    semester: Optional[str] = None
    academic_year: Optional[int] = None


class EvaluationCalendarCreate(InputModel):
    title: NonEmptyStr
    evaluation_date: date
    description: Optional[str] = None
    institute: Optional[Institute] = None
    filiere: Optional[str] = None
    niveau: Optional[Niveau] = None
    start_time: Optional[TimeOfDay] = None
    end_time: Optional[TimeOfDay] = None
    location: Optional[str] = None
    type: EvaluationType = EvaluationType.EXAM
    course_id: Optional[UUID] = None
    semester: Optional[Semester] = None
    academic_year: Optional[int] = Field(default=None, ge=1900, le=2200)


class EvaluationCalendarUpdate(InputModel):
    title: Optional[NonEmptyStr] = None
    evaluation_date: Optional[date] = None
    description: Optional[str] = None
    filiere: Optional[str] = None
    niveau: Optional[Niveau] = None
    start_time: Optional[TimeOfDay] = None
    end_time: Optional[TimeOfDay] = None
    location: Optional[str] = None
    type: Optional[EvaluationType] = None
    course_id: Optional[UUID] = None
    semester: Optional[Semester] = None
    academic_year: Optional[int] = Field(default=None, ge=1900, le=2200)
