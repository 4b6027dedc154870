"""
Closed value sets shared by models, schemas and services.
"""
from enum import Enum


class Institute(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class Semester(str, Enum):
    S1 = "S1"
    S2 = "S2"


class Niveau(str, Enum):
    YEAR1 = "year1"
    YEAR2 = "year2"
    YEAR3 = "year3"


class UserRole(str, Enum):
    """Stored roles. An admin without institute is the super-admin."""
    ADMIN = "admin"
    INSTRUCTOR = "formateur"
    STUDENT = "etudiant"


class CourseStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class PublicationStatus(str, Enum):
    """Status of news and guides."""
    DRAFT = "draft"
    PUBLISHED = "published"


class ResourceType(str, Enum):
    IMAGE = "image"
    FILE = "file"


class EvaluationType(str, Enum):
    EXAM = "examen"
    TEST = "controle"
    PRACTICAL = "tp"
    PROJECT = "projet"


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"


DAY_ORDER = {day.value: index for index, day in enumerate(DayOfWeek)}

INSTITUTES = tuple(i.value for i in Institute)

DEFAULT_INSTITUTION_LABEL = "UCAO-UUT"
DEFAULT_SEMESTER = Semester.S1
DEFAULT_MAX_UPLOAD_SIZE_MB = 50
MIN_UPLOAD_SIZE_MB = 1
MAX_UPLOAD_SIZE_MB = 500

# Authors whose discussion replies are flagged as instructor answers
STAFF_ROLES = (UserRole.INSTRUCTOR.value, UserRole.ADMIN.value)
