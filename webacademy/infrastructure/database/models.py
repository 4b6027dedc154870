"""
Database models for Web Academy.

Institute-scoped tables carry an ``institute`` column; a null value marks a
global row (only meaningful for categories, news, guides and outils).
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from webacademy.domain.constants import (
    DEFAULT_INSTITUTION_LABEL,
    DEFAULT_MAX_UPLOAD_SIZE_MB,
    CourseStatus,
    DayOfWeek,
    EvaluationType,
    PublicationStatus,
    UserRole,
)
from webacademy.infrastructure.database.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Mixin for created_at and updated_at."""
    # Python-side defaults keep microsecond ordering on every backend
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class User(Base, TimestampMixin):
    """Account of a student, instructor or administrator."""
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    role = Column(String(20), default=UserRole.STUDENT.value, nullable=False, index=True)
    institute = Column(String(10), nullable=True, index=True)
    filiere = Column(String(255))
    niveau = Column(String(10))
    student_number = Column(String(100), unique=True, nullable=True)
    identity_verified = Column(Boolean, default=False, nullable=False)

    phone = Column(String(50))
    address = Column(String(500))

    password_reset_token = Column(String(64), nullable=True, index=True)
    password_reset_expires = Column(DateTime(timezone=True), nullable=True)


class Course(Base, TimestampMixin):
    """Course with its uploaded resources."""
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(500), nullable=False)
    category = Column(String(255), nullable=False)
    filiere = Column(String(255))
    niveau = Column(String(10))
    institute = Column(String(10), nullable=True, index=True)
    semester = Column(String(2))
    academic_year = Column(Integer)
    institution = Column(String(255), default=DEFAULT_INSTITUTION_LABEL, nullable=False)
    description = Column(Text, nullable=False)
    thumbnail = Column(String(1000))
    video_url = Column(String(1000))
    status = Column(String(20), default=CourseStatus.DRAFT.value, nullable=False, index=True)
    created_by_id = Column(Uuid, ForeignKey("user.id", ondelete="SET NULL"), nullable=True)

    creator = relationship("User", lazy="selectin")
    resources = relationship(
        "CourseResource",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CourseResource.created_at",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_course_filiere_niveau", "filiere", "niveau", "institution"),
        Index("idx_course_institute_term", "institute", "semester", "academic_year"),
    )


class CourseResource(Base, TimestampMixin):
    """File attached to a course."""
    __tablename__ = "course_resource"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    course_id = Column(Uuid, ForeignKey("course.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(500), nullable=False)
    type = Column(String(10), nullable=False)
    url = Column(String(1000), nullable=False)

    course = relationship("Course", back_populates="resources")


class InstructorAssignment(Base, TimestampMixin):
    """Grants an instructor edit rights on a course for one term."""
    __tablename__ = "instructor_assignment"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    course_id = Column(Uuid, ForeignKey("course.id", ondelete="CASCADE"), nullable=False)
    institute = Column(String(10), nullable=False)
    semester = Column(String(2), nullable=False)
    academic_year = Column(Integer, nullable=False)

    user = relationship("User", lazy="selectin")
    course = relationship("Course", lazy="selectin")

    __table_args__ = (
        Index("idx_assignment_term", "institute", "semester", "academic_year"),
        Index("idx_assignment_user", "user_id", "semester", "academic_year"),
        Index("idx_assignment_course", "course_id", "semester", "academic_year"),
    )


class Category(Base, TimestampMixin):
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    institute = Column(String(10), nullable=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, default="", nullable=False)
    order = Column(Integer, default=0, nullable=False)

    __table_args__ = (UniqueConstraint("institute", "name"),)


class Filiere(Base, TimestampMixin):
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    institute = Column(String(10), nullable=False)
    name = Column(String(255), nullable=False)
    order = Column(Integer, default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint("institute", "name"),
        Index("idx_filiere_institute_order", "institute", "order"),
    )


class News(Base, TimestampMixin):
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    institute = Column(String(10), nullable=True, index=True)
    created_by_id = Column(Uuid, ForeignKey("user.id", ondelete="SET NULL"), nullable=True)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    image = Column(String(1000))
    status = Column(String(20), default=PublicationStatus.DRAFT.value, nullable=False, index=True)

    creator = relationship("User", lazy="selectin")


class Guide(Base, TimestampMixin):
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    institute = Column(String(10), nullable=True, index=True)
    order = Column(Integer, default=0, nullable=False)
    status = Column(String(20), default=PublicationStatus.PUBLISHED.value, nullable=False)

    __table_args__ = (Index("idx_guide_status_order", "status", "order"),)


class Outil(Base, TimestampMixin):
    """External tool link."""
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(500), nullable=False)
    description = Column(Text, default="", nullable=False)
    url = Column(String(1000), nullable=False)
    institute = Column(String(10), nullable=True, index=True)
    order = Column(Integer, default=0, nullable=False)


class EvaluationCalendar(Base, TimestampMixin):
    """Scheduled exam, test, practical or project deadline."""
    __tablename__ = "evaluation_calendar"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(500), nullable=False)
    description = Column(Text)
    institute = Column(String(10), nullable=True)
    filiere = Column(String(255))
    niveau = Column(String(10))
    evaluation_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5))
    end_time = Column(String(5))
    location = Column(String(255))
    type = Column(String(20), default=EvaluationType.EXAM.value, nullable=False)
    course_id = Column(Uuid, ForeignKey("course.id", ondelete="SET NULL"), nullable=True)
    semester = Column(String(2))
    academic_year = Column(Integer)

    course = relationship("Course", lazy="selectin")

    __table_args__ = (
        Index("idx_calendar_scope", "institute", "filiere", "niveau"),
        Index("idx_calendar_term", "institute", "semester", "academic_year"),
    )


class Timetable(Base, TimestampMixin):
    """Weekly timetable slot."""
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    institute = Column(String(10), nullable=True)
    filiere = Column(String(255))
    niveau = Column(String(10))
    course_id = Column(Uuid, ForeignKey("course.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(String(10), default=DayOfWeek.MONDAY.value, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    room = Column(String(255))
    instructor = Column(String(255))
    semester = Column(String(2))
    academic_year = Column(Integer)

    course = relationship("Course", lazy="selectin")

    __table_args__ = (
        Index("idx_timetable_scope", "institute", "filiere", "niveau", "day_of_week"),
        Index("idx_timetable_term", "institute", "semester", "academic_year"),
    )


class Discussion(Base, TimestampMixin):
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    course_id = Column(Uuid, ForeignKey("course.id", ondelete="SET NULL"), nullable=True, index=True)
    author_id = Column(Uuid, ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    is_pinned = Column(Boolean, default=False, nullable=False)

    author = relationship("User", lazy="selectin")
    course = relationship("Course", lazy="selectin")
    # Replies are removed explicitly before the discussion itself
    replies = relationship(
        "DiscussionReply",
        order_by="DiscussionReply.created_at",
        lazy="selectin",
        viewonly=True,
    )

    __table_args__ = (Index("idx_discussion_pinned_created", "is_pinned", "created_at"),)


class DiscussionReply(Base, TimestampMixin):
    __tablename__ = "discussion_reply"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    discussion_id = Column(Uuid, ForeignKey("discussion.id"), nullable=False, index=True)
    author_id = Column(Uuid, ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)

    author = relationship("User", lazy="selectin")


class PlatformSettings(Base, TimestampMixin):
    """Singleton row holding the current term and upload policy."""
    __tablename__ = "platform_settings"

    id = Column(Integer, primary_key=True, default=1)
    current_semester = Column(String(2), nullable=False)
    current_academic_year = Column(Integer, nullable=False)
    max_upload_size_mb = Column(Integer, default=DEFAULT_MAX_UPLOAD_SIZE_MB, nullable=False)
