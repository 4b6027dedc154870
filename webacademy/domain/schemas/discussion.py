"""
Discussion schemas.
"""
from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import AliasChoices, Field, model_validator

from webacademy.domain.constants import STAFF_ROLES
from webacademy.domain.schemas.common import (
    CourseSummary,
    InputModel,
    NonEmptyStr,
    ORMModel,
    TimestampedRead,
    UserSummary,
)


class ReplyRead(ORMModel):
    id: UUID
    discussion_id: UUID
    content: str
    author: Optional[UserSummary] = None
    is_instructor: bool = False
    created_at: datetime

    @model_validator(mode="before")
    @classmethod
    def derive_instructor_flag(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return data
        author = getattr(data, "author", None)
        return {
            "id": data.id,
            "discussion_id": data.discussion_id,
            "content": data.content,
            "author": author,
            "is_instructor": author is not None and author.role in STAFF_ROLES,
            "created_at": data.created_at,
        }


class DiscussionRead(TimestampedRead):
    title: str
    content: str
    is_pinned: bool
    course_id: Optional[UUID] = None
    course: Optional[CourseSummary] = None
    author: Optional[UserSummary] = Field(
        default=None, validation_alias=AliasChoices("author", "user")
    )
    replies: List[ReplyRead] = []


class DiscussionCreate(InputModel):
    title: NonEmptyStr
    content: NonEmptyStr
    course_id: Optional[UUID] = None
    is_pinned: bool = False


class DiscussionUpdate(InputModel):
    title: Optional[NonEmptyStr] = None
    content: Optional[NonEmptyStr] = None
    course_id: Optional[UUID] = None
    is_pinned: Optional[bool] = None


class ReplyCreate(InputModel):
    content: NonEmptyStr
