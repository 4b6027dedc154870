"""
Shared schema bases and nested summaries.
"""
from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, StringConstraints

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TimeOfDay = Annotated[str, StringConstraints(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]


class ORMModel(BaseModel):
    """Response model read from ORM objects."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class InputModel(BaseModel):
    """Request body: unknown fields are dropped, enums stored by value."""
    model_config = ConfigDict(extra="ignore", use_enum_values=True)


class TimestampedRead(ORMModel):
    id: UUID
    created_at: datetime
    updated_at: datetime


class UserSummary(ORMModel):
    id: UUID
    name: str
    email: str


class CourseSummary(ORMModel):
    id: UUID
    title: str
    filiere: Optional[str] = None
    niveau: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
