"""
News, guide and outil schemas.
"""
from typing import Optional

from pydantic import AliasChoices, Field

from webacademy.domain.constants import Institute, PublicationStatus
from webacademy.domain.schemas.common import InputModel, NonEmptyStr, TimestampedRead, UserSummary


class NewsRead(TimestampedRead):
    institute: Optional[str] = None
    title: str
    content: str
    image: Optional[str] = None
    status: str
    created_by: Optional[UserSummary] = Field(
        default=None, validation_alias=AliasChoices("creator", "created_by")
    )


class NewsCreate(InputModel):
    title: NonEmptyStr
    content: NonEmptyStr
    image: Optional[str] = None
    status: PublicationStatus = PublicationStatus.DRAFT
    institute: Optional[Institute] = None


class NewsUpdate(InputModel):
    title: Optional[NonEmptyStr] = None
    content: Optional[NonEmptyStr] = None
    image: Optional[str] = None
    status: Optional[PublicationStatus] = None


class GuideRead(TimestampedRead):
    title: str
    content: str
    institute: Optional[str] = None
    order: int = 0
    status: str


class GuideCreate(InputModel):
    title: NonEmptyStr
    content: NonEmptyStr
    order: int = 0
    status: PublicationStatus = PublicationStatus.PUBLISHED
    institute: Optional[Institute] = None


class GuideUpdate(InputModel):
    title: Optional[NonEmptyStr] = None
    content: Optional[NonEmptyStr] = None
    order: Optional[int] = None
    status: Optional[PublicationStatus] = None


class OutilRead(TimestampedRead):
    title: str
    description: str = ""
    url: str
    institute: Optional[str] = None
    order: int = 0


class OutilCreate(InputModel):
    title: NonEmptyStr
    url: NonEmptyStr
    description: str = ""
    order: int = 0
    institute: Optional[Institute] = None


class OutilUpdate(InputModel):
    title: Optional[NonEmptyStr] = None
    url: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    order: Optional[int] = None
