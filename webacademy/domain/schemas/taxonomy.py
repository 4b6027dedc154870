"""
Category and filiere schemas.
"""
from typing import Optional

from webacademy.domain.constants import Institute
from webacademy.domain.schemas.common import InputModel, NonEmptyStr, TimestampedRead


class CategoryRead(TimestampedRead):
    institute: Optional[str] = None
    name: str
    description: str = ""
    order: int = 0


class CategoryCreate(InputModel):
    name: NonEmptyStr
    description: str = ""
    order: int = 0
    institute: Optional[Institute] = None


class CategoryUpdate(InputModel):
    name: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    order: Optional[int] = None
    institute: Optional[Institute] = None


class FiliereRead(TimestampedRead):
    institute: str
    name: str
    order: int = 0


class FiliereCreate(InputModel):
    name: NonEmptyStr
    order: int = 0
    institute: Optional[Institute] = None


class FiliereUpdate(InputModel):
    name: Optional[NonEmptyStr] = None
    order: Optional[int] = None
