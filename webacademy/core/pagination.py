"""
List pagination and free-text search helpers.

A list endpoint called without ``limit`` (or with ``limit=0``) returns a bare
JSON array; with a limit it returns ``{"data": [...], "total": n}``.
"""
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, TypeVar, Union

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from webacademy.core.config import settings

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    data: List[T]
    total: int


@dataclass(frozen=True)
class PageParams:
    limit: int = 0
    page: int = 1

    @property
    def enabled(self) -> bool:
        return self.limit > 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    limit: Optional[int] = Query(None, description="Page size; omit or 0 for the full list"),
    page: Optional[int] = Query(None, description="1-based page number"),
) -> PageParams:
    """FastAPI dependency clamping limit to [1, MAX_PAGE_SIZE] and page to >= 1."""
    if not limit:
        return PageParams(limit=0, page=1)
    return PageParams(
        limit=min(max(limit, 1), settings.MAX_PAGE_SIZE),
        page=max(page or 1, 1),
    )


def paginated(items: Sequence[T], total: int, params: PageParams) -> Union[List[T], Page[T]]:
    if params.enabled:
        return Page(data=list(items), total=total)
    return list(items)


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_clause(term: Optional[str], *columns) -> Optional[ColumnElement[bool]]:
    """Case-insensitive substring match of ``term`` over ``columns`` (OR)."""
    if not term or not term.strip():
        return None
    pattern = f"%{escape_like(term.strip())}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))
