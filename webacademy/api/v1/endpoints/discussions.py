"""
Discussion threads.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_request_context
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.schemas.discussion import (
    DiscussionCreate,
    DiscussionRead,
    DiscussionUpdate,
    ReplyCreate,
    ReplyRead,
)
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.discussions import DiscussionService

router = APIRouter()


@router.get("", response_model=Union[List[DiscussionRead], Page[DiscussionRead]])
async def list_discussions(
    course_id: Optional[UUID] = Query(None),
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Pinned threads first, then the most recent."""
    items, total = await DiscussionService(db).list(course_id, search, params)
    return paginated([DiscussionRead.model_validate(d) for d in items], total, params)


@router.get("/{discussion_id}", response_model=DiscussionRead)
async def get_discussion(
    discussion_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    return DiscussionRead.model_validate(await DiscussionService(db).get(discussion_id))


@router.post("", response_model=DiscussionRead, status_code=status.HTTP_201_CREATED)
async def create_discussion(
    payload: DiscussionCreate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    return DiscussionRead.model_validate(await DiscussionService(db).create(ctx, payload))


@router.put("/{discussion_id}", response_model=DiscussionRead)
async def update_discussion(
    discussion_id: UUID,
    payload: DiscussionUpdate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    discussion = await DiscussionService(db).update(ctx, discussion_id, payload)
    return DiscussionRead.model_validate(discussion)


@router.delete("/{discussion_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_discussion(
    discussion_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    await DiscussionService(db).delete(ctx, discussion_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{discussion_id}/replies", response_model=ReplyRead, status_code=status.HTTP_201_CREATED)
async def add_reply(
    discussion_id: UUID,
    payload: ReplyCreate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    reply = await DiscussionService(db).add_reply(ctx, discussion_id, payload)
    return ReplyRead.model_validate(reply)
