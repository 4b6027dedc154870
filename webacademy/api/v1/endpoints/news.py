"""
Institute news.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context, get_optional_context
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.constants import Institute, PublicationStatus
from webacademy.domain.schemas.content import NewsCreate, NewsRead, NewsUpdate
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.content import NewsService

router = APIRouter()


@router.get("", response_model=Union[List[NewsRead], Page[NewsRead]])
async def list_news(
    institute: Optional[Institute] = Query(None),
    status_filter: Optional[PublicationStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_optional_context),
    db: AsyncSession = Depends(get_db),
):
    items, total = await NewsService(db).list(
        ctx,
        institute=institute.value if institute else None,
        status=status_filter.value if status_filter else None,
        search=search,
        params=params,
    )
    return paginated([NewsRead.model_validate(n) for n in items], total, params)


@router.get("/{news_id}", response_model=NewsRead)
async def get_news(
    news_id: UUID,
    ctx: RequestContext = Depends(get_optional_context),
    db: AsyncSession = Depends(get_db),
):
    return NewsRead.model_validate(await NewsService(db).get(ctx, news_id))


@router.post("", response_model=NewsRead, status_code=status.HTTP_201_CREATED)
async def create_news(
    payload: NewsCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return NewsRead.model_validate(await NewsService(db).create(ctx, payload))


@router.put("/{news_id}", response_model=NewsRead)
async def update_news(
    news_id: UUID,
    payload: NewsUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return NewsRead.model_validate(await NewsService(db).update(ctx, news_id, payload))


@router.delete("/{news_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_news(
    news_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    await NewsService(db).delete(ctx, news_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
