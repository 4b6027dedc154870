"""
Student guides.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context, get_optional_context
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.schemas.content import GuideCreate, GuideRead, GuideUpdate
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.content import GuideService

router = APIRouter()


@router.get("", response_model=Union[List[GuideRead], Page[GuideRead]])
async def list_guides(
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_optional_context),
    db: AsyncSession = Depends(get_db),
):
    items, total = await GuideService(db).list(ctx, search, params)
    return paginated([GuideRead.model_validate(g) for g in items], total, params)


@router.get("/{guide_id}", response_model=GuideRead)
async def get_guide(
    guide_id: UUID,
    ctx: RequestContext = Depends(get_optional_context),
    db: AsyncSession = Depends(get_db),
):
    return GuideRead.model_validate(await GuideService(db).get(ctx, guide_id))


@router.post("", response_model=GuideRead, status_code=status.HTTP_201_CREATED)
async def create_guide(
    payload: GuideCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return GuideRead.model_validate(await GuideService(db).create(ctx, payload))


@router.put("/{guide_id}", response_model=GuideRead)
async def update_guide(
    guide_id: UUID,
    payload: GuideUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return GuideRead.model_validate(await GuideService(db).update(ctx, guide_id, payload))


@router.delete("/{guide_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_guide(
    guide_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    await GuideService(db).delete(ctx, guide_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
