"""
External tools (outils) linked from the platform.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context, get_optional_context
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.schemas.content import OutilCreate, OutilRead, OutilUpdate
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.content import OutilService

router = APIRouter()


@router.get("", response_model=Union[List[OutilRead], Page[OutilRead]])
async def list_outils(
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_optional_context),
    db: AsyncSession = Depends(get_db),
):
    items, total = await OutilService(db).list(ctx, search, params)
    return paginated([OutilRead.model_validate(o) for o in items], total, params)


@router.post("", response_model=OutilRead, status_code=status.HTTP_201_CREATED)
async def create_outil(
    payload: OutilCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return OutilRead.model_validate(await OutilService(db).create(ctx, payload))


@router.put("/{outil_id}", response_model=OutilRead)
async def update_outil(
    outil_id: UUID,
    payload: OutilUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return OutilRead.model_validate(await OutilService(db).update(ctx, outil_id, payload))


@router.delete("/{outil_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_outil(
    outil_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    await OutilService(db).delete(ctx, outil_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
