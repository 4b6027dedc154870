"""
Admin filiere management.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.constants import Institute
from webacademy.domain.schemas.taxonomy import FiliereCreate, FiliereRead, FiliereUpdate
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.filieres import FiliereService

router = APIRouter()


@router.get("", response_model=Union[List[FiliereRead], Page[FiliereRead]])
async def list_filieres(
    institute: Optional[Institute] = Query(None),
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    items, total = await FiliereService(db).list(
        ctx, institute.value if institute else None, search, params
    )
    return paginated([FiliereRead.model_validate(f) for f in items], total, params)


@router.get("/{filiere_id}", response_model=FiliereRead)
async def get_filiere(
    filiere_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return FiliereRead.model_validate(await FiliereService(db).get(ctx, filiere_id))


@router.post("", response_model=FiliereRead, status_code=status.HTTP_201_CREATED)
async def create_filiere(
    payload: FiliereCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return FiliereRead.model_validate(await FiliereService(db).create(ctx, payload))


@router.put("/{filiere_id}", response_model=FiliereRead)
async def update_filiere(
    filiere_id: UUID,
    payload: FiliereUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return FiliereRead.model_validate(await FiliereService(db).update(ctx, filiere_id, payload))


@router.delete("/{filiere_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_filiere(
    filiere_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    await FiliereService(db).delete(ctx, filiere_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
