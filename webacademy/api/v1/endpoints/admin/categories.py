"""
Admin category management.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.schemas.taxonomy import CategoryCreate, CategoryRead, CategoryUpdate
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.categories import CategoryService

router = APIRouter()


@router.get("", response_model=Union[List[CategoryRead], Page[CategoryRead]])
async def list_categories(
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    """Categories of the caller's institute plus global ones."""
    items, total = await CategoryService(db).list(ctx, search, params)
    return paginated([CategoryRead.model_validate(c) for c in items], total, params)


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(
    category_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return CategoryRead.model_validate(await CategoryService(db).get(ctx, category_id))


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    return CategoryRead.model_validate(await CategoryService(db).create(ctx, payload))


@router.put("/{category_id}", response_model=CategoryRead)
async def update_category(
    category_id: UUID,
    payload: CategoryUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    category = await CategoryService(db).update(ctx, category_id, payload)
    return CategoryRead.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    await CategoryService(db).delete(ctx, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
