"""
Admin user management.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.dependencies import get_admin_context, get_notifier
from webacademy.core.pagination import Page, PageParams, page_params, paginated
from webacademy.domain.constants import UserRole
from webacademy.domain.schemas.user import UserCreate, UserRead, UserUpdate, VerifyIdentityResponse
from webacademy.infrastructure.database.base import get_db
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.notifications import NotificationService
from webacademy.services.users import IDENTITY_CONFIRMED, UserService

router = APIRouter()


def get_user_service(
    db: AsyncSession = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
) -> UserService:
    return UserService(db, notifier)


@router.get("", response_model=Union[List[UserRead], Page[UserRead]])
async def list_users(
    role: Optional[UserRole] = Query(None),
    search: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    ctx: RequestContext = Depends(get_admin_context),
    service: UserService = Depends(get_user_service),
):
    items, total = await service.list(ctx, role, search, params)
    return paginated([UserRead.model_validate(u) for u in items], total, params)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    service: UserService = Depends(get_user_service),
):
    return UserRead.model_validate(await service.get(ctx, user_id))


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    ctx: RequestContext = Depends(get_admin_context),
    service: UserService = Depends(get_user_service),
):
    return UserRead.model_validate(await service.create(ctx, payload))


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: UUID,
    payload: UserUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    service: UserService = Depends(get_user_service),
):
    return UserRead.model_validate(await service.update(ctx, user_id, payload))


@router.put("/{user_id}/verify-identity", response_model=VerifyIdentityResponse)
async def verify_identity(
    user_id: UUID,
    background: BackgroundTasks,
    ctx: RequestContext = Depends(get_admin_context),
    service: UserService = Depends(get_user_service),
):
    """Confirm a student's identity; the student is notified by email."""
    user = await service.verify_identity(ctx, user_id, background)
    return VerifyIdentityResponse(id=user.id, identity_verified=user.identity_verified, message=IDENTITY_CONFIRMED)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    ctx: RequestContext = Depends(get_admin_context),
    service: UserService = Depends(get_user_service),
):
    await service.delete(ctx, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
