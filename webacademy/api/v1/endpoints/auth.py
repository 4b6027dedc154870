"""
Registration, login, password reset and the caller's own profile.
"""
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.config import settings
from webacademy.core.dependencies import get_current_user, get_notifier
from webacademy.domain.schemas.auth import (
    AuthUser,
    CurrentUser,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MyAssignment,
    ProfileUpdate,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
)
from webacademy.domain.schemas.common import MessageResponse
from webacademy.infrastructure.database.base import get_db
from webacademy.infrastructure.database.models import User
from webacademy.services.auth.auth_service import PENDING_VERIFICATION, AuthService
from webacademy.services.auth.authorization.principal import Principal
from webacademy.services.auth.password_service import PasswordResetService
from webacademy.services.notifications import NotificationService
from webacademy.services.security.rate_limiter import limiter

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register(
    request: Request,
    payload: RegisterRequest,
    background: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
) -> RegisterResponse:
    """
    Register a student or an instructor.

    Students are created unverified and receive no token; an email tells them
    to wait for the administration.
    """
    user, token = await AuthService(db, notifier).register(payload, background)
    return RegisterResponse(
        token=token,
        user=AuthUser.model_validate(user),
        message=None if token else PENDING_VERIFICATION,
    )


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
) -> LoginResponse:
    user, token = await AuthService(db, notifier).login(payload.email, payload.password)
    return LoginResponse(token=token, user=AuthUser.model_validate(user))


@router.post("/forgot-password", response_model=MessageResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def forgot_password(
    request: Request,
    payload: ForgotPasswordRequest,
    background: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
) -> MessageResponse:
    """Always answers the same message, whether the email exists or not."""
    message = await PasswordResetService(db, notifier).request_password_reset(payload.email, background)
    return MessageResponse(message=message)


@router.post("/reset-password", response_model=MessageResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def reset_password(
    request: Request,
    payload: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
) -> MessageResponse:
    message = await PasswordResetService(db, notifier).reset_password(payload.token, payload.password)
    return MessageResponse(message=message)


@router.get("/user", response_model=CurrentUser)
async def current_user(user: User = Depends(get_current_user)) -> CurrentUser:
    return CurrentUser.model_validate(user)


@router.put("/profile", response_model=CurrentUser)
async def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
) -> CurrentUser:
    updated = await AuthService(db, notifier).update_profile(Principal.from_user(user), payload)
    return CurrentUser.model_validate(updated)


@router.get("/assignments", response_model=List[MyAssignment])
async def my_assignments(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
) -> List[MyAssignment]:
    """Course assignments of the calling instructor; empty for anyone else."""
    return await AuthService(db, notifier).my_assignments(Principal.from_user(user))
