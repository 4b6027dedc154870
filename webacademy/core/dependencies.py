"""
Dependency injection for FastAPI.
"""
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import AuthenticationError, AuthorizationError, InvalidTokenError
from webacademy.core.security import decode_access_token
from webacademy.infrastructure.database.base import get_db
from webacademy.infrastructure.database.models import User
from webacademy.repositories.user import UserRepository
from webacademy.services.auth.authorization.principal import Principal
from webacademy.services.auth.authorization.tenant import RequestContext
from webacademy.services.notifications import NotificationService, get_notification_service
from webacademy.services.storage.uploads import UploadStorage, get_upload_storage

bearer_scheme = HTTPBearer(auto_error=False)


async def _user_from_token(token: str, db: AsyncSession) -> User:
    subject = decode_access_token(token)
    try:
        user_id = UUID(subject)
    except ValueError:
        raise InvalidTokenError()

    user = await UserRepository(db).get(user_id)
    if not user:
        raise AuthenticationError("Utilisateur non trouvé")
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get current authenticated user from the bearer token.

    Raises:
        AuthenticationError: Missing token, invalid token or unknown user
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Token manquant")
    return await _user_from_token(credentials.credentials, db)


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Same as get_current_user, but anonymous or invalid tokens yield None."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return await _user_from_token(credentials.credentials, db)
    except AuthenticationError:
        return None


async def get_request_context(
    user: User = Depends(get_current_user),
) -> RequestContext:
    return RequestContext.for_principal(Principal.from_user(user))


async def get_optional_context(
    user: Optional[User] = Depends(get_current_user_optional),
) -> RequestContext:
    if user is None:
        return RequestContext()
    return RequestContext.for_principal(Principal.from_user(user))


async def get_admin_context(
    ctx: RequestContext = Depends(get_request_context),
) -> RequestContext:
    if not ctx.is_admin:
        raise AuthorizationError("Accès refusé. Admin requis.")
    return ctx


def get_notifier() -> NotificationService:
    return get_notification_service()


def get_storage() -> UploadStorage:
    return get_upload_storage()
