"""
Client-address rate limiting for the authentication endpoints.

Backed by slowapi with a moving window, stored in memory or in Redis
depending on RATE_LIMIT_STORAGE_URI.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from webacademy.core.config import settings

RATE_LIMIT_MESSAGE = "Trop de tentatives. Réessayez dans 15 minutes."


def create_rate_limiter() -> Limiter:
    return Limiter(
        key_func=get_remote_address,
        strategy="moving-window",
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        enabled=settings.RATE_LIMIT_ENABLED,
        headers_enabled=False,
    )


limiter = create_rate_limiter()
