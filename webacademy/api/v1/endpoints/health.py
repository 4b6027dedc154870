"""
Liveness endpoint.
"""
from fastapi import APIRouter

from webacademy.core.config import settings

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok", "app": settings.APP_NAME, "environment": settings.ENVIRONMENT}
