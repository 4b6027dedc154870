"""
Web Academy API - Main application entry point.
"""
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from structlog.contextvars import bind_contextvars, clear_contextvars

from webacademy.api.v1.endpoints import uploads
from webacademy.api.v1.router import api_router
from webacademy.core.config import settings
from webacademy.core.exceptions import WebAcademyException
from webacademy.core.logging import request_log_context, setup_logging
from webacademy.infrastructure.database.base import Base, engine
from webacademy.services.security.rate_limiter import RATE_LIMIT_MESSAGE, limiter

setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    """
    logger.info(
        "application_starting",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    # Production schemas are managed outside the application
    if settings.is_development or settings.is_sqlite:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    yield

    logger.info("application_stopping")
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json" if not settings.is_production else None,
    docs_url=f"{settings.API_PREFIX}/docs" if not settings.is_production else None,
    redoc_url=None,
    lifespan=lifespan,
)
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Access log line with timing; request_id comes from the bound context."""
    start = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request_completed",
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - start) * 1000, 2),
        **request_log_context(request),
    )
    return response


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex

    clear_contextvars()
    bind_contextvars(request_id=request_id)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(WebAcademyException)
async def webacademy_exception_handler(request: Request, exc: WebAcademyException):
    if exc.status_code >= 500:
        logger.error("request_failed", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body and query validation failures answer 400 with the first message."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Données invalides")
    detail = f"{field}: {message}" if field else message
    logger.info("request_validation_failed", path=request.url.path, errors=len(errors))
    return JSONResponse(status_code=400, content={"detail": detail})


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("rate_limit_exceeded", limit=str(exc.detail), **request_log_context(request))
    return JSONResponse(status_code=429, content={"detail": RATE_LIMIT_MESSAGE})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        path=request.url.path,
        method=request.method,
    )

    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Erreur serveur"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.include_router(api_router, prefix=settings.API_PREFIX)
app.include_router(uploads.router, prefix="/uploads", tags=["uploads"])


@app.get("/")
async def root() -> Dict[str, Any]:
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": f"{settings.API_PREFIX}/docs" if not settings.is_production else None,
    }
