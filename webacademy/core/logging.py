"""
Structured logging configuration using structlog.

Events are snake_case names with keyword context. Credentials never reach
the output: any key listed in ``REDACTED_KEYS`` is masked before rendering.
"""
import logging
import sys
from typing import Any, Dict, Optional

import structlog
from fastapi import Request

from webacademy.core.config import settings

REDACTED_KEYS = frozenset({"password", "new_password", "password_hash", "token", "reset_token", "authorization"})


def redact_credentials(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def setup_logging() -> None:
    """
    Configure structlog: console output in development, JSON lines elsewhere.
    """
    level = logging.DEBUG if settings.DEBUG else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    processors = [
        structlog.contextvars.merge_contextvars,
        redact_credentials,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.is_development:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def request_log_context(request: Request, user_id: Optional[str] = None) -> Dict[str, Any]:
    """Method, path and client address of a request, for access logs."""
    context: Dict[str, Any] = {"method": request.method, "path": request.url.path}
    if request.client:
        context["client_ip"] = request.client.host
    if user_id:
        context["user_id"] = user_id
    return context
