"""Structured logging for the API and the WebSocket channel.

Every log call carries whatever request-scoped context has been bound via
contextvars: ``request_id`` for HTTP traffic and ``user_id``/``role`` once a
bearer token has been resolved.
"""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Event keys whose values must never reach a log sink
SECRET_KEYS = frozenset({"password", "hashed_password", "token", "access_token", "authorization"})
MASK = "***"

# Third-party loggers and the lowest level they may emit
_LIBRARY_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "websockets": logging.INFO,
}


def mask_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = MASK
    return event_dict


def setup_logging(debug: bool = False) -> None:
    """Configure structlog on top of stdlib logging.

    Args:
        debug: Colored console output when True, one JSON object per line otherwise.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )
    logging.captureWarnings(True)

    renderer: structlog.typing.Processor = (
        structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            mask_secrets,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name, level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_user_context(user_id: UUID, role: str, email: str | None = None) -> None:
    """Attach the authenticated identity to subsequent log calls.

    The email is only bound when ``log_user_emails`` is enabled.
    """
    from src.taskboard.core.config import get_settings

    bind_contextvars(user_id=str(user_id), role=role)
    if email and get_settings().log_user_emails:
        bind_contextvars(user_email=email)


def clear_request_context() -> None:
    clear_contextvars()
