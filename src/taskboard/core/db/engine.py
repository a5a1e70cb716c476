"""Async engine singleton.

PostgreSQL (asyncpg) is the production backend. SQLite (aiosqlite) URLs are
accepted for local runs and the test suite; pool sizing and the asyncpg
connect arguments only apply to PostgreSQL.
"""

import ssl
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.taskboard.core.config import Settings, get_settings

_engine: AsyncEngine | None = None


def _ssl_context(ssl_mode: str) -> ssl.SSLContext | None:
    if ssl_mode == "disable":
        return None
    context = ssl.create_default_context()
    if ssl_mode in ("prefer", "require"):
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    else:
        context.check_hostname = ssl_mode == "verify-full"
        context.verify_mode = ssl.CERT_REQUIRED
    return context


def engine_options(settings: Settings) -> dict[str, Any]:
    """Keyword arguments for ``create_async_engine`` for the configured URL."""
    if make_url(settings.database_url).get_backend_name() != "postgresql":
        return {}

    connect_args: dict[str, Any] = {"statement_cache_size": settings.database_statement_cache_size}
    context = _ssl_context(settings.database_ssl_mode)
    if context is not None:
        connect_args["ssl"] = context

    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_pre_ping": True,
        "connect_args": connect_args,
    }


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, **engine_options(settings))
    return _engine


def set_engine(engine: AsyncEngine | None) -> None:
    """Replace the engine singleton (used by tests and tooling)."""
    global _engine
    _engine = engine


async def dispose_engine() -> None:
    """Dispose the engine. Called from the application lifespan on shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
