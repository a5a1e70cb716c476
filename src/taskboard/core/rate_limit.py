"""Rate limiting for credential endpoints.

Limits are kept in process memory. Disabled in the testing environment.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.taskboard.core.config import get_settings
from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Generate rate limit key from client IP only.

    Never include user-controlled headers in the key; rotating them would
    create unlimited buckets.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the slowapi limiter (disabled when APP_ENV=testing)."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    logger.info("Rate limiter using in-memory backend")
    return Limiter(key_func=get_rate_limit_key)


# Reads settings at import time; reconfiguration requires a restart
limiter = create_limiter()
