from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.taskboard.api.middleware import setup_middleware
from src.taskboard.api.v1.router import api_router
from src.taskboard.core.config import get_settings
from src.taskboard.core.db import dispose_engine
from src.taskboard.core.exceptions import setup_exception_handlers
from src.taskboard.core.health import setup_health_endpoint, setup_metrics
from src.taskboard.core.logging import get_logger, setup_logging
from src.taskboard.core.rate_limit import limiter
from src.taskboard.core.shutdown import request_tracker

logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "auth", "description": "Registration and login"},
    {"name": "users", "description": "Own profile and user directory"},
    {"name": "teams", "description": "Teams and membership"},
    {"name": "projects", "description": "Projects within teams"},
    {"name": "tasks", "description": "Task lifecycle and project activity"},
    {"name": "admin", "description": "Admin-only management and analytics"},
    {"name": "realtime", "description": "WebSocket task events per project"},
    {"name": "operations", "description": "Health and metrics"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, app_env=settings.app_env)

    yield

    await request_tracker.start_shutdown()
    if not await request_tracker.wait_for_drain(timeout=settings.shutdown_grace_period):
        logger.warning(
            "Shutdown grace period elapsed",
            grace_period=settings.shutdown_grace_period,
            in_flight=request_tracker.in_flight_count,
        )

    # Sockets go last so in-flight requests can still publish to them
    closed = await request_tracker.close_sockets()
    await dispose_engine()
    logger.info("Shutdown complete", websockets_closed=closed)


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Team, project and task collaboration API with real-time updates",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middleware(app, settings)
    app.include_router(api_router)
    setup_metrics(app, settings)
    setup_health_endpoint(app)

    return app


app = create_app()
