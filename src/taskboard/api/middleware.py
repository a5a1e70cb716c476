"""HTTP middleware stack."""

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from src.taskboard.core.config import Settings
from src.taskboard.core.health import OPERATIONAL_PATHS
from src.taskboard.core.logging import bind_request_context, clear_request_context
from src.taskboard.core.security import SecurityHeadersMiddleware, csp_for_environment
from src.taskboard.core.shutdown import request_tracker


class RequestContextMiddleware:
    """Binds request_id to the log context and counts the request as in flight.

    Operational endpoints are not counted so probes never hold up a drain.
    WebSocket and lifespan scopes pass straight through.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            if scope["path"] in OPERATIONAL_PATHS:
                await self.app(scope, receive, send)
            else:
                async with request_tracker.track_request():
                    await self.app(scope, receive, send)
        finally:
            clear_request_context()


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Install the middleware stack.

    Each ``add_middleware`` wraps the previous ones, so they are added
    innermost first and CorrelationIdMiddleware ends up outermost.
    """
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=csp_for_environment(settings.app_env),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware)
