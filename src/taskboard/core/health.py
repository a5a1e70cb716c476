"""Operational endpoints: /health (database check, cached) and /metrics."""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.taskboard.core.config import Settings
from src.taskboard.core.db import get_session
from src.taskboard.core.exceptions import AuthenticationError
from src.taskboard.core.shutdown import request_tracker

HEALTH_CACHE_TTL = 10  # seconds
OPERATIONAL_PATHS = ["/health", "/metrics"]


class HealthCache:
    """Keeps the last health report for ``ttl`` seconds."""

    def __init__(self, ttl: float = HEALTH_CACHE_TTL):
        self.ttl = ttl
        self._report: dict[str, Any] | None = None
        self._checked_at = 0.0

    def get(self, now: float) -> dict[str, Any] | None:
        if self._report is None or now - self._checked_at >= self.ttl:
            return None
        return {
            **self._report,
            "cached": True,
            "cache_age_seconds": round(now - self._checked_at, 1),
        }

    def store(self, report: dict[str, Any], now: float) -> None:
        self._report = report
        self._checked_at = now

    def clear(self) -> None:
        self._report = None
        self._checked_at = 0.0


health_cache = HealthCache()


def reset_health_cache() -> None:
    """Reset health cache (for testing)."""
    health_cache.clear()


async def check_database() -> str:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        return f"unhealthy: {e}"
    return "healthy"


def _report_response(report: dict[str, Any]) -> JSONResponse:
    return JSONResponse(content=report, status_code=200 if report["status"] == "healthy" else 503)


def setup_health_endpoint(app: FastAPI) -> None:
    @app.get("/health", tags=["operations"])
    async def health() -> JSONResponse:
        """Database health, cached for HEALTH_CACHE_TTL seconds. 503 while draining."""
        if request_tracker.is_shutting_down:
            return JSONResponse(
                content={
                    "status": "draining",
                    "in_flight_requests": request_tracker.in_flight_count,
                    "message": "Server is shutting down",
                },
                status_code=503,
            )

        now = time.time()
        cached = health_cache.get(now)
        if cached is not None:
            return _report_response(cached)

        database = await check_database()
        report = {
            "status": "healthy" if database == "healthy" else "unhealthy",
            "database": database,
            "open_websockets": request_tracker.open_socket_count,
            "cached": False,
            "timestamp": now,
        }
        health_cache.store(report, now)
        return _report_response(report)


def setup_metrics(app: FastAPI, settings: Settings) -> None:
    """Expose Prometheus metrics, behind X-Metrics-Key when METRICS_API_KEY is set."""
    instrumentator = Instrumentator(excluded_handlers=OPERATIONAL_PATHS).instrument(app)

    dependencies = []
    expected_key = settings.metrics_api_key
    if expected_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def require_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if api_key is None or not secrets.compare_digest(api_key, expected_key):
                raise AuthenticationError("Invalid or missing metrics API key")

        dependencies.append(Depends(require_metrics_key))

    instrumentator.expose(app, endpoint="/metrics", dependencies=dependencies)
