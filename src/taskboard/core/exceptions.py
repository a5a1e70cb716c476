"""Domain error taxonomy and the handlers that render it with request_id."""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)


class TaskboardError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: Any = None):
        self.detail = detail if detail is not None else self.default_detail
        super().__init__(str(self.detail))


class AuthenticationError(TaskboardError):
    """Missing, malformed, expired or unverifiable credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class AuthorizationError(TaskboardError):
    """Valid identity whose role is not in the operation's capability set."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Insufficient permissions"


class NotFoundError(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class ConflictError(TaskboardError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class ValidationError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class StorageError(TaskboardError):
    """The underlying persistence layer failed on a load-bearing write."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Storage failure"


class NotificationError(TaskboardError):
    """Email or real-time delivery failed.

    Raised and caught inside side-effect boundaries; never rendered to callers.
    """


def _error_response(
    status_code: int, detail: Any, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(TaskboardError)
    async def taskboard_exception_handler(request: Request, exc: TaskboardError) -> JSONResponse:
        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                error_type=type(exc).__name__,
                error=str(exc),
                path=request.url.path,
            )
        return _error_response(exc.status_code, exc.detail, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail, getattr(exc, "headers", None))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail, exc.headers)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
