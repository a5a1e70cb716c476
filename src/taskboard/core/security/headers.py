"""Security headers middleware (Helmet-style)."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

# Swagger UI needs inline scripts and CDN assets
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "img-src 'self' data: cdn.jsdelivr.net; "
    "frame-ancestors 'none'"
)
PRODUCTION_CSP = "default-src 'self'; frame-ancestors 'none'"


def csp_for_environment(app_env: str) -> str:
    """Pick the Content-Security-Policy for the running environment."""
    return PRODUCTION_CSP if app_env == "production" else DOCS_CSP


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds a fixed set of security headers to every HTTP response."""

    def __init__(
        self,
        app: ASGIApp,
        content_security_policy: str = DOCS_CSP,
        strict_transport_security: str | None = "max-age=31536000; includeSubDomains",
    ):
        super().__init__(app)
        self.headers: dict[str, str] = {
            "Content-Security-Policy": content_security_policy,
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
        }
        if strict_transport_security:
            self.headers["Strict-Transport-Security"] = strict_transport_security

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header, value in self.headers.items():
            response.headers.setdefault(header, value)
        return response
