# =============================================================================
# app/middleware/security.py - Security Headers Stage
# =============================================================================
# Runs the rest of the chain, then stamps a fixed set of security headers
# on whatever comes back, preflight answers included.
#
# Exceptions no route converted are turned into the INTERNAL_ERROR response
# here. Left to Starlette they would be answered by ServerErrorMiddleware,
# outside this stage, without the headers.
# =============================================================================

from dataclasses import dataclass

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.exceptions import unhandled_exception_handler

DEFAULT_CONTENT_SECURITY_POLICY = "; ".join([
    "default-src 'self'",
    "script-src 'self' 'unsafe-inline' 'unsafe-eval'",
    "style-src 'self' 'unsafe-inline'",
    "img-src 'self' data: https:",
    "font-src 'self' data:",
    "connect-src 'self'",
    "frame-ancestors 'none'",
    "base-uri 'self'",
    "form-action 'self'",
])

DEFAULT_PERMISSIONS_POLICY = ", ".join([
    "camera=()",
    "microphone=()",
    "geolocation=()",
    "payment=()",
    "usb=()",
    "magnetometer=()",
    "gyroscope=()",
    "accelerometer=()",
])


@dataclass(frozen=True)
class SecurityConfig:
    """Header values. Defaults deny framing and enable one-year HSTS with preload."""
    content_security_policy: str = DEFAULT_CONTENT_SECURITY_POLICY
    x_frame_options: str = "DENY"
    x_content_type_options: str = "nosniff"
    x_xss_protection: str = "1; mode=block"
    referrer_policy: str = "strict-origin-when-cross-origin"
    permissions_policy: str = DEFAULT_PERMISSIONS_POLICY
    strict_transport_security: str = "max-age=31536000; includeSubDomains; preload"

    def headers(self) -> dict[str, str]:
        return {
            "Content-Security-Policy": self.content_security_policy,
            "X-Frame-Options": self.x_frame_options,
            "X-Content-Type-Options": self.x_content_type_options,
            "X-XSS-Protection": self.x_xss_protection,
            "Referrer-Policy": self.referrer_policy,
            "Permissions-Policy": self.permissions_policy,
            "Strict-Transport-Security": self.strict_transport_security,
        }


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds SecurityConfig's headers to every response."""

    def __init__(self, app, config: SecurityConfig | None = None):
        super().__init__(app)
        self.headers = (config or SecurityConfig()).headers()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unhandled_exception_handler(request, exc)
        for name, value in self.headers.items():
            response.headers[name] = value
        return response
