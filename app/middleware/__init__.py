# =============================================================================
# app/middleware/ - Request/Response Middleware
# =============================================================================
# Two stages wrap every route, in a fixed order:
#
#   SecurityHeadersMiddleware  (outer: always runs, adds security headers)
#     CorsMiddleware           (inner: may answer preflights itself)
#       route handler
#
# Preflights are answered by the CORS stage before any route runs, and
# still get security headers on the way out. The two header sets don't
# overlap, so neither stage overwrites the other.
# =============================================================================

from fastapi import FastAPI

from .cors import CorsConfig, CorsMiddleware, CorsPolicy
from .security import SecurityConfig, SecurityHeadersMiddleware


def install_middleware(
    app: FastAPI,
    cors_config: CorsConfig | None = None,
    security_config: SecurityConfig | None = None,
) -> None:
    """
    Add the middleware chain to an app.

    Starlette runs the last-added middleware first, so CORS is added
    before Security to end up inside it.
    """
    app.add_middleware(CorsMiddleware, config=cors_config or CorsConfig())
    app.add_middleware(SecurityHeadersMiddleware, config=security_config or SecurityConfig())


__all__ = [
    "CorsConfig",
    "CorsMiddleware",
    "CorsPolicy",
    "SecurityConfig",
    "SecurityHeadersMiddleware",
    "install_middleware",
]
