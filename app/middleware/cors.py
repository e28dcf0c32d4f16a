# =============================================================================
# app/middleware/cors.py - CORS Stage
# =============================================================================
# Cross-origin handling for every request.
#
# - OPTIONS (preflight): answered here, the route never runs. 403 when the
#   Origin header is missing or not allow-listed, otherwise 200 with the
#   full set of Access-Control-* headers.
# - Anything else: the route always runs. CORS headers are added to the
#   response only when the origin is allow-listed. This stage does not
#   block requests from other origins.
# =============================================================================

from dataclasses import dataclass, field

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

WILDCARD = "*"


@dataclass(frozen=True)
class CorsConfig:
    """CORS settings. Defaults match a local development frontend."""
    allowed_origins: list[str] = field(
        default_factory=lambda: ["http://localhost:3000", "https://localhost:3000"]
    )
    allowed_methods: list[str] = field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allowed_headers: list[str] = field(
        default_factory=lambda: ["Content-Type", "Authorization", "X-API-Key"]
    )
    exposed_headers: list[str] = field(
        default_factory=lambda: ["Content-Length", "X-Total-Count"]
    )
    max_age: int = 86400  # 24 hours
    credentials: bool = True


class CorsPolicy:
    """Decides which CORS headers a request gets."""

    def __init__(self, config: CorsConfig):
        self.config = config

    def is_origin_allowed(self, origin: str | None) -> bool:
        """Exact match against the allow-list; a "*" entry allows everything."""
        if not origin:
            return False
        if WILDCARD in self.config.allowed_origins:
            return True
        return origin in self.config.allowed_origins

    def preflight_response(self, origin: str | None) -> Response:
        if not self.is_origin_allowed(origin):
            return Response(status_code=403)

        headers = {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Methods": ", ".join(self.config.allowed_methods),
            "Access-Control-Allow-Headers": ", ".join(self.config.allowed_headers),
            "Access-Control-Expose-Headers": ", ".join(self.config.exposed_headers),
            "Access-Control-Max-Age": str(self.config.max_age),
        }
        if self.config.credentials:
            headers["Access-Control-Allow-Credentials"] = "true"

        return Response(status_code=200, headers=headers)

    def add_response_headers(self, origin: str | None, response: Response) -> Response:
        if self.is_origin_allowed(origin):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = str(self.config.credentials).lower()
            response.headers["Access-Control-Expose-Headers"] = ", ".join(self.config.exposed_headers)
        return response


class CorsMiddleware(BaseHTTPMiddleware):
    """Applies CorsPolicy around every request."""

    def __init__(self, app, config: CorsConfig | None = None):
        super().__init__(app)
        self.policy = CorsPolicy(config or CorsConfig())

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        origin = request.headers.get("origin")

        if request.method == "OPTIONS":
            return self.policy.preflight_response(origin)

        response = await call_next(request)
        return self.policy.add_response_headers(origin, response)
