# =============================================================================
# app/responses.py - Response Helpers
# =============================================================================
# Successful catalog responses are publicly cacheable; these helpers attach
# the Cache-Control header so routes don't repeat it.
# =============================================================================

from typing import Any

from fastapi.responses import JSONResponse, Response

from app.config import settings


def cached_json(content: Any) -> JSONResponse:
    """200 JSON response with the public Cache-Control header."""
    return JSONResponse(
        content=content,
        headers={"Cache-Control": settings.cache_control_header},
    )


def cached_bytes(content: bytes, media_type: str) -> Response:
    """200 binary response (image bytes) with the public Cache-Control header."""
    return Response(
        content=content,
        media_type=media_type,
        headers={"Cache-Control": settings.cache_control_header},
    )
