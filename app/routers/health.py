# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import json

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import DataLoaderDep
from lib.utils import utc_now_iso

router = APIRouter()

VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual data source checks."""
    data_dir: str
    websites: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=utc_now_iso(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(loader: DataLoaderDep):
    """
    Readiness check endpoint.

    The API serves an empty catalog when data files are missing, so this is
    the place that reports it: "degraded" unless the data directory exists
    and the websites file parses.
    """
    checks = ChecksResponse(data_dir="unknown", websites="unknown")

    checks.data_dir = "healthy" if loader.data_dir.is_dir() else "missing"

    try:
        with loader.websites_path.open("r", encoding="utf-8") as f:
            json.load(f)
        checks.websites = "healthy"
    except FileNotFoundError:
        checks.websites = "missing"
    except (OSError, ValueError) as e:
        checks.websites = f"unhealthy: {str(e)[:50]}"

    all_healthy = checks.data_dir == "healthy" and checks.websites == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=utc_now_iso(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=utc_now_iso(),
    )
