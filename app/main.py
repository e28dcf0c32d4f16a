# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Site Catalog API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import settings
from app.exceptions import (
    CatalogException,
    catalog_exception_handler,
    unhandled_exception_handler,
)
from app.middleware import CorsConfig, SecurityConfig, install_middleware
from app.routers import assets, cache, health, tech_stack, websites

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Data files are read lazily on first request, so startup only reports
    configuration.
    """
    logger.info(f"Starting Site Catalog API in {settings.ENVIRONMENT} mode")
    logger.info(f"Data directory: {settings.data_path.resolve()}")
    logger.info(f"Cache TTL: {settings.CACHE_TTL_SECONDS}s")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    if not settings.data_path.is_dir():
        logger.warning(f"Data directory {settings.data_path} does not exist; catalog will be empty")

    yield

    logger.info("Shutting down Site Catalog API")


# Create FastAPI application
app = FastAPI(
    title="Site Catalog API",
    description="""
## Website Catalog Dashboard API

Serves a fixed catalog of websites with their metadata and tech stacks.

### Data

All data lives in flat JSON files in `DATA_DIR`:

| File | Contents |
|------|----------|
| `websites.json` | Website records |
| `auth-credentials.json` | Stored login details, keyed by website id |
| `assets.json` | Screenshot / logo / favicon metadata |

Files are cached in memory for `CACHE_TTL_SECONDS` (5 minutes by default).
Use `DELETE /api/cache` to force a re-read.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Websites",
            "description": "List and look up catalog websites and their assets",
        },
        {
            "name": "Assets",
            "description": "Asset metadata per website",
        },
        {
            "name": "Tech Stack",
            "description": "Technology statistics across the catalog",
        },
        {
            "name": "Cache",
            "description": "Inspect and clear the data cache",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

install_middleware(
    app,
    cors_config=CorsConfig(
        allowed_origins=settings.cors_origins_list,
        max_age=settings.CORS_MAX_AGE,
        credentials=settings.CORS_ALLOW_CREDENTIALS,
    ),
    security_config=SecurityConfig(),
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(CatalogException, catalog_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

# Website endpoints
app.include_router(
    websites.router,
    prefix="/api/websites",
    tags=["Websites"]
)

# Asset metadata endpoints
app.include_router(
    assets.router,
    prefix="/api/assets",
    tags=["Assets"]
)

# Tech stack statistics endpoints
app.include_router(
    tech_stack.router,
    prefix="/api/tech-stack",
    tags=["Tech Stack"]
)

# Cache admin endpoints
app.include_router(
    cache.router,
    prefix="/api/cache",
    tags=["Cache"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Site Catalog API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }
