# =============================================================================
# app/routers/cache.py - Data Cache Admin Endpoints
# =============================================================================
# Inspect and clear the loader's in-memory cache. Clearing forces the next
# request to re-read the JSON files (e.g. after editing them on disk).
# =============================================================================

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from app.dependencies import DataLoaderDep

logger = logging.getLogger(__name__)

router = APIRouter()


class CacheStatsResponse(BaseModel):
    """What the cache currently holds."""
    size: int
    keys: list[str]


@router.get("", response_model=CacheStatsResponse)
async def get_cache_stats(loader: DataLoaderDep):
    """Number of cached datasets and their keys."""
    return CacheStatsResponse(**loader.cache.stats())


@router.delete("", response_model=CacheStatsResponse)
async def clear_cache(loader: DataLoaderDep):
    """Drop every cached dataset. Returns the (now empty) stats."""
    loader.cache.clear()
    return CacheStatsResponse(**loader.cache.stats())
