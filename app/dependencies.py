# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The loader (and the cache inside it) lives for the whole process. Tests
# swap it out with app.dependency_overrides[get_data_loader].
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services.asset_store import AssetStore, PlaceholderAssetStore
from lib.cache import TTLCache
from lib.data_loader import DataLoader


@lru_cache
def get_data_loader() -> DataLoader:
    """
    Get the process-wide DataLoader.

    Created on first use with a fresh TTLCache.
    """
    return DataLoader(
        data_dir=settings.data_path,
        cache=TTLCache(ttl_seconds=settings.CACHE_TTL_SECONDS),
        websites_file=settings.WEBSITES_FILE,
        auth_credentials_file=settings.AUTH_CREDENTIALS_FILE,
        assets_file=settings.ASSETS_FILE,
    )


@lru_cache
def get_asset_store() -> AssetStore:
    """Get the asset byte store."""
    return PlaceholderAssetStore()


# Type aliases for dependency injection
DataLoaderDep = Annotated[DataLoader, Depends(get_data_loader)]
AssetStoreDep = Annotated[AssetStore, Depends(get_asset_store)]
