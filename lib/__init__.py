# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable infrastructure:
# - cache.py: Time-bounded in-memory cache
# - data_loader.py: JSON data source loader (import it directly:
#   `from lib.data_loader import DataLoader`; it depends on core.models)
# - utils.py: Shared utilities (timestamps, URL helpers)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.cache import CacheEntry, TTLCache
from lib.utils import extract_name_from_url, utc_now_iso

__all__ = [
    # Cache
    "CacheEntry",
    "TTLCache",
    # Utils
    "extract_name_from_url",
    "utc_now_iso",
]
