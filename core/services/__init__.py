# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .asset_store import AssetStore, PlaceholderAssetStore
from .website_service import WebsiteService
from .tech_stack_service import (
    calculate_tech_categories,
    calculate_tech_stack_summary,
    find_related_websites,
    format_category_name,
)

__all__ = [
    "AssetStore",
    "PlaceholderAssetStore",
    "WebsiteService",
    "calculate_tech_categories",
    "calculate_tech_stack_summary",
    "find_related_websites",
    "format_category_name",
]
