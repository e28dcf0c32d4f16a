# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for the catalog's data:
# - website.py: Website records and the per-request WebsiteCollection
# - tech_stack.py: TechStackInfo and the aggregated summaries
# - auth_credentials.py: Stored login details per website
# - asset_metadata.py: Screenshot/logo/favicon metadata per website
#
# Wire format is camelCase (requiresAuth, techStack, websiteId, ...).
# =============================================================================

# -----------------------------------------------------------------------------
# Tech Stack Models
# -----------------------------------------------------------------------------
from .tech_stack import (
    TECH_STACK_CATEGORIES,
    TechCategorySummary,
    TechStackInfo,
    TechStackSummary,
    create_default_tech_stack,
)

# -----------------------------------------------------------------------------
# Website Models
# -----------------------------------------------------------------------------
from .website import (
    Website,
    WebsiteCollection,
    WebsiteState,
)

# -----------------------------------------------------------------------------
# Authentication Models
# -----------------------------------------------------------------------------
from .auth_credentials import (
    AuthCredentialsCollection,
    AuthenticationCredentials,
    AuthMethod,
    AuthStatus,
)

# -----------------------------------------------------------------------------
# Asset Models
# -----------------------------------------------------------------------------
from .asset_metadata import (
    AssetFormat,
    AssetMetadata,
    AssetMetadataCollection,
    AssetType,
    Dimensions,
)

__all__ = [
    # Tech Stack
    "TECH_STACK_CATEGORIES",
    "TechCategorySummary",
    "TechStackInfo",
    "TechStackSummary",
    "create_default_tech_stack",
    # Website
    "Website",
    "WebsiteCollection",
    "WebsiteState",
    # Authentication
    "AuthCredentialsCollection",
    "AuthenticationCredentials",
    "AuthMethod",
    "AuthStatus",
    # Assets
    "AssetFormat",
    "AssetMetadata",
    "AssetMetadataCollection",
    "AssetType",
    "Dimensions",
]
