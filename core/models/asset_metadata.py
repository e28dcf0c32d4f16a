# =============================================================================
# core/models/asset_metadata.py - Asset Metadata Schemas
# =============================================================================
# Describes the screenshot/logo/favicon files registered for each website.
# Whether an asset is registered decides 404 vs 200 on the asset endpoints.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AssetType(str, Enum):
    """Kinds of asset a website can have."""
    SCREENSHOT = "screenshot"
    LOGO = "logo"
    FAVICON = "favicon"


class AssetFormat(str, Enum):
    PNG = "png"
    JPG = "jpg"
    WEBP = "webp"
    SVG = "svg"
    ICO = "ico"


class Dimensions(BaseModel):
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class AssetMetadata(BaseModel):
    """
    One registered asset.

    Example:
        {
            "websiteId": "dashboard-app",
            "assetType": "favicon",
            "filePath": "/assets/favicons/dashboard-app.ico",
            "fileSize": 1150,
            "dimensions": {"width": 32, "height": 32},
            "format": "ico",
            "generatedAt": "2025-01-27T10:00:00.000Z",
            "optimized": true
        }
    """

    website_id: str = Field(..., min_length=1)
    asset_type: AssetType
    file_path: str = Field(..., min_length=1)
    file_size: int = Field(default=0, ge=0, description="Size in bytes")
    dimensions: Dimensions | None = None
    format: AssetFormat | None = None
    generated_at: str | None = None
    optimized: bool = False

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AssetMetadataCollection:
    """Asset metadata loaded for one request."""

    def __init__(self, assets: list[AssetMetadata] | None = None):
        self._assets = list(assets or [])

    def get_all(self) -> list[AssetMetadata]:
        return list(self._assets)

    def get_by_website_id(self, website_id: str) -> list[AssetMetadata]:
        return [a for a in self._assets if a.website_id == website_id]

    def get_by_website_id_and_type(
        self,
        website_id: str,
        asset_type: AssetType,
    ) -> AssetMetadata | None:
        """First registered asset of this kind for the website, if any."""
        for asset in self._assets:
            if asset.website_id == website_id and asset.asset_type == asset_type:
                return asset
        return None

    def exists(self, website_id: str, asset_type: AssetType) -> bool:
        return self.get_by_website_id_and_type(website_id, asset_type) is not None

    def get_total_file_size(self, website_id: str) -> int:
        return sum(a.file_size for a in self.get_by_website_id(website_id))
