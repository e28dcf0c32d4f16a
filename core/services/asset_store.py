# =============================================================================
# core/services/asset_store.py - Asset Byte Storage
# =============================================================================
# Where asset bytes come from once metadata says an asset exists.
#
# The catalog ships with a placeholder store; a real deployment would swap
# in an object-storage fetch keyed by website id and asset kind.
# =============================================================================

import logging
from abc import ABC, abstractmethod

from core.models.asset_metadata import AssetType

logger = logging.getLogger(__name__)


class AssetStore(ABC):
    """Fetches asset bytes by website id and asset kind."""

    @abstractmethod
    def fetch(self, website_id: str, asset_type: AssetType) -> bytes:
        """Return the asset's bytes. Raise if the store cannot deliver them."""


class PlaceholderAssetStore(AssetStore):
    """Returns a fixed placeholder buffer for every asset."""

    def fetch(self, website_id: str, asset_type: AssetType) -> bytes:
        logger.debug(f"Serving placeholder {asset_type.value} for {website_id}")
        return f"placeholder-{asset_type.value}-data".encode()
