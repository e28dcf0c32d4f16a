# =============================================================================
# core/services/website_service.py - Website Aggregation Logic
# =============================================================================
# Joins the three data sets (websites, credentials, asset metadata) into
# the answers the API routes need.
#
# "Not found" is always a None return here; the route decides the 404.
# Invalid write payloads raise ValidationFailedError (400). Anything else
# that raises is a fetch or save failure and becomes a 500 at the route.
# =============================================================================

import logging
from typing import Any, TypeVar

from pydantic import ValidationError

from app.exceptions import ValidationFailedError
from core.models.asset_metadata import AssetMetadata, AssetMetadataCollection, AssetType
from core.models.auth_credentials import (
    AuthCredentialsCollection,
    AuthenticationCredentials,
    AuthStatus,
)
from core.models.website import Website, WebsiteCollection
from core.services.asset_store import AssetStore, PlaceholderAssetStore
from lib.data_loader import (
    ASSET_METADATA_KEY,
    AUTH_CREDENTIALS_KEY,
    WEBSITES_KEY,
    DataLoader,
)
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)


class WebsiteService:
    """
    Service over one request's worth of catalog data.

    Build it with from_loader() at the start of a request. Reads use the
    collections loaded then; writes go back through the loader.
    """

    def __init__(
        self,
        websites: WebsiteCollection,
        credentials: AuthCredentialsCollection,
        assets: AssetMetadataCollection,
        asset_store: AssetStore | None = None,
        loader: DataLoader | None = None,
    ):
        self.websites = websites
        self.credentials = credentials
        self.assets = assets
        self.asset_store = asset_store or PlaceholderAssetStore()
        self.loader = loader

    @classmethod
    def from_loader(
        cls,
        loader: DataLoader,
        asset_store: AssetStore | None = None,
    ) -> "WebsiteService":
        """Hydrate all three collections from the loader (cache-checked)."""
        return cls(
            websites=WebsiteCollection(loader.load_websites()),
            credentials=AuthCredentialsCollection(loader.load_auth_credentials()),
            assets=AssetMetadataCollection(loader.load_asset_metadata()),
            asset_store=asset_store,
            loader=loader,
        )

    # -------------------------------------------------------------------------
    # Websites
    # -------------------------------------------------------------------------

    def get_all_websites(self) -> list[Website]:
        return self.websites.get_all()

    def get_website_by_id(self, website_id: str) -> Website | None:
        return self.websites.get_by_id(website_id)

    def search_websites(
        self,
        search: str | None = None,
        tech: str | None = None,
    ) -> list[Website]:
        """
        Filter websites.

        Args:
            search: Case-insensitive substring of name, description or any
                technology name
            tech: Exact technology name in any category

        Returns:
            Matching websites in catalog order (all of them if no filter)
        """
        results = self.websites.get_all()

        if search:
            needle = search.lower()
            results = [
                w for w in results
                if needle in w.name.lower()
                or needle in w.description.lower()
                or any(needle in t.lower() for t in _technologies(w))
            ]

        if tech:
            results = [w for w in results if tech in _technologies(w)]

        return results

    # -------------------------------------------------------------------------
    # Assets
    # -------------------------------------------------------------------------

    def _get_asset(self, website_id: str, asset_type: AssetType) -> bytes | None:
        if not self.websites.exists(website_id):
            return None

        if not self.assets.exists(website_id, asset_type):
            logger.debug(f"No {asset_type.value} registered for {website_id}")
            return None

        return self.asset_store.fetch(website_id, asset_type)

    def get_website_favicon(self, website_id: str) -> bytes | None:
        return self._get_asset(website_id, AssetType.FAVICON)

    def get_website_logo(self, website_id: str) -> bytes | None:
        return self._get_asset(website_id, AssetType.LOGO)

    def get_website_screenshot(self, website_id: str) -> bytes | None:
        return self._get_asset(website_id, AssetType.SCREENSHOT)

    def get_website_assets(self, website_id: str) -> list[AssetMetadata] | None:
        """All registered assets for a website, or None if the website is unknown."""
        if not self.websites.exists(website_id):
            return None
        return self.assets.get_by_website_id(website_id)

    def get_total_asset_size(self, website_id: str) -> int:
        return self.assets.get_total_file_size(website_id)

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    def get_auth_credentials(self, website_id: str) -> AuthenticationCredentials | None:
        return self.credentials.get_by_website_id(website_id)

    def get_auth_status(self, website_id: str) -> AuthStatus | None:
        """Login summary for a website, without credential secrets."""
        website = self.websites.get_by_id(website_id)
        if website is None:
            return None

        credentials = self.get_auth_credentials(website_id)
        return AuthStatus(
            website_id=website_id,
            requires_auth=website.requires_auth,
            has_credentials=credentials is not None,
            method=credentials.method if credentials else None,
        )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    # Each write saves the affected file through the loader and then
    # invalidates that cache key, so the next request reads what was saved.
    # Update payloads use the wire (camelCase) field names.

    def _require_loader(self) -> DataLoader:
        if self.loader is None:
            raise RuntimeError("WebsiteService was built without a DataLoader and cannot save")
        return self.loader

    def _save_websites(self, websites: list[Website]) -> None:
        loader = self._require_loader()
        loader.save_websites(websites)
        loader.invalidate(WEBSITES_KEY)
        self.websites = WebsiteCollection(websites)

    def _save_credentials(self, credentials: list[AuthenticationCredentials]) -> None:
        loader = self._require_loader()
        loader.save_auth_credentials(credentials)
        loader.invalidate(AUTH_CREDENTIALS_KEY)
        self.credentials = AuthCredentialsCollection(credentials)

    def _save_assets(self, assets: list[AssetMetadata]) -> None:
        loader = self._require_loader()
        loader.save_asset_metadata(assets)
        loader.invalidate(ASSET_METADATA_KEY)
        self.assets = AssetMetadataCollection(assets)

    def update_website(self, website_id: str, updates: dict[str, Any]) -> Website | None:
        """
        Merge updates into a website and save it.

        The id cannot be changed and lastUpdated is set to now. A missing or
        null techStack keeps the current one.

        Returns:
            The updated website, or None if the id is unknown

        Raises:
            ValidationFailedError: If the merged record is invalid
        """
        existing = self.websites.get_by_id(website_id)
        if existing is None:
            return None

        merged = {
            **existing.to_api(),
            **updates,
            "id": website_id,
            "lastUpdated": utc_now_iso(),
        }
        updated = _validated(Website, merged)
        if updated.tech_stack is None:
            updated = updated.model_copy(update={"tech_stack": existing.tech_stack})

        self._save_websites([
            updated if w.id == website_id else w for w in self.websites.get_all()
        ])
        logger.info(f"Updated website {website_id}")
        return updated

    def delete_website(self, website_id: str) -> bool:
        """
        Delete a website together with its credentials and asset records.

        Returns:
            False if the id is unknown
        """
        if not self.websites.exists(website_id):
            return False

        self._save_websites([w for w in self.websites.get_all() if w.id != website_id])

        if self.credentials.has_credentials(website_id):
            self._save_credentials(
                [c for c in self.credentials.get_all() if c.website_id != website_id]
            )

        if self.assets.get_by_website_id(website_id):
            self._save_assets(
                [a for a in self.assets.get_all() if a.website_id != website_id]
            )

        logger.info(f"Deleted website {website_id}")
        return True

    def set_auth_credentials(
        self,
        website_id: str,
        data: dict[str, Any],
    ) -> AuthenticationCredentials | None:
        """
        Store (or replace) a website's login credentials.

        Returns:
            The stored credentials, or None if the website is unknown

        Raises:
            ValidationFailedError: If the method's required fields are missing
        """
        if not self.websites.exists(website_id):
            return None

        credentials = _validated(AuthenticationCredentials, {**data, "websiteId": website_id})

        others = [c for c in self.credentials.get_all() if c.website_id != website_id]
        self._save_credentials(others + [credentials])
        logger.info(f"Stored {credentials.method.value} credentials for {website_id}")
        return credentials


ModelT = TypeVar("ModelT", Website, AuthenticationCredentials)


def _validated(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Parse a write payload, collecting schema and business-rule errors."""
    try:
        record = model.model_validate(data)
    except ValidationError as e:
        raise ValidationFailedError([
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in e.errors()
        ])

    errors = record.validation_errors()
    if errors:
        raise ValidationFailedError(errors)
    return record


def _technologies(website: Website) -> set[str]:
    return website.tech_stack.technologies() if website.tech_stack else set()
