# =============================================================================
# lib/data_loader.py - JSON Data Source Loader
# =============================================================================
# Reads the catalog's flat JSON files from a data directory:
# - websites.json:          list of Website records
# - auth-credentials.json:  credentials, object keyed by website id
# - assets.json:            list of AssetMetadata records
#
# Every load goes through the TTLCache first. On a miss the file is read,
# validated, and the result is cached before it is returned.
#
# A missing or malformed file is not an error: the read step returns
# Empty(reason), the loader logs a warning and serves an empty list. The
# catalog stays up even with no data.
#
# Saving does NOT touch the cache. A save followed by a load inside the TTL
# window returns the previously cached list; call invalidate() or clear the
# cache when fresh reads are needed.
#
# Usage:
#   loader = DataLoader(data_dir="./data", cache=TTLCache(ttl_seconds=300))
#   websites = loader.load_websites()
# =============================================================================

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ValidationError

from core.models.asset_metadata import AssetMetadata
from core.models.auth_credentials import AuthenticationCredentials
from core.models.tech_stack import create_default_tech_stack
from core.models.website import Website
from lib.cache import TTLCache

logger = logging.getLogger(__name__)

# Default file names inside the data directory
WEBSITES_FILE = "websites.json"
AUTH_CREDENTIALS_FILE = "auth-credentials.json"
ASSETS_FILE = "assets.json"

# Cache keys
WEBSITES_KEY = "websites"
AUTH_CREDENTIALS_KEY = "auth_credentials"
ASSET_METADATA_KEY = "asset_metadata"

ModelT = TypeVar("ModelT", bound=BaseModel)


# =============================================================================
# Read Results
# =============================================================================

@dataclass(frozen=True)
class Loaded:
    """The file was read and parsed."""
    data: Any


@dataclass(frozen=True)
class Empty:
    """The file could not be used; serve an empty dataset instead."""
    reason: str


ReadResult = Loaded | Empty


# =============================================================================
# Loader
# =============================================================================

class DataLoader:
    """
    Loads and saves the catalog's JSON files through a shared cache.

    The cache is passed in rather than created here, so each test can build
    a fresh loader/cache pair and the app can share one per process.
    """

    def __init__(
        self,
        data_dir: str | Path = "./data",
        cache: TTLCache | None = None,
        websites_file: str = WEBSITES_FILE,
        auth_credentials_file: str = AUTH_CREDENTIALS_FILE,
        assets_file: str = ASSETS_FILE,
    ):
        self.data_dir = Path(data_dir)
        self.cache = cache if cache is not None else TTLCache()
        self.websites_path = self.data_dir / websites_file
        self.auth_credentials_path = self.data_dir / auth_credentials_file
        self.assets_path = self.data_dir / assets_file
        self._write_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def _read_json(self, path: Path) -> ReadResult:
        """Read and parse one JSON file. Never raises."""
        try:
            with path.open("r", encoding="utf-8") as f:
                return Loaded(json.load(f))
        except FileNotFoundError:
            return Empty(f"{path.name} not found")
        except json.JSONDecodeError as e:
            return Empty(f"{path.name} is not valid JSON: {e}")
        except (OSError, UnicodeDecodeError) as e:
            return Empty(f"{path.name} could not be read: {e}")

    def _validate_records(self, model: type[ModelT], records: list[Any], source: str) -> list[ModelT]:
        """Validate each record, skipping (and logging) the ones that fail."""
        valid: list[ModelT] = []
        for i, record in enumerate(records):
            try:
                valid.append(model.model_validate(record))
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid record {i} in {source}: {e.error_count()} validation error(s)"
                )
        return valid

    def _load_cached(
        self,
        key: str,
        path: Path,
        parse: Callable[[Any], list[Any]],
    ) -> list[Any]:
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        logger.debug(f"Cache miss: {key}, reading {path}")
        result = self._read_json(path)

        if isinstance(result, Empty):
            logger.warning(f"{result.reason}, returning empty list")
            return []

        items = parse(result.data)
        self.cache.set(key, items)
        return items

    def _parse_websites(self, data: Any) -> list[Website]:
        if not isinstance(data, list):
            logger.warning(f"{self.websites_path.name} must contain a JSON array, ignoring contents")
            return []

        websites = self._validate_records(Website, data, self.websites_path.name)
        return [
            w if w.tech_stack is not None
            else w.model_copy(update={"tech_stack": create_default_tech_stack()})
            for w in websites
        ]

    def _parse_auth_credentials(self, data: Any) -> list[AuthenticationCredentials]:
        # Stored as {websiteId: credentials}; a plain list is accepted too
        if isinstance(data, dict):
            data = list(data.values())
        if not isinstance(data, list):
            logger.warning(f"{self.auth_credentials_path.name} has an unexpected shape, ignoring contents")
            return []
        return self._validate_records(AuthenticationCredentials, data, self.auth_credentials_path.name)

    def _parse_asset_metadata(self, data: Any) -> list[AssetMetadata]:
        if not isinstance(data, list):
            logger.warning(f"{self.assets_path.name} must contain a JSON array, ignoring contents")
            return []
        return self._validate_records(AssetMetadata, data, self.assets_path.name)

    def load_websites(self) -> list[Website]:
        """
        Load all websites.

        Within the TTL the cached list is returned as-is (same object).
        Every returned website has a tech stack; records without one get the
        default (all categories empty, source = load time).
        """
        return self._load_cached(WEBSITES_KEY, self.websites_path, self._parse_websites)

    def load_auth_credentials(self) -> list[AuthenticationCredentials]:
        """Load stored credentials for all websites."""
        return self._load_cached(
            AUTH_CREDENTIALS_KEY, self.auth_credentials_path, self._parse_auth_credentials
        )

    def load_asset_metadata(self) -> list[AssetMetadata]:
        """Load metadata for all registered assets."""
        return self._load_cached(ASSET_METADATA_KEY, self.assets_path, self._parse_asset_metadata)

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def _write_json(self, path: Path, data: Any) -> None:
        """
        Write JSON atomically: temp file in the same directory, then rename.

        Concurrent saves are serialized; readers never see a partial file.
        """
        with self._write_lock:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

    def save_websites(self, websites: list[Website]) -> None:
        """
        Write websites to websites.json.

        The cache is left alone: a load within the TTL still returns the
        old list until invalidate(WEBSITES_KEY) or expiry.
        """
        self._write_json(self.websites_path, [w.to_api() for w in websites])
        logger.info(f"Saved {len(websites)} websites to {self.websites_path}")

    def save_auth_credentials(self, credentials: list[AuthenticationCredentials]) -> None:
        """Write credentials as an object keyed by website id."""
        data = {
            cred.website_id: cred.model_dump(mode="json", by_alias=True, exclude_none=True)
            for cred in credentials
        }
        self._write_json(self.auth_credentials_path, data)
        logger.info(f"Saved credentials for {len(data)} websites to {self.auth_credentials_path}")

    def save_asset_metadata(self, assets: list[AssetMetadata]) -> None:
        data = [a.model_dump(mode="json", by_alias=True, exclude_none=True) for a in assets]
        self._write_json(self.assets_path, data)
        logger.info(f"Saved {len(data)} asset records to {self.assets_path}")

    # -------------------------------------------------------------------------
    # Cache Control
    # -------------------------------------------------------------------------

    def invalidate(self, key: str) -> None:
        """Drop one cached dataset so the next load re-reads its file."""
        if self.cache.delete(key):
            logger.info(f"Invalidated cache key: {key}")
