# =============================================================================
# core/models/website.py - Website Schema and Collection
# =============================================================================
# A Website is one entry in the catalog: name, URL, description, references
# to its screenshot/logo/favicon, whether it needs a login, and the tech
# stack it is built with.
#
# Field names are snake_case in Python and camelCase on the wire
# (requiresAuth, lastUpdated, techStack), matching websites.json.
#
# WebsiteCollection holds the websites loaded for one request and answers
# lookups by id.
# =============================================================================

from enum import Enum
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from lib.utils import extract_name_from_url
from .tech_stack import TechStackInfo


class WebsiteState(str, Enum):
    """
    Processing state of a catalog entry's assets.

    Flow: pending -> processing -> completed | failed -> retry
    """
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    RETRY = "retry"


class Website(BaseModel):
    """
    One catalog entry.

    Asset fields hold paths or URLs, never binary data. Unknown fields in the
    source file are kept and returned unchanged.

    Example:
        {
            "id": "test-website",
            "name": "Test Website",
            "url": "https://test.com",
            "description": "Test description",
            "screenshot": "/assets/screenshots/test-website.png",
            "logo": "/assets/logos/test-website.svg",
            "favicon": "/assets/favicons/test-website.ico",
            "requiresAuth": false,
            "lastUpdated": "2025-01-27T10:00:00.000Z",
            "techStack": {"frontend": ["React"], ...}
        }
    """

    id: str = Field(..., min_length=1, description="Unique website identifier")
    name: str = Field(..., description="Display name")
    url: str = Field(default="", description="Canonical URL")
    description: str = Field(default="", description="Human description")

    screenshot: str = Field(default="", description="Screenshot path or URL")
    logo: str = Field(default="", description="Logo path or URL")
    favicon: str = Field(default="", description="Favicon path or URL")

    requires_auth: bool = Field(default=False, description="Whether the site needs a login")
    last_updated: str = Field(default="", description="ISO-8601 timestamp of the last update")
    state: WebsiteState | None = Field(default=None, description="Asset processing state")

    # None only until the loader fills in the default
    tech_stack: TechStackInfo | None = Field(default=None, description="Technologies used")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def fill_name_from_url(cls, data: Any) -> Any:
        """Records without a name are named after their hostname."""
        if isinstance(data, dict) and not data.get("name"):
            url = data.get("url")
            data = {**data, "name": extract_name_from_url(url if isinstance(url, str) else "")}
        return data

    @field_validator("url", "description", "screenshot", "logo", "favicon", "last_updated", mode="before")
    @classmethod
    def null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("requires_auth", mode="before")
    @classmethod
    def null_to_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("state", mode="before")
    @classmethod
    def unknown_state_to_none(cls, value: Any) -> Any:
        if value is None or isinstance(value, WebsiteState):
            return value
        try:
            return WebsiteState(value)
        except ValueError:
            return None

    @field_validator("tech_stack", mode="before")
    @classmethod
    def non_object_tech_stack_to_none(cls, value: Any) -> Any:
        """Anything but an object counts as no tech stack; the loader fills the default."""
        if value is None or isinstance(value, (dict, TechStackInfo)):
            return value
        return None

    def to_api(self) -> dict[str, Any]:
        """Serialize with wire (camelCase) field names, leaving out unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def validation_errors(self) -> list[str]:
        """
        Problems that block saving this website.

        Loading is lenient; writes must carry a name and an HTTP(S) URL.
        """
        errors = []
        if not self.name.strip():
            errors.append("Name is required")
        parsed = urlparse(self.url)
        if not self.url:
            errors.append("URL is required")
        elif parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append("URL must be a valid HTTP/HTTPS URL")
        return errors


class WebsiteCollection:
    """
    The websites loaded for one request.

    Lookups by id go through an index built once at construction. If the
    source contains duplicate ids the first record wins.
    """

    def __init__(self, websites: list[Website] | None = None):
        self._websites = list(websites or [])
        self._index: dict[str, Website] = {}
        for website in self._websites:
            self._index.setdefault(website.id, website)

    def __len__(self) -> int:
        return len(self._websites)

    def get_all(self) -> list[Website]:
        return list(self._websites)

    def get_by_id(self, website_id: str) -> Website | None:
        return self._index.get(website_id)

    def exists(self, website_id: str) -> bool:
        return website_id in self._index
