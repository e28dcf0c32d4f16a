# =============================================================================
# core/models/tech_stack.py - Tech Stack Schemas
# =============================================================================
# These models describe which technologies a website is built with:
# - TechStackInfo: per-website mapping of category -> technology names
# - TechCategorySummary: one aggregated category (display name, count, list)
# - TechStackSummary: the full aggregation returned by GET /api/tech-stack
#
# Known categories are frontend, backend, database, deployment, aiTools and
# other. Source files may carry extra categories; they are kept as extra
# fields so the aggregator can report them too.
# =============================================================================

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)


# Raw category keys in the order they appear in a default tech stack
TECH_STACK_CATEGORIES = (
    "frontend",
    "backend",
    "database",
    "deployment",
    "aiTools",
    "other",
)

# Fields of TechStackInfo that describe the record rather than a category
METADATA_FIELDS = ("source", "version")


class TechStackInfo(BaseModel):
    """
    Technologies used by one website, grouped by category.

    Example:
        {
            "frontend": ["React", "Next.js"],
            "backend": ["Node.js"],
            "database": ["PostgreSQL"],
            "deployment": ["Vercel"],
            "aiTools": ["OpenAI"],
            "other": [],
            "source": "2025-01-27T10:00:00Z"
        }
    """

    frontend: list[Any] = Field(default_factory=list, description="Frontend frameworks and libraries")
    backend: list[Any] = Field(default_factory=list, description="Backend technologies and frameworks")
    database: list[Any] = Field(default_factory=list, description="Database systems and tools")
    deployment: list[Any] = Field(default_factory=list, description="Deployment platforms and services")
    ai_tools: list[Any] = Field(default_factory=list, description="AI/ML tools and frameworks")
    other: list[Any] = Field(default_factory=list, description="Other technologies and tools")

    version: str | None = Field(default=None, description="Optional version information")

    # Data source or last updated timestamp
    source: str = Field(default_factory=utc_now_iso, description="Data source or last updated timestamp")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    @field_validator("frontend", "backend", "database", "deployment", "ai_tools", "other", mode="before")
    @classmethod
    def non_list_to_empty(cls, value: Any) -> Any:
        """A category that isn't a list contributes nothing."""
        if value is None or not isinstance(value, (list, tuple)):
            if value is not None:
                logger.debug(f"Ignoring non-list tech stack category value: {value!r}")
            return []
        return list(value)

    @field_validator("source", mode="before")
    @classmethod
    def null_source_to_now(cls, value: Any) -> Any:
        return utc_now_iso() if value is None else value

    def categories(self) -> dict[str, Any]:
        """
        Category name -> raw value, known categories first, then extras.

        Metadata fields (source, version) are not categories. Extra values are
        returned as found; callers skip the ones that aren't lists.
        """
        result: dict[str, Any] = {
            "frontend": self.frontend,
            "backend": self.backend,
            "database": self.database,
            "deployment": self.deployment,
            "aiTools": self.ai_tools,
            "other": self.other,
        }
        for key, value in (self.model_extra or {}).items():
            if key not in METADATA_FIELDS:
                result[key] = value
        return result

    def technologies(self) -> set[str]:
        """Every non-empty technology name across all categories."""
        names: set[str] = set()
        for value in self.categories().values():
            if isinstance(value, list):
                names.update(tech for tech in value if tech and isinstance(tech, str))
        return names


def create_default_tech_stack() -> TechStackInfo:
    """All categories empty, source stamped with the current time."""
    return TechStackInfo(source=utc_now_iso())


class TechCategorySummary(BaseModel):
    """
    One aggregated category.

    count is the number of distinct technologies; technologies is that
    distinct set sorted lexicographically.
    """
    name: str
    count: int = Field(default=0, ge=0)
    technologies: list[str] = Field(default_factory=list)


class TechStackSummary(BaseModel):
    """
    Summary returned by GET /api/tech-stack.

    total_technologies counts every occurrence across all websites, so a
    technology used by two websites is counted twice here but once in its
    category.
    """
    total_websites: int = Field(default=0, ge=0)
    total_technologies: int = Field(default=0, ge=0)
    categories: list[TechCategorySummary] = Field(default_factory=list)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
