# =============================================================================
# core/services/tech_stack_service.py - Tech Stack Aggregation
# =============================================================================
# Pure functions that derive statistics from the websites' tech stacks:
# - calculate_tech_stack_summary: totals plus per-category summaries
# - calculate_tech_categories:    per-category summaries, biggest first
# - find_related_websites:        websites with overlapping technologies
#
# Within a category, technology names are deduplicated across websites.
# total_technologies is different on purpose: it counts every occurrence.
# =============================================================================

from typing import Any

from core.models.tech_stack import TechCategorySummary, TechStackSummary
from core.models.website import Website

# Display names for the known category keys
CATEGORY_DISPLAY_NAMES = {
    "frontend": "Frontend",
    "backend": "Backend",
    "database": "Database",
    "deployment": "Deployment",
    "aiTools": "AI/ML Tools",
    "other": "Other",
}


def format_category_name(category: str) -> str:
    """
    Display name for a raw category key.

    Unknown keys get their first letter upper-cased: "foo" -> "Foo".
    """
    if category in CATEGORY_DISPLAY_NAMES:
        return CATEGORY_DISPLAY_NAMES[category]
    return category[:1].upper() + category[1:]


def _is_technology(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _collect_categories(websites: list[Website]) -> tuple[dict[str, set[str]], int]:
    """
    Group distinct technologies by category.

    Returns:
        (category -> set of names in first-seen category order,
         number of technology occurrences before deduplication)
    """
    tech_map: dict[str, set[str]] = {}
    occurrences = 0

    for website in websites:
        if website.tech_stack is None:
            continue

        for category, technologies in website.tech_stack.categories().items():
            if not isinstance(technologies, list):
                continue

            bucket = tech_map.setdefault(category, set())
            for tech in technologies:
                if _is_technology(tech):
                    bucket.add(tech)
                    occurrences += 1

    return tech_map, occurrences


def _summarize(tech_map: dict[str, set[str]]) -> list[TechCategorySummary]:
    return [
        TechCategorySummary(
            name=format_category_name(category),
            count=len(technologies),
            technologies=sorted(technologies),
        )
        for category, technologies in tech_map.items()
    ]


def calculate_tech_stack_summary(websites: list[Website]) -> TechStackSummary:
    """
    Summarize the technologies used across all websites.

    Categories keep the order in which they were first seen.
    """
    tech_map, occurrences = _collect_categories(websites)
    return TechStackSummary(
        total_websites=len(websites),
        total_technologies=occurrences,
        categories=_summarize(tech_map),
    )


def calculate_tech_categories(websites: list[Website]) -> list[TechCategorySummary]:
    """
    Per-category summaries sorted by distinct-technology count, descending.

    Ties keep first-seen order.
    """
    tech_map, _ = _collect_categories(websites)
    return sorted(_summarize(tech_map), key=lambda c: c.count, reverse=True)


def calculate_similarity(first: Website, second: Website) -> float:
    """Jaccard similarity of two websites' technology sets (0.0 - 1.0)."""
    if first.tech_stack is None or second.tech_stack is None:
        return 0.0

    a = first.tech_stack.technologies()
    b = second.tech_stack.technologies()
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def find_related_websites(
    website: Website,
    websites: list[Website],
    limit: int = 3,
) -> list[Website]:
    """
    Websites sharing technologies with `website`, most similar first.

    The website itself and websites with nothing in common are left out.
    """
    scored = [
        (calculate_similarity(website, other), other)
        for other in websites
        if other.id != website.id
    ]
    scored = [(score, other) for score, other in scored if score > 0]
    scored.sort(key=lambda item: item[0], reverse=True)
    return [other for _, other in scored[:limit]]
