# =============================================================================
# tests/test_tech_stack.py - Tech Stack Aggregation Tests
# =============================================================================
# Run with: poetry run pytest tests/test_tech_stack.py -v
# =============================================================================

import pytest

from core.models import Website, create_default_tech_stack
from core.services import (
    calculate_tech_categories,
    calculate_tech_stack_summary,
    find_related_websites,
    format_category_name,
)
from core.services.tech_stack_service import calculate_similarity


def make_website(website_id: str, **tech_stack) -> Website:
    return Website.model_validate({
        "id": website_id,
        "name": website_id.title(),
        "url": f"https://{website_id}.example.com",
        "techStack": tech_stack,
    })


def category(categories, name):
    return next(c for c in categories if c.name == name)


# =============================================================================
# Category Names
# =============================================================================

class TestFormatCategoryName:

    @pytest.mark.parametrize("raw,display", [
        ("frontend", "Frontend"),
        ("backend", "Backend"),
        ("database", "Database"),
        ("deployment", "Deployment"),
        ("aiTools", "AI/ML Tools"),
        ("other", "Other"),
        ("foo", "Foo"),
        ("cloudServices", "CloudServices"),
    ])
    def test_display_names(self, raw, display):
        assert format_category_name(raw) == display

    def test_empty_key(self):
        assert format_category_name("") == ""


# =============================================================================
# Summary
# =============================================================================

class TestCalculateTechStackSummary:

    def test_dedup_per_category_but_count_occurrences(self):
        websites = [
            make_website("a", frontend=["React"]),
            make_website("b", frontend=["React"]),
        ]

        summary = calculate_tech_stack_summary(websites)
        frontend = category(summary.categories, "Frontend")

        assert frontend.count == 1
        assert frontend.technologies == ["React"]
        assert summary.total_technologies == 2
        assert summary.total_websites == 2

    def test_technologies_sorted(self):
        summary = calculate_tech_stack_summary([
            make_website("a", backend=["Node.js", "Express", "Django"]),
        ])

        assert category(summary.categories, "Backend").technologies == ["Django", "Express", "Node.js"]

    def test_same_name_in_two_categories_counted_in_each(self):
        summary = calculate_tech_stack_summary([
            make_website("a", frontend=["TypeScript"], backend=["TypeScript"]),
        ])

        assert category(summary.categories, "Frontend").count == 1
        assert category(summary.categories, "Backend").count == 1
        assert summary.total_technologies == 2

    def test_non_string_and_empty_values_skipped(self):
        summary = calculate_tech_stack_summary([
            make_website("a", frontend=["React", "", None, 7, {"x": 1}]),
        ])

        assert category(summary.categories, "Frontend").technologies == ["React"]
        assert summary.total_technologies == 1

    def test_non_list_extra_category_skipped(self):
        summary = calculate_tech_stack_summary([
            make_website("a", tools="Figma", design=["Figma"]),
        ])

        names = [c.name for c in summary.categories]
        assert "Tools" not in names
        assert category(summary.categories, "Design").technologies == ["Figma"]

    def test_unknown_category_capitalized(self):
        summary = calculate_tech_stack_summary([make_website("a", foo=["Bar"])])
        assert category(summary.categories, "Foo").count == 1

    def test_default_tech_stack_gives_empty_categories(self):
        website = Website(
            id="a", name="A", url="https://a.example.com", tech_stack=create_default_tech_stack()
        )

        summary = calculate_tech_stack_summary([website])

        assert [c.name for c in summary.categories] == [
            "Frontend", "Backend", "Database", "Deployment", "AI/ML Tools", "Other",
        ]
        assert all(c.count == 0 for c in summary.categories)
        assert summary.total_technologies == 0

    def test_websites_without_tech_stack_are_counted_not_aggregated(self):
        bare = Website(id="bare", name="Bare", url="https://bare.example.com")

        summary = calculate_tech_stack_summary([bare, make_website("a", frontend=["Vue"])])

        assert summary.total_websites == 2
        assert summary.total_technologies == 1

    def test_empty_input(self):
        summary = calculate_tech_stack_summary([])

        assert summary.total_websites == 0
        assert summary.total_technologies == 0
        assert summary.categories == []

    def test_serializes_with_camel_case(self):
        data = calculate_tech_stack_summary([make_website("a", frontend=["Vue"])]).model_dump(by_alias=True)

        assert set(data) == {"totalWebsites", "totalTechnologies", "categories"}
        assert set(data["categories"][0]) == {"name", "count", "technologies"}


# =============================================================================
# Categories
# =============================================================================

class TestCalculateTechCategories:

    def test_sorted_by_count_descending(self, loader):
        categories = calculate_tech_categories(loader.load_websites())
        counts = [c.count for c in categories]

        assert counts == sorted(counts, reverse=True)

    def test_ties_keep_first_seen_order(self):
        categories = calculate_tech_categories([
            make_website("a", database=["Redis"], frontend=["Vue", "React"], backend=["Go"]),
        ])

        # frontend (2) first; the known-category order breaks the 1-1 tie
        assert [c.name for c in categories][:3] == ["Frontend", "Backend", "Database"]

    def test_matches_summary_categories(self, loader):
        websites = loader.load_websites()

        by_name = {c.name: c for c in calculate_tech_stack_summary(websites).categories}

        for c in calculate_tech_categories(websites):
            assert by_name[c.name] == c


# =============================================================================
# Related Websites
# =============================================================================

class TestRelatedWebsites:

    def test_similarity_jaccard(self):
        a = make_website("a", frontend=["React", "TypeScript"])
        b = make_website("b", frontend=["React"], backend=["Go"])

        # {React} / {React, TypeScript, Go}
        assert calculate_similarity(a, b) == pytest.approx(1 / 3)

    def test_similarity_empty_stacks(self):
        assert calculate_similarity(make_website("a"), make_website("b")) == 0.0

    def test_related_sorted_and_excludes_self_and_unrelated(self):
        target = make_website("t", frontend=["React", "Next.js"])
        close = make_website("close", frontend=["React", "Next.js"], backend=["Go"])
        far = make_website("far", frontend=["React"], backend=["Go", "Rust", "C"])
        unrelated = make_website("none", frontend=["Vue"])

        related = find_related_websites(target, [target, far, unrelated, close])

        assert [w.id for w in related] == ["close", "far"]

    def test_related_respects_limit(self):
        target = make_website("t", frontend=["React"])
        others = [make_website(f"w{i}", frontend=["React"]) for i in range(5)]

        assert len(find_related_websites(target, others, limit=2)) == 2
