# =============================================================================
# app/routers/tech_stack.py - Tech Stack Statistics Endpoints
# =============================================================================
# - GET /tech-stack             totals plus per-category summaries
# - GET /tech-stack/categories  per-category summaries, biggest first
#
# Errors here answer {error, message, details} rather than {message, code}.
# =============================================================================

from fastapi import APIRouter

from app.dependencies import DataLoaderDep
from app.exceptions import TechStackError
from app.responses import cached_json
from core.services.tech_stack_service import (
    calculate_tech_categories,
    calculate_tech_stack_summary,
)

router = APIRouter()


@router.get("")
async def get_tech_stack_summary(loader: DataLoaderDep):
    """
    Tech stack summary.

    totalTechnologies counts every occurrence; each category's count is
    the number of distinct technologies in it.
    """
    try:
        summary = calculate_tech_stack_summary(loader.load_websites())
    except Exception as e:
        raise TechStackError("TechStackSummaryError", "Failed to fetch tech stack summary", e)

    return cached_json(summary.model_dump(by_alias=True))


@router.get("/categories")
async def get_tech_categories(loader: DataLoaderDep):
    """Tech categories sorted by distinct-technology count (descending)."""
    try:
        categories = calculate_tech_categories(loader.load_websites())
    except Exception as e:
        raise TechStackError("TechCategoriesError", "Failed to fetch tech stack categories", e)

    return cached_json([c.model_dump() for c in categories])
