# =============================================================================
# app/routers/assets.py - Asset Metadata Endpoints
# =============================================================================
# Lists the asset records registered for a website. The bytes themselves
# are served by the /websites/{id}/favicon|logo|screenshot endpoints.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path

from app.dependencies import AssetStoreDep, DataLoaderDep
from app.exceptions import FetchError, MissingIdError, WebsiteNotFoundError
from app.responses import cached_json
from core.services.website_service import WebsiteService

router = APIRouter()


@router.get("/{website_id}")
async def list_website_assets(
    website_id: Annotated[str, Path(description="Website identifier")],
    loader: DataLoaderDep,
    asset_store: AssetStoreDep,
):
    """
    All asset metadata for a website.

    Returns {websiteId, assets, total, totalFileSize}.
    """
    website_id = website_id.strip()
    if not website_id:
        raise MissingIdError()

    try:
        service = WebsiteService.from_loader(loader, asset_store)
        assets = service.get_website_assets(website_id)
        total_size = service.get_total_asset_size(website_id) if assets is not None else 0
    except Exception as e:
        raise FetchError("Failed to fetch website assets", "FETCH_ASSETS_ERROR", e)

    if assets is None:
        raise WebsiteNotFoundError(website_id)

    return cached_json({
        "websiteId": website_id,
        "assets": [a.model_dump(mode="json", by_alias=True, exclude_none=True) for a in assets],
        "total": len(assets),
        "totalFileSize": total_size,
    })
