# =============================================================================
# app/routers/websites.py - Website Endpoints
# =============================================================================
# Reading and editing the catalog:
# - GET /websites                      all websites (optional search/tech filter)
# - GET /websites/{id}                 one website
# - GET /websites/{id}/favicon|logo|screenshot   asset bytes
# - GET /websites/{id}/auth            login summary (no secrets)
# - GET /websites/{id}/related         websites with a similar tech stack
# - PUT /websites/{id}                 merge updates into a website
# - DELETE /websites/{id}              remove a website, its credentials and assets
# - PUT /websites/{id}/auth            store login credentials
#
# Each handler builds a WebsiteService from the (cached) loader. Anything
# that raises while loading or composing becomes that route's FetchError
# (SaveError for writes); absent entities become 404s. Writes save through
# the loader and drop the affected cache keys, so the next read returns the
# saved data. Write responses are not marked cacheable.
# =============================================================================

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Path, Query

from app.dependencies import AssetStoreDep, DataLoaderDep
from app.exceptions import (
    AssetNotFoundError,
    CatalogException,
    FetchError,
    MissingIdError,
    SaveError,
    WebsiteNotFoundError,
)
from app.responses import cached_bytes, cached_json
from core.models.asset_metadata import AssetType
from core.services.tech_stack_service import find_related_websites
from core.services.website_service import WebsiteService

logger = logging.getLogger(__name__)

router = APIRouter()

WebsiteId = Annotated[str, Path(description="Website identifier")]

# Content types for each asset kind
ASSET_MEDIA_TYPES = {
    AssetType.FAVICON: "image/x-icon",
    AssetType.LOGO: "image/svg+xml",
    AssetType.SCREENSHOT: "image/png",
}


def _require_id(website_id: str) -> str:
    website_id = website_id.strip()
    if not website_id:
        raise MissingIdError()
    return website_id


# =============================================================================
# Website Endpoints
# =============================================================================

@router.get("")
async def list_websites(
    loader: DataLoaderDep,
    asset_store: AssetStoreDep,
    search: Annotated[str | None, Query(description="Match name, description or technology")] = None,
    tech: Annotated[str | None, Query(description="Exact technology name")] = None,
):
    """
    List websites.

    Returns a JSON array. An empty or missing data file gives [], not an error.
    """
    try:
        service = WebsiteService.from_loader(loader, asset_store)
        if search or tech:
            websites = service.search_websites(search=search, tech=tech)
        else:
            websites = service.get_all_websites()
        content = [w.to_api() for w in websites]
    except Exception as e:
        raise FetchError("Failed to fetch websites", "FETCH_WEBSITES_ERROR", e)

    return cached_json(content)


@router.get("/{website_id}")
async def get_website(website_id: WebsiteId, loader: DataLoaderDep, asset_store: AssetStoreDep):
    """Get one website by id."""
    website_id = _require_id(website_id)

    try:
        service = WebsiteService.from_loader(loader, asset_store)
        website = service.get_website_by_id(website_id)
    except Exception as e:
        raise FetchError("Failed to fetch website", "FETCH_WEBSITE_ERROR", e)

    if website is None:
        raise WebsiteNotFoundError(website_id)

    return cached_json(website.to_api())


# =============================================================================
# Asset Endpoints
# =============================================================================

def _asset_response(
    website_id: str,
    asset_type: AssetType,
    loader: DataLoaderDep,
    asset_store: AssetStoreDep,
):
    website_id = _require_id(website_id)
    kind = asset_type.value

    try:
        service = WebsiteService.from_loader(loader, asset_store)
        data = {
            AssetType.FAVICON: service.get_website_favicon,
            AssetType.LOGO: service.get_website_logo,
            AssetType.SCREENSHOT: service.get_website_screenshot,
        }[asset_type](website_id)
    except Exception as e:
        raise FetchError(f"Failed to fetch {kind}", f"FETCH_{kind.upper()}_ERROR", e)

    if data is None:
        raise AssetNotFoundError(website_id, kind)

    return cached_bytes(data, ASSET_MEDIA_TYPES[asset_type])


@router.get("/{website_id}/favicon")
async def get_favicon(website_id: WebsiteId, loader: DataLoaderDep, asset_store: AssetStoreDep):
    """Favicon bytes (image/x-icon)."""
    return _asset_response(website_id, AssetType.FAVICON, loader, asset_store)


@router.get("/{website_id}/logo")
async def get_logo(website_id: WebsiteId, loader: DataLoaderDep, asset_store: AssetStoreDep):
    """Logo bytes (image/svg+xml)."""
    return _asset_response(website_id, AssetType.LOGO, loader, asset_store)


@router.get("/{website_id}/screenshot")
async def get_screenshot(website_id: WebsiteId, loader: DataLoaderDep, asset_store: AssetStoreDep):
    """Screenshot bytes (image/png)."""
    return _asset_response(website_id, AssetType.SCREENSHOT, loader, asset_store)


# =============================================================================
# Auth / Related Endpoints
# =============================================================================

@router.get("/{website_id}/auth")
async def get_auth_status(website_id: WebsiteId, loader: DataLoaderDep, asset_store: AssetStoreDep):
    """
    Whether a website needs a login and whether credentials are stored.

    Stored usernames and passwords are never returned.
    """
    website_id = _require_id(website_id)

    try:
        service = WebsiteService.from_loader(loader, asset_store)
        status = service.get_auth_status(website_id)
    except Exception as e:
        raise FetchError("Failed to fetch authentication status", "FETCH_AUTH_ERROR", e)

    if status is None:
        raise WebsiteNotFoundError(website_id)

    return cached_json(status.model_dump(mode="json", by_alias=True))


@router.get("/{website_id}/related")
async def get_related_websites(
    website_id: WebsiteId,
    loader: DataLoaderDep,
    asset_store: AssetStoreDep,
    limit: Annotated[int, Query(ge=1, le=20, description="Max websites to return")] = 3,
):
    """Websites sharing the most technologies with this one."""
    website_id = _require_id(website_id)

    try:
        service = WebsiteService.from_loader(loader, asset_store)
        website = service.get_website_by_id(website_id)
        related = (
            find_related_websites(website, service.get_all_websites(), limit=limit)
            if website is not None
            else []
        )
    except Exception as e:
        raise FetchError("Failed to fetch related websites", "FETCH_RELATED_ERROR", e)

    if website is None:
        raise WebsiteNotFoundError(website_id)

    return cached_json([w.to_api() for w in related])


# =============================================================================
# Write Endpoints
# =============================================================================

@router.put("/{website_id}")
async def update_website(
    website_id: WebsiteId,
    updates: Annotated[dict[str, Any], Body(description="Fields to change, camelCase")],
    loader: DataLoaderDep,
    asset_store: AssetStoreDep,
):
    """
    Update a website.

    The id in the path wins over any id in the body; lastUpdated is set
    to now. 400 VALIDATION_ERROR if the merged record is invalid.
    """
    website_id = _require_id(website_id)

    try:
        service = WebsiteService.from_loader(loader, asset_store)
        website = service.update_website(website_id, updates)
    except CatalogException:
        raise
    except Exception as e:
        raise SaveError("Failed to update website", "UPDATE_WEBSITE_ERROR", e)

    if website is None:
        raise WebsiteNotFoundError(website_id)

    return {
        "website": website.to_api(),
        "message": "Website updated successfully",
    }


@router.delete("/{website_id}")
async def delete_website(website_id: WebsiteId, loader: DataLoaderDep, asset_store: AssetStoreDep):
    """Delete a website along with its stored credentials and asset records."""
    website_id = _require_id(website_id)

    try:
        service = WebsiteService.from_loader(loader, asset_store)
        deleted = service.delete_website(website_id)
    except Exception as e:
        raise SaveError("Failed to delete website", "DELETE_WEBSITE_ERROR", e)

    if not deleted:
        raise WebsiteNotFoundError(website_id)

    return {"message": "Website deleted successfully"}


@router.put("/{website_id}/auth")
async def set_auth_credentials(
    website_id: WebsiteId,
    credentials: Annotated[dict[str, Any], Body(description="method plus username/password or oauthProvider")],
    loader: DataLoaderDep,
    asset_store: AssetStoreDep,
):
    """
    Store login credentials for a website.

    Answers with the same secret-free status as GET /auth.
    """
    website_id = _require_id(website_id)

    try:
        service = WebsiteService.from_loader(loader, asset_store)
        stored = service.set_auth_credentials(website_id, credentials)
        status = service.get_auth_status(website_id) if stored is not None else None
    except CatalogException:
        raise
    except Exception as e:
        raise SaveError("Failed to store authentication credentials", "SET_AUTH_ERROR", e)

    if status is None:
        raise WebsiteNotFoundError(website_id)

    return status.model_dump(mode="json", by_alias=True)
