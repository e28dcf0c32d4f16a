# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Taxonomy:
# - MissingIdError (400): a required id is empty
# - ValidationFailedError (400): a write carries invalid data
# - *NotFoundError (404): the entity is absent
# - FetchError (500):     reading or composing data failed unexpectedly
# - SaveError (500):      writing data failed unexpectedly
# - TechStackError (500): same, for the tech-stack endpoints' error shape
#
# A missing or corrupt data file is NOT an exception; the loader degrades
# it to an empty dataset before anything here is involved.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CatalogException(Exception):
    """
    Base exception for the catalog API.

    Serializes to {message, code} plus details when present.
    """

    def __init__(
        self,
        message: str,
        code: str = "CATALOG_ERROR",
        status_code: int = 500,
        details: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "message": self.message,
            "code": self.code,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class MissingIdError(CatalogException):
    """Raised when a route's id parameter is empty."""

    def __init__(self):
        super().__init__(
            message="Website ID is required",
            code="MISSING_ID",
            status_code=400,
        )


class ValidationFailedError(CatalogException):
    """Raised when a write carries data that fails validation."""

    def __init__(self, errors: list[str]):
        super().__init__(
            message="Validation failed",
            code="VALIDATION_ERROR",
            status_code=400,
            details="; ".join(errors),
        )
        self.errors = errors


# =============================================================================
# Not Found Exceptions
# =============================================================================

class NotFoundError(CatalogException):
    """Base for 404 responses."""

    def __init__(self, message: str, code: str):
        super().__init__(message=message, code=code, status_code=404)


class WebsiteNotFoundError(NotFoundError):
    """Raised when a website ID doesn't exist."""

    def __init__(self, website_id: str):
        super().__init__(message="Website not found", code="WEBSITE_NOT_FOUND")
        self.website_id = website_id


class AssetNotFoundError(NotFoundError):
    """Raised when a website has no asset of the requested kind (or doesn't exist)."""

    def __init__(self, website_id: str, kind: str):
        super().__init__(
            message=f"{kind.capitalize()} not found",
            code=f"{kind.upper()}_NOT_FOUND",
        )
        self.website_id = website_id
        self.kind = kind


# =============================================================================
# Fetch Exceptions
# =============================================================================

class FetchError(CatalogException):
    """
    Raised when loading or composing data fails unexpectedly.

    details carries the underlying error's text for diagnostics.
    """

    def __init__(self, message: str, code: str, error: BaseException | str | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=500,
            details=_error_text(error),
        )


class SaveError(FetchError):
    """Raised when writing catalog data fails unexpectedly."""


class TechStackError(CatalogException):
    """
    500 from the tech-stack endpoints.

    These answer {error, message, details} instead of {message, code}.
    """

    def __init__(self, error: str, message: str, cause: BaseException | str | None = None):
        super().__init__(
            message=message,
            code=error,
            status_code=500,
            details=_error_text(cause),
        )
        self.error = error

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "message": self.message,
            "details": self.details,
        }


def _error_text(error: BaseException | str | None) -> str:
    if error is None:
        return "Unknown error"
    return str(error) or type(error).__name__


# =============================================================================
# Exception Handlers
# =============================================================================

async def catalog_exception_handler(
    request: Request,
    exc: CatalogException
) -> JSONResponse:
    """Convert CatalogException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Last-resort handler for exceptions no route converted."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
