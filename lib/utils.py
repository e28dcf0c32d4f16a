# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from urllib.parse import urlparse


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now_iso() -> str:
    """
    Current UTC time as an ISO-8601 string with millisecond precision.

    Example:
        utc_now_iso()  # "2025-01-27T10:00:00.123Z"
    """
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


# =============================================================================
# URL Utilities
# =============================================================================

def extract_name_from_url(url: str) -> str:
    """
    Derive a display name from a website URL.

    Strips a leading "www." and keeps the first label of the hostname.

    Example:
        extract_name_from_url("https://www.example.com/app")  # "example"
        extract_name_from_url("not a url")                    # "Unknown Website"
    """
    hostname = urlparse(url).hostname
    if not hostname:
        return "Unknown Website"
    if hostname.startswith("www."):
        hostname = hostname[4:]
    return hostname.split(".")[0]
