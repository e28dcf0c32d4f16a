# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - websites.py: Website listing, lookup, asset bytes, auth status, related
# - assets.py: Asset metadata per website
# - tech_stack.py: Tech stack summary and category statistics
# - cache.py: Data cache inspection and clearing
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import websites
from . import assets
from . import tech_stack
from . import cache

__all__ = [
    "health",
    "websites",
    "assets",
    "tech_stack",
    "cache",
]
