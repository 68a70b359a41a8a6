# =============================================================================
# app/routers/ - Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - index.py: HTML page actions (home, locale switch)
# - health.py: Health check endpoints
#
# Each router is mounted in main.py. Route names double as URL names for
# the url() template helper.
# =============================================================================

from . import health
from . import index

__all__ = [
    "health",
    "index",
]
