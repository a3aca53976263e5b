# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - projects.py: Project listing (public) and CRUD (admin)
# - uploads.py: Screenshot upload and discard endpoints (admin)
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import projects
from . import uploads

__all__ = [
    "health",
    "projects",
    "uploads",
]
