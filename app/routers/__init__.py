# =============================================================================
# app/routers/ - Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - collection.py: Document CRUD over content collections
# - media.py: Image upload endpoint
# - revalidate.py: Manual site revalidation
# - admin.py: Server-rendered admin panel
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import admin
from . import collection
from . import health
from . import media
from . import revalidate

__all__ = [
    "admin",
    "collection",
    "health",
    "media",
    "revalidate",
]
