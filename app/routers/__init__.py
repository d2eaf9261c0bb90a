# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check and configuration report endpoints
# - recipes.py: Recipe extraction, formatting and export endpoints
# - profile.py: Profile and usage endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import recipes
from . import profile

__all__ = [
    "health",
    "recipes",
    "profile",
]
