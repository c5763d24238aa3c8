"""HTTP controllers for web API endpoints.

All operations are read-only or prepare deposit instructions for the user.
"""

from swapquote.web.controllers.assets import router as assets_router
from swapquote.web.controllers.status import router as status_router
from swapquote.web.controllers.swaps import router as swaps_router

__all__ = [
    "swaps_router",
    "status_router",
    "assets_router",
]
