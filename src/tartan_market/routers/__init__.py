"""API routers.

Includes routes for:
- /items - Listing creation, status updates and public reads
- /users - Profiles, favorites, profile sync and seller listings
- /search - Listing search
- /upload - Listing image uploads
"""
from tartan_market.routers.items import router as items_router
from tartan_market.routers.search import router as search_router
from tartan_market.routers.uploads import router as uploads_router
from tartan_market.routers.users import router as users_router

__all__ = [
    "items_router",
    "search_router",
    "uploads_router",
    "users_router",
]
