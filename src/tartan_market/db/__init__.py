"""Database package: models and session management."""
from tartan_market.db.models import (
    LISTING_MODELS,
    CommissionItem,
    FavoriteAction,
    ItemCondition,
    ItemStatus,
    ItemType,
    Listing,
    MarketplaceItem,
    UserProfile,
)

__all__ = [
    "LISTING_MODELS",
    "CommissionItem",
    "FavoriteAction",
    "ItemCondition",
    "ItemStatus",
    "ItemType",
    "Listing",
    "MarketplaceItem",
    "UserProfile",
]
