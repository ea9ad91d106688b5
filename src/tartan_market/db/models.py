"""Database models for the marketplace.

Profiles and listings are stored as documents: one row per document, with
list-valued attributes (favorites, tags, images) kept in JSON columns.
Identifiers are opaque hex strings generated at insert time.
"""
import uuid
from enum import Enum

from sqlmodel import JSON, Field, SQLModel

from tartan_market.utils import now_ms


def _new_id() -> str:
    return uuid.uuid4().hex


class ItemType(str, Enum):
    """Listing kinds. Each kind is stored in its own table."""

    MARKETPLACE = "marketplace"
    COMMISSION = "commission"

    @classmethod
    def parse(cls, value: str) -> "ItemType":
        """Parse a listing kind case-insensitively. Raises ValueError if unknown."""
        return cls(value.strip().lower())


class ItemStatus(str, Enum):
    """Conventional marketplace statuses. Stored status is a free-form string."""

    AVAILABLE = "Available"
    PENDING = "Pending"
    SOLD = "Sold"


class ItemCondition(str, Enum):
    NEW = "New"
    LIKE_NEW = "Like New"
    GOOD = "Good"
    FAIR = "Fair"


class FavoriteAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"


class UserProfile(SQLModel, table=True):
    """Internal profile for one external identity."""

    __tablename__ = "users"

    id: str = Field(default_factory=_new_id, primary_key=True)
    clerk_id: str = Field(unique=True, index=True)
    andrew_id: str = Field(unique=True, index=True)
    username: str
    email: str
    avatar_url: str | None = None
    shop_banner: str | None = None
    shop_title: str | None = None
    shop_description: str | None = None
    star_rating: float = Field(default=-1)  # -1 = unrated
    paypal_username: str | None = None
    venmo_username: str | None = None
    zelle_username: str | None = None
    cashapp_username: str | None = None
    favorites: list[str] = Field(default_factory=list, sa_type=JSON)
    created_at: int = Field(default_factory=now_ms)


class ListingBase(SQLModel):
    """Fields shared by both listing kinds."""

    id: str = Field(default_factory=_new_id, primary_key=True)
    seller_id: str = Field(index=True)  # seller's andrewId
    title: str
    description: str
    price: float = Field(ge=0)
    category: str = Field(index=True)  # free-form, e.g. "Clothing", "Art"
    tags: list[str] = Field(default_factory=list, sa_type=JSON)
    images: list[str] = Field(default_factory=list, sa_type=JSON)
    created_at: int = Field(default_factory=now_ms, index=True)


class MarketplaceItem(ListingBase, table=True):
    """A good for sale."""

    __tablename__ = "mp_items"

    condition: str
    status: str = Field(default=ItemStatus.AVAILABLE.value, index=True)


class CommissionItem(ListingBase, table=True):
    """A custom-work offer."""

    __tablename__ = "comm_items"

    is_available: bool = Field(default=True, index=True)
    turnaround_days: int | None = None


Listing = MarketplaceItem | CommissionItem

LISTING_MODELS: dict[ItemType, type[MarketplaceItem] | type[CommissionItem]] = {
    ItemType.MARKETPLACE: MarketplaceItem,
    ItemType.COMMISSION: CommissionItem,
}
