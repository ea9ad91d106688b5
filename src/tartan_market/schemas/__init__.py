"""Pydantic schemas for API responses and provider results. Not persisted to DB.

Wire names are camelCase; Python attributes stay snake_case.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tartan_market.db import ItemType


class CamelModel(BaseModel):
    """Base for wire models: camelCase aliases, built from ORM rows."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class PublicProfile(CamelModel):
    """Profile as other users see it: no internal ids, no favorites."""

    andrew_id: str
    username: str
    email: str
    avatar_url: str | None = None
    shop_banner: str | None = None
    shop_title: str | None = None
    shop_description: str | None = None
    star_rating: float = -1
    paypal_username: str | None = None
    venmo_username: str | None = None
    zelle_username: str | None = None
    cashapp_username: str | None = None
    created_at: int


class OwnProfile(PublicProfile):
    """Profile as its owner sees it: public fields plus favorites."""

    favorites: list[str] = Field(default_factory=list)


class ListingOut(CamelModel):
    id: str
    seller_id: str
    title: str
    description: str
    price: float
    category: str
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    created_at: int


class MarketplaceItemOut(ListingOut):
    condition: str
    status: str


class CommissionItemOut(ListingOut):
    is_available: bool
    turnaround_days: int | None = None


class SearchFilters(CamelModel):
    """Optional predicates applied by the search provider."""

    min_price: float | None = None
    max_price: float | None = None
    category: str | None = None
    condition: str | None = None
    max_turnaround_days: int | None = None
    type: ItemType | None = None


class SearchResult(CamelModel):
    """Listing projection tagged with its kind; computed per query."""

    id: str
    type: ItemType
    title: str
    description: str
    price: float
    category: str
    seller_id: str
    images: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    created_at: int
    # Marketplace only
    status: str | None = None
    condition: str | None = None
    # Commission only
    is_available: bool | None = None
    turnaround_days: int | None = None


class SuccessResponse(CamelModel):
    success: bool = True


class CreateItemResponse(SuccessResponse):
    item_id: str


class SyncResponse(SuccessResponse):
    user: OwnProfile


class UploadResponse(CamelModel):
    urls: list[str]


class SearchResponse(CamelModel):
    results: list[SearchResult]


__all__ = [
    "CamelModel",
    "CommissionItemOut",
    "CreateItemResponse",
    "ListingOut",
    "MarketplaceItemOut",
    "OwnProfile",
    "PublicProfile",
    "SearchFilters",
    "SearchResponse",
    "SearchResult",
    "SuccessResponse",
    "SyncResponse",
    "UploadResponse",
]
