"""Items service: listing creation, status changes and public reads.

Authorization and validation run in a fixed order before any write:
caller profile, item kind, item existence, ownership, then body shape.
"""
import logging
import math
from typing import Any

from tartan_market.db import (CommissionItem, ItemCondition, ItemStatus,
                              ItemType, Listing, MarketplaceItem)
from tartan_market.errors import (BadRequestError, ForbiddenError,
                                  NotFoundError)
from tartan_market.ids import AndrewID, ClerkID, ItemID
from tartan_market.providers.search.store.store_search_provider import \
    to_search_result
from tartan_market.schemas import (CommissionItemOut, ListingOut,
                                   MarketplaceItemOut, SearchResult)
from tartan_market.services.users_service import require_profile
from tartan_market.stores import ListingStore, UserDirectory
from tartan_market.utils import dedupe

logger = logging.getLogger(__name__)

MAX_LISTING_IMAGES = 5


def parse_item_type(value: str | None) -> ItemType:
    """Parse a listing kind from a path or body. Raises BadRequestError if unknown."""
    if not isinstance(value, str):
        raise BadRequestError("Invalid item type")
    try:
        return ItemType.parse(value)
    except ValueError:
        raise BadRequestError("Invalid item type") from None


def to_listing_out(item_type: ItemType, item: Listing) -> ListingOut:
    if item_type is ItemType.MARKETPLACE:
        return MarketplaceItemOut.model_validate(item)
    return CommissionItemOut.model_validate(item)


def _coerce_price(value: Any) -> float:
    if isinstance(value, bool):
        raise BadRequestError("Invalid price")
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise BadRequestError("Invalid price") from None
    if not math.isfinite(price) or price < 0:
        raise BadRequestError("Invalid price")
    return price


def _string_list(value: Any, field: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise BadRequestError(f"Invalid {field}")
    return value


class ItemsService:
    """Listing operations behind the API boundary."""

    def __init__(
        self,
        listings: ListingStore,
        users: UserDirectory,
        *,
        max_images: int = MAX_LISTING_IMAGES,
    ) -> None:
        self._listings = listings
        self._users = users
        self._max_images = max_images

    def create_item(self, clerk_id: ClerkID, body: dict[str, Any]) -> ItemID:
        """Validate and store a new listing owned by the caller; return its id."""
        seller = require_profile(self._users, clerk_id)
        item_type = parse_item_type(body.get("type"))

        title = body.get("title")
        description = body.get("description")
        price = body.get("price")
        category = body.get("category")
        images = body.get("images")
        if not title or not description or not price or not category or not images:
            raise BadRequestError("Missing required fields")
        for field, value in (("title", title), ("description", description), ("category", category)):
            if not isinstance(value, str):
                raise BadRequestError(f"Invalid {field}")

        images = _string_list(images, "images")
        if len(images) > self._max_images:
            raise BadRequestError(f"Maximum {self._max_images} images allowed")
        tags = body.get("tags")
        tags = dedupe(_string_list(tags, "tags")) if tags is not None else []

        base = {
            "seller_id": seller.andrew_id,
            "title": title,
            "description": description,
            "price": _coerce_price(price),
            "category": category,
            "tags": tags,
            "images": images,
        }

        if item_type is ItemType.MARKETPLACE:
            condition = body.get("condition")
            if not condition:
                raise BadRequestError("Condition required for marketplace items")
            if condition not in {c.value for c in ItemCondition}:
                raise BadRequestError("Invalid condition")
            return self._listings.create_marketplace(
                MarketplaceItem(**base, condition=condition, status=ItemStatus.AVAILABLE.value)
            )

        turnaround = body.get("turnaroundDays")
        if turnaround is not None and (
            isinstance(turnaround, bool) or not isinstance(turnaround, int) or turnaround <= 0
        ):
            raise BadRequestError("Invalid turnaroundDays")
        return self._listings.create_commission(
            CommissionItem(**base, is_available=True, turnaround_days=turnaround)
        )

    def update_status(
        self, clerk_id: ClerkID, type_name: str, item_id: ItemID, body: dict[str, Any]
    ) -> None:
        """Owner-only status/availability change.

        Marketplace status is written verbatim; there is no transition graph.
        """
        caller = require_profile(self._users, clerk_id)
        item_type = parse_item_type(type_name)
        item = self._listings.get(item_type, item_id)
        if item is None:
            raise NotFoundError("Item not found")
        if item.seller_id != caller.andrew_id:
            raise ForbiddenError("Unauthorized - not item owner")

        if item_type is ItemType.COMMISSION:
            is_available = body.get("isAvailable")
            if not isinstance(is_available, bool):
                raise BadRequestError("Invalid isAvailable value")
            self._listings.set_availability(item_id, is_available)
        else:
            status = body.get("status")
            if not isinstance(status, str) or not status:
                raise BadRequestError("Status is required")
            self._listings.update_status(item_id, status)
        logger.info("Item %s (%s) status updated by %s", item_id, item_type.value, caller.andrew_id)

    def list_by_seller(self, andrew_id: AndrewID, type_name: str) -> list[ListingOut]:
        item_type = parse_item_type(type_name)
        return [
            to_listing_out(item_type, item)
            for item in self._listings.list_by_seller(item_type, andrew_id)
        ]

    def get_item(self, type_name: str, item_id: ItemID) -> ListingOut:
        item_type = parse_item_type(type_name)
        item = self._listings.get(item_type, item_id)
        if item is None:
            raise NotFoundError("Item not found")
        return to_listing_out(item_type, item)

    def latest_items(self, type_name: str, limit: int = 10) -> list[ListingOut]:
        item_type = parse_item_type(type_name)
        return [to_listing_out(item_type, item) for item in self._listings.latest(item_type, limit)]

    def similar_items(self, type_name: str, item_id: ItemID, limit: int = 8) -> list[SearchResult]:
        item_type = parse_item_type(type_name)
        item = self._listings.get(item_type, item_id)
        if item is None:
            raise NotFoundError("Item not found")
        return [
            to_search_result(item_type, similar)
            for similar in self._listings.similar(item_type, item, limit)
        ]
