"""Listing store: Marketplace and Commission items, one table per kind."""
import logging

from sqlalchemy import true
from sqlmodel import Session, select

from tartan_market.db import (LISTING_MODELS, CommissionItem, ItemStatus,
                              ItemType, Listing, MarketplaceItem)
from tartan_market.ids import AndrewID, ItemID

logger = logging.getLogger(__name__)

# Candidates fetched when ranking similar items.
SIMILAR_CANDIDATES = 20


def available_clause(item_type: ItemType):
    """SQL predicate for listings that are currently offered."""
    if item_type is ItemType.MARKETPLACE:
        return MarketplaceItem.status == ItemStatus.AVAILABLE.value
    return CommissionItem.is_available == true()


class ListingStore:
    """Reads and writes listings within one session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, item_type: ItemType, item_id: ItemID) -> Listing | None:
        return self._session.get(LISTING_MODELS[item_type], item_id)

    def list_by_seller(self, item_type: ItemType, seller_id: AndrewID) -> list[Listing]:
        model = LISTING_MODELS[item_type]
        statement = (
            select(model)
            .where(model.seller_id == seller_id)
            .order_by(model.created_at.desc())
        )
        return list(self._session.exec(statement).all())

    def create_marketplace(self, item: MarketplaceItem) -> ItemID:
        if not item.status:
            item.status = ItemStatus.AVAILABLE.value
        return self._insert(item)

    def create_commission(self, item: CommissionItem) -> ItemID:
        if item.is_available is None:
            item.is_available = True
        return self._insert(item)

    def _insert(self, item: Listing) -> ItemID:
        self._session.add(item)
        self._session.commit()
        logger.info("Created %s item %s for seller %s", type(item).__name__, item.id, item.seller_id)
        return ItemID(item.id)

    def update_status(self, item_id: ItemID, status: str) -> None:
        """Overwrite a marketplace item's status."""
        item = self._session.get(MarketplaceItem, item_id)
        if item is None:
            raise KeyError(item_id)
        item.status = status
        self._session.add(item)
        self._session.commit()

    def set_availability(self, item_id: ItemID, is_available: bool) -> None:
        """Overwrite a commission item's availability flag."""
        item = self._session.get(CommissionItem, item_id)
        if item is None:
            raise KeyError(item_id)
        item.is_available = is_available
        self._session.add(item)
        self._session.commit()

    def latest(self, item_type: ItemType, limit: int = 10) -> list[Listing]:
        """Newest available listings of a kind."""
        model = LISTING_MODELS[item_type]
        statement = (
            select(model)
            .where(available_clause(item_type))
            .order_by(model.created_at.desc())
            .limit(limit)
        )
        return list(self._session.exec(statement).all())

    def similar(self, item_type: ItemType, item: Listing, limit: int = 8) -> list[Listing]:
        """Available listings in the same category, ranked by shared tags then recency."""
        model = LISTING_MODELS[item_type]
        statement = (
            select(model)
            .where(model.category == item.category)
            .where(model.id != item.id)
            .where(available_clause(item_type))
            .order_by(model.created_at.desc())
            .limit(SIMILAR_CANDIDATES)
        )
        candidates = list(self._session.exec(statement).all())
        tags = set(item.tags or [])
        candidates.sort(
            key=lambda c: (len(tags.intersection(c.tags or [])), c.created_at),
            reverse=True,
        )
        return candidates[:limit]
