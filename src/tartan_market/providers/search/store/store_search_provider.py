"""Search provider that queries the listing tables directly."""
import asyncio
from collections.abc import Iterable

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from tartan_market.db import (LISTING_MODELS, CommissionItem, ItemType,
                              Listing, MarketplaceItem)
from tartan_market.providers.search.search_provider_abc import \
    SearchProviderABC
from tartan_market.schemas import SearchFilters, SearchResult
from tartan_market.stores import available_clause


def matches_text(item: Listing, needle: str) -> bool:
    """Case-insensitive substring match on title, description or any tag."""
    if needle in (item.title or "").lower():
        return True
    if needle in (item.description or "").lower():
        return True
    return any(needle in tag.lower() for tag in item.tags or [])


def to_search_result(item_type: ItemType, item: Listing) -> SearchResult:
    return SearchResult(type=item_type, **item.model_dump())


class StoreSearchProvider(SearchProviderABC):
    """Search over available listings in the document tables.

    Filters that map to columns are pushed into SQL; the text match runs in
    Python so it can cover tags stored as JSON. Each kind contributes at most
    `limit` results.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def search(
        self, query: str, filters: SearchFilters, limit: int = 40
    ) -> list[SearchResult]:
        return await asyncio.to_thread(self._search, query, filters, limit)

    def _search(self, query: str, filters: SearchFilters, limit: int) -> list[SearchResult]:
        needle = query.lower()
        kinds = [filters.type] if filters.type else list(ItemType)
        results: list[SearchResult] = []
        with Session(self._engine) as session:
            for item_type in kinds:
                rows = session.exec(self._statement(item_type, filters))
                results.extend(
                    to_search_result(item_type, item)
                    for item in _take(rows, needle, limit)
                )
        results.sort(key=lambda r: r.created_at, reverse=True)
        return results

    @staticmethod
    def _statement(item_type: ItemType, filters: SearchFilters):
        model = LISTING_MODELS[item_type]
        statement = select(model).where(available_clause(item_type))
        if filters.category:
            statement = statement.where(model.category == filters.category)
        if filters.min_price is not None:
            statement = statement.where(model.price >= filters.min_price)
        if filters.max_price is not None:
            statement = statement.where(model.price <= filters.max_price)
        if item_type is ItemType.MARKETPLACE and filters.condition:
            statement = statement.where(MarketplaceItem.condition == filters.condition)
        if item_type is ItemType.COMMISSION and filters.max_turnaround_days is not None:
            statement = statement.where(
                CommissionItem.turnaround_days.is_not(None),
                CommissionItem.turnaround_days <= filters.max_turnaround_days,
            )
        return statement.order_by(model.created_at.desc())


def _take(rows: Iterable[Listing], needle: str, limit: int) -> list[Listing]:
    matched: list[Listing] = []
    for item in rows:
        if len(matched) >= limit:
            break
        if matches_text(item, needle):
            matched.append(item)
    return matched
