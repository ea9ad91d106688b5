"""Abstract base class for listing search providers."""
from abc import abstractmethod

from tartan_market.providers.core import ProviderABC
from tartan_market.schemas import SearchFilters, SearchResult


class SearchProviderABC(ProviderABC):
    """Full-text query over listings with filter predicates."""

    @abstractmethod
    async def search(
        self, query: str, filters: SearchFilters, limit: int = 40
    ) -> list[SearchResult]:
        """Return listings matching query and filters, newest first.

        Args:
            query: Free text matched against titles, descriptions and tags.
            filters: Optional price, category, condition, turnaround and kind predicates.
            limit: Maximum results per listing kind.
        """
