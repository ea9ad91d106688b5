"""Search service: query validation in front of the search provider."""
from tartan_market.errors import BadRequestError
from tartan_market.providers import SearchProviderABC
from tartan_market.schemas import SearchFilters, SearchResult
from tartan_market.services.items_service import parse_item_type

MIN_QUERY_LENGTH = 2


class SearchService:
    """Thin service over a search provider; results pass through unmodified."""

    def __init__(self, provider: SearchProviderABC, *, default_limit: int = 40) -> None:
        self._provider = provider
        self._default_limit = default_limit

    async def search(
        self,
        query: str | None,
        filters: SearchFilters,
        limit: int | None = None,
        *,
        item_type: str | None = None,
    ) -> list[SearchResult]:
        """Validate the query, then the optional kind, then delegate."""
        if not query or len(query) < MIN_QUERY_LENGTH:
            raise BadRequestError(
                f"Search query must be at least {MIN_QUERY_LENGTH} characters long"
            )
        if item_type:
            filters = filters.model_copy(update={"type": parse_item_type(item_type)})
        return await self._provider.search(query, filters, limit or self._default_limit)
