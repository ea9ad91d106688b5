from tartan_market.providers.search.search_provider_abc import \
    SearchProviderABC
from tartan_market.providers.search.store import StoreSearchProvider

__all__ = ["SearchProviderABC", "StoreSearchProvider"]
