from tartan_market.providers.search.store.store_search_provider import \
    StoreSearchProvider

__all__ = ["StoreSearchProvider"]
