"""Providers for the external services the marketplace delegates to.

- Identity: ClerkIdentityProvider verifies session tokens and serves user records
- Storage: SupabaseStorageProvider stores listing images
- Search: StoreSearchProvider answers listing queries

Each provider implements an ABC so tests and deployments can swap the
concrete service. Providers are async context managers:

Example:
    async with SupabaseStorageProvider(url, key, "listings") as storage:
        url = await storage.upload("items/u1/1-0-a.png", data, "image/png")
"""
from tartan_market.providers.core import (PROVIDER_EXCEPTIONS, ProviderABC,
                                          ProviderErrorMapper)
from tartan_market.providers.identity import (ClerkIdentityProvider, ClerkUser,
                                              IdentityProviderABC)
from tartan_market.providers.search import (SearchProviderABC,
                                            StoreSearchProvider)
from tartan_market.providers.storage import (StorageProviderABC,
                                             SupabaseStorageProvider)

__all__ = [
    "PROVIDER_EXCEPTIONS",
    "ClerkIdentityProvider",
    "ClerkUser",
    "IdentityProviderABC",
    "ProviderABC",
    "ProviderErrorMapper",
    "SearchProviderABC",
    "StorageProviderABC",
    "StoreSearchProvider",
    "SupabaseStorageProvider",
]
