from tartan_market.providers.identity.clerk import (ClerkEmailAddress,
                                                    ClerkIdentityProvider,
                                                    ClerkUser)
from tartan_market.providers.identity.identity_provider_abc import \
    IdentityProviderABC

__all__ = [
    "ClerkEmailAddress",
    "ClerkIdentityProvider",
    "ClerkUser",
    "IdentityProviderABC",
]
