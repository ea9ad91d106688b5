from tartan_market.providers.identity.clerk.clerk_provider import \
    ClerkIdentityProvider
from tartan_market.providers.identity.clerk.models import (ClerkEmailAddress,
                                                           ClerkUser)

__all__ = ["ClerkEmailAddress", "ClerkIdentityProvider", "ClerkUser"]
