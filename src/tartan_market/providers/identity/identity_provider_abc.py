"""Abstract base class for identity providers."""
from abc import abstractmethod

from tartan_market.ids import ClerkID
from tartan_market.providers.core import ProviderABC
from tartan_market.providers.identity.clerk.models import ClerkUser


class IdentityProviderABC(ProviderABC):
    """Authenticates sessions and serves canonical user records."""

    @abstractmethod
    def verify_session_token(self, token: str) -> ClerkID | None:
        """Return the external identity for a session token, or None if invalid."""

    @abstractmethod
    async def get_user(self, clerk_id: ClerkID) -> ClerkUser:
        """Fetch the canonical user record from the provider's server API."""
