"""Clerk identity provider: session token verification and user lookup."""
import logging

import httpx
from jose import JWTError, jwt

from tartan_market.ids import ClerkID
from tartan_market.providers.identity.clerk.models import ClerkUser
from tartan_market.providers.identity.identity_provider_abc import \
    IdentityProviderABC

logger = logging.getLogger(__name__)


class ClerkIdentityProvider(IdentityProviderABC):
    """Identity provider backed by Clerk.

    Session tokens are RS256 JWTs verified locally against the instance's
    PEM public key (CLERK_JWT_KEY); the `sub` claim is the Clerk user id.
    User records come from the Clerk backend API, authenticated with the
    server-held secret key.
    """

    BASE_URL = "https://api.clerk.com/v1"

    def __init__(
        self,
        secret_key: str,
        jwt_key: str,
        *,
        api_url: str | None = None,
        authorized_parties: list[str] | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Clerk provider.

        Args:
            secret_key: Clerk secret key for the backend API.
            jwt_key: PEM public key for networkless session verification.
            api_url: Backend API base URL (defaults to the public Clerk API).
            authorized_parties: Origins accepted in the `azp` claim; empty accepts any.
            timeout: HTTP timeout in seconds.
            client: Optional preconfigured client (tests inject a mock transport).
        """
        self._jwt_key = jwt_key
        self._authorized_parties = authorized_parties or []
        headers = {"Accept": "application/json"}
        if secret_key:
            headers["Authorization"] = f"Bearer {secret_key}"
        self._client = client or httpx.AsyncClient(
            base_url=api_url or self.BASE_URL, headers=headers, timeout=timeout
        )

    def verify_session_token(self, token: str) -> ClerkID | None:
        if not self._jwt_key:
            logger.warning("CLERK_JWT_KEY not set; rejecting session token")
            return None
        try:
            claims = jwt.decode(
                token,
                self._jwt_key,
                algorithms=["RS256"],
                options={"verify_aud": False},
            )
        except JWTError as exc:
            logger.debug("Session token rejected: %s", exc)
            return None

        azp = claims.get("azp")
        if self._authorized_parties and azp and azp not in self._authorized_parties:
            logger.debug("Session token rejected: unexpected azp %s", azp)
            return None

        subject = claims.get("sub")
        return ClerkID(subject) if subject else None

    async def get_user(self, clerk_id: ClerkID) -> ClerkUser:
        response = await self._client.get(f"/users/{clerk_id}")
        response.raise_for_status()
        return ClerkUser.model_validate(response.json())

    async def close(self) -> None:
        await self._client.aclose()
