"""Domain concept for mapping provider exceptions to domain errors."""
import asyncio
import logging
from dataclasses import dataclass

import httpx
from supabase import StorageException

from tartan_market.errors import UpstreamError

logger = logging.getLogger(__name__)

# Exceptions raised by providers that we treat as upstream failures;
# all others propagate (e.g. bugs) and become a generic 500.
PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.HTTPError,
    StorageException,
    TimeoutError,
    asyncio.TimeoutError,
    OSError,
    ValueError,
    KeyError,
)


@dataclass(frozen=True)
class ProviderErrorMapper:
    """Maps provider/backend exceptions to UpstreamError.

    Inject this into services to centralize error mapping per external
    service (identity provider, storage) with a client-facing message and
    status. Original exceptions are logged, never shown to the client.
    """

    api_name: str = "API"
    message: str | None = None
    status_code: int = 502

    def to_error(self, exc: Exception) -> UpstreamError:
        """Map a provider exception to an UpstreamError.

        Timeouts map to 504 unless a fixed status is configured for the
        service; everything else uses the configured status.
        """
        if isinstance(exc, httpx.HTTPStatusError):
            logger.error(
                "%s returned %s for %s",
                self.api_name,
                exc.response.status_code,
                exc.request.url,
            )
        else:
            logger.error("%s call failed: %r", self.api_name, exc)

        message = self.message or f"{self.api_name} error"
        if self.status_code == 502 and isinstance(
            exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)
        ):
            return UpstreamError(message, status_code=504)
        return UpstreamError(message, status_code=self.status_code)

    def raise_error(self, exc: Exception) -> None:
        """Map provider exception and raise it. Never returns."""
        raise self.to_error(exc) from exc
