"""Base class for external service providers."""
from abc import ABC


class ProviderABC(ABC):
    """Lifecycle shared by all providers.

    Providers that hold network clients override close(); the application
    lifespan closes every provider on shutdown.
    """

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "ProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
