"""Abstract base class for blob storage providers."""
from abc import abstractmethod

from tartan_market.providers.core import ProviderABC


class StorageProviderABC(ProviderABC):
    """Stores uploaded files and returns retrievable URLs."""

    @abstractmethod
    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store bytes at path and return a URL clients can fetch."""

    @abstractmethod
    async def delete(self, paths: list[str]) -> None:
        """Delete stored objects by path."""
