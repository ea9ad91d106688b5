"""Supabase Storage provider for listing images."""
import logging

from supabase import AsyncClient, acreate_client

from tartan_market.providers.storage.storage_provider_abc import \
    StorageProviderABC

logger = logging.getLogger(__name__)


class SupabaseStorageProvider(StorageProviderABC):
    """Blob storage via the Supabase client.

    Objects are written to a public bucket with the service role key and
    served from the bucket's public URL. The async client is created on
    first use.
    """

    def __init__(
        self,
        url: str,
        service_key: str,
        bucket: str,
        *,
        client: AsyncClient | None = None,
    ) -> None:
        """Initialize the storage provider.

        Args:
            url: Supabase project URL (e.g. https://xyz.supabase.co).
            service_key: Service role key; bypasses row level security.
            bucket: Bucket that holds listing images.
            client: Optional preconfigured client (tests inject a fake).
        """
        if not client and (not url or not service_key):
            logger.warning("SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY not set. Storage operations will fail.")
        self._url = url
        self._service_key = service_key
        self._bucket = bucket
        self._client = client

    async def _storage_bucket(self):
        if self._client is None:
            self._client = await acreate_client(self._url, self._service_key)
        return self._client.storage.from_(self._bucket)

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        logger.info("Uploading to storage: bucket=%s, path=%s, size=%d", self._bucket, path, len(data))
        bucket = await self._storage_bucket()
        await bucket.upload(
            path=path,
            file=data,
            file_options={"content-type": content_type, "upsert": "false"},
        )
        return await bucket.get_public_url(path)

    async def delete(self, paths: list[str]) -> None:
        if not paths:
            return
        bucket = await self._storage_bucket()
        await bucket.remove(paths)
        logger.info("Deleted %d files from storage: bucket=%s", len(paths), self._bucket)
