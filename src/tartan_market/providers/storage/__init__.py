from tartan_market.providers.storage.storage_provider_abc import \
    StorageProviderABC
from tartan_market.providers.storage.supabase import SupabaseStorageProvider

__all__ = ["StorageProviderABC", "SupabaseStorageProvider"]
