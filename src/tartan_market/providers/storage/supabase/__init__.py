from tartan_market.providers.storage.supabase.supabase_storage_provider import \
    SupabaseStorageProvider

__all__ = ["SupabaseStorageProvider"]
