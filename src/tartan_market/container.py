"""DI container: the composition root for settings, database and providers.

create_app() stores a Container on app.state; dependencies.py resolves
providers from it per request. Tests override providers before the app
starts, e.g. container.identity_provider.override(providers.Object(fake)).
"""
from dependency_injector import containers, providers

from tartan_market.config import get_settings
from tartan_market.db.sessions import create_db_engine
from tartan_market.providers import (ClerkIdentityProvider,
                                     StoreSearchProvider,
                                     SupabaseStorageProvider)


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(get_settings)

    engine = providers.Singleton(
        create_db_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.sql_echo,
    )

    identity_provider = providers.Singleton(
        ClerkIdentityProvider,
        secret_key=settings.provided.clerk_secret_key,
        jwt_key=settings.provided.clerk_jwt_key,
        api_url=settings.provided.clerk_api_url,
        authorized_parties=settings.provided.authorized_parties,
    )

    storage_provider = providers.Singleton(
        SupabaseStorageProvider,
        url=settings.provided.supabase_url,
        service_key=settings.provided.supabase_service_role_key,
        bucket=settings.provided.storage_bucket,
    )

    search_provider = providers.Singleton(StoreSearchProvider, engine)
