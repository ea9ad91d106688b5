"""Service layer: the API-boundary contract over stores and providers.

Services raise domain errors (tartan_market.errors); the application maps
them to JSON responses.
"""
from tartan_market.services.items_service import ItemsService, parse_item_type
from tartan_market.services.search_service import SearchService
from tartan_market.services.uploads_service import (ALLOWED_IMAGE_TYPES,
                                                    ImageUpload,
                                                    UploadsService)
from tartan_market.services.users_service import (UsersService,
                                                  andrew_id_from_email,
                                                  require_profile)

__all__ = [
    "ALLOWED_IMAGE_TYPES",
    "ImageUpload",
    "ItemsService",
    "SearchService",
    "UploadsService",
    "UsersService",
    "andrew_id_from_email",
    "parse_item_type",
    "require_profile",
]
