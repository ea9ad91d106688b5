"""Stores over the document tables: user directory and listing store."""
from tartan_market.stores.listings import ListingStore, available_clause
from tartan_market.stores.users import UserDirectory

__all__ = ["ListingStore", "UserDirectory", "available_clause"]
