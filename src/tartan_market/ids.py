"""Identifier kinds. Each is a distinct type so they cannot be mixed up."""
from typing import NewType

ClerkID = NewType("ClerkID", str)
AndrewID = NewType("AndrewID", str)
ItemID = NewType("ItemID", str)
UserID = NewType("UserID", str)

__all__ = ["AndrewID", "ClerkID", "ItemID", "UserID"]
