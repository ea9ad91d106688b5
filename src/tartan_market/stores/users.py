"""User directory: profile lookups, creation and favorites."""
import logging
from typing import Any

from sqlmodel import Session, select

from tartan_market.db import UserProfile
from tartan_market.ids import AndrewID, ClerkID, ItemID, UserID

logger = logging.getLogger(__name__)


class UserDirectory:
    """Reads and writes UserProfile documents within one session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: UserID) -> UserProfile | None:
        return self._session.get(UserProfile, user_id)

    def get_by_clerk_id(self, clerk_id: ClerkID) -> UserProfile | None:
        statement = select(UserProfile).where(UserProfile.clerk_id == clerk_id)
        return self._session.exec(statement).first()

    def get_by_andrew_id(self, andrew_id: AndrewID) -> UserProfile | None:
        statement = select(UserProfile).where(UserProfile.andrew_id == andrew_id)
        return self._session.exec(statement).first()

    def create(self, profile: UserProfile) -> UserProfile:
        """Insert a new profile and return it with its generated id."""
        profile.favorites = list(profile.favorites or [])
        self._session.add(profile)
        self._session.commit()
        logger.info("Created profile %s for andrewId %s", profile.id, profile.andrew_id)
        return profile

    def update(self, user_id: UserID, updates: dict[str, Any]) -> UserProfile | None:
        """Merge updates (model attribute names) into a profile."""
        profile = self.get(user_id)
        if profile is None:
            return None
        for key, value in updates.items():
            setattr(profile, key, value)
        self._session.add(profile)
        self._session.commit()
        return profile

    def add_favorite(self, user_id: UserID, item_id: ItemID) -> UserProfile | None:
        """Add an item id to the favorites set. No-op if already present."""
        profile = self.get(user_id)
        if profile is None:
            return None
        if item_id not in profile.favorites:
            # Reassign so the JSON column is marked dirty.
            profile.favorites = [*profile.favorites, item_id]
            self._session.add(profile)
            self._session.commit()
        return profile

    def remove_favorite(self, user_id: UserID, item_id: ItemID) -> UserProfile | None:
        """Remove an item id from the favorites set. No-op if absent."""
        profile = self.get(user_id)
        if profile is None:
            return None
        if item_id in profile.favorites:
            profile.favorites = [f for f in profile.favorites if f != item_id]
            self._session.add(profile)
            self._session.commit()
        return profile
