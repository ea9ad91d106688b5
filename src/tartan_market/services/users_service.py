"""Users service: profile projections, favorites, profile updates and sync."""
import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from tartan_market.db import FavoriteAction, UserProfile
from tartan_market.errors import BadRequestError, NotFoundError
from tartan_market.ids import AndrewID, ClerkID, ItemID, UserID
from tartan_market.providers import (PROVIDER_EXCEPTIONS, IdentityProviderABC,
                                     ProviderErrorMapper)
from tartan_market.schemas import OwnProfile, PublicProfile
from tartan_market.stores import UserDirectory

logger = logging.getLogger(__name__)

# Wire name -> model attribute for fields an owner may change.
MUTABLE_PROFILE_FIELDS: dict[str, str] = {
    "username": "username",
    "avatarUrl": "avatar_url",
    "shopBanner": "shop_banner",
    "shopTitle": "shop_title",
    "shopDescription": "shop_description",
    "paypalUsername": "paypal_username",
    "venmoUsername": "venmo_username",
    "zelleUsername": "zelle_username",
    "cashappUsername": "cashapp_username",
}


def require_profile(users: UserDirectory, clerk_id: ClerkID) -> UserProfile:
    """Resolve the authenticated caller's profile. Raises NotFoundError if absent."""
    profile = users.get_by_clerk_id(clerk_id)
    if profile is None:
        raise NotFoundError("User not found")
    return profile


def andrew_id_from_email(email: str) -> AndrewID:
    """The handle is the email local-part."""
    return AndrewID(email.split("@", 1)[0])


class UsersService:
    """Profile operations behind the API boundary.

    Injected with the user directory for the request and the identity
    provider used by sync, so tests can swap either.
    """

    def __init__(
        self,
        users: UserDirectory,
        identity: IdentityProviderABC,
        *,
        default_avatar_url: str,
        error_mapper: ProviderErrorMapper | None = None,
    ) -> None:
        self._users = users
        self._identity = identity
        self._default_avatar_url = default_avatar_url
        self._error_mapper = error_mapper or ProviderErrorMapper(
            api_name="Clerk", message="Failed to sync user", status_code=500
        )

    def get_public_profile(self, clerk_id: ClerkID, andrew_id: AndrewID) -> PublicProfile:
        """Another user's profile; the caller must have a profile too."""
        require_profile(self._users, clerk_id)
        target = self._users.get_by_andrew_id(andrew_id)
        if target is None:
            raise NotFoundError("User not found")
        return PublicProfile.model_validate(target)

    def get_own_profile(self, clerk_id: ClerkID) -> OwnProfile:
        """The caller's full profile, favorites included."""
        return OwnProfile.model_validate(require_profile(self._users, clerk_id))

    def get_current_profile(self, clerk_id: ClerkID) -> OwnProfile:
        """Redacted profile plus favorites for the session owner."""
        return self.get_own_profile(clerk_id)

    def update_favorites(self, clerk_id: ClerkID, body: dict[str, Any]) -> None:
        profile = require_profile(self._users, clerk_id)
        item_id = body.get("itemId")
        action = body.get("action")
        if not isinstance(item_id, str) or not item_id or action not in {a.value for a in FavoriteAction}:
            raise BadRequestError("Invalid request body")

        if FavoriteAction(action) is FavoriteAction.ADD:
            self._users.add_favorite(UserID(profile.id), ItemID(item_id))
        else:
            self._users.remove_favorite(UserID(profile.id), ItemID(item_id))

    def update_profile(self, clerk_id: ClerkID, updates: Any) -> None:
        """Merge a partial update into the caller's profile.

        Only owner-editable fields are accepted; identity fields, rating and
        favorites are rejected.
        """
        profile = require_profile(self._users, clerk_id)
        if not isinstance(updates, dict):
            raise BadRequestError("Invalid request body")
        changes: dict[str, Any] = {}
        for key, value in updates.items():
            attr = MUTABLE_PROFILE_FIELDS.get(key)
            if attr is None:
                raise BadRequestError(f"Invalid profile field: {key}")
            if value is not None and not isinstance(value, str):
                raise BadRequestError(f"Invalid value for {key}")
            if attr == "username" and not value:
                raise BadRequestError("Invalid value for username")
            changes[attr] = value
        if changes:
            self._users.update(UserID(profile.id), changes)

    async def sync_profile(self, clerk_id: ClerkID) -> OwnProfile:
        """Return the caller's profile, creating it from the identity provider if absent."""
        existing = self._users.get_by_clerk_id(clerk_id)
        if existing is not None:
            return OwnProfile.model_validate(existing)

        try:
            clerk_user = await self._identity.get_user(clerk_id)
        except PROVIDER_EXCEPTIONS as e:
            self._error_mapper.raise_error(e)

        email = clerk_user.primary_email
        if not email or not andrew_id_from_email(email):
            self._error_mapper.raise_error(ValueError(f"Clerk user {clerk_id} has no email address"))

        andrew_id = andrew_id_from_email(email)
        try:
            profile = self._users.create(
                UserProfile(
                    clerk_id=clerk_id,
                    andrew_id=andrew_id,
                    username=andrew_id,
                    email=email,
                    avatar_url=self._default_avatar_url,
                    star_rating=-1,
                    favorites=[],
                )
            )
        except IntegrityError as e:
            # Another identity already holds this andrewId
            self._error_mapper.raise_error(e)
        logger.info("Synced new profile for %s", andrew_id)
        return OwnProfile.model_validate(profile)
