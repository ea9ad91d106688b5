"""User routes: profiles, favorites, profile updates, sync and seller listings."""
from typing import Any

from fastapi import APIRouter, Body

from tartan_market.dependencies import (CallerID, ItemsServiceDep,
                                        UsersServiceDep)
from tartan_market.ids import AndrewID
from tartan_market.routers.common import json_object
from tartan_market.schemas import (CommissionItemOut, MarketplaceItemOut,
                                   OwnProfile, PublicProfile, SuccessResponse,
                                   SyncResponse)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/sync", response_model=SyncResponse)
async def sync_user(clerk_id: CallerID, service: UsersServiceDep) -> SyncResponse:
    """Create the caller's profile from the identity provider if it does not exist yet.

    Idempotent: an existing profile is returned unchanged.
    """
    profile = await service.sync_profile(clerk_id)
    return SyncResponse(user=profile)


@router.post("/current", response_model=OwnProfile)
def get_current_user(clerk_id: CallerID, service: UsersServiceDep) -> OwnProfile:
    """The session owner's profile with favorites, without internal ids."""
    return service.get_current_profile(clerk_id)


@router.post("/favorites", response_model=SuccessResponse)
def update_favorites(
    clerk_id: CallerID,
    service: UsersServiceDep,
    body: Any = Body(default=None),
) -> SuccessResponse:
    """Add or remove an item id: {"itemId": str, "action": "add" | "remove"}."""
    service.update_favorites(clerk_id, json_object(body))
    return SuccessResponse()


@router.put("/profile", response_model=SuccessResponse)
def update_profile(
    clerk_id: CallerID,
    service: UsersServiceDep,
    body: Any = Body(default=None),
) -> SuccessResponse:
    """Merge editable profile fields (username, avatar, shop, payment handles)."""
    service.update_profile(clerk_id, body)
    return SuccessResponse()


@router.get(
    "/{andrew_id}/items/{type}",
    response_model=list[MarketplaceItemOut | CommissionItemOut],
)
def get_user_items(
    andrew_id: str, type: str, service: ItemsServiceDep
) -> list[MarketplaceItemOut | CommissionItemOut]:
    """All listings of a kind owned by a seller. Public."""
    return service.list_by_seller(AndrewID(andrew_id), type)


@router.get("/{andrew_id}", response_model=PublicProfile)
def get_user(andrew_id: str, clerk_id: CallerID, service: UsersServiceDep) -> PublicProfile:
    """Another user's public profile (no internal ids, no favorites)."""
    return service.get_public_profile(clerk_id, AndrewID(andrew_id))


@router.post("/{andrew_id}", response_model=OwnProfile)
def get_own_user(andrew_id: str, clerk_id: CallerID, service: UsersServiceDep) -> OwnProfile:
    """The caller's own full profile; the path handle is not consulted."""
    return service.get_own_profile(clerk_id)
