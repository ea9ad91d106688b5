"""Listing routes: create, status updates and public reads."""
import logging
from typing import Any

from fastapi import APIRouter, Body, Query

from tartan_market.dependencies import CallerID, ItemsServiceDep
from tartan_market.ids import ItemID
from tartan_market.routers.common import json_object
from tartan_market.schemas import (CommissionItemOut, CreateItemResponse,
                                   MarketplaceItemOut, SearchResult,
                                   SuccessResponse)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/items", tags=["items"])

ListingResponse = MarketplaceItemOut | CommissionItemOut


@router.post("/create", response_model=CreateItemResponse)
def create_item(
    clerk_id: CallerID,
    service: ItemsServiceDep,
    body: Any = Body(default=None),
) -> CreateItemResponse:
    """Create a Marketplace or Commission listing owned by the caller.

    Body: type, title, description, price, category, images (1-5 URLs),
    optional tags; marketplace also needs condition, commission accepts
    turnaroundDays.
    """
    item_id = service.create_item(clerk_id, json_object(body))
    return CreateItemResponse(item_id=item_id)


@router.get("/{type}/latest", response_model=list[ListingResponse])
def get_latest_items(
    type: str,
    service: ItemsServiceDep,
    limit: int = Query(default=10, ge=1, le=100, description="Max results"),
) -> list[ListingResponse]:
    """Newest available listings of a kind."""
    return service.latest_items(type, limit)


@router.get("/{type}/{item_id}", response_model=ListingResponse)
def get_item(type: str, item_id: str, service: ItemsServiceDep) -> ListingResponse:
    """Fetch one listing. No authentication needed for viewing."""
    return service.get_item(type, ItemID(item_id))


@router.get(
    "/{type}/{item_id}/similar",
    response_model=list[SearchResult],
    response_model_exclude_none=True,
)
def get_similar_items(
    type: str,
    item_id: str,
    service: ItemsServiceDep,
    limit: int = Query(default=8, ge=1, le=50, description="Max results"),
) -> list[SearchResult]:
    """Available listings in the same category, ranked by shared tags."""
    return service.similar_items(type, ItemID(item_id), limit)


@router.put("/{type}/{item_id}/status", response_model=SuccessResponse)
def update_item_status(
    type: str,
    item_id: str,
    clerk_id: CallerID,
    service: ItemsServiceDep,
    body: Any = Body(default=None),
) -> SuccessResponse:
    """Owner-only status change.

    Commission body: {"isAvailable": bool}. Marketplace body: {"status": str}.
    """
    service.update_status(clerk_id, type, ItemID(item_id), json_object(body))
    return SuccessResponse()
