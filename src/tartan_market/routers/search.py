"""Search route: delegates to the search provider."""
from fastapi import APIRouter, Query

from tartan_market.dependencies import SearchServiceDep
from tartan_market.schemas import SearchFilters, SearchResponse

router = APIRouter(tags=["search"])


@router.get("/search", response_model=SearchResponse, response_model_exclude_none=True)
async def search(
    service: SearchServiceDep,
    q: str | None = Query(default=None, description="Search text, at least 2 characters"),
    min_price: float | None = Query(default=None, alias="minPrice"),
    max_price: float | None = Query(default=None, alias="maxPrice"),
    category: str | None = None,
    condition: str | None = None,
    max_turnaround_days: int | None = Query(default=None, alias="maxTurnaroundDays"),
    item_type: str | None = Query(default=None, alias="type"),
    limit: int | None = Query(default=None, ge=1, le=200, description="Max results per kind"),
) -> SearchResponse:
    """Search available listings across both kinds, newest first."""
    filters = SearchFilters(
        min_price=min_price,
        max_price=max_price,
        category=category or None,
        condition=condition or None,
        max_turnaround_days=max_turnaround_days,
    )
    results = await service.search(q, filters, limit, item_type=item_type)
    return SearchResponse(results=results)
