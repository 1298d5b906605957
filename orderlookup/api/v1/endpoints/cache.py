"""Administrative cache endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from orderlookup.api.v1.dependencies import get_order_lookup_service
from orderlookup.application.services.order_lookup_service import OrderLookupService
from orderlookup.schemas.order import CacheStatsResponse

router = APIRouter()


@router.get("/stats", response_model=CacheStatsResponse)
async def cache_stats(
    service: Annotated[OrderLookupService, Depends(get_order_lookup_service)],
) -> CacheStatsResponse:
    """Return hit/miss/set counters and size per cache namespace."""
    return CacheStatsResponse(namespaces=service.cache_stats())


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cache(
    service: Annotated[OrderLookupService, Depends(get_order_lookup_service)],
) -> Response:
    """Drop every cached lookup, assignment and capability answer."""
    service.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
