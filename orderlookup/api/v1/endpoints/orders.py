"""Order lookup endpoints: resolve an identifier, check assignment, invalidate."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from orderlookup.api.v1.dependencies import get_order_lookup_service
from orderlookup.application.services.order_lookup_service import OrderLookupService
from orderlookup.core.config import get_settings
from orderlookup.schemas.order import AssignmentResponse, OrderLookupResponse

router = APIRouter()

LookupService = Annotated[OrderLookupService, Depends(get_order_lookup_service)]


@router.get(
    "/lookup/{identifier}",
    response_model=OrderLookupResponse,
    responses={
        404: {"description": "No strategy found the order"},
        503: {"description": "Backend unavailable for every strategy"},
    },
)
async def lookup_order(
    identifier: str,
    service: LookupService,
    allow_synthetic: Annotated[
        bool, Query(description="Return a placeholder when nothing matches (degraded mode)")
    ] = False,
) -> OrderLookupResponse:
    """Resolve a full ID, shortened ID, notification ID or reference number to an order.

    allow_synthetic is honored only when SYNTHETIC_FALLBACK_ENABLED is set.
    """
    allowed = allow_synthetic and get_settings().synthetic_fallback_enabled
    result = await service.resolve(identifier, allow_synthetic=allowed)
    return OrderLookupResponse(
        source=result.source,
        synthetic=result.is_synthetic,
        attempted=result.attempted,
        order=result.entity,
    )


@router.get("/{order_id}/assignments/{actor_id}", response_model=AssignmentResponse)
async def check_assignment(
    order_id: str, actor_id: str, service: LookupService
) -> AssignmentResponse:
    """Return whether actor_id is the delivery partner user assigned to order_id."""
    associated = await service.is_associated(actor_id, order_id)
    return AssignmentResponse(order_id=order_id, actor_id=actor_id, associated=associated)


@router.post("/{order_id}/invalidate", status_code=status.HTTP_204_NO_CONTENT)
async def invalidate_order(order_id: str, service: LookupService) -> Response:
    """Drop cached lookups and assignment answers for order_id (call after writes)."""
    service.invalidate(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
