"""Order lookup API schemas."""

from typing import Any

from pydantic import BaseModel, Field

from orderlookup.domain.enums import ResolutionSource


class OrderLookupResponse(BaseModel):
    """Response for GET /orders/lookup/{identifier}."""

    source: ResolutionSource = Field(..., description="Strategy (or cache) that produced the order")
    synthetic: bool = Field(
        default=False, description="True when the order is a degraded-mode placeholder"
    )
    attempted: list[str] = Field(
        default_factory=list, description="Strategies that ran before the answer"
    )
    order: dict[str, Any] = Field(..., description="Order with retailer, wholesaler and items")


class AssignmentResponse(BaseModel):
    """Response for GET /orders/{order_id}/assignments/{actor_id}."""

    order_id: str
    actor_id: str
    associated: bool


class CacheStatsResponse(BaseModel):
    """Response for GET /cache/stats: counters per cache namespace."""

    namespaces: dict[str, dict[str, int]]
