"""API request/response schemas (Pydantic)."""

from orderlookup.schemas.health import HealthResponse, ReadinessResponse
from orderlookup.schemas.order import (
    AssignmentResponse,
    CacheStatsResponse,
    OrderLookupResponse,
)

__all__ = [
    "AssignmentResponse",
    "CacheStatsResponse",
    "HealthResponse",
    "OrderLookupResponse",
    "ReadinessResponse",
]
