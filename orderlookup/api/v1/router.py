"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Handlers get
the lookup service from orderlookup.api.v1.dependencies.
"""

from fastapi import APIRouter

from orderlookup.api.v1.endpoints import cache, health, orders

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(cache.router, prefix="/cache", tags=["cache"])
