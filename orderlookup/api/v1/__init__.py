"""API v1: routers, endpoints and dependencies."""

from orderlookup.api.v1.router import api_router

__all__ = ["api_router"]
