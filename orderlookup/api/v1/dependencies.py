"""API dependencies (composition root for request handlers)."""

from fastapi import Request

from orderlookup.application.services.order_lookup_service import OrderLookupService
from orderlookup.domain.exceptions import SqlNotConfiguredException


def get_order_lookup_service(request: Request) -> OrderLookupService:
    """Return the per-process OrderLookupService built in the app lifespan.

    Raises:
        SqlNotConfiguredException: no database is configured (HTTP 503).
    """
    service = getattr(request.app.state, "order_lookup_service", None)
    if service is None:
        raise SqlNotConfiguredException()
    return service
