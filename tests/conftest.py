"""Pytest configuration and fixtures for orderlookup.

Unit tests drive the services through an AsyncMock gateway and a
ResolutionCache on a fake clock. HTTP tests use httpx ASGITransport against
create_app() with app.state.order_lookup_service set directly (the lifespan
does not run under ASGITransport).
"""

from collections.abc import AsyncIterator, Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from orderlookup.application.services.order_lookup_service import (
    OrderLookupService,
    build_order_lookup_service,
)
from orderlookup.core.config import Settings, get_settings
from orderlookup.infrastructure.cache.resolution_cache import ResolutionCache
from orderlookup.main import create_app

ORDER_ID = "a1b2c3d4-0000-4000-8000-000000000001"


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_order(order_id: str = ORDER_ID, **extra: object) -> dict:
    """A full-projection order record as the gateway returns it."""
    record = {
        "id": order_id,
        "status": "pending",
        "reference_number": None,
        "delivery_partner_id": None,
        "retailer": {"id": "r-1", "business_name": "Retailer"},
        "wholesaler": {"id": "w-1", "business_name": "Wholesaler"},
        "delivery_partner": None,
        "items": [],
    }
    record.update(extra)
    return record


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Each test sees settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResolutionCache:
    return ResolutionCache(clock=clock)


@pytest.fixture
def gateway() -> AsyncMock:
    """Gateway mock that finds nothing and has every column the chain probes."""
    gw = AsyncMock()
    gw.fetch_by_exact_key.return_value = None
    gw.fetch_by_prefix.return_value = []
    gw.fetch_related.return_value = None
    gw.introspect_columns.return_value = ["id", "reference_number", "delivery_partner_id"]
    gw.fetch_joined.return_value = None
    return gw


@pytest.fixture
def service(
    gateway: AsyncMock, settings: Settings, cache: ResolutionCache
) -> OrderLookupService:
    return build_order_lookup_service(gateway, settings, cache)


@pytest.fixture
def app(service: OrderLookupService) -> FastAPI:
    application = create_app()
    application.state.order_lookup_service = service
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def order_factory():
    """make_order as a fixture (test modules do not import conftest)."""
    return make_order
