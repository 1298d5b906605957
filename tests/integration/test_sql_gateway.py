"""SqlBackendGateway integration tests against SQLite (aiosqlite).

Each test gets a fresh file database with the ORM schema and a small seed:
two orders sharing the prefix 'a1b2c3d4', one with a reference number, a
notification pointing at the first order, and a delivery partner assigned to it.
"""

from collections.abc import AsyncIterator
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from orderlookup.application.dtos.resolution import JoinSpec
from orderlookup.application.services.order_lookup_service import build_order_lookup_service
from orderlookup.core.config import Settings
from orderlookup.domain.enums import ResolutionSource
from orderlookup.domain.exceptions import (
    AmbiguousPrefixWarning,
    TransientGatewayError,
    ValidationException,
)
from orderlookup.infrastructure.persistence.database import Base, create_session_factory
from orderlookup.infrastructure.persistence.models import (
    DeliveryPartner,
    Notification,
    Order,
    OrderItem,
    Product,
    Profile,
)
from orderlookup.infrastructure.persistence.sql_gateway import SqlBackendGateway, escape_like
from orderlookup.shared.utils.retry import RetryPolicy

ORDER_ID = "a1b2c3d4-0000-4000-8000-000000000001"
OTHER_ORDER_ID = "a1b2c3d4-ffff-4000-8000-000000000002"
REF_ORDER_ID = "bbbbbbbb-0000-4000-8000-000000000003"
NOTIFICATION_ID = "5e5e5e5e-1111-4111-8111-111111111111"
PARTNER_ID = "dddddddd-0000-4000-8000-000000000004"
ACTOR_ID = "9f9f9f9f-2222-4222-8222-222222222222"
RETAILER_ID = "11111111-0000-4000-8000-000000000005"
WHOLESALER_ID = "22222222-0000-4000-8000-000000000006"
PRODUCT_ID = "33333333-0000-4000-8000-000000000007"


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = create_session_factory(engine)
    async with factory() as session, session.begin():
        session.add_all(
            [
                Profile(id=RETAILER_ID, business_name="Corner Shop", city="Pune"),
                Profile(id=WHOLESALER_ID, business_name="Bulk Goods"),
                Product(id=PRODUCT_ID, name="Rice 5kg", price=Decimal("500.00")),
                DeliveryPartner(id=PARTNER_ID, user_id=ACTOR_ID, name="Ravi"),
                Order(
                    id=ORDER_ID,
                    retailer_id=RETAILER_ID,
                    wholesaler_id=WHOLESALER_ID,
                    delivery_partner_id=PARTNER_ID,
                    total_amount=Decimal("1000.00"),
                ),
                Order(id=OTHER_ORDER_ID, retailer_id=RETAILER_ID),
                Order(id=REF_ORDER_ID, reference_number="REF-2024-001"),
                OrderItem(
                    order_id=ORDER_ID,
                    product_id=PRODUCT_ID,
                    quantity=2,
                    price=Decimal("500.00"),
                ),
                Notification(
                    id=NOTIFICATION_ID,
                    user_id=ACTOR_ID,
                    type="order_assigned",
                    related_entity_id=ORDER_ID,
                    data={"status": "assigned"},
                ),
            ]
        )
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_gateway(engine: AsyncEngine) -> SqlBackendGateway:
    return SqlBackendGateway(create_session_factory(engine), retry_policy=RetryPolicy(max_attempts=1))


async def test_exact_key_full_projection(sql_gateway: SqlBackendGateway) -> None:
    """Full projection carries parties, delivery partner and items with products."""
    order = await sql_gateway.fetch_by_exact_key("orders", ORDER_ID)

    assert order is not None
    assert order["id"] == ORDER_ID
    assert order["retailer"]["business_name"] == "Corner Shop"
    assert order["wholesaler"]["business_name"] == "Bulk Goods"
    assert order["delivery_partner"]["user_id"] == ACTOR_ID
    assert len(order["items"]) == 1
    assert order["items"][0]["product"]["name"] == "Rice 5kg"


async def test_exact_key_missing(sql_gateway: SqlBackendGateway) -> None:
    assert await sql_gateway.fetch_by_exact_key("orders", "no-such-order") is None


async def test_exact_key_on_secondary_field(sql_gateway: SqlBackendGateway) -> None:
    order = await sql_gateway.fetch_by_exact_key(
        "orders", "REF-2024-001", field="reference_number"
    )
    assert order["id"] == REF_ORDER_ID
    assert order["delivery_partner"] is None
    assert order["items"] == []


async def test_prefix_is_ordered_and_limited(sql_gateway: SqlBackendGateway) -> None:
    rows = await sql_gateway.fetch_by_prefix("orders", "id", "a1b2c3d4", 10)
    assert [row["id"] for row in rows] == [ORDER_ID, OTHER_ORDER_ID]
    rows = await sql_gateway.fetch_by_prefix("orders", "id", "a1b2c3d4", 1)
    assert [row["id"] for row in rows] == [ORDER_ID]


async def test_prefix_wildcards_match_literally(sql_gateway: SqlBackendGateway) -> None:
    """'%' and '_' in the prefix are escaped, not treated as LIKE wildcards."""
    assert await sql_gateway.fetch_by_prefix("orders", "id", "a1b2%", 10) == []
    assert await sql_gateway.fetch_by_prefix("orders", "id", "a1b2c3d_", 10) == []


def test_escape_like() -> None:
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


async def test_fetch_related_notification(sql_gateway: SqlBackendGateway) -> None:
    notification = await sql_gateway.fetch_related("notifications", NOTIFICATION_ID)
    assert notification["related_entity_id"] == ORDER_ID
    assert notification["data"] == {"status": "assigned"}
    assert await sql_gateway.fetch_related("notifications", "missing") is None


async def test_introspect_columns_reads_live_table(sql_gateway: SqlBackendGateway) -> None:
    columns = await sql_gateway.introspect_columns("orders")
    assert "reference_number" in columns
    assert "delivery_partner_id" in columns


async def test_fetch_joined(sql_gateway: SqlBackendGateway) -> None:
    """Joined check matches only the assigned partner's user."""
    join = JoinSpec("delivery_partners", "delivery_partner_id", "id")
    row = await sql_gateway.fetch_joined(
        "orders", join, {"id": ORDER_ID, "delivery_partners.user_id": ACTOR_ID}
    )
    assert row["id"] == ORDER_ID
    assert (
        await sql_gateway.fetch_joined(
            "orders", join, {"id": OTHER_ORDER_ID, "delivery_partners.user_id": ACTOR_ID}
        )
        is None
    )


async def test_unknown_store_and_field(sql_gateway: SqlBackendGateway) -> None:
    with pytest.raises(ValidationException):
        await sql_gateway.fetch_by_exact_key("invoices", ORDER_ID)
    with pytest.raises(ValidationException):
        await sql_gateway.fetch_by_prefix("orders", "nope", "a1", 2)


async def test_unreachable_database_raises_transient_error(tmp_path: Path) -> None:
    """Driver errors become TransientGatewayError after the configured attempts."""
    broken = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'db.sqlite'}")
    delays: list[float] = []

    async def record_sleep(seconds: float) -> None:
        delays.append(seconds)

    gateway = SqlBackendGateway(
        create_session_factory(broken),
        retry_policy=RetryPolicy(max_attempts=2, initial_delay_ms=10),
        sleep=record_sleep,
    )
    with pytest.raises(TransientGatewayError) as exc_info:
        await gateway.fetch_by_exact_key("orders", ORDER_ID)

    assert exc_info.value.details["operation"] == "fetch_by_exact_key"
    assert delays == [0.01]
    await broken.dispose()


async def test_service_end_to_end(sql_gateway: SqlBackendGateway) -> None:
    """Every strategy resolves against the real schema."""
    service = build_order_lookup_service(sql_gateway, Settings(database_url=""))

    assert (await service.resolve(ORDER_ID)).source == ResolutionSource.EXACT
    assert (await service.resolve(NOTIFICATION_ID)).entity["id"] == ORDER_ID
    assert (await service.resolve("REF-2024-001")).source == ResolutionSource.SECONDARY_KEY
    with pytest.warns(AmbiguousPrefixWarning):
        result = await service.resolve("a1b2c3d4")
    assert result.entity["id"] == ORDER_ID
    assert await service.is_associated(ACTOR_ID, ORDER_ID) is True
    assert await service.is_associated(ACTOR_ID, OTHER_ORDER_ID) is False


async def test_uppercase_full_id_resolves(sql_gateway: SqlBackendGateway) -> None:
    """Keys are stored lowercase; an uppercase UUID still resolves exactly."""
    service = build_order_lookup_service(sql_gateway, Settings(database_url=""))

    result = await service.resolve(ORDER_ID.upper())

    assert result.source == ResolutionSource.EXACT
    assert result.entity["id"] == ORDER_ID
