"""SQLAlchemy async implementation of the backend gateway.

One AsyncSession per call from a shared async_sessionmaker. Connection-level
failures (OperationalError, InterfaceError, pool timeouts, OSError) become
TransientGatewayError and each call is retried with exponential backoff; "no such row" is None or
an empty list, never an exception.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from orderlookup.application.dtos.resolution import JoinSpec, Record
from orderlookup.domain.enums import Projection
from orderlookup.domain.exceptions import TransientGatewayError, ValidationException
from orderlookup.infrastructure.persistence.database import Base
from orderlookup.infrastructure.persistence.models import (
    DeliveryPartner,
    Notification,
    Order,
    OrderItem,
    Product,
    Profile,
)
from orderlookup.shared.utils.retry import RetryPolicy, with_retry

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_STORES: dict[str, type[Base]] = {
    "orders": Order,
    "order_items": OrderItem,
    "products": Product,
    "profiles": Profile,
    "delivery_partners": DeliveryPartner,
    "notifications": Notification,
}

# Eager loads for the full order projection (order + parties + items with product).
_ORDER_FULL_OPTIONS = (
    selectinload(Order.retailer),
    selectinload(Order.wholesaler),
    selectinload(Order.delivery_partner),
    selectinload(Order.items).selectinload(OrderItem.product),
)

# Connection, pool and socket failures. Other SQLAlchemy errors (ProgrammingError,
# DataError, IntegrityError) are not retried and propagate unchanged.
_TRANSIENT_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, OSError)

_LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so value matches literally."""
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def row_to_dict(obj: Base | None) -> Record | None:
    """Column values of an ORM instance as a plain dict (no relationships)."""
    if obj is None:
        return None
    return {attr.key: getattr(obj, attr.key) for attr in sa_inspect(obj).mapper.column_attrs}


def order_to_dict(order: Order) -> Record:
    """Full order projection: columns plus retailer, wholesaler, delivery_partner, items."""
    record = row_to_dict(order) or {}
    record["retailer"] = row_to_dict(order.retailer)
    record["wholesaler"] = row_to_dict(order.wholesaler)
    record["delivery_partner"] = row_to_dict(order.delivery_partner)
    items = []
    for item in order.items:
        item_record = row_to_dict(item) or {}
        item_record["product"] = row_to_dict(item.product)
        items.append(item_record)
    record["items"] = items
    return record


class SqlBackendGateway:
    """Backend gateway over the ORM models (implements IBackendGateway).

    Store names map to ORM models through stores (DEFAULT_STORES unless
    given). Unknown stores and fields raise ValidationException.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        retry_policy: RetryPolicy | None = None,
        stores: Mapping[str, type[Base]] | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.retry_policy = retry_policy or RetryPolicy()
        self.stores = dict(stores or DEFAULT_STORES)
        self._sleep = sleep

    async def fetch_by_exact_key(
        self,
        store: str,
        key: str,
        projection: Projection = Projection.FULL,
        field: str = "id",
    ) -> Record | None:
        model = self._model(store)
        column = self._column(model, field)

        async def query(session: AsyncSession) -> Record | None:
            stmt = select(model).where(column == key).limit(1)
            if model is Order:
                stmt = stmt.options(*_ORDER_FULL_OPTIONS)
            obj = (await session.execute(stmt)).scalar_one_or_none()
            if isinstance(obj, Order):
                return order_to_dict(obj)
            return row_to_dict(obj)

        return await self._run("fetch_by_exact_key", store, query)

    async def fetch_by_prefix(
        self, store: str, field: str, prefix: str, limit: int
    ) -> list[Record]:
        model = self._model(store)
        column = self._column(model, field)
        if limit <= 0:
            return []

        async def query(session: AsyncSession) -> list[Record]:
            stmt = (
                select(model)
                .where(column.like(f"{escape_like(prefix)}%", escape=_LIKE_ESCAPE))
                .order_by(column)
                .limit(limit)
            )
            rows = (await session.execute(stmt)).scalars().all()
            return [row_to_dict(row) or {} for row in rows]

        return await self._run("fetch_by_prefix", store, query)

    async def fetch_related(self, secondary_store: str, key: str) -> Record | None:
        model = self._model(secondary_store)
        column = self._column(model, "id")

        async def query(session: AsyncSession) -> Record | None:
            obj = (await session.execute(select(model).where(column == key))).scalar_one_or_none()
            return row_to_dict(obj)

        return await self._run("fetch_related", secondary_store, query)

    async def introspect_columns(self, store: str) -> list[str]:
        """Column names of the live table (not the ORM model's)."""
        table_name = self._model(store).__tablename__

        async def query(session: AsyncSession) -> list[str]:
            conn = await session.connection()
            return await conn.run_sync(
                lambda sync_conn: [col["name"] for col in sa_inspect(sync_conn).get_columns(table_name)]
            )

        return await self._run("introspect_columns", store, query)

    async def fetch_joined(
        self, store: str, join_spec: JoinSpec, filters: dict[str, Any]
    ) -> Record | None:
        model = self._model(store)
        related = self._model(join_spec.relation)
        onclause = self._column(model, join_spec.local_field) == self._column(
            related, join_spec.remote_field
        )
        conditions: list[ColumnElement[bool]] = []
        for name, value in filters.items():
            if "." in name:
                relation, field = name.split(".", 1)
                if relation != join_spec.relation:
                    raise ValidationException(
                        f"Filter {name!r} does not refer to joined store {join_spec.relation!r}",
                        field="filters",
                    )
                conditions.append(self._column(related, field) == value)
            else:
                conditions.append(self._column(model, name) == value)

        async def query(session: AsyncSession) -> Record | None:
            stmt = select(model).join(related, onclause).where(*conditions).limit(1)
            obj = (await session.execute(stmt)).scalars().first()
            return row_to_dict(obj)

        return await self._run("fetch_joined", store, query)

    def _model(self, store: str) -> Any:
        model = self.stores.get(store)
        if model is None:
            raise ValidationException(f"Unknown store: {store}", field="store")
        return model

    @staticmethod
    def _column(model: Any, field: str) -> Any:
        column = model.__table__.c.get(field)
        if column is None:
            raise ValidationException(
                f"Unknown field {field!r} for store {model.__tablename__!r}", field="field"
            )
        return column

    async def _run(
        self,
        operation: str,
        store: str,
        query: Callable[[AsyncSession], Awaitable[T]],
    ) -> T:
        async def attempt() -> T:
            try:
                async with self.session_factory() as session:
                    return await query(session)
            except _TRANSIENT_ERRORS as e:
                logger.debug("%s on %s raised %s", operation, store, type(e).__name__)
                raise TransientGatewayError(
                    operation, store=store, reason=f"{type(e).__name__}: {e}"
                ) from e

        kwargs: dict[str, Any] = {}
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return await with_retry(
            attempt,
            self.retry_policy,
            retry_on=(TransientGatewayError,),
            operation_name=f"{operation}({store})",
            **kwargs,
        )
