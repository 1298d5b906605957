"""Backend gateway interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Every method is a suspension point: it performs I/O against the record store and
is subject to the caller's ambient timeout/cancellation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from orderlookup.domain.enums import Projection

if TYPE_CHECKING:
    from orderlookup.application.dtos.resolution import JoinSpec, Record


class IBackendGateway(Protocol):
    """Protocol for the record store behind the resolver (DIP).

    Implementations raise TransientGatewayError for timeouts, connection and
    driver failures; "no such row" is None or [] and never an exception.
    """

    async def fetch_by_exact_key(
        self,
        store: str,
        key: str,
        projection: Projection = Projection.FULL,
        field: str = "id",
    ) -> Record | None:
        """Return the single row whose field equals key, or None."""

    async def fetch_by_prefix(
        self, store: str, field: str, prefix: str, limit: int
    ) -> list[Record]:
        """Return up to limit rows whose field starts with prefix, ordered by field."""

    async def fetch_related(self, secondary_store: str, key: str) -> Record | None:
        """Return a secondary record (e.g. a notification) by exact key, or None."""

    async def introspect_columns(self, store: str) -> list[str]:
        """Return the column names the store has right now."""

    async def fetch_joined(
        self, store: str, join_spec: JoinSpec, filters: dict[str, Any]
    ) -> Record | None:
        """Return the first row matching filters across store joined to join_spec.relation.

        Filter keys are plain field names for store, or 'relation.field' for
        the joined store.
        """


@runtime_checkable
class IKeyScanGateway(Protocol):
    """Optional capability: list keys without a prefix index.

    Used by the prefix strategy only when the gateway has no fetch_by_prefix.
    """

    async def scan_keys(self, store: str, field: str, limit: int) -> list[str]:
        """Return up to limit values of field (any order)."""
