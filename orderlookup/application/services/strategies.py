"""Lookup strategies and the ordered chain that runs them.

Each strategy is one self-contained heuristic for turning an identifier into
an order. Strategies raise freely; the chain catches per strategy, logs, and
moves on, so a partial backend failure never aborts a resolution. New
strategies only need to satisfy LookupStrategy; the resolver does not change.

Order (cheapest and most selective first):
    exact -> prefix -> indirect -> secondary-key
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from orderlookup.application.dtos.resolution import ChainResult, StrategyOutcome
from orderlookup.application.interfaces.gateway import IBackendGateway, IKeyScanGateway
from orderlookup.core.constants import (
    CANONICAL_KEY_RE,
    KEY_FIELD,
    PREFIX_PROBE_LIMIT,
    RELATED_ENTITY_FIELD,
)
from orderlookup.domain.enums import Projection, ResolutionSource
from orderlookup.domain.exceptions import AmbiguousPrefixWarning, TransientGatewayError
from orderlookup.shared.telemetry.tracing import add_span_event

if TYPE_CHECKING:
    from orderlookup.application.services.capability_probe import CapabilityProbe
    from orderlookup.core.config import Settings

logger = logging.getLogger(__name__)


def is_canonical_key(identifier: str) -> bool:
    """Return True if identifier has the canonical (UUID) key shape."""
    return bool(CANONICAL_KEY_RE.fullmatch(identifier))


class LookupStrategy(Protocol):
    """One resolution heuristic. Returns a StrategyOutcome; may raise on backend errors."""

    source: ResolutionSource

    async def try_resolve(self, identifier: str) -> StrategyOutcome: ...


class ExactKeyStrategy:
    """Single exact-match fetch on the key column; only for UUID-shaped identifiers."""

    source = ResolutionSource.EXACT

    def __init__(self, gateway: IBackendGateway, store: str) -> None:
        self.gateway = gateway
        self.store = store

    async def try_resolve(self, identifier: str) -> StrategyOutcome:
        if not is_canonical_key(identifier):
            return StrategyOutcome(None, self.source, applicable=False)
        # Canonical keys are stored lowercase.
        entity = await self.gateway.fetch_by_exact_key(
            self.store, identifier.lower(), Projection.FULL
        )
        return StrategyOutcome(entity, self.source)


class ShortenedPrefixStrategy:
    """Resolve a shortened ID (first N characters of a key) by prefix match.

    Uses the gateway's indexed prefix query when it has one; otherwise scans a
    bounded number of keys and filters client-side. When several keys share
    the prefix the first sorted key wins and AmbiguousPrefixWarning is emitted:
    the tie-break is a known weak point, not a business rule.
    """

    source = ResolutionSource.PREFIX

    def __init__(
        self,
        gateway: IBackendGateway,
        store: str,
        short_id_length: int,
        scan_limit: int,
    ) -> None:
        self.gateway = gateway
        self.store = store
        self.short_id_length = short_id_length
        self.scan_limit = scan_limit

    async def try_resolve(self, identifier: str) -> StrategyOutcome:
        if len(identifier) != self.short_id_length:
            return StrategyOutcome(None, self.source, applicable=False)
        # Canonical keys are stored lowercase.
        prefix = identifier.lower()
        candidates = sorted(await self._candidate_keys(prefix))
        if not candidates:
            return StrategyOutcome(None, self.source)
        if len(candidates) > 1:
            self._flag_ambiguous(identifier, candidates)
        entity = await self.gateway.fetch_by_exact_key(
            self.store, candidates[0], Projection.FULL
        )
        return StrategyOutcome(entity, self.source)

    async def _candidate_keys(self, prefix: str) -> list[str]:
        fetch_by_prefix = getattr(self.gateway, "fetch_by_prefix", None)
        if callable(fetch_by_prefix):
            rows = await fetch_by_prefix(self.store, KEY_FIELD, prefix, PREFIX_PROBE_LIMIT)
            return [str(row[KEY_FIELD]) for row in rows if row.get(KEY_FIELD)]
        if isinstance(self.gateway, IKeyScanGateway):
            logger.info(
                "Gateway has no prefix query; scanning up to %s keys of %s",
                self.scan_limit,
                self.store,
            )
            keys = await self.gateway.scan_keys(self.store, KEY_FIELD, self.scan_limit)
            return [str(k) for k in keys if k and str(k).lower().startswith(prefix)]
        logger.warning("Gateway supports neither prefix query nor key scan; prefix lookup skipped")
        return []

    def _flag_ambiguous(self, identifier: str, candidates: list[str]) -> None:
        message = (
            f"Shortened ID {identifier!r} matches {len(candidates)} or more orders; "
            f"using first sorted key {candidates[0]!r}"
        )
        logger.warning(message)
        add_span_event(
            "ambiguous_prefix",
            {"identifier": identifier, "candidates": ",".join(candidates)},
        )
        warnings.warn(AmbiguousPrefixWarning(message), stacklevel=3)


class IndirectReferenceStrategy:
    """Two-hop lookup: identifier is a secondary record (notification) pointing at the order."""

    source = ResolutionSource.INDIRECT

    def __init__(self, gateway: IBackendGateway, store: str, secondary_store: str) -> None:
        self.gateway = gateway
        self.store = store
        self.secondary_store = secondary_store

    async def try_resolve(self, identifier: str) -> StrategyOutcome:
        secondary = await self.gateway.fetch_related(self.secondary_store, identifier)
        reference = secondary.get(RELATED_ENTITY_FIELD) if secondary else None
        if not reference:
            return StrategyOutcome(None, self.source)
        entity = await self.gateway.fetch_by_exact_key(
            self.store, str(reference), Projection.FULL
        )
        return StrategyOutcome(entity, self.source)


class SecondaryKeyStrategy:
    """Exact match on an optional column, only when the capability probe says it exists."""

    source = ResolutionSource.SECONDARY_KEY

    def __init__(
        self,
        gateway: IBackendGateway,
        probe: CapabilityProbe,
        store: str,
        field: str,
    ) -> None:
        self.gateway = gateway
        self.probe = probe
        self.store = store
        self.field = field

    async def try_resolve(self, identifier: str) -> StrategyOutcome:
        if not await self.probe.has_field(self.store, self.field):
            return StrategyOutcome(None, self.source, applicable=False)
        entity = await self.gateway.fetch_by_exact_key(
            self.store, identifier, Projection.FULL, field=self.field
        )
        return StrategyOutcome(entity, self.source)


class StrategyChain:
    """Runs strategies in order; the first one returning an entity wins."""

    def __init__(self, strategies: Sequence[LookupStrategy]) -> None:
        self.strategies = tuple(strategies)

    async def run(self, identifier: str) -> ChainResult:
        outcomes: list[StrategyOutcome] = []
        for strategy in self.strategies:
            try:
                outcome = await strategy.try_resolve(identifier)
            except TransientGatewayError as e:
                logger.warning(
                    "Strategy %s failed for %s: %s", strategy.source.value, identifier, e
                )
                outcome = StrategyOutcome(None, strategy.source, error=e)
            except Exception as e:
                logger.exception(
                    "Strategy %s raised unexpectedly for %s", strategy.source.value, identifier
                )
                outcome = StrategyOutcome(None, strategy.source, error=e)
            outcomes.append(outcome)
            if outcome.found:
                logger.info(
                    "Resolved %s via %s (id=%s)",
                    identifier,
                    strategy.source.value,
                    outcome.entity.get(KEY_FIELD) if outcome.entity else None,
                )
                return ChainResult(outcome.entity, strategy.source, tuple(outcomes))
        logger.info(
            "No strategy resolved %s (attempted: %s)",
            identifier,
            ", ".join(o.source.value for o in outcomes if o.applicable) or "none",
        )
        return ChainResult(None, ResolutionSource.NOT_FOUND, tuple(outcomes))


def build_default_chain(
    gateway: IBackendGateway, probe: CapabilityProbe, settings: Settings
) -> StrategyChain:
    """Build the standard exact -> prefix -> indirect -> secondary-key chain."""
    return StrategyChain(
        [
            ExactKeyStrategy(gateway, settings.orders_store),
            ShortenedPrefixStrategy(
                gateway,
                settings.orders_store,
                settings.short_id_length,
                settings.prefix_scan_limit,
            ),
            IndirectReferenceStrategy(
                gateway, settings.orders_store, settings.notifications_store
            ),
            SecondaryKeyStrategy(
                gateway, probe, settings.orders_store, settings.secondary_key_field
            ),
        ]
    )
