"""Order resolver: cache first, then the strategy chain, then (only if asked) a placeholder."""

from __future__ import annotations

import logging
import threading

from orderlookup.application.dtos.resolution import ResolveOptions, ResolveResult
from orderlookup.application.interfaces.cache import IResolutionCache
from orderlookup.application.services.strategies import StrategyChain
from orderlookup.application.services.synthetic import build_synthetic_order
from orderlookup.core.constants import KEY_FIELD
from orderlookup.domain.enums import CacheNamespace, ResolutionSource
from orderlookup.domain.exceptions import (
    OrderNotFoundException,
    TransientGatewayError,
    ValidationException,
)
from orderlookup.infrastructure.cache.keys import entity_key
from orderlookup.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


def normalize_identifier(identifier: str) -> str:
    """Strip whitespace; raise ValidationException for an empty identifier."""
    cleaned = (identifier or "").strip()
    if not cleaned:
        raise ValidationException("Order identifier must not be empty", field="identifier")
    return cleaned


class OrderResolver:
    """Resolves an identifier to an order with caching.

    Successful resolutions are cached under the identifier the caller used;
    the resolver also remembers which identifiers (aliases) resolved to each
    canonical order id so invalidate() can drop all of them at once.
    Placeholders from degraded mode are never cached.
    """

    def __init__(
        self, chain: StrategyChain, cache: IResolutionCache, *, max_aliases: int = 10_000
    ) -> None:
        self.chain = chain
        self.cache = cache
        self.max_aliases = max_aliases
        # canonical id (lowercase) -> identifiers whose entity entries hold it
        self._aliases: dict[str, set[str]] = {}
        self._alias_count = 0
        self._prune_threshold = max_aliases
        self._aliases_lock = threading.Lock()

    @property
    def alias_count(self) -> int:
        return self._alias_count

    @traced("order_lookup.resolve")
    async def resolve(
        self, identifier: str, options: ResolveOptions | None = None
    ) -> ResolveResult:
        """Resolve identifier to an order.

        Args:
            identifier: Full key, shortened ID, notification ID or reference number.
            options: allow_synthetic / bypass_cache; defaults to both off.

        Returns:
            ResolveResult with the order and its source.

        Raises:
            ValidationException: identifier is empty.
            OrderNotFoundException: nothing matched and allow_synthetic is off.
            TransientGatewayError: every applicable strategy failed on backend
                errors and allow_synthetic is off.
        """
        options = options or ResolveOptions()
        identifier = normalize_identifier(identifier)
        key = entity_key(identifier)

        if not options.bypass_cache:
            cached, found = self.cache.get(CacheNamespace.ENTITY, key)
            if found:
                add_span_attributes(source=ResolutionSource.CACHE.value)
                return ResolveResult(cached, ResolutionSource.CACHE)

        result = await self.chain.run(identifier)
        if result.entity is not None:
            self.cache.set(CacheNamespace.ENTITY, key, result.entity)
            self._remember_alias(result.entity, identifier)
            add_span_attributes(source=result.source.value)
            return ResolveResult(result.entity, result.source, result.attempted)

        if options.allow_synthetic:
            logger.warning(
                "Returning synthetic placeholder for unresolved identifier %s (degraded mode)",
                identifier,
            )
            add_span_attributes(source=ResolutionSource.SYNTHETIC.value)
            return ResolveResult(
                build_synthetic_order(identifier), ResolutionSource.SYNTHETIC, result.attempted
            )

        add_span_attributes(source=ResolutionSource.NOT_FOUND.value)
        if result.all_errored:
            raise TransientGatewayError(
                "resolve",
                reason="every applicable lookup strategy failed",
                details={"identifier": identifier, "failed": result.failed},
            )
        raise OrderNotFoundException(identifier, result.attempted)

    def invalidate(self, entity_id: str) -> set[str]:
        """Drop cached resolutions for entity_id and every alias that resolved to it.

        Returns:
            The identifiers whose entity entries were dropped (entity_id included).
        """
        entity_id = normalize_identifier(entity_id)
        with self._aliases_lock:
            aliases = self._aliases.pop(entity_id.lower(), set())
            self._alias_count -= len(aliases)
        identifiers = {entity_id} | aliases
        self.cache.invalidate_matching(CacheNamespace.ENTITY, lambda k: k in identifiers)
        logger.info("Invalidated order %s (%s cached identifiers)", entity_id, len(identifiers))
        return identifiers

    def clear_all(self) -> None:
        """Empty every cache namespace and forget all aliases."""
        with self._aliases_lock:
            self._aliases.clear()
            self._alias_count = 0
            self._prune_threshold = self.max_aliases
        self.cache.clear_all()

    def _remember_alias(self, entity: dict, identifier: str) -> None:
        canonical = entity.get(KEY_FIELD)
        if not canonical:
            return
        with self._aliases_lock:
            aliases = self._aliases.setdefault(str(canonical).lower(), set())
            if identifier not in aliases:
                aliases.add(identifier)
                self._alias_count += 1
            if self._alias_count > self._prune_threshold:
                self._prune_aliases()

    def _prune_aliases(self) -> None:
        """Forget aliases whose entity entries have expired. Caller holds _aliases_lock."""
        self.cache.purge_expired(CacheNamespace.ENTITY)
        before = self._alias_count
        for canonical, aliases in list(self._aliases.items()):
            live = {
                a for a in aliases if self.cache.contains(CacheNamespace.ENTITY, entity_key(a))
            }
            if live:
                self._aliases[canonical] = live
            else:
                del self._aliases[canonical]
        self._alias_count = sum(len(a) for a in self._aliases.values())
        # Next sweep once the live set has doubled, so a full index is not rescanned per resolve.
        self._prune_threshold = max(self.max_aliases, 2 * self._alias_count)
        logger.debug("Pruned alias index: %s -> %s identifiers", before, self._alias_count)
