"""Order lookup facade: the operations request handlers call.

Wires one ResolutionCache into the resolver, capability probe and
relationship checker. Build with build_order_lookup_service(); tests can pass
their own cache (e.g. with a fake clock) and gateway.
"""

from __future__ import annotations

import logging

from orderlookup.application.dtos.resolution import ResolveOptions, ResolveResult
from orderlookup.application.interfaces.gateway import IBackendGateway
from orderlookup.application.services.capability_probe import CapabilityProbe
from orderlookup.application.services.relationship_checker import RelationshipChecker
from orderlookup.application.services.resolver import OrderResolver, normalize_identifier
from orderlookup.application.services.strategies import build_default_chain
from orderlookup.core.config import Settings
from orderlookup.domain.enums import CacheNamespace
from orderlookup.infrastructure.cache.resolution_cache import ResolutionCache

logger = logging.getLogger(__name__)


class OrderLookupService:
    """resolve / is_associated / invalidate / clear_all over one shared cache."""

    def __init__(
        self,
        resolver: OrderResolver,
        relationships: RelationshipChecker,
        cache: ResolutionCache,
    ) -> None:
        self.resolver = resolver
        self.relationships = relationships
        self.cache = cache

    async def resolve(
        self,
        identifier: str,
        *,
        allow_synthetic: bool = False,
        bypass_cache: bool = False,
    ) -> ResolveResult:
        """Resolve identifier to an order (see OrderResolver.resolve)."""
        return await self.resolver.resolve(
            identifier,
            ResolveOptions(allow_synthetic=allow_synthetic, bypass_cache=bypass_cache),
        )

    async def is_associated(self, actor_id: str, entity_id: str) -> bool:
        """Return True if actor_id is the delivery partner user assigned to entity_id."""
        return await self.relationships.is_associated(
            normalize_identifier(actor_id), normalize_identifier(entity_id)
        )

    def invalidate(self, entity_id: str) -> None:
        """Call after any write to the order so the next read goes to the backend."""
        identifiers = self.resolver.invalidate(entity_id)
        self.relationships.invalidate_entity(identifiers)

    def clear_all(self) -> None:
        """Administrative/test escape hatch: drop every cached answer."""
        self.resolver.clear_all()

    def cache_stats(self) -> dict[str, dict[str, int]]:
        return self.cache.stats()


def cache_from_settings(settings: Settings) -> ResolutionCache:
    """Build a ResolutionCache with the TTLs from settings."""
    return ResolutionCache(
        ttls={
            CacheNamespace.ENTITY: settings.cache_ttl_entities,
            CacheNamespace.RELATIONSHIP: settings.cache_ttl_relationships,
            CacheNamespace.CAPABILITY: settings.cache_ttl_capabilities,
        }
    )


def build_order_lookup_service(
    gateway: IBackendGateway,
    settings: Settings,
    cache: ResolutionCache | None = None,
) -> OrderLookupService:
    """Compose cache, probe, strategy chain, resolver and relationship checker."""
    cache = cache or cache_from_settings(settings)
    probe = CapabilityProbe(gateway, cache)
    resolver = OrderResolver(build_default_chain(gateway, probe, settings), cache)
    relationships = RelationshipChecker(
        gateway,
        cache,
        store=settings.orders_store,
        partner_store=settings.delivery_partners_store,
        short_id_length=settings.short_id_length,
        candidate_limit=settings.association_candidate_limit,
    )
    logger.debug("Order lookup service built (store=%s)", settings.orders_store)
    return OrderLookupService(resolver, relationships, cache)
