"""Relationship checker: is a delivery partner user assigned to an order?"""

from __future__ import annotations

import logging

from orderlookup.application.dtos.resolution import JoinSpec
from orderlookup.application.interfaces.cache import IResolutionCache
from orderlookup.application.interfaces.gateway import IBackendGateway
from orderlookup.core.constants import ACTOR_FIELD, DELIVERY_PARTNER_FIELD, KEY_FIELD
from orderlookup.domain.enums import CacheNamespace
from orderlookup.infrastructure.cache.keys import relationship_key, relationship_key_entity
from orderlookup.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


class RelationshipChecker:
    """Answers is_associated(actor_id, entity_id) with one joined query plus a cache.

    Both True and False answers are cached for the relationship TTL. A False
    answer produced while the backend was failing is returned but not cached.
    """

    def __init__(
        self,
        gateway: IBackendGateway,
        cache: IResolutionCache,
        *,
        store: str = "orders",
        partner_store: str = "delivery_partners",
        short_id_length: int = 8,
        candidate_limit: int = 10,
    ) -> None:
        self.gateway = gateway
        self.cache = cache
        self.store = store
        self.short_id_length = short_id_length
        self.candidate_limit = candidate_limit
        self.join = JoinSpec(partner_store, DELIVERY_PARTNER_FIELD, KEY_FIELD)

    @traced("order_lookup.is_associated")
    async def is_associated(self, actor_id: str, entity_id: str) -> bool:
        key = relationship_key(actor_id, entity_id)
        cached, found = self.cache.get(CacheNamespace.RELATIONSHIP, key)
        if found:
            return bool(cached)

        errored = False
        associated = False
        try:
            associated = await self._check(actor_id, entity_id)
        except Exception as e:
            errored = True
            logger.warning("Assignment check failed for order %s: %s", entity_id, e)

        if not associated and len(entity_id) == self.short_id_length:
            try:
                associated = await self._check_prefix_candidates(actor_id, entity_id)
            except Exception as e:
                errored = True
                logger.warning("Prefix assignment check failed for %s: %s", entity_id, e)

        if associated or not errored:
            self.cache.set(CacheNamespace.RELATIONSHIP, key, associated)
        return associated

    def invalidate_entity(self, entity_ids: set[str]) -> int:
        """Drop cached answers for any actor paired with one of entity_ids.

        Answers cached under a shortened ID are dropped too when it is a
        (case-insensitive) prefix of one of entity_ids.
        """
        targets = {entity_id.lower() for entity_id in entity_ids}

        def is_stale(key: str) -> bool:
            entity = relationship_key_entity(key).lower()
            if entity in targets:
                return True
            return len(entity) == self.short_id_length and any(
                target.startswith(entity) for target in targets
            )

        return self.cache.invalidate_matching(CacheNamespace.RELATIONSHIP, is_stale)

    async def _check(self, actor_id: str, order_id: str) -> bool:
        row = await self.gateway.fetch_joined(
            self.store,
            self.join,
            {KEY_FIELD: order_id, f"{self.join.relation}.{ACTOR_FIELD}": actor_id},
        )
        return row is not None

    async def _check_prefix_candidates(self, actor_id: str, prefix: str) -> bool:
        rows = await self.gateway.fetch_by_prefix(
            self.store, KEY_FIELD, prefix.lower(), self.candidate_limit
        )
        for row in rows[: self.candidate_limit]:
            candidate = row.get(KEY_FIELD)
            if not candidate or candidate == prefix:
                continue
            if await self._check(actor_id, str(candidate)):
                logger.info("Actor %s assigned to %s via shortened ID %s", actor_id, candidate, prefix)
                return True
        return False
