"""Capability probe: does a store have an optional field (e.g. reference_number)?"""

from __future__ import annotations

import logging

from orderlookup.application.interfaces.cache import IResolutionCache
from orderlookup.application.interfaces.gateway import IBackendGateway
from orderlookup.domain.enums import CacheNamespace
from orderlookup.domain.exceptions import CapabilityProbeFailure
from orderlookup.infrastructure.cache.keys import capability_key

logger = logging.getLogger(__name__)


class CapabilityProbe:
    """Answers has_field(store, field) with one introspection query per pair.

    Successful answers (True or False) are cached in the capability namespace.
    A failed introspection answers False for that call only and is not cached,
    so the next call probes again.
    """

    def __init__(self, gateway: IBackendGateway, cache: IResolutionCache) -> None:
        self.gateway = gateway
        self.cache = cache

    async def has_field(self, store: str, field: str) -> bool:
        key = capability_key(store, field)
        cached, found = self.cache.get(CacheNamespace.CAPABILITY, key)
        if found:
            return bool(cached)
        try:
            columns = await self.gateway.introspect_columns(store)
        except Exception as e:
            failure = CapabilityProbeFailure(store, field, str(e) or type(e).__name__)
            logger.warning("%s (not cached)", failure.message, extra={"details": failure.details})
            return False
        has_it = field in set(columns)
        self.cache.set(CacheNamespace.CAPABILITY, key, has_it)
        if not has_it:
            logger.info("Store %s has no %s column; dependent lookups are skipped", store, field)
        return has_it
