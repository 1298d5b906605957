"""In-memory, namespaced TTL cache for order resolution.

Holds resolved orders, association answers and schema capability answers in
one keyed store with a default TTL per namespace. Expiry is checked lazily on
read; there is no background sweep. Safe for concurrent use from tasks and
threads (one lock, never held across an await).
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from orderlookup.core.constants import MIN_CAPABILITY_TTL_SECONDS
from orderlookup.domain.enums import CacheNamespace

logger = logging.getLogger(__name__)

DEFAULT_TTLS: dict[CacheNamespace, float] = {
    CacheNamespace.ENTITY: 120.0,
    CacheNamespace.RELATIONSHIP: 120.0,
    CacheNamespace.CAPABILITY: float(MIN_CAPABILITY_TTL_SECONDS),
}


@dataclass(frozen=True)
class CacheEntry:
    """One stored value with the monotonic time it was stored and its TTL."""

    value: Any
    stored_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at >= self.ttl


class ResolutionCache:
    """Namespaced TTL cache (implements IResolutionCache).

    Construct one per process (or per test) and inject it into the resolver,
    probe and relationship checker; there is no module-level instance.
    """

    def __init__(
        self,
        ttls: Mapping[CacheNamespace, float] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttls: Default TTL (seconds) per namespace; missing namespaces use DEFAULT_TTLS.
                Capability TTL is raised to MIN_CAPABILITY_TTL_SECONDS if lower.
            clock: Monotonic clock in seconds (injectable for tests).
        """
        merged = dict(DEFAULT_TTLS)
        merged.update(ttls or {})
        for namespace, ttl in merged.items():
            if ttl <= 0:
                raise ValueError(f"TTL for {namespace.value} must be positive, got: {ttl!r}")
        merged[CacheNamespace.CAPABILITY] = max(
            merged[CacheNamespace.CAPABILITY], float(MIN_CAPABILITY_TTL_SECONDS)
        )
        self._ttls = merged
        self._clock = clock
        self._lock = threading.RLock()
        self._entries: dict[CacheNamespace, dict[str, CacheEntry]] = {
            namespace: {} for namespace in CacheNamespace
        }
        self._stats: dict[CacheNamespace, dict[str, int]] = {
            namespace: {"hits": 0, "misses": 0, "sets": 0} for namespace in CacheNamespace
        }

    def ttl_for(self, namespace: CacheNamespace) -> float:
        """Return the default TTL (seconds) for namespace."""
        return self._ttls[namespace]

    def get(self, namespace: CacheNamespace, key: str) -> tuple[Any, bool]:
        """Return (value, True) if a live entry exists, else (None, False).

        An entry whose age is >= its TTL is treated as absent but left in
        place; a later set() overwrites it.
        """
        with self._lock:
            entry = self._entries[namespace].get(key)
            if entry is None or entry.is_expired(self._clock()):
                self._stats[namespace]["misses"] += 1
                logger.debug("Cache MISS: %s/%s", namespace.value, key)
                return None, False
            self._stats[namespace]["hits"] += 1
        logger.debug("Cache HIT: %s/%s", namespace.value, key)
        return entry.value, True

    def contains(self, namespace: CacheNamespace, key: str) -> bool:
        """Return True if a live entry exists. Hit/miss counters are not touched."""
        with self._lock:
            entry = self._entries[namespace].get(key)
            return entry is not None and not entry.is_expired(self._clock())

    def set(
        self,
        namespace: CacheNamespace,
        key: str,
        value: Any,
        ttl: float | None = None,
    ) -> None:
        """Store value under key; ttl None means the namespace default.

        Args:
            namespace: Cache namespace.
            key: Key within the namespace (use orderlookup.infrastructure.cache.keys).
            value: Value to cache (stored as-is; callers must not mutate it).
            ttl: Optional TTL in seconds for this entry.
        """
        effective = self._ttls[namespace] if ttl is None else float(ttl)
        if effective <= 0:
            raise ValueError(f"TTL must be positive, got: {ttl!r}")
        with self._lock:
            self._entries[namespace][key] = CacheEntry(value, self._clock(), effective)
            self._stats[namespace]["sets"] += 1
        logger.debug("Cache SET: %s/%s (TTL: %ss)", namespace.value, key, effective)

    def invalidate(self, namespace: CacheNamespace, key: str) -> bool:
        """Remove one entry. Returns True if an entry (live or expired) was removed."""
        with self._lock:
            removed = self._entries[namespace].pop(key, None) is not None
        if removed:
            logger.debug("Cache DELETE: %s/%s", namespace.value, key)
        return removed

    def invalidate_matching(
        self, namespace: CacheNamespace, predicate: Callable[[str], bool]
    ) -> int:
        """Remove every entry in namespace whose key satisfies predicate.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            bucket = self._entries[namespace]
            doomed = [key for key in bucket if predicate(key)]
            for key in doomed:
                del bucket[key]
        if doomed:
            logger.info("Cache INVALIDATE: %s (%s keys)", namespace.value, len(doomed))
        return len(doomed)

    def purge_expired(self, namespace: CacheNamespace) -> int:
        """Remove expired entries from namespace. Returns the number removed."""
        with self._lock:
            now = self._clock()
            bucket = self._entries[namespace]
            expired = [key for key, entry in bucket.items() if entry.is_expired(now)]
            for key in expired:
                del bucket[key]
        if expired:
            logger.debug("Cache PURGE: %s (%s expired keys)", namespace.value, len(expired))
        return len(expired)

    def clear(self, namespace: CacheNamespace) -> None:
        """Remove every entry in one namespace."""
        with self._lock:
            self._entries[namespace].clear()
        logger.info("Cache CLEARED: %s", namespace.value)

    def clear_all(self) -> None:
        """Remove every entry in every namespace. Use with caution."""
        with self._lock:
            for bucket in self._entries.values():
                bucket.clear()
        logger.warning("Cache CLEARED: all namespaces")

    def stats(self) -> dict[str, dict[str, int]]:
        """Return hit/miss/set counters and current size per namespace."""
        with self._lock:
            return {
                namespace.value: {
                    **counters,
                    "size": len(self._entries[namespace]),
                }
                for namespace, counters in self._stats.items()
            }
