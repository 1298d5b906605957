"""Cache protocol for the resolver layer. In-memory implementation in infrastructure/cache/resolution_cache.py."""

from collections.abc import Callable
from typing import Any, Protocol

from orderlookup.domain.enums import CacheNamespace


class IResolutionCache(Protocol):
    """Protocol for namespaced TTL caches used by resolver, probe and relationship checker.

    Operations are synchronous and never perform I/O.
    """

    def get(self, namespace: CacheNamespace, key: str) -> tuple[Any, bool]:
        """Return (value, True) for a live entry, else (None, False)."""
        ...

    def contains(self, namespace: CacheNamespace, key: str) -> bool:
        """Return True for a live entry without counting a hit or miss."""
        ...

    def set(
        self,
        namespace: CacheNamespace,
        key: str,
        value: Any,
        ttl: float | None = None,
    ) -> None:
        """Store value; ttl None means the namespace default."""
        ...

    def invalidate(self, namespace: CacheNamespace, key: str) -> bool:
        """Remove one entry. Returns True if it existed."""
        ...

    def invalidate_matching(
        self, namespace: CacheNamespace, predicate: Callable[[str], bool]
    ) -> int:
        """Remove every entry whose key satisfies predicate. Returns count removed."""
        ...

    def purge_expired(self, namespace: CacheNamespace) -> int:
        """Remove expired entries in one namespace. Returns count removed."""
        ...

    def clear(self, namespace: CacheNamespace) -> None:
        """Remove every entry in one namespace."""
        ...

    def clear_all(self) -> None:
        """Remove every entry in every namespace."""
        ...
