"""Cache: in-memory resolution cache and cache key utilities.

Used by the resolver, capability probe and relationship checker to avoid
re-querying the backend for hot lookups. Key format is in keys.py (DRY).
"""

from orderlookup.infrastructure.cache.keys import (
    capability_key,
    entity_key,
    relationship_key,
    relationship_key_entity,
)
from orderlookup.infrastructure.cache.resolution_cache import (
    DEFAULT_TTLS,
    CacheEntry,
    ResolutionCache,
)

__all__ = [
    "CacheEntry",
    "DEFAULT_TTLS",
    "ResolutionCache",
    "capability_key",
    "entity_key",
    "relationship_key",
    "relationship_key_entity",
]
