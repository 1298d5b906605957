"""Domain enumerations for order lookup.

Enums represent fixed sets of domain values (resolution provenance,
cache namespaces, gateway projections).
"""

from enum import Enum


class ResolutionSource(str, Enum):
    """Where a resolved order came from.

    One value per strategy plus the cache and the degraded-mode placeholder.
    """

    CACHE = "cache"
    EXACT = "exact"
    PREFIX = "prefix"
    INDIRECT = "indirect"
    SECONDARY_KEY = "secondary-key"
    SYNTHETIC = "synthetic"
    NOT_FOUND = "not-found"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid source values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [source.value for source in cls]


class CacheNamespace(str, Enum):
    """Logical partitions of the resolution cache. Each has its own default TTL."""

    ENTITY = "entity"
    RELATIONSHIP = "relationship"
    CAPABILITY = "capability"


class Projection(str, Enum):
    """Shape of a record returned by the gateway.

    FULL is the order with its fixed join shape (parties, delivery partner,
    items with products). Every lookup strategy reads FULL.
    """

    FULL = "full"
