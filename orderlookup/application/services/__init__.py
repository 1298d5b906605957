"""Application services: resolver, lookup strategies, capability probe, relationship checker."""

from orderlookup.application.services.capability_probe import CapabilityProbe
from orderlookup.application.services.order_lookup_service import (
    OrderLookupService,
    build_order_lookup_service,
    cache_from_settings,
)
from orderlookup.application.services.relationship_checker import RelationshipChecker
from orderlookup.application.services.resolver import OrderResolver, normalize_identifier
from orderlookup.application.services.strategies import (
    ExactKeyStrategy,
    IndirectReferenceStrategy,
    LookupStrategy,
    SecondaryKeyStrategy,
    ShortenedPrefixStrategy,
    StrategyChain,
    build_default_chain,
)
from orderlookup.application.services.synthetic import build_synthetic_order, is_synthetic

__all__ = [
    "CapabilityProbe",
    "ExactKeyStrategy",
    "IndirectReferenceStrategy",
    "LookupStrategy",
    "OrderLookupService",
    "OrderResolver",
    "RelationshipChecker",
    "SecondaryKeyStrategy",
    "ShortenedPrefixStrategy",
    "StrategyChain",
    "build_default_chain",
    "build_order_lookup_service",
    "build_synthetic_order",
    "cache_from_settings",
    "is_synthetic",
    "normalize_identifier",
]
