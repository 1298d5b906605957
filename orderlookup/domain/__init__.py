"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from orderlookup.domain.enums import CacheNamespace, Projection, ResolutionSource
from orderlookup.domain.exceptions import (
    AmbiguousPrefixWarning,
    CapabilityProbeFailure,
    OrderLookupException,
    OrderNotFoundException,
    SqlNotConfiguredException,
    TransientGatewayError,
    ValidationException,
)

__all__ = [
    "AmbiguousPrefixWarning",
    "CacheNamespace",
    "CapabilityProbeFailure",
    "OrderLookupException",
    "OrderNotFoundException",
    "Projection",
    "ResolutionSource",
    "SqlNotConfiguredException",
    "TransientGatewayError",
    "ValidationException",
]
