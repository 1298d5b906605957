"""Application layer: interfaces (ports), DTOs and order lookup services.

Depends on domain and protocol definitions. Infrastructure implements the
interfaces (backend gateway, resolution cache).
"""

from orderlookup.application.interfaces import (
    IBackendGateway,
    IKeyScanGateway,
    IResolutionCache,
)

__all__ = ["IBackendGateway", "IKeyScanGateway", "IResolutionCache"]
