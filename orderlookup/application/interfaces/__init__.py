"""Application interfaces (ports): backend gateway and resolution cache protocols.

Define contracts for infrastructure implementations (DIP).
"""

from orderlookup.application.interfaces.cache import IResolutionCache
from orderlookup.application.interfaces.gateway import IBackendGateway, IKeyScanGateway

__all__ = ["IBackendGateway", "IKeyScanGateway", "IResolutionCache"]
