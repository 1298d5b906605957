"""Data transfer objects for the application layer."""

from orderlookup.application.dtos.resolution import (
    ChainResult,
    JoinSpec,
    Record,
    ResolveOptions,
    ResolveResult,
    StrategyOutcome,
)

__all__ = [
    "ChainResult",
    "JoinSpec",
    "Record",
    "ResolveOptions",
    "ResolveResult",
    "StrategyOutcome",
]
