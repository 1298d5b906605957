"""DTOs for order resolution (no dependency on ORM)."""

from dataclasses import dataclass, field
from typing import Any

from orderlookup.domain.enums import ResolutionSource

# A backend row (or a resolved order with its related sub-records) as plain data.
Record = dict[str, Any]


@dataclass(frozen=True)
class JoinSpec:
    """Join from a store to one related store for combined (single-query) checks.

    Example: JoinSpec("delivery_partners", "delivery_partner_id", "id") joins
    orders.delivery_partner_id = delivery_partners.id.
    """

    relation: str
    local_field: str
    remote_field: str


@dataclass(frozen=True)
class ResolveOptions:
    """Per-call resolver options.

    allow_synthetic enables the degraded-mode placeholder; bypass_cache skips the
    cache read (the result is still cached on success).
    """

    allow_synthetic: bool = False
    bypass_cache: bool = False


@dataclass(frozen=True)
class StrategyOutcome:
    """Result of one strategy attempt. Same shape for every strategy.

    applicable is False when the identifier's format rules the strategy out
    (no backend call was made).
    """

    entity: Record | None
    source: ResolutionSource
    error: Exception | None = None
    applicable: bool = True

    @property
    def found(self) -> bool:
        return self.entity is not None


@dataclass(frozen=True)
class ChainResult:
    """Outcome of a full strategy chain run."""

    entity: Record | None
    source: ResolutionSource
    outcomes: tuple[StrategyOutcome, ...] = ()

    @property
    def attempted(self) -> list[str]:
        """Names of strategies that were applicable and ran."""
        return [o.source.value for o in self.outcomes if o.applicable]

    @property
    def failed(self) -> list[str]:
        """Names of strategies that raised instead of answering."""
        return [o.source.value for o in self.outcomes if o.error is not None]

    @property
    def all_errored(self) -> bool:
        """True when at least one strategy ran and every one that ran raised."""
        ran = [o for o in self.outcomes if o.applicable]
        return bool(ran) and all(o.error is not None for o in ran)


@dataclass(frozen=True)
class ResolveResult:
    """Resolved order and where it came from."""

    entity: Record
    source: ResolutionSource
    attempted: list[str] = field(default_factory=list)

    @property
    def is_synthetic(self) -> bool:
        return self.source == ResolutionSource.SYNTHETIC
