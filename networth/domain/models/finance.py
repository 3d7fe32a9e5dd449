"""Domain models for valuation and aggregation results."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from networth.domain.models.sources import Source


@dataclass(frozen=True)
class SourceValuation:
    """Net base-currency value of a single source.

    Attributes:
        total_value_base: Net value in the base currency.
        last_updated: Freshness of the source or its newest sub-record.
        missing_currencies: Codes valued with the fallback rate of 1.
    """

    total_value_base: Decimal
    last_updated: datetime | None
    missing_currencies: frozenset[str] = frozenset()


@dataclass(frozen=True)
class ValuatedSource:
    """Source paired with its valuation."""

    source: Source
    total_value_base: Decimal
    last_updated: datetime | None

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def is_property(self) -> bool:
        return self.source.is_property


@dataclass(frozen=True)
class AggregateResult:
    """Aggregated valuation of every source of a user.

    Attributes:
        valuated_sources: Sources sorted by value, largest first.
        net_worth: Sum of every source value.
        liquid_assets: Sum of every non-property source value.
        missing_currencies: Codes valued with the fallback rate of 1.
    """

    valuated_sources: tuple[ValuatedSource, ...]
    net_worth: Decimal
    liquid_assets: Decimal
    missing_currencies: frozenset[str] = frozenset()

    @property
    def degraded(self) -> bool:
        """Return True when some amounts used a fallback rate."""
        return bool(self.missing_currencies)


@dataclass(frozen=True)
class AllocationEntry:
    """Single slice of the asset allocation."""

    name: str
    value: Decimal


@dataclass(frozen=True)
class Snapshot:
    """Persisted point-in-time record of a user's net worth."""

    id: str | None
    net_worth: Decimal
    liquid_assets: Decimal
    asset_allocation: tuple[AllocationEntry, ...]
    timestamp: datetime | None


@dataclass(frozen=True)
class SnapshotWriteIntent:
    """Snapshots to delete and the snapshot replacing them."""

    delete_ids: tuple[str, ...]
    snapshot: Snapshot


class AccrualStatus(str, Enum):
    """Outcome of an interest accrual attempt."""

    ACCRUED = "accrued"
    ALREADY_ACCRUED_TODAY = "already_accrued_today"
    ZERO_RATE = "zero_rate"


@dataclass(frozen=True)
class AccrualResult:
    """Result of an interest accrual.

    Values are unchanged unless ``status`` is ``ACCRUED``.
    """

    status: AccrualStatus
    accumulated_interest: Decimal
    last_accrual: datetime | None

    @property
    def accrued(self) -> bool:
        return self.status is AccrualStatus.ACCRUED


@dataclass(frozen=True)
class NetWorthSummary:
    """Dashboard figures in a display currency.

    Attributes:
        valuated_sources: Sources sorted by base value, largest first.
        net_worth: Net worth in ``currency_code``.
        liquid_assets: Liquid assets in ``currency_code``.
        asset_allocation: Allocation slices in ``currency_code``.
        currency_code: Display currency.
    """

    valuated_sources: tuple[ValuatedSource, ...]
    net_worth: Decimal
    liquid_assets: Decimal
    asset_allocation: tuple[AllocationEntry, ...]
    currency_code: str
    missing_currencies: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class WorthPoint:
    """Net worth history point in a display currency."""

    timestamp: datetime
    net_worth: Decimal
    liquid_assets: Decimal


__all__ = [
    "SourceValuation",
    "ValuatedSource",
    "AggregateResult",
    "AllocationEntry",
    "Snapshot",
    "SnapshotWriteIntent",
    "AccrualStatus",
    "AccrualResult",
    "NetWorthSummary",
    "WorthPoint",
]
