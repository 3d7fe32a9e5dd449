"""Domain models package."""

from .finance import (
    AccrualResult,
    AccrualStatus,
    AggregateResult,
    AllocationEntry,
    NetWorthSummary,
    Snapshot,
    SnapshotWriteIntent,
    SourceValuation,
    ValuatedSource,
    WorthPoint,
)
from .sources import (
    Account,
    Debt,
    InterestBearing,
    Loan,
    Source,
    SourceKind,
    SubRecord,
)

__all__ = [
    "Account",
    "Debt",
    "InterestBearing",
    "Loan",
    "Source",
    "SourceKind",
    "SubRecord",
    "AccrualResult",
    "AccrualStatus",
    "AggregateResult",
    "AllocationEntry",
    "NetWorthSummary",
    "Snapshot",
    "SnapshotWriteIntent",
    "SourceValuation",
    "ValuatedSource",
    "WorthPoint",
]
