"""Domain package for valuation rules and core models."""

from .constants import BASE_CURRENCY, OTHER_BUCKET_NAME, OTHER_THRESHOLD_RATIO
from .models import (
    Account,
    AggregateResult,
    AllocationEntry,
    Debt,
    Loan,
    Snapshot,
    Source,
    SourceKind,
    ValuatedSource,
)
from .services import (
    accrue_interest,
    aggregate,
    build_asset_allocation,
    from_base,
    take_snapshot,
    to_base,
    value_source,
)

__all__ = [
    "BASE_CURRENCY",
    "OTHER_BUCKET_NAME",
    "OTHER_THRESHOLD_RATIO",
    "Account",
    "AggregateResult",
    "AllocationEntry",
    "Debt",
    "Loan",
    "Snapshot",
    "Source",
    "SourceKind",
    "ValuatedSource",
    "accrue_interest",
    "aggregate",
    "build_asset_allocation",
    "from_base",
    "take_snapshot",
    "to_base",
    "value_source",
]
