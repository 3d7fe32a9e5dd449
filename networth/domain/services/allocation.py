"""Asset allocation breakdown with small sources grouped together."""

from collections.abc import Sequence
from decimal import Decimal

from networth.domain.constants import OTHER_BUCKET_NAME, OTHER_THRESHOLD_RATIO
from networth.domain.models import AllocationEntry, ValuatedSource


def build_asset_allocation(
    valuated_sources: Sequence[ValuatedSource],
    net_worth: Decimal,
    threshold_ratio: Decimal = OTHER_THRESHOLD_RATIO,
) -> tuple[AllocationEntry, ...]:
    """Build allocation slices from valuated sources.

    Only strictly positive sources are shown. Those worth less than
    ``threshold_ratio`` of net worth are summed into a trailing "Other"
    slice. Nothing is returned when net worth is not positive.

    Args:
        valuated_sources: Sources already sorted by value, largest first.
        net_worth: Total net worth in the base currency.
        threshold_ratio: Share of net worth below which sources are grouped.

    Returns:
        tuple[AllocationEntry, ...]: Slices in display order.
    """
    if net_worth <= 0:
        return ()

    threshold = net_worth * threshold_ratio
    entries: list[AllocationEntry] = []
    other_total = Decimal("0")
    for item in valuated_sources:
        value = item.total_value_base
        if value <= 0:
            continue
        if value < threshold:
            other_total += value
        else:
            entries.append(AllocationEntry(name=item.name, value=value))

    if other_total > 0:
        entries.append(AllocationEntry(name=OTHER_BUCKET_NAME, value=other_total))
    return tuple(entries)


__all__ = ["build_asset_allocation"]
