"""Aggregation of source valuations into net worth figures."""

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from logging import Logger

from networth.domain.models import (
    AggregateResult,
    Source,
    SubRecord,
    ValuatedSource,
)
from networth.domain.services.currency import RateTable
from networth.domain.services.valuation import value_source


def group_sub_records(
    sub_records: Iterable[SubRecord],
) -> dict[str, list[SubRecord]]:
    """Group sub-records by the id of their owning source."""
    grouped: dict[str, list[SubRecord]] = {}
    for record in sub_records:
        if record.source_id is None:
            continue
        grouped.setdefault(record.source_id, []).append(record)
    return grouped


def aggregate(
    sources: Sequence[Source],
    sub_records_by_source: Mapping[str, Sequence[SubRecord]],
    rate_table: RateTable,
    logger: Logger | None = None,
) -> AggregateResult:
    """Value every source and compute net worth and liquid assets.

    Args:
        sources: Sources of a single user.
        sub_records_by_source: Sub-records keyed by owning source id.
        rate_table: Mapping of currency code to base-currency rate.
        logger: Optional logger warned about missing rates.

    Returns:
        AggregateResult: Sources sorted by value (largest first, ties in
        input order) with net worth and liquid-assets totals.
    """
    valuated: list[ValuatedSource] = []
    missing: set[str] = set()
    for source in sources:
        records = sub_records_by_source.get(source.id, ()) if source.id else ()
        valuation = value_source(source, records, rate_table, logger)
        missing.update(valuation.missing_currencies)
        valuated.append(
            ValuatedSource(
                source=source,
                total_value_base=valuation.total_value_base,
                last_updated=valuation.last_updated,
            )
        )

    # list.sort is stable: equal values keep their input order.
    valuated.sort(key=lambda item: item.total_value_base, reverse=True)

    net_worth = sum(
        (item.total_value_base for item in valuated),
        Decimal("0"),
    )
    liquid_assets = sum(
        (item.total_value_base for item in valuated if not item.is_property),
        Decimal("0"),
    )
    return AggregateResult(
        valuated_sources=tuple(valuated),
        net_worth=net_worth,
        liquid_assets=liquid_assets,
        missing_currencies=frozenset(missing),
    )


__all__ = ["aggregate", "group_sub_records"]
