"""Valuation of a single financial source in the base currency."""

from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import Decimal
from logging import Logger

from networth.domain.models import (
    Account,
    Debt,
    Loan,
    Source,
    SourceValuation,
    SubRecord,
)
from networth.domain.services.currency import RateTable, missing_rates, to_base


def value_source(
    source: Source,
    sub_records: Sequence[SubRecord],
    rate_table: RateTable,
    logger: Logger | None = None,
) -> SourceValuation:
    """Compute the net base-currency value of a source.

    Args:
        source: Source to value.
        sub_records: Records owned by the source; ignored for properties.
        rate_table: Mapping of currency code to base-currency rate.
        logger: Optional logger warned about missing rates.

    Returns:
        SourceValuation: Net value and freshness of the source.
    """
    if source.is_property:
        return _value_property(source, rate_table, logger)
    return _value_bank_like(sub_records, rate_table, logger)


def sub_record_value(
    record: SubRecord,
    rate_table: RateTable,
    logger: Logger | None = None,
) -> Decimal:
    """Return the signed base-currency contribution of a sub-record.

    Raises:
        TypeError: If the record is not an Account, Loan or Debt.
    """
    if isinstance(record, Account):
        return to_base(record.balance, record.currency, rate_table, logger)
    if isinstance(record, Loan):
        return to_base(record.outstanding, record.currency, rate_table, logger)
    if isinstance(record, Debt):
        return -to_base(record.outstanding, record.currency, rate_table, logger)
    raise TypeError(f"Unsupported sub-record type: {type(record).__name__}")


def _value_property(
    source: Source,
    rate_table: RateTable,
    logger: Logger | None,
) -> SourceValuation:
    property_value = to_base(
        source.area_m2 * source.price_per_area_unit,
        source.price_currency,
        rate_table,
        logger,
    )
    bank_debt = to_base(
        source.bank_debt_amount,
        source.bank_debt_currency,
        rate_table,
        logger,
    )
    other_debts = sum(
        (
            to_base(debt.outstanding, debt.currency, rate_table, logger)
            for debt in source.other_debts
        ),
        Decimal("0"),
    )
    currencies = [source.price_currency, source.bank_debt_currency]
    currencies.extend(debt.currency for debt in source.other_debts)
    return SourceValuation(
        total_value_base=property_value - bank_debt - other_debts,
        last_updated=source.last_updated,
        missing_currencies=missing_rates(currencies, rate_table),
    )


def _value_bank_like(
    sub_records: Sequence[SubRecord],
    rate_table: RateTable,
    logger: Logger | None,
) -> SourceValuation:
    total = sum(
        (sub_record_value(record, rate_table, logger) for record in sub_records),
        Decimal("0"),
    )
    return SourceValuation(
        total_value_base=total,
        last_updated=_latest(record.last_updated for record in sub_records),
        missing_currencies=missing_rates(
            (record.currency for record in sub_records),
            rate_table,
        ),
    )


def _latest(instants: Iterable[datetime | None]) -> datetime | None:
    known = [instant for instant in instants if instant is not None]
    return max(known) if known else None


__all__ = ["value_source", "sub_record_value"]
