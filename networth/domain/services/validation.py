"""Domain validation helpers.

Valuation assumes non-negative magnitudes; these helpers only warn so that
bad input shows up in the logs without blocking a valuation.
"""

from decimal import Decimal
from logging import Logger

from networth.domain.models import Account, Source, SubRecord


def validate_source(source: Source, logger: Logger) -> None:
    """Warn when a property source holds negative magnitudes.

    Args:
        source: Source to check.
        logger: Logger used for warnings.
    """
    if not source.is_property:
        return
    fields = {
        "area_m2": source.area_m2,
        "price_per_area_unit": source.price_per_area_unit,
        "bank_debt_amount": source.bank_debt_amount,
    }
    for field_name, value in fields.items():
        _warn_if_negative(f"source={source.name} {field_name}", value, logger)
    for debt in source.other_debts:
        _warn_interest_fields(
            f"source={source.name} debt={debt.name}",
            debt,
            logger,
        )


def validate_sub_record(record: SubRecord, logger: Logger) -> None:
    """Warn when a sub-record holds negative magnitudes.

    Account balances are signed and only warned about when negative.

    Args:
        record: Sub-record to check.
        logger: Logger used for warnings.
    """
    label = f"{type(record).__name__.lower()}={record.name}"
    if isinstance(record, Account):
        if record.balance < 0:
            logger.warning(
                f"Account balance is negative for {label}: {record.balance}"
            )
        return
    _warn_interest_fields(label, record, logger)


def _warn_interest_fields(label: str, record, logger: Logger) -> None:
    _warn_if_negative(f"{label} base_amount", record.base_amount, logger)
    _warn_if_negative(
        f"{label} accumulated_interest",
        record.accumulated_interest,
        logger,
    )
    _warn_if_negative(
        f"{label} interest_rate_percent",
        record.interest_rate_percent,
        logger,
    )


def _warn_if_negative(label: str, value: Decimal, logger: Logger) -> None:
    if value < 0:
        logger.warning(f"Negative value for {label}: {value}")


__all__ = ["validate_source", "validate_sub_record"]
