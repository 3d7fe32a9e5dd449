"""Tests for domain validation warnings."""

from decimal import Decimal
from unittest.mock import MagicMock

from networth.domain.models import Account, Debt, Loan, Source, SourceKind
from networth.domain.services.validation import (
    validate_source,
    validate_sub_record,
)


def test_negative_property_fields_are_warned_about() -> None:
    logger = MagicMock()
    source = Source(
        id="flat",
        name="Flat",
        kind=SourceKind.PROPERTY,
        area_m2=Decimal("-1"),
        other_debts=(
            Debt(id=None, source_id=None, name="X", base_amount=Decimal("-5")),
        ),
    )

    validate_source(source, logger)

    assert logger.warning.call_count == 2


def test_valid_records_do_not_warn() -> None:
    logger = MagicMock()

    validate_sub_record(
        Loan(id="l", source_id="s", name="L", base_amount=Decimal("10")),
        logger,
    )
    validate_sub_record(
        Account(id="a", source_id="s", name="A", balance=Decimal("0")),
        logger,
    )

    logger.warning.assert_not_called()


def test_negative_account_balance_is_warned_about() -> None:
    logger = MagicMock()

    validate_sub_record(
        Account(id="a", source_id="s", name="A", balance=Decimal("-3")),
        logger,
    )

    logger.warning.assert_called_once()
