"""Tests for the currency conversion helpers."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from networth.domain.services.currency import (
    format_currency,
    from_base,
    missing_rates,
    to_base,
    with_base_rate,
)

RATES = {"USD": Decimal("4.0"), "EUR": Decimal("4.3")}


@pytest.mark.parametrize(
    "rate_table",
    [{}, RATES, {"PLN": Decimal("3.5")}, {"PLN": Decimal("0")}],
)
def test_to_base_keeps_base_currency_amounts(rate_table) -> None:
    """The base currency always converts with a rate of 1."""
    assert to_base(Decimal("123.45"), "PLN", rate_table) == Decimal("123.45")


def test_to_base_multiplies_by_rate() -> None:
    """Foreign amounts are multiplied by their rate."""
    assert to_base(Decimal("1000"), "USD", RATES) == Decimal("4000")


def test_to_base_falls_back_to_identity_and_warns() -> None:
    """Unknown currencies are left unconverted and logged."""
    logger = MagicMock()

    assert to_base(Decimal("50"), "CHF", RATES, logger) == Decimal("50")
    logger.warning.assert_called_once()
    assert "CHF" in logger.warning.call_args.args[0]


@pytest.mark.parametrize("rate", [Decimal("0"), Decimal("-4")])
def test_to_base_treats_non_positive_rate_as_missing(rate) -> None:
    """A zero or negative table rate falls back to 1 instead of zeroing."""
    logger = MagicMock()
    rate_table = {"USD": rate}

    assert to_base(Decimal("50"), "USD", rate_table, logger) == Decimal("50")
    logger.warning.assert_called_once()
    assert missing_rates(["USD"], rate_table) == frozenset({"USD"})


def test_to_base_treats_missing_amount_and_currency_as_defaults() -> None:
    """None amounts are zero and None currencies are the base currency."""
    assert to_base(None, "USD", RATES) == Decimal("0")
    assert to_base(Decimal("7"), None, RATES) == Decimal("7")


def test_from_base_divides_by_rate() -> None:
    """Base amounts are divided by the target rate."""
    assert from_base(Decimal("4300"), "EUR", RATES) == Decimal("1000")
    assert from_base(Decimal("10"), "PLN", RATES) == Decimal("10")


def test_from_base_rejects_zero_rate() -> None:
    """A zero rate fails fast instead of dividing by zero."""
    with pytest.raises(ValueError):
        from_base(Decimal("10"), "USD", {"USD": Decimal("0")})


def test_with_base_rate_pins_base_currency() -> None:
    """The base currency is added with rate 1 without mutating the input."""
    source = {"USD": 4, "PLN": 2}

    rates = with_base_rate(source)

    assert rates == {"USD": Decimal("4"), "PLN": Decimal("1")}
    assert source["PLN"] == 2


def test_missing_rates_reports_unknown_codes() -> None:
    """Only non-base codes absent from the table are reported."""
    assert missing_rates(["USD", "PLN", None, "CHF", "CHF"], RATES) == {"CHF"}


@pytest.mark.parametrize(
    ("value", "currency", "expected"),
    [
        (Decimal("1234.5"), "PLN", "1234,50 zł"),
        (Decimal("12345.678"), "USD", "12\u00a0345,68 $"),
        (Decimal("1234567.891"), "EUR", "1\u00a0234\u00a0567,89 €"),
        (Decimal("-1.005"), "CHF", "-1,01 CHF"),
        (None, None, "0,00 zł"),
        (Decimal("0.5"), "GBP", "0,50 £"),
    ],
)
def test_format_currency(value, currency, expected) -> None:
    """Amounts use Polish separators and the currency symbol."""
    assert format_currency(value, currency) == expected
