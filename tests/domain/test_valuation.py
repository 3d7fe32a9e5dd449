"""Tests for single-source valuation."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from networth.domain.models import Account, Debt, Loan, Source, SourceKind
from networth.domain.services.valuation import sub_record_value, value_source

RATES = {"USD": Decimal("4.0"), "EUR": Decimal("4.3")}


def _bank(source_id: str = "bank") -> Source:
    return Source(id=source_id, name="mBank", kind=SourceKind.BANK_LIKE)


def test_property_value_subtracts_bank_debt() -> None:
    """Area times price minus the mortgage."""
    updated = datetime(2024, 5, 1, tzinfo=timezone.utc)
    flat = Source(
        id="flat",
        name="Flat",
        kind=SourceKind.PROPERTY,
        last_updated=updated,
        area_m2=Decimal("50"),
        price_per_area_unit=Decimal("10000"),
        price_currency="PLN",
        bank_debt_amount=Decimal("200000"),
        bank_debt_currency="PLN",
    )

    valuation = value_source(flat, [], RATES)

    assert valuation.total_value_base == Decimal("300000")
    assert valuation.last_updated == updated
    assert valuation.missing_currencies == frozenset()


def test_property_value_converts_each_field_currency() -> None:
    """Price, mortgage and other debts each use their own currency."""
    house = Source(
        id="house",
        name="House",
        kind=SourceKind.PROPERTY,
        area_m2=Decimal("100"),
        price_per_area_unit=Decimal("1000"),
        price_currency="EUR",
        bank_debt_amount=Decimal("10000"),
        bank_debt_currency="USD",
        other_debts=(
            Debt(
                id=None,
                source_id=None,
                name="Parents",
                base_amount=Decimal("1000"),
                accumulated_interest=Decimal("100"),
                currency="EUR",
            ),
        ),
    )

    valuation = value_source(house, [], RATES)

    # 430000 - 40000 - 4730
    assert valuation.total_value_base == Decimal("385270")


def test_property_ignores_sub_records() -> None:
    """Property value never depends on sub-records."""
    land = Source(id="land", name="Land", kind=SourceKind.PROPERTY)
    stray = Account(id="a", source_id="land", name="x", balance=Decimal("5"))

    assert value_source(land, [stray], RATES).total_value_base == Decimal("0")


def test_bank_like_sums_accounts_loans_and_debts() -> None:
    """Accounts and loans add, debts subtract."""
    records = [
        Account(
            id="a1",
            source_id="bank",
            name="Savings",
            balance=Decimal("1000"),
            currency="USD",
        ),
        Debt(
            id="d1",
            source_id="bank",
            name="Card",
            base_amount=Decimal("500"),
            accumulated_interest=Decimal("50"),
            currency="PLN",
        ),
    ]

    valuation = value_source(_bank(), records, RATES)

    assert valuation.total_value_base == Decimal("3450")


def test_bank_like_last_updated_is_newest_sub_record() -> None:
    """Freshness comes from the most recently updated sub-record."""
    older = datetime(2024, 1, 1, tzinfo=timezone.utc)
    newer = datetime(2024, 2, 1, tzinfo=timezone.utc)
    records = [
        Account(id="a", source_id="bank", name="A", balance=Decimal("1"), last_updated=older),
        Loan(id="l", source_id="bank", name="L", base_amount=Decimal("1"), last_updated=newer),
        Account(id="b", source_id="bank", name="B", balance=Decimal("1")),
    ]

    valuation = value_source(_bank(), records, RATES)

    assert valuation.total_value_base == Decimal("3")
    assert valuation.last_updated == newer


def test_bank_like_without_sub_records_is_zero() -> None:
    """An empty source is worth nothing and has no freshness."""
    valuation = value_source(_bank(), [], RATES)

    assert valuation.total_value_base == Decimal("0")
    assert valuation.last_updated is None


def test_unknown_currency_is_reported_as_missing() -> None:
    """Fallback conversions are flagged without changing the value."""
    records = [
        Account(id="a", source_id="bank", name="A", balance=Decimal("10"), currency="CHF"),
    ]

    valuation = value_source(_bank(), records, RATES)

    assert valuation.total_value_base == Decimal("10")
    assert valuation.missing_currencies == frozenset({"CHF"})


def test_sub_record_value_rejects_unknown_types() -> None:
    """Only accounts, loans and debts can be valued."""
    with pytest.raises(TypeError):
        sub_record_value(object(), RATES)
