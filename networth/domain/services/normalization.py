"""Normalization of raw stored records into domain models.

Raw records are loosely shaped mappings (storage rows, JSON payloads). This
is the only place where absent fields are defaulted: missing amounts become
zero and missing currencies the base currency.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from networth.domain.constants import BASE_CURRENCY, UNNAMED_DEBT, UNNAMED_ITEM
from networth.domain.models import (
    Account,
    AllocationEntry,
    Debt,
    Loan,
    Snapshot,
    Source,
    SourceKind,
    SubRecord,
)
from networth.utils.decimal_utils import coerce_decimal

SUB_RECORD_TYPES = ("account", "loan", "debt")


def normalize_currency_code(code: str | None) -> str:
    """Normalize currency codes, defaulting to the base currency.

    Args:
        code: Raw currency code.

    Returns:
        str: Upper-cased code, or the base currency when blank.
    """
    if not code:
        return BASE_CURRENCY
    cleaned = code.strip()
    return cleaned.upper() if cleaned else BASE_CURRENCY


def normalize_source_kind(kind: str | SourceKind | None) -> SourceKind:
    """Map raw kind values to SourceKind; anything but property is bank-like."""
    if isinstance(kind, SourceKind):
        return kind
    if kind and kind.strip().lower() == SourceKind.PROPERTY.value:
        return SourceKind.PROPERTY
    return SourceKind.BANK_LIKE


def parse_timestamp(value: Any) -> datetime | None:
    """Parse stored timestamps (datetime or ISO 8601 string)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def debt_from_mapping(
    raw: Mapping[str, Any],
    source_id: str | None = None,
    default_name: str = UNNAMED_DEBT,
) -> Debt:
    """Build a Debt from a raw mapping."""
    return Debt(
        id=raw.get("id"),
        source_id=source_id,
        name=raw.get("name") or default_name,
        base_amount=coerce_decimal(raw.get("base_amount")),
        accumulated_interest=coerce_decimal(raw.get("accumulated_interest")),
        interest_rate_percent=coerce_decimal(raw.get("interest_rate_percent")),
        currency=normalize_currency_code(raw.get("currency")),
        last_updated=parse_timestamp(raw.get("last_updated")),
    )


def source_from_mapping(raw: Mapping[str, Any]) -> Source:
    """Build a Source from a raw mapping.

    Args:
        raw: Mapping with source columns; ``other_debts`` is an iterable of
            debt mappings.

    Returns:
        Source: Normalized source.
    """
    kind = normalize_source_kind(raw.get("kind"))
    if kind is not SourceKind.PROPERTY:
        return Source(
            id=raw.get("id"),
            name=raw.get("name") or "",
            kind=kind,
            last_updated=parse_timestamp(raw.get("last_updated")),
        )
    return Source(
        id=raw.get("id"),
        name=raw.get("name") or "",
        kind=kind,
        last_updated=parse_timestamp(raw.get("last_updated")),
        area_m2=coerce_decimal(raw.get("area_m2")),
        price_per_area_unit=coerce_decimal(raw.get("price_per_area_unit")),
        price_currency=normalize_currency_code(raw.get("price_currency")),
        bank_debt_amount=coerce_decimal(raw.get("bank_debt_amount")),
        bank_debt_currency=normalize_currency_code(
            raw.get("bank_debt_currency")
        ),
        other_debts=tuple(
            debt_from_mapping(debt) for debt in raw.get("other_debts") or ()
        ),
    )


def sub_record_from_mapping(raw: Mapping[str, Any]) -> SubRecord:
    """Build an Account, Loan or Debt from a raw mapping.

    Raises:
        ValueError: If ``record_type`` is not account, loan or debt.
    """
    record_type = (raw.get("record_type") or "account").strip().lower()
    source_id = raw.get("source_id")
    if record_type == "account":
        return Account(
            id=raw.get("id"),
            source_id=source_id,
            name=raw.get("name") or UNNAMED_ITEM,
            balance=coerce_decimal(raw.get("balance")),
            currency=normalize_currency_code(raw.get("currency")),
            last_updated=parse_timestamp(raw.get("last_updated")),
        )
    if record_type == "loan":
        return Loan(
            id=raw.get("id"),
            source_id=source_id,
            name=raw.get("name") or UNNAMED_ITEM,
            base_amount=coerce_decimal(raw.get("base_amount")),
            accumulated_interest=coerce_decimal(
                raw.get("accumulated_interest")
            ),
            interest_rate_percent=coerce_decimal(
                raw.get("interest_rate_percent")
            ),
            currency=normalize_currency_code(raw.get("currency")),
            last_updated=parse_timestamp(raw.get("last_updated")),
        )
    if record_type == "debt":
        return debt_from_mapping(
            raw,
            source_id=source_id,
            default_name=UNNAMED_ITEM,
        )
    raise ValueError(
        f"Unsupported sub-record type: {record_type}. "
        f"Expected one of {', '.join(SUB_RECORD_TYPES)}."
    )


def record_type_of(record: SubRecord) -> str:
    """Return the storage type tag of a sub-record."""
    if isinstance(record, Account):
        return "account"
    if isinstance(record, Loan):
        return "loan"
    if isinstance(record, Debt):
        return "debt"
    raise TypeError(f"Unsupported sub-record type: {type(record).__name__}")


def allocation_from_mappings(
    raw: Iterable[Mapping[str, Any]] | None,
) -> tuple[AllocationEntry, ...]:
    """Build allocation entries from ``{"name", "value"}`` mappings."""
    return tuple(
        AllocationEntry(
            name=item.get("name") or "",
            value=coerce_decimal(item.get("value")),
        )
        for item in raw or ()
    )


def snapshot_from_mapping(raw: Mapping[str, Any]) -> Snapshot:
    """Build a Snapshot from a raw mapping."""
    return Snapshot(
        id=raw.get("id"),
        net_worth=coerce_decimal(raw.get("net_worth")),
        liquid_assets=coerce_decimal(raw.get("liquid_assets")),
        asset_allocation=allocation_from_mappings(raw.get("asset_allocation")),
        timestamp=parse_timestamp(raw.get("timestamp")),
    )


__all__ = [
    "SUB_RECORD_TYPES",
    "normalize_currency_code",
    "normalize_source_kind",
    "parse_timestamp",
    "debt_from_mapping",
    "source_from_mapping",
    "sub_record_from_mapping",
    "record_type_of",
    "allocation_from_mappings",
    "snapshot_from_mapping",
]
