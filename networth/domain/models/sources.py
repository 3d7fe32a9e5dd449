"""Domain models for financial sources and their sub-records."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Union

from networth.domain.constants import BASE_CURRENCY


class SourceKind(str, Enum):
    """Kind of financial source."""

    BANK_LIKE = "bank"
    PROPERTY = "property"


@dataclass(frozen=True)
class Account:
    """Cash or brokerage balance held in a bank-like source."""

    id: str | None
    source_id: str | None
    name: str
    balance: Decimal
    currency: str = BASE_CURRENCY
    last_updated: datetime | None = None


@dataclass(frozen=True)
class Loan:
    """Money owed to the user.

    Attributes:
        base_amount: Principal lent out.
        accumulated_interest: Interest folded in by previous accruals.
        interest_rate_percent: Annual interest rate in percent.
    """

    id: str | None
    source_id: str | None
    name: str
    base_amount: Decimal
    accumulated_interest: Decimal = Decimal("0")
    interest_rate_percent: Decimal = Decimal("0")
    currency: str = BASE_CURRENCY
    last_updated: datetime | None = None

    @property
    def outstanding(self) -> Decimal:
        """Return principal plus accumulated interest."""
        return self.base_amount + self.accumulated_interest


@dataclass(frozen=True)
class Debt:
    """Money owed by the user.

    Used both as a sub-record of a bank-like source and inline in a
    property's ``other_debts`` (where ``source_id`` is ``None``).
    """

    id: str | None
    source_id: str | None
    name: str
    base_amount: Decimal
    accumulated_interest: Decimal = Decimal("0")
    interest_rate_percent: Decimal = Decimal("0")
    currency: str = BASE_CURRENCY
    last_updated: datetime | None = None

    @property
    def outstanding(self) -> Decimal:
        """Return principal plus accumulated interest."""
        return self.base_amount + self.accumulated_interest


SubRecord = Union[Account, Loan, Debt]
InterestBearing = Union[Loan, Debt]


@dataclass(frozen=True)
class Source:
    """Named financial holding.

    Property-only fields are ignored for bank-like sources, whose value is
    derived from their sub-records.
    """

    id: str | None
    name: str
    kind: SourceKind
    last_updated: datetime | None = None
    area_m2: Decimal = Decimal("0")
    price_per_area_unit: Decimal = Decimal("0")
    price_currency: str = BASE_CURRENCY
    bank_debt_amount: Decimal = Decimal("0")
    bank_debt_currency: str = BASE_CURRENCY
    other_debts: tuple[Debt, ...] = field(default_factory=tuple)

    @property
    def is_property(self) -> bool:
        return self.kind is SourceKind.PROPERTY


__all__ = [
    "SourceKind",
    "Account",
    "Loan",
    "Debt",
    "SubRecord",
    "InterestBearing",
    "Source",
]
