"""Currency conversion helpers around a base-currency rate table.

A rate table maps a currency code to the number of base-currency units one
unit of that currency is worth, e.g. ``{"USD": Decimal("4.0")}``.
"""

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from logging import Logger

from networth.domain.constants import BASE_CURRENCY, CURRENCY_SYMBOLS
from networth.utils.decimal_utils import coerce_decimal

RateTable = Mapping[str, Decimal]

_CENT = Decimal("0.01")
_GROUPING_MIN = Decimal("10000")
_NBSP = "\u00a0"


def resolve_rate(
    currency: str | None,
    rate_table: RateTable,
    logger: Logger | None = None,
) -> Decimal:
    """Return the base-currency rate for a currency code.

    Unknown codes resolve to 1, which keeps the amount unconverted.

    Args:
        currency: Currency code; ``None`` means the base currency.
        rate_table: Mapping of currency code to base-currency rate.
        logger: Optional logger warned about missing rates.

    Returns:
        Decimal: Rate to multiply foreign amounts by.
    """
    code = currency or BASE_CURRENCY
    if code == BASE_CURRENCY:
        return Decimal("1")
    rate = rate_table.get(code)
    if rate is None:
        if logger is not None:
            logger.warning(
                f"Missing exchange rate for {code}; "
                f"valuing it 1:1 with {BASE_CURRENCY}"
            )
        return Decimal("1")
    return coerce_decimal(rate)


def to_base(
    amount,
    currency: str | None,
    rate_table: RateTable,
    logger: Logger | None = None,
) -> Decimal:
    """Convert an amount into the base currency.

    Zero or negative table rates are treated as missing and resolve to 1.
    """
    rate = resolve_rate(currency, rate_table, logger)
    if rate <= 0:
        if logger is not None:
            logger.warning(
                f"Non-positive exchange rate for {currency}; "
                f"valuing it 1:1 with {BASE_CURRENCY}"
            )
        rate = Decimal("1")
    return coerce_decimal(amount) * rate


def from_base(
    amount,
    currency: str | None,
    rate_table: RateTable,
    logger: Logger | None = None,
) -> Decimal:
    """Convert a base-currency amount into ``currency``.

    Raises:
        ValueError: If the rate for ``currency`` is zero or negative.
    """
    rate = resolve_rate(currency, rate_table, logger)
    if rate <= 0:
        raise ValueError(f"Invalid exchange rate for {currency}: {rate}")
    return coerce_decimal(amount) / rate


def with_base_rate(rate_table: RateTable) -> dict[str, Decimal]:
    """Return a copy of the rate table with the base currency pinned to 1."""
    rates = {code: coerce_decimal(rate) for code, rate in rate_table.items()}
    rates[BASE_CURRENCY] = Decimal("1")
    return rates


def missing_rates(
    currencies: Iterable[str | None],
    rate_table: RateTable,
) -> frozenset[str]:
    """Return the codes that would fall back to a rate of 1.

    Codes missing from the table and codes with a non-positive rate both
    fall back.
    """
    return frozenset(
        code
        for code in (currency or BASE_CURRENCY for currency in currencies)
        if code != BASE_CURRENCY
        and (code not in rate_table or coerce_decimal(rate_table[code]) <= 0)
    )


def format_currency(value, currency: str | None = None) -> str:
    """Format an amount the Polish way with a currency symbol.

    Args:
        value: Amount to format; ``None`` formats as zero.
        currency: Currency code; defaults to the base currency.

    Returns:
        str: Formatted amount, e.g. ``"12 345,67 zł"``.
    """
    code = currency or BASE_CURRENCY
    amount = coerce_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    magnitude = abs(amount)
    if magnitude >= _GROUPING_MIN:
        digits = f"{magnitude:,.2f}"
    else:
        digits = f"{magnitude:.2f}"
    digits = digits.replace(",", _NBSP).replace(".", ",")
    symbol = CURRENCY_SYMBOLS.get(code, code)
    return f"{sign}{digits} {symbol}"


__all__ = [
    "RateTable",
    "resolve_rate",
    "to_base",
    "from_base",
    "with_base_rate",
    "missing_rates",
    "format_currency",
]
