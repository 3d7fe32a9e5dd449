"""Domain constants for net worth valuation."""

from datetime import timezone
from decimal import Decimal

BASE_CURRENCY = "PLN"

# Sources below this share of net worth are grouped into the "Other" bucket.
OTHER_THRESHOLD_RATIO = Decimal("0.02")
OTHER_BUCKET_NAME = "Other"

DEFAULT_TIMEZONE = timezone.utc

# Rates used until a fresh NBP table is available.
DEFAULT_EXCHANGE_RATES = {
    "USD": Decimal("4.0"),
    "EUR": Decimal("4.3"),
    "GBP": Decimal("5.0"),
}

CURRENCY_SYMBOLS = {
    "PLN": "zł",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

UNNAMED_DEBT = "Unnamed Debt"
UNNAMED_ITEM = "Unnamed Item"


__all__ = [
    "BASE_CURRENCY",
    "OTHER_THRESHOLD_RATIO",
    "OTHER_BUCKET_NAME",
    "DEFAULT_TIMEZONE",
    "DEFAULT_EXCHANGE_RATES",
    "CURRENCY_SYMBOLS",
    "UNNAMED_DEBT",
    "UNNAMED_ITEM",
]
