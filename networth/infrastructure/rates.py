"""Exchange-rate tables built from National Bank of Poland (NBP) data.

NBP "table A" payloads look like ``[{"rates": [{"code": "USD", "mid":
3.98}, ...]}]`` where ``mid`` is the PLN price of one unit of the currency,
which is exactly the rate table convention of the engine.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
import json
from pathlib import Path
from typing import Any

from networth.domain.constants import DEFAULT_EXCHANGE_RATES
from networth.domain.services import normalize_currency_code, with_base_rate
from networth.infrastructure.logging.logger import get_app_logger
from networth.utils.decimal_utils import coerce_decimal

REQUIRED_CURRENCIES = ("USD", "EUR", "GBP")


def parse_nbp_table(
    payload: Any,
    fallback: Mapping[str, Decimal] = DEFAULT_EXCHANGE_RATES,
    required: Iterable[str] = REQUIRED_CURRENCIES,
    logger=None,
) -> dict[str, Decimal]:
    """Build a rate table from an NBP table payload.

    The fallback rates are kept unless every required currency is quoted.

    Args:
        payload: Decoded NBP JSON payload.
        fallback: Rates used when the payload is unusable.
        required: Currency codes that must all be quoted.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        dict[str, Decimal]: Rate table including the base currency.
    """
    resolved_logger = logger or get_app_logger()
    quoted = _extract_rates(payload)
    missing = [code for code in required if code not in quoted]
    if missing:
        resolved_logger.error(
            "Could not use NBP exchange rates, missing "
            f"{', '.join(missing)}; using default values."
        )
        return with_base_rate(fallback)
    resolved_logger.info(f"Loaded {len(quoted)} NBP exchange rates")
    return with_base_rate(quoted)


def load_rate_table(
    path: Path | None,
    logger=None,
) -> dict[str, Decimal]:
    """Load a rate table from an NBP JSON file, or the defaults.

    Args:
        path: Path to the cached NBP payload; ``None`` uses the defaults.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        dict[str, Decimal]: Rate table including the base currency.
    """
    resolved_logger = logger or get_app_logger()
    if path is None:
        return with_base_rate(DEFAULT_EXCHANGE_RATES)
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        resolved_logger.error(
            f"Could not read exchange rates from {path}: {exc}; "
            "using default values."
        )
        return with_base_rate(DEFAULT_EXCHANGE_RATES)
    return parse_nbp_table(payload, logger=resolved_logger)


def _extract_rates(payload: Any) -> dict[str, Decimal]:
    if not isinstance(payload, list) or not payload:
        return {}
    table = payload[0]
    if not isinstance(table, Mapping):
        return {}
    rates: dict[str, Decimal] = {}
    for row in table.get("rates") or ():
        if not isinstance(row, Mapping) or row.get("mid") is None:
            continue
        mid = coerce_decimal(row["mid"])
        if mid <= 0:
            continue
        rates[normalize_currency_code(row.get("code"))] = mid
    return rates


__all__ = ["REQUIRED_CURRENCIES", "parse_nbp_table", "load_rate_table"]
