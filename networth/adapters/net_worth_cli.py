"""CLI adapter printing the net worth summary of a user.

The user and display currency are read from ``NETWORTH_USER_ID`` and
``NETWORTH_DISPLAY_CURRENCY``.
"""

import os

import dotenv

from networth.domain.constants import BASE_CURRENCY
from networth.domain.services import format_currency, normalize_currency_code
from networth.infrastructure.container import (
    build_finance_repository,
    build_net_worth_summary_use_case,
    build_rate_table,
)
from networth.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Compute and print the net worth summary."""
    dotenv.load_dotenv()
    logger = get_app_logger()
    user_id = os.getenv("NETWORTH_USER_ID")
    if not user_id:
        logger.warning("NETWORTH_USER_ID is required to compute net worth.")
        return
    display_currency = normalize_currency_code(
        os.getenv("NETWORTH_DISPLAY_CURRENCY", BASE_CURRENCY)
    )

    repository = build_finance_repository()
    rate_table = build_rate_table()
    use_case = build_net_worth_summary_use_case(repository)
    summary = use_case.execute(
        user_id,
        rate_table,
        display_currency=display_currency,
    )

    def _fmt(value) -> str:
        return format_currency(value, summary.currency_code)

    print(f"Net worth: {_fmt(summary.net_worth)}")
    print(f"Liquid assets: {_fmt(summary.liquid_assets)}")
    for entry in summary.asset_allocation:
        print(f"  {entry.name}: {_fmt(entry.value)}")
    if summary.missing_currencies:
        print(
            "Warning: no exchange rate for "
            f"{', '.join(sorted(summary.missing_currencies))}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
