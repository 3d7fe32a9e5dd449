"""Use case to compute the net worth dashboard figures of a user."""

from networth.application.ports.finance_repository import FinanceRepositoryPort
from networth.domain.constants import BASE_CURRENCY
from networth.domain.models import AllocationEntry, NetWorthSummary
from networth.domain.services import (
    RateTable,
    aggregate,
    build_asset_allocation,
    from_base,
    group_sub_records,
)
from networth.infrastructure.logging.logger import get_app_logger


class GetNetWorthSummaryUseCase:
    """Compute net worth, liquid assets and allocation for a user."""

    def __init__(self, repository: FinanceRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port giving access to the user's records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        rate_table: RateTable,
        display_currency: str = BASE_CURRENCY,
    ) -> NetWorthSummary:
        """Return the summary converted into the display currency.

        Args:
            user_id: Owner of the records.
            rate_table: Mapping of currency code to base-currency rate.
            display_currency: Currency the totals are expressed in.

        Returns:
            NetWorthSummary: Totals and allocation in ``display_currency``;
            valuated sources keep their base-currency values.
        """
        sources = self._repository.list_sources(user_id)
        sub_records = self._repository.list_sub_records(user_id)
        result = aggregate(
            sources,
            group_sub_records(sub_records),
            rate_table,
            self._logger,
        )
        allocation = build_asset_allocation(
            result.valuated_sources,
            result.net_worth,
        )

        def _display(amount):
            return from_base(amount, display_currency, rate_table)

        self._logger.info(
            f"Net worth computed for user {user_id}: "
            f"net_worth={result.net_worth}, "
            f"liquid_assets={result.liquid_assets}, "
            f"sources={len(result.valuated_sources)}"
        )
        if result.degraded:
            self._logger.warning(
                "Net worth uses fallback rates for "
                f"{', '.join(sorted(result.missing_currencies))}"
            )

        return NetWorthSummary(
            valuated_sources=result.valuated_sources,
            net_worth=_display(result.net_worth),
            liquid_assets=_display(result.liquid_assets),
            asset_allocation=tuple(
                AllocationEntry(name=entry.name, value=_display(entry.value))
                for entry in allocation
            ),
            currency_code=display_currency,
            missing_currencies=result.missing_currencies,
        )


__all__ = ["GetNetWorthSummaryUseCase"]
