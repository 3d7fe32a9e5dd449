"""Use case returning the net worth history of a user."""

from datetime import tzinfo

from networth.application.ports.finance_repository import FinanceRepositoryPort
from networth.domain.constants import BASE_CURRENCY, DEFAULT_TIMEZONE
from networth.domain.models import WorthPoint
from networth.domain.services import RateTable, from_base, to_reference_time


class GetWorthOverTimeUseCase:
    """Turn stored snapshots into a chronological series."""

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        tz: tzinfo = DEFAULT_TIMEZONE,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port giving access to the user's records.
            tz: Timezone naive snapshot timestamps are expressed in.
        """
        self._repository = repository
        self._tz = tz

    def execute(
        self,
        user_id: str,
        rate_table: RateTable,
        display_currency: str = BASE_CURRENCY,
    ) -> list[WorthPoint]:
        """Return snapshot figures in the display currency, oldest first.

        Snapshots without a timestamp are skipped.
        """
        snapshots = [
            snapshot
            for snapshot in self._repository.list_snapshots(user_id)
            if snapshot.timestamp is not None
        ]
        snapshots.sort(
            key=lambda snapshot: to_reference_time(
                snapshot.timestamp,
                self._tz,
            )
        )
        return [
            WorthPoint(
                timestamp=snapshot.timestamp,
                net_worth=from_base(
                    snapshot.net_worth,
                    display_currency,
                    rate_table,
                ),
                liquid_assets=from_base(
                    snapshot.liquid_assets,
                    display_currency,
                    rate_table,
                ),
            )
            for snapshot in snapshots
        ]


__all__ = ["GetWorthOverTimeUseCase"]
