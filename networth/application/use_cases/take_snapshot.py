"""Use case persisting the daily net worth snapshot of a user.

At most one snapshot is kept per calendar day. Taking a snapshot reads the
current sources, aggregates them and replaces the snapshots already taken
today with the fresh figures in a single atomic commit. Calls for the same
user are serialized so overlapping saves cannot both insert a snapshot.
"""

from collections.abc import Callable
from datetime import datetime, tzinfo
import threading

from sqlalchemy.exc import SQLAlchemyError

from networth.application.ports.finance_repository import FinanceRepositoryPort
from networth.domain.constants import DEFAULT_TIMEZONE
from networth.domain.models import Snapshot, SnapshotWriteIntent
from networth.domain.services import (
    RateTable,
    aggregate,
    build_asset_allocation,
    group_sub_records,
    take_snapshot,
)
from networth.infrastructure.logging.logger import get_app_logger


class SnapshotCommitError(RuntimeError):
    """Raised when the snapshot replacement could not be committed."""


class UserLocks:
    """Registry of one lock per user id."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def for_user(self, user_id: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(user_id, threading.Lock())


class TakeSnapshotUseCase:
    """Replace today's snapshots of a user with the current figures."""

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        logger=None,
        tz: tzinfo = DEFAULT_TIMEZONE,
        clock: Callable[[], datetime] | None = None,
        locks: UserLocks | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port giving access to the user's records.
            logger: Optional logger compatible with logging.Logger-like API.
            tz: Timezone defining calendar days.
            clock: Optional callable returning the current instant.
            locks: Optional lock registry shared with other instances.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._tz = tz
        self._clock = clock or (lambda: datetime.now(self._tz))
        self._locks = locks or UserLocks()

    def execute(
        self,
        user_id: str,
        rate_table: RateTable,
        now: datetime | None = None,
    ) -> Snapshot:
        """Take the snapshot.

        Args:
            user_id: Owner of the records.
            rate_table: Mapping of currency code to base-currency rate.
            now: Optional snapshot instant; defaults to the clock.

        Returns:
            Snapshot: The snapshot that was committed.

        Raises:
            SnapshotCommitError: If the store failed while reading the
                records or committing the snapshot. Nothing is committed
                in that case.
        """
        instant = now or self._clock()
        with self._locks.for_user(user_id):
            try:
                intent = self._plan(user_id, rate_table, instant)
                self._repository.commit_snapshot(
                    user_id,
                    intent.delete_ids,
                    intent.snapshot,
                )
            except SQLAlchemyError as exc:
                self._logger.error(
                    f"Snapshot failed for user {user_id}: {exc}"
                )
                raise SnapshotCommitError(
                    f"Could not save the net worth snapshot: {exc}"
                ) from exc

        self._logger.info(
            f"Snapshot taken for user {user_id}: "
            f"net_worth={intent.snapshot.net_worth}, "
            f"liquid_assets={intent.snapshot.liquid_assets}, "
            f"replaced={len(intent.delete_ids)}"
        )
        return intent.snapshot

    def _plan(
        self,
        user_id: str,
        rate_table: RateTable,
        instant: datetime,
    ) -> SnapshotWriteIntent:
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
        return take_snapshot(
            result,
            allocation,
            instant,
            self._repository.list_snapshots(user_id),
            self._tz,
        )


__all__ = ["TakeSnapshotUseCase", "SnapshotCommitError", "UserLocks"]
