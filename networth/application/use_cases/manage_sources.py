"""Use cases creating, updating and deleting financial sources.

Every successful mutation is followed by a snapshot. The mutation and the
snapshot are reported together: a failed mutation raises, while a snapshot
failure after a committed mutation is returned as a partial success.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, tzinfo
from uuid import uuid4

from networth.application.ports.finance_repository import FinanceRepositoryPort
from networth.application.use_cases.take_snapshot import (
    SnapshotCommitError,
    TakeSnapshotUseCase,
)
from networth.domain.constants import DEFAULT_TIMEZONE
from networth.domain.models import Account, Snapshot, Source, SubRecord
from networth.domain.services import (
    RateTable,
    validate_source,
    validate_sub_record,
)
from networth.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


@dataclass(frozen=True)
class SourceMutationResult:
    """Outcome of a source mutation and its follow-up snapshot.

    Attributes:
        source_id: Id of the created, updated or deleted source.
        snapshot: Snapshot committed after the mutation, if any.
        snapshot_error: Message of the snapshot failure, if any.
    """

    source_id: str
    snapshot: Snapshot | None = None
    snapshot_error: str | None = None

    @property
    def partial_success(self) -> bool:
        """Return True when the data was saved but the snapshot was not."""
        return self.snapshot_error is not None


class _SourceMutationUseCase:
    """Shared wiring for use cases that end with a snapshot."""

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        snapshot_use_case: TakeSnapshotUseCase,
        logger=None,
        usage_logger=None,
        tz: tzinfo = DEFAULT_TIMEZONE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port giving access to the user's records.
            snapshot_use_case: Use case run after each mutation.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger for user operations.
            tz: Timezone used for the default clock.
            clock: Optional callable returning the current instant.
        """
        self._repository = repository
        self._snapshot_use_case = snapshot_use_case
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._clock = clock or (lambda: datetime.now(tz))

    def _snapshot_after(
        self,
        user_id: str,
        source_id: str,
        rate_table: RateTable,
        now: datetime,
    ) -> SourceMutationResult:
        try:
            snapshot = self._snapshot_use_case.execute(user_id, rate_table, now)
        except SnapshotCommitError as exc:
            self._logger.warning(
                f"Source {source_id} saved but snapshot failed: {exc}"
            )
            return SourceMutationResult(
                source_id=source_id,
                snapshot_error=str(exc),
            )
        return SourceMutationResult(source_id=source_id, snapshot=snapshot)


class SaveSourceUseCase(_SourceMutationUseCase):
    """Create or update a source together with its sub-records."""

    def execute(
        self,
        user_id: str,
        source: Source,
        sub_records: Sequence[SubRecord],
        rate_table: RateTable,
        now: datetime | None = None,
    ) -> SourceMutationResult:
        """Save the source, replace its sub-records and take a snapshot.

        Sub-records of the source that are not submitted are deleted. Loan
        and debt dates are kept so interest keeps accruing from the last
        accrual; every other record is stamped with ``now``.

        Args:
            user_id: Owner of the records.
            source: Source to save; a missing id creates a new source.
            sub_records: Complete set of sub-records (bank-like only).
            rate_table: Mapping of currency code to base-currency rate.
            now: Optional mutation instant; defaults to the clock.

        Returns:
            SourceMutationResult: Saved source id and snapshot outcome.
        """
        instant = now or self._clock()
        source_id = source.id or uuid4().hex
        saved_source = replace(
            source,
            id=source_id,
            last_updated=instant,
            other_debts=tuple(
                replace(
                    debt,
                    id=debt.id or uuid4().hex,
                    last_updated=debt.last_updated or instant,
                )
                for debt in source.other_debts
            ),
        )
        if saved_source.is_property:
            if sub_records:
                self._logger.warning(
                    f"Ignoring {len(sub_records)} sub-records submitted "
                    f"for property source {source_id}"
                )
            records: list[SubRecord] = []
        else:
            records = [
                self._prepare_record(record, source_id, instant)
                for record in sub_records
            ]

        validate_source(saved_source, self._logger)
        for record in records:
            validate_sub_record(record, self._logger)

        self._repository.save_source(user_id, saved_source, records)
        self._usage_logger.info(
            f"User {user_id} saved source {source_id} "
            f"({saved_source.kind.value}) with {len(records)} sub-records"
        )
        return self._snapshot_after(user_id, source_id, rate_table, instant)

    @staticmethod
    def _prepare_record(
        record: SubRecord,
        source_id: str,
        now: datetime,
    ) -> SubRecord:
        if isinstance(record, Account):
            last_updated = now
        else:
            last_updated = record.last_updated or now
        return replace(
            record,
            id=record.id or uuid4().hex,
            source_id=source_id,
            last_updated=last_updated,
        )


class DeleteSourceUseCase(_SourceMutationUseCase):
    """Delete a source and its sub-records."""

    def execute(
        self,
        user_id: str,
        source_id: str,
        rate_table: RateTable,
        now: datetime | None = None,
    ) -> SourceMutationResult:
        """Delete the source, cascade to its sub-records, take a snapshot."""
        instant = now or self._clock()
        self._repository.delete_source(user_id, source_id)
        self._usage_logger.info(f"User {user_id} deleted source {source_id}")
        return self._snapshot_after(user_id, source_id, rate_table, instant)


__all__ = [
    "SourceMutationResult",
    "SaveSourceUseCase",
    "DeleteSourceUseCase",
]
