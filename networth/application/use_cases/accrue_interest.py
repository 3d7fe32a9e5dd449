"""Use case accruing interest on a stored loan or debt."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, tzinfo

from networth.application.ports.finance_repository import FinanceRepositoryPort
from networth.application.use_cases.manage_sources import SourceMutationResult
from networth.application.use_cases.take_snapshot import (
    SnapshotCommitError,
    TakeSnapshotUseCase,
)
from networth.domain.constants import DEFAULT_TIMEZONE
from networth.domain.models import AccrualResult, Debt, Loan
from networth.domain.services import RateTable, accrue_record
from networth.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


@dataclass(frozen=True)
class InterestAccrualOutcome:
    """Accrual result and, when interest was added, the save outcome."""

    accrual: AccrualResult
    mutation: SourceMutationResult | None = None


class AccrueInterestUseCase:
    """Accrue interest on a loan, a debt or a property's other debt.

    Nothing is written when the record was already accrued today or carries
    no interest rate; the outcome reports which case applied.
    """

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        snapshot_use_case: TakeSnapshotUseCase,
        logger=None,
        usage_logger=None,
        tz: tzinfo = DEFAULT_TIMEZONE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._snapshot_use_case = snapshot_use_case
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._tz = tz
        self._clock = clock or (lambda: datetime.now(self._tz))

    def execute(
        self,
        user_id: str,
        source_id: str,
        record_id: str,
        rate_table: RateTable,
        now: datetime | None = None,
    ) -> InterestAccrualOutcome:
        """Accrue interest on one record of a source.

        Args:
            user_id: Owner of the records.
            source_id: Source owning the record.
            record_id: Id of the loan/debt sub-record or property debt.
            rate_table: Mapping of currency code to base-currency rate.
            now: Optional accrual instant; defaults to the clock.

        Returns:
            InterestAccrualOutcome: Accrual status and snapshot outcome.

        Raises:
            ValueError: If no loan or debt matches the ids.
        """
        instant = now or self._clock()
        for record in self._repository.list_sub_records(user_id):
            if record.source_id != source_id or record.id != record_id:
                continue
            if not isinstance(record, (Loan, Debt)):
                raise ValueError(
                    f"Record {record_id} is an account and bears no interest"
                )
            updated, result = accrue_record(record, instant, self._tz)
            if not result.accrued:
                return self._skipped(record_id, result)
            self._repository.save_sub_record(user_id, updated)
            return self._saved(user_id, source_id, record_id, result, rate_table)

        for source in self._repository.list_sources(user_id):
            if source.id != source_id or not source.is_property:
                continue
            debts = list(source.other_debts)
            for index, debt in enumerate(debts):
                if debt.id != record_id:
                    continue
                updated, result = accrue_record(debt, instant, self._tz)
                if not result.accrued:
                    return self._skipped(record_id, result)
                debts[index] = updated
                self._repository.save_source(
                    user_id,
                    replace(source, other_debts=tuple(debts)),
                    (),
                )
                return self._saved(
                    user_id,
                    source_id,
                    record_id,
                    result,
                    rate_table,
                )

        raise ValueError(
            f"No loan or debt {record_id} found in source {source_id}"
        )

    def _skipped(
        self,
        record_id: str,
        result: AccrualResult,
    ) -> InterestAccrualOutcome:
        self._logger.info(
            f"No interest accrued on {record_id}: {result.status.value}"
        )
        return InterestAccrualOutcome(accrual=result)

    def _saved(
        self,
        user_id: str,
        source_id: str,
        record_id: str,
        result: AccrualResult,
        rate_table: RateTable,
    ) -> InterestAccrualOutcome:
        self._usage_logger.info(
            f"User {user_id} accrued interest on {record_id}: "
            f"accumulated_interest={result.accumulated_interest}"
        )
        try:
            snapshot = self._snapshot_use_case.execute(
                user_id,
                rate_table,
                result.last_accrual,
            )
        except SnapshotCommitError as exc:
            return InterestAccrualOutcome(
                accrual=result,
                mutation=SourceMutationResult(
                    source_id=source_id,
                    snapshot_error=str(exc),
                ),
            )
        return InterestAccrualOutcome(
            accrual=result,
            mutation=SourceMutationResult(
                source_id=source_id,
                snapshot=snapshot,
            ),
        )


__all__ = ["AccrueInterestUseCase", "InterestAccrualOutcome"]
