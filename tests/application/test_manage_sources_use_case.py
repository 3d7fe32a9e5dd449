"""Tests for the SaveSourceUseCase and DeleteSourceUseCase."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from networth.application.use_cases.manage_sources import (
    DeleteSourceUseCase,
    SaveSourceUseCase,
)
from networth.application.use_cases.take_snapshot import (
    SnapshotCommitError,
    TakeSnapshotUseCase,
)
from networth.domain.models import Account, Debt, Loan, Source, SourceKind

NOW = datetime(2024, 6, 1, 18, tzinfo=timezone.utc)
EARLIER = datetime(2024, 1, 1, tzinfo=timezone.utc)
RATES = {"USD": Decimal("4")}


def _build(use_case_cls, snapshot_side_effect=None):
    repository = MagicMock()
    snapshot_use_case = MagicMock()
    if snapshot_side_effect is not None:
        snapshot_use_case.execute.side_effect = snapshot_side_effect
    use_case = use_case_cls(
        repository,
        snapshot_use_case,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )
    return use_case, repository, snapshot_use_case


def test_save_new_bank_source_assigns_ids_and_stamps() -> None:
    """New sources and records get ids; loans keep their accrual date."""
    use_case, repository, snapshot_use_case = _build(SaveSourceUseCase)
    source = Source(id=None, name="Bank", kind=SourceKind.BANK_LIKE)
    records = [
        Account(id=None, source_id=None, name="Savings", balance=Decimal("10")),
        Loan(
            id="loan-1",
            source_id=None,
            name="Loan",
            base_amount=Decimal("100"),
            last_updated=EARLIER,
        ),
    ]

    result = use_case.execute("user-1", source, records, RATES, NOW)

    user_id, saved_source, saved_records = repository.save_source.call_args.args
    assert user_id == "user-1"
    assert saved_source.id
    assert saved_source.last_updated == NOW
    assert all(record.source_id == saved_source.id for record in saved_records)
    assert saved_records[0].id
    assert saved_records[0].last_updated == NOW
    assert saved_records[1].id == "loan-1"
    assert saved_records[1].last_updated == EARLIER
    snapshot_use_case.execute.assert_called_once_with("user-1", RATES, NOW)
    assert result.source_id == saved_source.id
    assert result.snapshot is snapshot_use_case.execute.return_value
    assert not result.partial_success


def test_save_property_ignores_sub_records_and_dates_debts() -> None:
    use_case, repository, _ = _build(SaveSourceUseCase)
    source = Source(
        id="flat",
        name="Flat",
        kind=SourceKind.PROPERTY,
        other_debts=(
            Debt(id=None, source_id=None, name="Parents", base_amount=Decimal("5")),
        ),
    )
    stray = Account(id="a", source_id="flat", name="A", balance=Decimal("1"))

    use_case.execute("user-1", source, [stray], RATES, NOW)

    _, saved_source, saved_records = repository.save_source.call_args.args
    assert saved_records == []
    assert saved_source.other_debts[0].id
    assert saved_source.other_debts[0].last_updated == NOW


def test_snapshot_failure_is_reported_as_partial_success() -> None:
    """The saved data is not rolled back when the snapshot fails."""
    use_case, repository, _ = _build(
        SaveSourceUseCase,
        snapshot_side_effect=SnapshotCommitError("store unavailable"),
    )
    source = Source(id="bank", name="Bank", kind=SourceKind.BANK_LIKE)

    result = use_case.execute("user-1", source, [], RATES, NOW)

    repository.save_source.assert_called_once()
    assert result.partial_success
    assert result.snapshot is None
    assert "store unavailable" in result.snapshot_error


def test_store_outage_after_save_is_partial_success() -> None:
    """A read failure in the follow-up snapshot keeps the saved data."""
    repository = MagicMock()
    repository.list_sources.return_value = []
    repository.list_sub_records.return_value = []
    repository.list_snapshots.side_effect = OperationalError(
        "SELECT",
        {},
        Exception("db down"),
    )
    use_case = SaveSourceUseCase(
        repository,
        TakeSnapshotUseCase(repository, logger=MagicMock()),
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )
    source = Source(id="bank", name="Bank", kind=SourceKind.BANK_LIKE)

    result = use_case.execute("user-1", source, [], RATES, NOW)

    repository.save_source.assert_called_once()
    repository.commit_snapshot.assert_not_called()
    assert result.partial_success
    assert "db down" in result.snapshot_error


def test_failed_save_raises_and_skips_snapshot() -> None:
    use_case, repository, snapshot_use_case = _build(SaveSourceUseCase)
    repository.save_source.side_effect = OperationalError(
        "INSERT",
        {},
        Exception("disk full"),
    )
    source = Source(id="bank", name="Bank", kind=SourceKind.BANK_LIKE)

    with pytest.raises(OperationalError):
        use_case.execute("user-1", source, [], RATES, NOW)

    snapshot_use_case.execute.assert_not_called()


def test_delete_source_cascades_and_snapshots() -> None:
    use_case, repository, snapshot_use_case = _build(DeleteSourceUseCase)

    result = use_case.execute("user-1", "bank", RATES, NOW)

    repository.delete_source.assert_called_once_with("user-1", "bank")
    snapshot_use_case.execute.assert_called_once_with("user-1", RATES, NOW)
    assert result.source_id == "bank"
    assert not result.partial_success
