"""Composition root for wiring infrastructure adapters."""

from decimal import Decimal

from networth.application.ports.database import DatabaseEnginePort
from networth.application.ports.finance_repository import FinanceRepositoryPort
from networth.application.use_cases.accrue_interest import AccrueInterestUseCase
from networth.application.use_cases.get_net_worth_summary import (
    GetNetWorthSummaryUseCase,
)
from networth.application.use_cases.get_worth_over_time import (
    GetWorthOverTimeUseCase,
)
from networth.application.use_cases.manage_sources import (
    DeleteSourceUseCase,
    SaveSourceUseCase,
)
from networth.application.use_cases.take_snapshot import TakeSnapshotUseCase
from networth.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from networth.infrastructure.finance_repository import (
    SqlAlchemyFinanceRepository,
)
from networth.infrastructure.logging.logger import get_app_logger
from networth.infrastructure.rates import load_rate_table
from networth.infrastructure.settings import EngineSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_finance_repository(
    db_port: DatabaseEnginePort | None = None,
) -> FinanceRepositoryPort:
    """Return the finance repository with its schema in place."""
    resolved_db = db_port or build_database_adapter()
    repository = SqlAlchemyFinanceRepository(resolved_db)
    repository.ensure_schema()
    return repository


def build_rate_table(
    settings: EngineSettings | None = None,
) -> dict[str, Decimal]:
    """Return the configured exchange-rate table."""
    resolved_settings = settings or EngineSettings.from_env()
    return load_rate_table(resolved_settings.rates_file, logger=get_app_logger())


def build_snapshot_use_case(
    repository: FinanceRepositoryPort,
    settings: EngineSettings | None = None,
) -> TakeSnapshotUseCase:
    """Return the snapshot use case for the configured timezone."""
    resolved_settings = settings or EngineSettings.from_env()
    return TakeSnapshotUseCase(
        repository,
        logger=get_app_logger(),
        tz=resolved_settings.timezone,
    )


def build_save_source_use_case(
    repository: FinanceRepositoryPort,
    snapshot_use_case: TakeSnapshotUseCase,
    settings: EngineSettings | None = None,
) -> SaveSourceUseCase:
    """Return the save-source use case."""
    resolved_settings = settings or EngineSettings.from_env()
    return SaveSourceUseCase(
        repository,
        snapshot_use_case,
        tz=resolved_settings.timezone,
    )


def build_delete_source_use_case(
    repository: FinanceRepositoryPort,
    snapshot_use_case: TakeSnapshotUseCase,
    settings: EngineSettings | None = None,
) -> DeleteSourceUseCase:
    """Return the delete-source use case."""
    resolved_settings = settings or EngineSettings.from_env()
    return DeleteSourceUseCase(
        repository,
        snapshot_use_case,
        tz=resolved_settings.timezone,
    )


def build_accrue_interest_use_case(
    repository: FinanceRepositoryPort,
    snapshot_use_case: TakeSnapshotUseCase,
    settings: EngineSettings | None = None,
) -> AccrueInterestUseCase:
    """Return the interest accrual use case."""
    resolved_settings = settings or EngineSettings.from_env()
    return AccrueInterestUseCase(
        repository,
        snapshot_use_case,
        tz=resolved_settings.timezone,
    )


def build_net_worth_summary_use_case(
    repository: FinanceRepositoryPort,
) -> GetNetWorthSummaryUseCase:
    """Return the dashboard summary use case."""
    return GetNetWorthSummaryUseCase(repository, logger=get_app_logger())


def build_worth_over_time_use_case(
    repository: FinanceRepositoryPort,
    settings: EngineSettings | None = None,
) -> GetWorthOverTimeUseCase:
    """Return the net worth history use case."""
    resolved_settings = settings or EngineSettings.from_env()
    return GetWorthOverTimeUseCase(repository, tz=resolved_settings.timezone)


__all__ = [
    "build_database_adapter",
    "build_finance_repository",
    "build_rate_table",
    "build_snapshot_use_case",
    "build_save_source_use_case",
    "build_delete_source_use_case",
    "build_accrue_interest_use_case",
    "build_net_worth_summary_use_case",
    "build_worth_over_time_use_case",
]
