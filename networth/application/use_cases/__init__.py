"""Application use cases package."""

from .accrue_interest import AccrueInterestUseCase, InterestAccrualOutcome
from .get_net_worth_summary import GetNetWorthSummaryUseCase
from .get_worth_over_time import GetWorthOverTimeUseCase
from .manage_sources import (
    DeleteSourceUseCase,
    SaveSourceUseCase,
    SourceMutationResult,
)
from .take_snapshot import SnapshotCommitError, TakeSnapshotUseCase, UserLocks

__all__ = [
    "AccrueInterestUseCase",
    "InterestAccrualOutcome",
    "GetNetWorthSummaryUseCase",
    "GetWorthOverTimeUseCase",
    "DeleteSourceUseCase",
    "SaveSourceUseCase",
    "SourceMutationResult",
    "SnapshotCommitError",
    "TakeSnapshotUseCase",
    "UserLocks",
]
