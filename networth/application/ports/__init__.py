"""Application ports package."""

from .database import DatabaseEnginePort
from .finance_repository import FinanceRepositoryPort

__all__ = ["DatabaseEnginePort", "FinanceRepositoryPort"]
