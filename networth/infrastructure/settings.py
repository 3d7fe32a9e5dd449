"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
from datetime import tzinfo
import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dotenv

from networth.domain.constants import DEFAULT_TIMEZONE
from networth.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class EngineSettings:
    """Settings for the net worth engine.

    Attributes:
        timezone: Timezone defining calendar days for snapshots and accrual.
        rates_file: Optional path to a cached NBP exchange-rate table.
    """

    timezone: tzinfo = field(default=DEFAULT_TIMEZONE)
    rates_file: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from environment variables.

        Returns:
            EngineSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        timezone = cls._resolve_timezone(
            os.getenv("NETWORTH_TIMEZONE", "").strip(),
            logger=logger,
        )
        raw_rates = os.getenv("NETWORTH_RATES_FILE")
        rates_file = None
        if raw_rates:
            rates_file = cls._normalize_path(raw_rates, logger=logger)
        return cls(timezone=timezone, rates_file=rates_file)

    @staticmethod
    def _resolve_timezone(name: str, logger) -> tzinfo:
        """Resolve an IANA timezone name, defaulting to UTC.

        Args:
            name: Raw timezone name.
            logger: Logger used for warnings.

        Returns:
            tzinfo: Resolved timezone.
        """
        if not name or name.upper() == "UTC":
            return DEFAULT_TIMEZONE
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {name}; falling back to UTC")
            return DEFAULT_TIMEZONE

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize the rates file path.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path: Normalized filesystem path.
        """
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"Rates file does not exist at {path}")
        return path


__all__ = ["EngineSettings"]
