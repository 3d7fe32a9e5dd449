"""Domain services package."""

from .aggregation import aggregate, group_sub_records
from .allocation import build_asset_allocation
from .currency import (
    RateTable,
    format_currency,
    from_base,
    missing_rates,
    resolve_rate,
    to_base,
    with_base_rate,
)
from .interest import accrue_interest, accrue_record, calendar_day, is_leap_year
from .normalization import (
    normalize_currency_code,
    snapshot_from_mapping,
    source_from_mapping,
    sub_record_from_mapping,
)
from .snapshots import start_of_day, take_snapshot, to_reference_time
from .validation import validate_source, validate_sub_record
from .valuation import sub_record_value, value_source

__all__ = [
    "RateTable",
    "aggregate",
    "group_sub_records",
    "build_asset_allocation",
    "format_currency",
    "from_base",
    "missing_rates",
    "resolve_rate",
    "to_base",
    "with_base_rate",
    "accrue_interest",
    "accrue_record",
    "calendar_day",
    "is_leap_year",
    "normalize_currency_code",
    "snapshot_from_mapping",
    "source_from_mapping",
    "sub_record_from_mapping",
    "start_of_day",
    "take_snapshot",
    "to_reference_time",
    "validate_source",
    "validate_sub_record",
    "sub_record_value",
    "value_source",
]
