"""Interest accrual for loans and debts.

Interest compounds annually and is weighted with an actual/actual day
count: elapsed time is split at every January 1st so each chunk is measured
against the length of its own year (366 days in leap years).
"""

from dataclasses import replace
from datetime import date, datetime, tzinfo
from decimal import Decimal

from networth.domain.constants import DEFAULT_TIMEZONE
from networth.domain.models import (
    AccrualResult,
    AccrualStatus,
    InterestBearing,
)
from networth.utils.decimal_utils import coerce_decimal


def is_leap_year(year: int) -> bool:
    """Return True for Gregorian leap years."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def calendar_day(instant: datetime, tz: tzinfo = DEFAULT_TIMEZONE) -> date:
    """Return the calendar day of an instant in the reference timezone.

    Naive datetimes are taken as already expressed in that timezone.
    """
    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone(tz).date()


def accrue_interest(
    base_amount,
    accumulated_interest,
    annual_rate_percent,
    last_accrual: datetime | None,
    now: datetime,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> AccrualResult:
    """Fold the interest earned since the last accrual into the balance.

    Accrual happens at most once per calendar day. A record without a
    previous accrual date counts as accrued today.

    Args:
        base_amount: Principal, never modified.
        accumulated_interest: Interest accrued so far.
        annual_rate_percent: Annual rate in percent.
        last_accrual: Instant of the previous accrual.
        now: Current instant.
        tz: Timezone defining calendar days.

    Returns:
        AccrualResult: New accumulated interest and accrual instant, or the
        unchanged values with the reason nothing was accrued.
    """
    base = coerce_decimal(base_amount)
    accumulated = coerce_decimal(accumulated_interest)
    rate = coerce_decimal(annual_rate_percent)

    start = calendar_day(last_accrual or now, tz)
    today = calendar_day(now, tz)
    if today <= start:
        return AccrualResult(
            status=AccrualStatus.ALREADY_ACCRUED_TODAY,
            accumulated_interest=accumulated,
            last_accrual=last_accrual,
        )
    if rate <= 0:
        return AccrualResult(
            status=AccrualStatus.ZERO_RATE,
            accumulated_interest=accumulated,
            last_accrual=last_accrual,
        )

    growth = 1 + rate / 100
    principal = base + accumulated
    current = start
    while current < today:
        chunk_end = min(today, date(current.year + 1, 1, 1))
        days = Decimal((chunk_end - current).days)
        year_days = Decimal(366 if is_leap_year(current.year) else 365)
        principal *= growth ** (days / year_days)
        current = chunk_end

    return AccrualResult(
        status=AccrualStatus.ACCRUED,
        accumulated_interest=principal - base,
        last_accrual=now,
    )


def accrue_record(
    record: InterestBearing,
    now: datetime,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> tuple[InterestBearing, AccrualResult]:
    """Accrue interest on a loan or debt.

    Returns:
        tuple: The updated record (the same object when nothing accrued)
        and the accrual result.
    """
    result = accrue_interest(
        record.base_amount,
        record.accumulated_interest,
        record.interest_rate_percent,
        record.last_updated,
        now,
        tz,
    )
    if not result.accrued:
        return record, result
    updated = replace(
        record,
        accumulated_interest=result.accumulated_interest,
        last_updated=result.last_accrual,
    )
    return updated, result


__all__ = [
    "is_leap_year",
    "calendar_day",
    "accrue_interest",
    "accrue_record",
]
