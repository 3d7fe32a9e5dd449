"""Daily snapshot consolidation policy.

Only the latest state of each calendar day is kept: a new snapshot replaces
every snapshot already taken on the same day.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, time, tzinfo
from uuid import uuid4

from networth.domain.constants import DEFAULT_TIMEZONE
from networth.domain.models import (
    AggregateResult,
    AllocationEntry,
    Snapshot,
    SnapshotWriteIntent,
)


def start_of_day(now: datetime, tz: tzinfo = DEFAULT_TIMEZONE) -> datetime:
    """Return midnight of the calendar day of ``now`` in ``tz``.

    Naive datetimes are taken as already expressed in ``tz`` and yield a
    naive result.
    """
    if now.tzinfo is None:
        return datetime.combine(now.date(), time.min)
    local = now.astimezone(tz)
    return datetime.combine(local.date(), time.min, tzinfo=tz)


def to_reference_time(
    value: datetime,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> datetime:
    """Return ``value`` as an aware datetime in ``tz``.

    Naive datetimes are taken as already expressed in ``tz``.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def snapshots_taken_since(
    snapshots: Iterable[Snapshot],
    since: datetime,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> list[Snapshot]:
    """Return the snapshots whose timestamp is at or after ``since``."""
    threshold = to_reference_time(since, tz)
    return [
        snapshot
        for snapshot in snapshots
        if snapshot.timestamp is not None
        and to_reference_time(snapshot.timestamp, tz) >= threshold
    ]


def take_snapshot(
    aggregate_result: AggregateResult,
    allocation: Sequence[AllocationEntry],
    now: datetime,
    existing_snapshots: Iterable[Snapshot] = (),
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> SnapshotWriteIntent:
    """Plan the replacement of today's snapshots by a fresh one.

    Args:
        aggregate_result: Current aggregation output.
        allocation: Current asset allocation.
        now: Instant of the snapshot.
        existing_snapshots: Snapshots already persisted for the user.
        tz: Timezone defining calendar days.

    Returns:
        SnapshotWriteIntent: Ids to delete and the snapshot to insert, to be
        committed atomically.
    """
    today = start_of_day(now, tz)
    stale = snapshots_taken_since(existing_snapshots, today, tz)
    snapshot = Snapshot(
        id=uuid4().hex,
        net_worth=aggregate_result.net_worth,
        liquid_assets=aggregate_result.liquid_assets,
        asset_allocation=tuple(allocation),
        timestamp=now,
    )
    return SnapshotWriteIntent(
        delete_ids=tuple(item.id for item in stale if item.id is not None),
        snapshot=snapshot,
    )


__all__ = [
    "start_of_day",
    "to_reference_time",
    "snapshots_taken_since",
    "take_snapshot",
]
