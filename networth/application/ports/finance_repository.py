"""Port for reading and writing a user's financial records."""

from collections.abc import Sequence
from typing import Protocol

from networth.domain.models import Snapshot, Source, SubRecord


class FinanceRepositoryPort(Protocol):
    """Port exposing persistence of sources, sub-records and snapshots.

    Listing methods return records in no particular order.
    """

    def list_sources(self, user_id: str) -> list[Source]:
        """Return every source of the user."""

    def list_sub_records(self, user_id: str) -> list[SubRecord]:
        """Return every sub-record of the user."""

    def list_snapshots(self, user_id: str) -> list[Snapshot]:
        """Return every snapshot of the user."""

    def commit_snapshot(
        self,
        user_id: str,
        delete_ids: Sequence[str],
        snapshot: Snapshot,
    ) -> None:
        """Delete ``delete_ids`` and insert ``snapshot`` atomically."""

    def save_source(
        self,
        user_id: str,
        source: Source,
        sub_records: Sequence[SubRecord],
    ) -> None:
        """Upsert a source and replace its set of sub-records atomically."""

    def delete_source(self, user_id: str, source_id: str) -> None:
        """Delete a source together with its sub-records."""

    def save_sub_record(self, user_id: str, record: SubRecord) -> None:
        """Upsert a single sub-record."""


__all__ = ["FinanceRepositoryPort"]
