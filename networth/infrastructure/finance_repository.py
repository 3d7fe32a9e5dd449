"""SQLAlchemy-backed repository for sources, sub-records and snapshots.

Amounts are stored as decimal strings and timestamps as ISO 8601 strings so
values round-trip exactly on every backend. Multi-statement writes run in a
single transaction.
"""

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
import json
from typing import Any

from sqlalchemy import text

from networth.application.ports.database import DatabaseEnginePort
from networth.application.ports.finance_repository import FinanceRepositoryPort
from networth.domain.models import (
    Account,
    AllocationEntry,
    Debt,
    Snapshot,
    Source,
    SubRecord,
)
from networth.domain.services.normalization import (
    record_type_of,
    snapshot_from_mapping,
    source_from_mapping,
    sub_record_from_mapping,
)

CREATE_SOURCES_SQL = """
CREATE TABLE IF NOT EXISTS sources (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    name TEXT,
    kind TEXT NOT NULL,
    last_updated TEXT,
    area_m2 TEXT,
    price_per_area_unit TEXT,
    price_currency TEXT,
    bank_debt_amount TEXT,
    bank_debt_currency TEXT,
    other_debts TEXT
)
"""

CREATE_SUB_RECORDS_SQL = """
CREATE TABLE IF NOT EXISTS sub_records (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    source_id TEXT NOT NULL,
    record_type TEXT NOT NULL,
    name TEXT,
    balance TEXT,
    base_amount TEXT,
    accumulated_interest TEXT,
    interest_rate_percent TEXT,
    currency TEXT,
    last_updated TEXT
)
"""

CREATE_SNAPSHOTS_SQL = """
CREATE TABLE IF NOT EXISTS snapshots (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    net_worth TEXT,
    liquid_assets TEXT,
    asset_allocation TEXT,
    timestamp TEXT
)
"""

SELECT_SOURCES_SQL = text(
    """
    SELECT id, name, kind, last_updated, area_m2, price_per_area_unit,
           price_currency, bank_debt_amount, bank_debt_currency, other_debts
    FROM sources
    WHERE user_id = :user_id
    """
)

SELECT_SUB_RECORDS_SQL = text(
    """
    SELECT id, source_id, record_type, name, balance, base_amount,
           accumulated_interest, interest_rate_percent, currency, last_updated
    FROM sub_records
    WHERE user_id = :user_id
    """
)

SELECT_SNAPSHOTS_SQL = text(
    """
    SELECT id, net_worth, liquid_assets, asset_allocation, timestamp
    FROM snapshots
    WHERE user_id = :user_id
    """
)

DELETE_SOURCE_SQL = text(
    "DELETE FROM sources WHERE user_id = :user_id AND id = :id"
)

DELETE_SOURCE_SUB_RECORDS_SQL = text(
    "DELETE FROM sub_records WHERE user_id = :user_id AND source_id = :source_id"
)

DELETE_SUB_RECORD_SQL = text(
    "DELETE FROM sub_records WHERE user_id = :user_id AND id = :id"
)

DELETE_SNAPSHOT_SQL = text(
    "DELETE FROM snapshots WHERE user_id = :user_id AND id = :id"
)

INSERT_SOURCE_SQL = text(
    """
    INSERT INTO sources (
        id, user_id, name, kind, last_updated, area_m2, price_per_area_unit,
        price_currency, bank_debt_amount, bank_debt_currency, other_debts
    )
    VALUES (
        :id, :user_id, :name, :kind, :last_updated, :area_m2,
        :price_per_area_unit, :price_currency, :bank_debt_amount,
        :bank_debt_currency, :other_debts
    )
    """
)

INSERT_SUB_RECORD_SQL = text(
    """
    INSERT INTO sub_records (
        id, user_id, source_id, record_type, name, balance, base_amount,
        accumulated_interest, interest_rate_percent, currency, last_updated
    )
    VALUES (
        :id, :user_id, :source_id, :record_type, :name, :balance,
        :base_amount, :accumulated_interest, :interest_rate_percent,
        :currency, :last_updated
    )
    """
)

INSERT_SNAPSHOT_SQL = text(
    """
    INSERT INTO snapshots (
        id, user_id, net_worth, liquid_assets, asset_allocation, timestamp
    )
    VALUES (
        :id, :user_id, :net_worth, :liquid_assets, :asset_allocation,
        :timestamp
    )
    """
)


class SqlAlchemyFinanceRepository(FinanceRepositoryPort):
    """Repository backed by SQLAlchemy for a user's financial records."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
        """
        self._db_port = db_port

    def ensure_schema(self) -> None:
        """Create the tables if they do not exist."""
        with self._db_port.get_engine().begin() as conn:
            conn.exec_driver_sql(CREATE_SOURCES_SQL)
            conn.exec_driver_sql(CREATE_SUB_RECORDS_SQL)
            conn.exec_driver_sql(CREATE_SNAPSHOTS_SQL)

    def list_sources(self, user_id: str) -> list[Source]:
        """Return every source of the user."""
        rows = self._fetch(SELECT_SOURCES_SQL, user_id)
        sources = []
        for row in rows:
            raw = dict(row._mapping)
            raw["other_debts"] = json.loads(raw.get("other_debts") or "[]")
            sources.append(source_from_mapping(raw))
        return sources

    def list_sub_records(self, user_id: str) -> list[SubRecord]:
        """Return every sub-record of the user."""
        rows = self._fetch(SELECT_SUB_RECORDS_SQL, user_id)
        return [sub_record_from_mapping(dict(row._mapping)) for row in rows]

    def list_snapshots(self, user_id: str) -> list[Snapshot]:
        """Return every snapshot of the user."""
        rows = self._fetch(SELECT_SNAPSHOTS_SQL, user_id)
        snapshots = []
        for row in rows:
            raw = dict(row._mapping)
            raw["asset_allocation"] = json.loads(
                raw.get("asset_allocation") or "[]"
            )
            snapshots.append(snapshot_from_mapping(raw))
        return snapshots

    def commit_snapshot(
        self,
        user_id: str,
        delete_ids: Sequence[str],
        snapshot: Snapshot,
    ) -> None:
        """Delete ``delete_ids`` and insert ``snapshot`` in one transaction."""
        with self._db_port.get_engine().begin() as conn:
            if delete_ids:
                conn.execute(
                    DELETE_SNAPSHOT_SQL,
                    [
                        {"user_id": user_id, "id": snapshot_id}
                        for snapshot_id in delete_ids
                    ],
                )
            conn.execute(INSERT_SNAPSHOT_SQL, _snapshot_params(user_id, snapshot))

    def save_source(
        self,
        user_id: str,
        source: Source,
        sub_records: Sequence[SubRecord],
    ) -> None:
        """Upsert a source and replace its sub-records in one transaction."""
        if source.id is None:
            raise ValueError("Cannot save a source without an id")
        with self._db_port.get_engine().begin() as conn:
            conn.execute(DELETE_SOURCE_SQL, {"user_id": user_id, "id": source.id})
            conn.execute(INSERT_SOURCE_SQL, _source_params(user_id, source))
            conn.execute(
                DELETE_SOURCE_SUB_RECORDS_SQL,
                {"user_id": user_id, "source_id": source.id},
            )
            if sub_records:
                conn.execute(
                    INSERT_SUB_RECORD_SQL,
                    [
                        _sub_record_params(user_id, record)
                        for record in sub_records
                    ],
                )

    def delete_source(self, user_id: str, source_id: str) -> None:
        """Delete a source and its sub-records in one transaction."""
        with self._db_port.get_engine().begin() as conn:
            conn.execute(DELETE_SOURCE_SQL, {"user_id": user_id, "id": source_id})
            conn.execute(
                DELETE_SOURCE_SUB_RECORDS_SQL,
                {"user_id": user_id, "source_id": source_id},
            )

    def save_sub_record(self, user_id: str, record: SubRecord) -> None:
        """Upsert a single sub-record."""
        if record.id is None or record.source_id is None:
            raise ValueError("Cannot save a sub-record without id and source")
        with self._db_port.get_engine().begin() as conn:
            conn.execute(DELETE_SUB_RECORD_SQL, {"user_id": user_id, "id": record.id})
            conn.execute(INSERT_SUB_RECORD_SQL, _sub_record_params(user_id, record))

    def _fetch(self, query, user_id: str):
        with self._db_port.get_engine().connect() as conn:
            return conn.execute(query, {"user_id": user_id}).all()


def _decimal_text(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def _timestamp_text(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def _debt_payload(debt: Debt) -> dict[str, Any]:
    return {
        "id": debt.id,
        "name": debt.name,
        "base_amount": _decimal_text(debt.base_amount),
        "accumulated_interest": _decimal_text(debt.accumulated_interest),
        "interest_rate_percent": _decimal_text(debt.interest_rate_percent),
        "currency": debt.currency,
        "last_updated": _timestamp_text(debt.last_updated),
    }


def _allocation_payload(entry: AllocationEntry) -> dict[str, str]:
    return {"name": entry.name, "value": str(entry.value)}


def _source_params(user_id: str, source: Source) -> dict[str, Any]:
    return {
        "id": source.id,
        "user_id": user_id,
        "name": source.name,
        "kind": source.kind.value,
        "last_updated": _timestamp_text(source.last_updated),
        "area_m2": _decimal_text(source.area_m2),
        "price_per_area_unit": _decimal_text(source.price_per_area_unit),
        "price_currency": source.price_currency,
        "bank_debt_amount": _decimal_text(source.bank_debt_amount),
        "bank_debt_currency": source.bank_debt_currency,
        "other_debts": json.dumps(
            [_debt_payload(debt) for debt in source.other_debts]
        ),
    }


def _sub_record_params(user_id: str, record: SubRecord) -> dict[str, Any]:
    params: dict[str, Any] = {
        "id": record.id,
        "user_id": user_id,
        "source_id": record.source_id,
        "record_type": record_type_of(record),
        "name": record.name,
        "balance": None,
        "base_amount": None,
        "accumulated_interest": None,
        "interest_rate_percent": None,
        "currency": record.currency,
        "last_updated": _timestamp_text(record.last_updated),
    }
    if isinstance(record, Account):
        params["balance"] = _decimal_text(record.balance)
    else:
        params["base_amount"] = _decimal_text(record.base_amount)
        params["accumulated_interest"] = _decimal_text(
            record.accumulated_interest
        )
        params["interest_rate_percent"] = _decimal_text(
            record.interest_rate_percent
        )
    return params


def _snapshot_params(user_id: str, snapshot: Snapshot) -> dict[str, Any]:
    return {
        "id": snapshot.id,
        "user_id": user_id,
        "net_worth": _decimal_text(snapshot.net_worth),
        "liquid_assets": _decimal_text(snapshot.liquid_assets),
        "asset_allocation": json.dumps(
            [_allocation_payload(entry) for entry in snapshot.asset_allocation]
        ),
        "timestamp": _timestamp_text(snapshot.timestamp),
    }


__all__ = ["SqlAlchemyFinanceRepository"]
