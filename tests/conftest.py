from __future__ import annotations

import dataclasses
import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from bill_text_core.db import connect
from bill_text_core.errors import BillNotFoundError
from bill_text_core.migrations.runner import apply_migrations
from bill_text_core.models import Bill, BillRollup, VersionRecord
from bill_text_core.sinks import DualSinkWriter


@pytest.fixture(scope="session")
def pg_dsn() -> str:
    dsn = os.environ.get("PG_DSN")
    if not dsn:
        pytest.skip("PG_DSN not set; skipping DB integration tests")
    return dsn


@pytest.fixture(scope="session")
def pg_schema(pg_dsn: str) -> Generator[str, None, None]:
    schema = f"test_{uuid.uuid4().hex[:10]}"
    apply_migrations(pg_dsn, schema=schema)
    yield schema
    with psycopg.connect(pg_dsn) as conn:
        conn.execute(f'drop schema if exists "{schema}" cascade')
        conn.commit()


@pytest.fixture()
def conn(pg_dsn: str, pg_schema: str) -> Generator[psycopg.Connection, None, None]:
    with connect(pg_dsn, schema=pg_schema) as c:
        yield c


class FakeIndex:
    def __init__(self, log: list[tuple[str, str]]):
        self.docs: dict[tuple[str, str], dict[str, Any]] = {}
        self.refreshed: list[str] = []
        self.fail_keys: set[str] = set()
        self._log = log

    def upsert_document(self, *, collection: str, key: str, payload: dict[str, Any]) -> None:
        if key in self.fail_keys:
            raise RuntimeError(f"index write failed for {key}")
        self._log.append(("index", key))
        self.docs[(collection, key)] = payload

    def refresh(self, *, collection: str) -> None:
        self.refreshed.append(collection)


class FakeBillStore:
    def __init__(self, log: list[tuple[str, str]]):
        self.bills: dict[str, Bill] = {}
        self.rollups: list[str] = []
        self.commits = 0
        self.rollbacks = 0
        self._log = log

    def add(self, bill: Bill) -> None:
        self.bills[bill.bill_id] = bill

    def get_bill(self, bill_id: str) -> Bill | None:
        return self.bills.get(bill_id)

    def list_pending(self, *, session: int, limit: int | None = None) -> list[Bill]:
        pending = [
            b
            for _, b in sorted(self.bills.items())
            if b.session == session and not b.abbreviated and not b.indexed
        ]
        return pending if limit is None else pending[:limit]

    def mark_session_unindexed(self, session: int) -> int:
        count = 0
        for bill_id, bill in self.bills.items():
            if bill.session == session:
                self.bills[bill_id] = dataclasses.replace(bill, indexed=False)
                count += 1
        return count

    def apply_rollup(self, bill_id: str, rollup: BillRollup) -> None:
        bill = self.bills.get(bill_id)
        if bill is None:
            raise BillNotFoundError(bill_id)
        self._log.append(("bills", bill_id))
        self.rollups.append(bill_id)
        self.bills[bill_id] = dataclasses.replace(
            bill,
            version_info=rollup.version_info,
            version_codes=rollup.version_codes,
            versions_count=rollup.versions_count,
            last_version=rollup.last_version,
            last_version_on=rollup.last_version_on,
            citations=rollup.citations,
            citation_ids=rollup.citation_ids,
            indexed=True,
        )

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


class FakeVersionStore:
    def __init__(self, log: list[tuple[str, str]]):
        self.records: dict[str, VersionRecord] = {}
        self._log = log

    def upsert_version(self, record: VersionRecord) -> None:
        self._log.append(("bill_versions", record.bill_version_id))
        self.records[record.bill_version_id] = record


@pytest.fixture()
def write_log() -> list[tuple[str, str]]:
    return []


@pytest.fixture()
def fake_index(write_log: list[tuple[str, str]]) -> FakeIndex:
    return FakeIndex(write_log)


@pytest.fixture()
def fake_bills(write_log: list[tuple[str, str]]) -> FakeBillStore:
    return FakeBillStore(write_log)


@pytest.fixture()
def fake_versions(write_log: list[tuple[str, str]]) -> FakeVersionStore:
    return FakeVersionStore(write_log)


@pytest.fixture()
def writer(fake_bills: FakeBillStore, fake_versions: FakeVersionStore, fake_index: FakeIndex) -> DualSinkWriter:
    return DualSinkWriter(bills=fake_bills, versions=fake_versions, index=fake_index)
