from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol

from bill_text_core.models import Bill, BillRollup, VersionRecord

logger = logging.getLogger(__name__)


class SearchIndex(Protocol):
    def upsert_document(self, *, collection: str, key: str, payload: dict[str, Any]) -> None: ...
    def refresh(self, *, collection: str) -> None: ...


class BillStore(Protocol):
    def apply_rollup(self, bill_id: str, rollup: BillRollup) -> None: ...
    def mark_session_unindexed(self, session: int) -> int: ...
    def commit(self) -> None: ...


class VersionStore(Protocol):
    def upsert_version(self, record: VersionRecord) -> None: ...


def bill_search_payload(bill: Bill, rollup: BillRollup, *, now: datetime) -> dict[str, Any]:
    return {
        **bill.curated_fields(),
        "versions": rollup.full_text,
        "version_codes": list(rollup.version_codes),
        "versions_count": rollup.versions_count,
        "last_version": rollup.last_version,
        "last_version_on": rollup.last_version_on.isoformat(),
        "citations": list(rollup.citations),
        "citation_ids": list(rollup.citation_ids),
        "updated_at": now.isoformat(),
    }


@dataclass(frozen=True)
class DualSinkWriter:
    """
    Writes versions and bill rollups to the search index and the document store.

    Every write replaces whatever was stored under the same key. For bills the
    search index is written first, so a bill is never flagged indexed before its
    search document exists.
    """

    bills: BillStore
    versions: VersionStore
    index: SearchIndex
    bills_collection: str = "bills"
    versions_collection: str = "bill_versions"

    def write_version(self, record: VersionRecord) -> None:
        self.index.upsert_document(
            collection=self.versions_collection,
            key=record.bill_version_id,
            payload=record.to_payload(),
        )
        self.versions.upsert_version(record)

    def write_document(self, bill: Bill, rollup: BillRollup, *, now: datetime | None = None) -> None:
        now = now or datetime.now(timezone.utc)
        self.index.upsert_document(
            collection=self.bills_collection,
            key=bill.bill_id,
            payload=bill_search_payload(bill, rollup, now=now),
        )
        self.bills.apply_rollup(bill.bill_id, rollup)

    def reindex(self, session: int) -> int:
        count = self.bills.mark_session_unindexed(session)
        logger.info("Marked %d bills from session %s for re-indexing", count, session)
        return count

    def refresh(self) -> None:
        self.index.refresh(collection=self.versions_collection)
        self.index.refresh(collection=self.bills_collection)
        self.bills.commit()
