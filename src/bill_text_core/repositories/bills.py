from __future__ import annotations

import json
from typing import Any

import psycopg
from psycopg.rows import dict_row

from bill_text_core.errors import BillNotFoundError
from bill_text_core.models import Bill, BillRollup

_BILL_COLUMNS = """
  bill_id, bill_type, number, session, chamber,
  official_title, short_title, introduced_on, last_action_at, abbreviated,
  sponsor, summary, keywords, last_action,
  indexed, version_info, version_codes, versions_count,
  last_version, last_version_on, citations, citation_ids,
  updated_at
"""


def _dumps(value: Any) -> str | None:
    return json.dumps(value) if value is not None else None


def _bill_from_row(row: dict[str, Any]) -> Bill:
    return Bill(**row)


class BillRepository:
    def __init__(self, conn: psycopg.Connection):
        self._conn = conn

    def upsert_bill(self, bill: Bill) -> None:
        """
        Insert or refresh a bill's identity and descriptive fields.

        Rollup fields and the indexed flag are left alone; only the archiver
        writes those.
        """
        self._conn.execute(
            """
            insert into bills (
              bill_id, bill_type, number, session, chamber,
              official_title, short_title, introduced_on, last_action_at, abbreviated,
              sponsor, summary, keywords, last_action,
              updated_at
            ) values (
              %(bill_id)s, %(bill_type)s, %(number)s, %(session)s, %(chamber)s,
              %(official_title)s, %(short_title)s, %(introduced_on)s, %(last_action_at)s, %(abbreviated)s,
              %(sponsor)s::jsonb, %(summary)s, %(keywords)s::jsonb, %(last_action)s::jsonb,
              now()
            )
            on conflict (bill_id) do update set
              chamber = excluded.chamber,
              official_title = excluded.official_title,
              short_title = excluded.short_title,
              introduced_on = excluded.introduced_on,
              last_action_at = excluded.last_action_at,
              abbreviated = excluded.abbreviated,
              sponsor = excluded.sponsor,
              summary = excluded.summary,
              keywords = excluded.keywords,
              last_action = excluded.last_action,
              updated_at = now()
            """,
            {
                "bill_id": bill.bill_id,
                "bill_type": bill.bill_type,
                "number": bill.number,
                "session": bill.session,
                "chamber": bill.chamber,
                "official_title": bill.official_title,
                "short_title": bill.short_title,
                "introduced_on": bill.introduced_on,
                "last_action_at": bill.last_action_at,
                "abbreviated": bill.abbreviated,
                "sponsor": _dumps(bill.sponsor),
                "summary": bill.summary,
                "keywords": _dumps(bill.keywords),
                "last_action": _dumps(bill.last_action),
            },
        )
        self._conn.commit()

    def get_bill(self, bill_id: str) -> Bill | None:
        with self._conn.cursor(row_factory=dict_row) as cur:
            row = cur.execute(
                f"select {_BILL_COLUMNS} from bills where bill_id=%s",
                (bill_id,),
            ).fetchone()
        if not row:
            return None
        return _bill_from_row(row)

    def list_pending(self, *, session: int, limit: int | None = None) -> list[Bill]:
        sql = f"""
        select {_BILL_COLUMNS}
        from bills
        where session=%s and abbreviated=false and indexed=false
        order by bill_id
        """
        params: tuple[Any, ...] = (session,)
        if limit is not None:
            sql += " limit %s"
            params = (session, limit)
        with self._conn.cursor(row_factory=dict_row) as cur:
            rows = cur.execute(sql, params).fetchall()
        return [_bill_from_row(r) for r in rows]

    def mark_session_unindexed(self, session: int) -> int:
        cur = self._conn.execute(
            "update bills set indexed=false, updated_at=now() where session=%s",
            (session,),
        )
        self._conn.commit()
        return cur.rowcount

    def apply_rollup(self, bill_id: str, rollup: BillRollup) -> None:
        cur = self._conn.execute(
            """
            update bills set
              version_info=%s::jsonb,
              version_codes=%s::jsonb,
              versions_count=%s,
              last_version=%s::jsonb,
              last_version_on=%s,
              citations=%s::jsonb,
              citation_ids=%s::jsonb,
              indexed=true,
              updated_at=now()
            where bill_id=%s
            """,
            (
                json.dumps(rollup.version_info),
                json.dumps(rollup.version_codes),
                rollup.versions_count,
                json.dumps(rollup.last_version),
                rollup.last_version_on,
                json.dumps(rollup.citations),
                json.dumps(rollup.citation_ids),
                bill_id,
            ),
        )
        if cur.rowcount == 0:
            self._conn.rollback()
            raise BillNotFoundError(f"Bill {bill_id} not found in document store")
        self._conn.commit()

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()
