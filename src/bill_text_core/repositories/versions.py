from __future__ import annotations

import json
from typing import Any

import psycopg
from psycopg.rows import dict_row

from bill_text_core.models import VersionRecord

_VERSION_COLUMNS = """
  bill_version_id, bill_id, version_code, version_name, issued_on,
  urls, citations, citation_ids, bill, full_text, updated_at
"""


def _version_from_row(row: dict[str, Any]) -> VersionRecord:
    return VersionRecord(**row)


class BillVersionRepository:
    def __init__(self, conn: psycopg.Connection):
        self._conn = conn

    def upsert_version(self, record: VersionRecord) -> None:
        """
        Find-or-create by bill_version_id, then overwrite every attribute.
        """
        self._conn.execute(
            """
            insert into bill_versions (
              bill_version_id, bill_id, version_code, version_name, issued_on,
              urls, citations, citation_ids, bill, full_text, updated_at
            ) values (
              %(bill_version_id)s, %(bill_id)s, %(version_code)s, %(version_name)s, %(issued_on)s,
              %(urls)s::jsonb, %(citations)s::jsonb, %(citation_ids)s::jsonb, %(bill)s::jsonb,
              %(full_text)s, %(updated_at)s
            )
            on conflict (bill_version_id) do update set
              bill_id = excluded.bill_id,
              version_code = excluded.version_code,
              version_name = excluded.version_name,
              issued_on = excluded.issued_on,
              urls = excluded.urls,
              citations = excluded.citations,
              citation_ids = excluded.citation_ids,
              bill = excluded.bill,
              full_text = excluded.full_text,
              updated_at = excluded.updated_at
            """,
            {
                "bill_version_id": record.bill_version_id,
                "bill_id": record.bill_id,
                "version_code": record.version_code,
                "version_name": record.version_name,
                "issued_on": record.issued_on,
                "urls": json.dumps(record.urls),
                "citations": json.dumps(record.citations),
                "citation_ids": json.dumps(record.citation_ids),
                "bill": json.dumps(record.bill),
                "full_text": record.full_text,
                "updated_at": record.updated_at,
            },
        )
        self._conn.commit()

    def get_version(self, bill_version_id: str) -> VersionRecord | None:
        with self._conn.cursor(row_factory=dict_row) as cur:
            row = cur.execute(
                f"select {_VERSION_COLUMNS} from bill_versions where bill_version_id=%s",
                (bill_version_id,),
            ).fetchone()
        if not row:
            return None
        return _version_from_row(row)

    def list_for_bill(self, bill_id: str) -> list[VersionRecord]:
        with self._conn.cursor(row_factory=dict_row) as cur:
            rows = cur.execute(
                f"""
                select {_VERSION_COLUMNS}
                from bill_versions
                where bill_id=%s
                order by issued_on, version_code
                """,
                (bill_id,),
            ).fetchall()
        return [_version_from_row(r) for r in rows]
