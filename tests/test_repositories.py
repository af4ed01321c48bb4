from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from bill_text_core.aggregate import aggregate_versions
from bill_text_core.errors import BillNotFoundError
from bill_text_core.models import Bill, VersionRecord
from bill_text_core.repositories import BillRepository, BillVersionRepository

NOW = datetime(2020, 6, 1, 12, 0, tzinfo=timezone.utc)


def _record(bill_id: str, code: str, issued_on: date, text: str = "A BILL") -> VersionRecord:
    return VersionRecord(
        bill_version_id=f"{bill_id}-{code}",
        bill_id=bill_id,
        version_code=code,
        version_name="Introduced in House",
        issued_on=issued_on,
        urls={"pdf": "http://gpo.gov/x.pdf"},
        citations=[{"usc": {"id": "usc/26/501"}, "index": 4}],
        citation_ids=["usc/26/501"],
        bill={"bill_id": bill_id, "sponsor": {"name": "Rep. Smith"}},
        full_text=text,
        updated_at=NOW,
    )


def test_bills_pending_rollup_and_reindex(conn) -> None:  # noqa: ANN001
    bills = BillRepository(conn)
    bills.upsert_bill(Bill(bill_id="hr1-112", bill_type="hr", number=1, session=112, keywords=["tax"]))
    bills.upsert_bill(Bill(bill_id="hr2-112", bill_type="hr", number=2, session=112, abbreviated=True))
    bills.upsert_bill(Bill(bill_id="hr3-112", bill_type="hr", number=3, session=112))

    assert [b.bill_id for b in bills.list_pending(session=112)] == ["hr1-112", "hr3-112"]
    assert [b.bill_id for b in bills.list_pending(session=112, limit=1)] == ["hr1-112"]

    rollup = aggregate_versions([_record("hr1-112", "ih", date(2011, 1, 5))])
    bills.apply_rollup("hr1-112", rollup)

    loaded = bills.get_bill("hr1-112")
    assert loaded is not None
    assert loaded.indexed is True
    assert loaded.keywords == ["tax"]
    assert loaded.version_codes == ["ih"]
    assert loaded.versions_count == 1
    assert loaded.last_version_on == date(2011, 1, 5)
    assert loaded.citation_ids == ["usc/26/501"]
    assert [b.bill_id for b in bills.list_pending(session=112)] == ["hr3-112"]

    # descriptive refresh does not reset the indexed flag
    bills.upsert_bill(Bill(bill_id="hr1-112", bill_type="hr", number=1, session=112, summary="new"))
    assert bills.get_bill("hr1-112").indexed is True

    assert bills.mark_session_unindexed(112) == 3
    assert bills.get_bill("hr1-112").indexed is False


def test_rollup_for_unknown_bill_raises(conn) -> None:  # noqa: ANN001
    bills = BillRepository(conn)
    rollup = aggregate_versions([_record("hr404-112", "ih", date(2011, 1, 5))])
    with pytest.raises(BillNotFoundError):
        bills.apply_rollup("hr404-112", rollup)


def test_versions_overwrite_by_id(conn) -> None:  # noqa: ANN001
    versions = BillVersionRepository(conn)
    versions.upsert_version(_record("hr5-112", "ih", date(2011, 1, 5), text="first"))
    versions.upsert_version(_record("hr5-112", "rh", date(2011, 2, 5)))
    versions.upsert_version(_record("hr5-112", "ih", date(2011, 1, 5), text="second"))

    loaded = versions.get_version("hr5-112-ih")
    assert loaded is not None
    assert loaded.full_text == "second"
    assert loaded.issued_on == date(2011, 1, 5)
    assert loaded.citations == [{"usc": {"id": "usc/26/501"}, "index": 4}]
    assert loaded.updated_at == NOW
    assert [v.version_code for v in versions.list_for_bill("hr5-112")] == ["ih", "rh"]
    assert versions.get_version("hr5-112-enr") is None
