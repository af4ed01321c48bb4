from __future__ import annotations

from collections.abc import Sequence

from bill_text_core.errors import NoVersionsError
from bill_text_core.models import BillRollup, VersionRecord


def chronological(records: Sequence[VersionRecord]) -> list[VersionRecord]:
    # Same-day versions fall back to version code order.
    return sorted(records, key=lambda r: (r.issued_on, r.version_code))


def aggregate_versions(records: Sequence[VersionRecord]) -> BillRollup:
    """
    Roll a bill's versions from one run up into its latest-state fields.

    Only the latest version's text and citations represent the bill.
    """
    if not records:
        raise NoVersionsError("No versions with a valid date")

    ordered = chronological(records)
    last = ordered[-1]
    return BillRollup(
        version_info=[r.summary() for r in ordered],
        version_codes=[r.version_code for r in ordered],
        versions_count=len(ordered),
        last_version=last.summary(),
        last_version_on=last.issued_on,
        citations=list(last.citations),
        citation_ids=list(last.citation_ids),
        full_text=last.full_text,
    )
