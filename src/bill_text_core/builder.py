from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from bill_text_core.citations import CitationExtractor, dedupe_citations
from bill_text_core.errors import NoValidDateError
from bill_text_core.models import ResolvedMetadata, VersionFile, VersionRecord
from bill_text_core.report import RunReporter
from bill_text_core.version_names import version_name_for

logger = logging.getLogger(__name__)


def build_version(
    version: VersionFile,
    metadata: ResolvedMetadata,
    full_text: str,
    bill_fields: dict[str, Any],
    *,
    extract_citations: CitationExtractor,
    reporter: RunReporter,
    now: datetime | None = None,
) -> VersionRecord:
    """
    Assemble the stored record for one bill version.

    `full_text` must already be normalized. A failed citation extraction still
    produces a record, with no citations and a warning on the reporter.
    """
    bill_version_id = version.bill_version_id
    if metadata.issued_on is None:
        raise NoValidDateError(bill_version_id, had_primary=metadata.source == "mods")

    extracted = extract_citations(full_text)
    if extracted is None:
        reporter.warn(f"Failed to extract USC from {bill_version_id}", bill_version_id=bill_version_id)
        extracted = []
    matches, citation_ids = dedupe_citations(extracted)
    if citation_ids:
        logger.debug("[%s] Found %d USC citations: %s", bill_version_id, len(citation_ids), citation_ids)

    return VersionRecord(
        bill_version_id=bill_version_id,
        bill_id=version.bill_id,
        version_code=version.version_code,
        version_name=version_name_for(version.version_code),
        issued_on=metadata.issued_on,
        urls=dict(metadata.urls or {}),
        citations=[m.data for m in matches],
        citation_ids=citation_ids,
        bill=dict(bill_fields),
        full_text=full_text,
        updated_at=now or datetime.now(timezone.utc),
    )
