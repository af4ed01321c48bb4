"""
Indexes the full text of every version of a bill.

Takes the bills of a session that have not been marked as indexed, resolves a
date and text for each version file on disk, writes each version and the bill's
latest-state rollup to the search index and the document store, and marks the
bill indexed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from bill_text_core.aggregate import aggregate_versions
from bill_text_core.builder import build_version
from bill_text_core.citations import CitationExtractor
from bill_text_core.errors import NoValidDateError
from bill_text_core.metadata import MetadataResolver, is_suppressed
from bill_text_core.models import Bill, VersionRecord
from bill_text_core.report import RunReport, RunReporter
from bill_text_core.sinks import DualSinkWriter
from bill_text_core.sources.gpo import GpoLayout
from bill_text_core.text import clean_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveOptions:
    session: int | None = None
    limit: int | None = None
    bill_id: str | None = None
    rearchive_session: int | None = None
    debug: bool = False
    # False: a sink failure aborts the whole batch. True: only the failing bill is skipped.
    isolate_failures: bool = False


class BillSource(Protocol):
    def get_bill(self, bill_id: str) -> Bill | None: ...
    def list_pending(self, *, session: int, limit: int | None = None) -> list[Bill]: ...
    def rollback(self) -> None: ...


@dataclass
class _Counts:
    bills: int = 0
    versions: int = 0


def _targets(options: ArchiveOptions, session: int, bills: BillSource, reporter: RunReporter) -> list[Bill]:
    if options.bill_id:
        bill = bills.get_bill(options.bill_id)
        if bill is None:
            reporter.note("Bill not found in document store", bill_id=options.bill_id)
            return []
        return [bill]
    # only unindexed, unabbreviated bills from the session
    return bills.list_pending(session=session, limit=options.limit)


def _build_versions(
    bill: Bill,
    *,
    gpo: GpoLayout,
    resolver: MetadataResolver,
    writer: DualSinkWriter,
    extract_citations: CitationExtractor,
    reporter: RunReporter,
    counts: _Counts,
    trace: Callable[..., None],
    now: datetime | None,
) -> list[VersionRecord] | None:
    version_files = gpo.discover_version_files(bill)
    if not version_files:
        reporter.note("Skipping bill, GPO has no version information for it (yet)", bill_id=bill.bill_id)
        return None

    bill_fields = bill.curated_fields()
    records: list[VersionRecord] = []

    for version in version_files:
        bill_version_id = version.bill_version_id

        primary = gpo.read_mods(bill, version)
        if primary is None:
            trace("[%s][%s] No MODS data", bill.bill_id, version.version_code)
        secondary = gpo.read_dublin_core(bill, version)
        try:
            metadata = resolver.resolve(bill_version_id, primary=primary, secondary=secondary)
        except NoValidDateError as e:
            if not is_suppressed(bill_version_id):
                reporter.warn(str(e), bill_version_id=bill_version_id)
            continue

        raw_text = gpo.read_text(version)
        if raw_text is None:
            reporter.warn(f"No text found in {bill_version_id}, SKIPPING", bill_version_id=bill_version_id)
            continue

        record = build_version(
            version,
            metadata,
            clean_text(raw_text),
            bill_fields,
            extract_citations=extract_citations,
            reporter=reporter,
            now=now,
        )

        trace("[%s][%s] Indexing...", bill.bill_id, version.version_code)
        writer.write_version(record)
        counts.versions += 1
        records.append(record)

    return records


def _archive_bill(
    bill: Bill,
    *,
    gpo: GpoLayout,
    resolver: MetadataResolver,
    writer: DualSinkWriter,
    extract_citations: CitationExtractor,
    reporter: RunReporter,
    counts: _Counts,
    trace: Callable[..., None],
    now: datetime | None,
) -> None:
    records = _build_versions(
        bill,
        gpo=gpo,
        resolver=resolver,
        writer=writer,
        extract_citations=extract_citations,
        reporter=reporter,
        counts=counts,
        trace=trace,
        now=now,
    )
    if records is None:
        return
    if not records:
        reporter.warn(
            f"No versions with a valid date found for bill {bill.bill_id}, "
            "SKIPPING update of the bill entirely in the search index and document store",
            bill_id=bill.bill_id,
        )
        return

    rollup = aggregate_versions(records)

    trace("[%s] Indexing versions for whole bill...", bill.bill_id)
    writer.write_document(bill, rollup, now=now)
    trace("[%s] Updated bill with version codes.", bill.bill_id)
    counts.bills += 1


def run_archive(
    options: ArchiveOptions,
    *,
    current_session: int,
    bills: BillSource,
    writer: DualSinkWriter,
    gpo: GpoLayout,
    extract_citations: CitationExtractor,
    reporter: RunReporter | None = None,
    resolver: MetadataResolver | None = None,
    now: datetime | None = None,
) -> RunReport:
    session = options.session if options.session is not None else current_session
    reporter = reporter or RunReporter()
    resolver = resolver or MetadataResolver()
    trace = logger.info if options.debug else logger.debug
    counts = _Counts()

    if options.rearchive_session is not None:
        writer.reindex(options.rearchive_session)

    for bill in _targets(options, session, bills, reporter):
        try:
            _archive_bill(
                bill,
                gpo=gpo,
                resolver=resolver,
                writer=writer,
                extract_citations=extract_citations,
                reporter=reporter,
                counts=counts,
                trace=trace,
                now=now,
            )
        except Exception as e:
            if not options.isolate_failures:
                raise
            logger.exception("Failed to archive bill %s", bill.bill_id)
            bills.rollback()
            reporter.warn(f"Failed to write bill {bill.bill_id}: {e}", bill_id=bill.bill_id)

    # make sure queries are ready
    writer.refresh()

    return reporter.finish(session=session, bills=counts.bills, versions=counts.versions)
