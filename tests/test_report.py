from __future__ import annotations

import logging

from bill_text_core.report import RunReport, RunReporter


def test_reporter_collects_and_summarizes(caplog) -> None:  # noqa: ANN001
    reporter = RunReporter()
    reporter.warn("Failed to extract USC from hr1-112-ih", bill_version_id="hr1-112-ih")
    reporter.note("Skipping bill, GPO has no version information for it (yet)", bill_id="hr2-112")

    with caplog.at_level(logging.INFO, logger="bill_text_core.report"):
        report = reporter.finish(session=112, bills=3, versions=7)

    assert report.summary == "Loaded in full text of 3 bills (7 versions) for session #112."
    assert [w.context for w in report.warnings] == [{"bill_version_id": "hr1-112-ih"}]
    assert [n.context for n in report.notes] == [{"bill_id": "hr2-112"}]
    messages = [r.getMessage() for r in caplog.records]
    assert "Warnings found while parsing bill text and metadata (1)" in messages
    assert "Notes found while parsing bill text and metadata (1)" in messages
    assert report.summary in messages
    assert any("hr2-112" in m and "GPO has no version information" in m for m in messages)


def test_quiet_run_only_reports_success(caplog) -> None:  # noqa: ANN001
    with caplog.at_level(logging.INFO, logger="bill_text_core.report"):
        report = RunReporter().finish(session=112, bills=0, versions=0)

    assert report.warnings == []
    assert report.notes == []
    assert [r.getMessage() for r in caplog.records] == [report.summary]


def test_report_serializes_for_publishing() -> None:
    published: list[RunReport] = []
    reporter = RunReporter(publish=published.append)
    reporter.warn("boom", bill_id="hr1-112")

    report = reporter.finish(session=112, bills=0, versions=0)

    assert published == [report]
    restored = RunReport.model_validate_json(report.model_dump_json())
    assert restored.warnings[0].message == "boom"
    assert restored.source == "bill_text_archive"


def test_failed_publish_still_returns_report(caplog) -> None:  # noqa: ANN001
    def publish(report: RunReport) -> None:
        raise ConnectionRefusedError("nats unavailable")

    with caplog.at_level(logging.ERROR, logger="bill_text_core.report"):
        report = RunReporter(publish=publish).finish(session=112, bills=1, versions=2)

    assert report.bills_indexed == 1
    assert report.versions_indexed == 2
    failures = [r for r in caplog.records if r.getMessage() == "Failed to publish run report"]
    assert len(failures) == 1
    assert failures[0].exc_info is not None
