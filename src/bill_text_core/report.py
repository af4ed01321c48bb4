from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ReportEntry(BaseModel):
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


class RunReport(BaseModel):
    source: str = Field(default="bill_text_archive")
    status: str = Field(default="success")
    session: int
    bills_indexed: int
    versions_indexed: int
    summary: str
    warnings: list[ReportEntry] = Field(default_factory=list)
    notes: list[ReportEntry] = Field(default_factory=list)
    finished_at: datetime


class RunReporter:
    """
    Collects warnings and notes during a run and emits them once at the end.
    """

    def __init__(self, publish: Callable[[RunReport], None] | None = None):
        self._publish = publish
        self.warnings: list[ReportEntry] = []
        self.notes: list[ReportEntry] = []

    def warn(self, message: str, **context: Any) -> None:
        self.warnings.append(ReportEntry(message=message, context=context))

    def note(self, message: str, **context: Any) -> None:
        self.notes.append(ReportEntry(message=message, context=context))

    def finish(self, *, session: int, bills: int, versions: int) -> RunReport:
        if self.warnings:
            logger.warning(
                "Warnings found while parsing bill text and metadata (%d)",
                len(self.warnings),
                extra={"warnings": [w.model_dump() for w in self.warnings]},
            )
            for entry in self.warnings:
                logger.warning("%s %s", entry.message, entry.context or "")

        if self.notes:
            logger.info(
                "Notes found while parsing bill text and metadata (%d)",
                len(self.notes),
                extra={"notes": [n.model_dump() for n in self.notes]},
            )
            for entry in self.notes:
                logger.info("%s %s", entry.message, entry.context or "")

        summary = (
            f"Loaded in full text of {bills} bills ({versions} versions) "
            f"for session #{session}."
        )
        logger.info(summary)

        report = RunReport(
            session=session,
            bills_indexed=bills,
            versions_indexed=versions,
            summary=summary,
            warnings=list(self.warnings),
            notes=list(self.notes),
            finished_at=datetime.now(timezone.utc),
        )
        if self._publish is not None:
            try:
                self._publish(report)
            except Exception:
                logger.exception("Failed to publish run report")
        return report
