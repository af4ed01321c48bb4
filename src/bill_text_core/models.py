from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

from bill_text_core.util import bill_version_id_for

# Bill fields copied onto every version record and onto the bill's search document.
CURATED_BILL_FIELDS = (
    "bill_id",
    "bill_type",
    "number",
    "session",
    "chamber",
    "official_title",
    "short_title",
    "introduced_on",
    "last_action_at",
    "sponsor",
    "summary",
    "keywords",
    "last_action",
)


def _json_safe(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


@dataclass(frozen=True)
class Bill:
    bill_id: str
    bill_type: str
    number: int
    session: int
    chamber: str | None = None
    official_title: str | None = None
    short_title: str | None = None
    introduced_on: date | None = None
    last_action_at: datetime | None = None
    abbreviated: bool = False
    sponsor: dict | None = None
    summary: str | None = None
    keywords: list[str] | None = None
    last_action: dict | None = None

    indexed: bool = False
    version_info: list[dict] | None = None
    version_codes: list[str] | None = None
    versions_count: int | None = None
    last_version: dict | None = None
    last_version_on: date | None = None
    citations: list[dict] | None = None
    citation_ids: list[str] | None = None
    updated_at: datetime | None = None

    def curated_fields(self) -> dict[str, Any]:
        return {name: _json_safe(getattr(self, name)) for name in CURATED_BILL_FIELDS}


@dataclass(frozen=True)
class VersionFile:
    bill_id: str
    version_code: str
    path: Path

    @property
    def bill_version_id(self) -> str:
        return bill_version_id_for(self.bill_id, self.version_code)


@dataclass(frozen=True)
class CitationMatch:
    citation_id: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ResolvedMetadata:
    issued_on: date | None
    urls: dict[str, str] | None = None
    source: str | None = None


@dataclass(frozen=True)
class VersionRecord:
    bill_version_id: str
    bill_id: str
    version_code: str
    version_name: str | None
    issued_on: date
    urls: dict[str, str]
    citations: list[dict[str, Any]]
    citation_ids: list[str]
    bill: dict[str, Any]
    full_text: str
    updated_at: datetime

    def summary(self) -> dict[str, Any]:
        """
        Compact per-version entry kept on the bill (`version_info`, `last_version`).
        """
        return {
            "version_code": self.version_code,
            "issued_on": self.issued_on.isoformat(),
            "version_name": self.version_name,
            "bill_version_id": self.bill_version_id,
            "urls": dict(self.urls),
            "citations": list(self.citations),
            "citation_ids": list(self.citation_ids),
        }

    def to_payload(self) -> dict[str, Any]:
        return {
            "updated_at": self.updated_at.isoformat(),
            "bill_version_id": self.bill_version_id,
            "bill_id": self.bill_id,
            "version_code": self.version_code,
            "version_name": self.version_name,
            "issued_on": self.issued_on.isoformat(),
            "urls": dict(self.urls),
            "citations": _json_safe(self.citations),
            "citation_ids": list(self.citation_ids),
            "bill": _json_safe(self.bill),
            "full_text": self.full_text,
        }


@dataclass(frozen=True)
class BillRollup:
    version_info: list[dict[str, Any]]
    version_codes: list[str]
    versions_count: int
    last_version: dict[str, Any]
    last_version_on: date
    citations: list[dict[str, Any]]
    citation_ids: list[str]
    full_text: str
