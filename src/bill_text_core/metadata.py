from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Protocol

from bill_text_core.errors import NoValidDateError
from bill_text_core.models import ResolvedMetadata

DC_NS = "http://purl.org/dc/elements/1.1/"

# hr81-112-enr was published by GPO although HR 81 was never voted on.
SUPPRESSED_VERSION_IDS = frozenset({"hr81-112-enr"})

_URL_LABELS = (
    ("html", re.compile(r"HTML", re.IGNORECASE)),
    ("xml", re.compile(r"XML", re.IGNORECASE)),
    ("pdf", re.compile(r"PDF", re.IGNORECASE)),
)


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def parse_issued_on(timestamp: str | None) -> date | None:
    """
    Parse an ISO-8601 date or timestamp and truncate it to its UTC calendar day.

    Naive timestamps are taken to be UTC. Blank or unparseable input gives None.
    """
    value = (timestamp or "").strip()
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).date()


def issued_on_for(mods: ET.Element) -> date | None:
    for elem in mods.iter():
        if _local_name(elem.tag) == "dateIssued":
            return parse_issued_on(elem.text)
    return None


def urls_for(mods: ET.Element) -> dict[str, str]:
    urls: dict[str, str] = {}
    for elem in mods.iter():
        if _local_name(elem.tag) != "url":
            continue
        label = elem.get("displayLabel") or ""
        for fmt, pattern in _URL_LABELS:
            if pattern.search(label):
                urls[fmt] = (elem.text or "").strip()
                break
    return urls


def backup_issued_on_for(doc: ET.Element) -> date | None:
    timestamp = "".join(elem.text or "" for elem in doc.iter(f"{{{DC_NS}}}date"))
    return parse_issued_on(timestamp)


class MetadataStrategy(Protocol):
    name: str

    def resolve(
        self,
        primary: ET.Element | None,
        secondary: ET.Element | None,
    ) -> ResolvedMetadata | None: ...


class ModsStrategy:
    name = "mods"

    def resolve(
        self,
        primary: ET.Element | None,
        secondary: ET.Element | None,
    ) -> ResolvedMetadata | None:
        if primary is None:
            return None
        issued_on = issued_on_for(primary)
        if issued_on is None:
            return None
        return ResolvedMetadata(issued_on=issued_on, urls=urls_for(primary), source=self.name)


class DublinCoreStrategy:
    name = "dublin_core"

    def resolve(
        self,
        primary: ET.Element | None,
        secondary: ET.Element | None,
    ) -> ResolvedMetadata | None:
        if secondary is None:
            return None
        issued_on = backup_issued_on_for(secondary)
        if issued_on is None:
            return None
        return ResolvedMetadata(issued_on=issued_on, urls=None, source=self.name)


DEFAULT_STRATEGIES: tuple[MetadataStrategy, ...] = (ModsStrategy(), DublinCoreStrategy())


@dataclass(frozen=True)
class MetadataResolver:
    strategies: Sequence[MetadataStrategy] = DEFAULT_STRATEGIES

    def resolve(
        self,
        bill_version_id: str,
        *,
        primary: ET.Element | None,
        secondary: ET.Element | None,
    ) -> ResolvedMetadata:
        """
        First strategy that yields a date wins.

        Raises NoValidDateError when none does.
        """
        for strategy in self.strategies:
            resolved = strategy.resolve(primary, secondary)
            if resolved is not None:
                return resolved
        raise NoValidDateError(bill_version_id, had_primary=primary is not None)


def is_suppressed(bill_version_id: str) -> bool:
    return bill_version_id in SUPPRESSED_VERSION_IDS
