from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from bill_text_core.models import Bill, VersionFile
from bill_text_core.text import extract_pre_text

logger = logging.getLogger(__name__)

_CODE_RE = re.compile(r"-(\w+)$")


@dataclass(frozen=True)
class GpoLayout:
    """
    Read-only view of the bill text files mirrored under `data_dir`:

    - data/gpo/BILLS/<session>/<type>/<type><number>-<session>-<code>.htm
    - data/gpo/BILLS/<session>/<type>/<type><number>-<session>-<code>.mods.xml
    - data/govtrack/<session>/bill_text/<type>/<type><number><code>.xml
    """

    data_dir: Path

    def _gpo_dir(self, session: int, bill_type: str) -> Path:
        return Path(self.data_dir) / "gpo" / "BILLS" / str(session) / bill_type

    def discover_version_files(self, bill: Bill) -> list[VersionFile]:
        pattern = f"{bill.bill_type}{bill.number}-{bill.session}-[a-z]*.htm"
        files: list[VersionFile] = []
        for path in sorted(self._gpo_dir(bill.session, bill.bill_type).glob(pattern)):
            m = _CODE_RE.search(path.stem)
            if not m:
                continue
            files.append(VersionFile(bill_id=bill.bill_id, version_code=m.group(1), path=path))
        return files

    def mods_path(self, bill: Bill, version: VersionFile) -> Path:
        return self._gpo_dir(bill.session, bill.bill_type) / f"{version.bill_version_id}.mods.xml"

    def dublin_core_path(self, bill: Bill, version: VersionFile) -> Path:
        return (
            Path(self.data_dir)
            / "govtrack"
            / str(bill.session)
            / "bill_text"
            / bill.bill_type
            / f"{bill.bill_type}{bill.number}{version.version_code}.xml"
        )

    def read_mods(self, bill: Bill, version: VersionFile) -> ET.Element | None:
        return _read_xml(self.mods_path(bill, version))

    def read_dublin_core(self, bill: Bill, version: VersionFile) -> ET.Element | None:
        return _read_xml(self.dublin_core_path(bill, version))

    def read_text(self, version: VersionFile) -> str | None:
        html = version.path.read_text(encoding="utf-8", errors="replace")
        return extract_pre_text(html)


def _read_xml(path: Path) -> ET.Element | None:
    if not path.exists():
        return None
    try:
        return ET.parse(path).getroot()
    except ET.ParseError as e:
        logger.warning("Unreadable XML at %s: %s", path, e)
        return None
