from __future__ import annotations

import re
from uuid import NAMESPACE_URL, UUID, uuid5

_BILL_ID_RE = re.compile(r"^(?P<type>[a-z]+)(?P<number>\d+)-(?P<session>\d+)$")


def parse_bill_id(bill_id: str) -> tuple[str, int, int]:
    """
    Split `hr81-112` into ("hr", 81, 112).
    """
    m = _BILL_ID_RE.match(bill_id or "")
    if not m:
        raise ValueError(f"Malformed bill_id: {bill_id!r}")
    return m.group("type"), int(m.group("number")), int(m.group("session"))


def bill_version_id_for(bill_id: str, code: str) -> str:
    return f"{bill_id}-{code}"


def deterministic_point_id(*, collection: str, key: str) -> UUID:
    return uuid5(NAMESPACE_URL, f"qdrant:{collection}:{key}")
