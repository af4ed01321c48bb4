from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from time import sleep
from typing import Any, Protocol

import httpx

from bill_text_core.models import CitationMatch

logger = logging.getLogger(__name__)


class CitationExtractor(Protocol):
    def __call__(self, text: str) -> list[CitationMatch] | None: ...


def dedupe_citations(matches: Iterable[CitationMatch]) -> tuple[list[CitationMatch], list[str]]:
    """
    Keep the first match per citation id.

    The same citation found twice differs only in its offsets, so matches are
    compared by id, not by payload.
    """
    kept: list[CitationMatch] = []
    ids: list[str] = []
    seen: set[str] = set()
    for match in matches:
        if match.citation_id in seen:
            continue
        seen.add(match.citation_id)
        kept.append(match)
        ids.append(match.citation_id)
    return kept, ids


def _matches_from_payload(payload: Any, citation_type: str) -> list[CitationMatch]:
    if not isinstance(payload, dict):
        raise ValueError("Citation response is not an object")
    results = payload.get("results")
    if not isinstance(results, list):
        raise ValueError("Citation response missing results")
    matches: list[CitationMatch] = []
    for result in results:
        typed = result.get(citation_type) if isinstance(result, dict) else None
        citation_id = typed.get("id") if isinstance(typed, dict) else None
        if not isinstance(citation_id, str) or not citation_id:
            continue
        matches.append(CitationMatch(citation_id=citation_id, data=result))
    return matches


@dataclass(frozen=True)
class CitationServiceClient:
    """
    Client for a citation-extraction HTTP service (`POST /citation/find`).

    Any failure is reported as None so callers can carry on without citations.
    """

    base_url: str
    citation_type: str = "usc"
    timeout_s: float = 30.0
    max_retries: int = 1
    retry_backoff_s: float = 1.0
    transport: httpx.BaseTransport | None = None

    def __call__(self, text: str) -> list[CitationMatch] | None:
        return self.extract(text)

    def extract(self, text: str) -> list[CitationMatch] | None:
        url = self.base_url.rstrip("/") + "/citation/find"
        attempt = 0
        with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
            while True:
                try:
                    resp = client.post(url, data={"text": text, "types": self.citation_type})
                    resp.raise_for_status()
                    return _matches_from_payload(resp.json(), self.citation_type)
                except (httpx.TimeoutException, httpx.TransportError) as e:
                    if attempt >= self.max_retries:
                        logger.warning("Citation service unreachable: %s", e)
                        return None
                    sleep(self.retry_backoff_s * (2**attempt))
                    attempt += 1
                except httpx.HTTPStatusError as e:
                    logger.warning("Citation service returned %s", e.response.status_code)
                    return None
                except ValueError as e:
                    logger.warning("Unexpected citation service response: %s", e)
                    return None


def unavailable_extractor(text: str) -> list[CitationMatch] | None:
    """
    Extractor used when no citation service is configured.
    """
    return None
