from __future__ import annotations

import httpx

from bill_text_core.citations import CitationServiceClient, dedupe_citations
from bill_text_core.models import CitationMatch


def test_dedupe_keeps_first_match_per_id() -> None:
    first = CitationMatch("usc/26/501", {"usc": {"id": "usc/26/501"}, "index": 10})
    again = CitationMatch("usc/26/501", {"usc": {"id": "usc/26/501"}, "index": 480})
    other = CitationMatch("usc/42/1983", {"usc": {"id": "usc/42/1983"}, "index": 200})

    matches, ids = dedupe_citations([first, other, again])

    assert ids == ["usc/26/501", "usc/42/1983"]
    assert matches == [first, other]


def test_dedupe_of_nothing() -> None:
    assert dedupe_citations([]) == ([], [])


def _client(handler) -> CitationServiceClient:  # noqa: ANN001
    return CitationServiceClient(
        base_url="http://citations.local/",
        max_retries=0,
        transport=httpx.MockTransport(handler),
    )


def test_service_client_maps_results() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.content.decode("utf-8")
        return httpx.Response(
            200,
            json={
                "results": [
                    {"type": "usc", "match": "26 U.S.C. 501", "usc": {"id": "usc/26/501"}},
                    {"type": "usc", "match": "garbage", "usc": {}},
                    {"type": "usc", "match": "42 U.S.C. 1983", "usc": {"id": "usc/42/1983"}},
                ]
            },
        )

    matches = _client(handler)("section 501 of title 26")

    assert seen["url"] == "http://citations.local/citation/find"
    assert "types=usc" in str(seen["body"])
    assert matches is not None
    assert [m.citation_id for m in matches] == ["usc/26/501", "usc/42/1983"]
    assert matches[0].data["match"] == "26 U.S.C. 501"


def test_service_client_error_status_is_none() -> None:
    assert _client(lambda request: httpx.Response(500))("text") is None


def test_service_client_malformed_body_is_none() -> None:
    assert _client(lambda request: httpx.Response(200, json={"oops": True}))("text") is None
    assert _client(lambda request: httpx.Response(200, text="not json"))("text") is None


def test_service_client_transport_error_is_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    assert _client(handler)("text") is None
