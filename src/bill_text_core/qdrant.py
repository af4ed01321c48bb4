from __future__ import annotations

from dataclasses import dataclass
from time import monotonic, sleep
from typing import Any

import httpx

from bill_text_core.util import deterministic_point_id


@dataclass(frozen=True)
class QdrantClient:
    """
    Qdrant used as a keyed document index: payload-only points, one per key.
    """

    base_url: str
    api_key: str | None = None
    refresh_timeout_s: float = 60.0
    refresh_poll_s: float = 0.5
    transport: httpx.BaseTransport | None = None

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            return {}
        # Qdrant supports either `api-key` or bearer auth; use api-key.
        return {"api-key": self.api_key}

    def _client(self, timeout: float) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url.rstrip("/"),
            headers=self._headers(),
            timeout=timeout,
            transport=self.transport,
        )

    def ensure_collection(self, *, name: str) -> None:
        with self._client(30) as client:
            get_resp = client.get(f"/collections/{name}")
            if get_resp.status_code == 200:
                return
            if get_resp.status_code not in (404,):
                get_resp.raise_for_status()

            create = client.put(f"/collections/{name}", json={"vectors": {}})
            create.raise_for_status()

    def upsert_document(self, *, collection: str, key: str, payload: dict[str, Any]) -> None:
        """
        Replace the point stored under `key`; nothing of the previous payload survives.
        """
        point = {
            "id": str(deterministic_point_id(collection=collection, key=key)),
            "vector": {},
            "payload": {**payload, "key": key},
        }
        with self._client(120) as client:
            resp = client.put(
                f"/collections/{collection}/points",
                params={"wait": "true"},
                json={"points": [point]},
            )
            resp.raise_for_status()

    def collection_status(self, *, collection: str) -> str:
        with self._client(30) as client:
            resp = client.get(f"/collections/{collection}")
            resp.raise_for_status()
            data = resp.json()
        status = (data.get("result") or {}).get("status")
        if not isinstance(status, str):
            raise RuntimeError("Unexpected Qdrant collection response shape")
        return status

    def refresh(self, *, collection: str) -> None:
        """
        Block until the collection reports `green`, i.e. every write is searchable.
        """
        deadline = monotonic() + self.refresh_timeout_s
        nudged = False
        while True:
            status = self.collection_status(collection=collection)
            if status == "green":
                return
            if status == "red":
                raise RuntimeError(f"Qdrant collection {collection} is in status red")
            if status == "grey" and not nudged:
                # Optimizers paused since restart; an empty config update wakes them.
                with self._client(30) as client:
                    resp = client.patch(f"/collections/{collection}", json={"optimizers_config": {}})
                    resp.raise_for_status()
                nudged = True
            if monotonic() >= deadline:
                raise RuntimeError(f"Timed out waiting for Qdrant collection {collection} to become green")
            sleep(self.refresh_poll_s)
