"""
Local Catalog Client (Mock/Local).

Purpose:
- Serves a catalog document and image payloads from memory or local files
- Does NOT make any network calls
- Records every requested URL so tests can assert on network usage

Behavior:
- URLs not registered (or registered as failing) raise FetchError
- Optional per-URL delays simulate slow responses and let fetches interleave

Swap:
Replace with clients/real_http/catalog_http.py to read the published catalog.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from src.catalog.errors import FetchError
from src.integrations.contracts.interfaces import CatalogSource


class LocalCatalogClient(CatalogSource):
    def __init__(
        self,
        documents: Optional[Dict[str, Any]] = None,
        images: Optional[Dict[str, bytes]] = None,
        failing_urls: Iterable[str] = (),
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.documents: Dict[str, str] = {}
        for url, body in (documents or {}).items():
            self.add_document(url, body)
        self.images: Dict[str, bytes] = dict(images or {})
        self.failing_urls = set(failing_urls)
        self.delays: Dict[str, float] = dict(delays or {})
        self.requested: List[str] = []

    @classmethod
    def from_directory(cls, catalog_url: str, directory: Path) -> "LocalCatalogClient":
        """Serve product.json from `directory`; images are addressed by file name."""
        directory = Path(directory)
        document = (directory / "product.json").read_text(encoding="utf-8")
        images = {
            path.name: path.read_bytes()
            for path in directory.iterdir()
            if path.suffix.lower() in {".png", ".jpg", ".jpeg", ".webp"}
        }
        return cls(documents={catalog_url: document}, images=images)

    def add_document(self, url: str, body: Any) -> None:
        self.documents[url] = body if isinstance(body, str) else json.dumps(body)

    def add_image(self, url: str, payload: bytes) -> None:
        self.images[url] = payload

    def fail(self, url: str) -> None:
        self.failing_urls.add(url)

    def request_count(self, url: str) -> int:
        return self.requested.count(url)

    async def _respond(self, url: str, store: Dict[str, Any]):
        self.requested.append(url)
        # Always yield so concurrent fetches interleave like real requests.
        await asyncio.sleep(self.delays.get(url, 0))
        if url in self.failing_urls:
            raise FetchError(url, "simulated failure")
        if url not in store:
            raise FetchError(url, "HTTP 404", status_code=404)
        return store[url]

    async def fetch_document(self, url: str) -> str:
        return await self._respond(url, self.documents)

    async def fetch_image(self, url: str) -> bytes:
        return await self._respond(url, self.images)
