"""
Catalog HTTP Client.

Fetches the product.json document and product images over HTTP.

Used when the pipeline runs against the published catalog
(scripts/run_catalog.py). Tests swap in an httpx.MockTransport or the
local client under clients/mocks.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional

import httpx

from src.catalog.errors import FetchError
from src.integrations.contracts.interfaces import CatalogSource

logger = logging.getLogger(__name__)


class CatalogHttpClient(CatalogSource):
    def __init__(
        self,
        timeout_seconds: float = 30.0,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent or os.getenv("CATALOG_USER_AGENT", "furniture-catalog/1.0")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._closed = False

    async def __aenter__(self) -> "CatalogHttpClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers: Dict[str, str] = {"User-Agent": self.user_agent}
            self._client = httpx.AsyncClient(
                timeout=self.timeout_seconds,
                headers=headers,
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        self._closed = True
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get(self, url: str) -> httpx.Response:
        if self._closed:
            raise FetchError(url, "client closed")
        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            raise FetchError(url, f"HTTP {e.response.status_code}", status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            raise FetchError(url, f"request failed: {e.__class__.__name__}") from e
        except httpx.InvalidURL as e:
            raise FetchError(url, "invalid URL") from e

    async def fetch_document(self, url: str) -> str:
        logger.info("Fetching catalog document from %s", url)
        response = await self._get(url)
        logger.debug("Catalog document received: %d bytes", len(response.content))
        return response.text

    async def fetch_image(self, url: str) -> bytes:
        response = await self._get(url)
        if not response.content:
            raise FetchError(url, "empty image payload", status_code=response.status_code)
        return response.content
