"""
Catalog fetch-and-hydrate pipeline.

The pipeline downloads the catalog document, builds the category buckets,
then starts one task per product for its images. Product tasks report the end
of their primary-image step over a queue; the pipeline is the only place that
touches the completion counters, so category and catalog readiness are decided
in one spot no matter how the downloads interleave.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from src.error_handler import ErrorHandler
from src.integrations.contracts.catalog import Catalog, Product
from src.integrations.contracts.interfaces import (
    CatalogPresenter,
    CatalogSource,
    LoadFailure,
    LoadingIndicator,
)
from src.utils.config_loader import CatalogConfig

from .builder import CatalogBuilder, ImageWork
from .completion import CompletionTracker
from .decoder import decode_catalog
from .errors import CatalogError
from .image_fetcher import ImageFetcher, PrimaryResult

logger = logging.getLogger(__name__)


@dataclass
class PrimaryResolved:
    """Message sent by a product task once its primary-image step is over."""
    category: str
    product: Product
    result: PrimaryResult = field(default_factory=PrimaryResult)


class CatalogPipeline:
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"

    def __init__(
        self,
        source: CatalogSource,
        presenter: Optional[CatalogPresenter] = None,
        loading_indicator: Optional[LoadingIndicator] = None,
        config: Optional[CatalogConfig] = None,
        fetcher: Optional[ImageFetcher] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.source = source
        self.presenter = presenter
        self.loading_indicator = loading_indicator
        self.config = config or CatalogConfig()
        self.fetcher = fetcher or ImageFetcher(source)
        self.error_handler = error_handler or ErrorHandler()

        categories = self.config.catalog.initial_categories
        self.catalog = Catalog.with_categories(categories)
        self.tracker = CompletionTracker(
            categories=categories,
            on_category_ready=self._emit_category_ready,
            on_catalog_ready=self._emit_catalog_ready,
            one_shot=self.config.completion.one_shot_events,
        )
        self.builder = CatalogBuilder(self.catalog, self.tracker)

        self.state = self.IDLE
        self.failure: Optional[LoadFailure] = None
        self._background: Set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(self, catalog_url: Optional[str] = None) -> Catalog:
        """
        Load the catalog and resolve every product's primary image.

        Returns once every primary-image step has concluded. Additional images
        keep downloading in the background; see wait_for_background().

        Raises:
            FetchError: If the catalog document cannot be downloaded
            DecodeError: If the catalog document is malformed
        """
        if self.state != self.IDLE:
            raise RuntimeError(f"pipeline already {self.state}")

        url = catalog_url or self.config.source.catalog_url
        self.state = self.LOADING
        if self.loading_indicator is not None:
            self.loading_indicator.on_loading_started()

        try:
            text = await self.source.fetch_document(url)
            entries = decode_catalog(text)
        except CatalogError as e:
            self._fail(e, url)
            raise

        work = self.builder.build(entries)
        if not work:
            logger.warning("Catalog at %s is empty", url)
            self.tracker.announce_catalog_ready()
            return self.catalog

        await self._hydrate(work)
        return self.catalog

    async def wait_for_background(self) -> None:
        """Wait for every background image download started so far."""
        while self._background:
            await asyncio.gather(*list(self._background))

    async def cancel_background(self) -> None:
        """Cancel outstanding background image downloads and wait for them to unwind."""
        tasks = list(self._background)
        if not tasks:
            return
        logger.info("Cancelling %d background image downloads", len(tasks))
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    @property
    def pending_background(self) -> int:
        return len(self._background)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _hydrate(self, work: List[ImageWork]) -> None:
        queue: asyncio.Queue = asyncio.Queue()
        tasks = [asyncio.create_task(self._fetch_product_images(item, queue)) for item in work]

        for _ in range(len(tasks)):
            message = await queue.get()
            self.tracker.mark_resolved(message.category)

        await asyncio.gather(*tasks)

    async def _fetch_product_images(self, work: ImageWork, queue: asyncio.Queue) -> None:
        message = PrimaryResolved(category=work.category, product=work.product)
        try:
            message.result = await self.fetcher.fetch_primary(work.image_urls, work.product)
        finally:
            queue.put_nowait(message)

        if len(work.image_urls) > 1:
            self._start_background(work, message.result.attempted)

    def _start_background(self, work: ImageWork, attempted: Set[int]) -> None:
        task = asyncio.create_task(
            self.fetcher.fetch_remaining(work.image_urls, work.product, set(attempted))
        )
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    def _fail(self, exc: Exception, url: str) -> None:
        self.state = self.FAILED
        self.failure = self.error_handler.handle_exception(exc, context={"catalog_url": url})
        if self.loading_indicator is not None:
            self.loading_indicator.on_load_failed(self.failure)

    def _emit_category_ready(self, category: str) -> None:
        if self.presenter is not None:
            self.presenter.on_category_ready(category, self.catalog.products(category))

    def _emit_catalog_ready(self) -> None:
        self.state = self.READY
        if self.loading_indicator is not None:
            self.loading_indicator.on_catalog_ready()
