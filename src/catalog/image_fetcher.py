"""
Per-product image downloads.

The primary step walks the URL list in order until one image downloads and
decodes; that image becomes the product thumbnail. The remaining step runs
afterwards in the background and fills ``all_images`` with every other URL the
primary step did not touch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set

from src.integrations.contracts.catalog import ImageHandle, Product
from src.integrations.contracts.interfaces import CatalogSource

from .errors import FetchError
from .image_decoder import decode_image

logger = logging.getLogger(__name__)

ImageDecoder = Callable[[str, bytes], ImageHandle]


@dataclass
class PrimaryResult:
    """Outcome of a product's primary-image step."""
    index: Optional[int] = None           # URL index that became the primary image
    attempted: Set[int] = field(default_factory=set)

    @property
    def succeeded(self) -> bool:
        return self.index is not None


class ImageFetcher:
    def __init__(self, source: CatalogSource, decoder: Optional[ImageDecoder] = None):
        self.source = source
        self.decoder = decoder or decode_image

    async def fetch_image(self, url: str) -> ImageHandle:
        """Download and decode a single image. Raises FetchError."""
        payload = await self.source.fetch_image(url)
        return self.decoder(url, payload)

    async def fetch_primary(self, urls: List[str], product: Product) -> PrimaryResult:
        result = PrimaryResult()
        if not urls:
            logger.debug("No images listed for %r", product.name)
            return result

        for index, url in enumerate(urls):
            result.attempted.add(index)
            try:
                image = await self.fetch_image(url)
            except FetchError as e:
                if index == 0:
                    logger.warning("Primary image download failed: %s", e)
                else:
                    logger.warning("Fallback image download failed: %s", e)
                continue

            product.primary_image = image
            product.all_images.append(image)
            result.index = index
            if index > 0:
                logger.info("Using fallback image %d for %r", index, product.name)
            return result

        logger.warning("All image downloads failed for product: %r", product.name)
        return result

    async def fetch_remaining(self, urls: List[str], product: Product, attempted: Set[int]) -> int:
        """Append every image from index 1 on that the primary step did not attempt."""
        added = 0
        for index in range(1, len(urls)):
            if index in attempted:
                continue
            try:
                image = await self.fetch_image(urls[index])
            except FetchError as e:
                logger.warning("Additional image download failed: %s", e)
                continue
            product.all_images.append(image)
            added += 1
        if added:
            logger.debug("Fetched %d additional images for %r", added, product.name)
        return added
