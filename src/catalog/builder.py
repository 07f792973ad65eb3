"""
Turn decoded CatalogEntry records into Products grouped by category.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from src.integrations.contracts.catalog import Catalog, CatalogEntry, Product

from .completion import CompletionTracker
from .errors import ParseWarning

logger = logging.getLogger(__name__)


@dataclass
class ImageWork:
    """One product's pending image downloads."""
    category: str
    product: Product
    image_urls: List[str]


def try_parse_price(text: str) -> Optional[Decimal]:
    cleaned = (text or "").strip().replace(",", "")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def parse_price(text: str) -> Decimal:
    """Parse a price string, falling back to 0 for anything unparseable."""
    value = try_parse_price(text)
    return Decimal(0) if value is None else value


class CatalogBuilder:
    """Populates the catalog and the tracker totals from decoded entries."""

    def __init__(self, catalog: Catalog, tracker: CompletionTracker):
        self.catalog = catalog
        self.tracker = tracker
        self.parse_warnings: List[ParseWarning] = []

    def normalize(self, entry: CatalogEntry) -> Product:
        price = try_parse_price(entry.price_string)
        if price is None:
            self.parse_warnings.append(
                ParseWarning(f"unparseable price {entry.price_string!r} for {entry.name!r}")
            )
            logger.debug("Unparseable price %r for %r, defaulting to 0", entry.price_string, entry.name)
            price = Decimal(0)

        return Product(
            name=entry.name,
            price=price,
            url=entry.url,
            description=entry.description,
            model_url=entry.model_url,
            size_option=entry.size_options[0] if entry.size_options else "",
            from_flag=False,
        )

    def add_entry(self, entry: CatalogEntry) -> ImageWork:
        category = entry.category.lower()
        if self.catalog.ensure_bucket(category):
            logger.info("New category discovered: %s", category)
        self.tracker.register_category(category)

        product = self.normalize(entry)
        self.catalog.buckets[category].append(product)
        self.tracker.add_product(category)
        return ImageWork(category=category, product=product, image_urls=list(entry.images))

    def build(self, entries: List[CatalogEntry]) -> List[ImageWork]:
        work = [self.add_entry(entry) for entry in entries]
        logger.info(
            "Built catalog: %d products across %d categories (%d unparseable prices)",
            len(work),
            len(self.catalog.categories()),
            len(self.parse_warnings),
        )
        return work
