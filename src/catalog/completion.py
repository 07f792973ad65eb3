"""
Per-category completion tracking.

Each category keeps two counters: ``total`` (products assigned to it) and
``resolved`` (products whose primary-image step has concluded, successfully or
not). A category is ready once ``resolved >= total``; the catalog is ready once
every known category is.

By default every check that finds a category at its threshold emits the ready
events again. With ``one_shot=True`` each category-ready event and the
catalog-ready event fire at most once.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Optional, Set

logger = logging.getLogger(__name__)

CategoryReadyCallback = Callable[[str], None]
CatalogReadyCallback = Callable[[], None]


class CompletionTracker:
    def __init__(
        self,
        categories: Iterable[str] = (),
        on_category_ready: Optional[CategoryReadyCallback] = None,
        on_catalog_ready: Optional[CatalogReadyCallback] = None,
        one_shot: bool = False,
    ):
        self.total: Dict[str, int] = {}
        self.resolved: Dict[str, int] = {}
        self.on_category_ready = on_category_ready
        self.on_catalog_ready = on_catalog_ready
        self.one_shot = one_shot
        self._announced: Set[str] = set()
        self._catalog_announced = False
        for category in categories:
            self.register_category(category)

    def register_category(self, category: str) -> bool:
        """Zero both counters for an unseen category. Returns True if it was new."""
        if category in self.total:
            return False
        self.total[category] = 0
        self.resolved[category] = 0
        return True

    def add_product(self, category: str) -> None:
        self.register_category(category)
        self.total[category] += 1

    def mark_resolved(self, category: str) -> None:
        """Record one concluded primary-image step and run the completion check."""
        if category not in self.total:
            raise KeyError(f"unknown category {category!r}")
        if self.resolved[category] >= self.total[category]:
            raise ValueError(
                f"category {category!r} already resolved {self.resolved[category]}/{self.total[category]}"
            )
        self.resolved[category] += 1
        logger.debug("Resolved %s: %d/%d", category, self.resolved[category], self.total[category])
        self.check_category_completion(category)

    def is_category_complete(self, category: str) -> bool:
        return self.resolved.get(category, 0) >= self.total.get(category, 0)

    def is_catalog_complete(self) -> bool:
        return all(self.resolved[c] >= self.total[c] for c in self.total)

    def check_category_completion(self, category: str) -> None:
        if not self.is_category_complete(category):
            return

        if not (self.one_shot and category in self._announced):
            self._announced.add(category)
            logger.info("Category ready: %s (%d products)", category, self.total.get(category, 0))
            if self.on_category_ready is not None:
                self.on_category_ready(category)

        if self.is_catalog_complete():
            self.announce_catalog_ready()

    def announce_catalog_ready(self) -> None:
        if self.one_shot and self._catalog_announced:
            return
        self._catalog_announced = True
        logger.info("Catalog ready: %d categories", len(self.total))
        if self.on_catalog_ready is not None:
            self.on_catalog_ready()

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        return {c: {"total": self.total[c], "resolved": self.resolved[c]} for c in self.total}
