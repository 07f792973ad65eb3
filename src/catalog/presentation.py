"""
Plain-Python presentation collaborators for the catalog pipeline.

ListItemPresenter builds the list-item view models for each ready category and
binds the "info" and "view in AR" actions to the injected InfoPanel and
ModelLoader. LoadingState mirrors the loading panel and the interaction lock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from src.integrations.contracts.catalog import Product
from src.integrations.contracts.interfaces import (
    CatalogPresenter,
    InfoPanel,
    LoadFailure,
    LoadingIndicator,
    ModelLoader,
)

logger = logging.getLogger(__name__)

THUMBNAIL_BOX_SIZE = 400.0
# Prices whose exponent is further out than this keep scientific notation.
MAX_PLAIN_PRICE_EXPONENT = 28


def format_price(price: Decimal) -> str:
    """Render a price label, e.g. Decimal("1299.50") -> "$1299.5"."""
    if abs(price.adjusted()) > MAX_PLAIN_PRICE_EXPONENT:
        return f"${price}"
    text = format(price.normalize(), "f")
    return f"${text}"


def fit_thumbnail(width: float, height: float, box: float = THUMBNAIL_BOX_SIZE) -> Tuple[float, float]:
    """Aspect-fit an image into a square box, pinning the longer side to the box size."""
    if width <= 0 or height <= 0:
        return (box, box)
    fitted_width = box * (width / height)
    if fitted_width > box:
        return (box, box * (height / width))
    return (fitted_width, box)


@dataclass
class ProductListItem:
    product: Product
    name_text: str
    price_text: str
    thumbnail_size: Optional[Tuple[float, float]]
    on_info: Callable[[], None]
    on_view_ar: Callable[[], None]


class LoadingState(LoadingIndicator):
    """Loading panel visibility plus whether the list toggle is interactable."""

    def __init__(self) -> None:
        self.visible = False
        self.interactable = True
        self.failure: Optional[LoadFailure] = None

    def on_loading_started(self) -> None:
        self.visible = True
        self.interactable = False
        self.failure = None

    def on_catalog_ready(self) -> None:
        self.visible = False
        self.interactable = True

    def on_load_failed(self, failure: LoadFailure) -> None:
        self.visible = False
        self.interactable = True
        self.failure = failure

    def lock_interaction(self) -> None:
        self.interactable = False


class ListItemPresenter(CatalogPresenter):
    """
    Builds list items for the categories that have a list screen.

    Categories outside ``displayed_categories`` are still tracked and loaded
    but have nowhere to render, so their ready events are ignored.
    """

    def __init__(
        self,
        info_panel: Optional[InfoPanel] = None,
        model_loader: Optional[ModelLoader] = None,
        displayed_categories: Optional[Iterable[str]] = None,
        loading_state: Optional[LoadingState] = None,
        thumbnail_box_size: float = THUMBNAIL_BOX_SIZE,
    ):
        self.info_panel = info_panel
        self.model_loader = model_loader
        self.displayed_categories = (
            {c.lower() for c in displayed_categories} if displayed_categories is not None else None
        )
        self.loading_state = loading_state
        self.thumbnail_box_size = thumbnail_box_size
        self.lists: Dict[str, List[ProductListItem]] = {}

    def on_category_ready(self, category: str, products: List[Product]) -> None:
        if self.displayed_categories is not None and category not in self.displayed_categories:
            logger.debug("No list screen for category %s, skipping", category)
            return
        # Every ready event appends a fresh set of items, same as re-instantiating the prefab.
        items = self.lists.setdefault(category, [])
        items.extend(self.build_item(product) for product in products)
        logger.info("Rendered %d items for %s", len(products), category)

    def build_item(self, product: Product) -> ProductListItem:
        thumbnail = None
        if product.primary_image is not None:
            thumbnail = fit_thumbnail(
                product.primary_image.width,
                product.primary_image.height,
                self.thumbnail_box_size,
            )
        return ProductListItem(
            product=product,
            name_text=product.name,
            price_text=format_price(product.price),
            thumbnail_size=thumbnail,
            on_info=lambda: self._show_info(product),
            on_view_ar=lambda: self._view_in_ar(product),
        )

    def _show_info(self, product: Product) -> None:
        if self.loading_state is not None:
            self.loading_state.lock_interaction()
        if self.info_panel is not None:
            self.info_panel.show_product_info(product)

    def _view_in_ar(self, product: Product) -> None:
        if self.model_loader is not None:
            self.model_loader.set_model_to_load(product.model_url, product)
