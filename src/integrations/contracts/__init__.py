"""
Contracts (data models).

This folder defines the shapes exchanged between the catalog pipeline and its
collaborators:
- Catalog records (raw product.json entries, normalized products, image handles)
- Transport interface (CatalogSource)
- Presentation collaborators (presenter, loading indicator, info panel, model loader)

Both mock and real HTTP clients should use these contracts.
"""

from .catalog import DEFAULT_CATEGORIES, Catalog, CatalogEntry, ImageHandle, Product
from .interfaces import (
    CatalogPresenter,
    CatalogSource,
    InfoPanel,
    LoadFailure,
    LoadingIndicator,
    ModelLoader,
)

__all__ = [
    "DEFAULT_CATEGORIES", "Catalog", "CatalogEntry", "ImageHandle", "Product",
    "CatalogPresenter", "CatalogSource", "InfoPanel", "LoadFailure",
    "LoadingIndicator", "ModelLoader",
]
