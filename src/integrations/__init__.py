"""
Integrations layer.
This package contains all code used to communicate with external systems such as:
- The published product catalog (product.json over HTTP)
- Product image hosts
- The presentation layer collaborators (list screens, loading indicator,
  info panel, AR model loader), defined as interfaces only

Key rule:
- Pipeline code MUST NOT call httpx directly.
- The pipeline talks to a CatalogSource (under src/integrations/clients).
- We use the LOCAL client in tests and offline runs and the REAL_HTTP client otherwise.

Switching implementations:
- The selection of local vs real clients happens in ONE place (scripts/run_catalog.py).
"""

from .contracts.catalog import DEFAULT_CATEGORIES, Catalog, CatalogEntry, ImageHandle, Product
from .contracts.interfaces import (
    CatalogPresenter,
    CatalogSource,
    InfoPanel,
    LoadFailure,
    LoadingIndicator,
    ModelLoader,
)

__all__ = [
    # catalog
    "DEFAULT_CATEGORIES", "Catalog", "CatalogEntry", "ImageHandle", "Product",
    # interfaces
    "CatalogPresenter", "CatalogSource", "InfoPanel", "LoadFailure",
    "LoadingIndicator", "ModelLoader",
]
