from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .catalog import Product


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass
class LoadFailure:
    """Failure state handed to the loading indicator when the pipeline aborts."""
    message: str
    error_type: str
    retryable: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Transport interface
# ---------------------------------------------------------------------------

class CatalogSource(ABC):
    """Every catalog transport (real HTTP or local mock) must implement this interface."""

    @abstractmethod
    async def fetch_document(self, url: str) -> str:
        """Return the catalog document body. Raises FetchError."""

    @abstractmethod
    async def fetch_image(self, url: str) -> bytes:
        """Return the raw image payload. Raises FetchError."""

    async def aclose(self) -> None:
        """Release transport resources."""


# ---------------------------------------------------------------------------
# Presentation collaborators
# ---------------------------------------------------------------------------

class CatalogPresenter(ABC):

    @abstractmethod
    def on_category_ready(self, category: str, products: List[Product]) -> None:
        """Materialize list items for a category whose primary images have all resolved."""


class LoadingIndicator(ABC):

    @abstractmethod
    def on_loading_started(self) -> None:
        """Show the loading indicator and disable interaction."""

    @abstractmethod
    def on_catalog_ready(self) -> None:
        """Hide the loading indicator and re-enable interaction."""

    @abstractmethod
    def on_load_failed(self, failure: LoadFailure) -> None:
        """The catalog could not be loaded at all."""


class InfoPanel(ABC):

    @abstractmethod
    def show_product_info(self, product: Product) -> None:
        """Open the details panel for a product."""


class ModelLoader(ABC):

    @abstractmethod
    def set_model_to_load(self, model_url: str, product: Product) -> None:
        """Queue the product's 3D model for AR placement."""
