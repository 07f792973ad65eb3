"""
Product catalog contracts.

Defines the records that flow through the catalog pipeline:
- CatalogEntry: one raw object from the remote product.json array
- Product: the normalized product shown in a category list
- ImageHandle: a decoded product image

These contracts are shared by:
- clients/real_http/catalog_http.py (remote product.json + image CDN)
- clients/mocks/local_catalog.py (in-memory source for development and tests)
- src/catalog/* (decoder, builder, image fetcher, completion tracker)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional


# The list screens ship with these four tabs; other categories get buckets lazily.
DEFAULT_CATEGORIES = ("chair", "desk", "drawer", "sofa")


@dataclass
class CatalogEntry:
    """A product object exactly as it appears in product.json."""
    category: str
    name: str = ""
    price_string: str = ""
    url: str = ""
    description: str = ""
    model_url: str = ""
    size_options: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)


@dataclass
class ImageHandle:
    url: str
    width: int
    height: int
    image: Any = None                    # PIL.Image.Image once decoded

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height else 0.0


@dataclass
class Product:
    name: str
    price: Decimal
    url: str
    description: str
    model_url: str
    size_option: str = ""                # first entry of size_options, "" if none
    primary_image: Optional[ImageHandle] = None
    all_images: List[ImageHandle] = field(default_factory=list)
    from_flag: bool = False              # provenance marker, False for the remote catalog

    @property
    def has_primary_image(self) -> bool:
        return self.primary_image is not None


@dataclass
class Catalog:
    """Category-partitioned products, keyed by lowercase category."""
    buckets: Dict[str, List[Product]] = field(default_factory=dict)

    @classmethod
    def with_categories(cls, categories) -> "Catalog":
        return cls(buckets={c.lower(): [] for c in categories})

    def ensure_bucket(self, category: str) -> bool:
        """Create the bucket if missing. Returns True when it was created."""
        if category in self.buckets:
            return False
        self.buckets[category] = []
        return True

    def products(self, category: str) -> List[Product]:
        return list(self.buckets.get(category, []))

    def categories(self) -> List[str]:
        return list(self.buckets.keys())

    def __len__(self) -> int:
        return sum(len(items) for items in self.buckets.values())

    def summary(self) -> Dict[str, Dict[str, int]]:
        return {
            category: {
                "products": len(items),
                "with_primary_image": sum(1 for p in items if p.has_primary_image),
                "images": sum(len(p.all_images) for p in items),
            }
            for category, items in self.buckets.items()
        }
