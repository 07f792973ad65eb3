"""
Catalog fetch-and-hydrate pipeline.

This package wires together:
- catalog.decoder (product.json -> CatalogEntry)
- catalog.builder (CatalogEntry -> Product, category buckets, counters)
- catalog.image_fetcher (primary image with fallback, remaining images)
- catalog.completion (category / catalog readiness)
- catalog.pipeline (the coordinator; import it from src.catalog.pipeline)
"""

from .builder import CatalogBuilder, parse_price
from .completion import CompletionTracker
from .decoder import decode_catalog
from .errors import CatalogError, DecodeError, FetchError, ParseWarning

__all__ = [
    "CatalogBuilder",
    "CatalogError",
    "CompletionTracker",
    "DecodeError",
    "FetchError",
    "ParseWarning",
    "decode_catalog",
    "parse_price",
]
