"""
Real HTTP integration clients.

These clients talk to the published catalog over HTTP:
- product.json (catalog document)
- product image URLs listed in each entry

Important:
- Must implement the same CatalogSource interface as the mock clients
- Must raise FetchError (src/catalog/errors.py) for any failed call
"""

from .catalog_http import CatalogHttpClient

__all__ = ["CatalogHttpClient"]
