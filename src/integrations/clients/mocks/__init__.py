"""
Mock integration clients.

These clients return catalog documents and image payloads without calling any
external server. They are used when:
- The published catalog is unreachable (offline development)
- We want to test the pipeline end-to-end without network access

Important:
- Mock clients must follow the SAME interface as real HTTP clients (CatalogSource).
"""

from .local_catalog import LocalCatalogClient

__all__ = ["LocalCatalogClient"]
