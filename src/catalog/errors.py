"""Error types for the catalog pipeline."""

from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog pipeline errors."""


class DecodeError(CatalogError):
    """The catalog document is not a well-formed array of product objects."""

    def __init__(self, message: str, *, index: Optional[int] = None) -> None:
        if index is not None:
            message = f"entry {index}: {message}"
        super().__init__(message)
        self.index = index


class FetchError(CatalogError):
    """A single network call (or image decode) failed."""

    def __init__(self, url: str, reason: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class ParseWarning(UserWarning):
    """A price string could not be parsed and was defaulted to zero."""
