"""
Decode the product.json document into CatalogEntry records.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from src.integrations.contracts.catalog import CatalogEntry

from .errors import DecodeError

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("name", "price_string", "url", "description", "model_url")
_LIST_FIELDS = ("size_options", "images")


def decode_catalog(text: str) -> List[CatalogEntry]:
    """Parse the raw document. Raises DecodeError on any structural problem."""
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"catalog document is not valid JSON: {e}") from e

    if not isinstance(payload, list):
        raise DecodeError(f"catalog document must be a JSON array, got {type(payload).__name__}")

    entries = [_decode_entry(item, index) for index, item in enumerate(payload)]
    logger.info("Decoded %d catalog entries", len(entries))
    return entries


def _decode_entry(item: Any, index: int) -> CatalogEntry:
    if not isinstance(item, dict):
        raise DecodeError(f"expected an object, got {type(item).__name__}", index=index)

    category = item.get("category")
    if not isinstance(category, str) or not category.strip():
        raise DecodeError("missing or non-string 'category'", index=index)

    fields: Dict[str, Any] = {"category": category}
    for name in _STRING_FIELDS:
        fields[name] = _string_field(item, name, index)
    for name in _LIST_FIELDS:
        fields[name] = _string_list_field(item, name, index)
    return CatalogEntry(**fields)


def _string_field(item: Dict[str, Any], name: str, index: int) -> str:
    value = item.get(name)
    if value is None:
        return ""
    # Numbers show up for price_string in hand-edited catalogs.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise DecodeError(f"'{name}' must be a string", index=index)
    return value


def _string_list_field(item: Dict[str, Any], name: str, index: int) -> List[str]:
    value = item.get(name)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DecodeError(f"'{name}' must be a list of strings", index=index)
    return list(value)
