"""Error handling helpers for the catalog pipeline."""
from typing import Any, Dict
import logging

from src.catalog.errors import DecodeError, FetchError
from src.integrations.contracts.interfaces import LoadFailure

logger = logging.getLogger(__name__)


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> LoadFailure:
        if isinstance(exc, DecodeError):
            logger.error("Catalog document could not be decoded: %s", exc)
            message = "The product catalog is malformed and could not be loaded."
            retryable = False
        elif isinstance(exc, FetchError):
            logger.error("Catalog document download failed: %s", exc)
            message = "The product catalog could not be downloaded. Check your connection and try again."
            retryable = True
        else:
            logger.error("Unhandled exception in catalog pipeline: %s", exc, exc_info=True)
            message = "An internal error occurred while loading products."
            retryable = False

        return LoadFailure(
            message=message,
            error_type=type(exc).__name__,
            retryable=retryable,
            metadata={"error": str(exc), "context": context or {}},
        )
