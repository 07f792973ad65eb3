"""
Decode downloaded image payloads into ImageHandles
"""
import io
import logging

from PIL import Image, UnidentifiedImageError

from src.catalog.errors import FetchError
from src.integrations.contracts.catalog import ImageHandle

logger = logging.getLogger(__name__)


def decode_image(url: str, payload: bytes) -> ImageHandle:
    """
    Decode raw bytes into an ImageHandle

    Raises:
        FetchError: If the payload is not a readable image or exceeds
            Pillow's decompression-bomb pixel limit
    """
    try:
        image = Image.open(io.BytesIO(payload))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise FetchError(url, f"undecodable image payload: {e}") from e

    width, height = image.size
    logger.debug("Decoded %s (%dx%d, %s)", url, width, height, image.mode)
    return ImageHandle(url=url, width=width, height=height, image=image)
