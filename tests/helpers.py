"""Shared builders and recording collaborators for the catalog tests."""

import io
import struct
import zlib

from PIL import Image

from src.integrations.contracts.interfaces import (
    CatalogPresenter,
    InfoPanel,
    LoadingIndicator,
    ModelLoader,
)

CATALOG_URL = "https://catalog.test/product.json"


def make_png(width: int = 4, height: int = 3, color=(200, 40, 40)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def make_png_header(width: int, height: int) -> bytes:
    """A PNG signature plus IHDR claiming the given size, with no pixel data."""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    chunk = b"IHDR" + ihdr
    return (
        b"\x89PNG\r\n\x1a\n"
        + struct.pack(">I", len(ihdr))
        + chunk
        + struct.pack(">I", zlib.crc32(chunk) & 0xFFFFFFFF)
    )


def entry(category="chair", name="Item", price="100", images=None, **extra):
    data = {
        "category": category,
        "name": name,
        "price_string": price,
        "url": f"https://shop.test/{name}",
        "description": f"{name} description",
        "model_url": f"https://models.test/{name}.glb",
        "size_options": ["46 x 61 x 122"],
        "images": list(images or []),
    }
    data.update(extra)
    return data


class RecordingPresenter(CatalogPresenter):
    def __init__(self):
        self.events = []

    def on_category_ready(self, category, products):
        self.events.append((category, list(products)))

    def categories(self):
        return [category for category, _ in self.events]


class RecordingIndicator(LoadingIndicator):
    def __init__(self):
        self.events = []
        self.failure = None

    def on_loading_started(self):
        self.events.append("started")

    def on_catalog_ready(self):
        self.events.append("ready")

    def on_load_failed(self, failure):
        self.events.append("failed")
        self.failure = failure


class RecordingInfoPanel(InfoPanel):
    def __init__(self):
        self.shown = []

    def show_product_info(self, product):
        self.shown.append(product)


class RecordingModelLoader(ModelLoader):
    def __init__(self):
        self.requests = []

    def set_model_to_load(self, model_url, product):
        self.requests.append((model_url, product))


