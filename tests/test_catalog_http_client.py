import json

import httpx
import pytest

from src.catalog.errors import FetchError
from src.catalog.pipeline import CatalogPipeline
from src.integrations.clients.real_http.catalog_http import CatalogHttpClient
from src.utils.config_loader import CatalogConfig
from tests.helpers import CATALOG_URL, RecordingIndicator, RecordingPresenter, entry, make_png


def build_transport(routes):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((str(request.url), request.headers.get("user-agent")))
        route = routes.get(str(request.url))
        if route is None:
            return httpx.Response(404)
        if isinstance(route, Exception):
            raise route
        return route

    return httpx.MockTransport(handler), seen


@pytest.mark.asyncio
async def test_fetch_document_returns_body_text():
    transport, seen = build_transport({CATALOG_URL: httpx.Response(200, json=[entry()])})

    async with CatalogHttpClient(user_agent="tests/1.0", transport=transport) as client:
        text = await client.fetch_document(CATALOG_URL)

    assert json.loads(text)[0]["category"] == "chair"
    assert seen == [(CATALOG_URL, "tests/1.0")]


@pytest.mark.asyncio
async def test_http_status_error_becomes_fetch_error():
    transport, _ = build_transport({"https://img.test/a.png": httpx.Response(503)})

    async with CatalogHttpClient(transport=transport) as client:
        with pytest.raises(FetchError) as excinfo:
            await client.fetch_image("https://img.test/a.png")

    assert excinfo.value.status_code == 503
    assert excinfo.value.url == "https://img.test/a.png"


@pytest.mark.asyncio
async def test_connection_error_becomes_fetch_error():
    url = "https://img.test/down.png"
    transport, _ = build_transport({url: httpx.ConnectError("refused")})

    async with CatalogHttpClient(transport=transport) as client:
        with pytest.raises(FetchError) as excinfo:
            await client.fetch_image(url)

    assert excinfo.value.status_code is None
    assert "ConnectError" in excinfo.value.reason


@pytest.mark.asyncio
async def test_empty_image_body_is_a_failure():
    url = "https://img.test/empty.png"
    transport, _ = build_transport({url: httpx.Response(200, content=b"")})

    async with CatalogHttpClient(transport=transport) as client:
        with pytest.raises(FetchError):
            await client.fetch_image(url)


@pytest.mark.asyncio
async def test_pipeline_over_http_transport():
    routes = {
        CATALOG_URL: httpx.Response(
            200,
            json=[entry(category="Sofa", name="Corner sofa", images=["https://img.test/1.png", "https://img.test/2.png"])],
        ),
        "https://img.test/1.png": httpx.Response(500),
        "https://img.test/2.png": httpx.Response(200, content=make_png(6, 3)),
    }
    transport, seen = build_transport(routes)
    presenter, indicator = RecordingPresenter(), RecordingIndicator()
    config = CatalogConfig()
    config.source.catalog_url = CATALOG_URL

    async with CatalogHttpClient(transport=transport) as client:
        pipeline = CatalogPipeline(client, presenter=presenter, loading_indicator=indicator, config=config)
        catalog = await pipeline.run()
        await pipeline.wait_for_background()

    (product,) = catalog.products("sofa")
    assert product.primary_image.url == "https://img.test/2.png"
    assert (product.primary_image.width, product.primary_image.height) == (6, 3)
    assert indicator.events == ["started", "ready"]
    assert [url for url, _ in seen] == [CATALOG_URL, "https://img.test/1.png", "https://img.test/2.png"]


@pytest.mark.asyncio
async def test_closed_client_refuses_new_requests():
    url = "https://img.test/a.png"
    transport, seen = build_transport({url: httpx.Response(200, content=make_png())})
    client = CatalogHttpClient(transport=transport)
    await client.fetch_image(url)
    await client.aclose()

    with pytest.raises(FetchError) as excinfo:
        await client.fetch_image(url)

    assert excinfo.value.reason == "client closed"
    assert client._client is None
    assert len(seen) == 1
