import argparse
import json
import logging

import pytest

from scripts.run_catalog import run
from src.catalog.errors import FetchError
from src.integrations.clients.mocks.local_catalog import LocalCatalogClient
from tests.helpers import CATALOG_URL, entry, make_png


@pytest.mark.asyncio
async def test_serves_registered_payloads_and_records_requests():
    client = LocalCatalogClient(documents={CATALOG_URL: [entry()]}, images={"a.png": b"x"})

    text = await client.fetch_document(CATALOG_URL)
    payload = await client.fetch_image("a.png")

    assert json.loads(text)[0]["category"] == "chair"
    assert payload == b"x"
    assert client.requested == [CATALOG_URL, "a.png"]


@pytest.mark.asyncio
async def test_unknown_and_failing_urls_raise():
    client = LocalCatalogClient(images={"a.png": b"x"}, failing_urls=["a.png"])

    with pytest.raises(FetchError):
        await client.fetch_image("a.png")
    with pytest.raises(FetchError) as excinfo:
        await client.fetch_image("missing.png")
    assert excinfo.value.status_code == 404


def write_catalog_dir(tmp_path):
    (tmp_path / "product.json").write_text(
        json.dumps(
            [
                entry(category="Chair", name="Oak", images=["oak.png", "oak-side.png"]),
                entry(category="sofa", name="Couch", price="n/a", images=["missing.png"]),
                entry(category="lamp", name="Lamp", images=[]),
            ]
        ),
        encoding="utf-8",
    )
    (tmp_path / "oak.png").write_bytes(make_png(8, 4))
    (tmp_path / "oak-side.png").write_bytes(make_png(4, 8))
    return tmp_path


@pytest.mark.asyncio
async def test_from_directory_serves_product_json_and_images(tmp_path):
    client = LocalCatalogClient.from_directory(CATALOG_URL, write_catalog_dir(tmp_path))

    assert set(client.images) == {"oak.png", "oak-side.png"}
    assert "Oak" in await client.fetch_document(CATALOG_URL)


@pytest.mark.asyncio
async def test_run_script_against_local_directory(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("CATALOG_URL", raising=False)
    args = argparse.Namespace(
        config=None,
        catalog_url=CATALOG_URL,
        local_dir=write_catalog_dir(tmp_path),
        one_shot_events=True,
        wait_background=True,
    )

    code = await run(args, logging.getLogger("test"))

    assert code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["state"] == "ready"
    assert summary["categories"]["chair"] == {"products": 1, "with_primary_image": 1, "images": 2}
    assert summary["categories"]["sofa"]["with_primary_image"] == 0
    assert summary["counters"]["lamp"] == {"total": 1, "resolved": 1}
    # lamp has no list screen
    assert summary["rendered"] == {"chair": 1, "sofa": 1}
    assert summary["unparseable_prices"] == 1


@pytest.mark.asyncio
async def test_run_script_reports_malformed_catalog(tmp_path, monkeypatch):
    monkeypatch.delenv("CATALOG_URL", raising=False)
    (tmp_path / "product.json").write_text("{not json", encoding="utf-8")
    args = argparse.Namespace(
        config=None,
        catalog_url=CATALOG_URL,
        local_dir=tmp_path,
        one_shot_events=False,
        wait_background=False,
    )

    assert await run(args, logging.getLogger("test")) == 2
