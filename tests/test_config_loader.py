import pytest
from pydantic import ValidationError

from src.utils.config_loader import DEFAULT_CATALOG_URL, load_catalog_config


def test_repository_config_loads(monkeypatch):
    monkeypatch.delenv("CATALOG_URL", raising=False)

    config = load_catalog_config()

    assert config.source.catalog_url == DEFAULT_CATALOG_URL
    assert config.catalog.initial_categories == ["chair", "desk", "drawer", "sofa"]
    assert config.completion.one_shot_events is False
    assert config.presentation.thumbnail_box_size == 400


def test_partial_config_fills_defaults_and_lowercases_categories(tmp_path, monkeypatch):
    monkeypatch.delenv("CATALOG_URL", raising=False)
    path = tmp_path / "catalog.yml"
    path.write_text("catalog:\n  initial_categories: [Chair, ' Lamp ', '']\n", encoding="utf-8")

    config = load_catalog_config(path)

    assert config.catalog.initial_categories == ["chair", "lamp"]
    assert config.source.request_timeout_seconds == 30.0


def test_env_overrides_catalog_url(tmp_path, monkeypatch):
    path = tmp_path / "catalog.yml"
    path.write_text("", encoding="utf-8")
    monkeypatch.setenv("CATALOG_URL", "https://mirror.test/product.json")

    config = load_catalog_config(path)

    assert config.source.catalog_url == "https://mirror.test/product.json"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog_config(tmp_path / "nope.yml")


def test_invalid_values_raise_validation_error(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text("source:\n  request_timeout_seconds: -1\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_catalog_config(path)
