"""
Configuration loader for the catalog pipeline
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from src.integrations.contracts.catalog import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = "https://raw.githubusercontent.com/TWAnnoyingKid/AR_Furniture_App/main/product.json"


class SourceConfig(BaseModel):
    """Where the catalog document comes from"""

    catalog_url: str = DEFAULT_CATALOG_URL
    request_timeout_seconds: float = Field(default=30.0, gt=0.0, le=600.0)
    user_agent: str = "furniture-catalog/1.0"


class CatalogSettings(BaseModel):
    """Category buckets created before the document is decoded"""

    initial_categories: list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))

    @field_validator("initial_categories")
    @classmethod
    def _lowercase(cls, value: list[str]) -> list[str]:
        return [c.strip().lower() for c in value if c and c.strip()]


class CompletionConfig(BaseModel):
    """Completion tracker behavior"""

    # False re-emits ready events on every check that finds the threshold met.
    one_shot_events: bool = False


class PresentationConfig(BaseModel):
    thumbnail_box_size: float = Field(default=400.0, gt=0.0)


class CatalogConfig(BaseModel):
    """Complete catalog pipeline configuration"""

    source: SourceConfig = Field(default_factory=SourceConfig)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    completion: CompletionConfig = Field(default_factory=CompletionConfig)
    presentation: PresentationConfig = Field(default_factory=PresentationConfig)


def default_config_path() -> Path:
    return Path(__file__).parent.parent.parent / "config" / "catalog_config.yml"


def load_catalog_config(config_path: Optional[Path] = None) -> CatalogConfig:
    """
    Load and validate catalog configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to config/catalog_config.yml

    Returns:
        Validated CatalogConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = default_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    try:
        config = CatalogConfig(**config_data)
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise

    env_url = os.getenv("CATALOG_URL")
    if env_url:
        config.source.catalog_url = env_url
        logger.info("Catalog URL overridden from CATALOG_URL")

    logger.info(f"Successfully loaded config from {config_path}")
    return config
