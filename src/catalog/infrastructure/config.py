"""Runtime configuration.

Values come from ``CATALOG_*`` environment variables or a ``.env`` file
in the working directory, falling back to the defaults below.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class CatalogSettings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    data_dir: Path = Field(default=_DEFAULT_DATA_DIR)
    products_file: str = Field(default="products.json")
    log_level: str = Field(default="WARNING")
    low_stock_threshold: int = Field(default=5, ge=0)

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file


@lru_cache
def get_settings() -> CatalogSettings:
    return CatalogSettings()
