from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = PACKAGE_DIR / "config" / "config.yaml"


class Settings(BaseSettings):
    """Application settings loaded from .env and bundled tariff config."""

    RATES_URL: str = "https://www.atb.su/services/exchange/"
    RATE_CACHE_DIR: Path = Path("var") / "rates"
    DELIVERY_CONFIG_PATH: Path = Path("var") / "delivery.yaml"
    HTTP_TIMEOUT: float = 10.0
    LOG_LEVEL: str = "INFO"
    STRICT_RECYCLING: bool = False
    tariff_config: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        env_file = PACKAGE_DIR.parent / ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def load_settings(config_path: str | Path | None = None, **overrides: Any) -> Settings:
    settings = Settings(**overrides)
    path = Path(config_path or DEFAULT_CONFIG_PATH)
    if path.exists():
        with path.open("r", encoding="utf-8") as fh:
            settings.tariff_config = yaml.safe_load(fh) or {}
    return settings


__all__ = ["Settings", "load_settings"]
