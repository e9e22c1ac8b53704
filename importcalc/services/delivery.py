from __future__ import annotations

"""Delivery cost parameters kept in a small YAML document."""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from importcalc.models.vehicle import DeliveryParameters

logger = logging.getLogger(__name__)


def _dump(params: DeliveryParameters) -> Dict[str, Any]:
    # Decimal is not YAML-native; keep whole values as ints
    out: Dict[str, Any] = {}
    for name, value in params.model_dump().items():
        out[name] = int(value) if value == value.to_integral_value() else float(value)
    return out


class DeliveryConfigStore:
    """Singleton delivery configuration, created with defaults on first read."""

    def __init__(self, path: str | Path, defaults: Mapping[str, Any] | None = None):
        self.path = Path(path)
        self.defaults = dict(defaults or {})

    def load(self) -> DeliveryParameters:
        if not self.path.exists():
            params = DeliveryParameters(**self.defaults)
            logger.info("Delivery config %s not found, creating defaults", self.path)
            self.save(params)
            return params
        with self.path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return DeliveryParameters(**data)

    def save(self, params: DeliveryParameters) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            yaml.safe_dump(_dump(params), fh, allow_unicode=True, sort_keys=False)


__all__ = ["DeliveryConfigStore"]
