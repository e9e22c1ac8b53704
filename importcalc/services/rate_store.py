"""Date-keyed storage for daily rate snapshots."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol

from importcalc.models.snapshot import to_decimal

logger = logging.getLogger(__name__)


class RateStore(Protocol):
    """Key-value store addressed by ``YYYY-MM-DD`` with upsert semantics."""

    async def get(self, key: str) -> Optional[Dict[str, Decimal]]:
        ...

    async def upsert(self, key: str, rates: Mapping[str, Decimal]) -> None:
        ...


def _decode_rates(raw: Mapping[str, object]) -> Dict[str, Decimal]:
    out: Dict[str, Decimal] = {}
    for code, value in raw.items():
        rate = to_decimal(value)
        if rate is not None:
            out[str(code).upper()] = rate
    return out


class MemoryRateStore:
    def __init__(self, initial: Optional[Mapping[str, Mapping[str, Decimal]]] = None):
        self._data: Dict[str, Dict[str, Decimal]] = {
            key: dict(rates) for key, rates in (initial or {}).items()
        }

    async def get(self, key: str) -> Optional[Dict[str, Decimal]]:
        rates = self._data.get(key)
        return dict(rates) if rates is not None else None

    async def upsert(self, key: str, rates: Mapping[str, Decimal]) -> None:
        self._data[key] = dict(rates)


class JsonFileRateStore:
    """One JSON document per day under ``directory``.

    Writes go through a temporary file and ``os.replace`` so a reader never
    sees a half-written document; concurrent writers simply race and the last
    complete document wins. File access runs in a worker thread so the event
    loop is not blocked.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _cache_file(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    async def get(self, key: str) -> Optional[Dict[str, Decimal]]:
        return await asyncio.to_thread(self._read, key)

    async def upsert(self, key: str, rates: Mapping[str, Decimal]) -> None:
        await asyncio.to_thread(self._write, key, dict(rates))

    def _read(self, key: str) -> Optional[Dict[str, Decimal]]:
        path = self._cache_file(key)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable rate cache %s: %s", path, exc)
            return None
        rates = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(rates, dict):
            logger.warning("Ignoring malformed rate cache %s", path)
            return None
        return _decode_rates(rates)

    def _write(self, key: str, rates: Mapping[str, Decimal]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = {
            "date": key,
            "rates": {code: str(rate) for code, rate in rates.items()},
            "updated_at": datetime.now().isoformat(timespec="seconds"),
        }
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._cache_file(key))
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


__all__ = ["RateStore", "MemoryRateStore", "JsonFileRateStore"]
