"""Resolve the day's currency rates (RUB per 1 unit).

Rates are read from the date-keyed store first; the bank page is fetched at
most once per day under normal operation and a stored snapshot is reused when
the fetch or the parsing fails.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Awaitable, Callable, Optional

import aiohttp

from importcalc.errors import ParseFailed, SourceUnreachable
from importcalc.models.snapshot import RateSnapshot
from importcalc.services.rate_parsing import EXTRACTION_STRATEGIES, extract_rates
from importcalc.services.rate_store import RateStore

logger = logging.getLogger(__name__)

DEFAULT_RATES_URL = "https://www.atb.su/services/exchange/"
DEFAULT_TIMEOUT = 10.0

Fetcher = Callable[[str], Awaitable[str]]

_session: "aiohttp.ClientSession | None" = None


async def _get_session() -> aiohttp.ClientSession:
    global _session
    if _session is None or _session.closed:
        _session = aiohttp.ClientSession()
    return _session


async def fetch_document(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """GET ``url`` and return the body as text.

    :raises SourceUnreachable: on transport errors and non-2xx responses
    """
    sess = await _get_session()
    try:
        async with sess.get(url, timeout=aiohttp.ClientTimeout(total=timeout)) as resp:
            if not 200 <= resp.status < 300:
                raise SourceUnreachable(
                    f"Failed to fetch rates: HTTP {resp.status} {resp.reason or ''}".strip(),
                    url=url,
                    status=resp.status,
                )
            # undecodable bytes end up in the parse chain, not as a transport error
            return await resp.text(errors="replace")
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise SourceUnreachable(f"Failed to fetch rates: {exc!r}", url=url) from exc


async def close_rates_session() -> None:
    global _session
    if _session is not None:
        try:
            await _session.close()
        finally:
            _session = None


class RateResolver:
    def __init__(
        self,
        store: RateStore,
        *,
        url: str = DEFAULT_RATES_URL,
        fetch: Optional[Fetcher] = None,
        today: Optional[Callable[[], date]] = None,
        strategies=EXTRACTION_STRATEGIES,
    ):
        self.store = store
        self.url = url
        self._fetch = fetch or fetch_document
        self._today = today or date.today
        self._strategies = strategies

    async def _cached(self, for_date: date) -> Optional[RateSnapshot]:
        rates = await self.store.get(for_date.isoformat())
        if rates is None:
            return None
        return RateSnapshot(date=for_date, rates=rates)

    async def resolve(self, for_date: Optional[date] = None) -> RateSnapshot:
        """Return the rate snapshot for ``for_date`` (defaults to today).

        :raises SourceUnreachable: fetch failed and no complete snapshot is stored
        :raises ParseFailed: no strategy matched and nothing is stored for the day
        """
        day = for_date or self._today()
        cached = await self._cached(day)
        if cached is not None and cached.is_complete():
            logger.debug("Using cached rates for %s", day.isoformat())
            return cached

        logger.info("Fetching rates for %s from %s", day.isoformat(), self.url)
        try:
            document = await self._fetch(self.url)
        except SourceUnreachable as exc:
            # another request may have filled the day in the meantime
            cached = await self._cached(day)
            if cached is not None and cached.is_complete():
                logger.warning("Rate source unreachable (%s), using cached rates", exc)
                return cached
            raise

        try:
            strategy, rates = extract_rates(document, self._strategies)
        except ParseFailed as exc:
            cached = await self._cached(day)
            if cached is not None:
                logger.warning("Falling back to cached rates due to parse error: %s", exc)
                return cached
            raise

        logger.info("Rates for %s parsed with %s strategy", day.isoformat(), strategy)
        snapshot = RateSnapshot(date=day, rates=rates)
        await self.store.upsert(snapshot.key, snapshot.rates)
        return snapshot


__all__ = [
    "DEFAULT_RATES_URL",
    "RateResolver",
    "close_rates_session",
    "fetch_document",
]
