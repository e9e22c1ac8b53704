"""Glue between the rate resolver, delivery config and tariff engine."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from functools import partial
from typing import Optional

from importcalc.models.vehicle import CalculationResult, VehicleDescription
from importcalc.services.delivery import DeliveryConfigStore
from importcalc.services.rate_store import JsonFileRateStore
from importcalc.services.rates import RateResolver, fetch_document
from importcalc.settings import Settings
from importcalc.tariff.engine import TariffEngine

logger = logging.getLogger(__name__)


class ImportCostService:
    def __init__(
        self,
        resolver: RateResolver,
        delivery_store: DeliveryConfigStore,
        engine: Optional[TariffEngine] = None,
    ):
        self.resolver = resolver
        self.delivery_store = delivery_store
        self.engine = engine or TariffEngine()

    async def estimate(
        self,
        vehicle: VehicleDescription,
        for_date: Optional[date] = None,
    ) -> CalculationResult:
        """Resolve the day's rates and compute the full import cost.

        Errors from the resolver and the engine propagate unchanged.
        """
        rates = await self.resolver.resolve(for_date)
        delivery = await asyncio.to_thread(self.delivery_store.load)
        return self.engine.compute(vehicle, rates, delivery)


def build_service(settings: Settings) -> ImportCostService:
    resolver = RateResolver(
        JsonFileRateStore(settings.RATE_CACHE_DIR),
        url=settings.RATES_URL,
        fetch=partial(fetch_document, timeout=settings.HTTP_TIMEOUT),
    )
    delivery_store = DeliveryConfigStore(
        settings.DELIVERY_CONFIG_PATH,
        defaults=settings.tariff_config.get("delivery_defaults"),
    )
    logger.debug("Import cost service configured for %s", settings.RATES_URL)
    return ImportCostService(resolver, delivery_store, TariffEngine(strict=settings.STRICT_RECYCLING))


__all__ = ["ImportCostService", "build_service"]
