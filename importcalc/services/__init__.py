"""Convenience exports for service layer."""

from .delivery import DeliveryConfigStore
from .import_cost import ImportCostService, build_service
from .rate_parsing import extract_rates
from .rate_store import JsonFileRateStore, MemoryRateStore, RateStore
from .rates import RateResolver, close_rates_session, fetch_document

__all__ = [
    "DeliveryConfigStore",
    "ImportCostService",
    "JsonFileRateStore",
    "MemoryRateStore",
    "RateResolver",
    "RateStore",
    "build_service",
    "close_rates_session",
    "extract_rates",
    "fetch_document",
]
