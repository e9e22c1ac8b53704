"""Model helpers and enumerations."""

from .constants import REFERENCE_CURRENCY, SUPPORTED_CURRENCY_CODES
from .enums import AgeCategory, EngineCategory
from .snapshot import Money, RateSnapshot
from .vehicle import (
    CalculationResult,
    DeliveryBreakdown,
    DeliveryParameters,
    VehicleDescription,
)

__all__ = [
    "REFERENCE_CURRENCY",
    "SUPPORTED_CURRENCY_CODES",
    "AgeCategory",
    "EngineCategory",
    "Money",
    "RateSnapshot",
    "CalculationResult",
    "DeliveryBreakdown",
    "DeliveryParameters",
    "VehicleDescription",
]
