"""Vehicle import cost estimation: daily rates and tariff calculation."""

from .errors import (
    ImportCalcError,
    InvalidVehicle,
    ParseFailed,
    RateUnavailable,
    SourceUnreachable,
    UnknownCurrency,
    UnsupportedBracket,
)
from .models import (
    AgeCategory,
    CalculationResult,
    DeliveryParameters,
    EngineCategory,
    RateSnapshot,
    VehicleDescription,
)
from .services import ImportCostService, RateResolver
from .tariff import TariffEngine, compute

__version__ = "0.1.0"

__all__ = [
    "AgeCategory",
    "CalculationResult",
    "DeliveryParameters",
    "EngineCategory",
    "ImportCalcError",
    "ImportCostService",
    "InvalidVehicle",
    "ParseFailed",
    "RateResolver",
    "RateSnapshot",
    "RateUnavailable",
    "SourceUnreachable",
    "TariffEngine",
    "UnknownCurrency",
    "UnsupportedBracket",
    "VehicleDescription",
    "compute",
]
