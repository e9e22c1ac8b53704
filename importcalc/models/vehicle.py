"""Calculation inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field, model_validator

from importcalc.errors import InvalidVehicle
from importcalc.models.constants import SUPPORTED_CURRENCY_CODES
from importcalc.models.enums import AgeCategory, EngineCategory
from importcalc.models.snapshot import Money, to_decimal


@dataclass(frozen=True)
class VehicleDescription:
    price: Money
    currency: str
    age: AgeCategory
    engine: EngineCategory
    engine_cc: int
    horsepower: int

    def __post_init__(self) -> None:
        price = to_decimal(self.price)
        if price is None or not price.is_finite() or price <= 0:
            raise InvalidVehicle("Цена должна быть положительным числом")
        currency = str(self.currency).upper()
        if currency not in SUPPORTED_CURRENCY_CODES:
            raise InvalidVehicle(f"Неподдерживаемая валюта: {self.currency}")
        try:
            age = AgeCategory(self.age)
            engine = EngineCategory(self.engine)
        except ValueError as exc:
            raise InvalidVehicle(str(exc)) from exc
        _check_positive_int(self.engine_cc, "Объём двигателя")
        _check_positive_int(self.horsepower, "Мощность двигателя")
        object.__setattr__(self, "price", price)
        object.__setattr__(self, "currency", currency)
        object.__setattr__(self, "age", age)
        object.__setattr__(self, "engine", engine)


def _check_positive_int(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidVehicle(f"{name} должен быть положительным целым числом")


class DeliveryParameters(BaseModel):
    """Delivery cost estimate, maintained by the operator."""

    model_config = {"frozen": True}

    jp_expenses_jpy: Decimal = Field(default=Decimal("241000"), ge=0)
    freight_usd: Decimal = Field(default=Decimal("300"), ge=0)
    ru_processing_min_rub: Decimal = Field(default=Decimal("60000"), ge=0)
    ru_processing_max_rub: Decimal = Field(default=Decimal("100000"), ge=0)
    company_fee_min_rub: Decimal = Field(default=Decimal("50000"), ge=0)
    company_fee_max_rub: Decimal = Field(default=Decimal("100000"), ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "DeliveryParameters":
        if self.ru_processing_min_rub > self.ru_processing_max_rub:
            raise ValueError("ru_processing_min_rub must not exceed ru_processing_max_rub")
        if self.company_fee_min_rub > self.company_fee_max_rub:
            raise ValueError("company_fee_min_rub must not exceed company_fee_max_rub")
        return self


@dataclass(frozen=True)
class DeliveryBreakdown:
    total_min: Money
    total_max: Money
    jp_expenses_rub: Money
    freight_rub: Money
    ru_processing_min_rub: Money
    ru_processing_max_rub: Money
    company_fee_min_rub: Money
    company_fee_max_rub: Money

    @property
    def midpoint(self) -> Money:
        return (self.total_min + self.total_max) / 2

    def as_dict(self) -> Dict[str, float]:
        return {
            "totalMin": float(self.total_min),
            "totalMax": float(self.total_max),
            "jpExpensesRub": float(self.jp_expenses_rub),
            "freightRub": float(self.freight_rub),
            "ruProcessingMinRub": float(self.ru_processing_min_rub),
            "ruProcessingMaxRub": float(self.ru_processing_max_rub),
            "companyFeeMinRub": float(self.company_fee_min_rub),
            "companyFeeMaxRub": float(self.company_fee_max_rub),
        }


@dataclass(frozen=True)
class CalculationResult:
    total: Money
    price_rub: Money
    duty_eur: Money
    duty_rub: Money
    customs_fee_rub: Money
    recycling_fee_rub: Money
    delivery: DeliveryBreakdown
    recycling_fee_exact: bool = True
    notes: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def delivery_total_rub(self) -> Money:
        return self.delivery.midpoint

    def as_dict(self) -> Dict[str, Any]:
        """Plain mapping in the shape stored by calculation history."""
        return {
            "total": float(self.total),
            "breakdown": {
                "priceRub": float(self.price_rub),
                "dutyRub": float(self.duty_rub),
                "dutyEur": float(self.duty_eur),
                "feeRub": float(self.customs_fee_rub),
                "recyclingRub": float(self.recycling_fee_rub),
                "recyclingExact": self.recycling_fee_exact,
                "deliveryTotalRub": float(self.delivery_total_rub),
                "deliveryDetails": self.delivery.as_dict(),
            },
            "notes": list(self.notes),
        }


__all__ = [
    "VehicleDescription",
    "DeliveryParameters",
    "DeliveryBreakdown",
    "CalculationResult",
]
