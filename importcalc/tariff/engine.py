"""Import cost engine for used passenger cars aged 3–5 years.

Pure functions only: rates and delivery parameters are injected by the
caller, no I/O happens here.
"""

from __future__ import annotations

import logging

from importcalc.errors import UnsupportedBracket
from importcalc.models.enums import AgeCategory
from importcalc.models.snapshot import Money, RateSnapshot
from importcalc.models.vehicle import (
    CalculationResult,
    DeliveryBreakdown,
    DeliveryParameters,
    VehicleDescription,
)
from .clearance_fee import calc_customs_fee_rub
from .duty import calc_duty_eur
from .util_fee import calc_recycling_fee

logger = logging.getLogger(__name__)

SUPPORTED_AGE = AgeCategory.FROM_3_TO_5
# Currency the duty ladder is expressed in
DUTY_CURRENCY = "EUR"


def convert_to_rub(amount: Money | int | float, currency: str, rates: RateSnapshot) -> Money:
    """Convert ``amount`` to RUB; raises ``UnknownCurrency`` for a missing code."""
    return rates.to_rub(amount, currency)


def calc_delivery(delivery: DeliveryParameters, rates: RateSnapshot) -> DeliveryBreakdown:
    jp_expenses_rub = convert_to_rub(delivery.jp_expenses_jpy, "JPY", rates)
    freight_rub = convert_to_rub(delivery.freight_usd, "USD", rates)
    base = jp_expenses_rub + freight_rub
    return DeliveryBreakdown(
        total_min=base + delivery.ru_processing_min_rub + delivery.company_fee_min_rub,
        total_max=base + delivery.ru_processing_max_rub + delivery.company_fee_max_rub,
        jp_expenses_rub=jp_expenses_rub,
        freight_rub=freight_rub,
        ru_processing_min_rub=delivery.ru_processing_min_rub,
        ru_processing_max_rub=delivery.ru_processing_max_rub,
        company_fee_min_rub=delivery.company_fee_min_rub,
        company_fee_max_rub=delivery.company_fee_max_rub,
    )


class TariffEngine:
    """Compute duty, fees, delivery and total for one vehicle.

    With ``strict=True`` a recycling fee that has no exact policy raises
    :class:`UnsupportedBracket` instead of being reported as an estimate.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def compute(
        self,
        vehicle: VehicleDescription,
        rates: RateSnapshot,
        delivery: DeliveryParameters,
    ) -> CalculationResult:
        if vehicle.age is not SUPPORTED_AGE:
            raise UnsupportedBracket(
                vehicle.age.value,
                "Расчет пока поддерживает только авто 3–5 лет.",
            )

        notes: list[str] = []
        price_rub = convert_to_rub(vehicle.price, vehicle.currency, rates)
        duty_eur = calc_duty_eur(vehicle.engine_cc)
        duty_rub = convert_to_rub(duty_eur, DUTY_CURRENCY, rates)
        customs_fee = calc_customs_fee_rub(price_rub)

        recycling = calc_recycling_fee(
            vehicle.age.representative_years(),
            vehicle.horsepower,
            vehicle.engine_cc,
        )
        if not recycling.exact:
            if self.strict:
                raise UnsupportedBracket(
                    recycling.rule,
                    f"Утильсбор для {vehicle.horsepower} л.с. и {vehicle.engine_cc} см³ не реализован",
                )
            logger.warning(
                "Recycling fee for hp=%s cc=%s uses default coefficient",
                vehicle.horsepower,
                vehicle.engine_cc,
            )
            notes.append("Утильсбор рассчитан по коэффициенту по умолчанию")

        delivery_details = calc_delivery(delivery, rates)
        delivery_avg = delivery_details.midpoint

        total = price_rub + duty_rub + customs_fee + recycling.amount_rub + delivery_avg
        logger.info(
            "Calculated import cost: price=%s duty=%s fee=%s util=%s delivery=%s total=%s",
            price_rub, duty_rub, customs_fee, recycling.amount_rub, delivery_avg, total,
        )
        return CalculationResult(
            total=total,
            price_rub=price_rub,
            duty_eur=duty_eur,
            duty_rub=duty_rub,
            customs_fee_rub=customs_fee,
            recycling_fee_rub=recycling.amount_rub,
            delivery=delivery_details,
            recycling_fee_exact=recycling.exact,
            notes=tuple(notes),
        )


_default_engine = TariffEngine()


def compute(
    vehicle: VehicleDescription,
    rates: RateSnapshot,
    delivery: DeliveryParameters,
) -> CalculationResult:
    return _default_engine.compute(vehicle, rates, delivery)


__all__ = ["TariffEngine", "calc_delivery", "compute", "convert_to_rub"]
