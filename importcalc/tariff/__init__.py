"""Tariff calculation utilities."""

from .clearance_fee import CUSTOMS_FEE_RANGES, calc_customs_fee_rub
from .duty import DUTY_EUR_PER_CC_3_TO_5, calc_duty_eur, duty_rate_eur_per_cc
from .engine import TariffEngine, calc_delivery, compute, convert_to_rub
from .util_fee import RecyclingFee, calc_recycling_fee

__all__ = [
    "CUSTOMS_FEE_RANGES",
    "DUTY_EUR_PER_CC_3_TO_5",
    "RecyclingFee",
    "TariffEngine",
    "calc_customs_fee_rub",
    "calc_delivery",
    "calc_duty_eur",
    "calc_recycling_fee",
    "compute",
    "convert_to_rub",
    "duty_rate_eur_per_cc",
]
