from __future__ import annotations

"""Recycling (utilization) fee for personal-use passenger cars.

The fee is ``UTIL_BASE_RUB * coefficient`` rounded to whole rubles. Only two
power/displacement combinations have an exact policy:

``power_hp <= 160``
    Fixed amount depending on whether the vehicle is up to three years old.
``power_hp > 160`` and ``engine_cc <= 2000``
    Base multiplied by the age dependent coefficient.

Every other combination uses :data:`UTIL_COEFF_DEFAULT` and is reported with
``exact=False`` so callers can tell the number is a placeholder.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

UTIL_BASE_RUB = Decimal("20000")

LOW_POWER_MAX_HP = 160
SMALL_ENGINE_MAX_CC = 2000
NEW_VEHICLE_MAX_AGE = 3

# UTIL_BASE_RUB * 0.17
UTIL_FEE_LOW_POWER_NEW = Decimal("3400")
# UTIL_BASE_RUB * 0.26
UTIL_FEE_LOW_POWER_OLD = Decimal("5200")
UTIL_COEFF_UP_TO_2000CC_NEW = Decimal("37.5")
UTIL_COEFF_UP_TO_2000CC_OLD = Decimal("62.2")
# Placeholder for combinations without a published coefficient here
UTIL_COEFF_DEFAULT = Decimal("62.2")

RULE_LOW_POWER = "low_power"
RULE_UP_TO_2000CC = "up_to_2000cc"
RULE_DEFAULT = "default"


@dataclass(frozen=True)
class RecyclingFee:
    amount_rub: Decimal
    exact: bool
    rule: str


def _round_rub(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def calc_recycling_fee(age_years: float, power_hp: int, engine_cc: int) -> RecyclingFee:
    """Return the recycling fee for a personal-use car.

    Parameters
    ----------
    age_years:
        Vehicle age in years (a representative value of the age bracket).
    power_hp:
        Engine power in horsepower, positive.
    engine_cc:
        Engine displacement in cm³, positive.

    Raises
    ------
    ValueError
        If any argument is out of range.
    """

    if age_years < 0:
        raise ValueError("age_years must be non-negative")
    if power_hp <= 0:
        raise ValueError("power_hp must be positive")
    if engine_cc <= 0:
        raise ValueError("engine_cc must be positive")

    is_new = age_years <= NEW_VEHICLE_MAX_AGE

    if power_hp <= LOW_POWER_MAX_HP:
        amount = UTIL_FEE_LOW_POWER_NEW if is_new else UTIL_FEE_LOW_POWER_OLD
        return RecyclingFee(_round_rub(amount), True, RULE_LOW_POWER)

    if engine_cc <= SMALL_ENGINE_MAX_CC:
        coeff = UTIL_COEFF_UP_TO_2000CC_NEW if is_new else UTIL_COEFF_UP_TO_2000CC_OLD
        return RecyclingFee(_round_rub(UTIL_BASE_RUB * coeff), True, RULE_UP_TO_2000CC)

    return RecyclingFee(_round_rub(UTIL_BASE_RUB * UTIL_COEFF_DEFAULT), False, RULE_DEFAULT)


__all__ = [
    "RecyclingFee",
    "UTIL_BASE_RUB",
    "UTIL_COEFF_DEFAULT",
    "UTIL_COEFF_UP_TO_2000CC_NEW",
    "UTIL_COEFF_UP_TO_2000CC_OLD",
    "UTIL_FEE_LOW_POWER_NEW",
    "UTIL_FEE_LOW_POWER_OLD",
    "calc_recycling_fee",
]
