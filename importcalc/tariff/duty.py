"""Import duty for 3–5 year old passenger cars (EUR per cm³ ladder)."""
from __future__ import annotations

from decimal import Decimal
from typing import Tuple

# (upper engine_cc bound inclusive, EUR per cm³); None means no upper bound
DUTY_EUR_PER_CC_3_TO_5: Tuple[Tuple[int | None, Decimal], ...] = (
    (1000, Decimal("1.5")),
    (1500, Decimal("1.7")),
    (1800, Decimal("2.5")),
    (2300, Decimal("2.7")),
    (3000, Decimal("3.0")),
    (None, Decimal("3.6")),
)


def duty_rate_eur_per_cc(
    engine_cc: int,
    table: Tuple[Tuple[int | None, Decimal], ...] = DUTY_EUR_PER_CC_3_TO_5,
) -> Decimal:
    """Return the EUR/cm³ rate for ``engine_cc``."""
    if engine_cc <= 0:
        raise ValueError("Объём двигателя должен быть положительным")
    for upper, rate in table:
        if upper is None or engine_cc <= upper:
            return rate
    return table[-1][1]


def calc_duty_eur(engine_cc: int) -> Decimal:
    return duty_rate_eur_per_cc(engine_cc) * Decimal(engine_cc)


__all__ = ["DUTY_EUR_PER_CC_3_TO_5", "duty_rate_eur_per_cc", "calc_duty_eur"]
