"""Customs clearance fee ladder keyed on customs value in RUB."""
from __future__ import annotations

from decimal import Decimal
from typing import Sequence, Tuple

# (upper customs value bound in RUB inclusive, fee in RUB)
CUSTOMS_FEE_RANGES: Tuple[Tuple[Decimal, Decimal], ...] = (
    (Decimal("200000"), Decimal("1067")),
    (Decimal("450000"), Decimal("2134")),
    (Decimal("1200000"), Decimal("4269")),
    (Decimal("2700000"), Decimal("11746")),
    (Decimal("5000000"), Decimal("23491")),
    (Decimal("10000000"), Decimal("46982")),
    (Decimal("Infinity"), Decimal("93965")),
)


def calc_customs_fee_rub(
    customs_value_rub: Decimal | int | float,
    ranges: Sequence[Tuple[Decimal, Decimal]] = CUSTOMS_FEE_RANGES,
) -> Decimal:
    """Return the clearance fee for a given customs value.

    A value exactly on a boundary belongs to that boundary's bracket.
    """
    v = Decimal(str(customs_value_rub))
    if v <= 0:
        raise ValueError("Таможенная стоимость должна быть положительной")
    for limit, fee in ranges:
        if v <= limit:
            return fee
    return ranges[-1][1]


__all__ = ["CUSTOMS_FEE_RANGES", "calc_customs_fee_rub"]
