"""Daily currency rate snapshot (RUB per 1 unit)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from importcalc.errors import UnknownCurrency
from importcalc.models.constants import SUPPORTED_CURRENCY_CODES

Money = Decimal


def to_decimal(value: Any) -> Decimal | None:
    """Coerce ``value`` to ``Decimal`` or return ``None`` when impossible."""
    if isinstance(value, Decimal):
        return value
    if value is None or isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def is_usable_rate(value: Any) -> bool:
    rate = to_decimal(value)
    return rate is not None and rate.is_finite() and rate > 0


def has_all_rates(rates: Mapping[str, Any] | None) -> bool:
    """Return ``True`` when every supported code maps to a positive finite rate."""
    if not rates:
        return False
    return all(is_usable_rate(rates.get(code)) for code in SUPPORTED_CURRENCY_CODES)


@dataclass(frozen=True)
class RateSnapshot:
    date: date
    rates: Mapping[str, Money] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized: dict[str, Money] = {}
        for code, value in dict(self.rates).items():
            rate = to_decimal(value)
            if rate is not None:
                normalized[code.upper()] = rate
        object.__setattr__(self, "rates", normalized)

    @property
    def key(self) -> str:
        return self.date.isoformat()

    def is_complete(self) -> bool:
        return has_all_rates(self.rates)

    def rate(self, currency: str) -> Money:
        code = currency.upper()
        rate = self.rates.get(code)
        if rate is None or not is_usable_rate(rate):
            raise UnknownCurrency(currency)
        return rate

    def to_rub(self, amount: Money | int | float, currency: str) -> Money:
        """Convert ``amount`` of ``currency`` into RUB using this snapshot."""
        return Decimal(str(amount)) * self.rate(currency)

    def as_dict(self) -> dict[str, str]:
        return {code: str(rate) for code, rate in self.rates.items()}

    @classmethod
    def from_mapping(cls, for_date: date, rates: Mapping[str, Any]) -> "RateSnapshot":
        return cls(date=for_date, rates=dict(rates))


__all__ = ["Money", "RateSnapshot", "has_all_rates", "is_usable_rate", "to_decimal"]
