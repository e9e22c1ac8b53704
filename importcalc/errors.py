"""Exceptions raised by the rate resolver and the tariff engine."""

from __future__ import annotations


class ImportCalcError(Exception):
    """Base class for all calculation errors."""


class RateUnavailable(ImportCalcError):
    """No usable rate snapshot (fresh or cached) could be produced."""


class SourceUnreachable(RateUnavailable):
    """The external rate source could not be fetched."""

    def __init__(self, message: str, *, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ParseFailed(RateUnavailable):
    """The rate document was fetched but no extraction strategy succeeded."""


class UnknownCurrency(ImportCalcError, ValueError):
    def __init__(self, currency: str):
        super().__init__(f"Unsupported currency: {currency}")
        self.currency = currency


class UnsupportedBracket(ImportCalcError, ValueError):
    def __init__(self, bracket: str, message: str | None = None):
        super().__init__(message or f"Unsupported bracket: {bracket}")
        self.bracket = bracket


class InvalidVehicle(ImportCalcError, ValueError):
    """Vehicle description failed validation."""


__all__ = [
    "ImportCalcError",
    "RateUnavailable",
    "SourceUnreachable",
    "ParseFailed",
    "UnknownCurrency",
    "UnsupportedBracket",
    "InvalidVehicle",
]
