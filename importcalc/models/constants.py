from __future__ import annotations

# Reference currency for every total
REFERENCE_CURRENCY = "RUB"

# Supported currency codes (rate source + app UI)
SUPPORTED_CURRENCY_CODES: tuple[str, ...] = ("JPY", "USD", "EUR", "RUB")

# Codes that are actually quoted by the rate source; RUB is always 1
QUOTED_CURRENCY_CODES: tuple[str, ...] = ("USD", "EUR", "JPY")

__all__ = ["REFERENCE_CURRENCY", "SUPPORTED_CURRENCY_CODES", "QUOTED_CURRENCY_CODES"]
