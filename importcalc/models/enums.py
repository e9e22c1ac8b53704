from __future__ import annotations

from enum import Enum


class AgeCategory(str, Enum):
    UNDER_3 = "under3"
    FROM_3_TO_5 = "3to5"
    OVER_5 = "over5"

    def representative_years(self) -> int:
        """Return a representative vehicle age inside the bracket."""
        return _REPRESENTATIVE_YEARS[self]


_REPRESENTATIVE_YEARS = {
    AgeCategory.UNDER_3: 3,
    AgeCategory.FROM_3_TO_5: 4,
    AgeCategory.OVER_5: 6,
}


class EngineCategory(str, Enum):
    ICE = "ICE"
    EV = "EV"  # electric or hybrid


__all__ = ["AgeCategory", "EngineCategory"]
