"""Date utilities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


def year_fraction(start: date, end: date, basis: float = 365.0) -> float:
    return (end - start).days / basis


@dataclass(frozen=True)
class DayCounter:
    """Actual/basis day count convention."""

    basis: float = 365.0
    name: str = "Actual/365 (Fixed)"

    def year_fraction(self, start: date, end: date) -> float:
        return year_fraction(start, end, self.basis)


ACTUAL_365_FIXED = DayCounter(365.0, "Actual/365 (Fixed)")
ACTUAL_360 = DayCounter(360.0, "Actual/360")
