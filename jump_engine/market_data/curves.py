"""Curve abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
import math
from typing import Sequence

from jump_engine.utils.date import ACTUAL_365_FIXED, DayCounter
from jump_engine.utils.interpolation import linear_interp


class Curve(ABC):
    """Abstract discount curve anchored at a reference date."""

    reference_date: date
    day_counter: DayCounter

    @abstractmethod
    def df(self, t: float) -> float:
        raise NotImplementedError

    def time_from_reference(self, d: date) -> float:
        return self.day_counter.year_fraction(self.reference_date, d)

    def discount(self, d: date) -> float:
        return self.df(self.time_from_reference(d))

    def zero_rate(self, t: float) -> float:
        if t <= 0.0:
            return 0.0
        return -math.log(self.df(t)) / t


@dataclass(frozen=True)
class FlatForward(Curve):
    """Constant continuously-compounded rate."""

    rate: float
    reference_date: date
    day_counter: DayCounter = ACTUAL_365_FIXED

    def df(self, t: float) -> float:
        return math.exp(-self.rate * max(t, 0.0))


@dataclass(frozen=True)
class ZeroCurve(Curve):
    times: Sequence[float]
    zero_rates: Sequence[float]
    reference_date: date
    day_counter: DayCounter = ACTUAL_365_FIXED

    def df(self, t: float) -> float:
        if t <= 0.0:
            return 1.0
        r = linear_interp(t, self.times, self.zero_rates)
        return math.exp(-r * t)


class ShiftedCurve(Curve):
    """Parallel shift of the zero rates of another curve."""

    def __init__(self, base: Curve, shift: float) -> None:
        self._base = base
        self._shift = shift
        self.reference_date = base.reference_date
        self.day_counter = base.day_counter

    def df(self, t: float) -> float:
        rate = self._base.zero_rate(t) + self._shift
        return math.exp(-rate * max(t, 0.0))
