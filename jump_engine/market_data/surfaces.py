"""Black volatility surfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
import math
from typing import Sequence

from jump_engine.utils.date import ACTUAL_365_FIXED, DayCounter
from jump_engine.utils.interpolation import linear_interp


class BlackVolSurface(ABC):
    """Abstract Black implied volatility surface."""

    reference_date: date
    day_counter: DayCounter

    @abstractmethod
    def black_vol(self, t: float, strike: float) -> float:
        raise NotImplementedError

    def time_from_reference(self, d: date) -> float:
        return self.day_counter.year_fraction(self.reference_date, d)

    def black_variance(self, d: date, strike: float) -> float:
        t = self.time_from_reference(d)
        if t <= 0.0:
            return 0.0
        vol = self.black_vol(t, strike)
        return vol * vol * t


@dataclass(frozen=True)
class BlackConstantVol(BlackVolSurface):
    vol: float
    reference_date: date
    day_counter: DayCounter = ACTUAL_365_FIXED

    def black_vol(self, t: float, strike: float) -> float:
        return self.vol


@dataclass(frozen=True)
class SmileVolSurface(BlackVolSurface):
    """ATM term structure with a quadratic smile in log-moneyness, clamped."""

    expiries: Sequence[float]
    atm_vols: Sequence[float]
    skew: Sequence[float]
    curvature: Sequence[float]
    spot_ref: float
    reference_date: date
    day_counter: DayCounter = ACTUAL_365_FIXED
    min_vol: float = 1e-4
    max_vol: float = 5.0

    def black_vol(self, t: float, strike: float) -> float:
        t = max(t, 0.0)
        atm, skew, curv = (
            linear_interp(t, self.expiries, pillars)
            for pillars in (self.atm_vols, self.skew, self.curvature)
        )
        x = math.log(max(strike, 1e-8) / max(self.spot_ref, 1e-8))
        vol = atm + x * (skew + 0.5 * curv * x)
        return min(max(vol, self.min_vol), self.max_vol)


class ShiftedVolSurface(BlackVolSurface):
    """Parallel shift of the Black vols of another surface."""

    def __init__(self, base: BlackVolSurface, shift: float) -> None:
        self._base = base
        self._shift = shift
        self.reference_date = base.reference_date
        self.day_counter = base.day_counter

    def black_vol(self, t: float, strike: float) -> float:
        return max(self._base.black_vol(t, strike) + self._shift, 1e-8)
