"""Vanilla European products."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from jump_engine.products.base import Exercise, Payoff, StrikedTypePayoff
from jump_engine.utils.types import OptionType


@dataclass(frozen=True)
class PlainVanillaPayoff(StrikedTypePayoff):
    option_type: OptionType
    strike: float

    @property
    def payoff_type(self) -> str:
        return "vanilla"

    def __call__(self, spot: float) -> float:
        if self.option_type == OptionType.CALL:
            return max(spot - self.strike, 0.0)
        return max(self.strike - spot, 0.0)


@dataclass(frozen=True)
class CashOrNothingPayoff(StrikedTypePayoff):
    option_type: OptionType
    strike: float
    cash: float

    @property
    def payoff_type(self) -> str:
        return "cash_or_nothing"

    def __call__(self, spot: float) -> float:
        if self.option_type == OptionType.CALL:
            return self.cash if spot > self.strike else 0.0
        return self.cash if spot < self.strike else 0.0


@dataclass(frozen=True)
class EuropeanExercise(Exercise):
    expiry: date

    @property
    def dates(self) -> Sequence[date]:
        return (self.expiry,)


@dataclass(frozen=True)
class EuropeanOption:
    payoff: Payoff
    exercise: Exercise

    @property
    def product_type(self) -> str:
        return "european_option"

    @property
    def maturity(self) -> date:
        return self.exercise.last_date
