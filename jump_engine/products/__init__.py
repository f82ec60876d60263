"""Product exports."""

from jump_engine.products.base import Exercise, Payoff, StrikedTypePayoff
from jump_engine.products.vanilla import (
    CashOrNothingPayoff,
    EuropeanExercise,
    EuropeanOption,
    PlainVanillaPayoff,
)

__all__ = [
    "Payoff",
    "StrikedTypePayoff",
    "Exercise",
    "PlainVanillaPayoff",
    "CashOrNothingPayoff",
    "EuropeanExercise",
    "EuropeanOption",
]
