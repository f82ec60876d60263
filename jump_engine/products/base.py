"""Payoff and exercise definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Sequence

from jump_engine.utils.types import OptionType


class Payoff(ABC):
    """Abstract payoff definition."""

    @property
    @abstractmethod
    def payoff_type(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def __call__(self, spot: float) -> float:
        raise NotImplementedError


class StrikedTypePayoff(Payoff):
    """Payoff described by an option type and a strike."""

    option_type: OptionType
    strike: float


class Exercise(ABC):
    """Abstract exercise schedule."""

    @property
    @abstractmethod
    def dates(self) -> Sequence[date]:
        raise NotImplementedError

    @property
    def last_date(self) -> date:
        return self.dates[-1]
