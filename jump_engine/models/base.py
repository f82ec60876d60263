"""Stochastic process interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict


class StochasticProcess(ABC):
    """Abstract process interface consumed by pricing engines."""

    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def params(self) -> Dict[str, float]:
        raise NotImplementedError
