"""Discrete probability weights for jump counts."""

from __future__ import annotations

from typing import Protocol

from scipy.stats import poisson


class JumpCountWeights(Protocol):
    def __call__(self, jumps: int, mean: float) -> float:
        ...


class PoissonWeights:
    """P(X = jumps) for X ~ Poisson(mean)."""

    def __call__(self, jumps: int, mean: float) -> float:
        if mean < 0.0:
            raise ValueError(f"negative Poisson mean: {mean}")
        if jumps < 0:
            return 0.0
        if mean == 0.0:
            return 1.0 if jumps == 0 else 0.0
        return float(poisson.pmf(jumps, mean))
