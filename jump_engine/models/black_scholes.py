"""Black-Scholes-Merton process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from jump_engine.market_data.curves import Curve
from jump_engine.market_data.surfaces import BlackVolSurface
from jump_engine.models.base import StochasticProcess
from jump_engine.utils.types import Quote


@dataclass(frozen=True)
class BlackScholesProcess(StochasticProcess):
    """Pure diffusion: spot, dividend and risk-free curves, Black vol surface."""

    spot: Quote
    dividend_curve: Curve
    risk_free_curve: Curve
    vol_surface: BlackVolSurface

    @property
    def name(self) -> str:
        return "black_scholes"

    def params(self) -> Dict[str, float]:
        return {"spot": self.spot.value}
