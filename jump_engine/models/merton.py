"""Merton (1976) jump diffusion process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from jump_engine.models.black_scholes import BlackScholesProcess
from jump_engine.utils.types import Quote


@dataclass(frozen=True)
class Merton76Process(BlackScholesProcess):
    """Black-Scholes diffusion plus Poisson-timed log-normal jumps.

    ``jump_intensity`` is the expected number of jumps per year, while
    ``log_jump_mean`` and ``log_jump_vol`` parametrise the normal law of the
    log jump size.
    """

    jump_intensity: Quote = Quote(0.0)
    log_jump_mean: Quote = Quote(0.0)
    log_jump_vol: Quote = Quote(0.0)

    @property
    def name(self) -> str:
        return "merton_jump"

    def params(self) -> Dict[str, float]:
        return {
            "spot": self.spot.value,
            "jump_intensity": self.jump_intensity.value,
            "jump_mean": self.log_jump_mean.value,
            "jump_vol": self.log_jump_vol.value,
        }

    def diffusion_process(self) -> BlackScholesProcess:
        return BlackScholesProcess(
            spot=self.spot,
            dividend_curve=self.dividend_curve,
            risk_free_curve=self.risk_free_curve,
            vol_surface=self.vol_surface,
        )
