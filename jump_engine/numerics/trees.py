"""Binomial tree engine for European payoffs."""

from __future__ import annotations

import math
from typing import Callable, List, Tuple

from jump_engine.numerics.base import DiffusionEngine
from jump_engine.products.base import StrikedTypePayoff
from jump_engine.utils.errors import ArgumentValidationError, PricingError

_Levels = Tuple[float, List[float], List[float], List[float], List[float]]


class BinomialEuropeanEngine(DiffusionEngine):
    """Cox-Ross-Rubinstein tree.

    Delta, gamma and theta are read off the first two levels of the tree;
    vega, rho and dividend rho come from bumps of the flat inputs. The vol
    bump has to span several node moves, otherwise vega picks up the
    odd-even oscillation of the tree price. With zero volatility the payoff
    of the forward is discounted instead.
    """

    def __init__(
        self,
        steps: int = 400,
        vol_bump: float = 1e-2,
        rate_bump: float = 1e-4,
    ) -> None:
        super().__init__()
        if steps < 3:
            raise ValueError("at least three tree steps are required")
        self.steps = steps
        self.vol_bump = vol_bump
        self.rate_bump = rate_bump

    @property
    def name(self) -> str:
        return "binomial_european"

    def calculate(self) -> None:
        args = self.arguments
        payoff = args.payoff
        if not isinstance(payoff, StrikedTypePayoff):
            raise ArgumentValidationError("non-striked payoff given")

        maturity = args.exercise.last_date
        spot = args.spot.value
        t = args.vol_surface.time_from_reference(maturity)
        variance = args.vol_surface.black_variance(maturity, payoff.strike)
        sigma = math.sqrt(variance / t)
        df_r = args.risk_free_curve.discount(maturity)
        df_q = args.dividend_curve.discount(maturity)
        if df_r <= 0.0 or df_q <= 0.0:
            raise PricingError("non-positive discount factor")
        r = -math.log(df_r) / args.risk_free_curve.time_from_reference(maturity)
        q = -math.log(df_q) / args.dividend_curve.time_from_reference(maturity)

        def reprice(r_: float, q_: float, sigma_: float) -> float:
            if sigma_ <= 0.0:
                return _discounted_forward_payoff(payoff, spot, t, r_, q_)
            return self._rollback(payoff, spot, t, r_, q_, sigma_)[0]

        if sigma > 0.0:
            value, spots_1, values_1, spots_2, values_2 = self._rollback(
                payoff, spot, t, r, q, sigma
            )
            dt = t / self.steps
            delta = (values_1[0] - values_1[1]) / (spots_1[0] - spots_1[1])
            delta_up = (values_2[0] - values_2[1]) / (spots_2[0] - spots_2[1])
            delta_dn = (values_2[1] - values_2[2]) / (spots_2[1] - spots_2[2])
            gamma = (delta_up - delta_dn) / (0.5 * (spots_2[0] - spots_2[2]))
            theta = (values_2[1] - value) / (2.0 * dt)
        else:
            value = reprice(r, q, 0.0)
            h = spot * 1e-4
            up = _discounted_forward_payoff(payoff, spot + h, t, r, q)
            down = _discounted_forward_payoff(payoff, spot - h, t, r, q)
            delta = (up - down) / (2.0 * h)
            gamma = (up - 2.0 * value + down) / (h * h)
            theta = r * value - (r - q) * spot * delta

        # one-sided near zero vol, a negative vol mirrors the tree
        if sigma > self.vol_bump:
            vega = _central(lambda h: reprice(r, q, sigma + h), self.vol_bump)
        else:
            vega = (reprice(r, q, sigma + self.vol_bump) - value) / self.vol_bump

        results = self.results
        results.value = value
        results.delta = delta
        results.gamma = gamma
        results.theta = theta
        results.vega = vega
        results.rho = _central(lambda h: reprice(r + h, q, sigma), self.rate_bump)
        results.dividend_rho = _central(lambda h: reprice(r, q + h, sigma), self.rate_bump)

    def _rollback(
        self,
        payoff: StrikedTypePayoff,
        spot: float,
        t: float,
        r: float,
        q: float,
        sigma: float,
    ) -> _Levels:
        if sigma <= 0.0:
            raise PricingError(f"binomial tree needs a positive volatility (sigma={sigma})")
        steps = self.steps
        dt = t / steps
        u = math.exp(sigma * math.sqrt(dt))
        d = 1.0 / u
        disc = math.exp(-r * dt)
        p = (math.exp((r - q) * dt) - d) / (u - d)
        if not 0.0 <= p <= 1.0:
            raise PricingError(f"negative probability in binomial tree (p={p:.6f})")

        # Terminal payoffs
        values = [payoff(spot * (u ** (steps - i)) * (d ** i)) for i in range(steps + 1)]

        levels = {}
        for step in range(steps - 1, -1, -1):
            values = [
                disc * (p * values[i] + (1.0 - p) * values[i + 1]) for i in range(step + 1)
            ]
            if step in (1, 2):
                spots = [spot * (u ** (step - i)) * (d ** i) for i in range(step + 1)]
                levels[step] = (spots, values)
        return values[0], levels[1][0], levels[1][1], levels[2][0], levels[2][1]


def _central(fn: Callable[[float], float], h: float) -> float:
    return (fn(h) - fn(-h)) / (2.0 * h)


def _discounted_forward_payoff(
    payoff: StrikedTypePayoff, spot: float, t: float, r: float, q: float
) -> float:
    return math.exp(-r * t) * payoff(spot * math.exp((r - q) * t))
