"""Analytic Black-Scholes-Merton engine for European payoffs."""

from __future__ import annotations

import math

from scipy.stats import norm

from jump_engine.numerics.base import DiffusionEngine
from jump_engine.products.base import StrikedTypePayoff
from jump_engine.products.vanilla import CashOrNothingPayoff, PlainVanillaPayoff
from jump_engine.utils.errors import ArgumentValidationError, PricingError
from jump_engine.utils.types import OptionType


def _implied_rate(discount: float, t: float) -> float:
    if t <= 0.0:
        return 0.0
    return -math.log(discount) / t


class AnalyticEuropeanEngine(DiffusionEngine):
    """Closed-form value and Greeks under constant-parameter diffusion.

    Rates, dividend yield and volatility are read off the supplied term
    structures at the exercise date. Theta is the calendar-time derivative
    implied by the Black-Scholes PDE.
    """

    @property
    def name(self) -> str:
        return "analytic_european"

    def calculate(self) -> None:
        args = self.arguments
        payoff = args.payoff
        if not isinstance(payoff, StrikedTypePayoff):
            raise ArgumentValidationError("non-striked payoff given")

        maturity = args.exercise.last_date
        spot = args.spot.value
        strike = payoff.strike

        variance = args.vol_surface.black_variance(maturity, strike)
        t_vol = args.vol_surface.time_from_reference(maturity)
        t_r = args.risk_free_curve.time_from_reference(maturity)
        t_q = args.dividend_curve.time_from_reference(maturity)
        df_r = args.risk_free_curve.discount(maturity)
        df_q = args.dividend_curve.discount(maturity)
        if df_r <= 0.0 or df_q <= 0.0:
            raise PricingError("non-positive discount factor")

        r = _implied_rate(df_r, t_r)
        q = _implied_rate(df_q, t_q)
        sigma_sq = variance / t_vol if t_vol > 0.0 else 0.0
        forward = spot * df_q / df_r
        stdev = math.sqrt(variance)
        sign = 1.0 if payoff.option_type == OptionType.CALL else -1.0

        if isinstance(payoff, PlainVanillaPayoff):
            greeks = _vanilla(spot, strike, forward, stdev, df_r, df_q, t_vol, t_r, t_q, sign)
        elif isinstance(payoff, CashOrNothingPayoff):
            greeks = _cash_or_nothing(
                spot, strike, payoff.cash, forward, stdev, df_r, t_vol, t_r, t_q, sign
            )
        else:
            raise ArgumentValidationError(f"unsupported payoff: {payoff.payoff_type}")

        value, delta, gamma, vega, rho, dividend_rho = greeks
        theta = r * value - (r - q) * spot * delta - 0.5 * sigma_sq * spot * spot * gamma

        results = self.results
        results.value = value
        results.delta = delta
        results.gamma = gamma
        results.theta = theta
        results.vega = vega
        results.rho = rho
        results.dividend_rho = dividend_rho


def _vanilla(spot, strike, forward, stdev, df_r, df_q, t_vol, t_r, t_q, sign):
    if stdev <= 0.0:
        in_the_money = sign * (forward - strike) > 0.0
        if not in_the_money:
            return 0.0, 0.0, 0.0, 0.0, 0.0, 0.0
        value = sign * (spot * df_q - strike * df_r)
        return (
            value,
            sign * df_q,
            0.0,
            0.0,
            sign * t_r * strike * df_r,
            -sign * t_q * spot * df_q,
        )

    d1 = math.log(forward / strike) / stdev + 0.5 * stdev
    d2 = d1 - stdev
    nd1 = norm.cdf(sign * d1)
    nd2 = norm.cdf(sign * d2)
    pdf_d1 = norm.pdf(d1)

    value = sign * (spot * df_q * nd1 - strike * df_r * nd2)
    delta = sign * df_q * nd1
    gamma = df_q * pdf_d1 / (spot * stdev)
    vega = spot * df_q * pdf_d1 * math.sqrt(t_vol)
    rho = sign * t_r * strike * df_r * nd2
    dividend_rho = -sign * t_q * spot * df_q * nd1
    return value, delta, gamma, vega, rho, dividend_rho


def _cash_or_nothing(spot, strike, cash, forward, stdev, df_r, t_vol, t_r, t_q, sign):
    if stdev <= 0.0:
        paid = sign * (forward - strike) > 0.0
        value = cash * df_r if paid else 0.0
        return value, 0.0, 0.0, 0.0, -t_r * value, 0.0

    d1 = math.log(forward / strike) / stdev + 0.5 * stdev
    d2 = d1 - stdev
    pdf_d2 = norm.pdf(d2)
    discounted_density = cash * df_r * pdf_d2

    value = cash * df_r * norm.cdf(sign * d2)
    delta = sign * discounted_density / (spot * stdev)
    gamma = -sign * discounted_density * d1 / (spot * spot * stdev * stdev)
    vega = -sign * discounted_density * d1 * math.sqrt(t_vol) / stdev
    rho = -t_r * value + sign * discounted_density * t_r / stdev
    dividend_rho = -sign * discounted_density * t_q / stdev
    return value, delta, gamma, vega, rho, dividend_rho
