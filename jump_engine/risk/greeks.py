"""Bump-and-reprice Greek calculations."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Dict, Iterable, Protocol

from jump_engine.market_data.curves import ShiftedCurve
from jump_engine.market_data.surfaces import ShiftedVolSurface
from jump_engine.models.black_scholes import BlackScholesProcess
from jump_engine.products.vanilla import EuropeanExercise, EuropeanOption
from jump_engine.utils.errors import PricingError
from jump_engine.utils.types import Quote


@dataclass(frozen=True)
class GreekRequest:
    greeks: Iterable[str]
    method: str = "analytic"
    bump_size: float = 1e-4
    vol_bump: float = 1e-4
    rate_bump: float = 1e-4
    theta_days: int = 1

    @staticmethod
    def default() -> "GreekRequest":
        return GreekRequest(
            greeks=("delta", "gamma", "theta", "vega", "rho", "dividend_rho"),
            method="analytic",
        )


class _PricingContext(Protocol):
    option: EuropeanOption
    process: object
    engine: object
    settings: object


class GreeksCalculator:
    """Central finite differences of the engine price.

    Vega bumps the base volatility surface in parallel, rho and dividend rho
    shift the zero rates of the risk-free and dividend curves. Theta moves the
    exercise date by ``theta_days`` either side with the market held fixed,
    one-sided when the earlier date would reach the reference date.
    """

    def calculate(self, context: _PricingContext, request: GreekRequest) -> Dict[str, float]:
        option = context.option
        process = context.process
        engine = context.engine
        if not isinstance(process, BlackScholesProcess):
            raise PricingError(
                f"bump Greeks need a Black-Scholes process, got {type(process).__name__}"
            )

        spot = process.spot.value
        if spot <= 0.0:
            raise PricingError(f"bump Greeks need a positive spot, got {spot}")

        def reprice(shifted: BlackScholesProcess, product: EuropeanOption = option) -> float:
            return float(engine.price(product, shifted).value)

        base_price = reprice(process)
        results: Dict[str, float] = {}

        if "delta" in request.greeks or "gamma" in request.greeks:
            bump = max(request.bump_size, 1e-8)
            p_up = reprice(_shift_spot(process, 1.0 + bump))
            p_dn = reprice(_shift_spot(process, 1.0 - bump))
            if "delta" in request.greeks:
                results["delta"] = (p_up - p_dn) / (2.0 * spot * bump)
            if "gamma" in request.greeks:
                results["gamma"] = (p_up - 2.0 * base_price + p_dn) / (spot * spot * bump * bump)

        if "theta" in request.greeks:
            results["theta"] = _theta(option, process, request.theta_days, base_price, reprice)

        if "vega" in request.greeks:
            v_bump = max(request.vol_bump, 1e-8)
            p_vu = reprice(replace(process, vol_surface=ShiftedVolSurface(process.vol_surface, v_bump)))
            p_vd = reprice(replace(process, vol_surface=ShiftedVolSurface(process.vol_surface, -v_bump)))
            results["vega"] = (p_vu - p_vd) / (2.0 * v_bump)

        if "rho" in request.greeks:
            r_bump = max(request.rate_bump, 1e-8)
            p_ru = reprice(replace(process, risk_free_curve=ShiftedCurve(process.risk_free_curve, r_bump)))
            p_rd = reprice(replace(process, risk_free_curve=ShiftedCurve(process.risk_free_curve, -r_bump)))
            results["rho"] = (p_ru - p_rd) / (2.0 * r_bump)

        if "dividend_rho" in request.greeks:
            q_bump = max(request.rate_bump, 1e-8)
            p_qu = reprice(replace(process, dividend_curve=ShiftedCurve(process.dividend_curve, q_bump)))
            p_qd = reprice(replace(process, dividend_curve=ShiftedCurve(process.dividend_curve, -q_bump)))
            results["dividend_rho"] = (p_qu - p_qd) / (2.0 * q_bump)

        return results


def _shift_spot(process: BlackScholesProcess, spot_multiplier: float) -> BlackScholesProcess:
    return replace(process, spot=Quote(process.spot.value * spot_multiplier, process.spot.name))


def _theta(option, process, days, base_price, reprice) -> float:
    if days < 1:
        raise PricingError(f"theta needs a positive day shift, got {days}")
    maturity = option.maturity
    step = timedelta(days=days)
    surface = process.vol_surface
    dt = surface.day_counter.year_fraction(maturity, maturity + step)

    later = reprice(process, _with_expiry(option, maturity + step))
    if maturity - step > surface.reference_date:
        earlier = reprice(process, _with_expiry(option, maturity - step))
        return -(later - earlier) / (2.0 * dt)
    return -(later - base_price) / dt


def _with_expiry(option: EuropeanOption, expiry) -> EuropeanOption:
    return replace(option, exercise=EuropeanExercise(expiry))
