from dataclasses import replace

import pytest

from market_scenarios import diffusion_process, european, merton_process
from jump_engine.api import PricingContext, PricingSettings
from jump_engine.numerics import AnalyticEuropeanEngine, JumpDiffusionEngine
from jump_engine.risk.greeks import GreekRequest, GreeksCalculator
from jump_engine.utils.errors import PricingError
from jump_engine.utils.types import OptionType, Quote


def _context(option, process):
    engine = JumpDiffusionEngine(AnalyticEuropeanEngine(), relative_accuracy=1e-12)
    return PricingContext(option=option, process=process, engine=engine, settings=PricingSettings())


def _bump_request(*greeks):
    return GreekRequest(greeks=greeks, method="bump", bump_size=1e-3, vol_bump=1e-5, rate_bump=1e-5)


@pytest.mark.parametrize("option_type", [OptionType.CALL, OptionType.PUT])
def test_mixture_greeks_match_bumped_prices(option_type):
    option = european(105.0, option_type)
    process = merton_process(dividend_yield=0.01)
    context = _context(option, process)

    analytic = context.engine.price(option, process)
    bumped = GreeksCalculator().calculate(
        context, _bump_request("delta", "gamma", "rho", "dividend_rho")
    )

    assert bumped["delta"] == pytest.approx(analytic.delta, rel=1e-5, abs=1e-7)
    assert bumped["gamma"] == pytest.approx(analytic.gamma, rel=1e-3, abs=1e-6)
    assert bumped["rho"] == pytest.approx(analytic.rho, rel=1e-5, abs=1e-5)
    assert bumped["dividend_rho"] == pytest.approx(analytic.dividend_rho, rel=1e-5, abs=1e-5)


def test_vega_matches_bump_without_jumps():
    option = european(95.0, OptionType.PUT)
    process = replace(merton_process(), jump_intensity=Quote(0.0))
    context = _context(option, process)

    analytic = context.engine.price(option, process)
    bumped = GreeksCalculator().calculate(context, _bump_request("vega"))

    assert bumped["vega"] == pytest.approx(analytic.vega, rel=1e-5)


def test_only_requested_greeks_are_returned():
    option = european()
    process = merton_process()
    result = GreeksCalculator().calculate(_context(option, process), _bump_request("delta"))

    assert set(result) == {"delta"}


@pytest.mark.parametrize("option_type", [OptionType.CALL, OptionType.PUT])
def test_bumped_theta_matches_analytic_under_flat_market(option_type):
    option = european(95.0, option_type)
    process = diffusion_process(rate=0.03, dividend_yield=0.015, vol=0.25)
    engine = AnalyticEuropeanEngine()
    context = PricingContext(option=option, process=process, engine=engine, settings=PricingSettings())

    analytic = engine.price(option, process)
    bumped = GreeksCalculator().calculate(context, _bump_request("theta"))

    assert bumped["theta"] == pytest.approx(analytic.theta, rel=1e-4, abs=1e-5)


def test_theta_is_one_sided_next_to_the_reference_date():
    option = european(100.0, OptionType.CALL, days=1)
    process = diffusion_process()
    engine = AnalyticEuropeanEngine()
    context = PricingContext(option=option, process=process, engine=engine, settings=PricingSettings())

    bumped = GreeksCalculator().calculate(context, _bump_request("theta"))

    assert bumped["theta"] < 0.0


def test_default_request_is_fully_served_by_bumps():
    option = european()
    process = merton_process()
    request = replace(GreekRequest.default(), method="bump")

    result = GreeksCalculator().calculate(_context(option, process), request)

    assert set(result) == set(request.greeks)


def test_non_black_scholes_process_is_rejected():
    context = PricingContext(
        option=european(),
        process=object(),
        engine=AnalyticEuropeanEngine(),
        settings=PricingSettings(),
    )
    with pytest.raises(PricingError):
        GreeksCalculator().calculate(context, _bump_request("delta"))


def test_non_positive_spot_is_rejected():
    process = replace(merton_process(), spot=Quote(0.0))
    with pytest.raises(PricingError):
        GreeksCalculator().calculate(_context(european(), process), _bump_request("delta"))
