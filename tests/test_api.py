import pytest

from market_scenarios import european, merton_process
from jump_engine import PricingSettings, price
from jump_engine.numerics import AnalyticEuropeanEngine, EngineSettings, JumpDiffusionEngine
from jump_engine.risk import GreekRequest
from jump_engine.utils.errors import AccuracyNotReachedError


def test_default_price_reports_metrics_and_diagnostics():
    result = price(european(), merton_process())

    assert result.price > 0.0
    assert set(result.greeks) == {"delta", "gamma", "theta", "vega", "rho", "dividend_rho"}
    assert result.metrics["iterations"] >= 2
    assert result.metrics["last_contribution"] <= 1e-4
    assert 0.0 < result.metrics["weight_sum"] <= 1.0
    assert result.diagnostics["engine"] == "jump_diffusion(analytic_european)"
    assert result.diagnostics["process"] == "merton_jump"
    assert result.diagnostics["state"] == "converged"
    assert result.diagnostics["run_id"] == result.run_id


def test_engine_reuse_is_deterministic():
    engine = JumpDiffusionEngine(AnalyticEuropeanEngine())
    first = price(european(), merton_process(), engine)
    second = price(european(), merton_process(), engine)

    assert first.price == second.price
    assert first.greeks == second.greeks
    assert first.run_id != second.run_id


def test_settings_drive_default_engine():
    settings = PricingSettings(
        engine_settings=EngineSettings(relative_accuracy=1e-30, max_iterations=3)
    )
    with pytest.raises(AccuracyNotReachedError):
        price(european(), merton_process(), settings=settings)


def test_greeks_and_diagnostics_can_be_disabled():
    settings = PricingSettings(compute_greeks=False, diagnostics=False)
    result = price(european(), merton_process(), settings=settings)

    assert result.greeks == {}
    assert result.diagnostics == {}


def test_bump_greeks_through_api():
    settings = PricingSettings(
        engine_settings=EngineSettings(relative_accuracy=1e-12),
        greek_request=GreekRequest(greeks=("delta",), method="bump", bump_size=1e-3),
    )
    bumped = price(european(), merton_process(), settings=settings)
    analytic = price(european(), merton_process(), settings=PricingSettings(
        engine_settings=EngineSettings(relative_accuracy=1e-12)
    ))

    assert bumped.greeks["delta"] == pytest.approx(analytic.greeks["delta"], rel=1e-5)
