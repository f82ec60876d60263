from dataclasses import replace
from datetime import date
import math

import pytest

from market_scenarios import ASOF, european, merton_process
from jump_engine.market_data import (
    BlackConstantVol,
    FlatForward,
    ShiftedCurve,
    ShiftedVolSurface,
    SmileVolSurface,
    ZeroCurve,
)
from jump_engine.numerics import extract_jump_parameters
from jump_engine.utils.date import ACTUAL_360, ACTUAL_365_FIXED, year_fraction


def test_day_counters():
    end = date(2025, 1, 1)
    assert year_fraction(ASOF, end) == pytest.approx(1.0)
    assert ACTUAL_365_FIXED.year_fraction(ASOF, end) == pytest.approx(1.0)
    assert ACTUAL_360.year_fraction(ASOF, end) == pytest.approx(365.0 / 360.0)


def test_flat_forward_discount():
    curve = FlatForward(0.05, ASOF)
    assert curve.discount(date(2025, 1, 1)) == pytest.approx(math.exp(-0.05))
    assert curve.discount(ASOF) == 1.0
    assert curve.zero_rate(2.0) == pytest.approx(0.05)


def test_zero_curve_interpolates_and_extrapolates_flat():
    curve = ZeroCurve([1.0, 2.0], [0.02, 0.04], ASOF)
    assert curve.zero_rate(1.5) == pytest.approx(0.03)
    assert curve.zero_rate(0.5) == pytest.approx(0.02)
    assert curve.zero_rate(3.0) == pytest.approx(0.04)
    assert curve.df(0.0) == 1.0


def test_zero_curve_rejects_mismatched_inputs():
    with pytest.raises(ValueError):
        ZeroCurve([1.0, 2.0], [0.02], ASOF).df(1.5)


def test_shifted_structures():
    curve = ShiftedCurve(FlatForward(0.05, ASOF), 0.01)
    assert curve.zero_rate(1.0) == pytest.approx(0.06)
    assert curve.reference_date == ASOF

    surface = ShiftedVolSurface(BlackConstantVol(0.2, ASOF), -0.5)
    assert surface.black_vol(1.0, 100.0) == 1e-8


def test_black_variance_before_reference_is_zero():
    surface = BlackConstantVol(0.2, ASOF, ACTUAL_360)
    assert surface.black_variance(ASOF, 100.0) == 0.0
    assert surface.black_variance(date(2024, 12, 27), 100.0) == pytest.approx(0.04)


def test_smile_surface_shape_and_bounds():
    surface = SmileVolSurface(
        expiries=[0.5, 1.0],
        atm_vols=[0.2, 0.22],
        skew=[-0.1, -0.1],
        curvature=[0.4, 0.4],
        spot_ref=100.0,
        reference_date=ASOF,
    )
    assert surface.black_vol(1.0, 100.0) == pytest.approx(0.22)
    assert surface.black_vol(0.75, 100.0) == pytest.approx(0.21)
    assert surface.black_vol(1.0, 80.0) > surface.black_vol(1.0, 120.0)
    assert surface.black_vol(1.0, 1e-12) == surface.max_vol


def test_jump_parameters_read_variance_at_unit_strike():
    surface = SmileVolSurface(
        expiries=[1.0],
        atm_vols=[0.2],
        skew=[-0.01],
        curvature=[0.0],
        spot_ref=100.0,
        reference_date=ASOF,
    )
    process = replace(merton_process(), vol_surface=surface)
    option = european()
    params = extract_jump_parameters(process, option.exercise)

    assert params.variance == pytest.approx(surface.black_variance(option.maturity, 1.0))
    assert params.variance != pytest.approx(surface.black_variance(option.maturity, 100.0))
