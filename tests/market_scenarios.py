from datetime import date, timedelta

from jump_engine.market_data import BlackConstantVol, FlatForward, ZeroCurve
from jump_engine.models import BlackScholesProcess, Merton76Process
from jump_engine.products import EuropeanExercise, EuropeanOption, PlainVanillaPayoff
from jump_engine.utils.types import OptionType, Quote


ASOF = date(2024, 1, 2)


def european(
    strike: float = 100.0,
    option_type: OptionType = OptionType.CALL,
    days: int = 365,
    asof: date = ASOF,
) -> EuropeanOption:
    return EuropeanOption(
        payoff=PlainVanillaPayoff(option_type, strike),
        exercise=EuropeanExercise(asof + timedelta(days=days)),
    )


def merton_process(
    spot: float = 100.0,
    rate: float = 0.05,
    dividend_yield: float = 0.0,
    vol: float = 0.2,
    jump_intensity: float = 1.0,
    jump_mean: float = -0.1,
    jump_vol: float = 0.2,
    asof: date = ASOF,
) -> Merton76Process:
    return Merton76Process(
        spot=Quote(spot),
        dividend_curve=FlatForward(dividend_yield, asof),
        risk_free_curve=FlatForward(rate, asof),
        vol_surface=BlackConstantVol(vol, asof),
        jump_intensity=Quote(jump_intensity),
        log_jump_mean=Quote(jump_mean),
        log_jump_vol=Quote(jump_vol),
    )


def diffusion_process(
    spot: float = 100.0,
    rate: float = 0.05,
    dividend_yield: float = 0.0,
    vol: float = 0.2,
    asof: date = ASOF,
) -> BlackScholesProcess:
    return BlackScholesProcess(
        spot=Quote(spot),
        dividend_curve=FlatForward(dividend_yield, asof),
        risk_free_curve=FlatForward(rate, asof),
        vol_surface=BlackConstantVol(vol, asof),
    )


def market_scenarios():
    times = [0.25, 0.5, 1.0, 2.0, 5.0]
    scenarios = {
        "normal": {
            "spot": 102.0,
            "discount": [0.015, 0.017, 0.02, 0.024, 0.028],
            "dividend": [0.005, 0.005, 0.006, 0.006, 0.007],
            "vol": 0.2,
            "jump_intensity": 0.5,
            "jump_mean": -0.05,
            "jump_vol": 0.15,
        },
        "crash": {
            "spot": 98.0,
            "discount": [0.01, 0.015, 0.025, 0.035, 0.045],
            "dividend": [0.006, 0.007, 0.008, 0.009, 0.01],
            "vol": 0.18,
            "jump_intensity": 0.2,
            "jump_mean": -0.3,
            "jump_vol": 0.25,
        },
        "volatile": {
            "spot": 105.0,
            "discount": [0.012, 0.015, 0.018, 0.022, 0.027],
            "dividend": [0.004, 0.006, 0.007, 0.009, 0.011],
            "vol": 0.3,
            "jump_intensity": 3.0,
            "jump_mean": 0.02,
            "jump_vol": 0.1,
        },
    }

    processes = {}
    for name, data in scenarios.items():
        processes[name] = Merton76Process(
            spot=Quote(data["spot"]),
            dividend_curve=ZeroCurve(times, data["dividend"], ASOF),
            risk_free_curve=ZeroCurve(times, data["discount"], ASOF),
            vol_surface=BlackConstantVol(data["vol"], ASOF),
            jump_intensity=Quote(data["jump_intensity"]),
            log_jump_mean=Quote(data["jump_mean"]),
            log_jump_vol=Quote(data["jump_vol"]),
        )
    return processes
