"""Pricing engine interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from typing import Dict, Optional

from jump_engine.market_data.curves import Curve
from jump_engine.market_data.surfaces import BlackVolSurface
from jump_engine.models.base import StochasticProcess
from jump_engine.models.black_scholes import BlackScholesProcess
from jump_engine.products.base import Exercise, Payoff
from jump_engine.products.vanilla import EuropeanOption
from jump_engine.utils.errors import ArgumentValidationError
from jump_engine.utils.types import Quote

GREEK_FIELDS = ("value", "delta", "gamma", "theta", "vega", "rho", "dividend_rho")


@dataclass(frozen=True)
class EngineSettings:
    relative_accuracy: float = 1e-4
    max_iterations: int = 100


@dataclass
class EngineResults:
    value: float = 0.0
    delta: float = 0.0
    gamma: float = 0.0
    theta: float = 0.0
    vega: float = 0.0
    rho: float = 0.0
    dividend_rho: float = 0.0

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, f.default)

    def accumulate(self, weight: float, other: "EngineResults") -> None:
        for name in GREEK_FIELDS:
            setattr(self, name, getattr(self, name) + weight * getattr(other, name))

    def copy(self) -> "EngineResults":
        return replace(self)

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in GREEK_FIELDS}


@dataclass
class EngineArguments:
    """Option and process handed to engines that consume a whole process."""

    payoff: Optional[Payoff] = None
    exercise: Optional[Exercise] = None
    process: Optional[StochasticProcess] = None

    def validate(self) -> None:
        if self.payoff is None:
            raise ArgumentValidationError("no payoff given")
        if self.exercise is None:
            raise ArgumentValidationError("no exercise given")
        if self.process is None:
            raise ArgumentValidationError("no process given")


@dataclass
class DiffusionArguments:
    """Inputs of a diffusion-only European engine."""

    payoff: Optional[Payoff] = None
    exercise: Optional[Exercise] = None
    spot: Optional[Quote] = None
    dividend_curve: Optional[Curve] = None
    risk_free_curve: Optional[Curve] = None
    vol_surface: Optional[BlackVolSurface] = None

    def validate(self) -> None:
        if self.payoff is None:
            raise ArgumentValidationError("no payoff given")
        if self.exercise is None:
            raise ArgumentValidationError("no exercise given")
        if self.spot is None or self.spot.value <= 0.0:
            raise ArgumentValidationError("negative or null underlying given")
        if self.dividend_curve is None:
            raise ArgumentValidationError("no dividend curve given")
        if self.risk_free_curve is None:
            raise ArgumentValidationError("no risk-free curve given")
        if self.vol_surface is None:
            raise ArgumentValidationError("no volatility surface given")
        if self.vol_surface.reference_date != self.risk_free_curve.reference_date:
            raise ArgumentValidationError(
                f"volatility reference date {self.vol_surface.reference_date} differs from "
                f"risk-free reference date {self.risk_free_curve.reference_date}"
            )
        maturity = self.exercise.last_date
        for label, structure in (
            ("risk-free curve", self.risk_free_curve),
            ("dividend curve", self.dividend_curve),
            ("volatility surface", self.vol_surface),
        ):
            if maturity <= structure.reference_date:
                raise ArgumentValidationError(
                    f"exercise date {maturity} is not after the {label} reference date "
                    f"{structure.reference_date}"
                )

    def set_process(self, process: BlackScholesProcess) -> None:
        self.spot = process.spot
        self.dividend_curve = process.dividend_curve
        self.risk_free_curve = process.risk_free_curve
        self.vol_surface = process.vol_surface


class Engine(ABC):
    """Pricing engine with a reset/validate/calculate lifecycle.

    Engines own mutable ``arguments`` and ``results``; a single instance must
    not be shared between concurrent pricing calls.
    """

    arguments: EngineArguments | DiffusionArguments
    results: EngineResults

    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def setup(self, payoff: Payoff, exercise: Exercise, process: StochasticProcess) -> None:
        raise NotImplementedError

    @abstractmethod
    def calculate(self) -> None:
        """Populate ``results`` from the validated ``arguments``."""
        raise NotImplementedError

    def reset(self) -> None:
        self.results.reset()

    def validate(self) -> None:
        self.arguments.validate()

    def price(self, option: EuropeanOption, process: StochasticProcess) -> EngineResults:
        self.reset()
        self.setup(option.payoff, option.exercise, process)
        self.validate()
        self.calculate()
        return self.results.copy()


class DiffusionEngine(Engine):
    """Base for engines pricing under a pure Black-Scholes diffusion."""

    def __init__(self) -> None:
        self.arguments = DiffusionArguments()
        self.results = EngineResults()

    def setup(self, payoff: Payoff, exercise: Exercise, process: StochasticProcess) -> None:
        if not isinstance(process, BlackScholesProcess):
            raise ArgumentValidationError(f"{self.name} requires a Black-Scholes process")
        self.arguments.payoff = payoff
        self.arguments.exercise = exercise
        self.arguments.set_process(process)
