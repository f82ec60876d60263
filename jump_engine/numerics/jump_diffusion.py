"""Jump diffusion (Merton 1976) engine.

The jump-diffusion price is written as a Poisson mixture of pure-diffusion
prices: conditional on exactly ``i`` jumps before expiry the log-price is
Gaussian, so each term is priced by a diffusion-only engine under a flat rate
and a flat volatility adjusted for ``i`` jumps, and weighted by the
probability of observing ``i`` jumps.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
import logging
import math
from typing import Optional, Tuple

from jump_engine.market_data.curves import FlatForward
from jump_engine.market_data.surfaces import BlackConstantVol
from jump_engine.models.base import StochasticProcess
from jump_engine.models.merton import Merton76Process
from jump_engine.numerics.base import (
    DiffusionEngine,
    Engine,
    EngineArguments,
    EngineResults,
    EngineSettings,
)
from jump_engine.numerics.weights import JumpCountWeights, PoissonWeights
from jump_engine.products.base import Exercise, Payoff
from jump_engine.utils.date import DayCounter
from jump_engine.utils.errors import (
    AccuracyNotReachedError,
    InvalidScenarioError,
    NotJumpDiffusionProcessError,
    NullEngineError,
    PricingError,
)

logger = logging.getLogger(__name__)


class IterationState(str, Enum):
    ITERATING = "iterating"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class JumpParameters:
    """Scalars derived once per pricing call from a Merton-76 process."""

    jump_intensity: float
    jump_square_vol: float
    mu_plus_half_square_vol: float
    k: float
    lambda_: float
    variance: float
    t: float
    risk_free_rate: float
    rate_reference_date: date
    day_counter: DayCounter

    @property
    def poisson_mean(self) -> float:
        return self.lambda_ * self.t


@dataclass(frozen=True)
class Scenario:
    index: int
    rate: float
    vol: float
    risk_free_curve: FlatForward
    vol_surface: BlackConstantVol


@dataclass
class JumpDiffusionResults(EngineResults):
    iterations: int = 0
    last_contribution: float = 0.0
    weight_sum: float = 0.0
    contributions: Tuple[float, ...] = ()
    state: IterationState = IterationState.ITERATING


def extract_jump_parameters(process: StochasticProcess, exercise: Exercise) -> JumpParameters:
    if not isinstance(process, Merton76Process):
        raise NotJumpDiffusionProcessError(process)

    log_jump_vol = process.log_jump_vol.value
    jump_square_vol = log_jump_vol * log_jump_vol
    mu_plus_half_square_vol = process.log_jump_mean.value + 0.5 * jump_square_vol
    # mean relative jump size
    k = math.exp(mu_plus_half_square_vol) - 1.0
    jump_intensity = process.jump_intensity.value
    lambda_ = (k + 1.0) * jump_intensity

    maturity = exercise.last_date
    vol_surface = process.vol_surface
    # dummy strike
    variance = vol_surface.black_variance(maturity, 1.0)
    day_counter = vol_surface.day_counter
    t = day_counter.year_fraction(vol_surface.reference_date, maturity)
    if t <= 0.0:
        raise PricingError(
            f"exercise date {maturity} is not after the volatility reference date "
            f"{vol_surface.reference_date}"
        )
    discount = process.risk_free_curve.discount(maturity)
    if discount <= 0.0:
        raise PricingError(f"non-positive discount factor {discount} at {maturity}")

    return JumpParameters(
        jump_intensity=jump_intensity,
        jump_square_vol=jump_square_vol,
        mu_plus_half_square_vol=mu_plus_half_square_vol,
        k=k,
        lambda_=lambda_,
        variance=variance,
        t=t,
        risk_free_rate=-math.log(discount) / t,
        rate_reference_date=process.risk_free_curve.reference_date,
        day_counter=day_counter,
    )


def build_scenario(jumps: int, params: JumpParameters) -> Scenario:
    """Flat rate and volatility conditional on exactly ``jumps`` jumps."""

    total_variance = params.variance + jumps * params.jump_square_vol
    if not total_variance >= 0.0:
        raise InvalidScenarioError(
            f"invalid scenario variance {total_variance} for {jumps} jumps"
        )
    # constant vol/rate assumption, should be relaxed
    vol = math.sqrt(total_variance / params.t)
    rate = (
        params.risk_free_rate
        - params.jump_intensity * params.k
        + jumps * params.mu_plus_half_square_vol / params.t
    )
    reference = params.rate_reference_date
    return Scenario(
        index=jumps,
        rate=rate,
        vol=vol,
        risk_free_curve=FlatForward(rate, reference, params.day_counter),
        vol_surface=BlackConstantVol(vol, reference, params.day_counter),
    )


def relative_contribution(term: float, running_value: float) -> float:
    if running_value == 0.0:
        if term == 0.0:
            return 0.0
        raise InvalidScenarioError(
            f"undefined relative contribution: term {term} over a zero running value"
        )
    ratio = term / running_value
    if not math.isfinite(ratio):
        raise InvalidScenarioError(f"non-finite relative contribution {ratio}")
    return ratio


class JumpDiffusionEngine(Engine):
    """Prices a European option under a Merton-76 process.

    The base engine is reset and reused for every jump-count scenario, so it
    belongs to this engine for the lifetime of a ``calculate`` call.
    """

    def __init__(
        self,
        base_engine: Optional[DiffusionEngine],
        relative_accuracy: float = 1e-4,
        max_iterations: int = 100,
        weights: Optional[JumpCountWeights] = None,
    ) -> None:
        if base_engine is None:
            raise NullEngineError("JumpDiffusionEngine: null base engine")
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if not relative_accuracy >= 0.0:
            raise ValueError("relative_accuracy must be non-negative")
        self.base_engine = base_engine
        self.relative_accuracy = relative_accuracy
        self.max_iterations = max_iterations
        self.weights = weights or PoissonWeights()
        self.arguments = EngineArguments()
        self.results = JumpDiffusionResults()

    @classmethod
    def from_settings(
        cls,
        base_engine: Optional[DiffusionEngine],
        settings: EngineSettings,
    ) -> "JumpDiffusionEngine":
        return cls(
            base_engine,
            relative_accuracy=settings.relative_accuracy,
            max_iterations=settings.max_iterations,
        )

    @property
    def name(self) -> str:
        return f"jump_diffusion({self.base_engine.name})"

    def setup(self, payoff: Payoff, exercise: Exercise, process: StochasticProcess) -> None:
        self.arguments.payoff = payoff
        self.arguments.exercise = exercise
        self.arguments.process = process

    def calculate(self) -> None:
        self.results.reset()
        args = self.arguments
        params = extract_jump_parameters(args.process, args.exercise)
        process = args.process

        base = self.base_engine
        base.reset()
        base_args = base.arguments
        base_args.payoff = args.payoff
        base_args.exercise = args.exercise
        base_args.set_process(process)
        base.validate()

        accumulated = EngineResults()
        weight_sum = 0.0
        contributions = []
        last_contribution = 1.0
        state = IterationState.ITERATING
        jumps = 0

        while state is IterationState.ITERATING:
            scenario = build_scenario(jumps, params)
            base_args.risk_free_curve = scenario.risk_free_curve
            base_args.vol_surface = scenario.vol_surface
            base.validate()
            base.calculate()

            sub_value = base.results.value
            if not math.isfinite(sub_value):
                raise InvalidScenarioError(
                    f"base engine returned a non-finite value for {jumps} jumps"
                )
            weight = self.weights(jumps, params.poisson_mean)
            accumulated.accumulate(weight, base.results)
            weight_sum += weight

            last_contribution = relative_contribution(weight * sub_value, accumulated.value)
            contributions.append(last_contribution)
            logger.debug(
                "jumps=%d weight=%.6e rate=%.6f vol=%.6f value=%.6e contribution=%.6e",
                jumps,
                weight,
                scenario.rate,
                scenario.vol,
                sub_value,
                last_contribution,
            )

            jumps += 1
            if last_contribution <= self.relative_accuracy:
                state = IterationState.CONVERGED
            elif jumps >= self.max_iterations:
                state = IterationState.EXHAUSTED

        if state is IterationState.EXHAUSTED:
            logger.error(
                "jump diffusion mixture not converged after %d iterations "
                "(accuracy %.3e, last contribution %.3e, running value %.6e)",
                jumps,
                self.relative_accuracy,
                last_contribution,
                accumulated.value,
            )
            raise AccuracyNotReachedError(
                iterations=jumps,
                relative_accuracy=self.relative_accuracy,
                last_contribution=last_contribution,
                running_value=accumulated.value,
            )

        logger.info(
            "jump diffusion mixture converged in %d iterations: value=%.6f weight_sum=%.10f",
            jumps,
            accumulated.value,
            weight_sum,
        )
        results = self.results
        for name, value in accumulated.as_dict().items():
            setattr(results, name, value)
        results.iterations = jumps
        results.last_contribution = last_contribution
        results.weight_sum = weight_sum
        results.contributions = tuple(contributions)
        results.state = state
