"""Core pricing API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional
from uuid import uuid4

from jump_engine.models.base import StochasticProcess
from jump_engine.numerics.analytic import AnalyticEuropeanEngine
from jump_engine.numerics.base import Engine, EngineSettings
from jump_engine.numerics.jump_diffusion import JumpDiffusionEngine, JumpDiffusionResults
from jump_engine.products.vanilla import EuropeanOption
from jump_engine.risk.greeks import GreekRequest, GreeksCalculator


@dataclass(frozen=True)
class PricingSettings:
    engine_settings: EngineSettings = EngineSettings()
    compute_greeks: bool = True
    greek_request: Optional[GreekRequest] = None
    diagnostics: bool = True


@dataclass(frozen=True)
class PricingContext:
    option: EuropeanOption
    process: StochasticProcess
    engine: Engine
    settings: PricingSettings
    run_id: str = field(default_factory=lambda: str(uuid4()))


@dataclass(frozen=True)
class PricingResult:
    price: float
    greeks: Dict[str, float]
    metrics: Dict[str, float]
    diagnostics: Dict[str, str]
    run_id: str


def default_engine(settings: EngineSettings) -> JumpDiffusionEngine:
    return JumpDiffusionEngine.from_settings(AnalyticEuropeanEngine(), settings)


def price(
    option: EuropeanOption,
    process: StochasticProcess,
    engine: Optional[Engine] = None,
    settings: Optional[PricingSettings] = None,
) -> PricingResult:
    """Price a European option and repackage the engine results."""

    settings = settings or PricingSettings()
    engine = engine or default_engine(settings.engine_settings)
    context = PricingContext(
        option=option,
        process=process,
        engine=engine,
        settings=settings,
    )

    results = engine.price(option, process)

    metrics: Dict[str, float] = {}
    if isinstance(results, JumpDiffusionResults):
        metrics = {
            "iterations": float(results.iterations),
            "last_contribution": results.last_contribution,
            "weight_sum": results.weight_sum,
        }

    greeks: Dict[str, float] = {}
    if settings.compute_greeks:
        request = settings.greek_request or GreekRequest.default()
        if request.method == "bump":
            greeks = GreeksCalculator().calculate(context, request)
        else:
            analytic = results.as_dict()
            greeks = {k: float(analytic[k]) for k in request.greeks if k in analytic}

    diagnostics: Dict[str, str] = {}
    if settings.diagnostics:
        diagnostics = {
            "engine": engine.name,
            "process": process.name,
            "run_id": context.run_id,
        }
        if isinstance(results, JumpDiffusionResults):
            diagnostics["state"] = results.state.value

    return PricingResult(
        price=float(results.value),
        greeks=greeks,
        metrics=metrics,
        diagnostics=diagnostics,
        run_id=context.run_id,
    )
