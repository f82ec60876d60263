"""Pricing engine exports."""

from jump_engine.numerics.analytic import AnalyticEuropeanEngine
from jump_engine.numerics.base import (
    DiffusionArguments,
    DiffusionEngine,
    Engine,
    EngineArguments,
    EngineResults,
    EngineSettings,
)
from jump_engine.numerics.jump_diffusion import (
    IterationState,
    JumpDiffusionEngine,
    JumpDiffusionResults,
    JumpParameters,
    Scenario,
    build_scenario,
    extract_jump_parameters,
    relative_contribution,
)
from jump_engine.numerics.trees import BinomialEuropeanEngine
from jump_engine.numerics.weights import JumpCountWeights, PoissonWeights

__all__ = [
    "AnalyticEuropeanEngine",
    "BinomialEuropeanEngine",
    "DiffusionArguments",
    "DiffusionEngine",
    "Engine",
    "EngineArguments",
    "EngineResults",
    "EngineSettings",
    "IterationState",
    "JumpDiffusionEngine",
    "JumpDiffusionResults",
    "JumpParameters",
    "Scenario",
    "build_scenario",
    "extract_jump_parameters",
    "relative_contribution",
    "JumpCountWeights",
    "PoissonWeights",
]
