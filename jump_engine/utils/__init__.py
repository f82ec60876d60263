"""Utility exports."""

from jump_engine.utils.date import ACTUAL_360, ACTUAL_365_FIXED, DayCounter, year_fraction
from jump_engine.utils.errors import (
    AccuracyNotReachedError,
    ArgumentValidationError,
    InvalidScenarioError,
    NotJumpDiffusionProcessError,
    NullEngineError,
    PricingError,
)
from jump_engine.utils.types import OptionType, Quote

__all__ = [
    "ACTUAL_360",
    "ACTUAL_365_FIXED",
    "DayCounter",
    "year_fraction",
    "AccuracyNotReachedError",
    "ArgumentValidationError",
    "InvalidScenarioError",
    "NotJumpDiffusionProcessError",
    "NullEngineError",
    "PricingError",
    "OptionType",
    "Quote",
]
