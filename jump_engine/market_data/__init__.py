"""Market data exports."""

from jump_engine.market_data.curves import Curve, FlatForward, ShiftedCurve, ZeroCurve
from jump_engine.market_data.surfaces import (
    BlackConstantVol,
    BlackVolSurface,
    ShiftedVolSurface,
    SmileVolSurface,
)

__all__ = [
    "Curve",
    "FlatForward",
    "ShiftedCurve",
    "ZeroCurve",
    "BlackVolSurface",
    "BlackConstantVol",
    "ShiftedVolSurface",
    "SmileVolSurface",
]
