"""Greek calculation exports."""

from jump_engine.risk.greeks import GreekRequest, GreeksCalculator

__all__ = [
    "GreekRequest",
    "GreeksCalculator",
]
