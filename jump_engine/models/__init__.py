"""Process exports."""

from jump_engine.models.base import StochasticProcess
from jump_engine.models.black_scholes import BlackScholesProcess
from jump_engine.models.merton import Merton76Process

__all__ = [
    "StochasticProcess",
    "BlackScholesProcess",
    "Merton76Process",
]
