"""Jump-diffusion mixture pricing engine."""

from jump_engine.api import PricingContext, PricingResult, PricingSettings, price

__all__ = [
    "PricingContext",
    "PricingResult",
    "PricingSettings",
    "price",
]
