"""Custom errors for the pricing engine."""

from __future__ import annotations


class PricingError(RuntimeError):
    pass


class NotJumpDiffusionProcessError(PricingError, TypeError):
    def __init__(self, process: object) -> None:
        super().__init__(f"not a jump diffusion process: {type(process).__name__}")
        self.process = process


class NullEngineError(PricingError, ValueError):
    pass


class ArgumentValidationError(PricingError, ValueError):
    pass


class InvalidScenarioError(PricingError, ArithmeticError):
    pass


class AccuracyNotReachedError(PricingError):
    """Raised when the scenario mixture exhausts its iteration cap."""

    def __init__(
        self,
        iterations: int,
        relative_accuracy: float,
        last_contribution: float,
        running_value: float,
    ) -> None:
        self.iterations = iterations
        self.relative_accuracy = relative_accuracy
        self.last_contribution = last_contribution
        self.running_value = running_value
        super().__init__(
            f"{iterations} iterations have been not enough to reach the required "
            f"{relative_accuracy:.6e} accuracy. The last addendum was "
            f"{last_contribution:.6e} while the running sum was {running_value:.6e}"
        )
