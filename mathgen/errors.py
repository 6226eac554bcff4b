"""Exception types raised by the generators and the expression evaluator."""
from __future__ import annotations

__all__ = [
    "InvalidParametersError",
    "ConfigurationError",
    "UnsupportedConversionError",
    "ExpressionError",
    "MalformedExpressionError",
    "EvaluationDivisionByZero",
    "UnknownGeneratorError",
    "UnknownPresetError",
]


class InvalidParametersError(ValueError):
    """Raised before synthesis when a parameter set breaks one or more rules."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(f"Invalid parameters: {', '.join(self.errors)}")


class ConfigurationError(ValueError):
    """The enabled options leave nothing to generate."""


class UnsupportedConversionError(ConfigurationError):
    pass


class ExpressionError(ValueError):
    """Base class for evaluator failures."""


class MalformedExpressionError(ExpressionError):
    pass


class EvaluationDivisionByZero(ExpressionError, ZeroDivisionError):
    pass


class UnknownGeneratorError(KeyError):
    pass


class UnknownPresetError(KeyError):
    pass
