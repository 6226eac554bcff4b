"""Topic generators, collected in catalogue order."""
from __future__ import annotations

from ..generator import Generator
from . import arithmetic, equations, fractions, measurement, money, order_of_operations

__all__ = ["ALL_GENERATORS"]

ALL_GENERATORS: tuple[Generator, ...] = (
    *arithmetic.GENERATORS,
    order_of_operations.GENERATOR,
    *equations.GENERATORS,
    *fractions.GENERATORS,
    *measurement.GENERATORS,
    money.GENERATOR,
)
