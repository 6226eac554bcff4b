"""Public package interface for the math-problem generators.

Importing this package gives you the catalogue helpers without having to know
the internal module layout.

Typical usage
-------------
>>> from mathgen import generate_problem, make_rng
>>> problem = generate_problem("addition", {"max_addend": 20}, rng=make_rng(7))
>>> problem.question
"""
from importlib.metadata import version as _version

from .errors import (
    ConfigurationError,
    InvalidParametersError,
    UnknownGeneratorError,
    UnknownPresetError,
)
from .evaluator import evaluate
from .generator import Generator
from .problem import Preset, Problem
from .registry import (
    get_generator,
    get_generators_by_category,
    generate_problem,
    generate_problems,
    generator_stats,
    list_generators,
    search_generators,
)
from .rng import make_rng

__all__ = [
    "Generator",
    "Problem",
    "Preset",
    "make_rng",
    "evaluate",
    "get_generator",
    "get_generators_by_category",
    "list_generators",
    "search_generators",
    "generator_stats",
    "generate_problem",
    "generate_problems",
    "InvalidParametersError",
    "ConfigurationError",
    "UnknownGeneratorError",
    "UnknownPresetError",
    "__version__",
]

try:
    __version__ = _version("mathgen")
except Exception:  # pragma: no cover – package not installed yet
    __version__ = "0.0.0"
