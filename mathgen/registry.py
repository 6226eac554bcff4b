"""Lookup, search and batch helpers over the generator catalogue."""
from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Any, Mapping

from .errors import UnknownGeneratorError
from .generator import Generator
from .generators import ALL_GENERATORS
from .problem import Problem

logger = logging.getLogger(__name__)

__all__ = [
    "CATEGORIES",
    "get_generator",
    "get_generators_by_category",
    "list_generators",
    "search_generators",
    "generator_stats",
    "generate_problem",
    "generate_problems",
]

CATEGORIES: dict[str, dict[str, str]] = {
    "basic-operations": {
        "name": "Basic Operations",
        "description": "Addition, subtraction, multiplication, division and order of operations",
    },
    "pre-algebra": {
        "name": "Pre-Algebra",
        "description": "One-step and two-step equations",
    },
    "algebra": {
        "name": "Algebra",
        "description": "Linear equations",
    },
    "fractions-decimals": {
        "name": "Fractions & Decimals",
        "description": "Reading, comparing, simplifying and adding fractions",
    },
    "measurement-units": {
        "name": "Measurement & Units",
        "description": "Unit conversions within and between measurement systems",
    },
    "money-finance": {
        "name": "Money & Finance",
        "description": "Making change, tax and shopping problems",
    },
}

_BY_KEY: dict[str, Generator] = {generator.key: generator for generator in ALL_GENERATORS}


def get_generator(key: str) -> Generator:
    try:
        return _BY_KEY[key]
    except KeyError as exc:
        raise UnknownGeneratorError(f"Unknown generator: {key}") from exc


def get_generators_by_category(category: str) -> list[Generator]:
    return [generator for generator in ALL_GENERATORS if generator.category == category]


def list_generators() -> list[dict[str, Any]]:
    """Short catalogue entries, one per generator."""
    return [
        {
            "key": generator.key,
            "name": generator.name,
            "description": generator.description,
            "category": generator.category,
            "difficulty": generator.difficulty,
            "tags": list(generator.tags),
            "grade_level": generator.grade_level,
        }
        for generator in ALL_GENERATORS
    ]


def search_generators(query: str) -> list[Generator]:
    """Generators whose name or description contains ``query``, ignoring case."""
    needle = query.strip().lower()
    return [
        generator
        for generator in ALL_GENERATORS
        if needle in generator.name.lower() or needle in generator.description.lower()
    ]


def generator_stats() -> dict[str, Any]:
    by_category = Counter(generator.category for generator in ALL_GENERATORS)
    by_difficulty = Counter(generator.difficulty for generator in ALL_GENERATORS)
    return {
        "total_generators": len(ALL_GENERATORS),
        "categories": {
            category: {**details, "count": by_category.get(category, 0)}
            for category, details in CATEGORIES.items()
        },
        "difficulties": dict(by_difficulty),
    }


def generate_problem(
    key: str,
    overrides: Mapping[str, Any] | None = None,
    *,
    rng: random.Random | None = None,
    preset: str | None = None,
) -> Problem:
    return get_generator(key).generate(overrides, rng=rng, preset=preset)


def generate_problems(
    key: str,
    count: int,
    overrides: Mapping[str, Any] | None = None,
    *,
    rng: random.Random | None = None,
    preset: str | None = None,
) -> list[Problem]:
    return get_generator(key).generate_many(count, overrides, rng=rng, preset=preset)
