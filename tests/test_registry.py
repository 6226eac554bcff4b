from __future__ import annotations

import logging
from typing import Any

import pytest

import mathgen
from mathgen import constants
from mathgen.errors import UnknownGeneratorError, UnknownPresetError
from mathgen.generator import Generator
from mathgen.generators import ALL_GENERATORS
from mathgen.problem import Preset
from mathgen.registry import (
    CATEGORIES,
    generate_problem,
    generate_problems,
    generator_stats,
    get_generator,
    get_generators_by_category,
    list_generators,
    search_generators,
)
from mathgen.rng import make_rng

KEYS = [
    "addition",
    "subtraction",
    "multiplication",
    "division",
    "mixed-operations",
    "order-of-operations",
    "linear-equations",
    "one-step-equations",
    "two-step-equations",
    "basic-fractions",
    "equivalent-fractions",
    "comparing-fractions",
    "fraction-addition",
    "unit-conversion",
    "metric-imperial",
    "making-change",
]


def test_catalogue_order_and_keys() -> None:
    assert [entry["key"] for entry in list_generators()] == KEYS


def test_every_generator_has_a_known_category() -> None:
    assert {g.category for g in ALL_GENERATORS} == set(CATEGORIES)


def test_lookup() -> None:
    assert get_generator("division").name == "Division"
    with pytest.raises(UnknownGeneratorError) as exc:
        get_generator("long-division")
    assert exc.value.args[0] == "Unknown generator: long-division"


def test_unknown_generator_is_a_key_error() -> None:
    with pytest.raises(KeyError):
        generate_problem("calculus")


def test_by_category() -> None:
    keys = [g.key for g in get_generators_by_category("pre-algebra")]
    assert keys == ["one-step-equations", "two-step-equations"]
    assert get_generators_by_category("geometry") == []


def test_search_is_case_insensitive() -> None:
    keys = {g.key for g in search_generators("FRACTION")}
    assert {"basic-fractions", "equivalent-fractions", "comparing-fractions", "fraction-addition"} <= keys
    assert search_generators("no such thing") == []


def test_stats() -> None:
    stats = generator_stats()
    assert stats["total_generators"] == len(KEYS)
    assert stats["categories"]["basic-operations"]["count"] == 6
    assert stats["categories"]["money-finance"]["count"] == 1
    assert sum(stats["difficulties"].values()) == len(KEYS)


def test_list_entries_have_the_short_fields() -> None:
    entry = list_generators()[0]
    assert set(entry) == {"key", "name", "description", "category", "difficulty", "tags", "grade_level"}


def test_info() -> None:
    info = get_generator("addition").info()
    assert info["default_parameters"]["addend_count"] == 2
    assert info["parameters"]["allow_carrying"]["type"] == "boolean"
    assert {p["id"] for p in info["presets"]} >= {"no-carrying", "with-negatives"}


def test_generate_many_sets_batch_identity() -> None:
    problems = generate_problems("two-step-equations", 3, rng=make_rng(5))
    assert [p.id for p in problems] == ["two-step-equations-1", "two-step-equations-2", "two-step-equations-3"]
    for problem in problems:
        assert problem.generator == "Two-Step Equations"
        assert problem.category == "pre-algebra"
        assert problem.difficulty == "medium"


def test_single_generation_leaves_identity_unset() -> None:
    problem = generate_problem("multiplication", rng=make_rng(1))
    assert problem.id is None
    assert "id" not in problem.to_dict()
    assert problem.metadata["difficulty"] == get_generator("multiplication").difficulty
    assert problem.metadata["estimated_time"]


def test_generate_many_rejects_negative_counts() -> None:
    with pytest.raises(ValueError):
        generate_problems("addition", -1)
    assert generate_problems("addition", 0) == []


def test_unknown_preset() -> None:
    with pytest.raises(UnknownPresetError):
        generate_problem("addition", preset="calculus")


def test_preset_with_unknown_keys_warns() -> None:
    generator = Generator(
        key="demo",
        name="Demo",
        description="",
        category="basic-operations",
        params_type=get_generator("addition").params_type,
        synthesize=get_generator("addition").synthesize,
        presets=(Preset("odd", "Odd", "", {"max_addend": 9, "colour": "red"}),),
    )
    with pytest.warns(UserWarning, match="colour"):
        problem = generator.generate(preset="odd", rng=make_rng(0))
    assert max(problem.metadata["addends"]) <= 9


def test_example_falls_back_to_a_placeholder(caplog: Any) -> None:
    base = get_generator("addition")
    broken = Generator(
        key="broken",
        name="Broken",
        description="",
        category="basic-operations",
        params_type=base.params_type,
        synthesize=base.synthesize,
        rules=lambda params: ["always wrong"],
    )
    with caplog.at_level(logging.WARNING, logger="mathgen"):
        problem = broken.example(make_rng(0))
    assert problem.question == "Example problem"
    assert problem.steps == ["Answer"]
    assert "always wrong" in caplog.text


def test_example_uses_the_defaults() -> None:
    problem = get_generator("fraction-addition").example(make_rng(3))
    assert problem.question.endswith("= ?")


def test_package_exports() -> None:
    assert mathgen.get_generator is get_generator
    assert isinstance(mathgen.__version__, str)


def test_constant_exports_resolve() -> None:
    assert all(hasattr(constants, name) for name in constants.__all__)
    assert "DIFFICULTIES" not in constants.__all__
