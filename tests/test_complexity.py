from __future__ import annotations

from mathgen.complexity import LevelRule, normalize_complexity
from mathgen.generators.equations import OneStepEquationParams
from mathgen.registry import get_generator

RULES = {
    "basic": LevelRule(caps={"max_solution": 10}),
    "advanced": LevelRule(
        floors={"max_solution": 20},
        defaults={"allow_negatives": True, "include_word_problems": True},
    ),
}


def test_caps_always_apply() -> None:
    params = OneStepEquationParams(max_solution=25, complexity_level="basic")
    out = normalize_complexity(params, RULES, explicit={"max_solution"})
    assert out.max_solution == 10


def test_floors_skip_explicit_keys() -> None:
    params = OneStepEquationParams(max_solution=12, complexity_level="advanced")
    assert normalize_complexity(params, RULES).max_solution == 20
    assert normalize_complexity(params, RULES, explicit={"max_solution"}).max_solution == 12


def test_explicit_booleans_win() -> None:
    params = OneStepEquationParams(
        allow_negatives=False, include_word_problems=False, complexity_level="advanced"
    )
    out = normalize_complexity(params, RULES, explicit={"allow_negatives"})
    assert out.allow_negatives is False
    assert out.include_word_problems is True


def test_normalization_is_idempotent() -> None:
    params = OneStepEquationParams(max_solution=5, complexity_level="advanced")
    once = normalize_complexity(params, RULES)
    assert normalize_complexity(once, RULES) == once


def test_unknown_level_is_left_for_validation() -> None:
    params = OneStepEquationParams(complexity_level="expert")
    assert normalize_complexity(params, RULES) is params
    violations = get_generator("one-step-equations").check({"complexity_level": "expert"})
    assert violations == ["Parameter 'complexity_level' must be one of: basic, intermediate, advanced"]


def test_generator_treats_preset_keys_as_explicit() -> None:
    generator = get_generator("two-step-equations")
    params = generator.resolve_params(preset="advanced-two-step")
    # The preset sets max_solution=15 itself, so the advanced floor does not move it.
    assert params.max_solution == 15
    assert params.include_checking is False


def test_order_of_operations_levels() -> None:
    generator = get_generator("order-of-operations")
    assert generator.resolve_params({"complexity_level": "basic", "max_number": 50}).max_number == 10
    assert generator.resolve_params({"complexity_level": "advanced"}).include_exponents is True
    explicit = generator.resolve_params({"complexity_level": "advanced", "include_exponents": False})
    assert explicit.include_exponents is False
