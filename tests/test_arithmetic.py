from __future__ import annotations

import logging
from typing import Any

import pytest

from mathgen.errors import ConfigurationError
from mathgen.generators.arithmetic import (
    AdditionParams,
    MixedOperationsParams,
    requires_borrowing,
    requires_carrying,
    synthesize_addition,
    synthesize_mixed_operations,
)
from mathgen.registry import get_generator
from mathgen.rng import make_rng

SEEDS = range(60)


def test_carry_and_borrow_detection() -> None:
    assert requires_carrying([15, 7])
    assert not requires_carrying([12, 31])
    assert requires_carrying([-15, 7])
    assert requires_borrowing(52, 17)
    assert not requires_borrowing(58, 17)


def test_addition_answer_is_the_sum() -> None:
    generator = get_generator("addition")
    for seed in SEEDS:
        problem = generator.generate({"addend_count": 3}, rng=make_rng(seed))
        addends = problem.metadata["addends"]
        assert len(addends) == 3
        assert int(problem.answer) == sum(addends)
        assert problem.steps[-1] == f"= {problem.answer}"


def test_addition_without_carrying() -> None:
    generator = get_generator("addition")
    for seed in SEEDS:
        problem = generator.generate(preset="no-carrying", rng=make_rng(seed))
        assert not requires_carrying(problem.metadata["addends"])


def test_addition_fallback_when_carrying_is_unavoidable(caplog: Any) -> None:
    params = AdditionParams(min_addend=95, max_addend=99, addend_count=3, allow_carrying=False)
    with caplog.at_level(logging.WARNING, logger="mathgen"):
        problem = synthesize_addition(params, make_rng(1))
    assert not requires_carrying(problem.metadata["addends"])
    assert "single digits" in caplog.text


def test_addition_with_negatives_spans_both_signs() -> None:
    generator = get_generator("addition")
    seen = set()
    for seed in SEEDS:
        problem = generator.generate(preset="with-negatives", rng=make_rng(seed))
        seen.update(a < 0 for a in problem.metadata["addends"])
        assert "(-" in problem.question or all(a >= 0 for a in problem.metadata["addends"])
    assert seen == {True, False}


def test_subtraction_never_negative_by_default() -> None:
    generator = get_generator("subtraction")
    for seed in SEEDS:
        assert int(generator.generate(rng=make_rng(seed)).answer) >= 0


def test_subtraction_contradictory_ranges_still_non_negative() -> None:
    generator = get_generator("subtraction")
    overrides = {"minuend_min": 5, "minuend_max": 10, "subtrahend_min": 30, "subtrahend_max": 40}
    for seed in range(10):
        assert int(generator.generate(overrides, rng=make_rng(seed)).answer) >= 0


def test_subtraction_without_borrowing() -> None:
    generator = get_generator("subtraction")
    for seed in SEEDS:
        problem = generator.generate(preset="no-borrowing", rng=make_rng(seed))
        assert problem.metadata["requires_borrowing"] is False


def test_multiplication_product() -> None:
    problem = get_generator("multiplication").generate(
        {"factor1_min": 7, "factor1_max": 7, "factor2_min": 8, "factor2_max": 8}, rng=make_rng(0)
    )
    assert problem.question == "7 × 8 = ?"
    assert problem.question_latex == "7 \\times 8 = \\square"
    assert problem.answer == "56"


def test_exact_division() -> None:
    generator = get_generator("division")
    for seed in SEEDS:
        meta = generator.generate(rng=make_rng(seed)).metadata
        assert meta["quotient"] * meta["divisor"] == meta["dividend"]
        assert meta["remainder"] == 0
        assert meta["has_remainder"] is False
        assert 10 <= meta["dividend"] <= 144


def test_division_with_remainders_formats_answer() -> None:
    generator = get_generator("division")
    for seed in SEEDS:
        problem = generator.generate(preset="with-remainders", rng=make_rng(seed))
        meta = problem.metadata
        assert meta["quotient"] * meta["divisor"] + meta["remainder"] == meta["dividend"]
        if meta["has_remainder"]:
            assert problem.answer == f"{meta['quotient']} R {meta['remainder']}"
            assert "\\text{ R }" in problem.answer_latex


def test_mixed_operations_left_to_right() -> None:
    params = MixedOperationsParams(operation_count=3, include_division=True)
    for seed in SEEDS:
        problem = synthesize_mixed_operations(params, make_rng(seed))
        numbers, ops = problem.metadata["numbers"], problem.metadata["operations"]
        running = numbers[0]
        for op, operand in zip(ops, numbers[1:]):
            running = {
                "+": running + operand,
                "-": running - operand,
                "×": running * operand,
                "÷": running // operand,
            }[op]
        assert problem.answer == str(running)
        assert len(problem.steps) == len(ops) + 2


def test_mixed_operations_requires_an_operation() -> None:
    params = MixedOperationsParams(
        include_addition=False, include_subtraction=False, include_multiplication=False
    )
    with pytest.raises(ConfigurationError, match="At least one operation type must be selected"):
        synthesize_mixed_operations(params, make_rng(0))
