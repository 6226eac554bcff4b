from __future__ import annotations

from fractions import Fraction

import pytest

from mathgen.errors import ConfigurationError, InvalidParametersError
from mathgen.generators.fractions import (
    BasicFractionParams,
    ComparingFractionParams,
    EquivalentFractionParams,
    FractionAdditionParams,
    random_fraction,
    simplify,
    synthesize_basic_fraction,
    synthesize_comparing_fraction,
    synthesize_equivalent_fraction,
    synthesize_fraction_addition,
)
from mathgen.registry import get_generator
from mathgen.rng import make_rng

SEEDS = range(60)


def _fraction(record: dict[str, int]) -> Fraction:
    return Fraction(record["numerator"], record["denominator"])


def test_simplify() -> None:
    assert simplify(6, 8) == (3, 4)
    assert simplify(5, 7) == (5, 7)


def test_random_fraction_respects_switches() -> None:
    params = BasicFractionParams(max_numerator=9, max_denominator=10)
    for seed in SEEDS:
        n, d = random_fraction(params, make_rng(seed))
        assert 0 < n < d
        assert simplify(n, d) == (n, d)


def test_basic_fraction_answers_match_the_fraction() -> None:
    generator = get_generator("basic-fractions")
    for seed in SEEDS:
        problem = generator.generate(rng=make_rng(seed))
        fraction = problem.metadata["fraction"]
        if problem.metadata["problem_type"] in ("identify", "write"):
            assert problem.answer == f"{fraction['numerator']}/{fraction['denominator']}"
        else:
            assert problem.answer == f"{fraction['numerator']} parts shaded out of {fraction['denominator']}"


def test_basic_compare_symbol() -> None:
    params = BasicFractionParams(include_identify=False, include_shade=False, include_write=False, include_compare=True)
    for seed in SEEDS:
        problem = synthesize_basic_fraction(params, make_rng(seed))
        left, right = (_fraction(f) for f in problem.metadata["fractions"])
        expected = ">" if left > right else "<" if left < right else "="
        assert problem.answer == expected


def test_basic_fraction_rule() -> None:
    assert get_generator("basic-fractions").check({"max_numerator": 20, "max_denominator": 10}) == [
        "Maximum numerator must not exceed maximum denominator when improper fractions are disallowed"
    ]
    assert get_generator("basic-fractions").check(
        {"max_numerator": 20, "max_denominator": 10, "allow_improper": True}
    ) == []


def test_basic_fraction_needs_a_problem_type() -> None:
    params = BasicFractionParams(include_identify=False, include_shade=False, include_write=False)
    with pytest.raises(ConfigurationError, match="At least one problem type must be enabled"):
        synthesize_basic_fraction(params, make_rng(0))


def test_missing_terms_are_equivalent() -> None:
    generator = get_generator("equivalent-fractions")
    for seed in SEEDS:
        problem = generator.generate(rng=make_rng(seed))
        meta = problem.metadata
        if meta["operation"] == "simplify-fraction":
            original, simplest = _fraction(meta["original_fraction"]), _fraction(meta["simplified_fraction"])
            assert original == simplest
            assert problem.answer == f"{simplest.numerator}/{simplest.denominator}"
            continue
        original, target = _fraction(meta["original_fraction"]), _fraction(meta["target_fraction"])
        assert original == target
        if meta["operation"] == "find-missing-numerator":
            assert problem.answer == str(meta["target_fraction"]["numerator"])
            assert meta["target_fraction"]["denominator"] <= max(48, 2 * meta["original_fraction"]["denominator"])
        else:
            assert problem.answer == str(meta["target_fraction"]["denominator"])


def test_identify_equivalent_marks_the_right_option() -> None:
    generator = get_generator("equivalent-fractions")
    for seed in SEEDS:
        problem = generator.generate(preset="multiple-choice", rng=make_rng(seed))
        meta = problem.metadata
        index = "ABCD".index(meta["correct_option"])
        chosen = meta["options"][index]
        assert _fraction(chosen) == _fraction(meta["base_fraction"])
        assert problem.answer == f"{meta['correct_option']}) {chosen['numerator']}/{chosen['denominator']}"
        others = [o for i, o in enumerate(meta["options"]) if i != index]
        assert all(_fraction(o) != _fraction(meta["base_fraction"]) for o in others)


def test_equivalent_needs_a_problem_type() -> None:
    params = EquivalentFractionParams(
        include_find_missing_numerator=False, include_find_missing_denominator=False, include_simplify=False
    )
    with pytest.raises(ConfigurationError):
        synthesize_equivalent_fraction(params, make_rng(0))


def test_two_fraction_comparison_is_correct() -> None:
    generator = get_generator("comparing-fractions")
    for seed in SEEDS:
        problem = generator.generate(rng=make_rng(seed))
        left, right = (_fraction(f) for f in problem.metadata["fractions"])
        assert left != right
        assert problem.answer == (">" if left > right else "<")
        assert problem.steps[-1].startswith("\\text{Therefore: }")


def test_like_denominator_preset() -> None:
    generator = get_generator("comparing-fractions")
    for seed in SEEDS:
        problem = generator.generate(preset="like-denominators", rng=make_rng(seed))
        assert problem.metadata["like_denominators"] is True
        assert problem.steps[1] == "\\text{Same denominators, compare numerators:}"


def test_decimal_steps_when_work_is_hidden() -> None:
    params = ComparingFractionParams(include_like_denominators=False, show_work_steps=False)
    problem = synthesize_comparing_fraction(params, make_rng(5))
    if not problem.metadata["like_denominators"]:
        assert problem.steps[1] == "\\text{Convert to decimals:}"


def test_ordering_is_ascending() -> None:
    generator = get_generator("comparing-fractions")
    for seed in SEEDS:
        problem = generator.generate(preset="ordering", rng=make_rng(seed))
        ordered = [_fraction(f) for f in problem.metadata["sorted_fractions"]]
        assert ordered == sorted(_fraction(f) for f in problem.metadata["original_fractions"])


def test_fraction_against_decimal() -> None:
    params = ComparingFractionParams(include_two_fractions=False, include_fraction_decimal=True)
    for seed in SEEDS:
        problem = synthesize_comparing_fraction(params, make_rng(seed))
        left = _fraction(problem.metadata["fraction"])
        right = Fraction(problem.metadata["decimal"])
        expected = ">" if left > right else "<" if left < right else "="
        assert problem.answer == expected


def test_comparing_needs_a_comparison_type() -> None:
    with pytest.raises(ConfigurationError, match="At least one comparison type must be enabled"):
        synthesize_comparing_fraction(ComparingFractionParams(include_two_fractions=False), make_rng(0))


def test_fraction_addition_sum() -> None:
    generator = get_generator("fraction-addition")
    for seed in SEEDS:
        problem = generator.generate(rng=make_rng(seed))
        first, second = (_fraction(f) for f in problem.metadata["fractions"])
        total = first + second
        assert problem.answer == f"{total.numerator}/{total.denominator}"


def test_fraction_addition_common_denominator() -> None:
    params = FractionAdditionParams(common_denominators=True, require_simplification=False)
    for seed in SEEDS:
        problem = synthesize_fraction_addition(params, make_rng(seed))
        first, second = problem.metadata["fractions"]
        assert first["denominator"] == second["denominator"]
        assert problem.answer == f"{first['numerator'] + second['numerator']}/{first['denominator']}"


def test_fraction_addition_mixed_numbers() -> None:
    generator = get_generator("fraction-addition")
    for seed in SEEDS:
        problem = generator.generate(preset="mixed-number-answers", rng=make_rng(seed))
        result = _fraction(problem.metadata["answer"])
        whole, rest = divmod(result.numerator, result.denominator)
        if result.numerator <= result.denominator:
            continue
        if rest == 0:
            assert problem.answer == str(whole)
        else:
            assert problem.answer == f"{whole} {rest}/{result.denominator}"


def test_preset_validation_errors_are_aggregated() -> None:
    with pytest.raises(InvalidParametersError) as exc:
        get_generator("fraction-addition").generate({"max_numerator": 0, "max_denominator": 1})
    assert len(exc.value.errors) == 2
