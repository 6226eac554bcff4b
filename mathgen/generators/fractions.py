"""Fraction generators: reading, equivalence, comparison and addition.

Exact fraction arithmetic goes through SymPy (``Rational``, ``igcd`` and
``ilcm``) so comparisons never depend on floating-point ties.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

from ..constants import FRACTION_COMPARE_ATTEMPTS, MAX_ATTEMPTS
from ..errors import ConfigurationError
from ..formatting import format_decimal, frac, frac_latex, text
from ..generator import Generator
from ..problem import Preset, Problem
from ..rng import chance, pick_enabled, rand_decimal, rand_int, shuffled
from ..schema import boolean, number

logger = logging.getLogger(__name__)

__all__ = [
    "BasicFractionParams",
    "EquivalentFractionParams",
    "ComparingFractionParams",
    "FractionAdditionParams",
    "simplify",
    "GENERATORS",
]

Fraction = tuple[int, int]

LIKE_DENOMINATOR_CHANCE = 0.4
ORDERING_ATTEMPTS = 20
TIMES = r"\times"
DIVIDE = r"\div"


def simplify(numerator: int, denominator: int) -> Fraction:
    from sympy import igcd

    divisor = igcd(numerator, denominator)
    return numerator // divisor, denominator // divisor


def _value(fraction: Fraction) -> Any:
    from sympy import Rational

    return Rational(*fraction)


def _text(fraction: Fraction) -> str:
    return frac(*fraction)


def _latex(fraction: Fraction) -> str:
    return frac_latex(*fraction)


def _scaled(fraction: Fraction, operator: str, factor: int) -> str:
    return frac_latex(f"{fraction[0]} {operator} {factor}", f"{fraction[1]} {operator} {factor}")


def _as_dict(fraction: Fraction) -> dict[str, int]:
    return {"numerator": fraction[0], "denominator": fraction[1]}


def _decimal(fraction: Fraction) -> str:
    return f"{fraction[0] / fraction[1]:.3f}"


def _symbol(left: Any, right: Any) -> str:
    if left > right:
        return ">"
    if left < right:
        return "<"
    return "="


_WORDS = {">": "greater than", "<": "less than", "=": "equal to"}


def _require(kind: str | None, message: str) -> str:
    if kind is None:
        raise ConfigurationError(message)
    return kind


# ---------------------------------------------------------------------------
# Basic fractions
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class BasicFractionParams:
    max_numerator: int = number(12, label="Maximum Numerator", minimum=1, maximum=50)
    max_denominator: int = number(12, label="Maximum Denominator", minimum=2, maximum=50)
    include_identify: bool = boolean(True, label="Identify Fractions")
    include_shade: bool = boolean(True, label="Shade Fractions")
    include_write: bool = boolean(True, label="Write Fractions")
    include_compare: bool = boolean(False, label="Compare Fractions")
    allow_improper: bool = boolean(False, label="Allow Improper Fractions")
    allow_whole_numbers: bool = boolean(False, label="Allow Whole Numbers")
    require_simplified: bool = boolean(True, label="Require Simplified Form")


def random_fraction(params: BasicFractionParams, rng: random.Random) -> Fraction:
    """Draw a fraction honouring the improper/whole/simplified switches."""
    for _ in range(MAX_ATTEMPTS):
        denominator = rand_int(rng, 2, params.max_denominator)
        if params.allow_improper:
            numerator = rand_int(rng, 1, params.max_numerator)
        else:
            numerator = rand_int(rng, 1, min(params.max_numerator, denominator - 1))
        if not params.allow_whole_numbers and numerator % denominator == 0:
            continue
        if params.require_simplified:
            return simplify(numerator, denominator)
        return numerator, denominator
    logger.warning("No fraction matched the settings after %d attempts; using 1/2", MAX_ATTEMPTS)
    return 1, 2


def _identify(fraction: Fraction) -> Problem:
    n, d = fraction
    return Problem(
        question=f"What fraction represents {n} out of {d} parts?",
        question_latex=f"{text('What fraction represents ')} {n} {text(' out of ')} {d} {text(' parts?')}",
        answer=_text(fraction),
        answer_latex=_latex(fraction),
        steps=[f"{text('Parts used: ')} {n}", f"{text('Total parts: ')} {d}", f"{text('Fraction: ')} {_latex(fraction)}"],
        metadata={"operation": "identify-fraction", "problem_type": "identify", "fraction": _as_dict(fraction)},
    )


def _shade(fraction: Fraction) -> Problem:
    n, d = fraction
    return Problem(
        question=f"Shade {_text(fraction)} of the shape",
        question_latex=f"{text('Shade ')} {_latex(fraction)} {text(' of the shape')}",
        answer=f"{n} parts shaded out of {d}",
        answer_latex=text(f"{n} parts shaded out of {d}"),
        steps=[
            f"{text('Total parts needed: ')} {d}",
            f"{text('Parts to shade: ')} {n}",
            text(f"Shade {n} out of {d} parts"),
        ],
        metadata={"operation": "shade-fraction", "problem_type": "shade", "fraction": _as_dict(fraction)},
    )


def _write(fraction: Fraction) -> Problem:
    n, d = fraction
    return Problem(
        question=f"Write the fraction for {n} out of {d} equal parts",
        question_latex=f"{text('Write the fraction for ')} {n} {text(' out of ')} {d} {text(' equal parts')}",
        answer=_text(fraction),
        answer_latex=_latex(fraction),
        steps=[
            f"{text('Numerator (top): ')} {n}",
            f"{text('Denominator (bottom): ')} {d}",
            f"{text('Fraction: ')} {_latex(fraction)}",
        ],
        metadata={"operation": "write-fraction", "problem_type": "write", "fraction": _as_dict(fraction)},
    )


def _compare_pair(params: BasicFractionParams, rng: random.Random) -> Problem:
    first = random_fraction(params, rng)
    second = random_fraction(params, rng)
    for _ in range(MAX_ATTEMPTS):
        if second != first:
            break
        second = random_fraction(params, rng)
    symbol = _symbol(_value(first), _value(second))
    return Problem(
        question=f"Compare: {_text(first)} ___ {_text(second)}",
        question_latex=f"{text('Compare: ')} {_latex(first)} {text(' ___ ')} {_latex(second)}",
        answer=symbol,
        answer_latex=symbol,
        steps=[
            f"{_latex(first)} = {_decimal(first)}",
            f"{_latex(second)} = {_decimal(second)}",
            f"{_latex(first)} {symbol} {_latex(second)}",
        ],
        metadata={
            "operation": "compare-fractions",
            "problem_type": "compare",
            "fractions": [_as_dict(first), _as_dict(second)],
            "comparison": _WORDS[symbol],
        },
    )


def synthesize_basic_fraction(params: BasicFractionParams, rng: random.Random) -> Problem:
    kind = _require(
        pick_enabled(
            rng,
            [
                ("identify", params.include_identify),
                ("shade", params.include_shade),
                ("write", params.include_write),
                ("compare", params.include_compare),
            ],
        ),
        "At least one problem type must be enabled",
    )
    if kind == "compare":
        return _compare_pair(params, rng)
    builder = {"identify": _identify, "shade": _shade, "write": _write}[kind]
    return builder(random_fraction(params, rng))


def _basic_rules(params: BasicFractionParams) -> list[str]:
    if not params.allow_improper and params.max_numerator > params.max_denominator:
        return ["Maximum numerator must not exceed maximum denominator when improper fractions are disallowed"]
    return []


# ---------------------------------------------------------------------------
# Equivalent fractions
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class EquivalentFractionParams:
    max_numerator: int = number(24, label="Maximum Numerator", minimum=1, maximum=100)
    max_denominator: int = number(24, label="Maximum Denominator", minimum=2, maximum=100)
    target_denominator_max: int = number(48, label="Maximum Target Denominator", minimum=4, maximum=200)
    include_find_missing_numerator: bool = boolean(True, label="Find Missing Numerator")
    include_find_missing_denominator: bool = boolean(True, label="Find Missing Denominator")
    include_simplify: bool = boolean(True, label="Simplify Fractions")
    include_identify: bool = boolean(False, label="Identify Equivalent Fractions")
    include_improper_fractions: bool = boolean(False, label="Include Improper Fractions")


def simple_fraction(params: EquivalentFractionParams, rng: random.Random) -> Fraction:
    """Draw a fraction already in lowest terms."""
    from sympy import igcd

    for _ in range(MAX_ATTEMPTS):
        denominator = rand_int(rng, 2, params.max_denominator)
        if params.include_improper_fractions:
            numerator = rand_int(rng, 1, params.max_numerator)
        else:
            numerator = rand_int(rng, 1, min(params.max_numerator, denominator - 1))
        if igcd(numerator, denominator) == 1:
            return numerator, denominator
    logger.warning("No fraction in lowest terms after %d attempts; using 1/2", MAX_ATTEMPTS)
    return 1, 2


def _missing_numerator(params: EquivalentFractionParams, rng: random.Random) -> Problem:
    n, d = simple_fraction(params, rng)
    multiplier = rand_int(rng, 2, max(2, params.target_denominator_max // d))
    target = (n * multiplier, d * multiplier)
    return Problem(
        question=f"Find the missing numerator: {n}/{d} = ?/{target[1]}",
        question_latex=f"{text('Find the missing numerator: ')} {frac_latex(n, d)} = {frac_latex('?', target[1])}",
        answer=str(target[0]),
        answer_latex=str(target[0]),
        steps=[
            f"{frac_latex(n, d)} = {frac_latex('?', target[1])}",
            f"{text('Multiply both numerator and denominator by ')} {multiplier}",
            f"{_scaled((n, d), TIMES, multiplier)} = {_latex(target)}",
        ],
        metadata={
            "operation": "find-missing-numerator",
            "original_fraction": _as_dict((n, d)),
            "target_fraction": _as_dict(target),
            "multiplier": multiplier,
        },
    )


def _missing_denominator(params: EquivalentFractionParams, rng: random.Random) -> Problem:
    n, d = simple_fraction(params, rng)
    multiplier = rand_int(rng, 2, 8)
    target = (n * multiplier, d * multiplier)
    return Problem(
        question=f"Find the missing denominator: {n}/{d} = {target[0]}/?",
        question_latex=f"{text('Find the missing denominator: ')} {frac_latex(n, d)} = {frac_latex(target[0], '?')}",
        answer=str(target[1]),
        answer_latex=str(target[1]),
        steps=[
            f"{frac_latex(n, d)} = {frac_latex(target[0], '?')}",
            f"{text('The numerator was multiplied by ')} {multiplier}",
            f"{text('So the denominator must also be multiplied by ')} {multiplier}",
            f"{d} \\times {multiplier} = {target[1]}",
        ],
        metadata={
            "operation": "find-missing-denominator",
            "original_fraction": _as_dict((n, d)),
            "target_fraction": _as_dict(target),
            "multiplier": multiplier,
        },
    )


def _simplify_problem(params: EquivalentFractionParams, rng: random.Random) -> Problem:
    from sympy import igcd

    simplest = simple_fraction(params, rng)
    multiplier = rand_int(rng, 2, 6)
    n, d = simplest[0] * multiplier, simplest[1] * multiplier
    divisor = igcd(n, d)
    return Problem(
        question=f"Simplify the fraction: {n}/{d}",
        question_latex=f"{text('Simplify the fraction: ')} {frac_latex(n, d)}",
        answer=_text(simplest),
        answer_latex=_latex(simplest),
        steps=[
            frac_latex(n, d),
            f"{text('Find the GCD of ')} {n} {text(' and ')} {d}",
            f"{text('GCD')} = {divisor}",
            f"{_scaled((n, d), DIVIDE, divisor)} = {_latex(simplest)}",
        ],
        metadata={
            "operation": "simplify-fraction",
            "original_fraction": _as_dict((n, d)),
            "simplified_fraction": _as_dict(simplest),
            "gcd": int(divisor),
        },
    )


def _identify_equivalent(params: EquivalentFractionParams, rng: random.Random) -> Problem:
    n, d = simple_fraction(params, rng)
    multiplier = rand_int(rng, 2, 6)
    correct = (n * multiplier, d * multiplier)
    distractors = [(n + 1, d), (n, d + 1), (n * multiplier, d * multiplier + 1)]
    options = shuffled(rng, [correct, *distractors])
    letters = "ABCD"
    letter = letters[options.index(correct)]
    listing = "  ".join(f"{letters[i]}) {_text(option)}" for i, option in enumerate(options))
    listing_latex = r" \quad ".join(
        f"{text(letters[i] + ') ')} {_latex(option)}" for i, option in enumerate(options)
    )
    return Problem(
        question=f"Which fraction is equivalent to {n}/{d}?\n{listing}",
        question_latex=f"{text('Which fraction is equivalent to ')} {frac_latex(n, d)}{text('?')} \\\\ {listing_latex}",
        answer=f"{letter}) {_text(correct)}",
        answer_latex=f"{text(letter + ') ')} {_latex(correct)}",
        steps=[
            text("Check each option by simplifying"),
            f"{_latex(correct)} = {_scaled(correct, DIVIDE, multiplier)} = {frac_latex(n, d)}",
            f"{text('Answer: ')} {text(letter + ') ')} {_latex(correct)}",
        ],
        metadata={
            "operation": "identify-equivalent",
            "base_fraction": _as_dict((n, d)),
            "options": [_as_dict(option) for option in options],
            "correct_option": letter,
        },
    )


def synthesize_equivalent_fraction(params: EquivalentFractionParams, rng: random.Random) -> Problem:
    kind = _require(
        pick_enabled(
            rng,
            [
                (_missing_numerator, params.include_find_missing_numerator),
                (_missing_denominator, params.include_find_missing_denominator),
                (_simplify_problem, params.include_simplify),
                (_identify_equivalent, params.include_identify),
            ],
        ),
        "At least one problem type must be enabled",
    )
    return kind(params, rng)


# ---------------------------------------------------------------------------
# Comparing fractions
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ComparingFractionParams:
    max_numerator: int = number(15, label="Maximum Numerator", minimum=2, maximum=50)
    max_denominator: int = number(15, label="Maximum Denominator", minimum=3, maximum=50)
    include_two_fractions: bool = boolean(True, label="Compare Two Fractions")
    include_three_fractions: bool = boolean(False, label="Order Three Fractions")
    include_fraction_decimal: bool = boolean(False, label="Compare Fraction and Decimal")
    include_like_denominators: bool = boolean(True, label="Like Denominators")
    include_unlike_denominators: bool = boolean(True, label="Unlike Denominators")
    show_work_steps: bool = boolean(True, label="Show Work Steps")
    force_common_denominators: bool = boolean(False, label="Always Use Common Denominators")


def _proper_fraction(params: ComparingFractionParams, rng: random.Random, denominator: int | None = None) -> Fraction:
    d = denominator if denominator is not None else rand_int(rng, 2, params.max_denominator)
    return rand_int(rng, 1, min(params.max_numerator, d - 1)), d


def _comparison_steps(first: Fraction, second: Fraction, symbol: str, params: ComparingFractionParams) -> list[str]:
    from sympy import ilcm

    both = f"{_latex(first)} {text(' and ')} {_latex(second)}"
    conclusion = f"{text('Therefore: ')} {_latex(first)} {symbol} {_latex(second)}"
    if first[1] == second[1]:
        return [
            both,
            text("Same denominators, compare numerators:"),
            f"{first[0]} {symbol} {second[0]}",
            conclusion,
        ]
    if params.show_work_steps or params.force_common_denominators:
        lcm = int(ilcm(first[1], second[1]))
        left, right = first[0] * (lcm // first[1]), second[0] * (lcm // second[1])
        return [
            both,
            f"{text('Find common denominator: LCM of ')} {first[1]} {text(' and ')} {second[1]} {text(' is ')} {lcm}",
            f"{_latex(first)} = {frac_latex(left, lcm)}, \\quad {_latex(second)} = {frac_latex(right, lcm)}",
            f"{text('Compare numerators: ')} {left} {symbol} {right}",
            conclusion,
        ]
    return [
        both,
        text("Convert to decimals:"),
        f"{_latex(first)} = {_decimal(first)}, \\quad {_latex(second)} = {_decimal(second)}",
        f"{_decimal(first)} {symbol} {_decimal(second)}",
        conclusion,
    ]


def _two_fractions(params: ComparingFractionParams, rng: random.Random) -> Problem:
    if params.include_like_denominators and params.include_unlike_denominators:
        like = chance(rng, LIKE_DENOMINATOR_CHANCE)
    else:
        like = params.include_like_denominators

    if like:
        denominator = rand_int(rng, 3, params.max_denominator)
        first = _proper_fraction(params, rng, denominator)
        second = _proper_fraction(params, rng, denominator)
        for _ in range(FRACTION_COMPARE_ATTEMPTS):
            if second != first:
                break
            second = _proper_fraction(params, rng, denominator)
        else:
            logger.warning("Could not draw distinct numerators; comparing 1/%d with 2/%d", denominator, denominator)
            first, second = (1, denominator), (2, denominator)
    else:
        first = _proper_fraction(params, rng)
        second = _proper_fraction(params, rng)
        for _ in range(FRACTION_COMPARE_ATTEMPTS):
            if _value(first) != _value(second):
                break
            second = _proper_fraction(params, rng)
        else:
            denominator = max(3, first[1])
            logger.warning("Could not draw unequal fractions; comparing 1/%d with 2/%d", denominator, denominator)
            first, second = (1, denominator), (2, denominator)

    symbol = _symbol(_value(first), _value(second))
    return Problem(
        question=f"Compare: {_text(first)} ___ {_text(second)}",
        question_latex=f"{text('Compare: ')} {_latex(first)} {text(' ___ ')} {_latex(second)}",
        answer=symbol,
        answer_latex=symbol,
        steps=_comparison_steps(first, second, symbol, params),
        metadata={
            "operation": "compare-two-fractions",
            "fractions": [_as_dict(first), _as_dict(second)],
            "comparison": _WORDS[symbol],
            "like_denominators": first[1] == second[1],
        },
    )


def _three_fractions(params: ComparingFractionParams, rng: random.Random) -> Problem:
    fractions: list[Fraction] = []
    for _ in range(3):
        candidate = _proper_fraction(params, rng)
        for _ in range(ORDERING_ATTEMPTS):
            if all(_value(candidate) != _value(f) for f in fractions):
                break
            candidate = _proper_fraction(params, rng)
        fractions.append(candidate)

    ordered_fractions = sorted(fractions, key=_value)
    answer = ", ".join(_text(f) for f in ordered_fractions)
    answer_latex = ", ".join(_latex(f) for f in ordered_fractions)
    return Problem(
        question=f"Order from least to greatest: {', '.join(_text(f) for f in fractions)}",
        question_latex=f"{text('Order from least to greatest: ')} {', '.join(_latex(f) for f in fractions)}",
        answer=answer,
        answer_latex=answer_latex,
        steps=[
            text("Convert each fraction to decimal form:"),
            *(f"{_latex(f)} = {_decimal(f)}" for f in fractions),
            f"{text('Order: ')} {answer_latex}",
        ],
        metadata={
            "operation": "order-three-fractions",
            "original_fractions": [_as_dict(f) for f in fractions],
            "sorted_fractions": [_as_dict(f) for f in ordered_fractions],
        },
    )


def _fraction_decimal(params: ComparingFractionParams, rng: random.Random) -> Problem:
    from sympy import Rational

    fraction = _proper_fraction(params, rng)
    decimal = rand_decimal(rng, 0.01, 0.99)
    shown = format_decimal(decimal, 2)
    symbol = _symbol(_value(fraction), Rational(str(decimal)))
    return Problem(
        question=f"Compare: {_text(fraction)} ___ {shown}",
        question_latex=f"{text('Compare: ')} {_latex(fraction)} {text(' ___ ')} {shown}",
        answer=symbol,
        answer_latex=symbol,
        steps=[
            text("Convert fraction to decimal:"),
            f"{_latex(fraction)} = {_decimal(fraction)}",
            f"{_decimal(fraction)} {symbol} {shown}",
            f"{text('Therefore: ')} {_latex(fraction)} {symbol} {shown}",
        ],
        metadata={
            "operation": "compare-fraction-decimal",
            "fraction": _as_dict(fraction),
            "decimal": shown,
            "comparison": _WORDS[symbol],
        },
    )


def synthesize_comparing_fraction(params: ComparingFractionParams, rng: random.Random) -> Problem:
    kind = _require(
        pick_enabled(
            rng,
            [
                (_two_fractions, params.include_two_fractions),
                (_three_fractions, params.include_three_fractions),
                (_fraction_decimal, params.include_fraction_decimal),
            ],
        ),
        "At least one comparison type must be enabled",
    )
    return kind(params, rng)


# ---------------------------------------------------------------------------
# Fraction addition
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class FractionAdditionParams:
    max_numerator: int = number(12, label="Maximum Numerator", minimum=1, maximum=50)
    max_denominator: int = number(12, label="Maximum Denominator", minimum=2, maximum=50)
    allow_mixed_numbers: bool = boolean(False, label="Allow Mixed Numbers")
    require_simplification: bool = boolean(True, label="Require Simplification")
    common_denominators: bool = boolean(False, label="Common Denominators Only")


def _mixed(fraction: Fraction) -> tuple[str, str]:
    whole, rest = divmod(fraction[0], fraction[1])
    if rest == 0:
        return str(whole), str(whole)
    if whole == 0:
        return _text(fraction), _latex(fraction)
    return f"{whole} {rest}/{fraction[1]}", f"{whole}{frac_latex(rest, fraction[1])}"


def synthesize_fraction_addition(params: FractionAdditionParams, rng: random.Random) -> Problem:
    from sympy import Rational, ilcm

    first = (rand_int(rng, 1, params.max_numerator), rand_int(rng, 2, params.max_denominator))
    second = (rand_int(rng, 1, params.max_numerator), rand_int(rng, 2, params.max_denominator))
    if params.common_denominators:
        second = (second[0], first[1])

    lcm = int(ilcm(first[1], second[1]))
    left, right = first[0] * (lcm // first[1]), second[0] * (lcm // second[1])
    raw = (left + right, lcm)
    total = Rational(*raw)
    result = (int(total.p), int(total.q)) if params.require_simplification else raw

    answer, answer_latex = _text(result), _latex(result)
    if params.allow_mixed_numbers and result[0] > result[1]:
        answer, answer_latex = _mixed(result)

    steps = [f"{_latex(first)} + {_latex(second)}"]
    if first[1] != second[1]:
        steps.append(f"{text('LCM of ')} {first[1]} {text(' and ')} {second[1]} {text(' is ')} {lcm}")
        steps.append(f"= {frac_latex(left, lcm)} + {frac_latex(right, lcm)}")
    steps.append(f"= {_latex(raw)}")
    if result != raw:
        steps.append(f"= {_latex(result)}")
    if answer_latex != _latex(result):
        steps.append(f"= {answer_latex}")

    return Problem(
        question=f"{_text(first)} + {_text(second)} = ?",
        question_latex=f"{_latex(first)} + {_latex(second)} = \\square",
        answer=answer,
        answer_latex=answer_latex,
        steps=steps,
        metadata={
            "operation": "fraction-addition",
            "fractions": [_as_dict(first), _as_dict(second)],
            "answer": _as_dict(result),
            "common_denominator": lcm,
        },
    )


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


GENERATORS: tuple[Generator, ...] = (
    Generator(
        key="basic-fractions",
        name="Basic Fractions",
        description="Identify, shade, write and compare simple fractions",
        category="fractions-decimals",
        difficulty="easy",
        tags=("fractions", "parts-of-whole", "visual"),
        grade_level="2-5",
        estimated_time="45 seconds",
        params_type=BasicFractionParams,
        synthesize=synthesize_basic_fraction,
        rules=_basic_rules,
        presets=(
            Preset(
                "halves-and-quarters",
                "Small Denominators",
                "Fractions with denominators up to 4",
                {"max_numerator": 3, "max_denominator": 4},
            ),
            Preset(
                "with-comparison",
                "With Comparison",
                "Add fraction comparison problems",
                {"include_compare": True},
            ),
        ),
    ),
    Generator(
        key="equivalent-fractions",
        name="Equivalent Fractions",
        description=(
            "Generate problems involving finding equivalent fractions, simplifying fractions, "
            "and identifying equivalent forms"
        ),
        category="fractions-decimals",
        difficulty="easy",
        tags=("fractions", "equivalent-fractions", "simplification", "multiplication", "common-factors"),
        grade_level="3-7",
        estimated_time="60 seconds",
        params_type=EquivalentFractionParams,
        synthesize=synthesize_equivalent_fraction,
        presets=(
            Preset(
                "simplify-only",
                "Simplify Only",
                "Reduce fractions to lowest terms",
                {
                    "include_find_missing_numerator": False,
                    "include_find_missing_denominator": False,
                    "include_simplify": True,
                },
            ),
            Preset(
                "multiple-choice",
                "Multiple Choice",
                "Pick the equivalent fraction from four options",
                {
                    "include_find_missing_numerator": False,
                    "include_find_missing_denominator": False,
                    "include_simplify": False,
                    "include_identify": True,
                },
            ),
        ),
    ),
    Generator(
        key="comparing-fractions",
        name="Comparing Fractions",
        description="Compare and order fractions using common denominators or decimals",
        category="fractions-decimals",
        difficulty="medium",
        tags=("fractions", "comparison", "ordering", "inequalities"),
        grade_level="3-6",
        estimated_time="60 seconds",
        params_type=ComparingFractionParams,
        synthesize=synthesize_comparing_fraction,
        presets=(
            Preset(
                "like-denominators",
                "Like Denominators",
                "Compare fractions that share a denominator",
                {"include_unlike_denominators": False},
            ),
            Preset(
                "ordering",
                "Ordering",
                "Order three fractions from least to greatest",
                {"include_two_fractions": False, "include_three_fractions": True},
            ),
            Preset(
                "mixed-comparisons",
                "Mixed Comparisons",
                "Fractions against fractions and decimals",
                {"include_three_fractions": True, "include_fraction_decimal": True},
            ),
        ),
    ),
    Generator(
        key="fraction-addition",
        name="Fraction Addition",
        description="Add fractions with like or unlike denominators",
        category="fractions-decimals",
        difficulty="medium",
        tags=("fractions", "addition", "common-denominator"),
        grade_level="4-7",
        estimated_time="90 seconds",
        params_type=FractionAdditionParams,
        synthesize=synthesize_fraction_addition,
        presets=(
            Preset(
                "common-denominators",
                "Common Denominators",
                "Both fractions share a denominator",
                {"common_denominators": True},
            ),
            Preset(
                "mixed-number-answers",
                "Mixed Number Answers",
                "Write improper sums as mixed numbers",
                {"allow_mixed_numbers": True},
            ),
        ),
    ),
)
