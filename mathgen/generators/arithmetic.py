"""Whole-number arithmetic: the four operations and left-to-right chains."""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from ..constants import MAX_ATTEMPTS, NEGATIVE_RESULT_CHANCE
from ..errors import ConfigurationError
from ..generator import Generator
from ..problem import Preset, Problem
from ..rng import chance, pick, rand_int
from ..schema import boolean, combine_rules, number, ordered

logger = logging.getLogger(__name__)

__all__ = [
    "AdditionParams",
    "SubtractionParams",
    "MultiplicationParams",
    "DivisionParams",
    "MixedOperationsParams",
    "requires_carrying",
    "requires_borrowing",
    "GENERATORS",
]

_LATEX = {"+": "+", "-": "-", "×": "\\times", "÷": "\\div"}


def _digits(value: int, width: int) -> list[int]:
    return [int(ch) for ch in str(abs(value)).zfill(width)]


def requires_carrying(addends: list[int]) -> bool:
    """True if any column of ``addends`` (by absolute value) sums past 9."""
    width = max(len(str(abs(a))) for a in addends)
    columns = zip(*(_digits(a, width) for a in addends))
    return any(sum(column) > 9 for column in columns)


def requires_borrowing(minuend: int, subtrahend: int) -> bool:
    width = max(len(str(abs(minuend))), len(str(abs(subtrahend))))
    return any(
        top < bottom
        for top, bottom in zip(_digits(minuend, width), _digits(subtrahend, width))
    )


def _show(value: int) -> str:
    return f"({value})" if value < 0 else str(value)


# ---------------------------------------------------------------------------
# Addition
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class AdditionParams:
    min_addend: int = number(1, label="Minimum Number", minimum=0, maximum=10000)
    max_addend: int = number(100, label="Maximum Number", minimum=1, maximum=10000)
    addend_count: int = number(2, label="Number of Addends", minimum=2, maximum=5)
    allow_negatives: bool = boolean(False, label="Allow Negative Numbers")
    allow_carrying: bool = boolean(True, label="Allow Carrying")


def _fallback_addends(params: AdditionParams, rng: random.Random) -> list[int]:
    # Column sums stay below ten, so no carrying is possible.
    top = max(1, 9 // params.addend_count)
    low = -top if params.allow_negatives else 1
    return [rand_int(rng, low, top) for _ in range(params.addend_count)]


def synthesize_addition(params: AdditionParams, rng: random.Random) -> Problem:
    low, high = params.min_addend, params.max_addend
    if params.allow_negatives:
        low, high = -abs(params.max_addend), abs(params.max_addend)

    addends: list[int] = []
    attempts = 0
    while len(addends) < params.addend_count and attempts < MAX_ATTEMPTS:
        attempts += 1
        candidate = rand_int(rng, low, high)
        if not addends or params.allow_carrying or not requires_carrying(addends + [candidate]):
            addends.append(candidate)

    if len(addends) < params.addend_count:
        logger.warning("No carry-free addends after %d attempts; using single digits", MAX_ATTEMPTS)
        addends = _fallback_addends(params, rng)

    total = sum(addends)
    expression = " + ".join(_show(a) for a in addends)
    return Problem(
        question=f"{expression} = ?",
        question_latex=f"{expression} = \\square",
        answer=str(total),
        answer_latex=str(total),
        steps=[expression, f"= {total}"],
        metadata={"operation": "addition", "addends": addends},
    )


# ---------------------------------------------------------------------------
# Subtraction
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class SubtractionParams:
    minuend_min: int = number(10, label="Minuend Minimum", minimum=0, maximum=10000)
    minuend_max: int = number(100, label="Minuend Maximum", minimum=1, maximum=10000)
    subtrahend_min: int = number(1, label="Subtrahend Minimum", minimum=0, maximum=10000)
    subtrahend_max: int = number(50, label="Subtrahend Maximum", minimum=1, maximum=10000)
    allow_negative_results: bool = boolean(False, label="Allow Negative Results")
    allow_borrowing: bool = boolean(True, label="Allow Borrowing")


def _borrow_free_subtrahend(minuend: int, rng: random.Random) -> int:
    digits = [rand_int(rng, 0, d) for d in _digits(minuend, len(str(minuend)))]
    subtrahend = int("".join(map(str, digits)))
    return subtrahend or 10 ** (len(str(minuend)) - 1)


def synthesize_subtraction(params: SubtractionParams, rng: random.Random) -> Problem:
    force_negative = params.allow_negative_results and chance(rng, NEGATIVE_RESULT_CHANCE)

    for _ in range(MAX_ATTEMPTS):
        if force_negative:
            subtrahend = rand_int(rng, params.subtrahend_min, params.subtrahend_max)
            minuend = rand_int(rng, params.minuend_min, min(subtrahend - 1, params.minuend_max))
        else:
            minuend = rand_int(rng, params.minuend_min, params.minuend_max)
            subtrahend = rand_int(rng, params.subtrahend_min, params.subtrahend_max)
        negative_ok = params.allow_negative_results or minuend >= subtrahend
        borrow_ok = params.allow_borrowing or not requires_borrowing(minuend, subtrahend)
        if negative_ok and borrow_ok:
            break
    else:
        logger.warning("No subtraction met the constraints after %d attempts", MAX_ATTEMPTS)
        minuend = max(params.minuend_min, 20, params.subtrahend_min)
        if params.allow_borrowing:
            subtrahend = rand_int(rng, 1, minuend)
        else:
            subtrahend = _borrow_free_subtrahend(minuend, rng)

    difference = minuend - subtrahend
    expression = f"{minuend} - {subtrahend}"
    return Problem(
        question=f"{expression} = ?",
        question_latex=f"{expression} = \\square",
        answer=str(difference),
        answer_latex=str(difference),
        steps=[expression, f"= {difference}"],
        metadata={
            "operation": "subtraction",
            "minuend": minuend,
            "subtrahend": subtrahend,
            "requires_borrowing": requires_borrowing(minuend, subtrahend),
        },
    )


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class MultiplicationParams:
    factor1_min: int = number(1, label="First Factor Minimum", minimum=0, maximum=1000)
    factor1_max: int = number(12, label="First Factor Maximum", minimum=1, maximum=1000)
    factor2_min: int = number(1, label="Second Factor Minimum", minimum=0, maximum=1000)
    factor2_max: int = number(12, label="Second Factor Maximum", minimum=1, maximum=1000)


def synthesize_multiplication(params: MultiplicationParams, rng: random.Random) -> Problem:
    first = rand_int(rng, params.factor1_min, params.factor1_max)
    second = rand_int(rng, params.factor2_min, params.factor2_max)
    product = first * second
    return Problem(
        question=f"{first} × {second} = ?",
        question_latex=f"{first} \\times {second} = \\square",
        answer=str(product),
        answer_latex=str(product),
        steps=[f"{first} × {second}", f"= {product}"],
        metadata={"operation": "multiplication", "factors": [first, second]},
    )


# ---------------------------------------------------------------------------
# Division
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class DivisionParams:
    dividend_min: int = number(10, label="Dividend Minimum", minimum=1, maximum=10000)
    dividend_max: int = number(144, label="Dividend Maximum", minimum=1, maximum=10000)
    divisor_min: int = number(2, label="Divisor Minimum", minimum=1, maximum=100)
    divisor_max: int = number(12, label="Divisor Maximum", minimum=1, maximum=100)
    allow_remainders: bool = boolean(False, label="Allow Remainders")


def _exact_division(params: DivisionParams, rng: random.Random) -> tuple[int, int]:
    """Return ``(divisor, quotient)`` whose product lies in the dividend range."""
    for _ in range(MAX_ATTEMPTS):
        divisor = rand_int(rng, params.divisor_min, params.divisor_max)
        low = max(1, math.ceil(params.dividend_min / divisor))
        high = params.dividend_max // divisor
        if low <= high:
            return divisor, rand_int(rng, low, high)
    logger.warning("No exact division fits the dividend range; using the smallest divisor")
    divisor = params.divisor_min
    return divisor, max(1, math.ceil(params.dividend_min / divisor))


def synthesize_division(params: DivisionParams, rng: random.Random) -> Problem:
    if params.allow_remainders:
        dividend = rand_int(rng, params.dividend_min, params.dividend_max)
        divisor = rand_int(rng, params.divisor_min, params.divisor_max)
        quotient, remainder = divmod(dividend, divisor)
    else:
        divisor, quotient = _exact_division(params, rng)
        dividend, remainder = divisor * quotient, 0

    answer = f"{quotient} R {remainder}" if remainder else str(quotient)
    answer_latex = f"{quotient} \\text{{ R }} {remainder}" if remainder else str(quotient)
    check = f"{divisor} × {quotient}" + (f" + {remainder}" if remainder else "") + f" = {dividend}"
    return Problem(
        question=f"{dividend} ÷ {divisor} = ?",
        question_latex=f"{dividend} \\div {divisor} = \\square",
        answer=answer,
        answer_latex=answer_latex,
        steps=[f"{dividend} ÷ {divisor}", f"Check: {check}", f"= {answer}"],
        metadata={
            "operation": "division",
            "dividend": dividend,
            "divisor": divisor,
            "quotient": quotient,
            "remainder": remainder,
            "has_remainder": remainder > 0,
        },
    )


# ---------------------------------------------------------------------------
# Mixed operations
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class MixedOperationsParams:
    min_number: int = number(1, label="Minimum Number", minimum=1, maximum=100)
    max_number: int = number(50, label="Maximum Number", minimum=1, maximum=1000)
    operation_count: int = number(2, label="Number of Operations", minimum=2, maximum=4)
    include_addition: bool = boolean(True, label="Include Addition")
    include_subtraction: bool = boolean(True, label="Include Subtraction")
    include_multiplication: bool = boolean(True, label="Include Multiplication")
    include_division: bool = boolean(False, label="Include Division")


def _divisor_for(running: int, params: MixedOperationsParams, rng: random.Random) -> int:
    """Prefer a divisor that divides ``running`` exactly; otherwise any number."""
    exact = [
        n
        for n in range(max(2, params.min_number), params.max_number + 1)
        if running % n == 0
    ]
    if exact:
        return pick(rng, exact)
    return rand_int(rng, params.min_number, params.max_number)


def _apply(op: str, left: int, right: int) -> int:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "×":
        return left * right
    return left // right


def synthesize_mixed_operations(params: MixedOperationsParams, rng: random.Random) -> Problem:
    operations = [
        op
        for op, enabled in (
            ("+", params.include_addition),
            ("-", params.include_subtraction),
            ("×", params.include_multiplication),
            ("÷", params.include_division),
        )
        if enabled
    ]
    if not operations:
        raise ConfigurationError("At least one operation type must be selected")

    running = rand_int(rng, params.min_number, params.max_number)
    numbers, ops = [running], []
    text = latex = str(running)
    steps: list[str] = []
    for index in range(params.operation_count):
        op = pick(rng, operations)
        operand = (
            _divisor_for(running, params, rng)
            if op == "÷"
            else rand_int(rng, params.min_number, params.max_number)
        )
        result = _apply(op, running, operand)
        steps.append(f"{_show(running)} {op} {operand} = {result}")
        if index > 0:
            text, latex = f"({text})", f"\\left({latex}\\right)"
        text = f"{text} {op} {operand}"
        latex = f"{latex} {_LATEX[op]} {operand}"
        numbers.append(operand)
        ops.append(op)
        running = result

    return Problem(
        question=f"{text} = ?",
        question_latex=f"{latex} = \\square",
        answer=str(running),
        answer_latex=str(running),
        steps=[text, *steps, f"= {running}"],
        metadata={"operation": "mixed", "numbers": numbers, "operations": ops},
    )


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


GENERATORS: tuple[Generator, ...] = (
    Generator(
        key="addition",
        name="Addition",
        description="Generate addition problems with whole numbers",
        category="basic-operations",
        difficulty="easy",
        tags=("arithmetic", "whole-numbers", "basic-math"),
        grade_level="K-5",
        estimated_time="30 seconds",
        params_type=AdditionParams,
        synthesize=synthesize_addition,
        rules=ordered("min_addend", "max_addend", "Minimum addend cannot exceed maximum addend"),
        presets=(
            Preset(
                "no-carrying",
                "No Carrying",
                "Two-digit sums that never carry",
                {"min_addend": 10, "max_addend": 99, "allow_carrying": False},
            ),
            Preset(
                "with-negatives",
                "With Negatives",
                "Sums that mix positive and negative numbers",
                {"max_addend": 20, "allow_negatives": True},
            ),
        ),
    ),
    Generator(
        key="subtraction",
        name="Subtraction",
        description="Generate subtraction problems with whole numbers",
        category="basic-operations",
        difficulty="easy",
        tags=("arithmetic", "whole-numbers", "basic-math"),
        grade_level="K-5",
        estimated_time="30 seconds",
        params_type=SubtractionParams,
        synthesize=synthesize_subtraction,
        rules=combine_rules(
            ordered("minuend_min", "minuend_max", "Minimum minuend cannot exceed maximum minuend"),
            ordered(
                "subtrahend_min", "subtrahend_max", "Minimum subtrahend cannot exceed maximum subtrahend"
            ),
        ),
        presets=(
            Preset(
                "no-borrowing",
                "No Borrowing",
                "Differences that never need regrouping",
                {"allow_borrowing": False},
            ),
        ),
    ),
    Generator(
        key="multiplication",
        name="Multiplication",
        description="Generate multiplication problems and times tables",
        category="basic-operations",
        difficulty="medium",
        tags=("arithmetic", "times-tables", "basic-math"),
        grade_level="2-6",
        estimated_time="45 seconds",
        params_type=MultiplicationParams,
        synthesize=synthesize_multiplication,
        rules=combine_rules(
            ordered("factor1_min", "factor1_max", "Minimum first factor cannot exceed maximum first factor"),
            ordered(
                "factor2_min", "factor2_max", "Minimum second factor cannot exceed maximum second factor"
            ),
        ),
    ),
    Generator(
        key="division",
        name="Division",
        description="Generate division problems with or without remainders",
        category="basic-operations",
        difficulty="medium",
        tags=("arithmetic", "division", "basic-math"),
        grade_level="3-6",
        estimated_time="60 seconds",
        params_type=DivisionParams,
        synthesize=synthesize_division,
        rules=combine_rules(
            ordered("dividend_min", "dividend_max", "Minimum dividend cannot exceed maximum dividend"),
            ordered("divisor_min", "divisor_max", "Minimum divisor cannot exceed maximum divisor"),
        ),
        presets=(
            Preset(
                "with-remainders",
                "With Remainders",
                "Divisions that may leave a remainder",
                {"allow_remainders": True},
            ),
        ),
    ),
    Generator(
        key="mixed-operations",
        name="Mixed Operations",
        description="Generate problems combining multiple arithmetic operations",
        category="basic-operations",
        difficulty="medium",
        tags=("arithmetic", "mixed", "basic-math"),
        grade_level="3-6",
        estimated_time="90 seconds",
        params_type=MixedOperationsParams,
        synthesize=synthesize_mixed_operations,
        rules=ordered("min_number", "max_number", "Minimum number cannot exceed maximum number"),
    ),
)
