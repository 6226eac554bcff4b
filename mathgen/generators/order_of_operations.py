"""Order-of-operations (PEMDAS) expressions solved one reduction at a time."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from ..complexity import LevelRule
from ..constants import COMPLEXITY_LEVELS, MAX_ATTEMPTS
from ..errors import ExpressionError
from ..evaluator import Evaluation, Node, evaluate, parse, render, render_latex
from ..generator import Generator
from ..problem import Preset, Problem
from ..rng import chance, pick, rand_int
from ..schema import boolean, number, ordered, select

logger = logging.getLogger(__name__)

__all__ = ["OrderOfOperationsParams", "build_expression", "synthesize_order_of_operations", "GENERATOR"]

TERM_COUNTS = {"basic": 3, "intermediate": 4, "advanced": 5}
PARENTHESES_CHANCE = 0.7


@dataclass(slots=True)
class OrderOfOperationsParams:
    min_number: int = number(1, label="Minimum Number", minimum=1, maximum=50)
    max_number: int = number(20, label="Maximum Number", minimum=2, maximum=100)
    include_parentheses: bool = boolean(True, label="Include Parentheses")
    include_exponents: bool = boolean(False, label="Include Exponents")
    include_multiplication: bool = boolean(True, label="Include Multiplication")
    include_division: bool = boolean(True, label="Include Division")
    include_addition: bool = boolean(True, label="Include Addition")
    include_subtraction: bool = boolean(True, label="Include Subtraction")
    complexity_level: str = select("intermediate", COMPLEXITY_LEVELS, label="Complexity Level")


COMPLEXITY = {
    "basic": LevelRule(caps={"min_number": 10, "max_number": 10}),
    "intermediate": LevelRule(),
    "advanced": LevelRule(defaults={"include_exponents": True}),
}


def _operators(params: OrderOfOperationsParams) -> list[str]:
    ops = [
        op
        for op, enabled in (
            ("+", params.include_addition),
            ("-", params.include_subtraction),
            ("×", params.include_multiplication),
            ("÷", params.include_division),
        )
        if enabled
    ]
    return ops or ["+", "×"]


def _divisor(value: int, params: OrderOfOperationsParams, rng: random.Random) -> int:
    divisors = [
        n for n in range(max(2, params.min_number), params.max_number + 1) if value % n == 0
    ]
    return pick(rng, divisors) if divisors else 1


def build_expression(params: OrderOfOperationsParams, rng: random.Random) -> Node:
    """Draw one candidate expression tree from the enabled operators."""
    count = TERM_COUNTS.get(params.complexity_level, 4)
    ops = [pick(rng, _operators(params)) for _ in range(count - 1)]
    numbers = [rand_int(rng, params.min_number, params.max_number)]
    for op in ops:
        if op == "÷":
            numbers.append(_divisor(numbers[-1], params, rng))
        else:
            numbers.append(rand_int(rng, params.min_number, params.max_number))

    items = [str(n) for n in numbers]
    if params.include_exponents:
        index = rand_int(rng, 0, count - 1)
        items[index] = f"{rand_int(rng, 2, 5)} ^ {rand_int(rng, 2, 3)}"
    if params.include_parentheses and chance(rng, PARENTHESES_CHANCE):
        start = rand_int(rng, 0, count - 2)
        items[start] = f"({items[start]}"
        items[start + 1] = f"{items[start + 1]})"

    text = items[0]
    for op, item in zip(ops, items[1:]):
        text = f"{text} {op} {item}"
    return parse(text)


def _acceptable(result: Evaluation, params: OrderOfOperationsParams) -> bool:
    if any("." in step for step in result.steps):
        return False
    return params.complexity_level != "basic" or result.value >= 0


def _fallback(params: OrderOfOperationsParams, rng: random.Random) -> tuple[Node, Evaluation]:
    a, b, c = (rand_int(rng, params.min_number, params.max_number) for _ in range(3))
    node = parse(f"{a} + {b} × {c}")
    return node, evaluate(node)


def synthesize_order_of_operations(params: OrderOfOperationsParams, rng: random.Random) -> Problem:
    for _ in range(MAX_ATTEMPTS):
        node = build_expression(params, rng)
        try:
            result = evaluate(node)
        except ExpressionError as exc:
            logger.warning("Discarding expression %r: %s", render(node), exc)
            continue
        if _acceptable(result, params):
            break
    else:
        logger.warning(
            "No clean expression after %d attempts; falling back to a + b × c", MAX_ATTEMPTS
        )
        node, result = _fallback(params, rng)

    expression = render(node)
    return Problem(
        question=f"{expression} = ?",
        question_latex=f"{render_latex(node)} = \\square",
        answer=result.display,
        answer_latex=result.display,
        steps=list(result.steps),
        metadata={
            "operation": "order-of-operations",
            "expression": expression,
            "has_parentheses": "(" in expression,
            "has_exponents": "^" in expression,
            "complexity_level": params.complexity_level,
        },
    )


GENERATOR = Generator(
    key="order-of-operations",
    name="Order of Operations",
    description="Generate PEMDAS/BODMAS expressions and solve them step by step",
    category="basic-operations",
    difficulty="medium",
    tags=("arithmetic", "pemdas", "order-of-operations"),
    grade_level="5-8",
    estimated_time="120 seconds",
    params_type=OrderOfOperationsParams,
    synthesize=synthesize_order_of_operations,
    rules=ordered("min_number", "max_number", "Minimum number cannot exceed maximum number"),
    complexity=COMPLEXITY,
    presets=(
        Preset(
            "basic-pemdas",
            "Basic PEMDAS",
            "Three small numbers, no exponents",
            {"complexity_level": "basic", "include_exponents": False},
        ),
        Preset(
            "with-exponents",
            "With Exponents",
            "Longer expressions that include a power",
            {"complexity_level": "advanced", "include_exponents": True},
        ),
        Preset(
            "no-parentheses",
            "No Parentheses",
            "Precedence without grouping symbols",
            {"include_parentheses": False},
        ),
    ),
)
