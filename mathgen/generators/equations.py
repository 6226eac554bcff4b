"""Linear, one-step and two-step equations in one unknown.

Each synthesis picks the solution first and builds the equation around it,
so answers are always whole numbers. Linear equations are additionally
checked with SymPy before they are returned.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable

from ..complexity import LevelRule
from ..constants import COMPLEXITY_LEVELS, WORD_PROBLEM_CHANCE
from ..errors import ConfigurationError
from ..generator import Generator
from ..formatting import frac_latex, paren, signed, term, text
from ..problem import Preset, Problem
from ..rng import chance, pick_enabled, rand_int
from ..schema import boolean, combine_rules, number, ordered, select

logger = logging.getLogger(__name__)

__all__ = [
    "LinearEquationParams",
    "OneStepEquationParams",
    "TwoStepEquationParams",
    "verify_solution",
    "GENERATORS",
]

EQUATION_TYPES = ("one-step", "two-step", "multi-step")


def verify_solution(lhs: Any, rhs: Any, expected: int) -> None:
    """Raise ``ArithmeticError`` unless ``lhs = rhs`` has the single root ``expected``.

    ``lhs``/``rhs`` are callables receiving the SymPy symbol ``x``.
    """
    import sympy as sp

    x = sp.Symbol("x")
    roots = sp.solve(sp.Eq(lhs(x), rhs(x)), x)
    if roots != [expected]:
        raise ArithmeticError(f"Generated equation has roots {roots}, expected {expected}")


def _solve_prompt(equation: str, equation_latex: str | None = None) -> tuple[str, str]:
    return f"Solve: {equation}", f"{text('Solve: ')} {equation_latex or equation}"


def _check(solution: int, substituted: str) -> str:
    return f"{text(f'Check x = {solution}: ')} {substituted} \\checkmark"


def _usd(amount: int) -> str:
    return "\\$" + str(amount)


# ---------------------------------------------------------------------------
# Linear equations (ax + b = c)
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class LinearEquationParams:
    min_coefficient: int = number(1, label="Minimum Coefficient", minimum=1, maximum=20)
    max_coefficient: int = number(10, label="Maximum Coefficient", minimum=1, maximum=50)
    min_constant: int = number(1, label="Minimum Constant", minimum=1, maximum=100)
    max_constant: int = number(50, label="Maximum Constant", minimum=1, maximum=200)
    allow_negatives: bool = boolean(True, label="Allow Negative Numbers")
    equation_type: str = select("two-step", EQUATION_TYPES, label="Equation Type")


def _signed_draw(rng: random.Random, low: int, high: int, negatives: bool) -> int:
    value = rand_int(rng, low, high)
    return -value if negatives and rng.random() > 0.5 else value


def _linear_one_step(params: LinearEquationParams, rng: random.Random) -> tuple[str, list[str], int]:
    if chance(rng, 0.5):
        b = _signed_draw(rng, params.min_constant, params.max_constant, params.allow_negatives)
        x = rand_int(rng, 1, 10)
        c = x + b
        verify_solution(lambda s: s + b, lambda s: c, x)
        equation = f"x{signed(b)} = {c}"
        return equation, [equation, f"x = {c}{signed(-b)}", f"x = {x}"], x

    a = _signed_draw(rng, params.min_coefficient, params.max_coefficient, params.allow_negatives)
    x = rand_int(rng, 1, 10)
    c = a * x
    verify_solution(lambda s: a * s, lambda s: c, x)
    equation = f"{term(a)} = {c}"
    return equation, [equation, f"x = {frac_latex(c, a)}", f"x = {x}"], x


def _linear_two_step(params: LinearEquationParams, rng: random.Random) -> tuple[str, list[str], int]:
    a = _signed_draw(rng, params.min_coefficient, params.max_coefficient, params.allow_negatives)
    x = rand_int(rng, 1, 10)
    b = _signed_draw(rng, params.min_constant, params.max_constant, params.allow_negatives)
    c = a * x + b
    verify_solution(lambda s: a * s + b, lambda s: c, x)
    equation = f"{term(a)}{signed(b)} = {c}"
    steps = [
        equation,
        f"{term(a)} = {c}{signed(-b)}",
        f"{term(a)} = {c - b}",
        f"x = {frac_latex(c - b, a)}",
        f"x = {x}",
    ]
    return equation, steps, x


def _linear_multi_step(params: LinearEquationParams, rng: random.Random) -> tuple[str, list[str], int]:
    x = rand_int(rng, 1, 10)
    if chance(rng, 0.5):
        a = _signed_draw(rng, params.min_coefficient, params.max_coefficient, params.allow_negatives)
        b = _signed_draw(rng, params.min_constant, params.max_constant, params.allow_negatives)
        c = a * (x + b)
        verify_solution(lambda s: a * (s + b), lambda s: c, x)
        equation = f"{a}(x{signed(b)}) = {c}"
        steps = [
            equation,
            f"x{signed(b)} = {frac_latex(c, a)}",
            f"x{signed(b)} = {c // a}",
            f"x = {c // a}{signed(-b)}",
            f"x = {x}",
        ]
        return equation, steps, x

    a = _signed_draw(rng, params.min_coefficient, params.max_coefficient, params.allow_negatives)
    d = _signed_draw(rng, params.min_coefficient, params.max_coefficient, params.allow_negatives)
    if d == a:
        d = a + 1
    b = _signed_draw(rng, params.min_constant, params.max_constant, params.allow_negatives)
    e = (a - d) * x + b
    verify_solution(lambda s: a * s + b, lambda s: d * s + e, x)
    equation = f"{term(a)}{signed(b)} = {term(d)}{signed(e)}"
    steps = [
        equation,
        f"{term(a - d)}{signed(b)} = {e}",
        f"{term(a - d)} = {e - b}",
        f"x = {frac_latex(e - b, a - d)}",
        f"x = {x}",
    ]
    return equation, steps, x


_LINEAR_DISPATCH: dict[str, Callable[..., tuple[str, list[str], int]]] = {
    "one-step": _linear_one_step,
    "two-step": _linear_two_step,
    "multi-step": _linear_multi_step,
}


def synthesize_linear_equation(params: LinearEquationParams, rng: random.Random) -> Problem:
    build = _LINEAR_DISPATCH.get(params.equation_type, _linear_two_step)
    equation, steps, x = build(params, rng)
    return Problem(
        question=f"Solve for x: {equation}",
        question_latex=f"{text('Solve for ')} x: {equation}",
        answer=f"x = {x}",
        answer_latex=f"x = {x}",
        steps=steps,
        metadata={
            "operation": "linear-equations",
            "equation_type": params.equation_type,
            "equation": equation,
            "solution": x,
        },
    )


# ---------------------------------------------------------------------------
# One-step equations
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class OneStepEquationParams:
    include_addition: bool = boolean(True, label="Addition Equations", description="x + a = b")
    include_subtraction: bool = boolean(True, label="Subtraction Equations", description="x - a = b")
    include_multiplication: bool = boolean(True, label="Multiplication Equations", description="ax = b")
    include_division: bool = boolean(True, label="Division Equations", description="x/a = b")
    include_word_problems: bool = boolean(False, label="Include Word Problems")
    include_checking: bool = boolean(True, label="Include Solution Checking")
    show_steps: bool = boolean(True, label="Show Solution Steps")
    allow_negatives: bool = boolean(True, label="Allow Negative Numbers")
    max_coefficient: int = number(10, label="Maximum Coefficient", minimum=2, maximum=20)
    max_constant: int = number(20, label="Maximum Constant", minimum=5, maximum=50)
    max_solution: int = number(15, label="Maximum Solution", minimum=5, maximum=30)
    complexity_level: str = select("basic", COMPLEXITY_LEVELS, label="Complexity Level")


class _Numbers:
    """Solution, constant and coefficient draws shared by the equation generators."""

    def __init__(self, params: Any, rng: random.Random, negatives: bool) -> None:
        self.params = params
        self.rng = rng
        self.negatives = negatives

    def maybe_negate(self, value: int, probability: float) -> int:
        return -value if self.negatives and chance(self.rng, probability) else value

    def solution(self) -> int:
        return self.maybe_negate(rand_int(self.rng, 1, self.params.max_solution), 0.3)

    def constant(self) -> int:
        return self.maybe_negate(rand_int(self.rng, 1, self.params.max_constant), 0.3)

    def coefficient(self) -> int:
        return self.maybe_negate(rand_int(self.rng, 2, self.params.max_coefficient), 0.2)


def _additive_steps(shift: int, result: int) -> list[str]:
    """Undo ``x + shift = result``."""
    equation = f"x{signed(shift)} = {result}"
    if shift >= 0:
        return [
            f"{text('To solve ')} {equation}",
            text(f"Subtract {shift} from both sides"),
            f"x{signed(shift)} - {shift} = {result} - {shift}",
        ]
    return [
        f"{text('To solve ')} {equation}",
        text(f"Add {-shift} to both sides"),
        f"x{signed(shift)} + {-shift} = {result} + {-shift}",
    ]


def _one_step_equation(kind: str, params: OneStepEquationParams, rng: random.Random) -> Problem:
    draw = _Numbers(params, rng, params.allow_negatives)
    solution = draw.solution()
    metadata: dict[str, Any] = {"problem_type": kind}

    if kind in ("addition", "subtraction"):
        constant = draw.constant()
        shift = constant if kind == "addition" else -constant
        result = solution + shift
        equation = latex = f"x{signed(shift)} = {result}"
        work = _additive_steps(shift, result)
        check = f"{paren(solution)}{signed(shift)} = {result}"
        metadata.update(constant=constant, inverse_operation="subtraction" if shift >= 0 else "addition")
    elif kind == "multiplication":
        coefficient = draw.coefficient()
        result = coefficient * solution
        equation = latex = f"{term(coefficient)} = {result}"
        work = [
            f"{text('To solve ')} {equation}",
            f"{text('Divide both sides by ')} {coefficient}",
            f"{frac_latex(term(coefficient), coefficient)} = {frac_latex(result, coefficient)}",
        ]
        check = f"{coefficient} \\times {paren(solution)} = {result}"
        metadata.update(coefficient=coefficient, inverse_operation="division")
    else:
        divisor = draw.coefficient()
        quotient = solution
        solution = quotient * divisor
        equation = f"x/{paren(divisor)} = {quotient}"
        latex = f"{frac_latex('x', divisor)} = {quotient}"
        work = [
            f"{text('To solve ')} {latex}",
            f"{text('Multiply both sides by ')} {divisor}",
            f"{frac_latex('x', divisor)} \\times {paren(divisor)} = {quotient} \\times {paren(divisor)}",
        ]
        check = f"{frac_latex(solution, divisor)} = {quotient}"
        metadata.update(divisor=divisor, inverse_operation="multiplication")

    steps = work + [f"x = {solution}"] if params.show_steps else [f"x = {solution}"]
    if params.include_checking:
        steps.append(_check(solution, check))
    question, question_latex = _solve_prompt(equation, latex)
    metadata.update(equation=equation, solution=solution)
    return Problem(
        question=question,
        question_latex=question_latex,
        answer=f"x = {solution}",
        answer_latex=f"x = {solution}",
        steps=steps,
        metadata=metadata,
    )


def _word_problem(
    kind: str,
    scenario: str,
    question: str,
    question_latex: str,
    answer: str,
    answer_latex: str,
    equation: str,
    solution: int,
    variable: str,
    work: list[str],
    show_steps: bool,
) -> Problem:
    steps: list[str] = []
    if show_steps:
        steps = [
            f"{text('Let ')} x = {text(variable)}",
            f"{text('Set up equation: ')} {equation}",
            *work,
        ]
    steps.append(f"{text('Answer: ')} x = {solution}")
    return Problem(
        question=question,
        question_latex=question_latex,
        answer=answer,
        answer_latex=answer_latex,
        steps=steps,
        metadata={
            "problem_type": f"word-{kind}",
            "scenario": scenario,
            "equation": equation,
            "solution": solution,
        },
    )


def _one_step_word_problem(kind: str, params: OneStepEquationParams, rng: random.Random) -> Problem:
    draw = _Numbers(params, rng, negatives=False)
    solution = draw.solution()
    if kind == "addition":
        constant = draw.constant()
        total = solution + constant
        return _word_problem(
            kind,
            "shopping",
            f"Sarah bought a book and spent ${constant} on lunch. She spent a total of ${total}. "
            "How much did the book cost?",
            f"{text(f'Sarah bought a book and spent {_usd(constant)} on lunch.')} \\\\ "
            f"{text(f'She spent a total of {_usd(total)}. How much did the book cost?')}",
            f"${solution}",
            f"\\${solution}",
            f"x + {constant} = {total}",
            solution,
            "cost of the book",
            [f"{text('Solve: ')} x = {total} - {constant}"],
            params.show_steps,
        )
    if kind == "subtraction":
        constant = draw.constant()
        start = solution + constant
        return _word_problem(
            kind,
            "remaining",
            f"John had ${start}. After buying lunch, he has ${solution} left. How much did lunch cost?",
            f"{text(f'John had {_usd(start)}. After buying lunch, he has {_usd(solution)} left.')} \\\\ "
            f"{text('How much did lunch cost?')}",
            f"${constant}",
            f"\\${constant}",
            f"{start} - x = {solution}",
            constant,
            "cost of lunch",
            [f"{text('Solve: ')} x = {start} - {solution}"],
            params.show_steps,
        )
    if kind == "multiplication":
        coefficient = draw.coefficient()
        total = coefficient * solution
        return _word_problem(
            kind,
            "groups",
            f"There are {coefficient} boxes, each containing the same number of items. "
            f"There are {total} items total. How many items are in each box?",
            f"{text(f'There are {coefficient} boxes, each containing the same number of items.')} \\\\ "
            f"{text(f'There are {total} items total. How many items are in each box?')}",
            f"{solution} items",
            f"{solution} {text(' items')}",
            f"{coefficient}x = {total}",
            solution,
            "items per box",
            [f"{text('Solve: ')} x = {frac_latex(total, coefficient)}"],
            params.show_steps,
        )
    groups = draw.coefficient()
    total = solution * groups
    return _word_problem(
        kind,
        "sharing",
        f"{total} students are divided equally into {groups} groups. "
        "How many students are in each group?",
        f"{text(f'{total} students are divided equally into {groups} groups.')} \\\\ "
        f"{text('How many students are in each group?')}",
        f"{solution} students",
        f"{solution} {text(' students')}",
        f"{total}/{groups} = x",
        solution,
        "students in each group",
        [f"{text('Solve: ')} x = {total} \\div {groups}"],
        params.show_steps,
    )


def synthesize_one_step_equation(params: OneStepEquationParams, rng: random.Random) -> Problem:
    kind = pick_enabled(
        rng,
        [
            ("addition", params.include_addition),
            ("subtraction", params.include_subtraction),
            ("multiplication", params.include_multiplication),
            ("division", params.include_division),
        ],
    )
    if kind is None:
        raise ConfigurationError("At least one equation type must be enabled")
    if params.include_word_problems and chance(rng, WORD_PROBLEM_CHANCE):
        return _one_step_word_problem(kind, params, rng)
    return _one_step_equation(kind, params, rng)


def _one_step_rules(params: OneStepEquationParams) -> list[str]:
    enabled = (
        params.include_addition,
        params.include_subtraction,
        params.include_multiplication,
        params.include_division,
    )
    return [] if any(enabled) else ["At least one equation type must be enabled"]


# ---------------------------------------------------------------------------
# Two-step equations
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class TwoStepEquationParams:
    include_addition_first: bool = boolean(True, label="Multiply then Add", description="mx + c = r")
    include_subtraction_first: bool = boolean(True, label="Multiply then Subtract", description="mx - c = r")
    include_multiplication_first: bool = boolean(
        True, label="Add then Multiply", description="m(x + c) = r"
    )
    include_division_first: bool = boolean(False, label="Divide then Add", description="x/d + c = r")
    include_distributive: bool = boolean(
        False, label="Distributive Property", description="m(x + a) + b = r"
    )
    include_word_problems: bool = boolean(False, label="Include Word Problems")
    include_checking: bool = boolean(True, label="Include Solution Checking")
    show_steps: bool = boolean(True, label="Show Solution Steps")
    allow_negatives: bool = boolean(True, label="Allow Negative Numbers")
    max_coefficient: int = number(8, label="Maximum Coefficient", minimum=2, maximum=15)
    max_constant: int = number(15, label="Maximum Constant", minimum=5, maximum=30)
    max_solution: int = number(12, label="Maximum Solution", minimum=5, maximum=25)
    complexity_level: str = select("basic", COMPLEXITY_LEVELS, label="Complexity Level")


def _shift_label(shift: int) -> str:
    return f"Subtract {shift} from both sides" if shift >= 0 else f"Add {-shift} to both sides"


def _undo_shift(lhs: str, shift: int, result: int) -> tuple[str, str, int]:
    """Step text and remaining equation after removing ``+ shift`` from both sides."""
    if shift >= 0:
        return (
            _shift_label(shift),
            f"{lhs}{signed(shift)} - {shift} = {result} - {shift}",
            result - shift,
        )
    return (
        _shift_label(shift),
        f"{lhs}{signed(shift)} + {-shift} = {result} + {-shift}",
        result - shift,
    )


def _multiply_shift(draw: _Numbers, kind: str) -> tuple[str, str, list[str], str, int, dict[str, Any]]:
    solution, coefficient, constant = draw.solution(), draw.coefficient(), draw.constant()
    shift = constant if kind == "multiplication-addition" else -constant
    result = coefficient * solution + shift
    equation = f"{term(coefficient)}{signed(shift)} = {result}"
    label, undo, remaining = _undo_shift(term(coefficient), shift, result)
    work = [
        f"{text('To solve ')} {equation}",
        text(f"Step 1: {label}"),
        undo,
        f"{term(coefficient)} = {remaining}",
        f"{text('Step 2: Divide both sides by ')} {coefficient}",
        f"{frac_latex(term(coefficient), coefficient)} = {frac_latex(remaining, coefficient)}",
    ]
    check = f"{coefficient}({solution}){signed(shift)} = {result}"
    meta = {"coefficient": coefficient, "constant": constant}
    return equation, equation, work, check, solution, meta


def _shift_then_multiply(draw: _Numbers) -> tuple[str, str, list[str], str, int, dict[str, Any]]:
    solution, constant, multiplier = draw.solution(), draw.constant(), draw.coefficient()
    result = (solution + constant) * multiplier
    inner = f"x{signed(constant)}"
    equation = f"{multiplier}({inner}) = {result}"
    label, undo, remaining = _undo_shift("x", constant, result // multiplier)
    work = [
        f"{text('To solve ')} {equation}",
        f"{text('Step 1: Divide both sides by ')} {multiplier}",
        f"{frac_latex(f'{multiplier}({inner})', multiplier)} = {frac_latex(result, multiplier)}",
        f"{inner} = {result // multiplier}",
        text(f"Step 2: {label}"),
        undo,
    ]
    check = f"{multiplier}({solution}{signed(constant)}) = {multiplier} \\times {paren(solution + constant)} = {result}"
    meta = {"multiplier": multiplier, "constant": constant}
    return equation, equation, work, check, remaining, meta


def _divide_then_shift(draw: _Numbers, params: TwoStepEquationParams) -> tuple[str, str, list[str], str, int, dict[str, Any]]:
    divisor = draw.coefficient()
    quotient = draw.maybe_negate(rand_int(draw.rng, 1, max(1, params.max_solution // abs(divisor))), 0.3)
    solution = quotient * divisor
    constant = draw.constant()
    result = quotient + constant
    equation = f"x/{paren(divisor)}{signed(constant)} = {result}"
    latex = f"{frac_latex('x', divisor)}{signed(constant)} = {result}"
    label, undo, remaining = _undo_shift(frac_latex("x", divisor), constant, result)
    work = [
        f"{text('To solve ')} {latex}",
        text(f"Step 1: {label}"),
        undo,
        f"{frac_latex('x', divisor)} = {remaining}",
        f"{text('Step 2: Multiply both sides by ')} {divisor}",
        f"{frac_latex('x', divisor)} \\times {paren(divisor)} = {remaining} \\times {paren(divisor)}",
    ]
    check = f"{frac_latex(solution, divisor)}{signed(constant)} = {result}"
    meta = {"divisor": divisor, "constant": constant}
    return equation, latex, work, check, solution, meta


def _distributive(draw: _Numbers) -> tuple[str, str, list[str], str, int, dict[str, Any]]:
    solution, coefficient = draw.solution(), draw.coefficient()
    inside, outside = draw.constant(), draw.constant()
    combined = coefficient * inside + outside
    result = coefficient * solution + combined
    equation = f"{coefficient}(x{signed(inside)}){signed(outside)} = {result}"
    work = [
        f"{text('To solve ')} {equation}",
        text("Step 1: Apply distributive property"),
        f"{term(coefficient)}{signed(coefficient * inside)}{signed(outside)} = {result}",
        f"{term(coefficient)}{signed(combined)} = {result}",
        text(f"Step 2: {_shift_label(combined)}"),
        f"{term(coefficient)} = {result - combined}",
        f"{text('Step 3: Divide both sides by ')} {coefficient}",
    ]
    check = f"{coefficient}({solution}{signed(inside)}){signed(outside)} = {result}"
    meta = {"coefficient": coefficient, "constants": [inside, outside]}
    return equation, equation, work, check, solution, meta


def _two_step_equation(kind: str, params: TwoStepEquationParams, rng: random.Random) -> Problem:
    draw = _Numbers(params, rng, params.allow_negatives)
    if kind in ("multiplication-addition", "multiplication-subtraction"):
        parts = _multiply_shift(draw, kind)
    elif kind == "addition-multiplication":
        parts = _shift_then_multiply(draw)
    elif kind == "division-addition":
        parts = _divide_then_shift(draw, params)
    else:
        parts = _distributive(draw)
    equation, latex, work, check, solution, meta = parts

    steps = work + [f"x = {solution}"] if params.show_steps else [f"x = {solution}"]
    if params.include_checking:
        steps.append(_check(solution, check))
    question, question_latex = _solve_prompt(equation, latex)
    return Problem(
        question=question,
        question_latex=question_latex,
        answer=f"x = {solution}",
        answer_latex=f"x = {solution}",
        steps=steps,
        metadata={"problem_type": kind, "equation": equation, "solution": solution, **meta},
    )


def _two_step_word_problem(kind: str, params: TwoStepEquationParams, rng: random.Random) -> Problem | None:
    draw = _Numbers(params, rng, negatives=False)
    if kind == "multiplication-addition":
        solution, rate, fee = draw.solution(), draw.coefficient(), draw.constant()
        total = rate * solution + fee
        return _word_problem(
            kind,
            "rental",
            f"A car rental company charges ${rate} per day plus a ${fee} fee. "
            f"The total cost was ${total}. How many days was the car rented?",
            f"{text(f'A car rental company charges {_usd(rate)} per day plus a {_usd(fee)} fee.')} \\\\ "
            f"{text(f'The total cost was {_usd(total)}. How many days was the car rented?')}",
            f"{solution} days",
            f"{solution} {text(' days')}",
            f"{rate}x + {fee} = {total}",
            solution,
            "number of days",
            [
                text("Solve the equation:"),
                text(f"Step 1: Subtract \\${fee} from both sides"),
                text(f"Step 2: Divide by \\${rate}"),
            ],
            params.show_steps,
        )
    if kind == "multiplication-subtraction":
        solution, weekly = draw.solution(), draw.coefficient()
        spent = rand_int(rng, 1, min(params.max_constant, weekly * solution - 1))
        left = weekly * solution - spent
        return _word_problem(
            kind,
            "savings",
            f"Maria saves ${weekly} each week. After spending ${spent} on a gift, she has ${left} left. "
            "For how many weeks has she been saving?",
            f"{text(f'Maria saves {_usd(weekly)} each week. After spending {_usd(spent)} on a gift,')} \\\\ "
            f"{text(f'she has {_usd(left)} left. For how many weeks has she been saving?')}",
            f"{solution} weeks",
            f"{solution} {text(' weeks')}",
            f"{weekly}x - {spent} = {left}",
            solution,
            "number of weeks",
            [
                text("Solve the equation:"),
                text(f"Step 1: Add \\${spent} to both sides"),
                text(f"Step 2: Divide by \\${weekly}"),
            ],
            params.show_steps,
        )
    return None


def synthesize_two_step_equation(params: TwoStepEquationParams, rng: random.Random) -> Problem:
    kind = pick_enabled(
        rng,
        [
            ("multiplication-addition", params.include_addition_first),
            ("multiplication-subtraction", params.include_subtraction_first),
            ("addition-multiplication", params.include_multiplication_first),
            ("division-addition", params.include_division_first),
            ("distributive", params.include_distributive),
        ],
    )
    if kind is None:
        raise ConfigurationError("At least one equation type must be enabled")
    if params.include_word_problems and chance(rng, WORD_PROBLEM_CHANCE):
        problem = _two_step_word_problem(kind, params, rng)
        if problem is not None:
            return problem
        logger.debug("No word scenario for %s; using the plain equation", kind)
    return _two_step_equation(kind, params, rng)


def _two_step_rules(params: TwoStepEquationParams) -> list[str]:
    enabled = (
        params.include_addition_first,
        params.include_subtraction_first,
        params.include_multiplication_first,
        params.include_division_first,
        params.include_distributive,
    )
    return [] if any(enabled) else ["At least one equation type must be enabled"]


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


GENERATORS: tuple[Generator, ...] = (
    Generator(
        key="linear-equations",
        name="Linear Equations",
        description="Generate linear equations to solve for x (ax + b = c format)",
        category="algebra",
        difficulty="medium",
        tags=("algebra", "equations", "solving", "variables"),
        grade_level="8-12",
        estimated_time="120 seconds",
        params_type=LinearEquationParams,
        synthesize=synthesize_linear_equation,
        rules=combine_rules(
            ordered("min_coefficient", "max_coefficient", "Minimum coefficient cannot exceed maximum coefficient"),
            ordered("min_constant", "max_constant", "Minimum constant cannot exceed maximum constant"),
        ),
        presets=(
            Preset(
                "one-step",
                "One-Step",
                "Equations of the form x + b = c or ax = c",
                {"equation_type": "one-step"},
            ),
            Preset(
                "positive-two-step",
                "Positive Two-Step",
                "ax + b = c with positive numbers only",
                {"equation_type": "two-step", "allow_negatives": False},
            ),
            Preset(
                "multi-step",
                "Multi-Step",
                "Grouping and variables on both sides",
                {"equation_type": "multi-step"},
            ),
        ),
    ),
    Generator(
        key="one-step-equations",
        name="One-Step Equations",
        description="Solve one-step linear equations using inverse operations",
        category="pre-algebra",
        difficulty="medium",
        tags=("equations", "solving", "inverse operations", "algebra"),
        grade_level="6-9",
        estimated_time="45 seconds",
        params_type=OneStepEquationParams,
        synthesize=synthesize_one_step_equation,
        rules=_one_step_rules,
        complexity={
            "basic": LevelRule(caps={"max_solution": 10}),
            "intermediate": LevelRule(),
            "advanced": LevelRule(
                floors={"max_solution": 20},
                defaults={"allow_negatives": True, "include_word_problems": True},
            ),
        },
        presets=(
            Preset(
                "basic-equations",
                "Basic Equations",
                "Addition, subtraction and multiplication with positive numbers",
                {
                    "include_division": False,
                    "allow_negatives": False,
                    "max_coefficient": 6,
                    "max_constant": 15,
                    "max_solution": 10,
                    "complexity_level": "basic",
                },
            ),
            Preset(
                "all-operations",
                "All Operations",
                "All four inverse operations",
                {"max_coefficient": 8, "complexity_level": "intermediate"},
            ),
            Preset(
                "word-problems",
                "Word Problems",
                "Real-world one-step problems",
                {
                    "include_division": False,
                    "include_word_problems": True,
                    "include_checking": False,
                    "allow_negatives": False,
                    "max_coefficient": 5,
                    "max_constant": 12,
                    "max_solution": 10,
                },
            ),
            Preset(
                "with-negatives",
                "Including Negatives",
                "Equations with negative numbers",
                {"allow_negatives": True, "max_constant": 15, "max_solution": 12, "complexity_level": "intermediate"},
            ),
            Preset(
                "comprehensive-equations",
                "Comprehensive Practice",
                "Every equation type plus word problems",
                {"include_word_problems": True, "complexity_level": "intermediate"},
            ),
        ),
    ),
    Generator(
        key="two-step-equations",
        name="Two-Step Equations",
        description="Solve two-step linear equations using inverse operations in the correct order",
        category="pre-algebra",
        difficulty="medium",
        tags=("equations", "solving", "two-step", "algebra"),
        grade_level="7-9",
        estimated_time="60 seconds",
        params_type=TwoStepEquationParams,
        synthesize=synthesize_two_step_equation,
        rules=_two_step_rules,
        complexity={
            "basic": LevelRule(caps={"max_solution": 8}),
            "intermediate": LevelRule(),
            "advanced": LevelRule(
                floors={"max_solution": 15},
                defaults={"include_division_first": True, "include_distributive": True},
            ),
        },
        presets=(
            Preset(
                "basic-two-step",
                "Basic Two-Step",
                "Simple two-step equations with whole numbers",
                {
                    "include_multiplication_first": False,
                    "allow_negatives": False,
                    "max_coefficient": 5,
                    "max_constant": 10,
                    "max_solution": 8,
                    "complexity_level": "basic",
                },
            ),
            Preset(
                "all-structures",
                "All Structures",
                "Practice all types of two-step equations",
                {"include_division_first": True, "complexity_level": "intermediate"},
            ),
            Preset(
                "with-distribution",
                "With Distribution",
                "Include distributive property problems",
                {
                    "include_multiplication_first": False,
                    "include_distributive": True,
                    "include_checking": False,
                    "max_coefficient": 6,
                    "max_constant": 12,
                    "max_solution": 10,
                    "complexity_level": "intermediate",
                },
            ),
            Preset(
                "word-problems",
                "Word Problems",
                "Real-world problems with two-step equations",
                {
                    "include_multiplication_first": False,
                    "include_word_problems": True,
                    "include_checking": False,
                    "allow_negatives": False,
                    "max_coefficient": 6,
                    "max_constant": 10,
                    "max_solution": 10,
                },
            ),
            Preset(
                "advanced-two-step",
                "Advanced Two-Step",
                "Every structure including division and distribution",
                {
                    "include_division_first": True,
                    "include_distributive": True,
                    "include_checking": False,
                    "max_coefficient": 10,
                    "max_constant": 18,
                    "max_solution": 15,
                    "complexity_level": "advanced",
                },
            ),
            Preset(
                "comprehensive-two-step",
                "Comprehensive Practice",
                "Complete practice with all two-step concepts",
                {
                    "include_division_first": True,
                    "include_distributive": True,
                    "include_word_problems": True,
                    "complexity_level": "intermediate",
                },
            ),
        ),
    ),
)
