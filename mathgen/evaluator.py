"""Arithmetic evaluator that records one display step per reduction.

Expressions are tokenized, parsed into a small tree by recursive descent and
then reduced in the classroom order:

1. powers whose base and exponent are plain numbers, leftmost first;
2. the deepest parenthesised group (leftmost among equals), evaluated flat in
   a single step, after which powers are checked again;
3. multiplication and division, left to right, one operator per step;
4. addition and subtraction, left to right, one operator per step.

Every reduction re-renders the whole tree and appends it to ``steps``.
Groups left holding a bare number are dropped, and a rendering equal to the
previous step is not recorded twice. Each reduced value is rounded to two
decimal places when it is not whole, so the rendered steps and the final
value always agree.

>>> evaluate("2 + 3 × (4 - 1)").steps
['2 + 3 × (4 - 1)', '2 + 3 × 3', '2 + 9', '11']
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Callable, Union

from .errors import EvaluationDivisionByZero, ExpressionError, MalformedExpressionError
from .formatting import format_number

logger = logging.getLogger(__name__)

__all__ = [
    "Token",
    "Number",
    "Group",
    "BinaryOp",
    "Negate",
    "Evaluation",
    "tokenize",
    "parse",
    "render",
    "render_latex",
    "evaluate",
]

_SYMBOLS = {
    "+": "+",
    "-": "-",
    "−": "-",
    "×": "×",
    "*": "×",
    "x": "×",
    "÷": "÷",
    "/": "÷",
    "^": "^",
    "**": "^",
}
_TOKEN_RE = re.compile(r"\s*(?:(\d+(?:\.\d+)?|\.\d+)|(\*\*|[-+−×*x÷/^()]))")
_LATEX_OPS = {"+": "+", "-": "-", "×": "\\times", "÷": "\\div"}


@dataclass(frozen=True, slots=True)
class Token:
    kind: str  # number | op | lparen | rparen
    text: str
    pos: int


@dataclass(frozen=True, slots=True)
class Number:
    value: float


@dataclass(frozen=True, slots=True)
class Group:
    inner: "Node"


@dataclass(frozen=True, slots=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True, slots=True)
class Negate:
    operand: "Node"


Node = Union[Number, Group, BinaryOp, Negate]


@dataclass(slots=True)
class Evaluation:
    value: float
    steps: list[str] = field(default_factory=list)

    @property
    def display(self) -> str:
        return format_number(self.value)


# ---------------------------------------------------------------------------
# Tokenizer and parser
# ---------------------------------------------------------------------------


def tokenize(text: str) -> list[Token]:
    source = text.rstrip()
    tokens: list[Token] = []
    pos = 0
    while pos < len(source):
        match = _TOKEN_RE.match(source, pos)
        if match is None:
            bad = len(source) - len(source[pos:].lstrip())
            raise MalformedExpressionError(
                f"Unexpected character {source[bad]!r} at position {bad}"
            )
        number, symbol = match.groups()
        if number is not None:
            tokens.append(Token("number", number, match.start(1)))
        elif symbol == "(":
            tokens.append(Token("lparen", symbol, match.start(2)))
        elif symbol == ")":
            tokens.append(Token("rparen", symbol, match.start(2)))
        else:
            tokens.append(Token("op", _SYMBOLS[symbol], match.start(2)))
        pos = match.end()
    if not tokens:
        raise MalformedExpressionError("Empty expression")
    return tokens


class _Parser:
    """Recursive-descent parser over the token list.

    Grammar::

        expr  := term (('+' | '-') term)*
        term  := unary (('×' | '÷') unary)*
        unary := '-' unary | power
        power := atom ('^' unary)?
        atom  := NUMBER | '(' expr ')'
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.index = 0

    def peek(self) -> Token | None:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _fail(self, expected: str) -> MalformedExpressionError:
        token = self.peek()
        if token is None:
            return MalformedExpressionError(f"Expected {expected} at end of expression")
        return MalformedExpressionError(
            f"Expected {expected} at position {token.pos}, found {token.text!r}"
        )

    def parse(self) -> Node:
        node = self.expr()
        if self.peek() is not None:
            raise self._fail("an operator")
        return node

    def expr(self) -> Node:
        node = self.term()
        while (tok := self.peek()) is not None and tok.kind == "op" and tok.text in "+-":
            self.advance()
            node = BinaryOp(tok.text, node, self.term())
        return node

    def term(self) -> Node:
        node = self.unary()
        while (tok := self.peek()) is not None and tok.kind == "op" and tok.text in "×÷":
            self.advance()
            node = BinaryOp(tok.text, node, self.unary())
        return node

    def unary(self) -> Node:
        tok = self.peek()
        if tok is not None and tok.kind == "op" and tok.text == "-":
            self.advance()
            operand = self.unary()
            if isinstance(operand, Number):
                return Number(-operand.value)
            return Negate(operand)
        return self.power()

    def power(self) -> Node:
        base = self.atom()
        tok = self.peek()
        if tok is not None and tok.kind == "op" and tok.text == "^":
            self.advance()
            return BinaryOp("^", base, self.unary())
        return base

    def atom(self) -> Node:
        tok = self.peek()
        if tok is None:
            raise self._fail("a number or '('")
        if tok.kind == "number":
            self.advance()
            return Number(float(tok.text))
        if tok.kind == "lparen":
            self.advance()
            inner = self.expr()
            closing = self.peek()
            if closing is None or closing.kind != "rparen":
                raise self._fail("')'")
            self.advance()
            return Group(inner)
        raise self._fail("a number or '('")


def parse(text: str) -> Node:
    return _Parser(tokenize(text)).parse()


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render_operand(node: Node, latex: bool) -> str:
    if isinstance(node, Number) and node.value < 0:
        inner = format_number(node.value)
        return f"\\left({inner}\\right)" if latex else f"({inner})"
    return _render(node, latex)


def _render(node: Node, latex: bool) -> str:
    if isinstance(node, Number):
        return format_number(node.value)
    if isinstance(node, Group):
        inner = _render(node.inner, latex)
        return f"\\left({inner}\\right)" if latex else f"({inner})"
    if isinstance(node, Negate):
        return f"-{_render(node.operand, latex)}"
    left = _render(node.left, latex) if node.op != "^" else _render_operand(node.left, latex)
    right = _render_operand(node.right, latex)
    if node.op == "^":
        return f"{left}^{{{right}}}" if latex else f"{left} ^ {right}"
    op = _LATEX_OPS[node.op] if latex else node.op
    return f"{left} {op} {right}"


def render(node: Node) -> str:
    return _render(node, latex=False)


def render_latex(node: Node) -> str:
    return _render(node, latex=True)


# ---------------------------------------------------------------------------
# Reduction
# ---------------------------------------------------------------------------


def _round(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        raise ExpressionError("Result is not a finite number")
    return float(round(value)) if float(value).is_integer() else round(value, 2)


def _apply(op: str, left: float, right: float) -> float:
    if op == "+":
        return _round(left + right)
    if op == "-":
        return _round(left - right)
    if op == "×":
        return _round(left * right)
    if op == "÷":
        if right == 0:
            raise EvaluationDivisionByZero(f"Division by zero in {format_number(left)} ÷ 0")
        return _round(left / right)
    try:
        result = left**right
    except ZeroDivisionError as exc:
        raise EvaluationDivisionByZero("Zero raised to a negative power") from exc
    except OverflowError as exc:
        raise ExpressionError("Power is too large to evaluate") from exc
    if isinstance(result, complex):
        raise ExpressionError("Power has no real value")
    return _round(result)


def _flat_value(node: Node) -> float:
    """Evaluate a parenthesis-free subtree; the tree already encodes precedence."""
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Negate):
        return _round(-_flat_value(node.operand))
    if isinstance(node, Group):
        return _flat_value(node.inner)
    return _apply(node.op, _flat_value(node.left), _flat_value(node.right))


def _numeric_children(node: Node) -> bool:
    return (
        isinstance(node, BinaryOp)
        and isinstance(node.left, Number)
        and isinstance(node.right, Number)
    )


def _rewrite_first(
    node: Node,
    match: Callable[[Node], bool],
    reduce: Callable[[Node], Node],
) -> tuple[Node, bool]:
    """Replace the first node (children before parent, left to right) that matches."""
    if isinstance(node, BinaryOp):
        left, done = _rewrite_first(node.left, match, reduce)
        if done:
            return BinaryOp(node.op, left, node.right), True
        right, done = _rewrite_first(node.right, match, reduce)
        if done:
            return BinaryOp(node.op, node.left, right), True
    elif isinstance(node, Group):
        inner, done = _rewrite_first(node.inner, match, reduce)
        if done:
            return Group(inner), True
    elif isinstance(node, Negate):
        operand, done = _rewrite_first(node.operand, match, reduce)
        if done:
            return _fold(Negate(operand)), True
    if match(node):
        return reduce(node), True
    return node, False


def _fold(node: Node) -> Node:
    if isinstance(node, Negate) and isinstance(node.operand, Number):
        return Number(-node.operand.value)
    return node


def _unwrap(node: Node) -> Node:
    """Drop groups that hold nothing but a number."""
    if isinstance(node, Group):
        inner = _unwrap(node.inner)
        return inner if isinstance(inner, Number) else Group(inner)
    if isinstance(node, BinaryOp):
        return BinaryOp(node.op, _unwrap(node.left), _unwrap(node.right))
    if isinstance(node, Negate):
        return _fold(Negate(_unwrap(node.operand)))
    return node


def _reduce_binary(node: Node) -> Node:
    assert isinstance(node, BinaryOp)
    assert isinstance(node.left, Number) and isinstance(node.right, Number)
    return Number(_apply(node.op, node.left.value, node.right.value))


def _groups(node: Node, depth: int = 0, found: list[tuple[int, Group]] | None = None) -> list[tuple[int, Group]]:
    """Every group with its nesting depth, in left-to-right order."""
    found = [] if found is None else found
    if isinstance(node, Group):
        found.append((depth + 1, node))
        _groups(node.inner, depth + 1, found)
    elif isinstance(node, BinaryOp):
        _groups(node.left, depth, found)
        _groups(node.right, depth, found)
    elif isinstance(node, Negate):
        _groups(node.operand, depth, found)
    return found


def _is_op(*ops: str) -> Callable[[Node], bool]:
    return lambda node: _numeric_children(node) and node.op in ops  # type: ignore[union-attr]


def _step(node: Node) -> Node | None:
    """Perform the next reduction, or return ``None`` when fully reduced."""
    node_out, done = _rewrite_first(node, _is_op("^"), _reduce_binary)
    if done:
        return node_out

    groups = _groups(node)
    if groups:
        deepest = max(depth for depth, _ in groups)
        target = next(group for depth, group in groups if depth == deepest)
        node_out, _ = _rewrite_first(
            node,
            lambda candidate: candidate is target,
            lambda group: Number(_flat_value(group)),
        )
        return node_out

    for ops in (("×", "÷"), ("+", "-")):
        node_out, done = _rewrite_first(node, _is_op(*ops), _reduce_binary)
        if done:
            return node_out

    if isinstance(node, Negate):
        return _fold(Negate(Number(_flat_value(node.operand))))
    return None


def evaluate(expression: str | Node) -> Evaluation:
    """Reduce ``expression`` to a number, recording each intermediate form.

    Raises :class:`MalformedExpressionError` for unparsable input and
    :class:`EvaluationDivisionByZero` when a division by zero is reached.
    """
    node = parse(expression) if isinstance(expression, str) else expression
    steps = [render(node)]
    while not isinstance(node, Number):
        reduced = _step(node)
        if reduced is None:  # pragma: no cover - every non-number node reduces
            raise ExpressionError(f"Could not reduce {render(node)!r}")
        node = _unwrap(reduced)
        rendered = render(node)
        if rendered == steps[-1]:
            continue
        steps.append(rendered)
        logger.debug("reduced to %s", rendered)
    return Evaluation(node.value, steps)
