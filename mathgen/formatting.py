"""Small rendering helpers for plain-text and LaTeX output."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

__all__ = [
    "format_number",
    "format_decimal",
    "round_half_up",
    "format_money",
    "latex_money",
    "signed",
    "term",
    "paren",
    "frac",
    "frac_latex",
    "text",
]

CENTS = Decimal("0.01")


def format_number(value: float | int | Decimal, places: int = 2) -> str:
    """Render integers without a decimal point, others rounded to ``places``."""
    if isinstance(value, Decimal):
        return format_decimal(value, places)
    if float(value).is_integer():
        return str(int(value))
    rendered = f"{round(float(value), places):.{places}f}".rstrip("0").rstrip(".")
    return "0" if rendered in ("-0", "") else rendered


def round_half_up(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_decimal(value: Decimal, places: int = 3) -> str:
    rounded = round_half_up(value, places)
    if rounded == rounded.to_integral_value():
        return str(int(rounded))
    return format(rounded.normalize(), "f")


def format_money(amount: Decimal) -> str:
    return f"${amount.quantize(CENTS, rounding=ROUND_HALF_UP)}"


def latex_money(amount: Decimal) -> str:
    return "\\" + format_money(amount)


def signed(value: Any) -> str:
    """`` + 3`` / `` - 3`` for appending a constant to an expression."""
    return f" - {abs(value)}" if value < 0 else f" + {value}"


def term(coefficient: int, variable: str = "x") -> str:
    if coefficient == 1:
        return variable
    if coefficient == -1:
        return f"-{variable}"
    return f"{coefficient}{variable}"


def paren(value: Any) -> str:
    """Wrap negative numbers in parentheses for inline display."""
    return f"({value})" if value < 0 else str(value)


def frac(numerator: int, denominator: int) -> str:
    return f"{numerator}/{denominator}"


def frac_latex(numerator: Any, denominator: Any) -> str:
    return f"\\frac{{{numerator}}}{{{denominator}}}"


def text(value: str) -> str:
    return f"\\text{{{value}}}"
