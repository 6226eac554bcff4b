"""Making-change problems computed in ``Decimal`` cents."""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from decimal import Decimal

from ..constants import CHANGE_WORD_PROBLEM_CHANCE, COMMON_PAYMENTS, SHOP_ITEMS, TAX_RATES
from ..errors import ConfigurationError
from ..formatting import CENTS, format_decimal, format_money, latex_money, round_half_up, text
from ..generator import Generator
from ..problem import Preset, Problem
from ..rng import chance, pick, pick_enabled, rand_decimal, rand_int
from ..schema import boolean, combine_rules, number, ordered

logger = logging.getLogger(__name__)

__all__ = ["MakingChangeParams", "draw_price", "choose_payment", "basic_change_problem", "GENERATOR"]


@dataclass(slots=True)
class MakingChangeParams:
    include_basic_change: bool = boolean(True, label="Basic Change")
    include_multiple_items: bool = boolean(False, label="Multiple Items")
    include_tax_calculation: bool = boolean(False, label="Include Tax")
    include_exact_change: bool = boolean(False, label="Exact Change")
    include_word_problems: bool = boolean(True, label="Include Word Problems")
    item_price_min: float = number(0.25, label="Minimum Item Price", minimum=0.01, maximum=100, integer=False)
    item_price_max: float = number(20.0, label="Maximum Item Price", minimum=0.01, maximum=1000, integer=False)
    allow_cents_in_price: bool = boolean(True, label="Allow Cents in Prices")
    payment_min: float = number(1.0, label="Minimum Payment", minimum=0.01, maximum=100, integer=False)
    payment_max: float = number(50.0, label="Maximum Payment", minimum=1, maximum=10000, integer=False)
    use_common_payments: bool = boolean(True, label="Use Common Payments")
    show_steps: bool = boolean(True, label="Show Calculation Steps")
    max_items: int = number(3, label="Maximum Items", minimum=2, maximum=5)


def draw_price(params: MakingChangeParams, rng: random.Random) -> Decimal:
    if params.allow_cents_in_price:
        return rand_decimal(rng, params.item_price_min, params.item_price_max)
    low = max(1, math.ceil(params.item_price_min))
    high = max(1, math.floor(params.item_price_max))
    return Decimal(rand_int(rng, low, high)).quantize(CENTS)


def choose_payment(cost: Decimal, params: MakingChangeParams, rng: random.Random) -> Decimal:
    """Smallest common bill covering ``cost`` inside the payment range.

    Without a fitting bill, a random amount of at least ``cost`` is drawn.
    """
    if params.use_common_payments:
        low, high = Decimal(str(params.payment_min)), Decimal(str(params.payment_max))
        fitting = [amount for amount in COMMON_PAYMENTS if amount >= cost and low <= amount <= high]
        if fitting:
            return min(fitting).quantize(CENTS)
    floor = max(cost + CENTS, Decimal(str(params.payment_min)))
    ceiling = max(floor, Decimal(str(params.payment_max)))
    return rand_decimal(rng, floor, ceiling)


def _change_step(payment: Decimal, cost: Decimal) -> str:
    return f"{text('Change: ')} {latex_money(payment)} - {latex_money(cost)} = {latex_money(payment - cost)}"


def _escape(value: str) -> str:
    return value.replace("$", r"\$")


def _ask(cost_text: str, payment: Decimal) -> str:
    return f"{cost_text}. You pay with {format_money(payment)}. How much change do you receive?"


def basic_change_problem(price: Decimal, payment: Decimal, params: MakingChangeParams) -> Problem:
    change = payment - price
    steps = [_change_step(payment, price)]
    if params.show_steps:
        steps[:0] = [f"{text('Payment: ')} {latex_money(payment)}", f"{text('Cost: ')} {latex_money(price)}"]
    return Problem(
        question=_ask(f"An item costs {format_money(price)}", payment),
        question_latex=(
            f"{text('An item costs ')} {latex_money(price)}{text('. You pay with ')} "
            f"{latex_money(payment)}{text('. How much change do you receive?')}"
        ),
        answer=format_money(change),
        answer_latex=latex_money(change),
        steps=steps,
        metadata={
            "operation": "making-change-basic",
            "item_price": float(price),
            "payment": float(payment),
            "change": float(change),
            "estimated_time": "45 seconds",
        },
    )


def _article(noun: str) -> str:
    return f"an {noun}" if noun[0] in "aeiou" else f"a {noun}"


def _word_problem(price: Decimal, payment: Decimal, params: MakingChangeParams, rng: random.Random) -> Problem:
    item = _article(pick(rng, SHOP_ITEMS))
    cost, paid = format_money(price), format_money(payment)
    scenarios = (
        ("shopping", f"Sarah buys {item} for {cost}. She pays with {paid}.", "How much change should she receive?"),
        (
            "store",
            f"At the store, {item} costs {cost}. Mike gives the cashier {paid}.",
            "What change does Mike get back?",
        ),
        (
            "purchase",
            f"Emma wants to buy {item} that costs {cost}. She hands the clerk {paid}.",
            "How much money will she receive in change?",
        ),
    )
    kind, setup, ask = pick(rng, scenarios)
    change = payment - price
    if params.show_steps:
        steps = [
            f"{text('Amount paid: ')} {latex_money(payment)}",
            f"{text('Cost of item: ')} {latex_money(price)}",
            _change_step(payment, price),
        ]
    else:
        steps = [f"{text('Change: ')} {latex_money(change)}"]
    return Problem(
        question=f"{setup}\n\n{ask}",
        question_latex=f"{text(_escape(setup))} \\\\ {text(ask)}",
        answer=format_money(change),
        answer_latex=latex_money(change),
        steps=steps,
        metadata={
            "operation": "making-change-word",
            "scenario": kind,
            "item": item.split(" ", 1)[1],
            "item_price": float(price),
            "payment": float(payment),
            "change": float(change),
        },
    )


def _basic(params: MakingChangeParams, rng: random.Random) -> Problem:
    price = draw_price(params, rng)
    payment = choose_payment(price, params, rng)
    if params.include_word_problems and chance(rng, CHANGE_WORD_PROBLEM_CHANCE):
        return _word_problem(price, payment, params, rng)
    return basic_change_problem(price, payment, params)


def _multiple_items(params: MakingChangeParams, rng: random.Random) -> Problem:
    prices = [draw_price(params, rng) for _ in range(rand_int(rng, 2, params.max_items))]
    total = sum(prices, Decimal("0"))
    payment = choose_payment(total, params, rng)
    change = payment - total
    listing = ", ".join(format_money(p) for p in prices)
    question = _ask(f"You buy items costing {listing}", payment)
    steps = [_change_step(payment, total)]
    if params.show_steps:
        steps[:0] = [
            f"{text('Item costs: ')} {' + '.join(latex_money(p) for p in prices)}",
            f"{text('Total cost: ')} {latex_money(total)}",
            f"{text('Payment: ')} {latex_money(payment)}",
        ]
    return Problem(
        question=question,
        question_latex=(
            f"{text('You buy items costing ')} {', '.join(latex_money(p) for p in prices)}"
            f"{text('. You pay with ')} {latex_money(payment)}{text('. How much change do you receive?')}"
        ),
        answer=format_money(change),
        answer_latex=latex_money(change),
        steps=steps,
        metadata={
            "operation": "making-change-multiple",
            "items": [float(p) for p in prices],
            "total_cost": float(total),
            "payment": float(payment),
            "change": float(change),
            "estimated_time": "75 seconds",
        },
    )


def _with_tax(params: MakingChangeParams, rng: random.Random) -> Problem:
    price = draw_price(params, rng)
    rate = pick(rng, TAX_RATES)
    tax = round_half_up(price * rate, 2)
    total = price + tax
    payment = choose_payment(total, params, rng)
    change = payment - total
    percent = format_decimal(rate * 100, 1)
    question = _ask(f"An item costs {format_money(price)} plus {percent}% tax", payment)
    steps = [_change_step(payment, total)]
    if params.show_steps:
        steps[:0] = [
            f"{text('Item price: ')} {latex_money(price)}",
            rf"{text('Tax: ')} {latex_money(price)} \times {percent}\% = {latex_money(tax)}",
            f"{text('Total cost: ')} {latex_money(price)} + {latex_money(tax)} = {latex_money(total)}",
        ]
    return Problem(
        question=question,
        question_latex=(
            rf"{text('An item costs ')} {latex_money(price)} {text(' plus ')} {percent}\% "
            f"{text(' tax. You pay with ')} {latex_money(payment)}{text('. How much change do you receive?')}"
        ),
        answer=format_money(change),
        answer_latex=latex_money(change),
        steps=steps,
        metadata={
            "operation": "making-change-tax",
            "item_price": float(price),
            "tax_rate": float(rate),
            "tax": float(tax),
            "total_cost": float(total),
            "payment": float(payment),
            "change": float(change),
            "estimated_time": "90 seconds",
        },
    )


def _exact_change(params: MakingChangeParams, rng: random.Random) -> Problem:
    price = draw_price(params, rng)
    return Problem(
        question=f"An item costs {format_money(price)}. What is the exact change needed?",
        question_latex=(
            f"{text('An item costs ')} {latex_money(price)}{text('. What is the exact change needed?')}"
        ),
        answer=format_money(price),
        answer_latex=latex_money(price),
        steps=[text("Exact change means paying the exact amount"), f"{text('Answer: ')} {latex_money(price)}"],
        metadata={"operation": "exact-change", "item_price": float(price), "estimated_time": "30 seconds"},
    )


def synthesize_making_change(params: MakingChangeParams, rng: random.Random) -> Problem:
    builder = pick_enabled(
        rng,
        [
            (_basic, params.include_basic_change),
            (_multiple_items, params.include_multiple_items),
            (_with_tax, params.include_tax_calculation),
            (_exact_change, params.include_exact_change),
        ],
    )
    if builder is None:
        raise ConfigurationError("At least one problem type must be enabled")
    return builder(params, rng)


GENERATOR = Generator(
    key="making-change",
    name="Making Change",
    description="Generate problems about calculating change from purchases",
    category="money-finance",
    difficulty="medium",
    tags=("money", "change", "subtraction", "purchases", "transactions"),
    grade_level="2-8",
    estimated_time="60 seconds",
    params_type=MakingChangeParams,
    synthesize=synthesize_making_change,
    rules=combine_rules(
        ordered("item_price_min", "item_price_max", "Minimum item price cannot exceed maximum item price"),
        ordered("payment_min", "payment_max", "Minimum payment cannot exceed maximum payment"),
    ),
    presets=(
        Preset(
            "whole-dollars",
            "Whole Dollars",
            "Prices without cents, paid with common bills",
            {"allow_cents_in_price": False, "include_word_problems": False},
        ),
        Preset(
            "shopping-trip",
            "Shopping Trip",
            "Several items bought together",
            {"include_basic_change": False, "include_multiple_items": True},
        ),
        Preset(
            "sales-tax",
            "Sales Tax",
            "Add sales tax before working out the change",
            {"include_basic_change": False, "include_tax_calculation": True},
        ),
        Preset(
            "all-types",
            "All Problem Types",
            "Basic, multiple items, tax and exact change",
            {"include_multiple_items": True, "include_tax_calculation": True, "include_exact_change": True},
        ),
    ),
)
