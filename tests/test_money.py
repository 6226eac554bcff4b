from __future__ import annotations

from decimal import Decimal

import pytest

from mathgen.errors import ConfigurationError
from mathgen.generators.money import (
    MakingChangeParams,
    basic_change_problem,
    choose_payment,
    draw_price,
    synthesize_making_change,
)
from mathgen.registry import get_generator
from mathgen.rng import make_rng

SEEDS = range(60)


def _dollars(text: str) -> Decimal:
    return Decimal(text.lstrip("$"))


def test_basic_change() -> None:
    problem = basic_change_problem(Decimal("3.75"), Decimal("5.00"), MakingChangeParams())
    assert problem.question == "An item costs $3.75. You pay with $5.00. How much change do you receive?"
    assert problem.answer == "$1.25"
    assert problem.answer_latex == "\\$1.25"
    assert problem.steps == [
        "\\text{Payment: } \\$5.00",
        "\\text{Cost: } \\$3.75",
        "\\text{Change: } \\$5.00 - \\$3.75 = \\$1.25",
    ]


def test_basic_change_without_steps() -> None:
    problem = basic_change_problem(Decimal("3.75"), Decimal("5.00"), MakingChangeParams(show_steps=False))
    assert problem.steps == ["\\text{Change: } \\$5.00 - \\$3.75 = \\$1.25"]


def test_payment_is_the_smallest_fitting_bill() -> None:
    params = MakingChangeParams()
    assert choose_payment(Decimal("3.75"), params, make_rng(0)) == Decimal("5.00")
    assert choose_payment(Decimal("5.00"), params, make_rng(0)) == Decimal("5.00")
    assert choose_payment(Decimal("12.10"), params, make_rng(0)) == Decimal("20.00")


def test_payment_falls_back_to_a_random_amount() -> None:
    params = MakingChangeParams(use_common_payments=False)
    for seed in SEEDS:
        payment = choose_payment(Decimal("7.40"), params, make_rng(seed))
        assert Decimal("7.41") <= payment <= Decimal("50")
    over = choose_payment(Decimal("60.00"), MakingChangeParams(), make_rng(1))
    assert over == Decimal("60.01")


def test_whole_dollar_prices() -> None:
    params = MakingChangeParams(allow_cents_in_price=False, item_price_min=0.25, item_price_max=9.5)
    for seed in SEEDS:
        price = draw_price(params, make_rng(seed))
        assert price == price.to_integral_value()
        assert Decimal(1) <= price <= Decimal(9)


def test_change_is_never_negative() -> None:
    generator = get_generator("making-change")
    for preset in ("whole-dollars", "shopping-trip", "sales-tax", "all-types"):
        for seed in SEEDS:
            problem = generator.generate(preset=preset, rng=make_rng(seed))
            assert _dollars(problem.answer) >= 0
            assert problem.answer.startswith("$")


def test_word_problems_name_the_item() -> None:
    generator = get_generator("making-change")
    seen = 0
    for seed in SEEDS:
        problem = generator.generate(rng=make_rng(seed))
        if problem.metadata["operation"] != "making-change-word":
            continue
        seen += 1
        assert problem.metadata["item"] in problem.question
        assert Decimal(str(problem.metadata["change"])) == _dollars(problem.answer)
    assert seen > 0


def test_multiple_items_total() -> None:
    generator = get_generator("making-change")
    for seed in SEEDS:
        problem = generator.generate(preset="shopping-trip", rng=make_rng(seed))
        meta = problem.metadata
        assert 2 <= len(meta["items"]) <= 3
        total = sum(Decimal(str(p)) for p in meta["items"])
        assert Decimal(str(meta["total_cost"])) == total
        assert _dollars(problem.answer) == Decimal(str(meta["payment"])) - total


def test_tax_is_rounded_to_cents() -> None:
    generator = get_generator("making-change")
    for seed in SEEDS:
        meta = generator.generate(preset="sales-tax", rng=make_rng(seed)).metadata
        price, rate = Decimal(str(meta["item_price"])), Decimal(str(meta["tax_rate"]))
        assert abs(Decimal(str(meta["tax"])) - price * rate) <= Decimal("0.005")
        assert Decimal(str(meta["total_cost"])) == price + Decimal(str(meta["tax"]))


def test_exact_change() -> None:
    params = MakingChangeParams(include_basic_change=False, include_exact_change=True)
    problem = synthesize_making_change(params, make_rng(3))
    assert problem.question.endswith("What is the exact change needed?")
    assert problem.answer == f"${problem.metadata['item_price']:.2f}"


def test_making_change_needs_a_problem_type() -> None:
    with pytest.raises(ConfigurationError, match="At least one problem type must be enabled"):
        synthesize_making_change(MakingChangeParams(include_basic_change=False), make_rng(0))


def test_price_range_rule() -> None:
    assert get_generator("making-change").check({"item_price_min": 30.0, "item_price_max": 10.0}) == [
        "Minimum item price cannot exceed maximum item price"
    ]
