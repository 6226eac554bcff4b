from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

import pytest
import sympy as sp

from mathgen.errors import ConfigurationError, UnsupportedConversionError
from mathgen.generators.measurement import (
    MetricImperialParams,
    UnitConversionParams,
    convert_temperature,
    direct_conversion_problem,
    find_chain,
    metric_imperial_conversions,
    synthesize_metric_imperial,
    synthesize_unit_conversion,
    unit_conversions,
)
from mathgen.registry import get_generator
from mathgen.rng import make_rng

SEEDS = range(60)


def _conversion(conversions, source, target):
    return next(c for c in conversions if (c.source, c.target) == (source, target))


def test_temperature_conversions_are_exact() -> None:
    assert convert_temperature(100, "C", "F") == 212
    assert convert_temperature(32, "F", "C") == 0
    assert convert_temperature(0, "C", "K") == sp.Rational("273.15")
    assert convert_temperature(212, "F", "K") == sp.Rational("373.15")
    assert convert_temperature(7, "K", "K") == 7


def test_unsupported_temperature_conversion() -> None:
    with pytest.raises(UnsupportedConversionError, match="Unsupported temperature conversion: C to R"):
        convert_temperature(10, "C", "R")
    with pytest.raises(UnsupportedConversionError):
        convert_temperature(10, "C", "K", scales=("C", "F"))


def test_unsupported_conversion_is_a_configuration_error() -> None:
    assert issubclass(UnsupportedConversionError, ConfigurationError)


def test_system_switches_filter_conversions() -> None:
    params = UnitConversionParams(include_imperial_to_imperial=False)
    kinds = {c.kind for c in unit_conversions("length", params)}
    assert kinds == {"metric-metric"}
    crossing = UnitConversionParams(include_metric_to_imperial=True)
    assert ("cm", "in") in {(c.source, c.target) for c in unit_conversions("length", crossing)}


def test_time_and_kelvin_are_always_allowed() -> None:
    params = UnitConversionParams(include_metric_to_metric=False, include_imperial_to_imperial=False)
    assert len(unit_conversions("time", params)) == 6
    pairs = {(c.source, c.target) for c in unit_conversions("temperature", params)}
    assert pairs == {("C", "K"), ("K", "C"), ("F", "K"), ("K", "F")}


def test_unit_conversion_answers_apply_the_factor() -> None:
    params = UnitConversionParams(include_weight=False, include_volume=False)
    for seed in SEEDS:
        problem = synthesize_unit_conversion(params, make_rng(seed))
        meta = problem.metadata
        conversion = next(
            c for c in unit_conversions("length", params)
            if (c.source_name, c.target_name) == (meta["from_unit"], meta["to_unit"])
        )
        exact = sp.Rational(str(meta["from_value"])) * sp.Rational(conversion.factor)
        expected = (Decimal(int(exact.p)) / Decimal(int(exact.q))).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
        assert meta["to_value"] == float(expected)
        assert problem.answer.endswith(meta["to_unit"])
        assert problem.steps[-1].startswith("\\text{Answer: }")


def test_whole_number_conversions() -> None:
    generator = get_generator("unit-conversion")
    for seed in SEEDS:
        meta = generator.generate(preset="whole-numbers", rng=make_rng(seed)).metadata
        assert float(meta["from_value"]).is_integer()
        assert float(meta["to_value"]).is_integer()


def test_show_formulas_adds_the_factor_line() -> None:
    params = UnitConversionParams(include_weight=False, include_volume=False, show_formulas=True)
    problem = synthesize_unit_conversion(params, make_rng(2))
    assert problem.steps[0].startswith("\\text{Conversion factor: }")


def test_no_valid_conversions() -> None:
    params = UnitConversionParams(
        include_weight=False,
        include_volume=False,
        include_metric_to_metric=False,
        include_imperial_to_imperial=False,
    )
    with pytest.raises(ConfigurationError, match="No valid conversions available for length with current settings"):
        synthesize_unit_conversion(params, make_rng(0))


def test_measurement_type_required() -> None:
    params = UnitConversionParams(include_length=False, include_weight=False, include_volume=False)
    with pytest.raises(ConfigurationError, match="At least one measurement type must be enabled"):
        synthesize_unit_conversion(params, make_rng(0))


def test_chains_never_revisit_a_unit() -> None:
    conversions = unit_conversions("length", UnitConversionParams())
    for seed in SEEDS:
        chain = find_chain(conversions, 3, make_rng(seed))
        assert chain is not None
        assert len(chain) == 2
        assert chain[0].target == chain[1].source
        assert chain[1].target != chain[0].source


def test_find_chain_without_conversions() -> None:
    assert find_chain([], 2, make_rng(0)) is None


def test_chain_conversion_problems() -> None:
    generator = get_generator("unit-conversion")
    seen = 0
    for seed in range(100):
        problem = generator.generate(preset="chain-conversions", rng=make_rng(seed))
        if problem.metadata["operation"] != "chain-conversion":
            continue
        seen += 1
        meta = problem.metadata
        assert len(meta["units"]) == meta["chain_length"]
        assert len(set(meta["units"])) == meta["chain_length"]
        assert meta["estimated_time"] == "120 seconds"
        assert problem.steps[0].startswith("\\text{Chain conversion: }")
    assert seen > 0


def test_kilometers_to_miles() -> None:
    params = MetricImperialParams()
    conversion = _conversion(metric_imperial_conversions("length", params), "km", "mi")
    problem = direct_conversion_problem(conversion, Decimal(5), params)
    assert problem.question == "Convert 5 kilometers to miles"
    assert problem.answer == "3.11 miles"
    assert problem.metadata["is_approximate"] is True
    assert problem.metadata["from_system"] == "metric"


def test_approximate_versus_exact_suffix() -> None:
    params = MetricImperialParams(show_approximate_vs_exact=True)
    conversion = _conversion(metric_imperial_conversions("length", params), "km", "mi")
    problem = direct_conversion_problem(conversion, Decimal(5), params)
    assert problem.answer == "3.11 miles (≈3.107 exact)"
    assert problem.steps[0].startswith("\\text{Approximate factor: }")


def test_precision_switches() -> None:
    common = metric_imperial_conversions("length", MetricImperialParams())
    assert all(c.approximate for c in common)
    precise = metric_imperial_conversions(
        "length", MetricImperialParams(include_common_conversions=False, include_precise_conversions=True)
    )
    assert precise and not any(c.approximate for c in precise)


def test_direction_switches() -> None:
    params = MetricImperialParams(include_imperial_to_metric=False)
    assert all(c.source_system == "metric" for c in metric_imperial_conversions("weight", params))


def test_temperature_ignores_precision_switches() -> None:
    params = MetricImperialParams(include_common_conversions=False)
    pairs = {(c.source, c.target) for c in metric_imperial_conversions("temperature", params)}
    assert pairs == {("C", "F"), ("F", "C")}


def test_fahrenheit_steps() -> None:
    params = MetricImperialParams()
    conversion = _conversion(metric_imperial_conversions("temperature", params), "C", "F")
    problem = direct_conversion_problem(conversion, Decimal(100), params)
    assert problem.answer == "212 Fahrenheit"
    assert problem.steps == [
        "°F = °C \\times \\frac{9}{5} + 32",
        "°F = 100 \\times \\frac{9}{5} + 32",
        "°F = 180 + 32",
        "°F = 212",
    ]


def test_word_problems_fill_the_scenario() -> None:
    generator = get_generator("metric-imperial")
    seen = 0
    for seed in range(100):
        problem = generator.generate(preset="real-world", rng=make_rng(seed))
        meta = problem.metadata
        if meta["operation"] != "metric-imperial-word-problem":
            continue
        seen += 1
        assert meta["from_unit"] in problem.question
        assert meta["to_unit"] in problem.question
        assert "{" not in problem.question
    assert seen > 0


def test_metric_imperial_without_conversions() -> None:
    params = MetricImperialParams(include_weight=False, include_volume=False, include_approximations=False)
    with pytest.raises(ConfigurationError, match="No valid conversions available for length"):
        synthesize_metric_imperial(params, make_rng(0))


def test_temperature_word_problems_use_degree_symbols() -> None:
    params = MetricImperialParams(
        include_length=False,
        include_weight=False,
        include_volume=False,
        include_temperature=True,
        include_word_problems=True,
    )
    seen = 0
    for seed in range(100):
        problem = synthesize_metric_imperial(params, make_rng(seed))
        meta = problem.metadata
        if meta["operation"] != "metric-imperial-word-problem":
            continue
        seen += 1
        assert f"°{meta['from_unit'][0]}" in problem.question
        assert f"°{meta['to_unit'][0]}" in problem.question
        assert "°Celsius" not in problem.question
        assert "°Fahrenheit" not in problem.question
    assert seen > 0
