"""Measurement generators: general unit conversion and metric/imperial crossings.

Factors are held as SymPy rationals so that chains like ``in -> ft -> yd``
stay exact until the single rounding at the end of each step.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..constants import (
    CHAIN_ATTEMPTS,
    CHAIN_CONVERSION_CHANCE,
    CONVERSIONS,
    MEASUREMENT_SCENARIOS,
    METRIC_IMPERIAL,
    UNITS,
)
from ..errors import ConfigurationError, UnsupportedConversionError
from ..formatting import format_decimal, frac_latex, round_half_up, text
from ..generator import Generator
from ..problem import Preset, Problem
from ..rng import chance, pick, pick_enabled, rand_decimal, rand_int
from ..schema import boolean, number

logger = logging.getLogger(__name__)

__all__ = [
    "Conversion",
    "UnitConversionParams",
    "MetricImperialParams",
    "convert_temperature",
    "unit_conversions",
    "metric_imperial_conversions",
    "direct_conversion_problem",
    "GENERATORS",
]

CHAIN_LENGTH_TWO_CHANCE = 0.7
METRIC_WORD_PROBLEM_CHANCE = 0.3
VALUE_CEILING = 100

ABSOLUTE_ZERO = "273.15"


@dataclass(frozen=True, slots=True)
class Conversion:
    """One directed conversion between two units of the same measurement."""

    measurement: str
    source: str
    target: str
    factor: str = ""
    exact_factor: str = ""
    approximate: bool = False

    @property
    def source_name(self) -> str:
        return UNITS[self.measurement][self.source][0]

    @property
    def target_name(self) -> str:
        return UNITS[self.measurement][self.target][0]

    @property
    def source_system(self) -> str:
        return UNITS[self.measurement][self.source][1]

    @property
    def target_system(self) -> str:
        return UNITS[self.measurement][self.target][1]

    @property
    def kind(self) -> str:
        if self.measurement == "temperature":
            return "temperature"
        return f"{self.source_system}-{self.target_system}"

    @property
    def factor_latex(self) -> str:
        if "/" in self.factor:
            return frac_latex(*self.factor.split("/"))
        return self.factor


def _rational(value: Any) -> Any:
    from sympy import Rational

    return Rational(str(value))


def _to_decimal(value: Any) -> Decimal:
    rational = _rational(value)
    return Decimal(int(rational.p)) / Decimal(int(rational.q))


def _round(value: Any, places: int) -> Decimal:
    return round_half_up(_to_decimal(value), places)


def convert_temperature(value: Any, source: str, target: str, scales: tuple[str, ...] = ("C", "F", "K")) -> Any:
    """Convert between the given temperature ``scales`` via Celsius."""
    if source not in scales or target not in scales:
        raise UnsupportedConversionError(f"Unsupported temperature conversion: {source} to {target}")
    amount = _rational(value)
    if source == target:
        return amount
    offset = _rational(ABSOLUTE_ZERO)
    celsius = {
        "C": lambda: amount,
        "F": lambda: (amount - 32) * _rational("5/9"),
        "K": lambda: amount - offset,
    }[source]()
    return {
        "C": lambda: celsius,
        "F": lambda: celsius * _rational("9/5") + 32,
        "K": lambda: celsius + offset,
    }[target]()


def _apply(conversion: Conversion, value: Any, scales: tuple[str, ...] = ("C", "F", "K")) -> Any:
    if conversion.measurement == "temperature":
        return convert_temperature(value, conversion.source, conversion.target, scales)
    return _rational(value) * _rational(conversion.factor)


def _draw_value(rng: random.Random, max_value: int, allow_decimals: bool) -> Decimal:
    ceiling = min(max_value, VALUE_CEILING)
    if allow_decimals:
        return rand_decimal(rng, 1, ceiling, places=1)
    return Decimal(rand_int(rng, 1, ceiling))


def _show(value: Decimal) -> str:
    return format_decimal(value, 4)


def _unit(value: str, name: str) -> str:
    return f"{value} {text(' ' + name)}"


def _enabled_measurement(rng: random.Random, params: Any) -> str:
    options = [
        ("length", params.include_length),
        ("weight", params.include_weight),
        ("volume", params.include_volume),
        ("time", getattr(params, "include_time", False)),
        ("temperature", params.include_temperature),
    ]
    measurement = pick_enabled(rng, options)
    if measurement is None:
        raise ConfigurationError("At least one measurement type must be enabled")
    return measurement


def _temperature_steps(value: Decimal, source: str, target: str, result: Decimal) -> list[str]:
    shown, answer = _show(value), _show(result)
    if (source, target) == ("C", "F"):
        scaled = _show(_to_decimal(_rational(value) * _rational("9/5")))
        return [
            r"°F = °C \times \frac{9}{5} + 32",
            rf"°F = {shown} \times \frac{{9}}{{5}} + 32",
            f"°F = {scaled} + 32",
            f"°F = {answer}",
        ]
    if (source, target) == ("F", "C"):
        shifted = _show(value - 32)
        return [
            r"°C = (°F - 32) \times \frac{5}{9}",
            rf"°C = ({shown} - 32) \times \frac{{5}}{{9}}",
            rf"°C = {shifted} \times \frac{{5}}{{9}}",
            f"°C = {answer}",
        ]
    formulas = {
        ("C", "K"): ("K = °C + 273.15", f"K = {shown} + 273.15"),
        ("K", "C"): ("°C = K - 273.15", f"°C = {shown} - 273.15"),
        ("F", "K"): (
            r"K = (°F - 32) \times \frac{5}{9} + 273.15",
            rf"K = ({shown} - 32) \times \frac{{5}}{{9}} + 273.15",
        ),
        ("K", "F"): (
            r"°F = (K - 273.15) \times \frac{9}{5} + 32",
            rf"°F = ({shown} - 273.15) \times \frac{{9}}{{5}} + 32",
        ),
    }
    formula, substituted = formulas[(source, target)]
    return [formula, f"{substituted} = {answer}"]


# ---------------------------------------------------------------------------
# Unit conversion
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class UnitConversionParams:
    include_length: bool = boolean(True, label="Include Length")
    include_weight: bool = boolean(True, label="Include Weight")
    include_volume: bool = boolean(True, label="Include Volume")
    include_time: bool = boolean(False, label="Include Time")
    include_temperature: bool = boolean(False, label="Include Temperature")
    include_metric_to_metric: bool = boolean(True, label="Metric to Metric")
    include_imperial_to_imperial: bool = boolean(True, label="Imperial to Imperial")
    include_metric_to_imperial: bool = boolean(False, label="Metric to Imperial")
    include_imperial_to_metric: bool = boolean(False, label="Imperial to Metric")
    include_chain_conversions: bool = boolean(False, label="Include Chain Conversions")
    allow_decimals: bool = boolean(True, label="Allow Decimals")
    max_value: int = number(100, label="Maximum Value", minimum=1, maximum=1000)
    show_formulas: bool = boolean(False, label="Show Formulas")


def unit_conversions(measurement: str, params: UnitConversionParams) -> list[Conversion]:
    """The conversions for ``measurement`` allowed by the system switches.

    Time conversions and anything involving Kelvin are always allowed.
    """
    allowed = {
        "metric-metric": params.include_metric_to_metric,
        "imperial-imperial": params.include_imperial_to_imperial,
        "metric-imperial": params.include_metric_to_imperial,
        "imperial-metric": params.include_imperial_to_metric,
    }
    conversions = []
    for source, target, factor in CONVERSIONS[measurement]:
        conversion = Conversion(measurement, source, target, factor)
        systems = f"{conversion.source_system}-{conversion.target_system}"
        if "universal" in systems or "scientific" in systems or allowed.get(systems, False):
            conversions.append(conversion)
    return conversions


def _unit_round(value: Any, params: UnitConversionParams) -> Decimal:
    return _round(value, 3 if params.allow_decimals else 0)


def _simple_conversion(measurement: str, params: UnitConversionParams, rng: random.Random) -> Problem:
    conversions = unit_conversions(measurement, params)
    if not conversions:
        raise ConfigurationError(f"No valid conversions available for {measurement} with current settings")
    conversion = pick(rng, conversions)
    value = _draw_value(rng, params.max_value, params.allow_decimals)
    result = _unit_round(_apply(conversion, value), params)
    shown, answer = _show(value), _show(result)

    steps: list[str] = []
    if measurement == "temperature":
        steps.extend(_temperature_steps(value, conversion.source, conversion.target, result))
    else:
        if params.show_formulas:
            steps.append(
                f"{text('Conversion factor: ')} 1 {text(' ' + conversion.source_name)} = "
                f"{_unit(conversion.factor_latex, conversion.target_name)}"
            )
        steps.append(
            rf"{_unit(shown, conversion.source_name)} \times {conversion.factor_latex} = "
            f"{_unit(answer, conversion.target_name)}"
        )
    steps.append(f"{text('Answer: ')} {_unit(answer, conversion.target_name)}")

    return Problem(
        question=f"Convert {shown} {conversion.source_name} to {conversion.target_name}",
        question_latex=f"{text('Convert ')} {shown} {text(f' {conversion.source_name} to {conversion.target_name}')}",
        answer=f"{answer} {conversion.target_name}",
        answer_latex=_unit(answer, conversion.target_name),
        steps=steps,
        metadata={
            "operation": "unit-conversion",
            "measurement_type": measurement,
            "from_unit": conversion.source_name,
            "to_unit": conversion.target_name,
            "from_value": float(value),
            "to_value": float(result),
            "conversion_type": conversion.kind,
        },
    )


def find_chain(conversions: list[Conversion], length: int, rng: random.Random) -> list[Conversion] | None:
    """Random walk of ``length - 1`` conversions that never revisits a unit."""
    if not conversions:
        return None
    units = sorted({c.source for c in conversions})
    for _ in range(CHAIN_ATTEMPTS):
        current = pick(rng, units)
        visited = [current]
        chain: list[Conversion] = []
        for _ in range(length - 1):
            options = [c for c in conversions if c.source == current and c.target not in visited]
            if not options:
                break
            step = pick(rng, options)
            chain.append(step)
            current = step.target
            visited.append(current)
        if len(chain) == length - 1:
            return chain
    return None


def _chain_conversion(measurement: str, params: UnitConversionParams, rng: random.Random) -> Problem:
    length = 2 if chance(rng, CHAIN_LENGTH_TWO_CHANCE) else 3
    chain = find_chain(unit_conversions(measurement, params), length, rng)
    if chain is None:
        logger.debug("No %d-unit %s chain found; using a single conversion", length, measurement)
        return _simple_conversion(measurement, params, rng)

    start = _draw_value(rng, params.max_value, params.allow_decimals)
    first, last = chain[0], chain[-1]
    steps: list[str] = []
    if params.show_formulas:
        steps.append(rf"{text('Chain conversion: ')} {first.source_name} \rightarrow {last.target_name}")

    current = start
    for i, conversion in enumerate(chain, start=1):
        following = _unit_round(_apply(conversion, current), params)
        label = text(f"Step {i}: ")
        if measurement == "temperature":
            steps.append(
                rf"{label} {_show(current)}°{conversion.source} \rightarrow {_show(following)}°{conversion.target}"
            )
        else:
            steps.append(
                rf"{label} {_unit(_show(current), conversion.source_name)} \times {conversion.factor_latex} = "
                f"{_unit(_show(following), conversion.target_name)}"
            )
        current = following

    answer = _show(current)
    steps.append(f"{text('Answer: ')} {_unit(answer, last.target_name)}")
    return Problem(
        question=f"Convert {_show(start)} {first.source_name} to {last.target_name}",
        question_latex=f"{text('Convert ')} {_show(start)} {text(f' {first.source_name} to {last.target_name}')}",
        answer=f"{answer} {last.target_name}",
        answer_latex=_unit(answer, last.target_name),
        steps=steps,
        metadata={
            "operation": "chain-conversion",
            "measurement_type": measurement,
            "from_unit": first.source_name,
            "to_unit": last.target_name,
            "from_value": float(start),
            "to_value": float(current),
            "chain_length": length,
            "units": [first.source_name, *(c.target_name for c in chain)],
            "estimated_time": "120 seconds",
        },
    )


def synthesize_unit_conversion(params: UnitConversionParams, rng: random.Random) -> Problem:
    measurement = _enabled_measurement(rng, params)
    if params.include_chain_conversions and chance(rng, CHAIN_CONVERSION_CHANCE):
        return _chain_conversion(measurement, params, rng)
    return _simple_conversion(measurement, params, rng)


# ---------------------------------------------------------------------------
# Metric <-> imperial
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class MetricImperialParams:
    include_length: bool = boolean(True, label="Include Length")
    include_weight: bool = boolean(True, label="Include Weight")
    include_volume: bool = boolean(True, label="Include Volume")
    include_temperature: bool = boolean(False, label="Include Temperature")
    include_metric_to_imperial: bool = boolean(True, label="Metric to Imperial")
    include_imperial_to_metric: bool = boolean(True, label="Imperial to Metric")
    include_common_conversions: bool = boolean(True, label="Common Conversions")
    include_precise_conversions: bool = boolean(False, label="Precise Conversions")
    include_approximations: bool = boolean(True, label="Include Approximations")
    include_word_problems: bool = boolean(False, label="Include Word Problems")
    allow_decimals: bool = boolean(True, label="Allow Decimals")
    decimal_places: int = number(2, label="Decimal Places", minimum=0, maximum=4)
    max_value: int = number(100, label="Maximum Value", minimum=1, maximum=1000)
    show_approximate_vs_exact: bool = boolean(False, label="Show Approximate vs Exact")


TEMPERATURE_SCALES = ("C", "F")


def metric_imperial_conversions(measurement: str, params: MetricImperialParams) -> list[Conversion]:
    """Cross-system conversions allowed by the direction and precision switches.

    Temperature has no factor, so only the direction switches apply to it.
    """
    conversions = []
    for source, target, factor, exact, approximate in METRIC_IMPERIAL[measurement]:
        conversion = Conversion(measurement, source, target, factor, exact, approximate)
        if conversion.source_system == "metric" and not params.include_metric_to_imperial:
            continue
        if conversion.source_system == "imperial" and not params.include_imperial_to_metric:
            continue
        if measurement != "temperature":
            if approximate and not (params.include_common_conversions and params.include_approximations):
                continue
            if not approximate and not params.include_precise_conversions:
                continue
        conversions.append(conversion)
    return conversions


def _metric_round(value: Any, params: MetricImperialParams) -> Decimal:
    return _round(value, params.decimal_places if params.allow_decimals else 0)


def direct_conversion_problem(conversion: Conversion, value: Decimal, params: MetricImperialParams) -> Problem:
    """Build the "Convert V A to B" problem for one conversion and value."""
    result = _metric_round(_apply(conversion, value, TEMPERATURE_SCALES), params)
    shown, answer = _show(value), _show(result)
    source, target = conversion.source_name, conversion.target_name

    if conversion.measurement == "temperature":
        steps = _temperature_steps(value, conversion.source, conversion.target, result)
    else:
        if conversion.approximate and params.show_approximate_vs_exact:
            steps = [
                f"{text('Approximate factor: ')} 1 {text(' ' + source)} ≈ {_unit(conversion.factor, target)}",
                f"{text('Exact factor: ')} 1 {text(' ' + source)} = {_unit(conversion.exact_factor, target)}",
            ]
        else:
            steps = [f"{text('Conversion factor: ')} 1 {text(' ' + source)} = {_unit(conversion.factor, target)}"]
        steps.append(rf"{_unit(shown, source)} \times {conversion.factor} = {_unit(answer, target)}")
        steps.append(f"{text('Answer: ')} {_unit(answer, target)}")

    answer_text = f"{answer} {target}"
    answer_latex = _unit(answer, target)
    if params.show_approximate_vs_exact and conversion.approximate:
        exact = _show(_round(_rational(value) * _rational(conversion.exact_factor), params.decimal_places + 1))
        answer_text += f" (≈{exact} exact)"
        answer_latex += f" {text(' (≈')}{exact}{text(' exact)')}"

    return Problem(
        question=f"Convert {shown} {source} to {target}",
        question_latex=f"{text('Convert ')} {shown} {text(f' {source} to {target}')}",
        answer=answer_text,
        answer_latex=answer_latex,
        steps=steps,
        metadata={
            "operation": "metric-imperial-conversion",
            "measurement_type": conversion.measurement,
            "from_system": conversion.source_system,
            "to_system": conversion.target_system,
            "from_unit": source,
            "to_unit": target,
            "from_value": float(value),
            "to_value": float(result),
            "conversion_factor": conversion.factor or None,
            "is_approximate": conversion.approximate,
        },
    )


def _word_problem(measurement: str, params: MetricImperialParams, rng: random.Random) -> Problem | None:
    scenario = pick(rng, MEASUREMENT_SCENARIOS[measurement])
    relevant = [
        c
        for c in metric_imperial_conversions(measurement, params)
        if c.source_name in scenario["units"] or c.target_name in scenario["units"]
    ]
    if not relevant:
        return None
    conversion = pick(rng, relevant)
    value = _draw_value(rng, params.max_value, params.allow_decimals)
    result = _metric_round(_apply(conversion, value, TEMPERATURE_SCALES), params)
    shown, answer = _show(value), _show(result)
    question = scenario["text"].format(
        value=shown,
        from_unit=conversion.source_name,
        to_unit=conversion.target_name,
        from_symbol=conversion.source,
        to_symbol=conversion.target,
    )

    steps = [f"{text('Given: ')} {_unit(shown, conversion.source_name)}", text(f"Convert to {conversion.target_name}")]
    if measurement == "temperature":
        steps.extend(_temperature_steps(value, conversion.source, conversion.target, result))
    else:
        steps.append(rf"{shown} \times {conversion.factor} = {_unit(answer, conversion.target_name)}")

    return Problem(
        question=question,
        question_latex=r" \\ ".join(text(line) for line in question.split("\n\n")),
        answer=f"{answer} {conversion.target_name}",
        answer_latex=_unit(answer, conversion.target_name),
        steps=steps,
        metadata={
            "operation": "metric-imperial-word-problem",
            "measurement_type": measurement,
            "scenario": scenario["type"],
            "from_unit": conversion.source_name,
            "to_unit": conversion.target_name,
            "from_value": float(value),
            "to_value": float(result),
            "estimated_time": "120 seconds",
        },
    )


def synthesize_metric_imperial(params: MetricImperialParams, rng: random.Random) -> Problem:
    measurement = _enabled_measurement(rng, params)
    if params.include_word_problems and chance(rng, METRIC_WORD_PROBLEM_CHANCE):
        problem = _word_problem(measurement, params, rng)
        if problem is not None:
            return problem
        logger.debug("No %s conversion fits the drawn scenario; using a direct conversion", measurement)

    conversions = metric_imperial_conversions(measurement, params)
    if not conversions:
        raise ConfigurationError(f"No valid conversions available for {measurement} with current settings")
    conversion = pick(rng, conversions)
    value = _draw_value(rng, params.max_value, params.allow_decimals)
    return direct_conversion_problem(conversion, value, params)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


GENERATORS: tuple[Generator, ...] = (
    Generator(
        key="unit-conversion",
        name="Unit Conversion",
        description=(
            "Generate problems involving unit conversions across length, weight, volume, "
            "time, and temperature"
        ),
        category="measurement-units",
        difficulty="medium",
        tags=("measurement", "conversion", "units", "metric", "imperial", "mixed-units"),
        grade_level="4-12",
        estimated_time="75 seconds",
        params_type=UnitConversionParams,
        synthesize=synthesize_unit_conversion,
        presets=(
            Preset(
                "metric-only",
                "Metric Only",
                "Conversions inside the metric system",
                {"include_imperial_to_imperial": False},
            ),
            Preset(
                "all-measurements",
                "All Measurements",
                "Every measurement type including time and temperature",
                {"include_time": True, "include_temperature": True},
            ),
            Preset(
                "chain-conversions",
                "Chain Conversions",
                "Multi-step conversions such as km to m to cm",
                {"include_chain_conversions": True, "show_formulas": True},
            ),
            Preset(
                "whole-numbers",
                "Whole Numbers",
                "Whole-number values and rounded answers",
                {"allow_decimals": False},
            ),
        ),
    ),
    Generator(
        key="metric-imperial",
        name="Metric-Imperial",
        description="Generate problems converting between metric and imperial measurement systems",
        category="measurement-units",
        difficulty="hard",
        tags=("measurement", "conversion", "metric", "imperial", "systems", "cross-conversion"),
        grade_level="5-12",
        estimated_time="90 seconds",
        params_type=MetricImperialParams,
        synthesize=synthesize_metric_imperial,
        presets=(
            Preset(
                "metric-to-imperial",
                "Metric to Imperial",
                "Only convert metric units into imperial units",
                {"include_imperial_to_metric": False},
            ),
            Preset(
                "with-temperature",
                "With Temperature",
                "Include Celsius and Fahrenheit conversions",
                {"include_temperature": True},
            ),
            Preset(
                "real-world",
                "Real World",
                "Word problems drawn from everyday scenarios",
                {"include_word_problems": True},
            ),
            Preset(
                "precise",
                "Precise Conversions",
                "Exact factors alongside the approximations",
                {"include_precise_conversions": True, "show_approximate_vs_exact": True, "decimal_places": 3},
            ),
        ),
    ),
)
