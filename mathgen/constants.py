"""Package‑wide constants: retry caps, complexity levels, money and unit tables."""
from __future__ import annotations

from decimal import Decimal
from typing import Any

COMPLEXITY_LEVELS: tuple[str, ...] = ("basic", "intermediate", "advanced")

MAX_ATTEMPTS = 100
FRACTION_COMPARE_ATTEMPTS = 10
CHAIN_ATTEMPTS = 10

# Probabilities used when a generator mixes in an optional flavour of problem.
NEGATIVE_RESULT_CHANCE = 0.4
WORD_PROBLEM_CHANCE = 0.4
CHAIN_CONVERSION_CHANCE = 0.3
CHANGE_WORD_PROBLEM_CHANCE = 0.7

COMMON_PAYMENTS: tuple[Decimal, ...] = tuple(
    Decimal(v) for v in ("1", "5", "10", "20", "50", "100")
)
TAX_RATES: tuple[Decimal, ...] = tuple(
    Decimal(v) for v in ("0.05", "0.075", "0.08", "0.10")
)
SHOP_ITEMS: tuple[str, ...] = (
    "toy",
    "book",
    "candy bar",
    "drink",
    "notebook",
    "pen",
    "sticker pack",
    "magazine",
    "snack",
    "pencil",
    "eraser",
    "ruler",
    "folder",
)

# ---------------------------------------------------------------------------
# Unit tables
# ---------------------------------------------------------------------------

# symbol -> (name, system)
UNITS: dict[str, dict[str, tuple[str, str]]] = {
    "length": {
        "mm": ("millimeters", "metric"),
        "cm": ("centimeters", "metric"),
        "m": ("meters", "metric"),
        "km": ("kilometers", "metric"),
        "in": ("inches", "imperial"),
        "ft": ("feet", "imperial"),
        "yd": ("yards", "imperial"),
        "mi": ("miles", "imperial"),
    },
    "weight": {
        "mg": ("milligrams", "metric"),
        "g": ("grams", "metric"),
        "kg": ("kilograms", "metric"),
        "t": ("tonnes", "metric"),
        "oz": ("ounces", "imperial"),
        "lb": ("pounds", "imperial"),
        "ton": ("tons", "imperial"),
    },
    "volume": {
        "ml": ("milliliters", "metric"),
        "L": ("liters", "metric"),
        "fl oz": ("fluid ounces", "imperial"),
        "cup": ("cups", "imperial"),
        "pt": ("pints", "imperial"),
        "qt": ("quarts", "imperial"),
        "gal": ("gallons", "imperial"),
    },
    "time": {
        "sec": ("seconds", "universal"),
        "min": ("minutes", "universal"),
        "hr": ("hours", "universal"),
        "day": ("days", "universal"),
    },
    "temperature": {
        "C": ("Celsius", "metric"),
        "F": ("Fahrenheit", "imperial"),
        "K": ("Kelvin", "scientific"),
    },
}

# (from, to, factor); fractions are kept as strings so Decimal stays exact
# where the ratio terminates.
CONVERSIONS: dict[str, tuple[tuple[str, str, str], ...]] = {
    "length": (
        ("mm", "cm", "0.1"),
        ("cm", "mm", "10"),
        ("cm", "m", "0.01"),
        ("m", "cm", "100"),
        ("m", "km", "0.001"),
        ("km", "m", "1000"),
        ("in", "ft", "1/12"),
        ("ft", "in", "12"),
        ("ft", "yd", "1/3"),
        ("yd", "ft", "3"),
        ("yd", "mi", "1/1760"),
        ("mi", "yd", "1760"),
        ("cm", "in", "0.394"),
        ("in", "cm", "2.54"),
        ("m", "ft", "3.281"),
        ("ft", "m", "0.305"),
    ),
    "weight": (
        ("mg", "g", "0.001"),
        ("g", "mg", "1000"),
        ("g", "kg", "0.001"),
        ("kg", "g", "1000"),
        ("kg", "t", "0.001"),
        ("t", "kg", "1000"),
        ("oz", "lb", "1/16"),
        ("lb", "oz", "16"),
        ("lb", "ton", "1/2000"),
        ("ton", "lb", "2000"),
        ("g", "oz", "0.035"),
        ("oz", "g", "28.35"),
        ("kg", "lb", "2.205"),
        ("lb", "kg", "0.454"),
    ),
    "volume": (
        ("ml", "L", "0.001"),
        ("L", "ml", "1000"),
        ("fl oz", "cup", "1/8"),
        ("cup", "fl oz", "8"),
        ("cup", "pt", "1/2"),
        ("pt", "cup", "2"),
        ("pt", "qt", "1/2"),
        ("qt", "pt", "2"),
        ("qt", "gal", "1/4"),
        ("gal", "qt", "4"),
        ("ml", "fl oz", "0.034"),
        ("fl oz", "ml", "29.57"),
        ("L", "qt", "1.057"),
        ("qt", "L", "0.946"),
    ),
    "time": (
        ("sec", "min", "1/60"),
        ("min", "sec", "60"),
        ("min", "hr", "1/60"),
        ("hr", "min", "60"),
        ("hr", "day", "1/24"),
        ("day", "hr", "24"),
    ),
    "temperature": (
        ("C", "F", ""),
        ("F", "C", ""),
        ("C", "K", ""),
        ("K", "C", ""),
        ("F", "K", ""),
        ("K", "F", ""),
    ),
}

# Cross-system table: (from, to, approximate factor, exact factor, approximate?)
METRIC_IMPERIAL: dict[str, tuple[tuple[str, str, str, str, bool], ...]] = {
    "length": (
        ("mm", "in", "0.0394", "0.0393701", False),
        ("cm", "in", "0.394", "0.393701", True),
        ("m", "ft", "3.281", "3.28084", True),
        ("m", "yd", "1.094", "1.09361", True),
        ("km", "mi", "0.621", "0.621371", True),
        ("in", "mm", "25.4", "25.4", False),
        ("in", "cm", "2.54", "2.54", False),
        ("ft", "m", "0.305", "0.3048", True),
        ("yd", "m", "0.914", "0.9144", True),
        ("mi", "km", "1.609", "1.60934", True),
    ),
    "weight": (
        ("g", "oz", "0.035", "0.035274", True),
        ("kg", "lb", "2.205", "2.20462", True),
        ("t", "ton", "1.102", "1.10231", True),
        ("oz", "g", "28.35", "28.3495", True),
        ("lb", "kg", "0.454", "0.453592", True),
        ("ton", "t", "0.907", "0.907185", True),
    ),
    "volume": (
        ("ml", "fl oz", "0.034", "0.033814", True),
        ("L", "qt", "1.057", "1.05669", True),
        ("L", "gal", "0.264", "0.264172", True),
        ("fl oz", "ml", "29.57", "29.5735", True),
        ("qt", "L", "0.946", "0.946353", True),
        ("gal", "L", "3.785", "3.78541", True),
    ),
    "temperature": (
        ("C", "F", "", "", False),
        ("F", "C", "", "", False),
    ),
}

MEASUREMENT_SCENARIOS: dict[str, tuple[dict[str, Any], ...]] = {
    "length": (
        {
            "type": "sports",
            "text": "A running track is {value} {from_unit} long.\n\nHow many {to_unit} is that?",
            "units": ("meters", "feet", "yards"),
        },
        {
            "type": "architecture",
            "text": "The height of a building is {value} {from_unit}.\n\nConvert this to {to_unit}.",
            "units": ("meters", "feet"),
        },
        {
            "type": "travel",
            "text": "A road trip covers {value} {from_unit}.\n\nHow many {to_unit} is this?",
            "units": ("kilometers", "miles"),
        },
    ),
    "weight": (
        {
            "type": "shipping",
            "text": "A package weighs {value} {from_unit}.\n\nWhat is its weight in {to_unit}?",
            "units": ("kilograms", "pounds"),
        },
        {
            "type": "cooking",
            "text": "A recipe calls for {value} {from_unit} of flour.\n\nHow many {to_unit} is that?",
            "units": ("grams", "ounces"),
        },
        {
            "type": "sports",
            "text": "An athlete weighs {value} {from_unit}.\n\nConvert this to {to_unit}.",
            "units": ("kilograms", "pounds"),
        },
    ),
    "volume": (
        {
            "type": "automotive",
            "text": "A car's fuel tank holds {value} {from_unit}.\n\nHow many {to_unit} is that?",
            "units": ("liters", "gallons"),
        },
        {
            "type": "cooking",
            "text": "A recipe requires {value} {from_unit} of milk.\n\nConvert to {to_unit}.",
            "units": ("milliliters", "fluid ounces"),
        },
        {
            "type": "recreation",
            "text": "A swimming pool contains {value} {from_unit} of water.\n\nHow many {to_unit}?",
            "units": ("liters", "gallons"),
        },
    ),
    "temperature": (
        {
            "type": "weather",
            "text": "The weather forecast shows {value}°{from_symbol}.\n\nWhat is this in °{to_symbol}?",
            "units": ("Celsius", "Fahrenheit"),
        },
        {
            "type": "cooking",
            "text": "A recipe calls for baking at {value}°{from_symbol}.\n\nConvert to °{to_symbol}.",
            "units": ("Celsius", "Fahrenheit"),
        },
        {
            "type": "medical",
            "text": "Body temperature is {value}°{from_symbol}.\n\nWhat is this in °{to_symbol}?",
            "units": ("Celsius", "Fahrenheit"),
        },
    ),
}

__all__ = [
    "COMPLEXITY_LEVELS",
    "MAX_ATTEMPTS",
    "FRACTION_COMPARE_ATTEMPTS",
    "CHAIN_ATTEMPTS",
    "NEGATIVE_RESULT_CHANCE",
    "WORD_PROBLEM_CHANCE",
    "CHAIN_CONVERSION_CHANCE",
    "CHANGE_WORD_PROBLEM_CHANCE",
    "COMMON_PAYMENTS",
    "TAX_RATES",
    "SHOP_ITEMS",
    "UNITS",
    "CONVERSIONS",
    "METRIC_IMPERIAL",
    "MEASUREMENT_SCENARIOS",
]
