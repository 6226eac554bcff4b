"""Random-draw helpers shared by every generator.

All helpers take the pseudo-random source explicitly so that callers (and
tests) control seeding. Nothing here touches the module-level ``random``
state.
"""
from __future__ import annotations

import random
from decimal import Decimal
from typing import Iterable, Sequence, TypeVar

__all__ = [
    "make_rng",
    "rand_int",
    "rand_decimal",
    "chance",
    "pick",
    "weighted_pick",
    "pick_enabled",
    "shuffled",
]

T = TypeVar("T")


def make_rng(seed: int | str | None = None) -> random.Random:
    """Return a fresh ``random.Random``; ``None`` seeds from system entropy."""
    return random.Random(seed)


def rand_int(rng: random.Random, low: int, high: int) -> int:
    """Inclusive integer draw that tolerates swapped bounds."""
    if low > high:
        low, high = high, low
    return rng.randint(int(low), int(high))


def rand_decimal(rng: random.Random, low: float | Decimal, high: float | Decimal, places: int = 2) -> Decimal:
    """Draw a value in ``[low, high]`` on a grid of ``10**-places``."""
    scale = 10**places
    lo = int((Decimal(str(low)) * scale).to_integral_value())
    hi = int((Decimal(str(high)) * scale).to_integral_value())
    return Decimal(rand_int(rng, lo, hi)) / scale


def chance(rng: random.Random, probability: float) -> bool:
    return rng.random() < probability


def pick(rng: random.Random, items: Sequence[T]) -> T:
    if not items:
        raise ValueError("cannot pick from an empty sequence")
    return items[rng.randrange(len(items))]


def weighted_pick(rng: random.Random, items: Sequence[T], weights: Sequence[float]) -> T:
    if not items:
        raise ValueError("cannot pick from an empty sequence")
    return rng.choices(items, weights=weights, k=1)[0]


def pick_enabled(rng: random.Random, options: Iterable[tuple[T, bool]]) -> T | None:
    """Uniformly choose among the options whose flag is set, or ``None``."""
    enabled = [value for value, on in options if on]
    if not enabled:
        return None
    return pick(rng, enabled)


def shuffled(rng: random.Random, items: Iterable[T]) -> list[T]:
    out = list(items)
    rng.shuffle(out)
    return out
