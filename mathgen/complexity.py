"""Complexity-level normalization applied before validation.

A :class:`LevelRule` narrows numeric ranges (``caps``), widens them for keys
the caller left at their defaults (``floors``) and fills boolean defaults for
keys the caller did not set (``defaults``). Explicit booleans always win, and
applying the same rule twice changes nothing.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Collection, Mapping, TypeVar

__all__ = ["LevelRule", "normalize_complexity"]

logger = logging.getLogger(__name__)

P = TypeVar("P")


@dataclass(frozen=True, slots=True)
class LevelRule:
    caps: Mapping[str, int] = field(default_factory=dict)
    floors: Mapping[str, int] = field(default_factory=dict)
    defaults: Mapping[str, bool] = field(default_factory=dict)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_complexity(
    params: P,
    rules: Mapping[str, LevelRule],
    explicit: Collection[str] = (),
) -> P:
    """Return ``params`` adjusted for its ``complexity_level``.

    Unknown levels are left untouched so that validation can report them.
    """
    level = getattr(params, "complexity_level", None)
    rule = rules.get(level) if isinstance(level, str) else None
    if rule is None:
        return params

    changes: dict[str, Any] = {}
    for key, cap in rule.caps.items():
        value = getattr(params, key)
        if _is_number(value) and value > cap:
            changes[key] = cap
    for key, floor in rule.floors.items():
        value = getattr(params, key)
        if key not in explicit and _is_number(value) and value < floor:
            changes[key] = floor
    for key, default in rule.defaults.items():
        if key not in explicit and getattr(params, key) != default:
            changes[key] = default

    if not changes:
        return params
    logger.debug("Complexity %r adjusted %s", level, sorted(changes))
    return dataclasses.replace(params, **changes)
