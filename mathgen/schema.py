"""Declarative parameter schema attached to each generator's parameter record.

Every generator describes its options as a ``@dataclass(slots=True)`` whose
fields are built with :func:`number`, :func:`boolean` or :func:`select`. The
helpers store a :class:`ParameterSpec` in the field metadata so the record
type doubles as the schema: the set of fields is the closed set of recognised
keys, and the specs drive validation and the catalogue output.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar

from .errors import InvalidParametersError

logger = logging.getLogger(__name__)

__all__ = [
    "ParameterSpec",
    "number",
    "boolean",
    "select",
    "schema_of",
    "defaults_of",
    "merge_params",
    "collect_violations",
    "validate_params",
    "ordered",
    "combine_rules",
]

Rule = Callable[[Any], list[str]]

SCHEMA_KEY = "mathgen.schema"

P = TypeVar("P")


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    kind: str
    label: str
    description: str = ""
    minimum: float | None = None
    maximum: float | None = None
    options: tuple[str, ...] = ()
    integer: bool = True

    def violations(self, key: str, value: Any) -> list[str]:
        """Return every rule ``value`` breaks for parameter ``key``."""
        if self.kind == "boolean":
            if not isinstance(value, bool):
                return [f"Parameter '{key}' must be of type boolean"]
            return []
        if self.kind == "select":
            if value not in self.options:
                return [f"Parameter '{key}' must be one of: {', '.join(self.options)}"]
            return []

        # number
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return [f"Parameter '{key}' must be of type number"]
        errors: list[str] = []
        if self.integer and isinstance(value, float) and not value.is_integer():
            errors.append(f"Parameter '{key}' must be a whole number")
        if self.minimum is not None and value < self.minimum:
            errors.append(f"Parameter '{key}' must be at least {_fmt(self.minimum)}")
        if self.maximum is not None and value > self.maximum:
            errors.append(f"Parameter '{key}' must be at most {_fmt(self.maximum)}")
        return errors

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.kind, "label": self.label}
        if self.description:
            out["description"] = self.description
        if self.kind == "number":
            out["min"] = self.minimum
            out["max"] = self.maximum
        if self.kind == "select":
            out["options"] = list(self.options)
        return out


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def number(
    default: float,
    *,
    label: str,
    minimum: float | None = None,
    maximum: float | None = None,
    description: str = "",
    integer: bool = True,
) -> Any:
    spec = ParameterSpec("number", label, description, minimum, maximum, integer=integer)
    return field(default=default, metadata={SCHEMA_KEY: spec})


def boolean(default: bool, *, label: str, description: str = "") -> Any:
    return field(default=default, metadata={SCHEMA_KEY: ParameterSpec("boolean", label, description)})


def select(default: str, options: tuple[str, ...], *, label: str, description: str = "") -> Any:
    spec = ParameterSpec("select", label, description, options=tuple(options))
    return field(default=default, metadata={SCHEMA_KEY: spec})


def schema_of(params_type: type) -> dict[str, ParameterSpec]:
    return {
        f.name: f.metadata[SCHEMA_KEY]
        for f in dataclasses.fields(params_type)
        if SCHEMA_KEY in f.metadata
    }


def defaults_of(params_type: type) -> dict[str, Any]:
    return dataclasses.asdict(params_type())


def merge_params(params_type: type[P], overrides: Mapping[str, Any] | None = None) -> P:
    """Overlay ``overrides`` onto the record defaults, dropping unknown keys.

    Whole-number floats given for integer fields are narrowed to ``int`` so
    that downstream ``randint`` calls receive integers.
    """
    schema = schema_of(params_type)
    values: dict[str, Any] = {}
    for key, value in (overrides or {}).items():
        spec = schema.get(key)
        if spec is None:
            logger.debug("Ignoring unknown parameter %r for %s", key, params_type.__name__)
            continue
        if (
            spec.kind == "number"
            and spec.integer
            and isinstance(value, float)
            and value.is_integer()
        ):
            value = int(value)
        values[key] = value
    return params_type(**values)


def collect_violations(params: Any, rules: Callable[[Any], list[str]] | None = None) -> list[str]:
    """Field-level checks first; cross-field ``rules`` only run on well-typed input."""
    errors: list[str] = []
    for key, spec in schema_of(type(params)).items():
        errors.extend(spec.violations(key, getattr(params, key)))
    if not errors and rules is not None:
        errors.extend(rules(params))
    return errors


def validate_params(params: P, rules: Callable[[P], list[str]] | None = None) -> P:
    errors = collect_violations(params, rules)
    if errors:
        raise InvalidParametersError(errors)
    return params


def ordered(low: str, high: str, message: str) -> Rule:
    """Cross-field rule: ``params.<low>`` must not exceed ``params.<high>``."""

    def rule(params: Any) -> list[str]:
        return [message] if getattr(params, low) > getattr(params, high) else []

    return rule


def combine_rules(*rules: Rule) -> Rule:
    def rule(params: Any) -> list[str]:
        errors: list[str] = []
        for check in rules:
            errors.extend(check(params))
        return errors

    return rule
