"""Result and preset records returned by the generators."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

__all__ = ["Problem", "Preset"]


@dataclass(slots=True)
class Problem:
    """One generated problem.

    ``steps`` is never empty and its last entry shows the final answer.
    ``metadata`` always carries ``difficulty`` and ``estimated_time`` plus the
    operands and derived flags the generator used. The identity fields are
    filled in by batch generation only.
    """

    question: str
    question_latex: str
    answer: str
    answer_latex: str
    steps: list[str]
    metadata: dict[str, Any] = field(default_factory=dict)
    id: str | None = None
    generator: str | None = None
    category: str | None = None
    difficulty: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True, slots=True)
class Preset:
    """A named bundle of parameter values offered alongside a generator."""

    id: str
    label: str
    description: str
    values: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "values": dict(self.values),
        }
