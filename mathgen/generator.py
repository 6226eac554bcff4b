"""Composition wrapper binding a parameter record to its synthesis function.

A :class:`Generator` carries no behaviour of its own beyond the shared
pipeline::

    merge overrides -> complexity normalization -> validate -> synthesize

Topic modules supply plain functions for the parts that differ.
"""
from __future__ import annotations

import dataclasses
import logging
import random
import re
import warnings
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .complexity import LevelRule, normalize_complexity
from .errors import UnknownPresetError
from .problem import Preset, Problem
from .rng import make_rng
from .schema import collect_violations, defaults_of, merge_params, schema_of, validate_params

logger = logging.getLogger(__name__)

__all__ = ["Generator"]


def _slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


@dataclass(frozen=True)
class Generator:
    key: str
    name: str
    description: str
    category: str
    params_type: type
    synthesize: Callable[[Any, random.Random], Problem]
    difficulty: str = "medium"
    tags: tuple[str, ...] = ()
    grade_level: str = "K-12"
    estimated_time: str = "60 seconds"
    presets: tuple[Preset, ...] = ()
    rules: Callable[[Any], list[str]] | None = None
    complexity: Mapping[str, LevelRule] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Parameters

    def defaults(self) -> dict[str, Any]:
        return defaults_of(self.params_type)

    def preset(self, preset_id: str) -> Preset:
        for preset in self.presets:
            if preset.id == preset_id:
                return preset
        raise UnknownPresetError(f"Unknown preset {preset_id!r} for generator {self.key!r}")

    def _requested(self, overrides: Mapping[str, Any] | None, preset: str | None) -> dict[str, Any]:
        requested: dict[str, Any] = {}
        if preset is not None:
            chosen = self.preset(preset)
            unknown = set(chosen.values) - set(schema_of(self.params_type))
            if unknown:
                warnings.warn(
                    f"Preset {chosen.id!r} sets unrecognised keys: {', '.join(sorted(unknown))}"
                )
            requested.update(chosen.values)
        requested.update(overrides or {})
        return requested

    def resolve_params(self, overrides: Mapping[str, Any] | None = None, *, preset: str | None = None) -> Any:
        """Return the validated parameter record for ``overrides``.

        Keys coming from ``preset`` count as explicitly set.
        """
        requested = self._requested(overrides, preset)
        params = merge_params(self.params_type, requested)
        if self.complexity:
            params = normalize_complexity(params, self.complexity, explicit=requested.keys())
        return validate_params(params, self.rules)

    def check(self, overrides: Mapping[str, Any] | None = None, *, preset: str | None = None) -> list[str]:
        """Return the violations for ``overrides`` without raising."""
        requested = self._requested(overrides, preset)
        params = merge_params(self.params_type, requested)
        if self.complexity:
            params = normalize_complexity(params, self.complexity, explicit=requested.keys())
        return collect_violations(params, self.rules)

    # ------------------------------------------------------------------
    # Generation

    def _synthesize(self, params: Any, rng: random.Random) -> Problem:
        problem = self.synthesize(params, rng)
        problem.metadata.setdefault("difficulty", self.difficulty)
        problem.metadata.setdefault("estimated_time", self.estimated_time)
        return problem

    def generate(
        self,
        overrides: Mapping[str, Any] | None = None,
        *,
        rng: random.Random | None = None,
        preset: str | None = None,
    ) -> Problem:
        params = self.resolve_params(overrides, preset=preset)
        return self._synthesize(params, rng if rng is not None else make_rng())

    def generate_many(
        self,
        count: int,
        overrides: Mapping[str, Any] | None = None,
        *,
        rng: random.Random | None = None,
        preset: str | None = None,
    ) -> list[Problem]:
        """Generate ``count`` problems tagged with batch identity fields."""
        if count < 0:
            raise ValueError("count must be non-negative")
        params = self.resolve_params(overrides, preset=preset)
        rng = rng if rng is not None else make_rng()
        slug = _slug(self.name)
        logger.info("Generating %d %s problem(s)", count, self.key)
        problems = [
            dataclasses.replace(
                self._synthesize(params, rng),
                id=f"{slug}-{i + 1}",
                generator=self.name,
                category=self.category,
                difficulty=self.difficulty,
            )
            for i in range(count)
        ]
        logger.info("Generated %d %s problem(s)", len(problems), self.key)
        return problems

    def example(self, rng: random.Random | None = None) -> Problem:
        """Generate a problem from the defaults, or a placeholder if that fails."""
        try:
            return self.generate(rng=rng)
        except ValueError as exc:
            logger.warning("Example generation failed for %s: %s", self.key, exc)
            return Problem(
                question="Example problem",
                question_latex="Example problem",
                answer="Answer",
                answer_latex="Answer",
                steps=["Answer"],
            )

    # ------------------------------------------------------------------
    # Catalogue

    def info(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "difficulty": self.difficulty,
            "tags": list(self.tags),
            "grade_level": self.grade_level,
            "estimated_time": self.estimated_time,
            "parameters": {key: spec.to_dict() for key, spec in schema_of(self.params_type).items()},
            "default_parameters": self.defaults(),
            "presets": [preset.to_dict() for preset in self.presets],
        }
