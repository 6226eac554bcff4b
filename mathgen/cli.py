"""Command‑line interface wrapper around the generator catalogue."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from .errors import ExpressionError, UnknownGeneratorError, UnknownPresetError
from .evaluator import evaluate
from .registry import get_generator, get_generators_by_category, list_generators, search_generators
from .rng import make_rng

__all__ = ["main"]

SEED_ENV = "MATHGEN_SEED"


def _parse_param(raw: str) -> tuple[str, Any]:
    """Split ``key=value``; the value is read as JSON when it parses."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    try:
        return key, json.loads(value)
    except json.JSONDecodeError:
        return key, value


def _parse_cli(argv: list[str] | None = None) -> argparse.Namespace:  # noqa: D401 – imperative mood
    parser = argparse.ArgumentParser(description="Generate parameterized math problems ✔")
    parser.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level for mathgen",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    listing = sub.add_parser("list", help="List the available generators")
    listing.add_argument("--category", help="Only generators in this category")
    listing.add_argument("--search", help="Case-insensitive match on name or description")

    info = sub.add_parser("info", help="Show a generator's schema, defaults and presets")
    info.add_argument("generator")

    generate = sub.add_parser("generate", help="Generate problems as JSON")
    generate.add_argument("generator")
    generate.add_argument("--count", type=int, default=1, help="Number of problems")
    generate.add_argument("--preset", help="Preset id to start from")
    generate.add_argument(
        "--param",
        action="append",
        default=[],
        type=_parse_param,
        metavar="KEY=VALUE",
        help="Parameter override (value parsed as JSON); may be repeated",
    )
    generate.add_argument("--seed", help=f"Random seed (defaults to ${SEED_ENV})")
    generate.add_argument("--out", help="Write JSON output to file")

    ev = sub.add_parser("eval", help="Evaluate an arithmetic expression step by step")
    ev.add_argument("expression")
    return parser.parse_args(argv)


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name)
    pkg_logger = logging.getLogger("mathgen")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
    handler.setLevel(level)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)


def _dump(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2, default=str)


def _seed(value: str | None) -> int | str | None:
    raw = value if value is not None else os.environ.get(SEED_ENV)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return raw


def _run_list(ns: argparse.Namespace) -> None:
    entries = list_generators()
    if ns.category:
        keys = {g.key for g in get_generators_by_category(ns.category)}
        entries = [e for e in entries if e["key"] in keys]
    if ns.search:
        keys = {g.key for g in search_generators(ns.search)}
        entries = [e for e in entries if e["key"] in keys]
    print(_dump(entries))


def _run_generate(ns: argparse.Namespace) -> None:
    generator = get_generator(ns.generator)
    problems = generator.generate_many(
        ns.count,
        dict(ns.param),
        rng=make_rng(_seed(ns.seed)),
        preset=ns.preset,
    )
    json_out = _dump([p.to_dict() for p in problems])
    if ns.out:
        Path(ns.out).write_text(json_out, "utf-8")
        print(f"✔ {len(problems)} problem(s) written to {ns.out}")
    else:
        print(json_out)


def _run_eval(ns: argparse.Namespace) -> None:
    result = evaluate(ns.expression)
    for step in result.steps:
        print(step)
    print(f"= {result.display}")


def main(argv: list[str] | None = None) -> None:  # noqa: D401 – imperative mood
    ns = _parse_cli(argv)
    _configure_logging(ns.log_level)

    try:
        if ns.command == "list":
            _run_list(ns)
        elif ns.command == "info":
            print(_dump(get_generator(ns.generator).info()))
        elif ns.command == "generate":
            _run_generate(ns)
        else:
            _run_eval(ns)
    except (UnknownGeneratorError, UnknownPresetError) as exc:
        sys.exit(f"Error: {exc.args[0]}")
    except (ValueError, ExpressionError) as exc:
        sys.exit(f"Error: {exc}")


if __name__ == "__main__":  # pragma: no cover
    main()
