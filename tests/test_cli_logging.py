import json
import logging
from typing import Any

import pytest

from mathgen import cli
from mathgen.evaluator import evaluate


@pytest.fixture
def isolated_loggers():
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    for h in old_handlers:
        root.removeHandler(h)

    pkg_logger = logging.getLogger("mathgen")
    pkg_old_handlers = pkg_logger.handlers[:]
    pkg_old_level = pkg_logger.level
    pkg_old_propagate = pkg_logger.propagate
    for h in pkg_old_handlers:
        pkg_logger.removeHandler(h)
    try:
        yield
    finally:
        for h in old_handlers:
            root.addHandler(h)
        root.setLevel(old_level)
        for h in pkg_logger.handlers[:]:
            pkg_logger.removeHandler(h)
        for h in pkg_old_handlers:
            pkg_logger.addHandler(h)
        pkg_logger.setLevel(pkg_old_level)
        pkg_logger.propagate = pkg_old_propagate


def test_log_level_is_isolated(monkeypatch: Any, capsys: Any, isolated_loggers: None) -> None:
    def fake_evaluate(expression: str):
        logging.getLogger().debug("root debug")
        logging.getLogger("mathgen").debug("pkg debug")
        return evaluate(expression)

    monkeypatch.setattr(cli, "evaluate", fake_evaluate)
    cli.main(["--log-level", "DEBUG", "eval", "2 + 3"])
    captured = capsys.readouterr()
    assert "pkg debug" in captured.err
    assert "root debug" not in captured.err
    assert captured.out.splitlines() == ["2 + 3", "5", "= 5"]


def test_generate_prints_json(capsys: Any, isolated_loggers: None) -> None:
    cli.main(["generate", "addition", "--count", "2", "--seed", "4", "--param", "max_addend=20"])
    problems = json.loads(capsys.readouterr().out)
    assert [p["id"] for p in problems] == ["addition-1", "addition-2"]
    assert all(p["category"] == "basic-operations" for p in problems)
    assert all(max(p["metadata"]["addends"]) <= 20 for p in problems)


def test_generate_is_reproducible_from_the_environment(monkeypatch: Any, capsys: Any, isolated_loggers: None) -> None:
    monkeypatch.setenv(cli.SEED_ENV, "11")
    cli.main(["generate", "order-of-operations", "--count", "3"])
    first = capsys.readouterr().out
    cli.main(["generate", "order-of-operations", "--count", "3"])
    assert capsys.readouterr().out == first


def test_generate_writes_a_file(tmp_path: Any, capsys: Any, isolated_loggers: None) -> None:
    out = tmp_path / "problems.json"
    cli.main(["generate", "making-change", "--preset", "whole-dollars", "--seed", "1", "--out", str(out)])
    assert "1 problem(s) written to" in capsys.readouterr().out
    assert len(json.loads(out.read_text("utf-8"))) == 1


def test_list_filters_by_category(capsys: Any, isolated_loggers: None) -> None:
    cli.main(["list", "--category", "fractions-decimals"])
    keys = [entry["key"] for entry in json.loads(capsys.readouterr().out)]
    assert keys == ["basic-fractions", "equivalent-fractions", "comparing-fractions", "fraction-addition"]


def test_info_includes_presets(capsys: Any, isolated_loggers: None) -> None:
    cli.main(["info", "subtraction"])
    info = json.loads(capsys.readouterr().out)
    assert info["key"] == "subtraction"
    assert "no-borrowing" in [preset["id"] for preset in info["presets"]]


@pytest.mark.parametrize(
    "argv, message",
    [
        (["generate", "long-division"], "Error: Unknown generator: long-division"),
        (["generate", "addition", "--param", "addend_count=9"], "Error: Invalid parameters: "),
        (["eval", "4 ÷ 0"], "Error: "),
    ],
)
def test_errors_exit_with_a_message(argv: list[str], message: str, isolated_loggers: None) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert str(exc.value.code).startswith(message)
