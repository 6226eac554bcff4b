from __future__ import annotations

import pytest

from mathgen.errors import InvalidParametersError
from mathgen.generators.arithmetic import AdditionParams
from mathgen.registry import get_generator
from mathgen.schema import collect_violations, defaults_of, merge_params, schema_of, validate_params


def test_merge_drops_unknown_keys_and_narrows_whole_floats() -> None:
    params = merge_params(AdditionParams, {"max_addend": 20.0, "colour": "blue"})
    assert params.max_addend == 20
    assert isinstance(params.max_addend, int)
    assert not hasattr(params, "colour")


def test_defaults_come_from_the_record() -> None:
    assert defaults_of(AdditionParams) == {
        "min_addend": 1,
        "max_addend": 100,
        "addend_count": 2,
        "allow_negatives": False,
        "allow_carrying": True,
    }


def test_schema_entries_serialise() -> None:
    spec = schema_of(AdditionParams)["addend_count"]
    assert spec.to_dict() == {"type": "number", "label": "Number of Addends", "min": 2, "max": 5}


def test_every_violation_is_reported() -> None:
    params = merge_params(AdditionParams, {"addend_count": 9, "max_addend": 0, "allow_negatives": "yes"})
    assert collect_violations(params) == [
        "Parameter 'max_addend' must be at least 1",
        "Parameter 'addend_count' must be at most 5",
        "Parameter 'allow_negatives' must be of type boolean",
    ]


def test_fractional_value_for_whole_number_field() -> None:
    params = merge_params(AdditionParams, {"addend_count": 2.5})
    assert collect_violations(params) == ["Parameter 'addend_count' must be a whole number"]


def test_invalid_parameters_message_joins_errors() -> None:
    with pytest.raises(InvalidParametersError) as exc:
        get_generator("addition").generate({"addend_count": 1, "max_addend": 20000})
    assert exc.value.errors == [
        "Parameter 'max_addend' must be at most 10000",
        "Parameter 'addend_count' must be at least 2",
    ]
    assert str(exc.value) == (
        "Invalid parameters: Parameter 'max_addend' must be at most 10000, "
        "Parameter 'addend_count' must be at least 2"
    )


def test_cross_field_rules_run_after_field_checks() -> None:
    generator = get_generator("addition")
    assert generator.check({"min_addend": 50, "max_addend": 10}) == [
        "Minimum addend cannot exceed maximum addend"
    ]
    # A field error suppresses the cross-field rule.
    assert generator.check({"min_addend": 50, "max_addend": 0}) == [
        "Parameter 'max_addend' must be at least 1"
    ]


def test_select_options_are_enforced() -> None:
    violations = get_generator("linear-equations").check({"equation_type": "quadratic"})
    assert violations == ["Parameter 'equation_type' must be one of: one-step, two-step, multi-step"]


def test_validate_params_returns_the_record() -> None:
    params = AdditionParams()
    assert validate_params(params) is params
