from __future__ import annotations

from enum import Enum
from typing import Any

import pytest
from structlog.testing import capture_logs

from fluentcheck.validators.constraints import (
    ALWAYS_VALID,
    ValidationConstraint,
    as_constraint,
    fulfills,
    has_length_equal_to,
    is_blank,
    is_double,
    is_equal_to,
    is_in_range_exclusive,
    is_in_range_inclusive,
    is_longer_or_equal_to,
    is_longer_than,
    is_matching_pattern,
    is_not_blank,
    is_not_empty,
    is_not_null,
    is_not_whitespace,
    is_numeric,
    is_shorter_or_equal_to,
    is_shorter_than,
    is_valid_as_enum,
    is_whitespace,
)


class EnumA(Enum):
    VALUE_A = 1
    VALUE_B = 2


class EnumB(Enum):
    VALUE_A = 1
    VALUE_C = 3


@pytest.mark.parametrize(
    ("value", "constraint", "message"),
    [
        ("a", is_equal_to("b"), "must be equal to b"),
        (None, is_not_null(), "may not be null"),
        ("", is_not_empty(), "may not be empty"),
        ([], is_not_empty(), "may not be empty"),
        (None, is_not_empty(), "may not be empty"),
        ("   ", is_not_whitespace(), "may not be whitespace"),
        ("abc", is_whitespace(), "may only be whitespace"),
        ("  ", is_not_blank(), "may not be blank"),
        ("abc", is_blank(), "may only be blank"),
        ("12", is_longer_or_equal_to(3), "may not be shorter than 3"),
        ("123", is_longer_than(3), "may not be shorter than 4"),
        ("1234", is_shorter_or_equal_to(3), "may not be longer than 3"),
        ("123", is_shorter_than(3), "may not be longer than 2"),
        ("12", has_length_equal_to(3), "may not be longer or shorter than 3"),
        (3, is_in_range_exclusive(3, 5), "value must be between 3 and 5"),
        (3.2, is_in_range_exclusive(3.2, 5.0), "value must be between 3.2 and 5.0"),
        (2, is_in_range_inclusive(3, 5), "value must be between 3 and 5"),
        (3.1, is_in_range_inclusive(3.2, 5.0), "value must be between 3.2 and 5.0"),
        ("four", is_in_range_inclusive(3, 5), "value must be between 3 and 5"),
        ("abc", is_numeric(), "must be numeric"),
        ("123..4", is_double(), "must be a floating point number"),
        ("ab-12", is_matching_pattern(r"[a-z]+"), "does not match pattern"),
        (EnumB.VALUE_C, is_valid_as_enum(EnumA), "invalid field value"),
        ("VALUE_A", is_valid_as_enum(EnumA), "invalid field value"),
    ],
)
def test_constraint_reports_violation(value: Any, constraint: ValidationConstraint, message: str) -> None:
    assert constraint.get_error_for(value) == message


@pytest.mark.parametrize(
    ("value", "constraint"),
    [
        ("a", is_equal_to("a")),
        ("", is_not_null()),
        (" ", is_not_empty()),
        ([1], is_not_empty()),
        ("abc", is_not_whitespace()),
        ("   ", is_whitespace()),
        ("abc", is_not_blank()),
        (None, is_blank()),
        ("123", is_longer_or_equal_to(3)),
        ("1234", is_longer_than(3)),
        ("123", is_shorter_or_equal_to(3)),
        ("12", is_shorter_than(3)),
        ("123", has_length_equal_to(3)),
        (4, is_in_range_exclusive(3, 5)),
        (4.1, is_in_range_exclusive(3.2, 5.0)),
        (3, is_in_range_inclusive(3, 5)),
        ("4", is_in_range_inclusive(3, 5)),
        (3.3, is_in_range_inclusive(3.2, 5.0)),
        (4, is_in_range_inclusive(3.2, 5.0)),
        ("123", is_numeric()),
        ("123.4", is_double()),
        ("12", is_double()),
        ("abc", is_matching_pattern(r"[a-z]+")),
        (EnumB.VALUE_A, is_valid_as_enum(EnumA)),
    ],
)
def test_constraint_accepts_valid_value(value: Any, constraint: ValidationConstraint) -> None:
    assert constraint.get_error_for(value) is None


def test_non_positive_minimal_length_is_always_valid() -> None:
    assert is_longer_or_equal_to(0) is ALWAYS_VALID
    assert is_longer_than(-1) is ALWAYS_VALID
    assert is_longer_or_equal_to(0).get_error_for(None) is None


def test_constraints_are_idempotent() -> None:
    constraint = has_length_equal_to(5)
    assert constraint.get_error_for("ab") == constraint.get_error_for("ab")
    assert constraint("ab") == "may not be longer or shorter than 5"


def test_fulfills_converts_predicate_exceptions() -> None:
    def explode(value: Any) -> bool:
        raise RuntimeError("boom")

    with capture_logs() as logs:
        assert fulfills(explode).get_error_for(1) == "exception thrown while testing against predicate"

    assert logs[0]["event"] == "predicate_failed"
    assert logs[0]["log_level"] == "warning"
    assert logs[0]["error_type"] == "RuntimeError"


def test_fulfills_uses_predicate_result() -> None:
    assert fulfills(lambda v: v == 2).get_error_for(1) == "does not fulfill predicate"
    assert fulfills(lambda v: v == 2).get_error_for(2) is None


def test_plain_check_functions_are_wrapped() -> None:
    constraint = as_constraint(lambda v: None if v > 0 else "must be positive")
    assert isinstance(constraint, ValidationConstraint)
    assert constraint.get_error_for(-1) == "must be positive"
    assert as_constraint(constraint) is constraint

    with pytest.raises(TypeError):
        as_constraint("not a constraint")


def test_failing_check_function_is_reported_not_raised() -> None:
    constraint = as_constraint(lambda v: v.missing_attribute)
    with capture_logs() as logs:
        assert constraint.get_error_for(1) == "exception thrown while testing against constraint"
    assert logs[0]["event"] == "constraint_failed"
