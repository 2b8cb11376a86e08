"""Validation constraints — pure checks that map a value to an optional error message.

Every factory below returns a ValidationConstraint. Constraints are meant to be
imported directly:

    from fluentcheck.validators.constraints import is_not_null, is_shorter_than

    validate(order).with_default_name() \\
        .given(lambda o: o.code) \\
        .expect_that(is_not_null(), is_shorter_than(8))

Constraints never raise for bad input: a value that cannot be checked is
reported with the constraint's message.
"""

import re
from collections.abc import Collection
from enum import Enum
from typing import Any, Callable, Optional, Union

import structlog

logger = structlog.get_logger()

Number = Union[int, float]


class ValidationConstraint:
    """A single check. ``get_error_for(value)`` returns ``None`` when the value is valid.

    Any plain ``value -> Optional[str]`` function can be wrapped; an exception
    raised by it is reported as a violation, never propagated.
    """

    def __init__(self, check: Callable[[Any], Optional[str]], description: str = ""):
        self._check = check
        self.description = description or getattr(check, "__name__", "constraint")

    def get_error_for(self, value: Any) -> Optional[str]:
        try:
            return self._check(value)
        except Exception as e:
            logger.warning(
                "constraint_failed",
                constraint=self.description,
                error=str(e),
                error_type=type(e).__name__,
            )
            return "exception thrown while testing against constraint"

    def __call__(self, value: Any) -> Optional[str]:
        return self.get_error_for(value)

    def __repr__(self) -> str:
        return f"ValidationConstraint({self.description})"


ALWAYS_VALID = ValidationConstraint(lambda value: None, "always_valid")


def as_constraint(constraint: Union[ValidationConstraint, Callable[[Any], Optional[str]]]) -> ValidationConstraint:
    """Wrap a plain check function; ValidationConstraint instances pass through."""
    if isinstance(constraint, ValidationConstraint):
        return constraint
    if callable(constraint):
        return ValidationConstraint(constraint)
    raise TypeError(f"Expected a ValidationConstraint or a callable, got {type(constraint).__name__}")


# ── Equality and presence ──

def is_equal_to(other: Any) -> ValidationConstraint:
    """Value must equal ``other``."""
    def check(value: Any) -> Optional[str]:
        return None if value == other else f"must be equal to {other}"
    return ValidationConstraint(check, f"is_equal_to({other!r})")


def is_not_null() -> ValidationConstraint:
    """Value must not be ``None``."""
    return ValidationConstraint(
        lambda value: "may not be null" if value is None else None,
        "is_not_null()",
    )


def is_not_empty() -> ValidationConstraint:
    """Collection must have elements; anything else must have a non-empty string form."""
    def check(value: Any) -> Optional[str]:
        if isinstance(value, Collection) and not isinstance(value, str):
            return "may not be empty" if len(value) == 0 else None
        return "may not be empty" if _as_string(value) == "" else None
    return ValidationConstraint(check, "is_not_empty()")


# ── Whitespace ──
# None is checked through its string form "", which counts as whitespace.

def is_not_whitespace() -> ValidationConstraint:
    return ValidationConstraint(
        lambda value: "may not be whitespace" if _is_blank(value) else None,
        "is_not_whitespace()",
    )


def is_whitespace() -> ValidationConstraint:
    return ValidationConstraint(
        lambda value: None if _is_blank(value) else "may only be whitespace",
        "is_whitespace()",
    )


def is_not_blank() -> ValidationConstraint:
    return ValidationConstraint(
        lambda value: "may not be blank" if _is_blank(value) else None,
        "is_not_blank()",
    )


def is_blank() -> ValidationConstraint:
    return ValidationConstraint(
        lambda value: None if _is_blank(value) else "may only be blank",
        "is_blank()",
    )


# ── Length ──

def is_longer_than(minimal_length: int) -> ValidationConstraint:
    """String form must be strictly longer than ``minimal_length``."""
    return is_longer_or_equal_to(minimal_length + 1)


def is_longer_or_equal_to(minimal_length: int) -> ValidationConstraint:
    if minimal_length <= 0:
        return ALWAYS_VALID

    def check(value: Any) -> Optional[str]:
        if len(_as_string(value)) < minimal_length:
            return f"may not be shorter than {minimal_length}"
        return None
    return ValidationConstraint(check, f"is_longer_or_equal_to({minimal_length})")


def is_shorter_than(maximal_length: int) -> ValidationConstraint:
    """String form must be strictly shorter than ``maximal_length``."""
    return is_shorter_or_equal_to(maximal_length - 1)


def is_shorter_or_equal_to(maximal_length: int) -> ValidationConstraint:
    def check(value: Any) -> Optional[str]:
        if len(_as_string(value)) > maximal_length:
            return f"may not be longer than {maximal_length}"
        return None
    return ValidationConstraint(check, f"is_shorter_or_equal_to({maximal_length})")


def has_length_equal_to(expected_length: int) -> ValidationConstraint:
    def check(value: Any) -> Optional[str]:
        if len(_as_string(value)) != expected_length:
            return f"may not be longer or shorter than {expected_length}"
        return None
    return ValidationConstraint(check, f"has_length_equal_to({expected_length})")


# ── Numeric ranges ──

def is_in_range_exclusive(minimum: Number, maximum: Number) -> ValidationConstraint:
    """``minimum < value < maximum`` after coercion to the bounds' type."""
    message = f"value must be between {minimum} and {maximum}"

    def check(value: Any) -> Optional[str]:
        number = _as_number(value, minimum, maximum)
        if number is None or number <= minimum or number >= maximum:
            return message
        return None
    return ValidationConstraint(check, f"is_in_range_exclusive({minimum}, {maximum})")


def is_in_range_inclusive(minimum: Number, maximum: Number) -> ValidationConstraint:
    """``minimum <= value <= maximum`` after coercion to the bounds' type."""
    message = f"value must be between {minimum} and {maximum}"

    def check(value: Any) -> Optional[str]:
        number = _as_number(value, minimum, maximum)
        if number is None or number < minimum or number > maximum:
            return message
        return None
    return ValidationConstraint(check, f"is_in_range_inclusive({minimum}, {maximum})")


# ── Format ──

def is_numeric() -> ValidationConstraint:
    """String form consists of decimal digits only."""
    def check(value: Any) -> Optional[str]:
        text = _as_string(value)
        return None if text.isdecimal() else "must be numeric"
    return ValidationConstraint(check, "is_numeric()")


def is_double() -> ValidationConstraint:
    """String form looks like a non-negative floating point number, e.g. ``12`` or ``12.5``."""
    pattern = is_matching_pattern(r"[0-9]+\.?[0-9]*")

    def check(value: Any) -> Optional[str]:
        return "must be a floating point number" if pattern.get_error_for(value) else None
    return ValidationConstraint(check, "is_double()")


def is_matching_pattern(pattern: str) -> ValidationConstraint:
    """String form must match ``pattern`` in full."""
    compiled = re.compile(pattern)

    def check(value: Any) -> Optional[str]:
        return None if compiled.fullmatch(_as_string(value)) else "does not match pattern"
    return ValidationConstraint(check, f"is_matching_pattern({pattern!r})")


def is_valid_as_enum(enum_cls: type[Enum]) -> ValidationConstraint:
    """Value is an Enum member whose name also exists in ``enum_cls``."""
    def check(value: Any) -> Optional[str]:
        if isinstance(value, Enum) and value.name in enum_cls.__members__:
            return None
        return "invalid field value"
    return ValidationConstraint(check, f"is_valid_as_enum({enum_cls.__name__})")


# ── Predicates ──

def fulfills(predicate: Callable[[Any], bool]) -> ValidationConstraint:
    """Value must satisfy ``predicate``.

    Exceptions raised by the predicate are recorded as a violation instead of
    aborting the validation chain.
    """
    def check(value: Any) -> Optional[str]:
        try:
            return None if predicate(value) else "does not fulfill predicate"
        except Exception as e:
            logger.warning(
                "predicate_failed",
                predicate=getattr(predicate, "__name__", repr(predicate)),
                error=str(e),
                error_type=type(e).__name__,
            )
            return "exception thrown while testing against predicate"
    return ValidationConstraint(check, f"fulfills({getattr(predicate, '__name__', 'predicate')})")


# ── Helpers ──

def _as_string(value: Any) -> str:
    return "" if value is None else str(value)


def _is_blank(value: Any) -> bool:
    text = _as_string(value)
    return text == "" or text.isspace()


def _as_number(value: Any, *bounds: Number) -> Optional[Number]:
    """Coerce ``value`` to float when any bound is a float, otherwise to int."""
    target = float if any(isinstance(bound, float) for bound in bounds) else int
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) and target is float:
        return float(value)
    if isinstance(value, int):
        return value
    try:
        return target(_as_string(value))
    except (TypeError, ValueError):
        return None
