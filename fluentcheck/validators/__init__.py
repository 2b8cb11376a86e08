"""Fluent validator — chained validation rules collected into one report.

Usage:
    from fluentcheck.validators import validate
    from fluentcheck.validators.constraints import is_not_null

    validate(order).with_default_name() \
        .given(lambda o: o.amount).expect_that(is_not_null()) \
        .if_errors_present() \
        .raise_validation_exception()
"""

from fluentcheck.validators.engine import (
    BaseObjectNameBuilder,
    FieldValidator,
    FieldValidatorBuilder,
    FluentValidator,
    IterableFieldValidator,
    ValidationFinalizer,
    validate,
)
from fluentcheck.validators.base import SpecializedValidator
from fluentcheck.validators.constraints import ValidationConstraint
from fluentcheck.validators.errors import FluentCheckError, InvalidAccessor, MissingBaseObject, ValidationException
from fluentcheck.validators.models import ValidationMap

__all__ = [
    "validate",
    "FluentValidator",
    "BaseObjectNameBuilder",
    "FieldValidatorBuilder",
    "FieldValidator",
    "IterableFieldValidator",
    "ValidationFinalizer",
    "SpecializedValidator",
    "ValidationConstraint",
    "ValidationMap",
    "FluentCheckError",
    "ValidationException",
    "MissingBaseObject",
    "InvalidAccessor",
]
