"""fluentcheck — fluent object validation that reports every violation by field path."""

from fluentcheck.validators import (
    FluentCheckError,
    InvalidAccessor,
    MissingBaseObject,
    SpecializedValidator,
    ValidationConstraint,
    ValidationException,
    ValidationMap,
    validate,
)
from fluentcheck.logging_config import configure_logging

__version__ = "1.0.0"

__all__ = [
    "validate",
    "configure_logging",
    "SpecializedValidator",
    "ValidationConstraint",
    "ValidationMap",
    "FluentCheckError",
    "ValidationException",
    "MissingBaseObject",
    "InvalidAccessor",
]
