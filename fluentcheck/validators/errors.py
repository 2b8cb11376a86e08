"""Exception types raised by the fluent validator.

Recorded constraint violations are never exceptions; they end up in a
ValidationMap. Only the cases below abort a validation chain.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from fluentcheck.validators.models import ValidationMap


class FluentCheckError(Exception):
    """Base class for every error raised by fluentcheck."""


class ValidationException(FluentCheckError, ValueError):
    """Validation failed.

    Raised by ``ValidationFinalizer.raise_validation_exception()`` when the
    report is not empty. The message is the rendered report.
    """

    def __init__(self, message: str, validation_map: Optional["ValidationMap"] = None):
        super().__init__(message)
        self.validation_map = validation_map


class MissingBaseObject(ValidationException):
    """The object passed to ``validate()`` is ``None``."""

    def __init__(self, name: Optional[str]):
        super().__init__(f"{name or 'base object'} may not be null")
        self.name = name


class InvalidAccessor(FluentCheckError, ValueError):
    """The expression passed to ``given()`` did not read a public attribute or getter."""

    def __init__(self, accessor_name: Optional[str]):
        if accessor_name is None:
            message = "No attribute or getter was accessed on the recording object"
        else:
            message = f"Accessed a member that is not an attribute or getter: {accessor_name}"
        super().__init__(message)
        self.accessor_name = accessor_name
