"""Fluent validation engine — describe rules for an object graph, collect every violation.

This is the main entry point. A chain names the base object, descends into
its fields, applies constraints and finally returns or raises the report:

    report = (
        validate(order).with_name("Order")
        .given(lambda o: o.amount).expect_that(is_not_null())
        .and_()
        .given(lambda o: o.lines).for_each(lambda line: line.expect_that(is_not_blank()))
        .if_errors_present()
        .get_validation_results()
    )

Each class below is one stage of the chain:

    BaseObjectNameBuilder -> FieldValidatorBuilder -> FieldValidator -> ValidationFinalizer

Violations never abort the chain; they are recorded under the field's dotted
path. Nested objects, collection elements and specialized validators run in
their own sub-chain whose report is merged into the parent's.
"""

from collections.abc import Iterable
from typing import Any, Callable, Optional, Self, Union

import structlog

from fluentcheck.validators.base import SpecializedValidator
from fluentcheck.validators.constraints import ValidationConstraint, as_constraint, is_not_null
from fluentcheck.validators.errors import MissingBaseObject, ValidationException
from fluentcheck.validators.models import ValidationMap
from fluentcheck.validators.recording import name_of

logger = structlog.get_logger()

# Path segment used for None elements of a collection
NULL_ELEMENT_NAME = "null"

Condition = Union[bool, ValidationConstraint, Callable[[Any], Any]]
Constraint = Union[ValidationConstraint, Callable[[Any], Optional[str]]]


def validate(base_object: Any) -> "BaseObjectNameBuilder":
    """Start validating ``base_object``.

    Returns:
        BaseObjectNameBuilder; pick a name for the base object next
    """
    return BaseObjectNameBuilder(FluentValidator(base_object))


class FluentValidator:
    """State shared by every stage of one chain: the base object, its name and the report.

    Sub-chains (nested objects, collection elements) get their own
    FluentValidator and are merged back when they finish.
    """

    def __init__(self, base_object: Any):
        self.base_object = base_object
        self.base_object_name: Optional[str] = None
        self.validation_results = ValidationMap()

    def field_path(self, field_name: str) -> str:
        return f"{self.base_object_name}.{field_name}"

    def merge(self, results: ValidationMap, source: str) -> None:
        if not results.is_empty():
            logger.debug(
                "validation_merged",
                base_object=self.base_object_name,
                source=source,
                fields=len(results),
            )
        self.validation_results.merge(results)


class BaseObjectNameBuilder:
    """Picks the name that prefixes every field path."""

    def __init__(self, validator: FluentValidator):
        self._validator = validator

    def with_default_name(self) -> "FieldValidatorBuilder":
        """Use the base object's class name.

        Raises:
            MissingBaseObject: the base object is None
        """
        self._check_base_object()
        self._validator.base_object_name = type(self._validator.base_object).__name__
        return FieldValidatorBuilder(self._validator)

    def with_name(self, base_object_name: str) -> "FieldValidatorBuilder":
        """Use ``base_object_name``.

        Raises:
            MissingBaseObject: the base object is None
        """
        self._validator.base_object_name = base_object_name
        self._check_base_object()
        return FieldValidatorBuilder(self._validator)

    def _check_base_object(self) -> None:
        if self._validator.base_object is None:
            raise MissingBaseObject(self._validator.base_object_name)


class FieldValidatorBuilder:
    """Selects the next field of the base object to validate."""

    def __init__(self, validator: FluentValidator):
        self._validator = validator

    def given(self, field: Any, field_name: Optional[str] = None) -> "FieldValidator":
        """Select a field.

        ``given(lambda o: o.amount)`` reads the field from the base object and
        infers its name from the accessor. ``given(value, "amount")`` takes the
        value and name as they are.

        Raises:
            InvalidAccessor: the accessor did not read a public member
        """
        if field_name is not None:
            return self._field_validator(field, field_name)

        if not callable(field):
            raise TypeError("given() needs an accessor callable, or a value together with a field name")

        base_object = self._validator.base_object
        field_name = name_of(field, type(base_object))
        return self._field_validator(field(base_object), field_name)

    def given_from(self, getter: Callable[[], Any], field_name: str) -> "FieldValidator":
        """Select the value returned by ``getter`` under ``field_name``."""
        return self._field_validator(getter(), field_name)

    def if_errors_present(self) -> "ValidationFinalizer":
        return ValidationFinalizer(self._validator)

    def _field_validator(self, value: Any, field_name: str) -> "FieldValidator":
        path = self._validator.field_path(field_name)
        if value is None or (isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray))):
            return IterableFieldValidator(self._validator, value, path)
        return FieldValidator(self._validator, value, path)


class FieldValidator:
    """Rules for one field.

    The gate decides whether ``expect_that`` records anything. It starts open;
    ``when`` reopens it and then narrows it, ``and_when`` only narrows it.
    """

    def __init__(self, validator: FluentValidator, value: Any, path: str):
        self._validator = validator
        self.value = value
        self.path = path
        self.can_be_validated = True

    # ── Conditions ──

    def when(self, *conditions: Condition) -> Self:
        """Validate only if all ``conditions`` hold. Drops earlier conditions for this field.

        A condition is a bool, a ValidationConstraint (holds when it reports no
        error) or a predicate over the field value (holds when truthy).
        """
        self.can_be_validated = True
        return self.and_when(*conditions)

    def and_when(self, *conditions: Condition) -> Self:
        """Add ``conditions`` to the ones already set for this field."""
        results = [self._condition_holds(condition) for condition in conditions]
        self.can_be_validated = self.can_be_validated and all(results)
        return self

    def _condition_holds(self, condition: Condition) -> bool:
        if isinstance(condition, bool):
            return condition
        if isinstance(condition, ValidationConstraint):
            return condition.get_error_for(self.value) is None
        if callable(condition):
            return bool(condition(self.value))
        raise TypeError(f"Unsupported condition type: {type(condition).__name__}")

    # ── Checks ──

    def expect_that(self, *constraints: Constraint) -> Self:
        """Record the error of every failing constraint under this field's path."""
        if self.can_be_validated:
            for constraint in constraints:
                error = as_constraint(constraint).get_error_for(self.value)
                if error is not None:
                    self._validator.validation_results.record(self.path, error)
        return self

    def validate_internals(self, validator_consumer: Callable[["FieldValidatorBuilder"], Any]) -> Self:
        """Validate the fields of this field's value.

        ``validator_consumer`` receives a FieldValidatorBuilder for the value,
        named after this field's path. Skipped when the value is None.
        """
        if self.value is not None:
            builder = validate(self.value).with_name(self.path)
            validator_consumer(builder)
            self._validator.merge(builder.if_errors_present().get_validation_results(), self.path)
        return self

    def validate_using(self, target: Union[SpecializedValidator, type, Callable[[Any], Any]]) -> Self:
        """Hand the value to a SpecializedValidator or a custom action.

        A SpecializedValidator (instance, or subclass to instantiate) returns a
        report that is merged; it is skipped when the value is None. Any other
        callable is a custom action: it receives the value, and whatever it
        raises ends the whole chain.
        """
        if isinstance(target, type) and issubclass(target, SpecializedValidator):
            target = target()

        if isinstance(target, SpecializedValidator):
            if self.value is not None:
                self._validator.merge(target.get_validation_for(self.value, self.path), target.name)
            return self

        target(self.value)
        return self

    # ── Transitions ──

    def and_(self) -> FieldValidatorBuilder:
        """Finish this field and select another one of the same base object."""
        return FieldValidatorBuilder(self._validator)

    def if_errors_present(self) -> "ValidationFinalizer":
        return ValidationFinalizer(self._validator)


class IterableFieldValidator(FieldValidator):
    """FieldValidator for collections (and None), adds per-element validation."""

    def for_each(
        self,
        validator_consumer: Callable[[FieldValidator], Any],
        namer: Callable[[Any], str] = str,
    ) -> Self:
        """Validate every element on its own.

        Each element gets a FieldValidator with path ``<field path>.<namer(element)>``,
        or ``<field path>.null`` for None elements. A None collection is
        skipped, and so are collections whose conditions don't hold.
        """
        self.and_when(is_not_null())
        if not self.can_be_validated:
            return self

        for element in self.value:
            element_name = NULL_ELEMENT_NAME if element is None else namer(element)
            element_validator = validate(self.value).with_name(self.path).given(element, element_name)
            validator_consumer(element_validator)
            self._validator.merge(element_validator.if_errors_present().get_validation_results(), element_validator.path)
        return self


class ValidationFinalizer:
    """End of the chain: hand out the report or raise when it is not empty."""

    def __init__(self, validator: FluentValidator):
        self._validator = validator

    def get_validation_results(self) -> ValidationMap:
        """Copy of the report: field path -> error messages."""
        return self._validator.validation_results.copy()

    def raise_exception(self, exception: BaseException) -> None:
        """Raise ``exception`` if there are errors."""
        self._raise_if_errors(lambda: exception)

    def raise_from_factory(self, exception_factory: Callable[[], BaseException]) -> None:
        """Raise ``exception_factory()`` if there are errors. The factory is not called otherwise."""
        self._raise_if_errors(exception_factory)

    def raise_from_report(self, exception_builder: Callable[[ValidationMap], BaseException]) -> None:
        """Raise the exception built from the report if there are errors."""
        self._raise_if_errors(lambda: exception_builder(self.get_validation_results()))

    def raise_validation_exception(self) -> None:
        """Raise ValidationException carrying the rendered report if there are errors."""
        self._raise_if_errors(None)

    def _raise_if_errors(self, build_exception: Optional[Callable[[], Optional[BaseException]]]) -> None:
        results = self._validator.validation_results
        logger.debug(
            "validation_finalized",
            base_object=self._validator.base_object_name,
            fields=len(results),
        )
        if results.is_empty():
            return

        exception = build_exception() if build_exception is not None else None
        if exception is None:
            exception = ValidationException(str(results), results.copy())

        logger.info(
            "validation_failed",
            base_object=self._validator.base_object_name,
            fields=sorted(results.keys()),
            exception_type=type(exception).__name__,
        )
        raise exception
