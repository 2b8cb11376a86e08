"""Specialized validator — reusable validation for one type, plugged into a chain.

A SpecializedValidator factors out the rules for a type that shows up in many
places. The fluent chain hands it the field value together with the field's
path, and merges the report it returns:

    class AddressValidator(SpecializedValidator):
        def get_validation_for(self, value, name):
            return (
                self.validate(value, name)
                .given(lambda a: a.street).expect_that(is_not_blank())
                .if_errors_present()
                .get_validation_results()
            )

    validate(order).with_default_name().given(lambda o: o.address).validate_using(AddressValidator)
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from fluentcheck.validators.models import ValidationMap

if TYPE_CHECKING:
    from fluentcheck.validators.engine import FieldValidatorBuilder


class SpecializedValidator(ABC):
    """Abstract base for validators that produce a complete report for one value.

    Contract:
        - get_validation_for() keys its report relative to ``name``
        - it never receives ``None``; absent fields are skipped by the chain
        - violations are returned, not raised
    """

    @property
    def name(self) -> str:
        """Human-readable name for logging."""
        return type(self).__name__

    @abstractmethod
    def get_validation_for(self, value: Any, name: str) -> ValidationMap:
        """Validate ``value``.

        Args:
            value: The (non-None) field value
            name: Path of the field, used as the base name of the report

        Returns:
            ValidationMap with paths prefixed by ``name`` (empty if valid)
        """
        ...

    # ── Helper Methods ──

    def validate(self, value: Any, name: str) -> "FieldValidatorBuilder":
        """Start a fluent chain over ``value`` named ``name``."""
        from fluentcheck.validators.engine import validate
        return validate(value).with_name(name)
