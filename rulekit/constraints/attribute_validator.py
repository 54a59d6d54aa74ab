"""
Attribute Validator

Evaluates the constraints declared on a class's properties (see markers.py)
against actual property values.

Value source:
- A class is validated on a freshly default-constructed instance.
- An instance is validated on its own values (source="instance", the
  default), or on a default-constructed instance of its class
  (source="defaults"). The latter discards the caller's data and only
  exists for compatibility with callers that relied on it.
"""

import logging
from typing import Any

from ..errors import PropertyAccessError
from ..models.validation_result import ClassValidationResult, ValidationFailure
from .markers import get_property_constraints

logger = logging.getLogger(__name__)

SOURCES = ("instance", "defaults")


class AttributeValidator:
    """
    Reflection-driven validator for constrained class properties.

    Usage:
        result = AttributeValidator().validate(form)
        if not result.passed:
            print(result.field_errors)
    """

    def __init__(self, source: str = "instance"):
        if source not in SOURCES:
            raise ValueError(f"source must be one of {SOURCES}, got {source!r}")
        self.source = source

    def validate(self, target: Any) -> ClassValidationResult:
        """
        Validate every constrained public property of a class or instance.

        Args:
            target: Class or instance to validate

        Returns:
            ClassValidationResult; passed iff no constraint failed

        Raises:
            PropertyAccessError: If the class cannot be default-constructed
                or a constrained property has no value
        """
        cls = target if isinstance(target, type) else type(target)
        subject = self._resolve_subject(target, cls)
        result = ClassValidationResult(target=cls.__name__)

        for property_name, markers in get_property_constraints(cls).items():
            value = self._read_property(subject, cls, property_name)

            for marker in markers:
                for rule_name, rule in marker.get_rules():
                    if rule.passes(value):
                        continue
                    message = rule.get_error_message()
                    logger.debug(f"{cls.__name__}.{property_name} failed '{rule_name}': {message}")
                    result.add_failure(ValidationFailure(
                        rule_name=rule_name,
                        error_message=message,
                        actual_value=value,
                        field_path=property_name,
                    ))

        return result

    def _resolve_subject(self, target: Any, cls: type) -> Any:
        if not isinstance(target, type) and self.source == "instance":
            return target
        if not isinstance(target, type):
            logger.info(
                f"Validating {cls.__name__} on a default-constructed instance; "
                f"values of the supplied instance are ignored"
            )
        try:
            return cls()
        except TypeError as e:
            raise PropertyAccessError(cls, "__init__", f"class cannot be default-constructed ({e})") from e

    @staticmethod
    def _read_property(subject: Any, cls: type, property_name: str) -> Any:
        try:
            return getattr(subject, property_name)
        except AttributeError as e:
            raise PropertyAccessError(cls, property_name, "property has no value") from e


def validate_class(target: Any, source: str = "instance") -> ClassValidationResult:
    """Convenience wrapper around AttributeValidator.validate."""
    return AttributeValidator(source=source).validate(target)
