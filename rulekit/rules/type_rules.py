"""
Type Validation Rules

Rules that check what kind of value was supplied:
- string, integer, number, numeric
- array, json
- alpha, alphaNum, ascii
"""

import json
import re
from typing import Any

from .base import ValidationRule, numeric_value


class StringValidationRule(ValidationRule):
    error_message = "The value must be a string."

    def passes(self, value: Any) -> bool:
        return isinstance(value, str)


class IntegerValidationRule(ValidationRule):
    """Only real ints pass; booleans and integral floats do not."""

    error_message = "The value must be an integer."

    def passes(self, value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)


class NumberValidationRule(ValidationRule):
    """Ints and floats. Numeric strings fail, unlike `numeric`."""

    error_message = "The value must be a number."

    def passes(self, value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)


class NumericValidationRule(ValidationRule):
    """Ints, floats and strings that parse as a number."""

    error_message = "The value must be numeric."

    def passes(self, value: Any) -> bool:
        return numeric_value(value) is not None


class ArrayValidationRule(ValidationRule):
    error_message = "The value must be an array."

    def passes(self, value: Any) -> bool:
        return isinstance(value, (list, tuple))


class JsonValidationRule(ValidationRule):
    error_message = "The value must be a valid JSON string."

    def passes(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        try:
            json.loads(value)
        except ValueError:
            return False
        return True


class AlphaValidationRule(ValidationRule):
    """ASCII letters only."""

    error_message = "The value must contain only alphabetic characters."
    _pattern = re.compile(r"[A-Za-z]+")

    def passes(self, value: Any) -> bool:
        return isinstance(value, str) and self._pattern.fullmatch(value) is not None


class AlphaNumericValidationRule(ValidationRule):
    error_message = "The value must contain only letters and digits."
    _pattern = re.compile(r"[A-Za-z0-9]+")

    def passes(self, value: Any) -> bool:
        return isinstance(value, str) and self._pattern.fullmatch(value) is not None


class AsciiValidationRule(ValidationRule):
    error_message = "The value must contain only ASCII characters."

    def passes(self, value: Any) -> bool:
        return isinstance(value, str) and value.isascii()
