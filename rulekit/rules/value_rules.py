"""
Value Validation Rules

Rules parameterised by spec arguments:
- Ranges: between, min, max
- String length: minLength, maxLength
- Equality and membership: equalTo, notEqualTo, inList, notInList, enum members
- Presence: required, empty, notEmpty
- Pattern matching: regex
"""

import re
from enum import Enum
from typing import Any, Tuple, Type

from .base import ValidationRule, numeric_value, to_number


def _loosely_equal(value: Any, target: Any) -> bool:
    """
    Compare a checked value against a spec argument.

    Spec arguments always arrive as strings, so `equalTo:100` must accept the
    integer 100. Numbers compare numerically, everything else falls back to
    string comparison when the types differ.
    """
    if value == target:
        return True
    left, right = numeric_value(value), numeric_value(target)
    if left is not None and right is not None:
        return left == right
    if isinstance(value, bool) or isinstance(target, bool):
        return False
    if type(value) is not type(target) and isinstance(target, str):
        return str(value) == target
    return False


def _as_items(items: Tuple[Any, ...]) -> Tuple[Any, ...]:
    # inList([1, 2, 3]) from code, inList:1:2:3 from a spec
    if len(items) == 1 and isinstance(items[0], (list, tuple, set, frozenset)):
        return tuple(items[0])
    return items


class BetweenValidationRule(ValidationRule):
    """Numeric value strictly between the two bounds."""

    def __init__(self, min_value: Any, max_value: Any):
        self.min_value = to_number(min_value, "min")
        self.max_value = to_number(max_value, "max")

    def passes(self, value: Any) -> bool:
        number = numeric_value(value)
        if number is None:
            return False
        return self.min_value < number < self.max_value

    def get_error_message(self) -> str:
        return f"The value must be between {self.min_value} and {self.max_value}."


class MinValidationRule(ValidationRule):

    def __init__(self, min_value: Any):
        self.min_value = to_number(min_value, "min")

    def passes(self, value: Any) -> bool:
        number = numeric_value(value)
        return number is not None and number >= self.min_value

    def get_error_message(self) -> str:
        return f"The value must be at least {self.min_value}."


class MaxValidationRule(ValidationRule):

    def __init__(self, max_value: Any):
        self.max_value = to_number(max_value, "max")

    def passes(self, value: Any) -> bool:
        number = numeric_value(value)
        return number is not None and number <= self.max_value

    def get_error_message(self) -> str:
        return f"The value must not be greater than {self.max_value}."


class MinLengthValidationRule(ValidationRule):
    """Strings only; any other type fails."""

    def __init__(self, min_length: Any):
        self.min_length = int(to_number(min_length, "min_length"))

    def passes(self, value: Any) -> bool:
        return isinstance(value, str) and len(value) >= self.min_length

    def get_error_message(self) -> str:
        return f"The value must be at least {self.min_length} characters long."


class MaxLengthValidationRule(ValidationRule):
    """Strings only; any other type fails."""

    def __init__(self, max_length: Any):
        self.max_length = int(to_number(max_length, "max_length"))

    def passes(self, value: Any) -> bool:
        return isinstance(value, str) and len(value) <= self.max_length

    def get_error_message(self) -> str:
        return f"The value must not be longer than {self.max_length} characters."


class EqualToValidationRule(ValidationRule):

    def __init__(self, target: Any):
        self.target = target

    def passes(self, value: Any) -> bool:
        return _loosely_equal(value, self.target)

    def get_error_message(self) -> str:
        return f"The value must be equal to {self.target!r}."


class NotEqualToValidationRule(ValidationRule):

    def __init__(self, target: Any):
        self.target = target

    def passes(self, value: Any) -> bool:
        return not _loosely_equal(value, self.target)

    def get_error_message(self) -> str:
        return f"The value must not be equal to {self.target!r}."


class InListValidationRule(ValidationRule):

    def __init__(self, *items: Any):
        self.items = _as_items(items)

    def passes(self, value: Any) -> bool:
        return any(_loosely_equal(value, item) for item in self.items)

    def get_error_message(self) -> str:
        return f"The value must be one of: {', '.join(map(str, self.items))}."


class NotInListValidationRule(ValidationRule):

    def __init__(self, *items: Any):
        self.items = _as_items(items)

    def passes(self, value: Any) -> bool:
        return not any(_loosely_equal(value, item) for item in self.items)

    def get_error_message(self) -> str:
        return f"The value must not be one of: {', '.join(map(str, self.items))}."


class EnumValidationRule(ValidationRule):
    """
    Members of an Enum class, given as the member itself, its name or its value.

    The class cannot be named in a rule spec, so this rule is not registered;
    use it from code, e.g. `Constraint(EnumValidationRule(Status))`.
    """

    def __init__(self, enum_class: Type[Enum]):
        if not (isinstance(enum_class, type) and issubclass(enum_class, Enum)):
            raise TypeError(f"EnumValidationRule expects an Enum class, got {enum_class!r}")
        self.enum_class = enum_class

    def passes(self, value: Any) -> bool:
        if isinstance(value, self.enum_class):
            return True
        if isinstance(value, str) and value in self.enum_class.__members__:
            return True
        try:
            self.enum_class(value)
        except (TypeError, ValueError):
            return False
        return True

    def get_error_message(self) -> str:
        names = ", ".join(self.enum_class.__members__)
        return f"The value must be one of the {self.enum_class.__name__} members: {names}."


class RequiredValidationRule(ValidationRule):
    """
    Fails for None, the empty string and empty collections.

    False and 0 are present values and pass.
    """

    error_message = "The value is required."

    def passes(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return value != ""
        if isinstance(value, (list, tuple, dict, set, frozenset)):
            return len(value) > 0
        return True


class EmptyValidationRule(ValidationRule):
    """None, "" and empty collections. 0, "0" and False are not empty."""

    error_message = "The value must be empty."

    def passes(self, value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, str):
            return value == ""
        if isinstance(value, (list, tuple, dict, set, frozenset)):
            return len(value) == 0
        return False


class NotEmptyValidationRule(EmptyValidationRule):
    error_message = "The value must not be empty."

    def passes(self, value: Any) -> bool:
        return not super().passes(value)


class RegexValidationRule(ValidationRule):
    """
    Pattern match against the string form of the value.

    Accepts bare patterns (`^[a-z]+$`) and delimited ones with trailing
    flags (`/^[a-z]+$/i`). A colon cannot appear in a pattern given through
    a rule spec.
    """

    _FLAGS = {
        'i': re.IGNORECASE,
        'm': re.MULTILINE,
        's': re.DOTALL,
        'x': re.VERBOSE,
    }

    def __init__(self, pattern: str):
        self.pattern = pattern
        body, flags = self._split_delimiters(pattern)
        try:
            self._compiled = re.compile(body, flags)
        except re.error as e:
            raise ValueError(f"invalid regular expression {pattern!r}: {e}") from e

    @classmethod
    def _split_delimiters(cls, pattern: str):
        if len(pattern) < 2 or pattern[0].isalnum() or pattern[0] in "\\^([{.":
            return pattern, 0
        delimiter = pattern[0]
        end = pattern.rfind(delimiter)
        if end <= 0:
            return pattern, 0
        modifiers = pattern[end + 1:]
        if any(m not in cls._FLAGS and m != 'u' for m in modifiers):
            return pattern, 0
        flags = 0
        for modifier in modifiers:
            flags |= cls._FLAGS.get(modifier, 0)
        return pattern[1:end], flags

    def passes(self, value: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return False
        return self._compiled.search(str(value)) is not None

    def get_error_message(self) -> str:
        return f"The value does not match the pattern {self.pattern}."
