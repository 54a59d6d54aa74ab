"""
Validation Rule Contract

Every rule the engine can dispatch to is a ValidationRule: constructible from
positional string arguments, able to test a value, able to describe a failure.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union

Number = Union[int, float]


class ValidationRule(ABC):
    """
    Base class for all validation rules.

    Subclasses receive the raw string arguments from the rule spec
    (`minLength:3` -> `MinLengthValidationRule("3")`) and are responsible for
    coercing them. Programmatic callers may pass already-typed values.
    """

    error_message: str = "The value is invalid."

    @abstractmethod
    def passes(self, value: Any) -> bool:
        """Return True if the value satisfies the rule."""
        raise NotImplementedError

    def get_error_message(self) -> str:
        return self.error_message

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def to_number(raw: Any, argument: str = "value") -> Number:
    """
    Coerce a rule argument to int or float.

    Raises:
        ValueError: If the argument is not numeric
    """
    if isinstance(raw, bool):
        raise ValueError(f"{argument} must be numeric, got {raw!r}")
    if isinstance(raw, (int, float)):
        return raw
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"{argument} must be numeric, got {raw!r}") from None


def numeric_value(value: Any) -> Optional[Number]:
    """
    Interpret a checked value as a number.

    Accepts int, float and numeric strings. Booleans and everything else
    yield None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return to_number(value)
        except ValueError:
            return None
    return None
