"""
RuleKit Exceptions

Unknown rule names are deliberately not represented here: they are skipped
(or recorded as failures in strict mode), never raised.
"""

from typing import Any, Sequence


class RuleKitError(Exception):
    """Base class for all RuleKit errors."""


class RuleConstructionError(RuleKitError):
    """
    A resolved rule could not be built from the arguments in the rule spec.

    Raised for wrong arity, unparseable arguments, or a factory that does not
    return a ValidationRule. Always fatal.
    """

    def __init__(self, rule_name: str, args: Sequence[str], reason: str = ""):
        self.rule_name = rule_name
        self.args_given = tuple(args)
        self.reason = reason
        message = f"Cannot construct rule '{rule_name}' with arguments {list(self.args_given)}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class PropertyAccessError(RuleKitError):
    """A constrained property could not be read during attribute validation."""

    def __init__(self, owner: Any, property_name: str, reason: str = ""):
        self.owner = owner
        self.property_name = property_name
        owner_name = getattr(owner, "__name__", type(owner).__name__)
        message = f"Cannot read property '{property_name}' of {owner_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ConfigurationError(RuleKitError):
    """Settings file or custom rule import could not be loaded."""
