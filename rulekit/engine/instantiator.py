"""
Rule Instantiation

Builds runnable ValidationRule instances from registry entries and the raw
string arguments of a rule invocation.
"""

from typing import Any, Optional, Sequence

from ..errors import RuleConstructionError
from ..rules.base import ValidationRule
from .registry import is_dispatchable


def instantiate_rule(name: str, entry: Any, args: Sequence[str]) -> Optional[ValidationRule]:
    """
    Construct the rule for one invocation.

    Args:
        name: Rule name as written in the spec (used in error reports)
        entry: Registry entry for that name
        args: Positional string arguments from the spec

    Returns:
        The rule instance, or None if the entry is opaque and not dispatchable

    Raises:
        RuleConstructionError: If the arguments do not fit the rule, or a
            factory returns something that is not a ValidationRule
    """
    if not is_dispatchable(entry):
        return None

    try:
        rule = entry(*args)
    except (TypeError, ValueError) as e:
        raise RuleConstructionError(name, args, str(e)) from e

    if not isinstance(rule, ValidationRule):
        raise RuleConstructionError(
            name, args, f"factory returned {type(rule).__name__}, not a ValidationRule"
        )

    return rule
