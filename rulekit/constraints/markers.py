"""
Property Constraint Markers

Constraints are declared on class annotations with `typing.Annotated`:

    class SignupForm:
        username: Annotated[str, Rules("required|alphaNum|minLength:3")] = ""
        email: Annotated[str, Constraint(EmailValidationRule())] = ""

The rules are built once, when the class body is evaluated.
"""

import logging
from typing import Dict, List, Optional, Tuple, get_type_hints

from ..engine.instantiator import instantiate_rule
from ..engine.parser import parse_rule_spec
from ..engine.registry import RuleRegistry, get_default_registry
from ..errors import PropertyAccessError
from ..rules.base import ValidationRule

logger = logging.getLogger(__name__)

NamedRule = Tuple[str, ValidationRule]


class Constraint:
    """
    Marker binding one or more rule instances to a property.

    Failures are reported under the rule's class name.
    """

    def __init__(self, *rules: ValidationRule):
        for rule in rules:
            if not isinstance(rule, ValidationRule):
                raise TypeError(f"Constraint expects ValidationRule instances, got {type(rule).__name__}")
        self._rules: List[NamedRule] = [(type(rule).__name__, rule) for rule in rules]

    def get_rules(self) -> List[NamedRule]:
        return list(self._rules)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(name for name, _ in self._rules)})"


class Rules(Constraint):
    """
    Marker built from a rule spec string.

    Names are resolved against `registry` (the shared default registry when
    omitted). Unknown names are skipped and a repeated name keeps its first
    position with the arguments of its last occurrence, as in string-spec
    validation.

    Raises:
        RuleConstructionError: If a resolved rule rejects its arguments
    """

    def __init__(self, spec: str, registry: Optional[RuleRegistry] = None):
        super().__init__()
        self.spec = spec
        registry = registry or get_default_registry()

        built: Dict[str, ValidationRule] = {}
        for invocation in parse_rule_spec(spec):
            entry = registry.resolve(invocation.name)
            if entry is None:
                logger.debug(f"Skipping unknown validation rule '{invocation.name}' in constraint")
                continue
            rule = instantiate_rule(invocation.name, entry, invocation.args)
            if rule is not None:
                built[invocation.name] = rule

        self._rules.extend(built.items())

    def __repr__(self) -> str:
        return f"Rules({self.spec!r})"


def get_property_constraints(cls: type) -> Dict[str, List[Constraint]]:
    """
    Find the constrained public properties of a class.

    Args:
        cls: The class to inspect (inherited annotations included)

    Returns:
        Property name -> constraint markers, in declaration order. Properties
        without markers and names starting with an underscore are left out.

    Raises:
        PropertyAccessError: If the class annotations cannot be evaluated
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise PropertyAccessError(cls, "<annotations>", str(e)) from e

    constraints: Dict[str, List[Constraint]] = {}
    for name, hint in hints.items():
        if name.startswith("_"):
            continue
        markers = [m for m in getattr(hint, "__metadata__", ()) if isinstance(m, Constraint)]
        if markers:
            constraints[name] = markers

    return constraints


def has_constraints(cls: type, property_name: str) -> bool:
    return property_name in get_property_constraints(cls)


def describe_constraints(cls: type) -> Dict[str, List[str]]:
    """Property name -> rule names, for display and debugging."""
    return {
        name: [rule_name for marker in markers for rule_name, _ in marker.get_rules()]
        for name, markers in get_property_constraints(cls).items()
    }
