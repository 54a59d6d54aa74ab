"""
Property Constraints Package

Declare rules on class properties and validate them:
- markers: Constraint / Rules markers for typing.Annotated
- attribute_validator: evaluates declared constraints
"""

from .attribute_validator import AttributeValidator, validate_class
from .markers import Constraint, Rules, describe_constraints, get_property_constraints, has_constraints

__all__ = [
    "AttributeValidator",
    "Constraint",
    "Rules",
    "describe_constraints",
    "get_property_constraints",
    "has_constraints",
    "validate_class",
]
