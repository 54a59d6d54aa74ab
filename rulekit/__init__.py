"""
RuleKit Validation Package

Rule-spec driven value validation.

Main Components:
- engine: Spec parsing, rule registry and validation orchestration
- rules: Built-in validation rule implementations
- constraints: Property constraints declared with typing.Annotated
- models: Data structures for validation results
- metrics: Prometheus-compatible metrics

Quick Start:
    from rulekit import ValidationEngine

    engine = ValidationEngine()
    if not engine.validate("", "required|string|minLength:3"):
        print(engine.get_errors())  # {'required': ..., 'minLength': ...}
"""

from .constraints import AttributeValidator, Constraint, Rules
from .engine import RuleRegistry, ValidationEngine, parse_rule_spec
from .errors import ConfigurationError, PropertyAccessError, RuleConstructionError, RuleKitError
from .metrics import get_metrics
from .models import ClassValidationResult, RuleInvocation, ValidationFailure, ValidationResult
from .rule_validator import RuleValidator, get_validator, validate_object, validate_value
from .rules import ValidationRule

__version__ = "1.0.0"

__all__ = [
    "AttributeValidator",
    "ClassValidationResult",
    "ConfigurationError",
    "Constraint",
    "PropertyAccessError",
    "RuleConstructionError",
    "RuleInvocation",
    "RuleKitError",
    "RuleRegistry",
    "RuleValidator",
    "Rules",
    "ValidationEngine",
    "ValidationFailure",
    "ValidationResult",
    "ValidationRule",
    "get_metrics",
    "get_validator",
    "parse_rule_spec",
    "validate_object",
    "validate_value",
]
