"""
Models Package

Data structures for validation results.
"""

from .validation_result import (
    ClassValidationResult,
    RuleInvocation,
    RuleSpec,
    ValidationFailure,
    ValidationResult,
)

__all__ = [
    "ClassValidationResult",
    "RuleInvocation",
    "RuleSpec",
    "ValidationFailure",
    "ValidationResult",
]
