"""
RuleKit Validation Module

Main entry point for validating values against rule specs.

This module wires together:
1. Settings (YAML file, .env, environment)
2. The validation engine and its rule registry
3. Metrics collection

Usage:
    from rulekit import validate_value

    result = validate_value("octocat", "required|alphaNum|minLength:3")
    if result.passed:
        ...
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from .config import ValidatorSettings, load_settings
from .constraints import AttributeValidator
from .engine import ValidationEngine
from .metrics import get_metrics
from .models import ClassValidationResult, ValidationResult

logger = logging.getLogger(__name__)


class RuleValidator:
    """
    High-level API for rule validation.

    Integrates settings, engine and metrics.
    """

    def __init__(
        self,
        settings: Optional[ValidatorSettings] = None,
        rules: Optional[Mapping[str, Any]] = None,
    ):
        """
        Initialize rule validator.

        Args:
            settings: Validator settings (defaults when omitted)
            rules: Extra rules registered on top of settings.custom_rules
        """
        self.settings = settings or ValidatorSettings()

        self.metrics = get_metrics() if self.settings.enable_metrics else None

        extra_rules: Dict[str, Any] = dict(self.settings.custom_rules)
        extra_rules.update(rules or {})

        self.engine = ValidationEngine(
            rules=extra_rules,
            strict=self.settings.strict,
            accumulate=self.settings.accumulate,
            metrics=self.metrics,
        )

    @classmethod
    def from_config(cls, path: Optional[str] = None) -> "RuleValidator":
        """Create a validator from a settings file and the environment."""
        return cls(settings=load_settings(path))

    def check(self, value: Any, rules: str) -> ValidationResult:
        """
        Validate a value without touching the accumulated error map.

        Args:
            value: Value to check
            rules: Rule spec string

        Returns:
            ValidationResult
        """
        return self.engine.check(value, rules)

    def validate(self, value: Any, rules: str) -> bool:
        return self.engine.validate(value, rules)

    def validate_object(self, target: Any) -> ClassValidationResult:
        """
        Validate the constrained properties of a class or instance.

        Args:
            target: Class or instance declaring Annotated constraints

        Returns:
            ClassValidationResult
        """
        result = AttributeValidator().validate(target)
        if not result.passed:
            logger.info(f"{result.target} failed {len(result.errors)} constraint(s)")
        return result

    def rule_names(self) -> List[str]:
        return sorted(self.engine.registry.names())

    def get_errors(self) -> Dict[str, str]:
        return self.engine.get_errors()

    def clear_errors(self) -> None:
        self.engine.clear_errors()


# Convenience functions for direct usage

_default_validator: Optional[RuleValidator] = None


def get_validator() -> RuleValidator:
    """Get default validator instance (singleton)."""
    global _default_validator
    if _default_validator is None:
        _default_validator = RuleValidator.from_config()
    return _default_validator


def validate_value(value: Any, rules: str) -> ValidationResult:
    """
    Validate a single value using the default validator.

    Args:
        value: Value to check
        rules: Rule spec string

    Returns:
        ValidationResult
    """
    return get_validator().check(value, rules)


def validate_object(target: Any) -> ClassValidationResult:
    """Validate a class or instance using the default validator."""
    return get_validator().validate_object(target)
