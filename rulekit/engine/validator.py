"""
Validation Engine

The core orchestrator that:
1. Parses a rule spec string
2. Resolves each rule name against the registry
3. Instantiates the resolved rules with their spec arguments
4. Evaluates every rule against the value, in spec order
5. Aggregates failures keyed by rule name

This is the main entry point for value validation.
"""

import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..models.validation_result import ValidationFailure, ValidationResult
from ..rules.base import ValidationRule
from .instantiator import instantiate_rule
from .parser import parse_rule_spec
from .registry import RuleRegistry

logger = logging.getLogger(__name__)

UNKNOWN_RULE_MESSAGE = "Unknown validation rule '{name}'."


class ValidationEngine:
    """
    Main validation orchestrator.

    Two calling styles are supported:

    - `check(value, spec)` returns a fresh ValidationResult and leaves the
      engine untouched.
    - `validate(value, spec)` merges the failures into the engine's error
      map and reports on the whole map. Failures from earlier calls stay
      until `clear_errors()` is called (or `accumulate=False` is set).

    Usage:
        engine = ValidationEngine()
        if not engine.validate(username, "required|string|minLength:3"):
            print(engine.get_errors())
    """

    def __init__(
        self,
        rules: Optional[Mapping[str, Any]] = None,
        strict: bool = False,
        accumulate: bool = True,
        metrics: Optional[Any] = None,
    ):
        """
        Initialize validation engine.

        Args:
            rules: Extra rules merged over the built-in catalog
            strict: Record unknown rule names as failures instead of skipping them
            accumulate: Keep failures from previous `validate` calls
            metrics: Optional PrometheusMetrics collector
        """
        self.registry = RuleRegistry(rules)
        self.strict = strict
        self.accumulate = accumulate
        self.metrics = metrics

        self._errors: Dict[str, str] = {}
        self.last_result: Optional[ValidationResult] = None

        # Statistics
        self.stats = {"total_validated": 0, "passed": 0, "failed": 0, "total_failures": 0, "unresolved": 0}

    def add_rule(self, name: str, rule: Any) -> None:
        """Register a rule, replacing any existing rule of the same name."""
        self.registry.register(name, rule)

    def add_all_rules(self, rules: Mapping[str, Any]) -> None:
        self.registry.register_all(rules)

    def check(self, value: Any, rules: str = "", strict: Optional[bool] = None) -> ValidationResult:
        """
        Validate a value against a rule spec without touching engine state.

        All rules are built before any is evaluated, so a construction error
        aborts the call before a single rule runs.

        Args:
            value: The data to be checked
            rules: Rule spec such as "required|string|minLength:3"
            strict: Override the engine's strict mode for this call

        Returns:
            ValidationResult with the failures of this call only

        Raises:
            RuleConstructionError: If a resolved rule rejects its arguments
        """
        start_time = time.time()
        strict = self.strict if strict is None else strict

        spec = parse_rule_spec(rules)
        result = ValidationResult(spec=spec)

        effective_rules, unresolved = self._build_rules(spec, strict)
        result.unresolved.extend(unresolved)

        for name, (rule, args) in effective_rules.items():
            if rule is None:
                result.add_failure(ValidationFailure(
                    rule_name=name,
                    error_message=UNKNOWN_RULE_MESSAGE.format(name=name),
                    actual_value=value,
                ))
            elif not rule.passes(value):
                message = rule.get_error_message()
                logger.debug(f"Rule '{name}' failed: {message}")
                result.add_failure(ValidationFailure(
                    rule_name=name,
                    error_message=message,
                    args=args,
                    actual_value=value,
                ))

        end_time = time.time()
        result.processing_time_ms = (end_time - start_time) * 1000

        self._update_stats(result)
        if self.metrics is not None:
            self.metrics.record_validation(result)

        return result

    def validate(self, value: Any, rules: str = "") -> bool:
        """
        Validate the given value and merge failures into the error map.

        Args:
            value: The data to be checked
            rules: Rule spec such as "required|string|minLength:3"

        Returns:
            True if the accumulated error map is empty, False otherwise
        """
        if not self.accumulate:
            self.clear_errors()

        result = self.check(value, rules)
        self._errors.update(result.errors)
        self.last_result = result

        return self.passes()

    def _build_rules(self, spec, strict: bool) -> Tuple[Dict[str, Tuple[Optional[ValidationRule], Tuple[str, ...]]], List[str]]:
        """
        Resolve and instantiate every invocation of a parsed spec.

        A name that appears twice keeps its first position but is built with
        the arguments of its last occurrence. In strict mode an unknown name
        keeps its place with a rule of None.
        """
        effective_rules: Dict[str, Tuple[Optional[ValidationRule], Tuple[str, ...]]] = {}
        unresolved: List[str] = []

        for invocation in spec:
            entry = self.registry.resolve(invocation.name)

            if entry is None:
                if strict:
                    logger.warning(f"Unknown validation rule '{invocation.name}'")
                    effective_rules.setdefault(invocation.name, (None, invocation.args))
                else:
                    logger.debug(f"Skipping unknown validation rule '{invocation.name}'")
                if invocation.name not in unresolved:
                    unresolved.append(invocation.name)
                continue

            rule = instantiate_rule(invocation.name, entry, invocation.args)
            if rule is None:
                logger.warning(f"Skipping rule '{invocation.name}': registry entry is not a validation rule")
                continue

            effective_rules[invocation.name] = (rule, invocation.args)

        return effective_rules, unresolved

    def passes(self) -> bool:
        """Return True if no rule has failed since the map was last cleared."""
        return not self._errors

    def fails(self) -> bool:
        return bool(self._errors)

    def get_errors(self) -> Dict[str, str]:
        """
        Get the accumulated error map.

        Returns:
            Copy of the rule name -> message map, in the order failures
            were first recorded
        """
        return dict(self._errors)

    def clear_errors(self) -> None:
        self._errors.clear()
        self.last_result = None

    @staticmethod
    def validate_class(target: Any, errors: Optional[List[str]] = None) -> bool:
        """
        Validate the constrained properties of a class or instance.

        Args:
            target: Class (validated on a default-constructed instance) or
                instance (validated on its own values)
            errors: Optional list extended in place with failure messages

        Returns:
            True if `errors` is empty afterwards

        Raises:
            PropertyAccessError: If a constrained property cannot be read
        """
        from ..constraints.attribute_validator import AttributeValidator

        if errors is None:
            errors = []

        result = AttributeValidator().validate(target)
        errors.extend(result.errors)

        return not errors

    def _update_stats(self, result: ValidationResult) -> None:
        """Update engine statistics."""
        self.stats["total_validated"] += 1

        if result.passed:
            self.stats["passed"] += 1
        else:
            self.stats["failed"] += 1

        self.stats["total_failures"] += len(result.failures)
        self.stats["unresolved"] += len(result.unresolved)

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get validation statistics.

        Returns:
            Dictionary with validation stats
        """
        total = self.stats["total_validated"]

        return {
            **self.stats,
            "pass_rate": self.stats["passed"] / total if total > 0 else 0,
            "fail_rate": self.stats["failed"] / total if total > 0 else 0,
            "avg_failures_per_call": (self.stats["total_failures"] / total if total > 0 else 0),
        }

    def reset_statistics(self) -> None:
        """Reset validation statistics."""
        self.stats = {"total_validated": 0, "passed": 0, "failed": 0, "total_failures": 0, "unresolved": 0}

    def __repr__(self) -> str:
        return (
            f"ValidationEngine("
            f"rules={len(self.registry)}, "
            f"strict={self.strict}, "
            f"accumulate={self.accumulate}"
            f")"
        )
