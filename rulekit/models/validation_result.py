"""
Validation Result Data Models

Defines the core data structures for representing validation outcomes.

Design Philosophy:
- Immutable where possible (use dataclasses with frozen=True)
- Keyed by rule name, in evaluation order
- Serializable (can be converted to JSON for API responses and logs)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class RuleInvocation:
    """
    A single `name:arg1:arg2` segment of a rule spec.

    Arguments are the raw substrings between the colons. Coercion is left to
    the rule implementation.
    """
    name: str
    args: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return ":".join((self.name,) + self.args)


RuleSpec = Tuple[RuleInvocation, ...]


@dataclass(frozen=True)
class ValidationFailure:
    """
    Represents a single failed rule invocation.

    Attributes:
        rule_name: Registry name of the failed rule (e.g., "minLength")
        error_message: Message produced by the rule
        args: Arguments the rule was constructed with
        actual_value: The value that was checked
        field_path: Property name when produced by attribute validation
    """
    rule_name: str
    error_message: str
    args: Tuple[str, ...] = ()
    actual_value: Optional[Any] = None
    field_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'rule_name': self.rule_name,
            'error_message': self.error_message,
            'args': list(self.args),
            'actual_value': self._serialize_value(self.actual_value),
            'field_path': self.field_path,
        }

    @staticmethod
    def _serialize_value(value: Any) -> Any:
        """Safely serialize values for JSON output."""
        if value is None:
            return None
        if isinstance(value, (str, int, float, bool)):
            return value
        if isinstance(value, (list, dict)):
            return value
        return str(value)

    def __str__(self) -> str:
        if self.field_path:
            return f"{self.field_path}.{self.rule_name}: {self.error_message}"
        return f"{self.rule_name}: {self.error_message}"


@dataclass
class ValidationResult:
    """
    Outcome of checking one value against one rule spec.

    `errors` only ever holds rules that failed. Passing rules and unknown
    rule names (outside strict mode) never appear in it.

    Attributes:
        spec: The parsed rule spec that was evaluated
        errors: Rule name -> error message, in evaluation order
        failures: Detailed failure records, in evaluation order
        unresolved: Rule names that were absent from the registry
        validation_timestamp: When validation was performed
        processing_time_ms: How long validation took
    """
    spec: Tuple[RuleInvocation, ...] = ()
    errors: Dict[str, str] = field(default_factory=dict)
    failures: List[ValidationFailure] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)
    validation_timestamp: datetime = field(default_factory=datetime.utcnow)
    processing_time_ms: Optional[float] = None

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    @property
    def failed_rules(self) -> List[str]:
        """Get list of failed rule names."""
        return list(self.errors)

    def add_failure(self, failure: ValidationFailure) -> None:
        """
        Record a failure.

        A later failure under the same rule name replaces the earlier message
        but keeps its position.
        """
        self.failures.append(failure)
        self.errors[failure.rule_name] = failure.error_message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            'passed': self.passed,
            'spec': [str(invocation) for invocation in self.spec],
            'errors': dict(self.errors),
            'unresolved': list(self.unresolved),
            'validation_ts': self.validation_timestamp.isoformat(),
            'processing_time_ms': self.processing_time_ms,
            'failure_details': [f.to_dict() for f in self.failures],
        }

    def __str__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        summary = f"ValidationResult(status={status}, rules={len(self.spec)})"
        for failure in self.failures:
            summary += f"\n    - {failure}"
        return summary


@dataclass
class ClassValidationResult:
    """
    Outcome of attribute-driven validation of a class or instance.

    `errors` is the flat, ordered list of failure messages across all
    properties. `field_errors` groups the same messages by property name.
    """
    target: str
    errors: List[str] = field(default_factory=list)
    field_errors: Dict[str, List[str]] = field(default_factory=dict)
    failures: List[ValidationFailure] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    def add_failure(self, failure: ValidationFailure) -> None:
        self.failures.append(failure)
        self.errors.append(failure.error_message)
        self.field_errors.setdefault(failure.field_path or "", []).append(failure.error_message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'target': self.target,
            'passed': self.passed,
            'errors': list(self.errors),
            'field_errors': {k: list(v) for k, v in self.field_errors.items()},
        }
