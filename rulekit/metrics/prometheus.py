"""
Prometheus Metrics for Rule Validation

Exposes validation metrics in Prometheus format for monitoring and alerting.

Metrics Exposed:
- rulekit_validation_total: Total rule-spec validations
- rulekit_validation_passed: Validations with no failed rule
- rulekit_validation_failed: Validations with at least one failed rule
- rulekit_validation_rule_failures: Failures by rule name
- rulekit_validation_unresolved_rules: Unknown rule names seen in specs
- rulekit_validation_duration_seconds: Validation processing time
"""

from typing import Dict, Any, Optional
from collections import defaultdict
import time

from ..models.validation_result import ValidationResult

# Rule names come from caller-supplied specs, so per-name series are capped
MAX_RULE_SERIES = 100
OVERFLOW_LABEL = "other"


def escape_label_value(value: str) -> str:
    """Escape a label value for the Prometheus text exposition format."""
    return value.replace("\\", "\\\\").replace("\"", "\\\"").replace("\n", "\\n")


class PrometheusMetrics:
    """
    Collects and formats validation metrics for Prometheus.

    Usage:
        metrics = PrometheusMetrics()
        metrics.record_validation(result)
        print(metrics.export_text())
    """

    def __init__(self, max_rule_series: int = MAX_RULE_SERIES):
        """
        Initialize metrics collectors.

        Args:
            max_rule_series: Distinct rule names tracked per counter before
                further names are counted under rule="other"
        """
        self.max_rule_series = max_rule_series

        # Counters
        self.total_validations = 0
        self.passed_validations = 0
        self.failed_validations = 0

        self.failures_by_rule: Dict[str, int] = defaultdict(int)

        # Unknown names usually mean a typo in a rule spec
        self.unresolved_rules: Dict[str, int] = defaultdict(int)

        # Processing time histogram (buckets in seconds)
        self.duration_buckets = [0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1]
        self.duration_counts = defaultdict(int)
        self.duration_sum = 0.0
        self.duration_count = 0

        self.recent_failures = []
        self.max_recent_failures = 100

        self.start_time = time.time()

    def record_validation(self, result: ValidationResult) -> None:
        """
        Record a validation result and update metrics.

        Args:
            result: ValidationResult to record
        """
        self.total_validations += 1

        if result.passed:
            self.passed_validations += 1
        else:
            self.failed_validations += 1

        for rule_name in result.errors:
            self._count_rule(self.failures_by_rule, rule_name)

        for rule_name in result.unresolved:
            self._count_rule(self.unresolved_rules, rule_name)

        if result.processing_time_ms is not None:
            duration_seconds = result.processing_time_ms / 1000.0
            self.duration_sum += duration_seconds
            self.duration_count += 1

            for bucket in self.duration_buckets:
                if duration_seconds <= bucket:
                    self.duration_counts[bucket] += 1

        if result.failed:
            self.recent_failures.append({
                'spec': [str(invocation) for invocation in result.spec],
                'failed_rules': result.failed_rules,
                'timestamp': result.validation_timestamp.isoformat()
            })

            if len(self.recent_failures) > self.max_recent_failures:
                self.recent_failures = self.recent_failures[-self.max_recent_failures:]

    def _count_rule(self, counter: Dict[str, int], rule_name: str) -> None:
        if rule_name not in counter and len(counter) >= self.max_rule_series:
            rule_name = OVERFLOW_LABEL
        counter[rule_name] += 1

    def export_text(self) -> str:
        """
        Export metrics in Prometheus text format.

        Returns:
            Metrics formatted as Prometheus text exposition format
        """
        lines = []

        lines.append("# HELP rulekit_validation_total Total number of rule spec validations")
        lines.append("# TYPE rulekit_validation_total counter")
        lines.append(f"rulekit_validation_total {self.total_validations}")
        lines.append("")

        lines.append("# HELP rulekit_validation_passed Validations where every rule passed")
        lines.append("# TYPE rulekit_validation_passed counter")
        lines.append(f"rulekit_validation_passed {self.passed_validations}")
        lines.append("")

        lines.append("# HELP rulekit_validation_failed Validations with at least one failed rule")
        lines.append("# TYPE rulekit_validation_failed counter")
        lines.append(f"rulekit_validation_failed {self.failed_validations}")
        lines.append("")

        lines.append("# HELP rulekit_validation_rule_failures Failures by rule name")
        lines.append("# TYPE rulekit_validation_rule_failures counter")
        for rule_name, count in sorted(self.failures_by_rule.items()):
            lines.append(f'rulekit_validation_rule_failures{{rule="{escape_label_value(rule_name)}"}} {count}')
        lines.append("")

        lines.append("# HELP rulekit_validation_unresolved_rules Unknown rule names found in rule specs")
        lines.append("# TYPE rulekit_validation_unresolved_rules counter")
        for rule_name, count in sorted(self.unresolved_rules.items()):
            lines.append(f'rulekit_validation_unresolved_rules{{rule="{escape_label_value(rule_name)}"}} {count}')
        lines.append("")

        lines.append("# HELP rulekit_validation_duration_seconds Validation processing time distribution")
        lines.append("# TYPE rulekit_validation_duration_seconds histogram")
        for bucket in sorted(self.duration_buckets):
            # record_validation already counts every bucket >= duration
            lines.append(
                f'rulekit_validation_duration_seconds_bucket{{le="{bucket}"}} {self.duration_counts[bucket]}')
        lines.append(f'rulekit_validation_duration_seconds_bucket{{le="+Inf"}} {self.duration_count}')
        lines.append(f'rulekit_validation_duration_seconds_sum {self.duration_sum:.6f}')
        lines.append(f'rulekit_validation_duration_seconds_count {self.duration_count}')
        lines.append("")

        pass_rate = (self.passed_validations / self.total_validations) if self.total_validations > 0 else 0
        lines.append("# HELP rulekit_validation_pass_rate Ratio of passed validations")
        lines.append("# TYPE rulekit_validation_pass_rate gauge")
        lines.append(f"rulekit_validation_pass_rate {pass_rate:.4f}")
        lines.append("")

        uptime = time.time() - self.start_time
        lines.append("# HELP rulekit_validation_uptime_seconds Time since metrics started")
        lines.append("# TYPE rulekit_validation_uptime_seconds counter")
        lines.append(f"rulekit_validation_uptime_seconds {uptime:.2f}")
        lines.append("")

        return "\n".join(lines)

    def export_json(self) -> Dict[str, Any]:
        """
        Export metrics as JSON (for logging/debugging).

        Returns:
            Metrics as dictionary
        """
        total = self.total_validations
        avg_duration = (self.duration_sum / self.duration_count) if self.duration_count > 0 else 0

        return {
            'total_validations': total,
            'passed_validations': self.passed_validations,
            'failed_validations': self.failed_validations,
            'pass_rate': self.passed_validations / total if total > 0 else 0,
            'fail_rate': self.failed_validations / total if total > 0 else 0,
            'avg_processing_time_seconds': avg_duration,
            'total_processing_time_seconds': self.duration_sum,
            'failures_by_rule': dict(self.failures_by_rule),
            'unresolved_rules': dict(self.unresolved_rules),
            'recent_failures': self.recent_failures[-10:],
            'uptime_seconds': time.time() - self.start_time
        }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        self.total_validations = 0
        self.passed_validations = 0
        self.failed_validations = 0
        self.failures_by_rule.clear()
        self.unresolved_rules.clear()
        self.duration_counts.clear()
        self.duration_sum = 0.0
        self.duration_count = 0
        self.recent_failures.clear()
        self.start_time = time.time()

    def get_alert_conditions(self) -> Dict[str, Any]:
        """
        Check conditions that should trigger alerts.

        Returns:
            Dictionary of alert conditions and their status
        """
        total = self.total_validations

        if total == 0:
            return {'no_data': True}

        avg_duration = self.duration_sum / self.duration_count if self.duration_count > 0 else 0

        return {
            'unresolved_rules_seen': bool(self.unresolved_rules),
            'slow_validation': avg_duration > 0.01,
            'no_data': False,
            'failure_rate': self.failed_validations / total,
            'avg_duration_seconds': avg_duration
        }


_global_metrics: Optional[PrometheusMetrics] = None


def get_metrics() -> PrometheusMetrics:
    """
    Get global metrics instance (singleton).

    Returns:
        Global PrometheusMetrics instance
    """
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = PrometheusMetrics()
    return _global_metrics


def reset_metrics() -> None:
    """Reset global metrics instance."""
    global _global_metrics
    if _global_metrics:
        _global_metrics.reset()


def metrics_endpoint() -> str:
    """
    HTTP endpoint handler for Prometheus scraping.

    Returns:
        Metrics in Prometheus text format
    """
    return get_metrics().export_text()
