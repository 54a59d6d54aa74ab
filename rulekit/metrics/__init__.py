"""
Metrics Package

Handles observability and monitoring.
"""

from .prometheus import (
    PrometheusMetrics,
    escape_label_value,
    get_metrics,
    reset_metrics,
    metrics_endpoint
)

__all__ = [
    'PrometheusMetrics',
    'escape_label_value',
    'get_metrics',
    'reset_metrics',
    'metrics_endpoint'
]
