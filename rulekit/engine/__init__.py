"""
Validation Engine Package

Rule spec parsing, rule registry, rule instantiation and the main
orchestrator.
"""

from .instantiator import instantiate_rule
from .parser import RuleSpecParser, parse_rule, parse_rule_spec
from .registry import RuleRegistry, get_default_registry, reset_default_registry
from .validator import ValidationEngine

__all__ = [
    "RuleRegistry",
    "RuleSpecParser",
    "ValidationEngine",
    "get_default_registry",
    "instantiate_rule",
    "parse_rule",
    "parse_rule_spec",
    "reset_default_registry",
]
