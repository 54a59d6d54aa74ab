"""
Rule Registry

Name -> rule entry table used to resolve the names found in a rule spec.

An entry is one of:
- a ValidationRule subclass (constructed with the spec arguments)
- any other callable, treated as a factory returning a ValidationRule
- anything else, kept as an opaque entry that the dispatch path skips
"""

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..rules import BUILT_IN_RULES
from ..rules.base import ValidationRule

logger = logging.getLogger(__name__)


def is_dispatchable(entry: Any) -> bool:
    """Return True if the engine can build a rule from this entry."""
    if isinstance(entry, type):
        return issubclass(entry, ValidationRule)
    return callable(entry)


class RuleRegistry:
    """
    Registry of validation rules, seeded with the built-in catalog.

    Keys are case-sensitive and unique; the last registration for a key
    wins, including over built-ins.

    Usage:
        registry = RuleRegistry({'slug': SlugRule})
        registry.register('string', StrictStringRule)
        registry.resolve('slug')  # SlugRule
    """

    def __init__(
        self,
        rules: Optional[Mapping[str, Any]] = None,
        include_builtins: bool = True,
    ):
        """
        Initialize the registry.

        Args:
            rules: Caller-supplied entries, merged over the built-ins
            include_builtins: Seed the registry with the built-in catalog
        """
        self._rules: Dict[str, Any] = dict(BUILT_IN_RULES) if include_builtins else {}
        if rules:
            self.register_all(rules)

    def register(self, name: str, entry: Any) -> None:
        """Add or replace the entry for `name`."""
        if not name:
            raise ValueError("Rule name must be a non-empty string")

        if name in BUILT_IN_RULES and entry is not BUILT_IN_RULES[name]:
            logger.info(f"Overriding built-in validation rule '{name}'")
        if not is_dispatchable(entry):
            logger.warning(
                f"Rule '{name}' registered with a non-callable entry {entry!r}; "
                f"rule specs using it will skip it"
            )

        self._rules[name] = entry

    def register_all(self, rules: Mapping[str, Any]) -> None:
        """Register every entry of a mapping, in mapping order."""
        for name, entry in rules.items():
            self.register(name, entry)

    def unregister(self, name: str) -> None:
        self._rules.pop(name, None)

    def resolve(self, name: str) -> Optional[Any]:
        """
        Look up a rule entry.

        Returns:
            The registered entry, or None if the name is unknown
        """
        return self._rules.get(name)

    def names(self) -> List[str]:
        return list(self._rules)

    def copy(self) -> "RuleRegistry":
        clone = RuleRegistry(include_builtins=False)
        clone._rules = dict(self._rules)
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry(rules={len(self._rules)})"


_default_registry: Optional[RuleRegistry] = None


def get_default_registry() -> RuleRegistry:
    """
    Shared registry used by constraint markers declared with spec strings.

    Returns:
        Global RuleRegistry instance
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = RuleRegistry()
    return _default_registry


def reset_default_registry() -> None:
    """Drop custom registrations from the shared registry."""
    global _default_registry
    _default_registry = None
