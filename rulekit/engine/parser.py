"""
Rule Spec Parser

Grammar:
    spec := rule ('|' rule)*
    rule := name (':' arg)*

There is no escaping: a `|` or `:` can never be part of a name or argument.
Arguments are kept exactly as written (no trimming, no type conversion).
"""

from typing import List

from ..models.validation_result import RuleInvocation, RuleSpec

RULE_SEPARATOR = "|"
ARG_SEPARATOR = ":"


def parse_rule(segment: str) -> RuleInvocation:
    """
    Parse a single `name:arg1:arg2` segment.

    Examples:
        >>> parse_rule("between:1:10")
        RuleInvocation(name='between', args=('1', '10'))
        >>> parse_rule("required")
        RuleInvocation(name='required', args=())
    """
    name, *args = segment.split(ARG_SEPARATOR)
    return RuleInvocation(name=name, args=tuple(args))


def parse_rule_spec(spec: str) -> RuleSpec:
    """
    Parse a rule spec string into an ordered tuple of invocations.

    Segments with an empty name (`"a||b"`, `":x"`) are dropped, so an empty
    spec yields no invocations at all.

    Args:
        spec: Rule spec such as "required|string|minLength:3"

    Returns:
        Invocations in textual left-to-right order
    """
    invocations: List[RuleInvocation] = []

    if not spec:
        return ()

    for segment in spec.split(RULE_SEPARATOR):
        invocation = parse_rule(segment)
        if not invocation.name:
            continue
        invocations.append(invocation)

    return tuple(invocations)


class RuleSpecParser:
    """Object form of `parse_rule_spec` for callers that inject a parser."""

    def parse(self, spec: str) -> RuleSpec:
        return parse_rule_spec(spec)

    def __call__(self, spec: str) -> RuleSpec:
        return parse_rule_spec(spec)
