"""Detection rules for the removed static ``Mapper`` facade."""

from __future__ import annotations

from collections.abc import Callable

from automapper_analyzer.scanner.rules.base import FindingTemplate, Rule, StructuralMatcher
from automapper_analyzer.syntax import CallExpression, NodeKind, SyntaxNode

STATIC_RECEIVER = "Mapper"


def is_static_mapper_call(member: str) -> Callable[[SyntaxNode], bool]:
    """Predicate for ``Mapper.<member>(...)`` with a bare ``Mapper`` identifier receiver."""

    def predicate(node: SyntaxNode) -> bool:
        return (
            isinstance(node, CallExpression)
            and node.receiver == STATIC_RECEIVER
            and node.member == member
        )

    predicate.__name__ = f"is_static_mapper_{member.lower()}"
    return predicate


def _static_rule(rule_id: str, member: str, description: str) -> Rule:
    return Rule(
        id=rule_id,
        applicable_kinds=frozenset({NodeKind.CALL_EXPRESSION}),
        matcher=StructuralMatcher(is_static_mapper_call(member), f"{STATIC_RECEIVER}.{member}"),
        template=FindingTemplate(description),
    )


STATIC_INITIALIZATION = _static_rule("AR001", "Initialize", "Static Mapper initialization")
CONFIGURATION_STORE = _static_rule("AR002", "Configuration", "Configuration Store usage")
STATIC_CREATE_MAP = _static_rule("AR011", "CreateMap", "Static CreateMap usage")
