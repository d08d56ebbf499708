"""Detection rule for classes deriving from ``Profile``."""

from __future__ import annotations

from automapper_analyzer.scanner.rules.base import FindingTemplate, Rule, StructuralMatcher
from automapper_analyzer.syntax import NodeKind, SyntaxNode, TypeDeclaration

PROFILE_BASE = "Profile"


def inherits_profile(node: SyntaxNode) -> bool:
    """True when the base-type list names ``Profile`` literally (unqualified)."""
    return isinstance(node, TypeDeclaration) and PROFILE_BASE in node.base_types


PROFILE_INHERITANCE = Rule(
    id="AR003",
    applicable_kinds=frozenset({NodeKind.TYPE_DECLARATION}),
    matcher=StructuralMatcher(inherits_profile, "base list contains Profile"),
    template=FindingTemplate("Profile inheritance"),
)
