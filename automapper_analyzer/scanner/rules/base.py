"""Rule, matcher and rule set primitives for the breaking-change analyzer."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from enum import Enum

from automapper_analyzer.models import Finding, Location, RuleDescriptor, Severity, Span
from automapper_analyzer.syntax import CallExpression, NodeKind, SyntaxNode

logger = logging.getLogger(__name__)

CATEGORY = "BreakingChange"
SNIPPET_MAX = 200


class RuleSetError(Exception):
    """Invalid rule definition, raised while the rule set is built."""


class TextScope(str, Enum):
    NODE = "node"
    MEMBER = "member"


class Matcher(ABC):
    """Pure predicate over a syntax node.

    ``matches`` is total: a node it cannot classify is a non-match.
    """

    def matches(self, node: SyntaxNode) -> bool:
        try:
            return self._matches(node)
        except Exception:  # noqa: BLE001
            logger.debug("Matcher %r could not classify node %r", self, node.grammar_type, exc_info=True)
            return False

    @abstractmethod
    def _matches(self, node: SyntaxNode) -> bool:
        ...


class StructuralMatcher(Matcher):
    """Matches on the typed shape of a node."""

    def __init__(self, predicate: Callable[[SyntaxNode], bool], description: str = "") -> None:
        self.predicate = predicate
        self.description = description

    def _matches(self, node: SyntaxNode) -> bool:
        return bool(self.predicate(node))

    def __repr__(self) -> str:
        return f"StructuralMatcher({self.description or self.predicate.__name__!s})"


class TextualMatcher(Matcher):
    """Matches a regular expression against a rendering of the node.

    ``TextScope.NODE`` searches the full text of the node (and so its whole
    subtree); ``TextScope.MEMBER`` searches only the invoked name of a call,
    type arguments included.
    """

    def __init__(self, pattern: str, scope: TextScope = TextScope.NODE) -> None:
        try:
            self.regex = re.compile(pattern)
        except re.error as e:
            raise RuleSetError(f"Invalid rule pattern {pattern!r}: {e}") from e
        self.scope = scope

    def render(self, node: SyntaxNode) -> str | None:
        if self.scope is TextScope.MEMBER:
            return node.member_text if isinstance(node, CallExpression) else None
        return node.text

    def _matches(self, node: SyntaxNode) -> bool:
        text = self.render(node)
        if text is None:
            return False
        return self.regex.search(text) is not None

    def __repr__(self) -> str:
        return f"TextualMatcher({self.regex.pattern!r}, scope={self.scope.value})"


@dataclass(frozen=True)
class FindingTemplate:
    description: str
    severity: Severity = Severity.WARNING
    category: str = CATEGORY

    @property
    def title(self) -> str:
        return f"Breaking Change: {self.description} found"

    def format_message(self, file_path: str) -> str:
        return f"Breaking change: {self.description} found in file: {file_path}"


@dataclass(frozen=True)
class Rule:
    id: str
    applicable_kinds: frozenset[NodeKind]
    matcher: Matcher
    template: FindingTemplate

    def applies_to(self, node: SyntaxNode) -> bool:
        return node.kind in self.applicable_kinds

    def matches(self, node: SyntaxNode) -> bool:
        return self.applies_to(node) and self.matcher.matches(node)

    def make_finding(self, node: SyntaxNode, span: Span, file_path: str) -> Finding:
        lines = node.text.strip().split("\n")
        return Finding(
            rule_id=self.id,
            rule_name=self.template.title,
            severity=self.template.severity,
            message=self.template.format_message(file_path),
            location=Location(file=file_path, span=span),
            snippet=lines[0].strip()[:SNIPPET_MAX],
        )

    def describe(self) -> RuleDescriptor:
        return RuleDescriptor(
            id=self.id,
            title=self.template.title,
            category=self.template.category,
            severity=self.template.severity,
        )


class RuleSet:
    """Immutable, ordered collection of rules.

    Order is priority: for a given node, the first matching rule wins.
    """

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)
        seen: set[str] = set()
        for rule in self._rules:
            if rule.id in seen:
                raise RuleSetError(f"Duplicate rule id: {rule.id}")
            seen.add(rule.id)
        self._by_kind: dict[NodeKind, tuple[Rule, ...]] = {
            kind: tuple(r for r in self._rules if kind in r.applicable_kinds) for kind in NodeKind
        }

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return any(r.id == rule_id for r in self._rules)

    @property
    def ids(self) -> list[str]:
        return [r.id for r in self._rules]

    def get(self, rule_id: str) -> Rule:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        raise KeyError(rule_id)

    def rules_for(self, kind: NodeKind) -> tuple[Rule, ...]:
        return self._by_kind.get(kind, ())

    def evaluate(self, node: SyntaxNode) -> Rule | None:
        """Return the first rule, in priority order, matching the node."""
        for rule in self.rules_for(node.kind):
            if rule.matches(node):
                return rule
        return None

    def without(self, rule_ids: Iterable[str]) -> RuleSet:
        excluded = set(rule_ids)
        return RuleSet(r for r in self._rules if r.id not in excluded)

    def with_severity(self, overrides: Mapping[str, Severity]) -> RuleSet:
        return RuleSet(
            replace(r, template=replace(r.template, severity=overrides[r.id])) if r.id in overrides else r
            for r in self._rules
        )

    def descriptors(self) -> list[RuleDescriptor]:
        return [r.describe() for r in self._rules]
