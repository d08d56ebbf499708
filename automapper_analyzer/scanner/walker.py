"""Pre-order syntax tree walker that drives rule evaluation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Protocol

from automapper_analyzer.models import Finding
from automapper_analyzer.scanner.rules import DEFAULT_RULE_SET, RuleSet
from automapper_analyzer.syntax import NodeKind, SyntaxNode, TypeDeclaration

logger = logging.getLogger(__name__)

FindingSink = Callable[[Finding], None]


class CancellationSignal(Protocol):
    def is_set(self) -> bool: ...


class AnalysisCancelled(Exception):
    """Raised when a traversal is aborted through its cancellation signal."""


def iter_nodes(root: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield every node of the tree, pre-order, in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


class TreeWalker:
    """Visits one syntax tree and hands each finding to ``sink``.

    A walker holds no state between nodes; the rule set is only read, so any
    number of walkers can share it across threads.
    """

    def __init__(
        self,
        rule_set: RuleSet,
        file_path: str,
        sink: FindingSink,
        cancel: CancellationSignal | None = None,
    ) -> None:
        self.rule_set = rule_set
        self.file_path = file_path
        self.sink = sink
        self.cancel = cancel

    def walk(self, root: SyntaxNode) -> None:
        self._evaluate(root)
        for child in root.children:
            if self.cancel is not None and self.cancel.is_set():
                raise AnalysisCancelled(f"Analysis of {self.file_path} cancelled")
            self.visit(child)

    def visit(self, node: SyntaxNode) -> None:
        for current in iter_nodes(node):
            self._evaluate(current)

    def _evaluate(self, node: SyntaxNode) -> None:
        if node.kind is NodeKind.OTHER:
            return
        rule = self.rule_set.evaluate(node)
        if rule is None:
            return
        span = node.span
        if node.kind is NodeKind.TYPE_DECLARATION and isinstance(node, TypeDeclaration):
            # Highlight the declared name only.
            span = node.name_span or node.span
        finding = rule.make_finding(node, span, self.file_path)
        logger.debug(
            "%s at %s:%d:%d", rule.id, self.file_path, span.start_line, span.start_column,
        )
        self.sink(finding)


def analyze(
    tree: SyntaxNode,
    file_path: str,
    rule_set: RuleSet = DEFAULT_RULE_SET,
    *,
    cancel: CancellationSignal | None = None,
) -> list[Finding]:
    """Run every rule over ``tree`` and return the findings in source order."""
    findings: list[Finding] = []
    TreeWalker(rule_set, file_path, findings.append, cancel=cancel).walk(tree)
    return findings
