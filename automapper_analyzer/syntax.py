"""Language-neutral syntax tree consumed by the rule engine.

Nodes are a small tagged union: every node carries a ``NodeKind`` tag, and the
two kinds the rules care about (call expressions and type declarations) carry
the typed sub-structure that structural matchers inspect. Sub-structure that a
partial parse could not produce is ``None`` or an empty tuple, never an
exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from automapper_analyzer.models import Span


class NodeKind(str, Enum):
    CALL_EXPRESSION = "call_expression"
    TYPE_DECLARATION = "type_declaration"
    OTHER = "other"


@dataclass(frozen=True)
class SyntaxNode:
    text: str
    span: Span
    children: tuple[SyntaxNode, ...] = ()
    kind: NodeKind = NodeKind.OTHER
    grammar_type: str = ""


@dataclass(frozen=True)
class CallExpression(SyntaxNode):
    """``receiver.member<type args>(arguments)`` or ``member(arguments)``."""

    kind: NodeKind = field(default=NodeKind.CALL_EXPRESSION, init=False)
    # Set only when the call target is ``Identifier.Member``.
    receiver: str | None = None
    member: str | None = None
    # Invoked name including type arguments, e.g. ``CreateMap<A, B>``.
    member_text: str | None = None


@dataclass(frozen=True)
class TypeDeclaration(SyntaxNode):
    kind: NodeKind = field(default=NodeKind.TYPE_DECLARATION, init=False)
    name: str | None = None
    name_span: Span | None = None
    base_types: tuple[str, ...] = ()
