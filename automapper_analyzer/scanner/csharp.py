"""C# parsing with tree-sitter, lowered to the analyzer's syntax tree."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import tree_sitter_c_sharp as tscs
from tree_sitter import Language, Node, Parser, Tree

from automapper_analyzer.models import Span
from automapper_analyzer.syntax import CallExpression, SyntaxNode, TypeDeclaration

logger = logging.getLogger(__name__)

CSHARP_LANGUAGE = Language(tscs.language())

CALL_TYPES = frozenset({"invocation_expression"})
TYPE_DECLARATION_TYPES = frozenset({"class_declaration", "record_declaration"})
CONDITIONAL_ACCESS_TYPES = frozenset({"conditional_access_expression", "member_binding_expression"})

_parser: Parser | None = None


def get_parser() -> Parser:
    global _parser  # noqa: PLW0603
    if _parser is None:
        _parser = Parser(CSHARP_LANGUAGE)
    return _parser


def parse_csharp_tree(source: bytes) -> Tree:
    return get_parser().parse(source)


def parse_csharp(source: bytes) -> SyntaxNode:
    """Parse C# source and return the root of the lowered syntax tree.

    Never raises on malformed input: tree-sitter recovers with ERROR nodes,
    which lower to plain nodes whose children are still visited.
    """
    tree = parse_csharp_tree(source)
    if tree.root_node.has_error:
        logger.debug("Source contains syntax errors; analyzing the recovered tree")
    return lower(tree.root_node)


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def node_span(node: Node) -> Span:
    return Span(
        start_line=node.start_point[0] + 1,
        start_column=node.start_point[1],
        end_line=node.end_point[0] + 1,
        end_column=node.end_point[1],
        start_byte=node.start_byte,
        end_byte=node.end_byte,
    )


def _simple_name(node: Node | None) -> tuple[str | None, str | None]:
    """Return (identifier, rendering) for an ``identifier`` or ``generic_name``."""
    if node is None:
        return None, None
    if node.type == "identifier":
        text = _text(node)
        return text, text
    if node.type == "generic_name":
        for child in node.named_children:
            if child.type == "identifier":
                return _text(child), _text(node)
        return None, _text(node)
    return None, None


def _binding_name(node: Node) -> Node | None:
    """Name invoked through ``?.``, from a conditional access or its member binding."""
    if node.type == "conditional_access_expression":
        bindings = [c for c in node.named_children if c.type == "member_binding_expression"]
        if not bindings:
            return None
        node = bindings[-1]
    name = node.child_by_field_name("name")
    if name is None and node.named_children:
        name = node.named_children[-1]
    return name


def _lower_call(node: Node, children: tuple[SyntaxNode, ...]) -> CallExpression:
    receiver: str | None = None
    member: str | None = None
    member_text: str | None = None
    function = node.child_by_field_name("function")
    if function is not None and function.type == "member_access_expression":
        target = function.child_by_field_name("expression")
        if target is not None and target.type == "identifier":
            receiver = _text(target)
        member, member_text = _simple_name(function.child_by_field_name("name"))
    elif function is not None and function.type in CONDITIONAL_ACCESS_TYPES:
        # x?.Member(...): the receiver is never a bare identifier here.
        member, member_text = _simple_name(_binding_name(function))
    elif function is not None:
        member, member_text = _simple_name(function)
    return CallExpression(
        text=_text(node),
        span=node_span(node),
        children=children,
        grammar_type=node.type,
        receiver=receiver,
        member=member,
        member_text=member_text,
    )


def _base_types(node: Node) -> tuple[str, ...]:
    for child in node.named_children:
        if child.type != "base_list":
            continue
        bases = []
        for entry in child.named_children:
            if entry.type == "comment":
                continue
            if entry.type == "primary_constructor_base_type" and entry.named_children:
                entry = entry.named_children[0]
            bases.append(_text(entry).strip())
        return tuple(bases)
    return ()


def _lower_type_declaration(node: Node, children: tuple[SyntaxNode, ...]) -> TypeDeclaration:
    name = node.child_by_field_name("name")
    return TypeDeclaration(
        text=_text(node),
        span=node_span(node),
        children=children,
        grammar_type=node.type,
        name=_text(name) if name is not None else None,
        name_span=node_span(name) if name is not None else None,
        base_types=_base_types(node),
    )


def _lower_one(node: Node, children: tuple[SyntaxNode, ...]) -> SyntaxNode:
    if node.type in CALL_TYPES:
        return _lower_call(node, children)
    if node.type in TYPE_DECLARATION_TYPES:
        return _lower_type_declaration(node, children)
    return SyntaxNode(
        text=_text(node),
        span=node_span(node),
        children=children,
        grammar_type=node.type,
    )


def lower(root: Node) -> SyntaxNode:
    """Convert a tree-sitter node and its named descendants.

    Post-order over an explicit stack: nesting depth is not limited by the
    interpreter's recursion limit.
    """
    frames: list[tuple[Node, Iterator[Node], list[SyntaxNode]]] = [
        (root, iter(root.named_children), []),
    ]
    while True:
        node, remaining, lowered = frames[-1]
        child = next(remaining, None)
        if child is not None:
            frames.append((child, iter(child.named_children), []))
            continue
        frames.pop()
        result = _lower_one(node, tuple(lowered))
        if not frames:
            return result
        frames[-1][2].append(result)
