"""Shared test fixtures for automapper-analyzer."""

from __future__ import annotations

from pathlib import Path

import pytest

from automapper_analyzer.models import Finding, Location, Severity, Span
from automapper_analyzer.syntax import CallExpression, SyntaxNode, TypeDeclaration


@pytest.fixture
def tmp_source(tmp_path: Path):
    """Create a temporary C# source file and return its path."""

    def _create(filename: str, content: bytes) -> Path:
        source_file = tmp_path / "src" / filename
        source_file.parent.mkdir(parents=True, exist_ok=True)
        source_file.write_bytes(content)
        return source_file

    return _create


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    return tmp_path / "src"


# --- Factory functions for test data ---


def make_span(line: int = 1, column: int = 0, end_line: int | None = None, end_column: int | None = None) -> Span:
    return Span(
        start_line=line,
        start_column=column,
        end_line=end_line or line,
        end_column=end_column if end_column is not None else column + 1,
    )


def make_node(text: str = "", children: tuple[SyntaxNode, ...] = (), line: int = 1) -> SyntaxNode:
    """Factory for a node the rules never inspect."""
    return SyntaxNode(text=text, span=make_span(line), children=children, grammar_type="block")


def make_call(
    text: str,
    receiver: str | None = None,
    member: str | None = None,
    member_text: str | None = None,
    children: tuple[SyntaxNode, ...] = (),
    line: int = 1,
    column: int = 0,
) -> CallExpression:
    """Factory for a call expression; ``member_text`` defaults to ``member``."""
    return CallExpression(
        text=text,
        span=make_span(line, column, end_column=column + len(text)),
        children=children,
        grammar_type="invocation_expression",
        receiver=receiver,
        member=member,
        member_text=member_text if member_text is not None else member,
    )


def make_type_declaration(
    name: str | None,
    base_types: tuple[str, ...] = (),
    children: tuple[SyntaxNode, ...] = (),
    line: int = 1,
) -> TypeDeclaration:
    bases = f" : {', '.join(base_types)}" if base_types else ""
    text = f"class {name or ''}{bases} {{}}"
    name_span = make_span(line, 6, end_column=6 + len(name)) if name else None
    return TypeDeclaration(
        text=text,
        span=make_span(line, 0, end_column=len(text)),
        children=children,
        grammar_type="class_declaration",
        name=name,
        name_span=name_span,
        base_types=base_types,
    )


def make_finding(**kwargs) -> Finding:
    """Factory for Finding with sensible defaults."""
    defaults: dict[str, object] = {
        "rule_id": "AR001",
        "rule_name": "Breaking Change: Static Mapper initialization found",
        "severity": Severity.WARNING,
        "message": "Breaking change: Static Mapper initialization found in file: a.cs",
        "location": Location(file="a.cs", span=make_span()),
        "snippet": "Mapper.Initialize(cfg => {})",
    }
    defaults.update(kwargs)
    return Finding(**defaults)  # type: ignore[arg-type]
