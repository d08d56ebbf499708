"""Detection rule for the AutoMapper.Collection companion package."""

from __future__ import annotations

from automapper_analyzer.scanner.rules.base import FindingTemplate, Rule, TextScope, TextualMatcher
from automapper_analyzer.syntax import NodeKind

COLLECTION_USING_PATTERN = r"using\s+AutoMapper\.Collection"

# Evaluated on call expressions only, so it fires when the directive text
# appears inside a call (for example in a string argument), never on the
# using directive itself.
AUTOMAPPER_COLLECTION = Rule(
    id="AR009",
    applicable_kinds=frozenset({NodeKind.CALL_EXPRESSION}),
    matcher=TextualMatcher(COLLECTION_USING_PATTERN, TextScope.NODE),
    template=FindingTemplate("AutoMapper.Collection package"),
)
