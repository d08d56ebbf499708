"""Detection rules for method signatures whose shape changed between versions.

These are textual rules: the member-scoped ones look at the invoked name of
the call (``CreateMap<A, B>``, ``ForAllMembers``), the node-scoped ones at the
whole rendered call, arguments included.
"""

from __future__ import annotations

from automapper_analyzer.scanner.rules.base import FindingTemplate, Rule, TextScope, TextualMatcher
from automapper_analyzer.syntax import NodeKind

CALL_KINDS = frozenset({NodeKind.CALL_EXPRESSION})

CREATE_MAP_PATTERN = r"^CreateMap\s*<"
FOR_ALL_MEMBERS_PATTERN = r"^ForAllMembers\b"
CONSTRUCT_USING_SERVICE_LOCATOR_PATTERN = r"^ConstructUsingServiceLocator\b"
IGNORE_INACCESSIBLE_SETTER_PATTERN = r"^IgnoreAllPropertiesWithAnInaccessibleSetter\b"
# Heuristic: a qualified AutoMapper.ValueResolver<...> is not reported, an
# aliased or otherwise qualified one is.
CUSTOM_RESOLVER_PATTERN = r"(?<!AutoMapper)\.ValueResolver\s*<(.*?)>"
VALUE_CONVERTER_PATTERN = r"ValueConverter\s*<(.*?)>"


def _textual_rule(rule_id: str, pattern: str, scope: TextScope, description: str) -> Rule:
    return Rule(
        id=rule_id,
        applicable_kinds=CALL_KINDS,
        matcher=TextualMatcher(pattern, scope),
        template=FindingTemplate(description),
    )


CREATE_MAP_OVERLOADS = _textual_rule(
    "AR004", CREATE_MAP_PATTERN, TextScope.MEMBER, "CreateMap method overloads",
)
FOR_ALL_MEMBERS = _textual_rule(
    "AR005", FOR_ALL_MEMBERS_PATTERN, TextScope.MEMBER, "ForAllMembers method",
)
CONSTRUCT_USING_SERVICE_LOCATOR = _textual_rule(
    "AR006",
    CONSTRUCT_USING_SERVICE_LOCATOR_PATTERN,
    TextScope.MEMBER,
    "ConstructUsingServiceLocator method",
)
IGNORE_INACCESSIBLE_SETTER = _textual_rule(
    "AR007",
    IGNORE_INACCESSIBLE_SETTER_PATTERN,
    TextScope.MEMBER,
    "IgnoreAllPropertiesWithAnInaccessibleSetter method",
)
CUSTOM_RESOLVERS = _textual_rule(
    "AR008", CUSTOM_RESOLVER_PATTERN, TextScope.NODE, "Custom resolvers",
)
VALUE_CONVERTER = _textual_rule(
    "AR010", VALUE_CONVERTER_PATTERN, TextScope.NODE, "ValueConverter",
)
