"""Breaking-change rule catalog."""

from automapper_analyzer.scanner.rules.base import (
    FindingTemplate,
    Matcher,
    Rule,
    RuleSet,
    RuleSetError,
    StructuralMatcher,
    TextScope,
    TextualMatcher,
)
from automapper_analyzer.scanner.rules.inheritance import PROFILE_INHERITANCE
from automapper_analyzer.scanner.rules.packages import AUTOMAPPER_COLLECTION
from automapper_analyzer.scanner.rules.signatures import (
    CONSTRUCT_USING_SERVICE_LOCATOR,
    CREATE_MAP_OVERLOADS,
    CUSTOM_RESOLVERS,
    FOR_ALL_MEMBERS,
    IGNORE_INACCESSIBLE_SETTER,
    VALUE_CONVERTER,
)
from automapper_analyzer.scanner.rules.static_api import (
    CONFIGURATION_STORE,
    STATIC_CREATE_MAP,
    STATIC_INITIALIZATION,
)


def build_default_rule_set() -> RuleSet:
    """Return the built-in rules in priority order.

    Structural static-facade rules come before the textual ones so that
    ``Mapper.CreateMap<A, B>()`` is reported once, as a static call.
    """
    return RuleSet([
        STATIC_INITIALIZATION,
        CONFIGURATION_STORE,
        STATIC_CREATE_MAP,
        CREATE_MAP_OVERLOADS,
        FOR_ALL_MEMBERS,
        CONSTRUCT_USING_SERVICE_LOCATOR,
        IGNORE_INACCESSIBLE_SETTER,
        CUSTOM_RESOLVERS,
        AUTOMAPPER_COLLECTION,
        VALUE_CONVERTER,
        PROFILE_INHERITANCE,
    ])


DEFAULT_RULE_SET = build_default_rule_set()

__all__ = [
    "DEFAULT_RULE_SET",
    "FindingTemplate",
    "Matcher",
    "Rule",
    "RuleSet",
    "RuleSetError",
    "StructuralMatcher",
    "TextScope",
    "TextualMatcher",
    "build_default_rule_set",
]
