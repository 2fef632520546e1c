"""scopelint model layer -- public type re-exports."""

from scopelint.model.diagnostic import (
    RULE_CATALOG,
    Failure,
    FailureKind,
    RuleInfo,
    Severity,
    Violation,
    lookup_rule,
)
from scopelint.model.selector import (
    AtRuleMarker,
    Combinator,
    CompoundSelector,
    NestingContext,
    PathStep,
    RawCompound,
    SelectorAst,
    SelectorInput,
    SelectorPath,
    UnparsedSelector,
)
from scopelint.model.token import ClassToken, ContainerKind, TokenKind

__all__ = [
    # token
    "TokenKind",
    "ContainerKind",
    "ClassToken",
    # selector
    "Combinator",
    "RawCompound",
    "SelectorAst",
    "UnparsedSelector",
    "SelectorInput",
    "AtRuleMarker",
    "NestingContext",
    "CompoundSelector",
    "PathStep",
    "SelectorPath",
    # diagnostic
    "Severity",
    "RuleInfo",
    "RULE_CATALOG",
    "lookup_rule",
    "Violation",
    "FailureKind",
    "Failure",
]
