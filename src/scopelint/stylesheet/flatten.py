"""Turn a Stylesheet block tree into independent SelectorUnits.

The tree is walked with an explicit stack.  Each rule yields one unit per
selector in its list, combined with one chosen selector from every enclosing
rule; a unit's context records that lexical chain plus any at-rule markers.
"""

from __future__ import annotations

from scopelint.engine.runner import SelectorUnit
from scopelint.model.location import SourceLocation
from scopelint.model.selector import AtRuleMarker, NestingContext, UnparsedSelector
from scopelint.stylesheet.model import AtRuleBlock, Block, RuleBlock, Stylesheet
from scopelint.stylesheet.selectors import parse_selector_list

__all__ = ["flatten", "SCOPING_WRAPPERS", "OPAQUE_AT_RULES"]

# At-rules whose blocks hold ordinary rules and do not change scoping.
SCOPING_WRAPPERS = frozenset(
    {
        "media",
        "supports",
        "container",
        "layer",
        "include",
        "document",
        # SCSS control flow and mixin bodies
        "if",
        "else",
        "each",
        "for",
        "while",
        "mixin",
    }
)

# At-rules whose blocks never hold class selectors.
OPAQUE_AT_RULES = frozenset(
    {
        "keyframes",
        "font-face",
        "page",
        "counter-style",
        "font-feature-values",
        "property",
        "function",
        "viewport",
    }
)


def _unprefixed(name: str) -> str:
    """'-webkit-keyframes' -> 'keyframes'."""
    if name.startswith("-") and name.count("-") >= 2:
        return name.split("-", 2)[2]
    return name


def _markers_only(context: NestingContext) -> NestingContext:
    return tuple(frame for frame in context if isinstance(frame, AtRuleMarker))


def flatten(stylesheet: Stylesheet, source: str = "<string>") -> list[SelectorUnit]:
    """Return one SelectorUnit per (rule, selector combination), in source order.

    The rules inside an at-rule block that is neither a known wrapper nor
    known to hold no selectors come out as a single unanalyzable unit, so
    they are reported as a failure rather than dropped.
    """
    units: list[SelectorUnit] = []
    stack: list[tuple[Block, NestingContext]] = [
        (block, ()) for block in reversed(stylesheet.children)
    ]

    while stack:
        block, context = stack.pop()

        if isinstance(block, AtRuleBlock):
            if block.name in SCOPING_WRAPPERS:
                inner = context + (AtRuleMarker(block.name, block.prelude),)
                stack.extend((child, inner) for child in reversed(block.children))
                continue
            if _unprefixed(block.name) in OPAQUE_AT_RULES:
                continue
            if block.name != "at-root":
                if block.children:
                    units.append(_unsupported(block, context, source))
                continue
            context = _markers_only(context)
            if not block.prelude:
                stack.extend((child, context) for child in reversed(block.children))
                continue
            block = _root_rule(block)

        properties = block.property_names
        for selector in block.selectors:
            units.append(
                SelectorUnit(
                    selector=selector,
                    context=context,
                    declarations=properties,
                    location=SourceLocation(source, block.line, selector.text),
                )
            )
        for selector in reversed(block.selectors):
            inner = context + (selector,)
            stack.extend((child, inner) for child in reversed(block.children))

    return units


def _root_rule(block: AtRuleBlock) -> RuleBlock:
    """'@at-root .sel { ... }' is an ordinary rule placed at the root."""
    return RuleBlock(
        prelude=block.prelude,
        selectors=parse_selector_list(block.prelude),
        declarations=block.declarations,
        children=block.children,
        line=block.line,
    )


def _unsupported(block: AtRuleBlock, context: NestingContext, source: str) -> SelectorUnit:
    text = f"@{block.name} {block.prelude}".strip()
    return SelectorUnit(
        selector=UnparsedSelector(
            text=text, reason=f"rules inside @{block.name} cannot be analyzed"
        ),
        context=context,
        location=SourceLocation(source, block.line, text),
    )
