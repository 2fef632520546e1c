"""Selector analyzer: resolve nesting and build a flat SelectorPath.

A nested rule's effective selector is built by folding its lexical context
(outermost first) into a parent path, then resolving the rule's own selector
against that parent:

* ``&`` splices the parent's full path in at the point where it occurs;
  classes written next to it join the parent's last compound, and a
  ``&-suffix`` is appended to the parent's last class name.
* A selector without ``&`` is prepended with the parent's path, joined by
  its leading combinator or by an implicit ``NESTING`` step
  (``AT_RULE_BOUNDARY`` when an at-rule sits in between).
* At-rule frames never change scoping; their preludes are kept as markers.
"""

from __future__ import annotations

from scopelint.classifier import Classifier
from scopelint.config import ConventionConfig
from scopelint.errors import AnalysisError
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

__all__ = ["analyze_selector"]


def analyze_selector(
    ast: SelectorInput,
    context: NestingContext = (),
    classifier: Classifier | None = None,
    config: ConventionConfig | None = None,
) -> SelectorPath:
    """Resolve *ast* within its lexical *context* into a SelectorPath.

    Class names are classified by *classifier*, or else against *config*
    (the default convention when neither is given).

    Raises :class:`AnalysisError` when the selector (or any selector in its
    context) is unanalyzable.
    """
    classify = classifier or Classifier(config)
    parent: SelectorPath | None = None
    at_rules: list[str] = []
    crossed_boundary = False

    for frame in context:
        if isinstance(frame, AtRuleMarker):
            at_rules.append(_describe(frame))
            if parent is not None:
                crossed_boundary = True
            continue
        parent = _resolve(frame, parent, crossed_boundary, classify, tuple(at_rules))
        crossed_boundary = False

    return _resolve(ast, parent, crossed_boundary, classify, tuple(at_rules))


def _describe(marker: AtRuleMarker) -> str:
    return f"@{marker.name} {marker.prelude}".strip()


def _compound(raw: RawCompound, classify: Classifier) -> CompoundSelector:
    names = tuple(dict.fromkeys(raw.classes))
    return CompoundSelector(tokens=classify.tokens(names), others=raw.others)


def _resolve(
    ast: SelectorInput,
    parent: SelectorPath | None,
    crossed_boundary: bool,
    classify: Classifier,
    at_rules: tuple[str, ...],
) -> SelectorPath:
    if isinstance(ast, UnparsedSelector):
        raise AnalysisError(f"Unparsed selector {ast.text!r}: {ast.reason}")
    if not isinstance(ast, SelectorAst):
        raise AnalysisError(f"Unsupported selector input: {type(ast).__name__}")
    if not ast.compounds:
        raise AnalysisError(f"Empty selector {ast.text!r}")

    uses_nesting = ast.uses_nesting
    if uses_nesting and parent is None:
        raise AnalysisError(f"'&' used outside a nested rule in {ast.text!r}")

    steps: list[PathStep] = []
    if parent is not None and not uses_nesting:
        steps.extend(parent.steps)

    for position, raw in enumerate(ast.compounds):
        if raw.nesting:
            assert parent is not None
            _splice_parent(steps, parent, raw, classify, ast.text)
            continue

        combinator = raw.combinator
        if not steps:
            if combinator is not Combinator.NONE:
                raise AnalysisError(
                    f"Leading combinator '{combinator.value}' at top level in {ast.text!r}"
                )
        elif position == 0:
            # first compound of a nested rule without '&'
            if combinator is Combinator.NONE:
                combinator = (
                    Combinator.AT_RULE_BOUNDARY if crossed_boundary else Combinator.NESTING
                )
        elif combinator is Combinator.NONE:
            raise AnalysisError(f"Missing combinator between compounds in {ast.text!r}")
        steps.append(PathStep(_compound(raw, classify), combinator))

    return SelectorPath(steps=tuple(steps), at_rules=at_rules)


def _splice_parent(
    steps: list[PathStep],
    parent: SelectorPath,
    raw: RawCompound,
    classify: Classifier,
    text: str,
) -> None:
    """Insert the parent's path for an '&' compound, merging local classes."""
    spliced = list(parent.steps)
    if steps:
        if raw.combinator is Combinator.NONE:
            raise AnalysisError(f"Missing combinator before '&' in {text!r}")
        spliced[0] = PathStep(spliced[0].compound, raw.combinator)
    elif raw.combinator is not Combinator.NONE:
        # '> &' has nothing to attach to on the left
        raise AnalysisError(f"Leading combinator before '&' in {text!r}")

    last = spliced[-1].compound
    if raw.suffix:
        if not last.tokens:
            raise AnalysisError(
                f"Cannot append '&{raw.suffix}' to a compound without classes in {text!r}"
            )
        head, tail = last.tokens[:-1], last.tokens[-1]
        extended = classify(tail.name + raw.suffix)
        last = CompoundSelector(tokens=head + (extended,), others=last.others)

    last = last.merged(_compound(raw, classify))
    spliced[-1] = PathStep(last, spliced[-1].combinator)
    steps.extend(spliced)
