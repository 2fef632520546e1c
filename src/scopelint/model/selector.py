"""Selector model: the raw selector AST consumed from the parser, and the
flattened SelectorPath produced by the analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Union

from scopelint.errors import AnalysisError
from scopelint.model.token import ClassToken


class Combinator(Enum):
    """How a compound relates to the compound before it."""

    NONE = "none"  # first step only
    DESCENDANT = "descendant"
    CHILD = "child"
    NESTING = "nesting"  # implicit descendant from a nested rule without '&'
    AT_RULE_BOUNDARY = "at-rule-boundary"  # as NESTING, across a @media/@container block
    SIBLING = "sibling"  # '+' and '~'

    @property
    def nests(self) -> bool:
        """True if the preceding compound is an ancestor of this one."""
        return self not in (Combinator.NONE, Combinator.SIBLING)


# ---------------------------------------------------------------------------
# Input AST (produced by the selector parser collaborator)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawCompound:
    """One compound selector exactly as written in source.

    ``combinator`` joins this compound to the previous one in the same raw
    selector.  On the first compound it is a leading combinator (``> ._x``)
    or ``NONE``.
    """

    classes: tuple[str, ...] = ()
    others: tuple[str, ...] = ()  # type, id, attribute and pseudo selectors
    combinator: Combinator = Combinator.NONE
    nesting: bool = False  # contains '&'
    suffix: str = ""  # SCSS '&-suffix' concatenation


@dataclass(frozen=True)
class SelectorAst:
    """A single complex selector, possibly containing nesting markers."""

    compounds: tuple[RawCompound, ...]
    text: str = ""

    @property
    def uses_nesting(self) -> bool:
        return any(c.nesting for c in self.compounds)


@dataclass(frozen=True)
class UnparsedSelector:
    """A selector the upstream parser could not handle."""

    text: str
    reason: str


SelectorInput = Union[SelectorAst, UnparsedSelector]


@dataclass(frozen=True)
class AtRuleMarker:
    """A non-scoping at-rule block (``@media``, ``@container``, ...)."""

    name: str
    prelude: str = ""


NestingFrame = Union[SelectorAst, UnparsedSelector, AtRuleMarker]
NestingContext = tuple[NestingFrame, ...]


# ---------------------------------------------------------------------------
# Analyzed path
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CompoundSelector:
    """The classified class tokens that apply to one element."""

    tokens: tuple[ClassToken, ...] = ()
    others: tuple[str, ...] = ()

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self.tokens)

    @property
    def containers(self) -> tuple[ClassToken, ...]:
        return tuple(t for t in self.tokens if t.is_container)

    @property
    def modifiers(self) -> tuple[ClassToken, ...]:
        return tuple(t for t in self.tokens if t.is_modifier)

    @property
    def privates(self) -> tuple[ClassToken, ...]:
        return tuple(t for t in self.tokens if t.is_private)

    @property
    def has_container(self) -> bool:
        return any(t.is_container for t in self.tokens)

    def merged(self, other: CompoundSelector) -> CompoundSelector:
        """Union of two compounds, preserving first-seen order."""
        seen = {t.name for t in self.tokens}
        tokens = self.tokens + tuple(t for t in other.tokens if t.name not in seen)
        return CompoundSelector(tokens=tokens, others=self.others + other.others)


@dataclass(frozen=True)
class PathStep:
    compound: CompoundSelector
    combinator: Combinator


@dataclass(frozen=True)
class SelectorPath:
    """A flattened selector: compounds joined by combinators, outermost first.

    Invariants: at least one step; the first step's combinator is ``NONE``.
    """

    steps: tuple[PathStep, ...]
    at_rules: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        if not self.steps:
            raise AnalysisError("SelectorPath must contain at least one compound")
        if self.steps[0].combinator is not Combinator.NONE:
            raise AnalysisError(
                f"first step must have no combinator, got {self.steps[0].combinator.value}"
            )

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def compounds(self) -> tuple[CompoundSelector, ...]:
        return tuple(s.compound for s in self.steps)

    @property
    def subject(self) -> CompoundSelector:
        """The compound the selector actually styles."""
        return self.steps[-1].compound

    def reclassified(self, classify: Callable[[str], ClassToken]) -> SelectorPath:
        """The same path with every class name classified again by *classify*."""
        steps = tuple(
            PathStep(
                CompoundSelector(
                    tokens=tuple(classify(t.name) for t in s.compound.tokens),
                    others=s.compound.others,
                ),
                s.combinator,
            )
            for s in self.steps
        )
        return SelectorPath(steps=steps, at_rules=self.at_rules)

    def ancestors(self, index: int) -> list[int]:
        """Indices of the compounds enclosing step *index*, nearest first.

        Sibling combinators are walked through without adding the sibling:
        in ``.a .b + .c`` the ancestors of ``.c`` are ``[0]``.
        """
        result: list[int] = []
        i = index
        while i > 0:
            if self.steps[i].combinator.nests:
                result.append(i - 1)
            i -= 1
        return result
