"""Stylesheet model: the block tree produced by the stylesheet reader."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from scopelint.model.selector import SelectorInput


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair."""

    name: str
    value: str
    line: int = 0


@dataclass(frozen=True)
class RuleBlock:
    """A style rule: a selector list, its declarations, and nested blocks."""

    prelude: str
    selectors: tuple[SelectorInput, ...]
    declarations: tuple[Declaration, ...] = ()
    children: tuple[Block, ...] = ()
    line: int = 0

    @property
    def property_names(self) -> frozenset[str]:
        return frozenset(d.name for d in self.declarations)


@dataclass(frozen=True)
class AtRuleBlock:
    """An at-rule with a block body (``@media``, ``@at-root``, ``@keyframes``, ...)."""

    name: str  # lower-cased, without '@'
    prelude: str = ""
    declarations: tuple[Declaration, ...] = ()
    children: tuple[Block, ...] = ()
    line: int = 0


Block = Union[RuleBlock, AtRuleBlock]


@dataclass(frozen=True)
class Stylesheet:
    """Top-level blocks of one stylesheet, in source order."""

    children: tuple[Block, ...] = field(default=())

    def walk(self):
        """Yield every block, depth-first in source order."""
        stack: list[Block] = list(reversed(self.children))
        while stack:
            block = stack.pop()
            yield block
            stack.extend(reversed(block.children))
