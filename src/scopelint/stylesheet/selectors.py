"""Hand-written parser for selector preludes.

Produces the raw selector AST consumed by the analyzer.  Supported syntax:

    .class  #id  type  *  %placeholder  [attr]  :pseudo  ::pseudo  :fn(...)
    &  &-suffix  and the combinators ' ', '>', '+', '~'

Classes inside functional pseudo-classes (``:not(.c-x)``) are kept as opaque
text, not as classes of the element.  Anything the parser does not understand
yields an UnparsedSelector instead of raising.
"""

from __future__ import annotations

import re

from scopelint.model.selector import (
    Combinator,
    RawCompound,
    SelectorAst,
    SelectorInput,
    UnparsedSelector,
)

__all__ = ["parse_selector", "parse_selector_list", "INTERPOLATION"]

# Stand-in for SCSS '#{...}' interpolation, substituted by the reader.
INTERPOLATION = "‹interpolation›"

_IDENT_RE = re.compile(
    r"""
    -?                                  # optional leading dash
    (?:[_a-zA-Z]|[^\x00-\x7f]|\\.)      # name start (or escape)
    (?:[-_a-zA-Z0-9]|[^\x00-\x7f]|\\.)* # name body
    |
    --(?:[-_a-zA-Z0-9]|[^\x00-\x7f]|\\.)*
    """,
    re.VERBOSE,
)

_SUFFIX_RE = re.compile(r"[-_a-zA-Z0-9]+")

_ESCAPE_RE = re.compile(r"\\(.)")

_COMBINATORS = {
    ">": Combinator.CHILD,
    "+": Combinator.SIBLING,
    "~": Combinator.SIBLING,
}


class _SelectorSyntaxError(ValueError):
    pass


class _CompoundBuilder:
    def __init__(self, combinator: Combinator) -> None:
        self.combinator = combinator
        self.classes: list[str] = []
        self.others: list[str] = []
        self.nesting = False
        self.suffix = ""

    @property
    def empty(self) -> bool:
        return not (self.classes or self.others or self.nesting)

    def build(self) -> RawCompound:
        return RawCompound(
            classes=tuple(self.classes),
            others=tuple(self.others),
            combinator=self.combinator,
            nesting=self.nesting,
            suffix=self.suffix,
        )


def _ident_at(text: str, pos: int) -> str:
    match = _IDENT_RE.match(text, pos)
    if not match:
        raise _SelectorSyntaxError(f"expected a name at offset {pos}")
    return match.group(0)


def _closing(text: str, pos: int, open_ch: str, close_ch: str) -> int:
    """Return the index just past the bracket matching ``text[pos]``."""
    depth = 0
    quote = ""
    i = pos
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    raise _SelectorSyntaxError(f"unbalanced '{open_ch}' at offset {pos}")


def _parse_simple(text: str, pos: int, current: _CompoundBuilder) -> int:
    """Parse one simple selector at *pos* into *current*; return the new position."""
    ch = text[pos]
    if ch == "&":
        if not current.empty:
            raise _SelectorSyntaxError("'&' must start a compound selector")
        current.nesting = True
        match = _SUFFIX_RE.match(text, pos + 1)
        if match:
            current.suffix = match.group(0)
            return match.end()
        return pos + 1
    if ch == ".":
        name = _ident_at(text, pos + 1)
        current.classes.append(_ESCAPE_RE.sub(r"\1", name))
        return pos + 1 + len(name)
    if ch in "#%":
        name = _ident_at(text, pos + 1)
        current.others.append(ch + name)
        return pos + 1 + len(name)
    if ch == "*":
        current.others.append("*")
        return pos + 1
    if ch == "[":
        end = _closing(text, pos, "[", "]")
        current.others.append(text[pos:end])
        return end
    if ch == ":":
        start = pos
        pos += 2 if text.startswith("::", pos) else 1
        name = _ident_at(text, pos)
        pos += len(name)
        if pos < len(text) and text[pos] == "(":
            pos = _closing(text, pos, "(", ")")
        current.others.append(text[start:pos])
        return pos
    if _IDENT_RE.match(text, pos):
        if not current.empty:
            raise _SelectorSyntaxError(f"type selector must start a compound at offset {pos}")
        name = _ident_at(text, pos)
        current.others.append(name)
        return pos + len(name)
    raise _SelectorSyntaxError(f"unexpected character {ch!r} at offset {pos}")


def _tokenize(text: str) -> tuple[RawCompound, ...]:
    compounds: list[RawCompound] = []
    current: _CompoundBuilder | None = None
    pending: Combinator | None = None
    pos = 0

    while pos < len(text):
        ch = text[pos]
        if ch.isspace():
            if current is not None:
                compounds.append(current.build())
                current = None
            pos += 1
            continue
        if ch in _COMBINATORS:
            if current is not None:
                compounds.append(current.build())
                current = None
            if pending is not None:
                raise _SelectorSyntaxError(f"consecutive combinators at offset {pos}")
            pending = _COMBINATORS[ch]
            pos += 1
            continue
        if current is None:
            if pending is not None:
                combinator = pending
            elif compounds:
                combinator = Combinator.DESCENDANT
            else:
                combinator = Combinator.NONE
            current = _CompoundBuilder(combinator)
            pending = None
        pos = _parse_simple(text, pos, current)

    if pending is not None:
        raise _SelectorSyntaxError("selector ends with a combinator")
    if current is not None:
        compounds.append(current.build())
    if not compounds:
        raise _SelectorSyntaxError("empty selector")
    return tuple(compounds)


def parse_selector(text: str) -> SelectorInput:
    """Parse a single complex selector (no top-level commas)."""
    text = text.strip()
    if INTERPOLATION in text:
        return UnparsedSelector(text=text, reason="interpolated selectors cannot be analyzed")
    try:
        return SelectorAst(compounds=_tokenize(text), text=text)
    except _SelectorSyntaxError as exc:
        return UnparsedSelector(text=text, reason=str(exc))


def _split_top_level(text: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    quote = ""
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(text[start:i])
            start = i + 1
        elif ch == "\\":
            i += 2
            continue
        i += 1
    parts.append(text[start:])
    return parts


def parse_selector_list(text: str) -> tuple[SelectorInput, ...]:
    """Parse a comma-separated selector list, one entry per selector."""
    return tuple(parse_selector(part) for part in _split_top_level(text))
