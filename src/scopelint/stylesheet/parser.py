"""Lark-based reader for the block structure of CSS and SCSS sources."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from scopelint.errors import ParseError
from scopelint.stylesheet.model import AtRuleBlock, Block, Declaration, RuleBlock, Stylesheet
from scopelint.stylesheet.selectors import INTERPOLATION, parse_selector_list

__all__ = ["parse_stylesheet", "strip_comments"]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# Quoted strings are matched first so comment markers inside them survive.
_COMMENT_RE = re.compile(
    r"""
    (?P<string>"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')
    | /\*.*?\*/                    # block comment
    | (?:^|(?<=[ \t]))//[^\n]*      # SCSS line comment
    """,
    re.DOTALL | re.MULTILINE | re.VERBOSE,
)
_INTERPOLATION_RE = re.compile(r"#\{[^{}]*\}")
_AT_RULE_RE = re.compile(r"@(?P<name>[-\w]+)\s*(?P<prelude>.*)", re.DOTALL)


def _blank_text(text: str) -> str:
    """Replace every character but newlines with a space."""
    return re.sub(r"[^\n]", " ", text)


def _blank_comment(match: re.Match[str]) -> str:
    if match.group("string") is not None:
        return match.group(0)
    return _blank_text(match.group(0))


def strip_comments(source: str) -> str:
    """Remove CSS and SCSS comments while preserving line numbers."""
    return _COMMENT_RE.sub(_blank_comment, source)


class _Trailing:
    """A final declaration written without a terminating semicolon."""

    def __init__(self, token: Token) -> None:
        self.token = token


def _declaration(token: Token) -> Declaration | None:
    text = str(token).strip()
    if text.startswith("@") or ":" not in text:
        return None  # @use, @include x; and stray text carry no declarations
    name, value = text.split(":", 1)
    name = name.strip()
    if not name or name.startswith("$"):
        return None
    return Declaration(name=name.lower(), value=value.strip(), line=token.line or 0)


class StylesheetTransformer(Transformer):  # type: ignore[type-arg]
    """Transform the Lark parse tree into Stylesheet blocks."""

    def statement(self, items: list[Token]) -> Declaration | None:
        if not items:
            return None
        return _declaration(items[0])

    def last(self, items: list[Token]) -> _Trailing:
        return _Trailing(items[0])

    def block(self, items: list[object]) -> Block:
        prelude_token = items[0]
        assert isinstance(prelude_token, Token)
        prelude = " ".join(str(prelude_token).split())
        line = prelude_token.line or 0

        declarations: list[Declaration] = []
        children: list[Block] = []
        for item in items[1:]:
            if isinstance(item, _Trailing):
                decl = _declaration(item.token)
                if decl is not None:
                    declarations.append(decl)
            elif isinstance(item, Declaration):
                declarations.append(item)
            elif isinstance(item, (RuleBlock, AtRuleBlock)):
                children.append(item)

        match = _AT_RULE_RE.match(prelude) if prelude.startswith("@") else None
        if match:
            return AtRuleBlock(
                name=match.group("name").lower(),
                prelude=match.group("prelude").strip(),
                declarations=tuple(declarations),
                children=tuple(children),
                line=line,
            )
        return RuleBlock(
            prelude=prelude,
            selectors=parse_selector_list(prelude),
            declarations=tuple(declarations),
            children=tuple(children),
            line=line,
        )

    def start(self, items: list[object]) -> Stylesheet:
        return Stylesheet(
            children=tuple(i for i in items if isinstance(i, (RuleBlock, AtRuleBlock)))
        )


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr", start="start")


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse CSS/SCSS source into a Stylesheet block tree.

    Raises :class:`ParseError` when the block structure is malformed
    (e.g. unbalanced braces).  Individual selectors that cannot be parsed do
    not raise; they appear as UnparsedSelector entries on their rule.
    """
    cleaned = strip_comments(source)
    cleaned = _INTERPOLATION_RE.sub(INTERPOLATION, cleaned)
    try:
        tree = _parser().parse(cleaned)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise ParseError(str(e), line=line, column=column) from e
    return StylesheetTransformer().transform(tree)
