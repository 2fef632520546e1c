"""Extract per-element class lists from HTML and HTML-like templates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from html.parser import HTMLParser

from scopelint.engine.runner import ElementUnit
from scopelint.model.location import SourceLocation

__all__ = ["MarkupElement", "extract_elements", "element_units"]

# Template expressions inside class attributes are dropped before splitting.
_TEMPLATE_RE = re.compile(r"\{\{.*?\}\}|\{%.*?%\}|\$\{.*?\}|<%.*?%>", re.DOTALL)

# Characters that mark a template expression rather than a literal class.
_DYNAMIC_CHARS = frozenset("{}$<>%()")


@dataclass(frozen=True)
class MarkupElement:
    tag: str
    classes: tuple[str, ...]
    line: int = 0


class _ClassCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.elements: list[MarkupElement] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        for name, value in attrs:
            if name != "class" or not value:
                continue
            literal = _TEMPLATE_RE.sub(" ", value)
            classes = tuple(c for c in literal.split() if not _DYNAMIC_CHARS.intersection(c))
            if classes:
                self.elements.append(
                    MarkupElement(tag=tag, classes=classes, line=self.getpos()[0])
                )


def extract_elements(source: str) -> list[MarkupElement]:
    """Return every element that carries a non-empty class attribute."""
    collector = _ClassCollector()
    collector.feed(source)
    collector.close()
    return collector.elements


def element_units(source: str, path: str = "<string>") -> list[ElementUnit]:
    """Build ElementUnits for every classed element in *source*."""
    return [
        ElementUnit(
            classes=element.classes,
            location=SourceLocation(path, element.line, f"<{element.tag}>"),
        )
        for element in extract_elements(source)
    ]
