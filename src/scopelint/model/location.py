"""Source locations attached to units by the front-end collaborators.

The core treats locations as opaque; only formatters look inside.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """Where a selector or element came from.

    Attributes:
        path: Source file path (or a pseudo-name such as ``<string>``).
        line: 1-based line number, 0 if unknown.
        subject: The selector text or ``<tag>`` of the element.
    """

    path: str
    line: int = 0
    subject: str = ""

    def __str__(self) -> str:
        where = f"{self.path}:{self.line}" if self.line else self.path
        if self.subject:
            return f"{where} [{self.subject}]"
        return where
