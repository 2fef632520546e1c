"""Class token model: the semantic kind of a single class name."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Semantic role of a class name under the scoping convention."""

    CONTAINER = "container"
    MODIFIER = "modifier"
    PRIVATE = "private"
    UNCLASSIFIED = "unclassified"


class ContainerKind(Enum):
    """Container sub-kind, selected by the configured prefix table."""

    COMPONENT = "component"
    GLOBAL = "global"
    LAYOUT = "layout"
    MODULE = "module"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> ContainerKind:
        """Map a configured kind name onto the closed variant set."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ClassToken:
    """A class name plus its derived classification.

    Attributes:
        name: The class name without the leading dot.
        kind: Container, Modifier, Private, or Unclassified.
        container_kind: Sub-kind for Container tokens, None otherwise.
        prefix: The prefix that decided the classification, if any.
    """

    name: str
    kind: TokenKind
    container_kind: ContainerKind | None = None
    prefix: str | None = None

    @property
    def is_container(self) -> bool:
        return self.kind is TokenKind.CONTAINER

    @property
    def is_modifier(self) -> bool:
        return self.kind is TokenKind.MODIFIER

    @property
    def is_private(self) -> bool:
        return self.kind is TokenKind.PRIVATE
