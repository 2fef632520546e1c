"""Markup cross-checker: element-level rules on a class attribute.

Markup has no combinators, so a Modifier or Private class is judged only
against the other classes on the same element.
"""

from __future__ import annotations

from typing import Any, Iterable

from scopelint.classifier import Classifier
from scopelint.config import ConventionConfig
from scopelint.model.diagnostic import (
    MODIFIER_WITHOUT_CONTAINER,
    MULTIPLE_CONTAINERS,
    PRIVATE_WITHOUT_CONTAINER,
    Violation,
)

__all__ = ["check_element"]


def check_element(
    classes: Iterable[str],
    config: ConventionConfig | None = None,
    location: Any = None,
    classifier: Classifier | None = None,
) -> list[Violation]:
    """Check the class list of one markup element.

    Raises :class:`ConfigError` if *config* has overlapping or empty prefixes.
    """
    config = config or ConventionConfig()
    config.problems_or_raise()
    classify = classifier or Classifier(config)
    tokens = classify.tokens(dict.fromkeys(c for c in classes if c))

    containers = [t for t in tokens if t.is_container]
    diagnostics: list[Violation] = []

    if not containers:
        for token in tokens:
            if token.is_modifier and config.is_rule_enabled(MODIFIER_WITHOUT_CONTAINER):
                diagnostics.append(
                    Violation.of(MODIFIER_WITHOUT_CONTAINER, (token.name,), location)
                )
            elif token.is_private and config.is_rule_enabled(PRIVATE_WITHOUT_CONTAINER):
                diagnostics.append(
                    Violation.of(PRIVATE_WITHOUT_CONTAINER, (token.name,), location)
                )
    elif len(containers) > 1 and config.is_rule_enabled(MULTIPLE_CONTAINERS):
        diagnostics.append(
            Violation.of(MULTIPLE_CONTAINERS, tuple(t.name for t in containers), location)
        )
    return diagnostics
