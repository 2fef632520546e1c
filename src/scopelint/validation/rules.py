"""Structural rules for analyzed selectors.

Each rule is a function taking a SelectorPath and an opaque location and
returning a list of Violation objects.  Rules never raise.
"""

from __future__ import annotations

from typing import Any, Callable

from scopelint.model.diagnostic import (
    CONTAINER_INSIDE_CONTAINER,
    MODIFIER_WITHOUT_CONTAINER,
    MULTIPLE_CONTAINERS,
    PRIVATE_NOT_DESCENDANT,
    PRIVATE_WITHOUT_CONTAINER,
    RuleInfo,
    Violation,
)
from scopelint.model.selector import CompoundSelector, SelectorPath


def _first_name(compound: CompoundSelector) -> str | None:
    if compound.tokens:
        return compound.tokens[0].name
    if compound.others:
        return compound.others[0]
    return None


# ---------------------------------------------------------------------------
# Compound rules
# ---------------------------------------------------------------------------


def check_modifier_without_container(
    path: SelectorPath, location: Any = None
) -> list[Violation]:
    """Modifier classes must share a compound with a Container."""
    diagnostics: list[Violation] = []
    for compound in path.compounds:
        if compound.has_container:
            continue
        for token in compound.modifiers:
            diagnostics.append(
                Violation.of(MODIFIER_WITHOUT_CONTAINER, (token.name,), location)
            )
    return diagnostics


def check_private_without_container(
    path: SelectorPath, location: Any = None
) -> list[Violation]:
    """A Private class with neither its own Container nor any ancestor."""
    diagnostics: list[Violation] = []
    for index, compound in enumerate(path.compounds):
        if compound.has_container or path.ancestors(index):
            continue  # scoped compounds are judged by check_private_not_descendant
        for token in compound.privates:
            diagnostics.append(
                Violation.of(PRIVATE_WITHOUT_CONTAINER, (token.name,), location)
            )
    return diagnostics


def check_multiple_containers(
    path: SelectorPath, location: Any = None
) -> list[Violation]:
    """A compound carries at most one Container class."""
    diagnostics: list[Violation] = []
    for compound in path.compounds:
        containers = compound.containers
        if len(containers) > 1:
            diagnostics.append(
                Violation.of(
                    MULTIPLE_CONTAINERS, tuple(t.name for t in containers), location
                )
            )
    return diagnostics


# ---------------------------------------------------------------------------
# Path rules
# ---------------------------------------------------------------------------


def check_private_not_descendant(
    path: SelectorPath, location: Any = None
) -> list[Violation]:
    """A Private class nested in a selector needs a Container ancestor."""
    diagnostics: list[Violation] = []
    compounds = path.compounds
    for index, compound in enumerate(compounds):
        if compound.has_container or not compound.privates:
            continue
        ancestors = path.ancestors(index)
        if not ancestors:
            continue
        if any(compounds[a].has_container for a in ancestors):
            continue
        related = _first_name(compounds[ancestors[0]])
        for token in compound.privates:
            diagnostics.append(
                Violation.of(PRIVATE_NOT_DESCENDANT, (token.name,), location, related)
            )
    return diagnostics


def check_container_inside_container(
    path: SelectorPath, location: Any = None
) -> list[Violation]:
    """A Container must not be styled through a different Container ancestor.

    Compounds that carry a Modifier are exempt: ``.c-image.is-card`` is the
    sanctioned way to vary a container by context.
    """
    diagnostics: list[Violation] = []
    compounds = path.compounds
    for index, compound in enumerate(compounds):
        containers = compound.containers
        if not containers or compound.modifiers:
            continue
        own = {t.name for t in containers}
        for a in path.ancestors(index):
            outer = [t for t in compounds[a].containers if t.name not in own]
            if outer:
                diagnostics.append(
                    Violation.of(
                        CONTAINER_INSIDE_CONTAINER,
                        tuple(t.name for t in containers),
                        location,
                        outer[0].name,
                    )
                )
                break
    return diagnostics


# ---------------------------------------------------------------------------
# Rule registry
# ---------------------------------------------------------------------------

PathRuleFunc = Callable[[SelectorPath, Any], list[Violation]]

PATH_RULES: list[tuple[RuleInfo, PathRuleFunc]] = [
    (MODIFIER_WITHOUT_CONTAINER, check_modifier_without_container),
    (PRIVATE_WITHOUT_CONTAINER, check_private_without_container),
    (PRIVATE_NOT_DESCENDANT, check_private_not_descendant),
    (CONTAINER_INSIDE_CONTAINER, check_container_inside_container),
    (MULTIPLE_CONTAINERS, check_multiple_containers),
]
