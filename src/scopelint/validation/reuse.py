"""Cross-selector check for Private classes reused with conflicting meaning.

The first pass records every Private class whose enclosing Container is
known, together with a coarse fingerprint of the rule's declarations (the
set of property names).  Once the pass is complete the usages are indexed by
Private name and compared across Containers.  The comparison is heuristic,
so findings are warnings only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from scopelint.model.diagnostic import PRIVATE_REUSED, Violation
from scopelint.model.selector import SelectorPath


@dataclass(frozen=True)
class PrivateUsage:
    """One occurrence of a Private class under a known Container."""

    private: str
    container: str
    fingerprint: frozenset[str]
    index: int
    location: Any = None


def collect_private_usages(
    path: SelectorPath,
    declarations: Iterable[str],
    index: int,
    location: Any = None,
) -> list[PrivateUsage]:
    """Record the Private classes of *path* with their container identity.

    The identity is the compound's own Container, or else the nearest
    ancestor Container.  Unscoped Private classes are skipped.
    """
    fingerprint = frozenset(declarations)
    compounds = path.compounds
    usages: list[PrivateUsage] = []
    for i, compound in enumerate(compounds):
        if not compound.privates:
            continue
        container = _owning_container(path, i)
        if container is None:
            continue
        for token in compound.privates:
            usages.append(
                PrivateUsage(
                    private=token.name,
                    container=container,
                    fingerprint=fingerprint,
                    index=index,
                    location=location,
                )
            )
    return usages


def _owning_container(path: SelectorPath, index: int) -> str | None:
    compounds = path.compounds
    own = compounds[index].containers
    if own:
        return own[0].name
    for a in path.ancestors(index):
        outer = compounds[a].containers
        if outer:
            return outer[0].name
    return None


class PrivateIndex:
    """Private class name -> usages, in input order.  Read-only once built."""

    def __init__(self, entries: dict[str, tuple[PrivateUsage, ...]]) -> None:
        self._entries = entries

    @classmethod
    def build(cls, usages: Iterable[PrivateUsage]) -> PrivateIndex:
        grouped: dict[str, list[PrivateUsage]] = {}
        for usage in sorted(usages, key=lambda u: u.index):
            grouped.setdefault(usage.private, []).append(usage)
        return cls({name: tuple(items) for name, items in grouped.items()})

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, private: str) -> bool:
        return private in self._entries

    def names(self) -> list[str]:
        return list(self._entries)

    def usages(self, private: str) -> tuple[PrivateUsage, ...]:
        return self._entries.get(private, ())


def check_private_reuse(index: PrivateIndex) -> list[tuple[int, Violation]]:
    """Flag Private classes whose declarations diverge between Containers.

    Returns ``(input index, violation)`` pairs; each violation is anchored at
    the first usage of the first Container whose property set differs from
    the first Container's.
    """
    findings: list[tuple[int, Violation]] = []
    for private in index.names():
        by_container: dict[str, set[str]] = {}
        first_usage: dict[str, PrivateUsage] = {}
        for usage in index.usages(private):
            by_container.setdefault(usage.container, set()).update(usage.fingerprint)
            first_usage.setdefault(usage.container, usage)
        if len(by_container) < 2:
            continue

        containers = list(by_container)
        baseline = by_container[containers[0]]
        conflicting = [c for c in containers[1:] if by_container[c] != baseline]
        if not conflicting:
            continue
        anchor = first_usage[conflicting[0]]
        findings.append(
            (
                anchor.index,
                Violation.of(
                    PRIVATE_REUSED,
                    (private,),
                    anchor.location,
                    related=conflicting[0],
                ),
            )
        )
    findings.sort(key=lambda f: f[0])
    return findings
