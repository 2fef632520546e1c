"""Diagnostic model: violations, tool failures, and the fixed rule catalog."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity level for a violation."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class RuleInfo:
    """Stable identity of a convention rule.

    Attributes:
        code: Short code (``R1`` .. ``R6``).
        name: Stable kebab-case identifier used in reports and config.
        severity: Severity every violation of this rule carries.
    """

    code: str
    name: str
    severity: Severity

    def matches(self, rule_id: str) -> bool:
        return rule_id in (self.code, self.name)


MODIFIER_WITHOUT_CONTAINER = RuleInfo("R1", "modifier-without-container", Severity.ERROR)
PRIVATE_WITHOUT_CONTAINER = RuleInfo("R2", "private-without-container", Severity.ERROR)
PRIVATE_NOT_DESCENDANT = RuleInfo("R3", "private-not-descendant", Severity.ERROR)
CONTAINER_INSIDE_CONTAINER = RuleInfo("R4", "container-inside-container", Severity.ERROR)
MULTIPLE_CONTAINERS = RuleInfo("R5", "multiple-containers-same-compound", Severity.ERROR)
PRIVATE_REUSED = RuleInfo(
    "R6",
    "private-reused-across-unrelated-containers-with-conflicting-styles",
    Severity.WARNING,
)

RULE_CATALOG: tuple[RuleInfo, ...] = (
    MODIFIER_WITHOUT_CONTAINER,
    PRIVATE_WITHOUT_CONTAINER,
    PRIVATE_NOT_DESCENDANT,
    CONTAINER_INSIDE_CONTAINER,
    MULTIPLE_CONTAINERS,
    PRIVATE_REUSED,
)


def lookup_rule(rule_id: str) -> RuleInfo | None:
    """Return the catalog entry for a code or name, or None if unknown."""
    for info in RULE_CATALOG:
        if info.matches(rule_id):
            return info
    return None


@dataclass(frozen=True)
class Violation:
    """A single convention violation.

    Violations carry template parameters, never formatted text.

    Attributes:
        rule: Stable rule name, e.g. ``container-inside-container``.
        code: Short rule code, e.g. ``R4``.
        severity: How serious the violation is.
        location: Opaque reference supplied by the caller (selector or element).
        tokens: The offending class name(s).
        related: The offending ancestor or container class, where relevant.
    """

    rule: str
    code: str
    severity: Severity
    location: Any = None
    tokens: tuple[str, ...] = ()
    related: str | None = None

    @classmethod
    def of(
        cls,
        info: RuleInfo,
        tokens: tuple[str, ...],
        location: Any = None,
        related: str | None = None,
    ) -> Violation:
        return cls(
            rule=info.name,
            code=info.code,
            severity=info.severity,
            location=location,
            tokens=tokens,
            related=related,
        )

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING


class FailureKind(Enum):
    """Tool-internal failure categories, distinct from convention violations."""

    UNANALYZABLE_INPUT = "unanalyzable-input"
    CONFIGURATION_ERROR = "configuration-error"


@dataclass(frozen=True)
class Failure:
    """A unit of input the tool could not check."""

    kind: FailureKind
    location: Any = None
    reason: str = ""
