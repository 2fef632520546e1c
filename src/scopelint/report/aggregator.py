"""Report aggregator: accumulate violations and failures for one run.

Results may arrive in any order (e.g. from a thread pool); every record is
tagged with the stable index of the input that produced it and the final
ordering is derived from those tags, never from arrival order.  The
aggregator is fed from a single consumer and does no locking itself.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from scopelint.model.diagnostic import Failure, Severity, Violation


@dataclass(frozen=True)
class ReportEntry:
    """A violation with its stable, 1-based sequence number."""

    sequence: int
    index: int
    violation: Violation


@dataclass(frozen=True)
class Summary:
    error_count: int = 0
    warning_count: int = 0
    per_rule_counts: dict[str, int] = field(default_factory=dict)
    failure_count: int = 0

    @property
    def violation_count(self) -> int:
        return sum(self.per_rule_counts.values())


class ReportAggregator:
    """Collects violations and failures across all units of a run."""

    def __init__(self) -> None:
        self._violations: list[tuple[tuple[int, int, int], Violation]] = []
        self._failures: list[tuple[int, Failure]] = []

    # --- recording ------------------------------------------------------------

    def record(
        self, violation: Violation, index: int, phase: int = 0, ordinal: int = 0
    ) -> None:
        """Record *violation* produced by input *index*.

        ``phase`` separates per-unit rules (0) from cross-selector rules (1);
        ``ordinal`` is the violation's position within its unit's output.
        """
        self._violations.append(((index, phase, ordinal), violation))

    def record_all(self, violations: list[Violation], index: int, phase: int = 0) -> None:
        for ordinal, violation in enumerate(violations):
            self.record(violation, index, phase, ordinal)

    def record_failure(self, failure: Failure, index: int) -> None:
        self._failures.append((index, failure))

    # --- queries --------------------------------------------------------------

    def entries(self) -> list[ReportEntry]:
        ordered = sorted(self._violations, key=lambda item: item[0])
        return [
            ReportEntry(sequence=seq, index=key[0], violation=violation)
            for seq, (key, violation) in enumerate(ordered, start=1)
        ]

    def violations(self) -> list[Violation]:
        return [entry.violation for entry in self.entries()]

    def failures(self) -> list[Failure]:
        return [f for _, f in sorted(self._failures, key=lambda item: item[0])]

    def has_errors(self) -> bool:
        return any(v.severity is Severity.ERROR for _, v in self._violations)

    def has_failures(self) -> bool:
        return bool(self._failures)

    @property
    def passed(self) -> bool:
        return not self.has_errors() and not self.has_failures()

    def summarize(self) -> Summary:
        severities = Counter(v.severity for _, v in self._violations)
        per_rule = Counter(v.rule for _, v in self._violations)
        return Summary(
            error_count=severities[Severity.ERROR],
            warning_count=severities[Severity.WARNING],
            per_rule_counts=dict(sorted(per_rule.items())),
            failure_count=len(self._failures),
        )
