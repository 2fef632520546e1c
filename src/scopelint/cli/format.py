"""Render a finished report as human-readable text or JSON."""

from __future__ import annotations

import json
from typing import Any

from scopelint.model.diagnostic import Failure, Violation
from scopelint.report.aggregator import ReportAggregator

_TEMPLATES: dict[str, str] = {
    "R1": "Modifier '{token}' is used without a Container class on the same element.",
    "R2": "Private class '{token}' is used without a Container class.",
    "R3": "Private class '{token}' is not nested under any Container (nearest ancestor: '{related}').",
    "R4": (
        "Container '{token}' is styled inside Container '{related}'. "
        "Add a Modifier to '{token}' instead."
    ),
    "R5": "One element carries several Containers: {tokens}.",
    "R6": (
        "Private class '{token}' has conflicting declarations under Container '{related}' "
        "and another Container."
    ),
}


def message(violation: Violation) -> str:
    """Format the human-readable message for *violation*."""
    template = _TEMPLATES.get(violation.code, "{rule}: {tokens}")
    return template.format(
        token=violation.tokens[0] if violation.tokens else "",
        tokens=", ".join(violation.tokens),
        related=violation.related or "",
        rule=violation.rule,
    )


def _location(value: Any) -> str:
    return "-" if value is None else str(value)


def format_violation(violation: Violation) -> str:
    return (
        f"{_location(violation.location)}: {violation.severity.value} "
        f"{violation.code} {violation.rule}: {message(violation)}"
    )


def format_failure(failure: Failure) -> str:
    return f"{_location(failure.location)}: FAILURE {failure.kind.value}: {failure.reason}"


def render_text(report: ReportAggregator) -> str:
    lines = [format_violation(v) for v in report.violations()]
    lines.extend(format_failure(f) for f in report.failures())
    summary = report.summarize()
    if lines:
        lines.append("")
    lines.append(
        f"Summary: {summary.error_count} error(s), {summary.warning_count} warning(s), "
        f"{summary.failure_count} failure(s)"
    )
    return "\n".join(lines)


def render_json(report: ReportAggregator) -> str:
    summary = report.summarize()
    data = {
        "violations": [
            {
                "sequence": entry.sequence,
                "code": entry.violation.code,
                "rule": entry.violation.rule,
                "severity": entry.violation.severity.value,
                "location": _location(entry.violation.location),
                "tokens": list(entry.violation.tokens),
                "related": entry.violation.related,
                "message": message(entry.violation),
            }
            for entry in report.entries()
        ],
        "failures": [
            {
                "kind": failure.kind.value,
                "location": _location(failure.location),
                "reason": failure.reason,
            }
            for failure in report.failures()
        ],
        "summary": {
            "errors": summary.error_count,
            "warnings": summary.warning_count,
            "failures": summary.failure_count,
            "per_rule": summary.per_rule_counts,
            "passed": report.passed,
        },
    }
    return json.dumps(data, indent=2)
