"""Run orchestration: dispatch units, aggregate results, then run R6.

Every unit is independent and only reads the immutable config, so units can
be evaluated concurrently.  Workers return UnitResult messages; a single
consumer feeds them into the ReportAggregator, which restores input order by
index.  The cross-selector pass runs only after every unit has completed.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Protocol, Sequence, Union

from scopelint.analysis.analyzer import analyze_selector
from scopelint.classifier import Classifier
from scopelint.config import ConventionConfig
from scopelint.errors import AnalysisCancelled, AnalysisError
from scopelint.model.diagnostic import PRIVATE_REUSED, Failure, FailureKind, Violation
from scopelint.model.selector import NestingContext, SelectorInput
from scopelint.report.aggregator import ReportAggregator
from scopelint.validation.markup import check_element
from scopelint.validation.reuse import (
    PrivateIndex,
    PrivateUsage,
    check_private_reuse,
    collect_private_usages,
)
from scopelint.validation.validator import run_rules

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Units of work
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SelectorUnit:
    """One style rule: a selector in its lexical nesting context."""

    selector: SelectorInput
    context: NestingContext = ()
    declarations: frozenset[str] = frozenset()
    location: Any = None


@dataclass(frozen=True)
class ElementUnit:
    """The class list of one markup element."""

    classes: tuple[str, ...]
    location: Any = None


Unit = Union[SelectorUnit, ElementUnit]


@dataclass
class UnitResult:
    """Message a worker emits for one unit."""

    index: int
    violations: list[Violation] = field(default_factory=list)
    failure: Failure | None = None
    usages: list[PrivateUsage] = field(default_factory=list)


def evaluate_unit(
    index: int, unit: Unit, config: ConventionConfig, classifier: Classifier
) -> UnitResult:
    """Analyze and check one unit.  Never raises for bad input."""
    if isinstance(unit, ElementUnit):
        return UnitResult(
            index=index,
            violations=check_element(unit.classes, config, unit.location, classifier),
        )

    try:
        path = analyze_selector(unit.selector, unit.context, classifier)
    except AnalysisError as exc:
        logger.debug("Unanalyzable input #%d at %s: %s", index, unit.location, exc)
        return UnitResult(
            index=index,
            failure=Failure(
                kind=FailureKind.UNANALYZABLE_INPUT,
                location=unit.location,
                reason=str(exc),
            ),
        )

    return UnitResult(
        index=index,
        violations=run_rules(path, config, unit.location, classifier=classifier),
        usages=collect_private_usages(path, unit.declarations, index, unit.location),
    )


# ---------------------------------------------------------------------------
# Dispatchers
# ---------------------------------------------------------------------------

Task = Callable[[int, Unit], UnitResult]


class Dispatcher(Protocol):
    """Evaluates units and yields their results in any order."""

    def dispatch(
        self,
        task: Task,
        units: Sequence[Unit],
        cancel: threading.Event | None = None,
    ) -> Iterator[UnitResult]: ...


class SerialDispatcher:
    """Evaluates units one at a time on the calling thread."""

    def dispatch(
        self,
        task: Task,
        units: Sequence[Unit],
        cancel: threading.Event | None = None,
    ) -> Iterator[UnitResult]:
        for index, unit in enumerate(units):
            if cancel is not None and cancel.is_set():
                raise AnalysisCancelled(f"Cancelled after {index} of {len(units)} unit(s)")
            yield task(index, unit)


class ThreadPoolDispatcher:
    """Evaluates units on a ThreadPoolExecutor.

    Results are yielded in completion order; callers must not rely on it.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        self.max_workers = max_workers

    def dispatch(
        self,
        task: Task,
        units: Sequence[Unit],
        cancel: threading.Event | None = None,
    ) -> Iterator[UnitResult]:
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = []
            for index, unit in enumerate(units):
                if cancel is not None and cancel.is_set():
                    for future in futures:
                        future.cancel()
                    raise AnalysisCancelled(
                        f"Cancelled after dispatching {index} of {len(units)} unit(s)"
                    )
                futures.append(pool.submit(task, index, unit))
            for future in as_completed(futures):
                yield future.result()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def run_analysis(
    units: Iterable[Unit],
    config: ConventionConfig | None = None,
    dispatcher: Dispatcher | None = None,
    cancel: threading.Event | None = None,
) -> ReportAggregator:
    """Check every unit and return the populated aggregator.

    A config with problems produces configuration-error failures and no
    analysis.  Raises :class:`AnalysisCancelled` if *cancel* is set mid-run;
    partial results are discarded.
    """
    config = config or ConventionConfig()
    dispatcher = dispatcher or SerialDispatcher()
    aggregator = ReportAggregator()
    unit_list = list(units)

    problems = config.problems()
    if problems:
        for problem in problems:
            logger.error("Configuration error: %s", problem)
            aggregator.record_failure(
                Failure(kind=FailureKind.CONFIGURATION_ERROR, location="config", reason=problem),
                index=-1,
            )
        return aggregator

    logger.info("Analyzing %d unit(s) with %s", len(unit_list), type(dispatcher).__name__)
    start = time.monotonic()
    classifier = Classifier(config)

    def _task(index: int, unit: Unit) -> UnitResult:
        return evaluate_unit(index, unit, config, classifier)

    usages: list[PrivateUsage] = []
    for result in dispatcher.dispatch(_task, unit_list, cancel):
        aggregator.record_all(result.violations, result.index)
        if result.failure is not None:
            aggregator.record_failure(result.failure, result.index)
        usages.extend(result.usages)

    # Second pass: runs only once every unit above has completed.
    if config.is_rule_enabled(PRIVATE_REUSED):
        index = PrivateIndex.build(usages)
        for ordinal, (unit_index, violation) in enumerate(check_private_reuse(index)):
            aggregator.record(violation, unit_index, phase=1, ordinal=ordinal)

    summary = aggregator.summarize()
    logger.info(
        "Analysis finished in %.3fs: %d error(s), %d warning(s), %d failure(s)",
        time.monotonic() - start,
        summary.error_count,
        summary.warning_count,
        summary.failure_count,
    )
    return aggregator
