"""Rule engine entry point: run the enabled rules against one unit."""

from __future__ import annotations

from typing import Any, Iterable, Union

from scopelint.classifier import Classifier
from scopelint.config import ConventionConfig
from scopelint.model.diagnostic import Violation
from scopelint.model.selector import SelectorPath
from scopelint.validation.markup import check_element
from scopelint.validation.rules import PATH_RULES, PathRuleFunc

RuleTarget = Union[SelectorPath, Iterable[str]]


def run_rules(
    target: RuleTarget,
    config: ConventionConfig | None = None,
    location: Any = None,
    extra_rules: list[PathRuleFunc] | None = None,
    classifier: Classifier | None = None,
) -> list[Violation]:
    """Run every enabled rule against *target*.

    A SelectorPath gets the selector rules; any other iterable is treated as
    the class list of a markup element.  A path's class names are classified
    against *config* whichever config built the path.  Returns violations in
    rule order.

    Raises :class:`ConfigError` if *config* is inconsistent (see
    :meth:`ConventionConfig.problems`).
    """
    config = config or ConventionConfig()
    config.problems_or_raise()
    classify = classifier or Classifier(config)
    if not isinstance(target, SelectorPath):
        if isinstance(target, str):
            target = target.split()
        return check_element(target, config, location, classifier=classify)

    path = target.reclassified(classify)
    diagnostics: list[Violation] = []
    for info, rule in PATH_RULES:
        if config.is_rule_enabled(info):
            diagnostics.extend(rule(path, location))
    for extra in extra_rules or ():
        diagnostics.extend(extra(path, location))
    return diagnostics
