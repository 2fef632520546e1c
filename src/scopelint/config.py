"""Convention configuration: prefix taxonomy and rule selection."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from scopelint.errors import ConfigError
from scopelint.model.diagnostic import RuleInfo, lookup_rule

DEFAULT_CONFIG_FILENAME = ".scopelint.json"

DEFAULT_CONTAINER_PREFIXES: dict[str, str] = {
    "c-": "component",
    "g-": "global",
    "l-": "layout",
    "m-": "module",
}


@dataclass(frozen=True)
class ConventionConfig:
    """Read-only settings for one analysis run.

    ``container_prefixes`` maps a class prefix to a container kind name
    (``component``, ``global``, ``layout``, ``module``; anything else is
    classified as an unknown container kind).  ``enabled_rules`` of None means
    every rule; rule ids may be codes (``R4``) or names.
    """

    container_prefixes: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_CONTAINER_PREFIXES)
    )
    modifier_prefixes: tuple[str, ...] = ("has-", "is-")
    private_prefix: str = "_"
    enabled_rules: frozenset[str] | None = None
    disabled_rules: frozenset[str] = frozenset()

    def __hash__(self) -> int:
        return hash(
            (
                tuple(sorted(self.container_prefixes.items())),
                self.modifier_prefixes,
                self.private_prefix,
                self.enabled_rules,
                self.disabled_rules,
            )
        )

    # --- rule selection -------------------------------------------------------

    def is_rule_enabled(self, rule: RuleInfo) -> bool:
        if any(rule.matches(r) for r in self.disabled_rules):
            return False
        if self.enabled_rules is None:
            return True
        return any(rule.matches(r) for r in self.enabled_rules)

    # --- consistency ----------------------------------------------------------

    def problems(self) -> list[str]:
        """Describe every inconsistency that makes classification undefined.

        An empty list means the configuration is usable.
        """
        issues: list[str] = []
        categorized: list[tuple[str, str]] = []
        for prefix in self.container_prefixes:
            categorized.append(("container", prefix))
        for prefix in self.modifier_prefixes:
            categorized.append(("modifier", prefix))
        categorized.append(("private", self.private_prefix))

        for category, prefix in categorized:
            if not prefix:
                issues.append(f"Empty {category} prefix.")

        for i, (cat_a, a) in enumerate(categorized):
            for cat_b, b in categorized[i + 1:]:
                if cat_a == cat_b or not a or not b:
                    continue
                if a.startswith(b) or b.startswith(a):
                    issues.append(
                        f"Overlapping prefixes: {cat_a} prefix '{a}' and {cat_b} prefix '{b}'."
                    )

        for label, ids in (
            ("enabled", self.enabled_rules or frozenset()),
            ("disabled", self.disabled_rules),
        ):
            for rule_id in sorted(ids):
                if lookup_rule(rule_id) is None:
                    issues.append(f"Unknown rule id in {label} rules: '{rule_id}'.")
        return issues

    def problems_or_raise(self) -> None:
        """Raise :class:`ConfigError` listing every problem, if there are any."""
        issues = self.problems()
        if issues:
            raise ConfigError(" ".join(issues))

    # --- construction ---------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConventionConfig:
        """Build a config from parsed JSON, validating field types."""
        if not isinstance(data, Mapping):
            raise ConfigError("Configuration must be a JSON object.")
        known = {
            "container_prefixes",
            "modifier_prefixes",
            "private_prefix",
            "enabled_rules",
            "disabled_rules",
        }
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}.")

        kwargs: dict[str, Any] = {}
        if "container_prefixes" in data:
            prefixes = data["container_prefixes"]
            if not isinstance(prefixes, Mapping) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in prefixes.items()
            ):
                raise ConfigError("'container_prefixes' must map prefix strings to kind names.")
            kwargs["container_prefixes"] = dict(prefixes)
        if "modifier_prefixes" in data:
            kwargs["modifier_prefixes"] = tuple(_string_list(data, "modifier_prefixes"))
        if "private_prefix" in data:
            value = data["private_prefix"]
            if not isinstance(value, str):
                raise ConfigError("'private_prefix' must be a string.")
            kwargs["private_prefix"] = value
        if data.get("enabled_rules") is not None:
            kwargs["enabled_rules"] = frozenset(_string_list(data, "enabled_rules"))
        if "disabled_rules" in data:
            kwargs["disabled_rules"] = frozenset(_string_list(data, "disabled_rules"))
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "container_prefixes": dict(self.container_prefixes),
            "modifier_prefixes": list(self.modifier_prefixes),
            "private_prefix": self.private_prefix,
            "enabled_rules": sorted(self.enabled_rules) if self.enabled_rules is not None else None,
            "disabled_rules": sorted(self.disabled_rules),
        }


def _string_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = data[key]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings.")
    return list(value)


def load_config(path: Path) -> ConventionConfig:
    """Deserialise a ConventionConfig from a JSON file at *path*."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    return ConventionConfig.from_dict(data)
