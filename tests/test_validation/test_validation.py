"""Tests for the selector rules and the rule engine entry point."""

import pytest

from scopelint.analysis import analyze_selector
from scopelint.config import ConventionConfig
from scopelint.errors import ConfigError
from scopelint.model.diagnostic import Severity, Violation
from scopelint.model.selector import SelectorPath
from scopelint.stylesheet.selectors import parse_selector
from scopelint.validation import run_rules
from scopelint.validation.rules import (
    check_container_inside_container,
    check_modifier_without_container,
    check_multiple_containers,
    check_private_not_descendant,
    check_private_without_container,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _path(text: str, *context: str) -> SelectorPath:
    return analyze_selector(parse_selector(text), tuple(parse_selector(c) for c in context))


def _codes(violations: list[Violation]) -> list[str]:
    return [v.code for v in violations]


# ---------------------------------------------------------------------------
# R1 modifier-without-container
# ---------------------------------------------------------------------------


class TestModifierWithoutContainer:
    def test_standalone_modifier(self):
        diags = check_modifier_without_container(_path(".is-active"), "loc")
        assert len(diags) == 1
        assert diags[0].rule == "modifier-without-container"
        assert diags[0].code == "R1"
        assert diags[0].severity is Severity.ERROR
        assert diags[0].tokens == ("is-active",)
        assert diags[0].location == "loc"

    def test_modifier_on_container(self):
        assert check_modifier_without_container(_path(".c-image.is-card")) == []

    def test_modifier_under_container_ancestor(self):
        diags = check_modifier_without_container(_path(".c-card .is-active"))
        assert _codes(diags) == ["R1"]

    def test_one_per_modifier(self):
        diags = check_modifier_without_container(_path(".is-a.has-b"))
        assert [d.tokens for d in diags] == [("is-a",), ("has-b",)]

    def test_modifier_in_ancestor_compound(self):
        diags = check_modifier_without_container(_path(".is-dark .c-card"))
        assert _codes(diags) == ["R1"]


# ---------------------------------------------------------------------------
# R2 private-without-container
# ---------------------------------------------------------------------------


class TestPrivateWithoutContainer:
    def test_standalone_private(self):
        diags = check_private_without_container(_path("._content"))
        assert len(diags) == 1
        assert diags[0].code == "R2"
        assert diags[0].tokens == ("_content",)

    def test_private_on_container(self):
        assert check_private_without_container(_path(".c-card._content")) == []

    def test_private_with_ancestor_is_left_to_r3(self):
        assert check_private_without_container(_path(".c-card ._content")) == []
        assert check_private_without_container(_path("div ._content")) == []

    def test_private_after_sibling_has_no_ancestor(self):
        diags = check_private_without_container(_path(".c-card + ._content"))
        assert _codes(diags) == ["R2"]


# ---------------------------------------------------------------------------
# R3 private-not-descendant
# ---------------------------------------------------------------------------


class TestPrivateNotDescendant:
    def test_private_under_plain_element(self):
        diags = check_private_not_descendant(_path(".wrapper ._content"))
        assert len(diags) == 1
        assert diags[0].code == "R3"
        assert diags[0].tokens == ("_content",)
        assert diags[0].related == "wrapper"

    def test_private_under_container(self):
        assert check_private_not_descendant(_path(".c-card ._content")) == []

    def test_any_container_ancestor_suffices(self):
        assert check_private_not_descendant(_path(".c-card .wrapper ._content")) == []

    def test_private_chain_under_container(self):
        assert check_private_not_descendant(_path(".c-card ._header ._title")) == []

    def test_related_is_type_selector_without_classes(self):
        diags = check_private_not_descendant(_path("section > ._content"))
        assert diags[0].related == "section"

    def test_single_compound_not_checked(self):
        assert check_private_not_descendant(_path("._content")) == []


# ---------------------------------------------------------------------------
# R4 container-inside-container
# ---------------------------------------------------------------------------


class TestContainerInsideContainer:
    def test_dont_example(self):
        diags = check_container_inside_container(_path(".c-card .c-image"))
        assert len(diags) == 1
        assert diags[0].code == "R4"
        assert diags[0].tokens == ("c-image",)
        assert diags[0].related == "c-card"

    def test_do_example(self):
        assert check_container_inside_container(_path(".c-image.is-card")) == []

    def test_modifier_exempts_regardless_of_ancestors(self):
        assert check_container_inside_container(_path(".c-card .c-image.is-card")) == []
        assert check_container_inside_container(_path(".l-grid > .c-card .c-image.is-card")) == []

    def test_same_container_is_not_flagged(self):
        assert check_container_inside_container(_path(".c-menu .c-menu")) == []

    def test_nearest_outer_container_is_related(self):
        diags = check_container_inside_container(_path(".l-grid .c-card ._x .c-image"))
        assert [(d.tokens, d.related) for d in diags] == [
            (("c-card",), "l-grid"),
            (("c-image",), "c-card"),
        ]

    def test_sibling_container_is_not_flagged(self):
        assert check_container_inside_container(_path(".c-card + .c-image")) == []

    def test_nested_rule(self):
        diags = check_container_inside_container(_path(".c-image", ".c-card"))
        assert _codes(diags) == ["R4"]


# ---------------------------------------------------------------------------
# R5 multiple-containers-same-compound
# ---------------------------------------------------------------------------


class TestMultipleContainers:
    def test_two_containers(self):
        diags = check_multiple_containers(_path(".c-card.l-grid"))
        assert len(diags) == 1
        assert diags[0].code == "R5"
        assert diags[0].tokens == ("c-card", "l-grid")

    def test_one_container(self):
        assert check_multiple_containers(_path(".c-card.is-x ._y")) == []

    def test_merged_through_ampersand(self):
        diags = check_multiple_containers(_path("&.g-button", ".c-card"))
        assert _codes(diags) == ["R5"]


# ---------------------------------------------------------------------------
# run_rules
# ---------------------------------------------------------------------------


class TestRunRules:
    def test_clean_private_descendant(self):
        assert run_rules(_path(".c-card ._content")) == []

    def test_do_pattern_has_no_r1_or_r4(self):
        codes = _codes(run_rules(_path(".c-card .c-image.is-card")))
        assert "R1" not in codes
        assert "R4" not in codes

    def test_dont_pattern_exactly_one_r4(self):
        assert _codes(run_rules(_path(".c-card .c-image"))) == ["R4"]

    def test_rule_order(self):
        diags = run_rules(_path(".wrapper .is-x ._y"))
        assert _codes(diags) == ["R1", "R3"]

    def test_location_propagates(self):
        diags = run_rules(_path(".is-x"), location=("a.css", 3))
        assert diags[0].location == ("a.css", 3)

    def test_disabled_rule_by_code(self):
        config = ConventionConfig(disabled_rules=frozenset({"R4"}))
        assert run_rules(_path(".c-card .c-image"), config) == []

    def test_disabled_rule_by_name(self):
        config = ConventionConfig(disabled_rules=frozenset({"modifier-without-container"}))
        assert run_rules(_path(".is-x"), config) == []

    def test_enabled_rules_restrict(self):
        config = ConventionConfig(enabled_rules=frozenset({"R3"}))
        assert _codes(run_rules(_path(".wrapper .is-x ._y"), config)) == ["R3"]

    def test_class_list_goes_to_markup_checker(self):
        diags = run_rules(["_content"])
        assert _codes(diags) == ["R2"]

    def test_class_attribute_string(self):
        assert run_rules("c-card _content") == []

    def test_extra_rules(self):
        def no_unclassified(path, location=None):
            return [
                Violation(rule="custom", code="X1", severity=Severity.INFO, location=location)
                for c in path.compounds
                if not c.tokens
            ]

        diags = run_rules(_path("div ._x", ".c-card"), extra_rules=[no_unclassified])
        assert _codes(diags) == ["X1"]

    @pytest.mark.parametrize(
        "selector",
        [".is-a", ".c-card .is-a", ".l-x > .has-b", "._p.is-a", ".c-a .c-b ._q.is-a"],
    )
    def test_modifier_without_container_in_subject_always_r1(self, selector):
        assert "R1" in _codes(run_rules(_path(selector)))


# ---------------------------------------------------------------------------
# Configured taxonomy
# ---------------------------------------------------------------------------


class TestConfiguredTaxonomy:
    @pytest.fixture
    def config(self):
        return ConventionConfig(container_prefixes={"o-": "component"})

    def test_path_built_with_default_is_reclassified(self, config):
        path = analyze_selector(parse_selector(".o-media.is-active"))
        assert run_rules(path, config) == []

    def test_path_built_with_config(self, config):
        path = analyze_selector(parse_selector(".o-media .o-body"), config=config)
        assert path.subject.containers[0].name == "o-body"
        diags = run_rules(path, config)
        assert [(d.code, d.tokens, d.related) for d in diags] == [
            ("R4", ("o-body",), "o-media")
        ]

    def test_default_prefixes_no_longer_apply(self, config):
        path = analyze_selector(parse_selector(".c-card.is-open"))
        assert _codes(run_rules(path, config)) == ["R1"]

    def test_class_list_uses_config(self, config):
        assert run_rules(["o-media", "is-active"], config) == []


class TestInconsistentConfig:
    @pytest.fixture
    def config(self):
        return ConventionConfig(modifier_prefixes=("c-",))

    def test_selector_path_raises(self, config):
        with pytest.raises(ConfigError, match="Overlapping prefixes"):
            run_rules(_path(".c-x"), config)

    def test_class_list_raises(self, config):
        with pytest.raises(ConfigError, match="Overlapping prefixes"):
            run_rules(["c-x", "is-y"], config)

    def test_unknown_rule_id_raises(self):
        config = ConventionConfig(disabled_rules=frozenset({"R42"}))
        with pytest.raises(ConfigError, match="R42"):
            run_rules(_path(".c-x"), config)
