"""Tests for the cross-selector private reuse check."""

from scopelint.analysis import analyze_selector
from scopelint.model.diagnostic import Severity
from scopelint.stylesheet.selectors import parse_selector
from scopelint.validation.reuse import (
    PrivateIndex,
    check_private_reuse,
    collect_private_usages,
)


def _usages(text: str, props: set[str], index: int, *context: str):
    path = analyze_selector(parse_selector(text), tuple(parse_selector(c) for c in context))
    return collect_private_usages(path, props, index, location=f"rule{index}")


class TestCollectPrivateUsages:
    def test_descendant_private(self):
        usages = _usages(".c-card ._title", {"color"}, 0)
        assert len(usages) == 1
        assert usages[0].private == "_title"
        assert usages[0].container == "c-card"
        assert usages[0].fingerprint == frozenset({"color"})
        assert usages[0].location == "rule0"

    def test_own_container_wins(self):
        usages = _usages(".c-card ._title.c-heading", set(), 0)
        assert usages[0].container == "c-heading"

    def test_nearest_container(self):
        usages = _usages(".l-grid .c-card .wrap ._title", set(), 0)
        assert usages[0].container == "c-card"

    def test_unscoped_private_skipped(self):
        assert _usages(".wrap ._title", {"color"}, 0) == []
        assert _usages("._title", {"color"}, 0) == []

    def test_intermediate_privates_recorded(self):
        usages = _usages("._body", {"margin"}, 0, ".c-card ._header")
        assert [(u.private, u.container) for u in usages] == [
            ("_header", "c-card"),
            ("_body", "c-card"),
        ]


class TestCheckPrivateReuse:
    def test_conflicting_declarations(self):
        index = PrivateIndex.build(
            _usages(".c-card ._title", {"font-size"}, 0)
            + _usages(".c-modal ._title", {"display", "grid-area"}, 3)
        )
        findings = check_private_reuse(index)
        assert len(findings) == 1
        unit_index, violation = findings[0]
        assert unit_index == 3
        assert violation.code == "R6"
        assert violation.severity is Severity.WARNING
        assert violation.tokens == ("_title",)
        assert violation.related == "c-modal"
        assert violation.location == "rule3"

    def test_same_declarations_are_fine(self):
        index = PrivateIndex.build(
            _usages(".c-card ._title", {"font-size"}, 0)
            + _usages(".c-modal ._title", {"font-size"}, 1)
        )
        assert check_private_reuse(index) == []

    def test_single_container_many_rules(self):
        index = PrivateIndex.build(
            _usages(".c-card ._title", {"font-size"}, 0)
            + _usages(".c-card ._title:hover", {"color"}, 1)
        )
        assert check_private_reuse(index) == []

    def test_union_per_container(self):
        index = PrivateIndex.build(
            _usages(".c-card ._title", {"font-size"}, 0)
            + _usages(".c-card ._title", {"color"}, 1)
            + _usages(".c-modal ._title", {"color", "font-size"}, 2)
        )
        assert check_private_reuse(index) == []

    def test_one_warning_per_private_name(self):
        index = PrivateIndex.build(
            _usages(".c-a ._x", {"a"}, 0)
            + _usages(".c-b ._x", {"b"}, 1)
            + _usages(".c-c ._x", {"c"}, 2)
            + _usages(".c-a ._y", {"a"}, 3)
            + _usages(".c-b ._y", {"b"}, 4)
        )
        findings = check_private_reuse(index)
        assert [(i, v.tokens, v.related) for i, v in findings] == [
            (1, ("_x",), "c-b"),
            (4, ("_y",), "c-b"),
        ]

    def test_index_is_ordered_by_input(self):
        usages = _usages(".c-b ._x", {"b"}, 5) + _usages(".c-a ._x", {"a"}, 2)
        index = PrivateIndex.build(usages)
        assert [u.index for u in index.usages("_x")] == [2, 5]
        assert "_x" in index
        assert len(index) == 1
        assert index.usages("_missing") == ()
