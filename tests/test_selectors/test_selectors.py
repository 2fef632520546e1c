"""Tests for the hand-written selector parser."""

import pytest

from scopelint.model.selector import Combinator, RawCompound, SelectorAst, UnparsedSelector
from scopelint.stylesheet.selectors import INTERPOLATION, parse_selector, parse_selector_list


def _compounds(text: str) -> tuple[RawCompound, ...]:
    ast = parse_selector(text)
    assert isinstance(ast, SelectorAst), ast
    return ast.compounds


# ---------------------------------------------------------------------------
# Simple selectors
# ---------------------------------------------------------------------------


class TestSimpleSelectors:
    def test_classes(self):
        (compound,) = _compounds(".c-card.has-video")
        assert compound.classes == ("c-card", "has-video")
        assert compound.combinator is Combinator.NONE

    def test_type_id_attribute_pseudo(self):
        (compound,) = _compounds('a#main.c-link[href^="http"]:hover::before')
        assert compound.classes == ("c-link",)
        assert compound.others == ("a", "#main", '[href^="http"]', ":hover", "::before")

    def test_functional_pseudo_hides_classes(self):
        (compound,) = _compounds(".c-card:not(.is-open, ._x)")
        assert compound.classes == ("c-card",)
        assert compound.others == (":not(.is-open, ._x)",)

    def test_escaped_class(self):
        (compound,) = _compounds(r".md\:flex")
        assert compound.classes == ("md:flex",)

    def test_universal_and_placeholder(self):
        (compound,) = _compounds("*")
        assert compound.others == ("*",)
        (compound,) = _compounds("%c-base")
        assert compound.others == ("%c-base",)
        assert compound.classes == ()

    def test_text_is_stripped(self):
        assert parse_selector("  .a  ").text == ".a"


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


class TestCombinators:
    @pytest.mark.parametrize(
        "text, expected",
        [
            (".a .b", Combinator.DESCENDANT),
            (".a>.b", Combinator.CHILD),
            (".a > .b", Combinator.CHILD),
            (".a + .b", Combinator.SIBLING),
            (".a~.b", Combinator.SIBLING),
            (".a\n\t.b", Combinator.DESCENDANT),
        ],
    )
    def test_combinator(self, text, expected):
        first, second = _compounds(text)
        assert first.combinator is Combinator.NONE
        assert second.combinator is expected

    def test_leading_combinator(self):
        (compound,) = _compounds("> ._title")
        assert compound.combinator is Combinator.CHILD


# ---------------------------------------------------------------------------
# Nesting markers
# ---------------------------------------------------------------------------


class TestNestingMarkers:
    def test_ampersand_with_class(self):
        (compound,) = _compounds("&.is-active")
        assert compound.nesting
        assert compound.classes == ("is-active",)
        assert compound.suffix == ""

    def test_ampersand_suffix(self):
        (compound,) = _compounds("&__title")
        assert compound.nesting
        assert compound.suffix == "__title"

    def test_ampersand_later_in_selector(self):
        first, second = _compounds(".m-dark &")
        assert not first.nesting
        assert second.nesting
        assert second.combinator is Combinator.DESCENDANT

    def test_ampersand_pseudo(self):
        (compound,) = _compounds("&:hover")
        assert compound.nesting
        assert compound.others == (":hover",)

    def test_uses_nesting(self):
        assert parse_selector("& ._x").uses_nesting
        assert not parse_selector(".a ._x").uses_nesting


# ---------------------------------------------------------------------------
# Unparsed input
# ---------------------------------------------------------------------------


class TestUnparsed:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            ".",
            ".a >",
            ".a > > .b",
            ".a[href",
            ".a:not(.b",
            ".a&",
            "[x]div",
            ".a | .b",
            "." + "c-" + INTERPOLATION,
        ],
    )
    def test_unparsed(self, text):
        result = parse_selector(text)
        assert isinstance(result, UnparsedSelector)
        assert result.reason

    def test_interpolation_reason(self):
        result = parse_selector(".c-" + INTERPOLATION + " ._x")
        assert isinstance(result, UnparsedSelector)
        assert "interpolat" in result.reason


# ---------------------------------------------------------------------------
# Selector lists
# ---------------------------------------------------------------------------


class TestSelectorList:
    def test_split_on_top_level_commas(self):
        selectors = parse_selector_list(".c-a, .c-b:is(.x, .y), [data-x=','] ._p")
        assert [s.text for s in selectors] == [
            ".c-a",
            ".c-b:is(.x, .y)",
            "[data-x=','] ._p",
        ]
        assert all(isinstance(s, SelectorAst) for s in selectors)

    def test_empty_entry_is_unparsed(self):
        selectors = parse_selector_list(".a,,.b")
        assert isinstance(selectors[1], UnparsedSelector)
        assert isinstance(selectors[2], SelectorAst)

    def test_single(self):
        assert len(parse_selector_list(".a")) == 1
