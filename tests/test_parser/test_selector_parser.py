"""Tests for the lark selector parser."""

import pytest

from shadowshim.model.selector import (
    Attribute,
    ClassName,
    Combinator,
    Id,
    Nesting,
    Pseudo,
    Selector,
    Tag,
    Universal,
)
from shadowshim.parser import ParseError, parse_selector, parse_selector_list


# ---------------------------------------------------------------------------
# Lossless round trip
# ---------------------------------------------------------------------------


class TestRoundTrip:
    @pytest.mark.parametrize(
        "text",
        [
            ".a",
            "div.a#b",
            'input[type="text" i]:hover::before',
            ".a > .b + .c ~ .d",
            ".a>.b",
            ".a   .b",
            ".a , .b",
            ".a,.b",
            ":host( .x )",
            ":host-context(.dark) .a",
            ":not(.a, .b)",
            ":nth-child(2n + 1)",
            "li:nth-last-of-type(odd)",
            "::part(label)",
            "svg|rect",
            "*|*",
            "* > *",
            "  .a  ",
            "::ng-deep .x",
            ":-acx-global-context(.rtl) :host",
            ".a:has(> .b)",
            ":has(+ .x, ~ .y)",
            "> .a",
            "&",
            "&.a:hover",
            ".a & + &",
        ],
    )
    def test_str_reproduces_source(self, text):
        assert str(parse_selector_list(text)) == text


# ---------------------------------------------------------------------------
# Relative selectors and the nesting selector
# ---------------------------------------------------------------------------


class TestRelativeAndNesting:
    def test_relative_argument(self):
        sel = parse_selector(".a:has(> .b)")
        has = sel.nodes[1]
        assert isinstance(has, Pseudo)
        argument = has.first
        assert isinstance(argument, Selector)
        assert isinstance(argument.first, Combinator)
        assert argument.first.value == ">"
        assert str(argument) == "> .b"

    def test_relative_arguments_after_comma(self):
        has = parse_selector(":has(+ .x, ~ .y)").first
        assert [n.first.value for n in has.nodes] == ["+", "~"]

    def test_leading_combinator(self):
        sel = parse_selector("> .a")
        assert [type(n) for n in sel.nodes] == [Combinator, ClassName]

    def test_nesting_selector(self):
        sel = parse_selector("&.a & .b")
        assert [type(n) for n in sel.nodes] == [
            Nesting, ClassName, Combinator, Nesting, Combinator, ClassName,
        ]
        assert sel.first.value == "&"

    def test_trailing_combinator_still_invalid(self):
        with pytest.raises(ParseError):
            parse_selector(":has(> )")


# ---------------------------------------------------------------------------
# Node types
# ---------------------------------------------------------------------------


class TestNodeTypes:
    def test_compound_nodes(self):
        sel = parse_selector("div.a#b[title]")
        assert [type(n) for n in sel.nodes] == [Tag, ClassName, Id, Attribute]
        assert sel.nodes[0].value == "div"
        assert sel.nodes[1].value == "a"
        assert sel.nodes[2].value == "b"
        assert sel.nodes[3].attribute == "title"

    def test_attribute_name_with_operator(self):
        sel = parse_selector('[data-x ^= "y"]')
        assert sel.first.attribute == "data-x"
        assert str(sel) == '[data-x ^= "y"]'

    def test_universal(self):
        assert isinstance(parse_selector("*").first, Universal)

    def test_combinators(self):
        sel = parse_selector(".a > .b .c")
        combinators = [n for n in sel.nodes if isinstance(n, Combinator)]
        assert [c.value for c in combinators] == [">", " "]
        assert combinators[1].is_descendant

    def test_pseudo_with_selector_argument(self):
        pseudo = parse_selector(":host(.x.y)").first
        assert isinstance(pseudo, Pseudo)
        assert pseudo.name == ":host"
        assert isinstance(pseudo.first, Selector)
        assert str(pseudo.first) == ".x.y"
        assert pseudo.first.parent is pseudo

    def test_pseudo_with_raw_argument(self):
        pseudo = parse_selector(":nth-child(2n+1)").first
        assert pseudo.nodes == []
        assert pseudo.argument_text == "2n+1"

    def test_pseudo_elements(self):
        sel = parse_selector("p::first-line")
        assert sel.last.is_pseudo_element

    def test_nested_pseudo_arguments(self):
        pseudo = parse_selector(":host-context(:not(.a))").first
        inner = pseudo.first.first
        assert inner.name == ":not"
        assert str(inner.first) == ".a"

    def test_source_index(self):
        sel = parse_selector(".a > .b")
        assert sel.nodes[0].source_index == 0
        assert sel.nodes[2].source_index == 5

    def test_source_index_counts_leading_whitespace(self):
        selectors = parse_selector_list("  .a")
        assert selectors.first.first.source_index == 2


# ---------------------------------------------------------------------------
# Selector lists
# ---------------------------------------------------------------------------


class TestSelectorList:
    def test_multiple_selectors(self):
        selectors = parse_selector_list(".a, .b > .c,div")
        assert len(selectors) == 3
        assert [str(s).strip() for s in selectors] == [".a", ".b > .c", "div"]

    def test_comma_spacing_is_split(self):
        selectors = parse_selector_list(".a , .b")
        first, second = selectors.nodes
        assert first.spaces_after == " "
        assert second.spaces_before == " "

    def test_outer_whitespace_on_root(self):
        selectors = parse_selector_list("\n  .a ")
        assert selectors.spaces_before == "\n  "
        assert selectors.spaces_after == " "
        assert selectors.source == "\n  .a "

    def test_line_and_column_stored(self):
        selectors = parse_selector_list(".a", line=4, column=3)
        assert (selectors.line, selectors.column) == (4, 3)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_empty_selector(self):
        with pytest.raises(ParseError):
            parse_selector_list("   ")

    @pytest.mark.parametrize("text", [".a >", ".", ":host(", ".a,", "[x"])
    def test_invalid_selectors(self, text):
        with pytest.raises(ParseError):
            parse_selector_list(text)

    def test_error_position_uses_rule_location(self):
        with pytest.raises(ParseError) as info:
            parse_selector_list(".a >", line=7, column=1)
        assert info.value.line == 7

    def test_parse_selector_requires_one(self):
        with pytest.raises(ParseError):
            parse_selector(".a, .b")
