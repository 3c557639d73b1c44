"""Emphasis delimiter matching edge cases.

Matched spans must always be disjoint or properly nested, whatever the
delimiter soup looks like.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hojas import Emphasis, Strikethrough, Text, parse_inline
from hojas.nodes import Node
from hojas.visitor import child_nodes, plain_text


def _structure(nodes) -> list:  # type: ignore[no-untyped-def]
    """Compact shape: text as str, containers as (kind, children)."""
    out: list = []
    for node in nodes:
        if isinstance(node, Text):
            out.append(node.content)
        elif isinstance(node, Emphasis):
            out.append(("strong" if node.strong else "em", _structure(node.children)))
        else:
            out.append((type(node).__name__, _structure(child_nodes(node))))
    return out


class TestBasicEmphasis:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("*a*", [("em", ["a"])]),
            ("_a_", [("em", ["a"])]),
            ("**a**", [("strong", ["a"])]),
            ("__a__", [("strong", ["a"])]),
            ("***a***", [("em", [("strong", ["a"])])]),
            ("**a *b* c**", [("strong", ["a ", ("em", ["b"]), " c"])]),
            ("*a **b** c*", [("em", ["a ", ("strong", ["b"]), " c"])]),
        ],
    )
    def test_shapes(self, source: str, expected: list) -> None:
        assert _structure(parse_inline(source)) == expected

    def test_unmatched_opener_is_text(self) -> None:
        assert _structure(parse_inline("*a")) == ["*a"]

    def test_space_after_opener_is_not_emphasis(self) -> None:
        assert _structure(parse_inline("* a*")) == ["* a*"]

    def test_intraword_underscore_is_text(self) -> None:
        assert _structure(parse_inline("snake_case_name")) == ["snake_case_name"]

    def test_intraword_star_is_emphasis(self) -> None:
        assert _structure(parse_inline("un*frigging*believable")) == [
            "un",
            ("em", ["frigging"]),
            "believable",
        ]

    def test_leftover_delimiters_become_text(self) -> None:
        assert _structure(parse_inline("**a*")) == ["*", ("em", ["a"])]

    def test_multiple_of_three_rule(self) -> None:
        assert _structure(parse_inline("*foo**bar**baz*")) == [
            ("em", ["foo", ("strong", ["bar"]), "baz"])
        ]


class TestMixedDelimiters:
    def test_strike_around_emphasis(self) -> None:
        nodes = parse_inline("~~a *b*~~")

        assert isinstance(nodes[0], Strikethrough)
        assert isinstance(nodes[0].children[1], Emphasis)

    def test_crossing_pairs_do_not_overlap(self) -> None:
        """``*a ~~b* c~~``: whichever pair closes first wins, the other is text."""
        nodes = parse_inline("*a ~~b* c~~")

        assert isinstance(nodes[0], Emphasis)
        assert plain_text(nodes) == "a ~~b c~~"


_delimiter_soup = st.text(alphabet="*_~=^ab \n", max_size=40)


def _spans(nodes, offset: int = 0) -> list[tuple[int, int]]:  # type: ignore[no-untyped-def]
    """(start, end) text intervals of every container, by plain-text offsets."""
    spans: list[tuple[int, int]] = []
    pos = offset
    for node in nodes:
        length = len(plain_text([node]))
        children = child_nodes(node)
        if children:
            spans.append((pos, pos + length))
            spans.extend(_spans(children, pos))
        pos += length
    return spans


class TestNonOverlap:
    @given(_delimiter_soup)
    @settings(max_examples=300)
    def test_spans_are_nested_or_disjoint(self, source: str) -> None:
        spans = _spans(parse_inline(source))

        for a_start, a_end in spans:
            for b_start, b_end in spans:
                disjoint = a_end <= b_start or b_end <= a_start
                nested = (a_start <= b_start and b_end <= a_end) or (
                    b_start <= a_start and a_end <= b_end
                )
                assert disjoint or nested

    @given(_delimiter_soup)
    @settings(max_examples=300)
    def test_no_adjacent_text_nodes(self, source: str) -> None:
        def check(nodes: tuple[Node, ...]) -> None:
            for left, right in zip(nodes, nodes[1:], strict=False):
                assert not (isinstance(left, Text) and isinstance(right, Text))
            for node in nodes:
                check(child_nodes(node))

        check(parse_inline(source))
