"""Deeply nested input stays structured up to the cap and never crashes."""

from hojas import (
    BlockQuote,
    DiagnosticCode,
    Emphasis,
    Link,
    List,
    Markdown,
    Paragraph,
    parse,
)
from hojas.config import ParseConfig, parse_config_context
from hojas.lexer import Lexer
from hojas.tokens import TokenType
from hojas.visitor import child_nodes, plain_text


def _emphasis_depth(nodes, depth: int = 0) -> int:  # type: ignore[no-untyped-def]
    deepest = depth
    for node in nodes:
        inner = depth + 1 if isinstance(node, Emphasis) else depth
        deepest = max(deepest, inner, _emphasis_depth(child_nodes(node), inner))
    return deepest


class TestBlockNesting:
    def test_quotes_beyond_cap_become_literal(self) -> None:
        md = Markdown(max_nesting_depth=3)
        doc = md.parse("> " * 5 + "*x*")

        node = doc.children[0]
        for _ in range(3):
            assert isinstance(node, BlockQuote)
            node = node.children[0]
        assert isinstance(node, BlockQuote)
        para = node.children[0]
        assert isinstance(para, Paragraph)
        assert para.children[0].content == "> *x*"
        assert [d.code for d in doc.diagnostics] == [DiagnosticCode.NESTING_LIMIT]

    def test_within_cap_is_fully_structured(self) -> None:
        doc = Markdown(max_nesting_depth=3).parse("> > text")

        assert doc.diagnostics == ()

    def test_very_deep_quotes_with_default_cap(self) -> None:
        doc = parse("> " * 300 + "deep")

        assert DiagnosticCode.NESTING_LIMIT in [d.code for d in doc.diagnostics]
        depth = 0
        node = doc.children[0]
        while isinstance(node, BlockQuote):
            depth += 1
            node = node.children[0]
        assert depth == 65

    def test_very_deep_lists(self) -> None:
        source = "\n".join("  " * i + "- item" for i in range(200))
        doc = parse(source)

    def test_many_markers_on_one_line(self) -> None:
        doc = parse("- " * 2000 + "x")

        assert isinstance(doc.children[0], List)
        assert DiagnosticCode.NESTING_LIMIT in [d.code for d in doc.diagnostics]
        assert plain_text(doc.children).endswith("x")

    def test_marker_tokens_per_line_are_bounded(self) -> None:
        with parse_config_context(ParseConfig(max_nesting_depth=3)):
            tokens = list(Lexer("- " * 10 + "x").tokenize())

        markers = [t for t in tokens if t.type == TokenType.LIST_ITEM_MARKER]
        assert len(markers) == 4
        assert tokens[len(markers)].type == TokenType.PARAGRAPH_LINE
        assert tokens[len(markers)].value == "- " * 6 + "x"

        assert isinstance(doc.children[0], List)
        assert DiagnosticCode.NESTING_LIMIT in [d.code for d in doc.diagnostics]


class TestInlineNesting:
    def test_emphasis_beyond_cap_is_text(self) -> None:
        source = "*a " * 6 + "b" + "* c" * 6
        doc = Markdown(max_nesting_depth=3).parse(source)

        assert _emphasis_depth(doc.children[0].children) <= 3
        assert DiagnosticCode.NESTING_LIMIT in [d.code for d in doc.diagnostics]

    def test_very_deep_emphasis_with_default_cap(self) -> None:
        source = "*a " * 500 + "b" + "* c" * 500
        doc = parse(source)

        assert _emphasis_depth(doc.children[0].children) <= 64

    def test_deep_brackets_do_not_crash(self) -> None:
        doc = parse("[" * 100 + "x" + "](/u)" * 100)

        para = doc.children[0]
        assert isinstance(para, Paragraph)
        assert sum(isinstance(node, Link) for node in para.children) == 1

    def test_single_long_run_respects_cap(self) -> None:
        doc = Markdown(max_nesting_depth=3).parse("*" * 20 + "x" + "*" * 20)

        para = doc.children[0]
        assert _emphasis_depth(para.children) == 3
        assert plain_text(para.children) == "*" * 14 + "x" + "*" * 14
        assert [d.code for d in doc.diagnostics] == [DiagnosticCode.NESTING_LIMIT]

    def test_single_long_run_with_default_cap(self) -> None:
        doc = parse("x" + "*" * 500 + "y" + "*" * 500)

        para = doc.children[0]
        assert _emphasis_depth(para.children) == 64
        assert plain_text(para.children).count("*") == 1000 - 4 * 64
        assert DiagnosticCode.NESTING_LIMIT in [d.code for d in doc.diagnostics]

    def test_run_within_cap_is_unchanged(self) -> None:
        doc = Markdown(max_nesting_depth=3).parse("***x***")

        assert _emphasis_depth(doc.children[0].children) == 2
        assert doc.diagnostics == ()
