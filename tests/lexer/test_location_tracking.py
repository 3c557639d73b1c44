"""Source locations of tokens and nodes."""

from hojas import parse
from hojas.lexer import Lexer
from hojas.tokens import TokenType


class TestTokenLocations:
    def test_line_numbers_follow_source_lines(self) -> None:
        tokens = list(Lexer("# Title\n\nParagraph\n").tokenize())

        heading, blank, para, eof = tokens
        assert heading.type == TokenType.ATX_HEADING
        assert heading.lineno == 1
        assert blank.lineno == 2
        assert para.lineno == 3
        assert para.start_offset == 9
        assert eof.type == TokenType.EOF

    def test_column_is_one_based_after_indent(self) -> None:
        tokens = list(Lexer("   text").tokenize())

        assert tokens[0].type == TokenType.PARAGRAPH_LINE
        assert tokens[0].col == 4
        assert tokens[0].value == "text"

    def test_list_content_token_after_marker(self) -> None:
        tokens = list(Lexer("- item").tokenize())

        marker, content = tokens[0], tokens[1]
        assert marker.type == TokenType.LIST_ITEM_MARKER
        assert marker.col == 1
        assert content.type == TokenType.PARAGRAPH_LINE
        assert content.value == "item"
        assert content.col == 3

    def test_tab_padded_list_content_stays_on_its_line(self) -> None:
        source = "-\titem"
        tokens = list(Lexer(source).tokenize())

        content = tokens[1]
        assert content.value == "item"
        assert source[content.start_offset : content.end_offset] == "item"

    def test_crlf_is_normalized(self) -> None:
        tokens = list(Lexer("a\r\nb\rc").tokenize())

        lines = [t.lineno for t in tokens if t.type == TokenType.PARAGRAPH_LINE]
        assert lines == [1, 2, 3]

    def test_start_lineno_offsets_every_token(self) -> None:
        tokens = list(Lexer("a\nb", start_lineno=10).tokenize())

        assert [t.lineno for t in tokens[:2]] == [10, 11]

    def test_source_file_is_carried(self) -> None:
        token = next(iter(Lexer("x", "notes.md").tokenize()))

        assert token.location.source_file == "notes.md"
        assert str(token.location) == "notes.md:1:1"


class TestNodeLocations:
    def test_block_locations(self) -> None:
        doc = parse("# One\n\ntext\n\n---")

        heading, para, rule = doc.children
        assert heading.location.lineno == 1
        assert para.location.lineno == 3
        assert rule.location.lineno == 5

    def test_nested_blocks_keep_document_line_numbers(self) -> None:
        doc = parse("intro\n\n> quoted\n>\n> second")

        quote = doc.children[1]
        first, second = quote.children
        assert quote.location.lineno == 3
        assert first.location.lineno == 3
        assert second.location.lineno == 5

    def test_list_items_keep_line_numbers(self) -> None:
        doc = parse("- a\n- b\n  - c")

        outer = doc.children[0]
        assert [item.location.lineno for item in outer.items] == [1, 2]
        inner = outer.items[1].children[1]
        assert inner.items[0].location.lineno == 3

    def test_inline_location_points_into_line(self) -> None:
        doc = parse("plain *em*")

        emphasis = doc.children[0].children[1]
        assert emphasis.location.lineno == 1
        assert emphasis.location.col_offset == 7

    def test_document_spans_whole_source(self) -> None:
        source = "a\n\nb"
        doc = parse(source, source_file="doc.md")

        assert doc.location.offset == 0
        assert doc.location.end_offset == len(source)
        assert doc.location.source_file == "doc.md"
