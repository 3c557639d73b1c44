"""Pipe tables."""

from hojas import Emphasis, Paragraph, Table, parse
from hojas.parsing.blocks.table import split_table_cells


def _cell_text(cell) -> str:  # type: ignore[no-untyped-def]
    return "".join(getattr(child, "content", "") for child in cell.children)


class TestTableStructure:
    def test_header_and_body(self) -> None:
        doc = parse("| Name | Qty |\n| ---- | --- |\n| pear | 3 |\n| fig | 10 |")

        table = doc.children[0]
        assert isinstance(table, Table)
        assert len(table.head) == 1
        assert [_cell_text(c) for c in table.head[0].cells] == ["Name", "Qty"]
        assert [[_cell_text(c) for c in row.cells] for row in table.body] == [
            ["pear", "3"],
            ["fig", "10"],
        ]

    def test_header_flags(self) -> None:
        table = parse("| a |\n| - |\n| 1 |").children[0]

        assert table.head[0].is_header
        assert all(cell.is_header for cell in table.head[0].cells)
        assert not table.body[0].is_header
        assert not table.body[0].cells[0].is_header

    def test_outer_pipes_are_optional(self) -> None:
        table = parse("a | b\n--|--\n1 | 2").children[0]

        assert isinstance(table, Table)
        assert [_cell_text(c) for c in table.body[0].cells] == ["1", "2"]

    def test_header_only_table(self) -> None:
        table = parse("| a | b |\n|---|---|").children[0]

        assert isinstance(table, Table)
        assert table.body == ()


class TestAlignment:
    def test_alignments(self) -> None:
        table = parse("| l | c | r | n |\n|:--|:-:|--:|---|\n| 1 | 2 | 3 | 4 |").children[0]

        assert table.alignments == ("left", "center", "right", None)
        assert [c.align for c in table.body[0].cells] == ["left", "center", "right", None]
        assert [c.align for c in table.head[0].cells] == ["left", "center", "right", None]


class TestRowShape:
    def test_short_rows_are_padded(self) -> None:
        table = parse("| a | b | c |\n|---|---|---|\n| 1 |").children[0]

        cells = table.body[0].cells
        assert len(cells) == 3
        assert cells[1].children == ()
        assert cells[2].children == ()

    def test_long_rows_are_truncated(self) -> None:
        table = parse("| a | b |\n|---|---|\n| 1 | 2 | 3 | 4 |").children[0]

        assert [_cell_text(c) for c in table.body[0].cells] == ["1", "2"]

    def test_empty_cell_has_no_children(self) -> None:
        table = parse("| a | b |\n|---|---|\n|  | x |").children[0]

        assert table.body[0].cells[0].children == ()

    def test_delimiter_count_must_match_header(self) -> None:
        doc = parse("| a | b |\n|---|\n| 1 | 2 |")

        assert isinstance(doc.children[0], Paragraph)


class TestCellContent:
    def test_escaped_pipe_is_literal(self) -> None:
        table = parse("| expr |\n|------|\n| a \\| b |").children[0]

        assert _cell_text(table.body[0].cells[0]) == "a | b"

    def test_cells_hold_inline_markup(self) -> None:
        table = parse("| *x* |\n|-----|\n| y |").children[0]

        assert isinstance(table.head[0].cells[0].children[0], Emphasis)


class TestCellLocations:
    def test_cells_report_their_own_columns(self) -> None:
        table = parse("| Name | Qty |\n| ---- | --- |\n| pear | 3 |").children[0]

        head = table.head[0].cells
        body = table.body[0].cells
        assert [(c.location.lineno, c.location.col_offset) for c in head] == [(1, 3), (1, 10)]
        assert [(c.location.lineno, c.location.col_offset) for c in body] == [(3, 3), (3, 10)]

    def test_cell_text_points_into_its_cell(self) -> None:
        table = parse("a | *b*\n--|--\n1 | 2").children[0]

        emphasis = table.head[0].cells[1].children[0]
        assert isinstance(emphasis, Emphasis)
        assert emphasis.location.col_offset == 5
        assert emphasis.children[0].location.col_offset == 6

    def test_split_offsets(self) -> None:
        assert split_table_cells("|  a | b\\|c |") == [("a", 3), ("b|c", 7)]
        assert split_table_cells("x|") == [("x", 0)]
        assert split_table_cells("plain") is None


class TestTableBoundaries:
    def test_blank_line_ends_table(self) -> None:
        doc = parse("| a |\n|---|\n| 1 |\n\nafter")

        assert [type(b) for b in doc.children] == [Table, Paragraph]
        assert len(doc.children[0].body) == 1

    def test_line_without_pipe_ends_table(self) -> None:
        doc = parse("| a |\n|---|\n| 1 |\nplain")

        assert [type(b) for b in doc.children] == [Table, Paragraph]

    def test_table_inside_quote(self) -> None:
        doc = parse("> | a |\n> |---|\n> | 1 |")

        assert isinstance(doc.children[0].children[0], Table)
