"""Table parsing for the block parser.

Handles GFM pipe tables. Tables have no token kinds of their own: a
paragraph line followed by a delimiter row with the same cell count starts
a table.
"""

from __future__ import annotations

from hojas.location import SourceLocation
from hojas.nodes import Alignment, InlineSpan, Table, TableCell, TableRow
from hojas.tokens import Token, TokenType


def split_table_cells(line: str) -> list[tuple[str, int]] | None:
    """Split a table row into (cell text, offset) pairs.

    Leading and trailing pipes are optional; ``\\|`` is a literal pipe.
    The offset indexes ``line`` at the first non-blank character of the
    cell (or where the cell starts, when it is blank).

    Returns:
        Stripped cell contents with offsets, or None if the line has no pipe.
    """
    if "|" not in line:
        return None

    start = len(line) - len(line.lstrip())
    end = len(line.rstrip())
    if line.startswith("|", start):
        start += 1
    if end > start and line[end - 1] == "|" and line[end - 2 : end] != "\\|":
        end -= 1

    cells: list[tuple[str, int]] = []
    current_cell: list[str] = []
    cell_start = start
    i = start
    while i < end:
        if line[i] == "\\" and i + 1 < end and line[i + 1] == "|":
            current_cell.append("|")
            i += 2
        elif line[i] == "|":
            cells.append(_finish_cell(current_cell, cell_start))
            current_cell = []
            i += 1
            cell_start = i
        else:
            current_cell.append(line[i])
            i += 1

    cells.append(_finish_cell(current_cell, cell_start))
    return cells


def _finish_cell(chars: list[str], cell_start: int) -> tuple[str, int]:
    text = "".join(chars)
    stripped = text.lstrip()
    return stripped.rstrip(), cell_start + len(text) - len(stripped)


def split_table_row(line: str) -> list[str] | None:
    """Split a table row into raw cell texts.

    Leading and trailing pipes are optional; ``\\|`` is a literal pipe.

    Returns:
        Cell contents (stripped), or None if the line has no pipe.
    """
    cells = split_table_cells(line)
    if cells is None:
        return None
    return [text for text, _ in cells]


def parse_table_delimiter(line: str) -> tuple[Alignment, ...] | None:
    """Parse a delimiter row such as ``|:---|:---:|---:|``.

    Returns:
        One alignment per column ('left', 'center', 'right' or None), or
        None if the line is not a delimiter row.
    """
    line = line.strip()
    if "-" not in line:
        return None

    if line.startswith("|"):
        line = line[1:]
    if line.endswith("|"):
        line = line[:-1]

    alignments: list[Alignment] = []
    for part in line.split("|"):
        part = part.strip()
        has_left_colon = part.startswith(":")
        has_right_colon = len(part) > 1 and part.endswith(":")

        inner = part
        if has_left_colon:
            inner = inner[1:]
        if has_right_colon:
            inner = inner[:-1]

        if not inner or not all(c == "-" for c in inner):
            return None

        if has_left_colon and has_right_colon:
            alignments.append("center")
        elif has_left_colon:
            alignments.append("left")
        elif has_right_colon:
            alignments.append("right")
        else:
            alignments.append(None)

    return tuple(alignments) if alignments else None


class TableParsingMixin:
    """Mixin for GFM table parsing.

    Required Host Attributes:
        - _current: Token | None

    Required Host Methods:
        - _at_end(), _advance(), _peek(offset)

    """

    _current: Token | None

    def _at_end(self) -> bool:
        raise NotImplementedError

    def _advance(self) -> Token | None:
        raise NotImplementedError

    def _peek(self, offset: int = 1) -> Token | None:
        raise NotImplementedError

    def _starts_table(self) -> bool:
        """Whether the current line is a header row followed by a delimiter row."""
        header = self._current
        delimiter = self._peek()
        if (
            header is None
            or delimiter is None
            or header.type != TokenType.PARAGRAPH_LINE
            or delimiter.type != TokenType.PARAGRAPH_LINE
            or delimiter.lineno != header.lineno + 1
        ):
            return False

        cells = split_table_row(header.value)
        if cells is None:
            return False
        alignments = parse_table_delimiter(delimiter.value)
        return alignments is not None and len(alignments) == len(cells)

    def _parse_table(self) -> Table:
        """Parse a table starting at the current (header) token.

        Every row gets exactly the header's cell count: short rows are
        padded with empty cells, long rows are truncated.
        """
        header = self._current
        assert header is not None
        header_cells = split_table_cells(header.value) or []
        self._advance()
        delimiter = self._current
        assert delimiter is not None
        alignments = parse_table_delimiter(delimiter.value) or ()
        self._advance()

        head_row = self._build_row(header, header_cells, alignments, is_header=True)

        body_rows: list[TableRow] = []
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type != TokenType.PARAGRAPH_LINE:
                break
            cells = split_table_cells(token.value)
            if cells is None:
                break
            body_rows.append(self._build_row(token, cells, alignments, is_header=False))
            self._advance()

        return Table(
            location=header.location,
            head=(head_row,),
            body=tuple(body_rows),
            alignments=alignments,
        )

    def _build_row(
        self,
        token: Token,
        cells: list[tuple[str, int]],
        alignments: tuple[Alignment, ...],
        *,
        is_header: bool,
    ) -> TableRow:
        location = token.location
        width = len(alignments)
        # Padding cells sit at the end of the row
        cells = cells[:width] + [("", len(token.value))] * (width - len(cells))
        row_cells: list[TableCell] = []
        for i, (cell, offset) in enumerate(cells):
            cell_location = SourceLocation(
                lineno=location.lineno,
                col_offset=location.col_offset + offset,
                offset=location.offset + offset,
                end_offset=location.offset + offset + len(cell),
                end_lineno=location.lineno,
                end_col_offset=location.col_offset + offset + len(cell),
                source_file=location.source_file,
            )
            row_cells.append(
                TableCell(
                    location=cell_location,
                    children=(InlineSpan(location=cell_location, raw=cell),) if cell else (),
                    is_header=is_header,
                    align=alignments[i],
                )
            )
        return TableRow(location=location, cells=tuple(row_cells), is_header=is_header)
