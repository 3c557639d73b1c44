"""Token navigation for the block parser.

Provides the mixin for token stream traversal plus the line bookkeeping the
container collectors need (raw line access and locations by line).
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from hojas.location import SourceLocation
from hojas.tokens import Token, TokenType


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _pos: int
        - _current: Token | None
        - _lines: list[str] (source split on newlines)
        - _line_offsets: list[int] (offset of each line in the source)
        - _start_lineno: int (line number of ``_lines[0]``)
        - _source_file: str | None

    """

    _tokens: Sequence[Token]
    _pos: int
    _current: Token | None
    _lines: list[str]
    _line_offsets: list[int]
    _start_lineno: int
    _source_file: str | None

    def _at_end(self) -> bool:
        """Check if at end of token stream."""
        return self._current is None or self._current.type == TokenType.EOF

    def _advance(self) -> Token | None:
        """Advance to next token and return it."""
        self._pos += 1
        if self._pos < len(self._tokens):
            self._current = self._tokens[self._pos]
        else:
            self._current = None
        return self._current

    def _peek(self, offset: int = 1) -> Token | None:
        """Peek at token at offset from current position."""
        pos = self._pos + offset
        if pos < len(self._tokens):
            return self._tokens[pos]
        return None

    def _skip_line(self, lineno: int) -> None:
        """Advance past every token on line ``lineno``."""
        while not self._at_end() and self._current is not None and self._current.lineno == lineno:
            self._advance()

    # =========================================================================
    # Raw lines
    # =========================================================================

    def _has_line(self, lineno: int) -> bool:
        return 0 <= lineno - self._start_lineno < len(self._lines)

    def _lines_from(self, lineno: int) -> Iterator[str]:
        """Raw source lines from ``lineno`` to the end."""
        while self._has_line(lineno):
            yield self._raw_line(lineno)
            lineno += 1

    def _raw_line(self, lineno: int) -> str:
        """Source line ``lineno`` without its newline ("" past the end)."""
        idx = lineno - self._start_lineno
        if 0 <= idx < len(self._lines):
            return self._lines[idx]
        return ""

    def _line_location(self, lineno: int, col: int = 0) -> SourceLocation:
        """Location of column ``col`` (0-based) on line ``lineno``."""
        idx = lineno - self._start_lineno
        offset = self._line_offsets[idx] + col if 0 <= idx < len(self._line_offsets) else 0
        line_len = len(self._lines[idx]) if 0 <= idx < len(self._lines) else 0
        return SourceLocation(
            lineno=lineno,
            col_offset=col + 1,
            offset=offset,
            end_offset=offset + max(line_len - col, 0),
            end_lineno=lineno,
            end_col_offset=line_len + 1,
            source_file=self._source_file,
        )
