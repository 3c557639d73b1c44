"""Fenced code mode scanner mixin."""

from collections.abc import Iterator

from hojas.lexer.modes import LexerMode
from hojas.tokens import Token, TokenType


class FenceScannerMixin:
    """Mixin providing fenced code mode scanning logic.

    Every line is content until the closing fence. At end of input the
    lexer simply stops; the block parser closes the block implicitly.

    """

    # These will be set by the Lexer class
    _source: str
    _pos: int
    _mode: LexerMode
    _fence_char: str
    _fence_count: int
    _fence_indent: int

    def _find_line_end(self) -> int:
        raise NotImplementedError

    def _begin_line(self, line_start: int, line_end: int) -> None:
        raise NotImplementedError

    def _commit_to(self, line_end: int) -> None:
        raise NotImplementedError

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        end_pos: int | None = None,
        line_indent: int = 0,
    ) -> Token:
        raise NotImplementedError

    def _is_closing_fence(self, line: str) -> bool:
        raise NotImplementedError

    def _scan_code_fence_content(self) -> Iterator[Token]:
        """Scan one line inside a fenced code block.

        Yields:
            FENCED_CODE_CONTENT (the raw line), or FENCED_CODE_END when the
            closing fence is found.
        """
        line_start = self._pos
        line_end = self._find_line_end()
        line = self._source[line_start:line_end]
        self._begin_line(line_start, line_end)
        self._commit_to(line_end)

        if self._is_closing_fence(line):
            self._mode = LexerMode.BLOCK
            self._fence_char = ""
            self._fence_count = 0
            self._fence_indent = 0
            yield self._make_token(TokenType.FENCED_CODE_END, line.strip(), line_start)
            return

        yield self._make_token(TokenType.FENCED_CODE_CONTENT, line, line_start)
