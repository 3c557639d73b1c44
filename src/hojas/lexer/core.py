"""Line-oriented block lexer.

Implements a window-based approach: find the end of the line, classify it,
then commit. Every step advances by one line, so lexing is O(n) and always
terminates. No regex in the hot path.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from hojas.config import get_parse_config
from hojas.features import FeatureRegistry
from hojas.lexer.classifiers import (
    DefinitionClassifierMixin,
    FenceClassifierMixin,
    FootnoteClassifierMixin,
    HeadingClassifierMixin,
    LinkRefClassifierMixin,
    ListClassifierMixin,
    QuoteClassifierMixin,
    ThematicClassifierMixin,
)
from hojas.lexer.modes import LexerMode
from hojas.lexer.scanners import BlockScannerMixin, FenceScannerMixin
from hojas.tokens import Token, TokenType
from hojas.utils.text import normalize_newlines


class Lexer(
    # Classifiers (pure logic, no position mutation)
    HeadingClassifierMixin,
    FenceClassifierMixin,
    ThematicClassifierMixin,
    QuoteClassifierMixin,
    ListClassifierMixin,
    FootnoteClassifierMixin,
    LinkRefClassifierMixin,
    DefinitionClassifierMixin,
    # Scanners (mode-specific scanning logic)
    BlockScannerMixin,
    FenceScannerMixin,
):
    """Block lexer producing one or two tokens per line.

    Usage:
        >>> lexer = Lexer("# Hello\\n\\nWorld")
        >>> for token in lexer.tokenize():
        ...     print(token)
        Token(ATX_HEADING, '# Hello', 1:1)
        Token(BLANK_LINE, '', 2:1)
        Token(PARAGRAPH_LINE, 'World', 3:1)
        Token(EOF, '', 3:6)

    Features are read from the active ParseConfig unless given explicitly.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_mode",
        "_source_file",
        "_features",
        "_max_depth",
        "_fence_char",
        "_fence_count",
        "_fence_indent",
        "_line_start",
        "_line_end",
        "_line_lineno",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        *,
        start_lineno: int = 1,
        start_pos: int = 0,
        features: FeatureRegistry | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Markdown source text (newlines are normalized)
            source_file: Optional source file path for locations
            start_lineno: Line number of the first lexed line (nested parsers
                lex container content that starts further down the document)
            start_pos: Offset to start lexing from
            features: Enabled features (default: from the active ParseConfig)
        """
        self._source = normalize_newlines(source)
        self._source_len = len(self._source)
        self._pos = start_pos
        self._lineno = start_lineno
        self._mode = LexerMode.BLOCK
        self._source_file = source_file
        self._features = features if features is not None else get_parse_config().features
        self._max_depth = get_parse_config().max_nesting_depth

        # Fenced code state
        self._fence_char = ""
        self._fence_count = 0
        self._fence_indent = 0

        # Current line window
        self._line_start = start_pos
        self._line_end = start_pos
        self._line_lineno = start_lineno

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream ending with exactly one EOF.

        Yields:
            Token objects one at a time
        """
        source_len = self._source_len
        while self._pos < source_len:
            yield from self._dispatch_mode()

        self._line_start = self._line_end = self._pos
        self._line_lineno = self._lineno
        yield self._make_token(TokenType.EOF, "", self._pos)

    def _dispatch_mode(self) -> Iterator[Token]:
        if self._mode == LexerMode.BLOCK:
            yield from self._scan_block()
        else:
            yield from self._scan_code_fence_content()

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _find_line_end(self) -> int:
        """Position of the next ``\\n`` or end of source."""
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _begin_line(self, line_start: int, line_end: int) -> None:
        """Record the window tokens of this line are created against."""
        self._line_start = line_start
        self._line_end = line_end
        self._line_lineno = self._lineno

    def _commit_to(self, line_end: int) -> None:
        """Advance past ``line_end`` and its newline, if any."""
        self._pos = line_end
        if self._pos < self._source_len and self._source[self._pos] == "\n":
            self._pos += 1
            self._lineno += 1

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        end_pos: int | None = None,
        line_indent: int = 0,
    ) -> Token:
        """Create a token on the current line window."""
        line_begin = self._source.rfind("\n", 0, start_pos) + 1
        return Token(
            type=token_type,
            value=value,
            lineno=self._line_lineno,
            col=start_pos - line_begin + 1,
            start_offset=start_pos,
            end_offset=end_pos if end_pos is not None else self._line_end,
            line_indent=line_indent,
            source_file=self._source_file,
        )


def tokenize(source: str, source_file: str | None = None) -> list[Token]:
    """Tokenize ``source`` with the active configuration.

    A fresh Lexer per call, so repeated calls on the same input give equal
    token lists.
    """
    return list(Lexer(source, source_file).tokenize())
