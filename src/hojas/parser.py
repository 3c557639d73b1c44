"""Block parser producing the block skeleton of a document.

Consumes the token stream from Lexer and builds immutable block nodes.
Inline content is left as InlineSpan placeholders; the assembler resolves
them once every link reference definition in the document is known.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal and raw line access
- `BlockParsingMixin`: Block-level content (paragraphs, lists, tables)

Container content (block quotes, list items, footnotes, definitions) is
parsed by a sub-parser one nesting level deeper. Sub-parsers share the
document's link reference table and diagnostic sink.

Thread Safety:
- Parser produces immutable nodes (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Parser instances are single-use; create one per parse

"""

from __future__ import annotations

from hojas.config import get_parse_config
from hojas.diagnostics import DiagnosticCode, DiagnosticSink
from hojas.lexer import Lexer
from hojas.location import SourceLocation
from hojas.nodes import Block, InlineSpan, Paragraph
from hojas.parsing.blocks import BlockParsingMixin
from hojas.parsing.token_nav import TokenNavigationMixin
from hojas.tokens import Token, TokenType
from hojas.utils.logger import get_logger
from hojas.utils.text import normalize_newlines

logger = get_logger(__name__)


class Parser(
    TokenNavigationMixin,
    BlockParsingMixin,
):
    """Block parser for Markdown.

    Usage:
        >>> parser = Parser("# Hello\\n\\nWorld")
        >>> blocks = parser.parse()
        >>> blocks[0]
        Heading(level=1, children=(InlineSpan(raw='Hello', ...),), ...)

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokens",
        "_pos",
        "_current",
        "_lines",
        "_line_offsets",
        "_start_lineno",
        "_depth",
        "_features",
        "_max_depth",
        "_link_refs",
        "_diagnostics",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        *,
        start_lineno: int = 1,
        depth: int = 0,
        link_refs: dict[str, tuple[str, str | None]] | None = None,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.

        Args:
            source: Markdown source text
            source_file: Optional source file path for locations
            start_lineno: Line number of the first source line
            depth: Container nesting depth (0 for a document)
            link_refs: Shared link reference table (label -> (url, title))
            diagnostics: Shared diagnostic sink

        """
        config = get_parse_config()
        self._source = normalize_newlines(source)
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._pos = 0
        self._current: Token | None = None

        self._lines = self._source.split("\n")
        offsets = []
        offset = 0
        for line in self._lines:
            offsets.append(offset)
            offset += len(line) + 1
        self._line_offsets = offsets
        self._start_lineno = start_lineno

        self._depth = depth
        self._features = config.features
        self._max_depth = config.max_nesting_depth

        # Link reference definitions: normalized label -> (url, title)
        self._link_refs = link_refs if link_refs is not None else {}
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticSink()

    @property
    def link_refs(self) -> dict[str, tuple[str, str | None]]:
        """Link reference definitions collected so far."""
        return self._link_refs

    @property
    def diagnostics(self) -> DiagnosticSink:
        return self._diagnostics

    def parse(self) -> tuple[Block, ...]:
        """Parse source into block nodes.

        Returns:
            Tuple of Block nodes with InlineSpan placeholders for inline text
        """
        lexer = Lexer(
            self._source,
            self._source_file,
            start_lineno=self._start_lineno,
            features=self._features,
        )
        self._tokens = list(lexer.tokenize())
        self._pos = 0
        self._current = self._tokens[0] if self._tokens else None

        blocks: list[Block] = []
        while not self._at_end():
            block = self._parse_block()
            if block is not None:
                blocks.append(block)

        return tuple(blocks)

    def _parse_nested_content(
        self, lines: list[str], first_lineno: int, location: SourceLocation
    ) -> tuple[Block, ...]:
        """Parse container content as blocks one nesting level deeper.

        Beyond the configured depth the content is not parsed: it is kept as
        one literal paragraph and NESTING_LIMIT is reported.

        Args:
            lines: Content lines with the container's marker or indent removed
            first_lineno: Source line number of ``lines[0]``
            location: Location of the container (for diagnostics)

        """
        content = "\n".join(lines)
        if not content.strip():
            return ()

        if self._depth + 1 > self._max_depth:
            self._diagnostics.report(
                DiagnosticCode.NESTING_LIMIT,
                f"blocks nested deeper than {self._max_depth} levels are kept as text",
                location,
            )
            span = InlineSpan(location=location, raw=content.strip(), literal=True)
            return (Paragraph(location=location, children=(span,)),)  # type: ignore[arg-type]

        # Config is inherited automatically via ContextVar
        sub_parser = Parser(
            content,
            self._source_file,
            start_lineno=first_lineno,
            depth=self._depth + 1,
            link_refs=self._link_refs,
            diagnostics=self._diagnostics,
        )
        return sub_parser.parse()

    def _resume_at_line(self, lineno: int) -> None:
        """Skip the tokens of lines a container consumed from raw source.

        A fence opened inside a container leaves this parser's lexer in code
        mode when the container ends before the fence closes. The remaining
        lines are then lexed again from ``lineno`` in block mode.
        """
        while not self._at_end() and self._current is not None and self._current.lineno < lineno:
            self._advance()

        current = self._current
        if current is None or current.type not in (
            TokenType.FENCED_CODE_CONTENT,
            TokenType.FENCED_CODE_END,
        ):
            return

        lexer = Lexer(
            self._source,
            self._source_file,
            start_lineno=lineno,
            start_pos=self._line_offsets[lineno - self._start_lineno],
            features=self._features,
        )
        self._tokens = list(lexer.tokenize())
        self._pos = 0
        self._current = self._tokens[0] if self._tokens else None


def parse_blocks(source: str, *, source_file: str | None = None) -> tuple[Block, ...]:
    """Parse ``source`` into block nodes with the active configuration.

    Inline content stays as InlineSpan placeholders; use ``hojas.parse``
    for a fully assembled Document.
    """
    parser = Parser(source, source_file)
    blocks = parser.parse()
    logger.debug("parsed %d top-level blocks from %s", len(blocks), source_file or "<string>")
    return blocks
