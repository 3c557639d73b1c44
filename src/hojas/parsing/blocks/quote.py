"""Block quote parsing for the block parser."""

from __future__ import annotations

from hojas.features import FeatureRegistry
from hojas.lexer.classifiers import strip_quote_marker
from hojas.location import SourceLocation
from hojas.nodes import Block, BlockQuote
from hojas.parsing.containers import ContentTracker
from hojas.tokens import Token
from hojas.utils.text import expand_indent


class BlockQuoteParsingMixin:
    """Mixin for block quotes.

    A quote runs over consecutive ``>`` lines plus lazy continuation lines
    of an open paragraph. Its content, with one marker level removed, is
    parsed by a nested parser, so quotes nest to any depth up to the
    nesting limit.

    Required Host Attributes:
        - _features: FeatureRegistry
        - _current: Token | None

    Required Host Methods:
        - _has_line(lineno), _raw_line(lineno), _line_location(lineno, col)
        - _resume_at_line(lineno)
        - _parse_nested_content(lines, first_lineno, location)

    """

    _features: FeatureRegistry
    _current: Token | None

    def _has_line(self, lineno: int) -> bool:
        raise NotImplementedError

    def _raw_line(self, lineno: int) -> str:
        raise NotImplementedError

    def _line_location(self, lineno: int, col: int = 0) -> SourceLocation:
        raise NotImplementedError

    def _resume_at_line(self, lineno: int) -> None:
        raise NotImplementedError

    def _parse_nested_content(
        self, lines: list[str], first_lineno: int, location: SourceLocation
    ) -> tuple[Block, ...]:
        raise NotImplementedError

    def _parse_block_quote(self) -> BlockQuote:
        start = self._current
        assert start is not None
        first_lineno = start.lineno

        lines: list[str] = []
        tracker = ContentTracker()
        lineno = first_lineno
        while self._has_line(lineno):
            raw = self._raw_line(lineno)
            indent, pos = expand_indent(raw)
            if indent < 4 and raw[pos:].startswith(">"):
                content = strip_quote_marker(raw[pos:], indent)
            elif tracker.accepts_lazy(raw, self._features):
                content = raw.lstrip()
            else:
                break
            lines.append(content)
            tracker.feed(content)
            lineno += 1

        self._resume_at_line(lineno)
        location = start.location.span_to(self._line_location(lineno - 1))
        return BlockQuote(
            location=location,
            children=self._parse_nested_content(lines, first_lineno, location),
        )
