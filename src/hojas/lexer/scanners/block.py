"""Block mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator

from hojas.features import Feature, FeatureRegistry
from hojas.parsing.charsets import FENCE_CHARS, THEMATIC_BREAK_CHARS
from hojas.tokens import Token, TokenType
from hojas.utils.text import expand_indent, strip_columns


class BlockScannerMixin:
    """Mixin providing block mode scanning logic.

    Scans for block-level elements using the window approach:
    1. Find end of current line (window)
    2. Classify the line content (pure logic)
    3. Emit token(s) and commit position (always advances)

    Classifiers of disabled features are never consulted, so their syntax
    falls through to PARAGRAPH_LINE and stays literal text.

    """

    # These will be set by the Lexer class
    _source: str
    _pos: int
    _features: FeatureRegistry

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

    # Classifier methods (provided by classifier mixins)
    def _try_classify_fence_start(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_atx_heading(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        raise NotImplementedError

    def _classify_block_quote(self, content: str, line_start: int, indent: int = 0) -> Token:
        raise NotImplementedError

    def _try_classify_thematic_break(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_list_marker(
        self, content: str, line_start: int, indent: int = 0
    ) -> list[Token] | None:
        raise NotImplementedError

    def _try_classify_footnote_def(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_link_reference_def(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_definition_marker(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        raise NotImplementedError

    def _scan_block(self) -> Iterator[Token]:
        """Scan one line in BLOCK mode."""
        line_start = self._pos
        line_end = self._find_line_end()
        line = self._source[line_start:line_end]
        self._begin_line(line_start, line_end)
        self._commit_to(line_end)

        indent, content_start = expand_indent(line)
        content = line[content_start:]
        enabled = self._features.enabled

        if not content.strip():
            yield self._make_token(TokenType.BLANK_LINE, "", line_start)
            return

        if indent >= 4:
            if Feature.CODE in enabled:
                yield self._make_token(
                    TokenType.INDENTED_CODE,
                    strip_columns(line, 4),
                    line_start,
                    line_indent=indent,
                )
            else:
                yield self._make_token(
                    TokenType.PARAGRAPH_LINE, content, line_start + content_start, line_indent=indent
                )
            return

        first = content[0]

        if first in FENCE_CHARS and Feature.FENCED_CODE_BLOCK in enabled:
            token = self._try_classify_fence_start(content, line_start, content_start)
            if token is not None:
                yield token
                return

        if first == "#" and Feature.HEADING in enabled:
            token = self._try_classify_atx_heading(content, line_start, content_start)
            if token is not None:
                yield token
                return

        if first == ">" and Feature.BLOCKQUOTE in enabled:
            yield self._classify_block_quote(content, line_start, content_start)
            return

        if first in THEMATIC_BREAK_CHARS and Feature.HORIZONTAL_RULE in enabled:
            token = self._try_classify_thematic_break(content, line_start, content_start)
            if token is not None:
                yield token
                return

        list_tokens = self._try_classify_list_marker(content, line_start, content_start)
        if list_tokens is not None:
            yield from list_tokens
            return

        if first == "[":
            if Feature.FOOTNOTE in enabled:
                token = self._try_classify_footnote_def(content, line_start, content_start)
                if token is not None:
                    yield token
                    return
            if Feature.LINK in enabled or Feature.IMAGE in enabled:
                token = self._try_classify_link_reference_def(content, line_start, content_start)
                if token is not None:
                    yield token
                    return

        if first == ":" and Feature.DEFINITION_LIST in enabled:
            token = self._try_classify_definition_marker(content, line_start, content_start)
            if token is not None:
                yield token
                return

        yield self._make_token(
            TokenType.PARAGRAPH_LINE, content, line_start + content_start, line_indent=indent
        )
