"""Core block parsing: dispatch, headings, code, rules and paragraphs."""

from __future__ import annotations

from hojas.diagnostics import DiagnosticCode, DiagnosticSink
from hojas.features import Feature, FeatureRegistry
from hojas.lexer.classifiers import parse_link_reference_definition, parse_list_marker
from hojas.location import SourceLocation
from hojas.nodes import (
    Block,
    CodeBlock,
    Heading,
    HorizontalRule,
    InlineSpan,
    Paragraph,
)
from hojas.parsing.inline.links import process_escapes
from hojas.tokens import Token, TokenType
from hojas.utils.text import strip_columns


def _extract_explicit_id(content: str) -> tuple[str, str | None]:
    """Split a trailing ``{#custom-id}`` off heading content.

    The ``{#id}`` must end the content and be preceded by whitespace. The id
    starts with a letter and holds only letters, digits, ``-`` and ``_``.

    Returns:
        (content_without_id, explicit_id or None)

    Example:
        >>> _extract_explicit_id("Install {#setup}")
        ('Install', 'setup')
    """
    if not content.endswith("}"):
        return content, None

    brace_pos = content.rfind("{#")
    if brace_pos == -1:
        return content, None
    if brace_pos > 0 and content[brace_pos - 1] not in " \t":
        return content, None

    explicit_id = content[brace_pos + 2 : -1]
    if not explicit_id or not explicit_id[0].isalpha():
        return content, None
    if not all(char.isalnum() or char in "-_" for char in explicit_id):
        return content, None

    return content[:brace_pos].rstrip(), explicit_id


def span_location(token: Token, skip: int = 0) -> SourceLocation:
    """Location of the text starting ``skip`` characters into ``token``."""
    return SourceLocation(
        lineno=token.lineno,
        col_offset=token.col + skip,
        offset=token.start_offset + skip,
        end_offset=token.end_offset,
        end_lineno=token.lineno,
        end_col_offset=token.col + (token.end_offset - token.start_offset),
        source_file=token.source_file,
    )


class BlockParsingCoreMixin:
    """Core block parsing methods.

    Required Host Attributes:
        - _features: FeatureRegistry
        - _link_refs: dict[str, tuple[str, str | None]]
        - _diagnostics: DiagnosticSink
        - _current: Token | None

    Required Host Methods:
        - _at_end(), _advance(), _peek(offset), _skip_line(lineno), _raw_line(lineno)

    Container and table methods (_parse_block_quote, _parse_list,
    _parse_footnote_def, _starts_table, _parse_table, _parse_definition_list)
    come from the sibling mixins combined in BlockParsingMixin.

    """

    _features: FeatureRegistry
    _link_refs: dict[str, tuple[str, str | None]]
    _diagnostics: DiagnosticSink
    _current: Token | None

    def _at_end(self) -> bool:
        raise NotImplementedError

    def _advance(self) -> Token | None:
        raise NotImplementedError

    def _peek(self, offset: int = 1) -> Token | None:
        raise NotImplementedError

    def _skip_line(self, lineno: int) -> None:
        raise NotImplementedError

    def _raw_line(self, lineno: int) -> str:
        raise NotImplementedError

    def _parse_block(self) -> Block | None:
        """Parse a single block element (None for lines that produce no node)."""
        if self._at_end():
            return None

        token = self._current
        assert token is not None

        match token.type:
            case TokenType.BLANK_LINE:
                self._advance()
                return None

            case TokenType.ATX_HEADING:
                return self._parse_atx_heading()

            case TokenType.FENCED_CODE_START:
                return self._parse_fenced_code()

            case TokenType.THEMATIC_BREAK:
                self._advance()
                return HorizontalRule(location=token.location)

            case TokenType.BLOCK_QUOTE_MARKER:
                return self._parse_block_quote()

            case TokenType.LIST_ITEM_MARKER:
                return self._parse_list()

            case TokenType.INDENTED_CODE:
                return self._parse_indented_code()

            case TokenType.FOOTNOTE_DEF:
                return self._parse_footnote_def()

            case TokenType.LINK_REFERENCE_DEF:
                self._register_link_reference(token)
                self._advance()
                return None

            case TokenType.FENCED_CODE_CONTENT | TokenType.FENCED_CODE_END:
                return self._parse_orphaned_fence_lines()

            case TokenType.PARAGRAPH_LINE if (
                Feature.TABLE in self._features.enabled and self._starts_table()
            ):
                return self._parse_table()

            case _:
                return self._parse_paragraph()

    def _register_link_reference(self, token: Token) -> None:
        """Record a ``[label]: url "title"`` definition; the first one wins."""
        parsed = parse_link_reference_definition(token.value)
        if parsed is None:
            return
        label, url, title = parsed
        if label not in self._link_refs:
            self._link_refs[label] = (
                process_escapes(url),
                process_escapes(title) if title is not None else None,
            )

    def _parse_atx_heading(self) -> Heading:
        """Parse an ATX heading, capturing a ``{#id}`` suffix when heading-id is on."""
        token = self._current
        assert token is not None and token.type == TokenType.ATX_HEADING
        self._advance()

        value = token.value
        level = len(value) - len(value.lstrip("#"))
        content = value[level:].strip()

        explicit_id = None
        if Feature.HEADING_ID in self._features.enabled:
            content, explicit_id = _extract_explicit_id(content)

        span = InlineSpan(location=span_location(token, level + 1), raw=content)
        return Heading(
            location=token.location,
            level=level,  # type: ignore[arg-type]
            children=(span,),  # type: ignore[arg-type]
            explicit_id=explicit_id,
        )

    def _parse_fenced_code(self) -> CodeBlock:
        """Parse a fenced code block.

        Content lines lose up to the fence's own indentation. At end of input
        the block closes implicitly and UNTERMINATED_FENCE is reported.
        """
        start_token = self._current
        assert start_token is not None and start_token.type == TokenType.FENCED_CODE_START
        self._advance()

        value = start_token.value
        fence_char = value[0]
        fence_len = len(value) - len(value.lstrip(fence_char))
        info = value[fence_len:].strip()
        language = process_escapes(info.split()[0]) if info else None

        lines: list[str] = []
        closed = False
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type == TokenType.FENCED_CODE_CONTENT:
                lines.append(strip_columns(token.value, start_token.line_indent))
                self._advance()
            elif token.type == TokenType.FENCED_CODE_END:
                closed = True
                self._advance()
                break
            else:
                break

        if not closed:
            self._diagnostics.report(
                DiagnosticCode.UNTERMINATED_FENCE,
                f"code fence {fence_char * fence_len} opened here is never closed",
                start_token.location,
            )

        return CodeBlock(
            location=start_token.location,
            code="\n".join(lines),
            language=language,
            fenced=True,
        )

    def _parse_indented_code(self) -> CodeBlock:
        """Parse an indented code block; inner blank lines are kept."""
        start_token = self._current
        assert start_token is not None and start_token.type == TokenType.INDENTED_CODE

        lines: list[str] = []
        pending_blanks: list[str] = []
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type == TokenType.INDENTED_CODE:
                lines.extend(pending_blanks)
                pending_blanks = []
                lines.append(token.value)
                self._advance()
            elif token.type == TokenType.BLANK_LINE:
                pending_blanks.append(strip_columns(self._raw_line(token.lineno), 4))
                self._advance()
            else:
                break

        return CodeBlock(location=start_token.location, code="\n".join(lines), fenced=False)

    def _parse_orphaned_fence_lines(self) -> Paragraph:
        """Keep stray fence lines as literal text."""
        start_token = self._current
        assert start_token is not None

        lines: list[str] = []
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type not in (TokenType.FENCED_CODE_CONTENT, TokenType.FENCED_CODE_END):
                break
            lines.append(token.value)
            self._advance()

        raw = "\n".join(lines).strip()
        span = InlineSpan(location=start_token.location, raw=raw, literal=True)
        return Paragraph(location=start_token.location, children=(span,))  # type: ignore[arg-type]

    # =========================================================================
    # Paragraphs
    # =========================================================================

    def _list_marker_interrupts(self, marker: Token) -> bool:
        """Only a non-empty list item starting at 1 (or a bullet) interrupts a paragraph."""
        following = self._peek()
        if following is None or following.lineno != marker.lineno:
            return False
        parsed = parse_list_marker(marker.value.strip() + " x")
        return parsed is not None and (not parsed.ordered or parsed.start == 1)

    def _parse_paragraph(self) -> Block:
        """Parse consecutive text lines into a Paragraph.

        A paragraph ends at a blank line or any block start. Indented lines,
        link reference definitions and definition markers past the first
        line are continuation text. A single text line followed by a
        ``: definition`` line starts a definition list instead.
        """
        start_token = self._current
        assert start_token is not None

        lines: list[str] = []
        while not self._at_end():
            token = self._current
            assert token is not None

            match token.type:
                case TokenType.PARAGRAPH_LINE:
                    if (
                        lines
                        and Feature.TABLE in self._features.enabled
                        and self._starts_table()
                    ):
                        break
                    lines.append(token.value)
                    self._advance()

                case TokenType.DEFINITION_MARKER:
                    if len(lines) == 1 and start_token.type == TokenType.PARAGRAPH_LINE:
                        return self._parse_definition_list(start_token)
                    lines.append(self._raw_line(token.lineno).strip())
                    self._advance()

                case TokenType.INDENTED_CODE | TokenType.LINK_REFERENCE_DEF if lines:
                    lines.append(self._raw_line(token.lineno).strip())
                    self._advance()

                case TokenType.LIST_ITEM_MARKER if lines and not self._list_marker_interrupts(
                    token
                ):
                    lines.append(self._raw_line(token.lineno).strip())
                    self._skip_line(token.lineno)

                case _ if not lines:
                    # Anything else reaching here is kept as text
                    lines.append(self._raw_line(token.lineno).strip())
                    self._skip_line(token.lineno)

                case _:
                    break

        raw = "\n".join(lines).rstrip()
        span = InlineSpan(location=span_location(start_token), raw=raw)
        return Paragraph(location=start_token.location, children=(span,))  # type: ignore[arg-type]
