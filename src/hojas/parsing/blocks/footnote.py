"""Footnote definition parsing for the block parser."""

from __future__ import annotations

from collections.abc import Iterator

from hojas.features import FeatureRegistry
from hojas.location import SourceLocation
from hojas.nodes import Block, FootnoteDefinition
from hojas.parsing.containers import collect_indented
from hojas.tokens import Token, TokenType


class FootnoteParsingMixin:
    """Mixin for footnote definition parsing.

    Format: ``[^identifier]: content``. Lines indented four columns (and
    lazy paragraph continuations) belong to the definition, so a footnote
    can hold several paragraphs, lists or code.

    Required Host Attributes:
        - _features: FeatureRegistry
        - _current: Token | None

    Required Host Methods:
        - _has_line(lineno), _raw_line(lineno), _lines_from(lineno)
        - _resume_at_line(lineno)
        - _parse_nested_content(lines, first_lineno, location)

    """

    _features: FeatureRegistry
    _current: Token | None

    def _has_line(self, lineno: int) -> bool:
        raise NotImplementedError

    def _raw_line(self, lineno: int) -> str:
        raise NotImplementedError

    def _resume_at_line(self, lineno: int) -> None:
        raise NotImplementedError

    def _parse_nested_content(
        self, lines: list[str], first_lineno: int, location: SourceLocation
    ) -> tuple[Block, ...]:
        raise NotImplementedError

    def _lines_from(self, lineno: int) -> Iterator[str]:
        raise NotImplementedError

    def _parse_footnote_def(self) -> FootnoteDefinition:
        """Parse a footnote definition.

        Token value format: ``identifier:content``.
        """
        token = self._current
        assert token is not None and token.type == TokenType.FOOTNOTE_DEF

        identifier, _, content = token.value.partition(":")
        lines, consumed = collect_indented(
            content, self._lines_from(token.lineno + 1), 4, self._features
        )
        self._resume_at_line(token.lineno + 1 + consumed)

        while lines and not lines[-1].strip():
            lines.pop()
        children = self._parse_nested_content(lines, token.lineno, token.location) if lines else ()
        return FootnoteDefinition(location=token.location, identifier=identifier, children=children)
