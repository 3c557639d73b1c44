"""Definition list parsing for the block parser.

Syntax:

    Term
    : First definition
    : Second definition
      continued with two spaces of indent

    Next term
    : Its definition

A term is a single line of text. Blank lines between the definitions of a
term, or between one item and the next term, keep the list going.
"""

from __future__ import annotations

from collections.abc import Iterator

from hojas.features import FeatureRegistry
from hojas.lexer.classifiers import definition_text
from hojas.location import SourceLocation
from hojas.nodes import Block, Definition, DefinitionItem, DefinitionList, InlineSpan
from hojas.parsing.containers import collect_indented, interrupts_paragraph
from hojas.tokens import Token
from hojas.utils.text import expand_indent


class DefinitionListParsingMixin:
    """Mixin for definition lists.

    Required Host Attributes:
        - _features: FeatureRegistry

    Required Host Methods:
        - _has_line(lineno), _raw_line(lineno), _line_location(lineno, col)
        - _lines_from(lineno)
        - _resume_at_line(lineno)
        - _parse_nested_content(lines, first_lineno, location)

    """

    _features: FeatureRegistry

    def _has_line(self, lineno: int) -> bool:
        raise NotImplementedError

    def _raw_line(self, lineno: int) -> str:
        raise NotImplementedError

    def _line_location(self, lineno: int, col: int = 0) -> SourceLocation:
        raise NotImplementedError

    def _lines_from(self, lineno: int) -> Iterator[str]:
        raise NotImplementedError

    def _resume_at_line(self, lineno: int) -> None:
        raise NotImplementedError

    def _parse_nested_content(
        self, lines: list[str], first_lineno: int, location: SourceLocation
    ) -> tuple[Block, ...]:
        raise NotImplementedError

    def _definition_at(self, lineno: int) -> str | None:
        """Text of the ``: definition`` line at ``lineno``, if it is one."""
        if not self._has_line(lineno):
            return None
        raw = self._raw_line(lineno)
        indent, pos = expand_indent(raw)
        if indent >= 4:
            return None
        return definition_text(raw[pos:])

    def _is_term_at(self, lineno: int) -> bool:
        """Whether ``lineno`` holds a term: a text line directly followed by a definition."""
        if not self._has_line(lineno):
            return False
        raw = self._raw_line(lineno)
        if not raw.strip() or expand_indent(raw)[0] >= 4:
            return False
        if interrupts_paragraph(raw, self._features) or self._definition_at(lineno) is not None:
            return False
        return self._definition_at(lineno + 1) is not None

    def _definition_body(self, lineno: int) -> Iterator[str]:
        """Raw lines from ``lineno`` up to the next term of the list."""
        for raw in self._lines_from(lineno):
            if expand_indent(raw)[0] < 2 and self._is_term_at(lineno):
                return
            yield raw
            lineno += 1

    def _parse_definition_list(self, term: Token) -> DefinitionList:
        """Parse a definition list whose first term is ``term``.

        Called by paragraph parsing when the current token is the
        DEFINITION_MARKER on the line after the term.
        """
        items: list[DefinitionItem] = []
        term_lineno = term.lineno
        lineno = term_lineno

        while True:
            term_raw = self._raw_line(term_lineno)
            term_location = self._line_location(term_lineno, expand_indent(term_raw)[1])
            term_text = term_raw.strip()

            definitions: list[Definition] = []
            lineno = term_lineno + 1
            while (text := self._definition_at(lineno)) is not None:
                lines, consumed = collect_indented(
                    text,
                    self._definition_body(lineno + 1),
                    2,
                    self._features,
                    ends_block=lambda raw: definition_text(raw.lstrip()) is not None,
                )
                while lines and not lines[-1].strip():
                    lines.pop()
                location = self._line_location(lineno)
                definitions.append(
                    Definition(
                        location=location,
                        children=self._parse_nested_content(lines, lineno, location),
                    )
                )
                lineno += 1 + consumed

            items.append(
                DefinitionItem(
                    location=term_location,
                    term=(InlineSpan(location=term_location, raw=term_text),),  # type: ignore[arg-type]
                    definitions=tuple(definitions),
                )
            )

            if not self._is_term_at(lineno):
                break
            term_lineno = lineno

        self._resume_at_line(lineno)
        return DefinitionList(
            location=items[0].location.span_to(self._line_location(lineno - 1)),
            items=tuple(items),
        )
