"""Block parsing subsystem for the hojas parser.

Provides mixins for parsing block-level Markdown content:
- Headings (ATX, with optional ``{#id}``)
- Code blocks (fenced and indented)
- Block quotes
- Lists (ordered, unordered, task lists)
- Tables (GFM)
- Footnote definitions
- Definition lists
- Paragraphs

Architecture:
Block parsing is split into logical modules:
- core: Block dispatch and leaf blocks
- quote, list, footnote, definition: containers, whose content is
  collected from raw lines and parsed by a nested parser
- table: GFM table parsing

"""

from hojas.parsing.blocks.core import BlockParsingCoreMixin
from hojas.parsing.blocks.definition import DefinitionListParsingMixin
from hojas.parsing.blocks.footnote import FootnoteParsingMixin
from hojas.parsing.blocks.list import ListParsingMixin
from hojas.parsing.blocks.quote import BlockQuoteParsingMixin
from hojas.parsing.blocks.table import TableParsingMixin


class BlockParsingMixin(
    BlockParsingCoreMixin,
    BlockQuoteParsingMixin,
    ListParsingMixin,
    TableParsingMixin,
    FootnoteParsingMixin,
    DefinitionListParsingMixin,
):
    """Combined block parsing mixin.

    Combines all block parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _tokens: list[Token]
        - _pos: int
        - _current: Token | None
        - _lines: list[str]
        - _features: FeatureRegistry
        - _link_refs: dict[str, tuple[str, str | None]]
        - _diagnostics: DiagnosticSink

    Required Host Methods:
        - token navigation (TokenNavigationMixin)
        - _resume_at_line(lineno) -> None
        - _parse_nested_content(lines, first_lineno, location) -> tuple[Block, ...]

    """


__all__ = [
    "BlockParsingCoreMixin",
    "BlockParsingMixin",
    "BlockQuoteParsingMixin",
    "DefinitionListParsingMixin",
    "FootnoteParsingMixin",
    "ListParsingMixin",
    "TableParsingMixin",
]
