"""Block-level line classifiers for the hojas lexer.

Each classifier is a mixin that decides whether a line matches one block
pattern. The pure helpers next to them (``fence_opener``,
``parse_list_marker``, ...) are shared with the block parser.
"""

from hojas.lexer.classifiers.definition import DefinitionClassifierMixin, definition_text
from hojas.lexer.classifiers.fence import FenceClassifierMixin, fence_opener, is_closing_fence
from hojas.lexer.classifiers.footnote import FootnoteClassifierMixin, is_footnote_identifier
from hojas.lexer.classifiers.heading import HeadingClassifierMixin
from hojas.lexer.classifiers.link_ref import (
    LinkRefClassifierMixin,
    normalize_label,
    parse_link_reference_definition,
)
from hojas.lexer.classifiers.list import ListClassifierMixin, ListMarker, parse_list_marker
from hojas.lexer.classifiers.quote import QuoteClassifierMixin, strip_quote_marker
from hojas.lexer.classifiers.thematic import ThematicClassifierMixin, is_thematic_break

__all__ = [
    "DefinitionClassifierMixin",
    "FenceClassifierMixin",
    "FootnoteClassifierMixin",
    "HeadingClassifierMixin",
    "LinkRefClassifierMixin",
    "ListClassifierMixin",
    "ListMarker",
    "QuoteClassifierMixin",
    "ThematicClassifierMixin",
    "definition_text",
    "fence_opener",
    "is_closing_fence",
    "is_footnote_identifier",
    "is_thematic_break",
    "normalize_label",
    "parse_link_reference_definition",
    "parse_list_marker",
    "strip_quote_marker",
]
