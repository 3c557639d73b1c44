"""Inline parsing subsystem.

Provides mixins for parsing inline Markdown content:
- Emphasis and strong (*, _)
- Strikethrough (~~), subscript (~), highlight (==), superscript (^)
- Code spans (`)
- Links, images and autolinks
- Footnote references
- Emoji shortcodes and character references

Architecture:
Block parsing leaves every inline region as an InlineSpan. InlineParser
turns one span into inline nodes; the assembler calls it once per span
after all link reference definitions are known.

"""

from __future__ import annotations

from collections.abc import Mapping

from hojas.config import ParseConfig, get_parse_config
from hojas.diagnostics import DiagnosticCode, DiagnosticSink
from hojas.location import SourceLocation
from hojas.nodes import Inline
from hojas.parsing.inline.core import InlineParsingCoreMixin, merge_text
from hojas.parsing.inline.emphasis import EmphasisMixin
from hojas.parsing.inline.links import LinkParsingMixin, process_escapes
from hojas.parsing.inline.match_registry import DelimiterMatch, MatchRegistry
from hojas.parsing.inline.special import SpecialInlineMixin
from hojas.parsing.inline.tokens import (
    CodeSpanToken,
    DelimiterToken,
    HardBreakToken,
    InlineToken,
    NodeToken,
    SoftBreakToken,
    TextToken,
)


class InlineParser(
    InlineParsingCoreMixin,
    EmphasisMixin,
    LinkParsingMixin,
    SpecialInlineMixin,
):
    """Parses the raw text of inline spans into inline nodes.

    One instance serves one document: it shares the document's link
    reference definitions and diagnostic sink. Not safe to share between
    threads.

    Example:
        >>> parser = InlineParser()
        >>> parser.parse("*hi*", SourceLocation(1, 1))
        (Emphasis(...),)

    """

    def __init__(
        self,
        config: ParseConfig | None = None,
        link_refs: Mapping[str, tuple[str, str | None]] | None = None,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        config = config or get_parse_config()
        self._features = config.features
        self._max_depth = config.max_nesting_depth
        self._emoji_resolver = config.emoji_resolver
        self._link_refs = dict(link_refs or {})
        self._diagnostics = diagnostics
        self._origin = SourceLocation.unknown()
        self._newlines: list[int] = []
        self._nesting_reported = False
        self._parsed: dict[tuple[int, int, int], tuple[Inline, ...]] = {}
        self._reported: set[tuple[DiagnosticCode, int]] = set()
        self._link_starts: list[int] = []

    def parse(self, raw: str, location: SourceLocation) -> tuple[Inline, ...]:
        """Parse ``raw``, whose first character sits at ``location``."""
        self._origin = location
        self._newlines = [i for i, char in enumerate(raw) if char == "\n"]
        self._nesting_reported = False
        self._parsed = {}
        self._reported = set()
        self._link_starts = []
        return self._parse_inline(raw, 0, 0)


def parse_inline(
    raw: str,
    *,
    link_refs: Mapping[str, tuple[str, str | None]] | None = None,
    location: SourceLocation | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> tuple[Inline, ...]:
    """Parse a single inline fragment with the active ParseConfig.

    Args:
        raw: Inline markdown
        link_refs: Normalized label to (url, title) for reference links
        location: Where ``raw`` starts (defaults to 1:1)
        diagnostics: Sink for recoverable problems

    Example:
        >>> parse_inline("a **b**")
        (Text(...), Emphasis(...))
    """
    parser = InlineParser(link_refs=link_refs, diagnostics=diagnostics)
    return parser.parse(raw, location or SourceLocation(lineno=1, col_offset=1))


__all__ = [
    # Parser
    "InlineParser",
    "parse_inline",
    "merge_text",
    "process_escapes",
    # Mixins
    "InlineParsingCoreMixin",
    "EmphasisMixin",
    "LinkParsingMixin",
    "SpecialInlineMixin",
    # Match registry
    "MatchRegistry",
    "DelimiterMatch",
    # Typed tokens
    "InlineToken",
    "DelimiterToken",
    "TextToken",
    "CodeSpanToken",
    "NodeToken",
    "HardBreakToken",
    "SoftBreakToken",
]
