"""List marker classifier mixin."""

from __future__ import annotations

from typing import NamedTuple

from hojas.features import Feature, FeatureRegistry
from hojas.parsing.charsets import DIGITS, UNORDERED_LIST_MARKERS
from hojas.tokens import Token, TokenType
from hojas.utils.text import expand_indent, strip_columns


class ListMarker(NamedTuple):
    """A parsed list item marker.

    Attributes:
        marker: The marker as written (``"-"``, ``"3."``, ``"1)"``)
        ordered: Whether the marker is numbered
        start: The item number (1 for bullets)
        width: Columns from the marker start to the item content
        content: Item text on the marker line (may be empty)

    """

    marker: str
    ordered: bool
    start: int
    width: int
    content: str

    @property
    def kind(self) -> str:
        """Bullet character, or the ``.``/``)`` delimiter of a numbered marker.

        Items of one list share one kind.
        """
        return self.marker[-1]


def parse_list_marker(content: str) -> ListMarker | None:
    """Parse a list item marker at the start of ``content``.

    The marker must be followed by whitespace or end of line. Five or more
    spaces of padding mean the item starts with indented code, so only one
    column counts as padding.
    """
    if not content:
        return None

    first = content[0]
    if first in UNORDERED_LIST_MARKERS:
        marker, ordered, start = first, False, 1
    elif first in DIGITS:
        end = 0
        while end < len(content) and content[end] in DIGITS:
            end += 1
        if end > 9 or end >= len(content) or content[end] not in ".)":
            return None
        marker, ordered, start = content[: end + 1], True, int(content[:end])
    else:
        return None

    rest = content[len(marker) :]
    if rest and rest[0] not in " \t":
        return None

    padding, pos = expand_indent(rest)
    body = rest[pos:]
    if not body.strip():
        return ListMarker(marker, ordered, start, len(marker) + 1, "")
    if padding >= 5:
        return ListMarker(marker, ordered, start, len(marker) + 1, strip_columns(rest, 1))
    return ListMarker(marker, ordered, start, len(marker) + padding, body)


class ListClassifierMixin:
    """Mixin providing list marker classification."""

    _features: FeatureRegistry
    _max_depth: int

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        end_pos: int | None = None,
        line_indent: int = 0,
    ) -> Token:
        """Create token for the current line. Implemented by Lexer."""
        raise NotImplementedError

    def _try_classify_fence_start(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_list_marker(
        self, content: str, line_start: int, indent: int = 0
    ) -> list[Token] | None:
        """Classify a list marker line.

        Yields LIST_ITEM_MARKER (value: marker plus padding, e.g. ``"- "``)
        for each marker opening the line, followed by a token for the item
        content. A fence opening right after the markers is classified so the
        lexer enters CODE_FENCE mode for the item's code lines. Markers past
        the nesting cap stay in the content text.

        Returns:
            Tokens for the line, or None if it is not an enabled list marker.
        """
        tokens: list[Token] = []
        # One marker per nesting level, plus the one that trips the cap
        for _ in range(self._max_depth + 1):
            parsed = parse_list_marker(content)
            if parsed is None:
                break
            feature = Feature.ORDERED_LIST if parsed.ordered else Feature.UNORDERED_LIST
            if feature not in self._features.enabled:
                break

            marker_pos = line_start + indent
            value = parsed.marker + " " * (parsed.width - len(parsed.marker))
            tokens.append(
                self._make_token(
                    TokenType.LIST_ITEM_MARKER,
                    value,
                    marker_pos,
                    end_pos=marker_pos + len(parsed.marker),
                    line_indent=indent,
                )
            )
            if not parsed.content:
                return tokens

            content_col = indent + parsed.width
            inner_indent, inner_pos = expand_indent(parsed.content)
            inner = parsed.content[inner_pos:]
            content_col += inner_indent
            # Tabs make columns and character positions differ; inner ends the line
            inner_start = indent + len(content) - len(inner)

            if Feature.FENCED_CODE_BLOCK in self._features.enabled:
                fence = self._try_classify_fence_start(inner, line_start, inner_start)
                if fence is not None:
                    tokens.append(fence)
                    return tokens

            content, indent = inner, inner_start

        if not tokens:
            return None

        tokens.append(
            self._make_token(
                TokenType.PARAGRAPH_LINE,
                content,
                line_start + indent,
                line_indent=content_col,
            )
        )
        return tokens
