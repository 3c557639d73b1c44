"""Line-level helpers for collecting container content.

Block quotes, list items, footnote definitions and definitions are
collected from raw source lines and parsed again by a nested parser. While
collecting, the parser needs to know two things about the content gathered
so far: whether it ends inside an open paragraph (so a following plain line
continues it lazily) and whether a fence is still open (so nothing inside
the code is mistaken for a continuation).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from hojas.features import Feature, FeatureRegistry
from hojas.lexer.classifiers import (
    fence_opener,
    is_closing_fence,
    is_footnote_identifier,
    is_thematic_break,
    parse_list_marker,
    strip_quote_marker,
)
from hojas.utils.text import expand_indent, strip_columns

_ATX_HEADING_RE = re.compile(r"#{1,6}(?:[ \t]|$)")


def strip_container_prefixes(line: str) -> str:
    """Remove leading quote and list markers, returning what they contain.

    ``"> - text"`` gives ``"text"``. Used only to judge the innermost
    content of a line, never to build content.
    """
    while True:
        indent, pos = expand_indent(line)
        if indent >= 4:
            return line
        content = line[pos:]
        if content.startswith(">"):
            line = strip_quote_marker(content, indent)
            continue
        marker = parse_list_marker(content)
        if marker is not None and not is_thematic_break(content):
            line = marker.content
            continue
        return line


def interrupts_paragraph(line: str, features: FeatureRegistry) -> bool:
    """Whether ``line`` starts a block that ends an open paragraph.

    Lines indented four or more columns never interrupt: inside a paragraph
    they are continuation text.
    """
    if not line.strip():
        return True
    indent, pos = expand_indent(line)
    if indent >= 4:
        return False

    content = line[pos:]
    enabled = features.enabled
    if Feature.FENCED_CODE_BLOCK in enabled and fence_opener(content) is not None:
        return True
    if Feature.HEADING in enabled and _ATX_HEADING_RE.match(content):
        return True
    if Feature.BLOCKQUOTE in enabled and content.startswith(">"):
        return True
    if Feature.HORIZONTAL_RULE in enabled and is_thematic_break(content):
        return True
    if Feature.FOOTNOTE in enabled and content.startswith("[^"):
        close = content.find("]:")
        if close > 2 and is_footnote_identifier(content[2:close]):
            return True

    marker = parse_list_marker(content)
    if marker is not None and marker.content:
        feature = Feature.ORDERED_LIST if marker.ordered else Feature.UNORDERED_LIST
        # Only a list starting at 1 can interrupt a paragraph
        if feature in enabled and (not marker.ordered or marker.start == 1):
            return True
    return False


@dataclass(slots=True)
class ContentTracker:
    """Follows the state of container content line by line.

    Attributes:
        fence_char: Character of the open fence, or "" when none is open
        fence_count: Run length of the open fence
        paragraph_open: Whether the last line left a paragraph open

    """

    fence_char: str = ""
    fence_count: int = 0
    paragraph_open: bool = False

    @property
    def in_fence(self) -> bool:
        return bool(self.fence_char)

    def feed(self, line: str) -> None:
        """Account for one content line (container prefix already removed)."""
        if self.fence_char:
            inner = strip_container_prefixes(line)
            if is_closing_fence(line, self.fence_char, self.fence_count) or is_closing_fence(
                inner, self.fence_char, self.fence_count
            ):
                self.fence_char = ""
                self.fence_count = 0
            return

        inner = strip_container_prefixes(line)
        if not inner.strip():
            self.paragraph_open = False
            return

        indent, pos = expand_indent(inner)
        if indent >= 4:
            # Indented code unless it continues a paragraph
            return

        content = inner[pos:]
        opener = fence_opener(content)
        if opener is not None:
            self.fence_char, self.fence_count, _ = opener
            self.paragraph_open = False
            return
        if _ATX_HEADING_RE.match(content) or is_thematic_break(content):
            self.paragraph_open = False
            return
        self.paragraph_open = True

    def accepts_lazy(self, line: str, features: FeatureRegistry) -> bool:
        """Whether ``line`` can lazily continue the open paragraph."""
        return (
            self.paragraph_open
            and not self.in_fence
            and bool(line.strip())
            and not interrupts_paragraph(line, features)
        )


def collect_indented(
    first: str,
    following: Iterable[str],
    indent: int,
    features: FeatureRegistry,
    *,
    ends_block: Callable[[str], bool] | None = None,
) -> tuple[list[str], int]:
    """Collect a container whose continuation lines are indented ``indent`` columns.

    Used by footnote definitions (4 columns) and definitions (2 columns).
    Blank lines are kept when more indented content follows them. A
    non-indented line directly after an open paragraph is a lazy
    continuation unless ``ends_block`` claims it.

    Args:
        first: Content on the opening line
        following: Raw lines after the opening line
        indent: Columns a continuation line must be indented
        features: Enabled features (decide what interrupts a paragraph)
        ends_block: Extra test for lines that always end the container

    Returns:
        (content_lines, lines_consumed) where ``lines_consumed`` counts the
        lines taken from ``following``, blank lines included.
    """
    lines = [first]
    tracker = ContentTracker()
    tracker.feed(first)

    consumed = 0
    pending_blanks = 0
    for raw in following:
        if not raw.strip():
            if tracker.in_fence:
                lines.append(strip_columns(raw, indent))
            else:
                pending_blanks += 1
            consumed += 1
            continue

        col, _ = expand_indent(raw)
        if col >= indent:
            lines.extend([""] * pending_blanks)
            pending_blanks = 0
            stripped = strip_columns(raw, indent)
            lines.append(stripped)
            tracker.feed(stripped)
            consumed += 1
            continue

        if (
            not pending_blanks
            and not (ends_block is not None and ends_block(raw))
            and tracker.accepts_lazy(raw, features)
        ):
            lines.append(raw.lstrip())
            consumed += 1
            continue
        break

    return lines, consumed


__all__ = [
    "ContentTracker",
    "collect_indented",
    "interrupts_paragraph",
    "strip_container_prefixes",
]
