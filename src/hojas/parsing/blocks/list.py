"""List parsing for the block parser.

Items are collected from raw source lines: an item owns every following
line indented to its content column, plus lazy continuation lines of an
open paragraph. The collected content is parsed by a nested parser, which
is how sublists, quotes and code inside items come about.

Tight vs loose:
A list is loose when a blank line separates two items, or when an item
holds two blocks separated by a blank line. Tight items have their
paragraphs unwrapped so the item holds inline content directly.
"""

from __future__ import annotations

from typing import NamedTuple

from hojas.features import Feature, FeatureRegistry
from hojas.lexer.classifiers import ListMarker, is_thematic_break, parse_list_marker
from hojas.location import SourceLocation
from hojas.nodes import Block, Inline, List, ListItem, Paragraph
from hojas.parsing.containers import ContentTracker
from hojas.tokens import Token
from hojas.utils.text import expand_indent, strip_columns

_TASK_MARKERS = {"[ ]": False, "[x]": True, "[X]": True}


class _CollectedItem(NamedTuple):
    lines: list[str]
    next_lineno: int
    trailing_blank: bool
    internal_blank: bool


def extract_task_marker(content: str) -> tuple[str, bool | None]:
    """Split a ``[ ]``/``[x]`` task marker off the first line of an item.

    Returns:
        (remaining_content, checked) where checked is None without a marker.

    Example:
        >>> extract_task_marker("[x] ship it")
        ('ship it', True)
    """
    checked = _TASK_MARKERS.get(content[:3])
    if checked is None:
        return content, None
    rest = content[3:]
    if rest and rest[0] not in " \t":
        return content, None
    return rest.lstrip(" \t"), checked


class ListParsingMixin:
    """Mixin for ordered and unordered lists.

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

    def _list_marker_at(self, lineno: int) -> tuple[int, ListMarker] | None:
        """The list marker opening line ``lineno``, with its indent."""
        raw = self._raw_line(lineno)
        indent, pos = expand_indent(raw)
        if indent >= 4:
            return None
        content = raw[pos:]
        marker = parse_list_marker(content)
        if marker is None:
            return None
        if Feature.HORIZONTAL_RULE in self._features.enabled and is_thematic_break(content):
            return None
        feature = Feature.ORDERED_LIST if marker.ordered else Feature.UNORDERED_LIST
        if feature not in self._features.enabled:
            return None
        return indent, marker

    def _parse_list(self) -> List:
        """Parse a list starting at the current LIST_ITEM_MARKER token.

        A different marker kind (bullet character, or ``.`` vs ``)``) ends
        the list; the next list starts right after.
        """
        start = self._current
        assert start is not None

        lineno = start.lineno
        opened = self._list_marker_at(lineno)
        assert opened is not None
        first_marker = opened[1]

        items: list[ListItem] = []
        loose = False
        gap_before = False
        while self._has_line(lineno):
            found = self._list_marker_at(lineno)
            if found is None:
                break
            indent, marker = found
            if marker.ordered != first_marker.ordered or marker.kind != first_marker.kind:
                break
            if gap_before:
                loose = True

            collected = self._collect_list_item(lineno, indent, marker)
            item = self._build_list_item(lineno, indent, collected.lines)
            if collected.internal_blank and len(item.children) > 1:
                loose = True
            items.append(item)

            lineno = collected.next_lineno
            gap_before = collected.trailing_blank

        self._resume_at_line(lineno)

        if not loose:
            items = [self._tighten(item) for item in items]

        return List(
            location=items[0].location.span_to(items[-1].location),
            items=tuple(items),
            ordered=first_marker.ordered,
            start=first_marker.start,
            tight=not loose,
        )

    def _collect_list_item(self, lineno: int, indent: int, marker: ListMarker) -> _CollectedItem:
        """Gather the content lines of the item whose marker is on ``lineno``."""
        content_col = indent + marker.width
        lines = [marker.content]
        tracker = ContentTracker()
        tracker.feed(marker.content)

        pending_blanks = 0
        internal_blank = False
        closed = False
        next_lineno = lineno + 1
        while self._has_line(next_lineno):
            raw = self._raw_line(next_lineno)

            if not raw.strip():
                # An item that starts empty ends at its first blank line
                if len(lines) == 1 and not marker.content:
                    closed = True
                if tracker.in_fence:
                    lines.append(strip_columns(raw, content_col))
                else:
                    pending_blanks += 1
                next_lineno += 1
                continue

            col, _ = expand_indent(raw)
            if closed:
                break
            if col >= content_col:
                if pending_blanks:
                    internal_blank = True
                    lines.extend([""] * pending_blanks)
                    pending_blanks = 0
                stripped = strip_columns(raw, content_col)
                lines.append(stripped)
                tracker.feed(stripped)
                next_lineno += 1
                continue

            if (
                not pending_blanks
                and self._list_marker_at(next_lineno) is None
                and tracker.accepts_lazy(raw, self._features)
            ):
                lines.append(raw.lstrip())
                next_lineno += 1
                continue
            break

        return _CollectedItem(lines, next_lineno, pending_blanks > 0, internal_blank)

    def _build_list_item(self, lineno: int, indent: int, lines: list[str]) -> ListItem:
        location = self._line_location(lineno, indent)

        checked = None
        if Feature.TASK_LIST in self._features.enabled:
            lines[0], checked = extract_task_marker(lines[0])

        while lines and not lines[-1].strip():
            lines.pop()
        children = self._parse_nested_content(lines, lineno, location) if lines else ()
        return ListItem(location=location, children=children, checked=checked)

    def _tighten(self, item: ListItem) -> ListItem:
        """Unwrap the paragraphs of a tight item into inline content."""
        if not any(isinstance(child, Paragraph) for child in item.children):
            return item
        children: list[Block | Inline] = []
        for child in item.children:
            if isinstance(child, Paragraph):
                children.extend(child.children)
            else:
                children.append(child)
        return ListItem(location=item.location, children=tuple(children), checked=item.checked)
