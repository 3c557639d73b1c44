"""Link, image, and footnote reference parsing.

Handles:
- ``[text](url "title")`` inline links
- ``[text][ref]``, ``[text][]`` and ``[ref]`` reference links
- ``![alt](url)`` and the same reference forms for images
- ``[^id]`` footnote references

Link destinations can be angle-bracket delimited (spaces allowed, no
newlines) or raw (no spaces, balanced parens). Backslash escapes work in
destinations and titles.
"""

from __future__ import annotations

import re
from bisect import bisect_right, insort

from hojas.diagnostics import DiagnosticCode
from hojas.features import Feature, FeatureRegistry
from hojas.lexer.classifiers.link_ref import normalize_label
from hojas.location import SourceLocation
from hojas.nodes import FootnoteReference, Image, Inline, Link
from hojas.parsing.charsets import FOOTNOTE_ID_EXTRA
from hojas.visitor import plain_text

# Backslash followed by ASCII punctuation
_ESCAPE_PATTERN = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")


def process_escapes(text: str) -> str:
    """Replace ``\\x`` with ``x`` for every ASCII punctuation ``x``.

    Example:
        >>> process_escapes(r"a\\*b")
        'a*b'
    """
    return _ESCAPE_PATTERN.sub(r"\1", text)


def _parse_link_destination(text: str, pos: int) -> tuple[str, int] | None:
    """Parse a link destination starting at pos.

    Returns:
        (url, end_pos) or None if invalid
    """
    text_len = len(text)
    while pos < text_len and text[pos] in " \t":
        pos += 1
    if pos >= text_len:
        return None

    if text[pos] == "<":
        pos += 1
        start = pos
        while pos < text_len:
            char = text[pos]
            if char == ">":
                return process_escapes(text[start:pos]), pos + 1
            if char == "\n" or char == "<":
                return None
            if char == "\\" and pos + 1 < text_len:
                pos += 2
                continue
            pos += 1
        return None

    start = pos
    paren_depth = 0
    while pos < text_len:
        char = text[pos]
        if char in " \t\n" or ord(char) < 0x20:
            break
        if char == "(":
            paren_depth += 1
        elif char == ")":
            if paren_depth == 0:
                break
            paren_depth -= 1
        elif char == "\\" and pos + 1 < text_len:
            pos += 2
            continue
        pos += 1

    return process_escapes(text[start:pos]), pos


def _parse_link_title(text: str, pos: int) -> tuple[str | None, int]:
    """Parse an optional ``"title"``, ``'title'`` or ``(title)`` at pos.

    Returns:
        (title, end_pos). The title is None when there is none.
    """
    text_len = len(text)
    while pos < text_len and text[pos] in " \t\n":
        pos += 1
    if pos >= text_len:
        return None, pos

    closer = {'"': '"', "'": "'", "(": ")"}.get(text[pos])
    if closer is None:
        return None, pos

    start = pos + 1
    scan = start
    while scan < text_len:
        char = text[scan]
        if char == closer:
            return process_escapes(text[start:scan]), scan + 1
        if char == "\\" and scan + 1 < text_len:
            scan += 2
            continue
        scan += 1
    return None, pos


def _parse_inline_link(text: str, pos: int) -> tuple[str, str | None, int] | None:
    """Parse ``(url "title")`` with pos at the opening paren.

    Returns:
        (url, title, end_pos) or None if invalid
    """
    text_len = len(text)
    if pos >= text_len or text[pos] != "(":
        return None
    pos += 1
    while pos < text_len and text[pos] in " \t\n":
        pos += 1
    if pos < text_len and text[pos] == ")":
        return "", None, pos + 1

    destination = _parse_link_destination(text, pos)
    if destination is None:
        return None
    url, pos = destination

    while pos < text_len and text[pos] in " \t\n":
        pos += 1
    if pos >= text_len:
        return None
    if text[pos] == ")":
        return url, None, pos + 1

    title, pos = _parse_link_title(text, pos)
    while pos < text_len and text[pos] in " \t\n":
        pos += 1
    if title is None or pos >= text_len or text[pos] != ")":
        return None
    return url, title, pos + 1


def find_backtick_closer(text: str, start: int, run_length: int) -> int:
    """Find a backtick run of exactly ``run_length`` at or after ``start``.

    Returns:
        Position of the closing run, or -1.
    """
    pos = start
    text_len = len(text)
    while True:
        close = text.find("`", pos)
        if close == -1:
            return -1
        end = close
        while end < text_len and text[end] == "`":
            end += 1
        if end - close == run_length:
            return close
        pos = end


def _find_closing_bracket(text: str, start: int) -> int:
    """Find the ``]`` closing the bracket opened just before ``start``.

    Code spans hide their brackets, nested ``[...]`` pairs are skipped and
    escaped characters never count.

    Returns:
        Position of the closing bracket, or -1.
    """
    pos = start
    text_len = len(text)
    depth = 0
    while pos < text_len:
        char = text[pos]
        if char == "`":
            run_start = pos
            while pos < text_len and text[pos] == "`":
                pos += 1
            close = find_backtick_closer(text, pos, pos - run_start)
            if close != -1:
                pos = close + (pos - run_start)
            continue
        if char == "\\":
            pos += 2
            continue
        if char == "[":
            depth += 1
        elif char == "]":
            if depth == 0:
                return pos
            depth -= 1
        pos += 1
    return -1


def _contains_link(children: tuple[Inline, ...]) -> bool:
    """Whether any node in ``children`` is, or contains, a Link."""
    for child in children:
        if isinstance(child, Link):
            return True
        nested = getattr(child, "children", None)
        if nested and _contains_link(nested):
            return True
    return False


class LinkParsingMixin:
    """Mixin for link and image parsing.

    Required Host Attributes:
        - _features: FeatureRegistry
        - _link_refs: dict[str, tuple[str, str | None]]
        - _link_starts: list[int] (sorted offsets of links built so far)

    Required Host Methods:
        - _parse_inline(text, base, depth) -> tuple[Inline, ...]
        - _loc(pos) -> SourceLocation
        - _report(code, message, pos) -> None

    """

    _features: FeatureRegistry
    _link_refs: dict[str, tuple[str, str | None]]
    _link_starts: list[int]

    def _parse_inline(self, text: str, base: int, depth: int) -> tuple[Inline, ...]:
        """Parse inline content. Implemented by InlineParsingCoreMixin."""
        raise NotImplementedError

    def _loc(self, pos: int) -> SourceLocation:
        raise NotImplementedError

    def _report(self, code: DiagnosticCode, message: str, pos: int) -> None:
        raise NotImplementedError

    def _lookup_reference(self, label: str) -> tuple[str, str | None] | None:
        return self._link_refs.get(normalize_label(label))

    def _try_parse_footnote_ref(
        self, text: str, pos: int, base: int
    ) -> tuple[FootnoteReference, int] | None:
        """Try ``[^identifier]`` at pos.

        Returns (FootnoteReference, new_position) or None.
        """
        if Feature.FOOTNOTE not in self._features.enabled:
            return None
        if not text.startswith("[^", pos):
            return None

        close = text.find("]", pos + 2)
        if close == -1:
            return None
        identifier = text[pos + 2 : close]
        if not identifier or not all(c.isalnum() or c in FOOTNOTE_ID_EXTRA for c in identifier):
            return None
        # [^id]: is a definition, not a reference
        if close + 1 < len(text) and text[close + 1] == ":":
            return None

        node = FootnoteReference(location=self._loc(base + pos), identifier=identifier)
        return node, close + 1

    def _resolve_bracket_target(
        self, text: str, label: str, bracket_pos: int, pos: int, base: int
    ) -> tuple[str, str | None, int] | None:
        """Resolve what follows ``[label]``: inline target, full/collapsed or shortcut reference.

        Args:
            text: Text being parsed
            label: Raw bracket content
            bracket_pos: Position of the closing bracket
            pos: Position of the construct start, for diagnostics
            base: Offset of ``text`` in the raw block text

        Returns:
            (url, title, end_pos) or None when the brackets are literal.
        """
        text_len = len(text)
        after = bracket_pos + 1
        next_char = text[after] if after < text_len else ""

        if next_char == "(":
            inline = _parse_inline_link(text, after)
            if inline is not None:
                return inline

        if next_char == "[":
            ref_end = _find_closing_bracket(text, after + 1)
            if ref_end != -1:
                ref_label = text[after + 1 : ref_end] or label
                ref = self._lookup_reference(ref_label)
                if ref is None:
                    self._report(
                        DiagnosticCode.UNRESOLVED_LINK_REFERENCE,
                        f"no link reference definition for [{ref_label}]",
                        base + pos,
                    )
                    return None
                url, title = ref
                return url, title, ref_end + 1
            return None

        # Shortcut [ref]; unknown labels are plain bracketed text
        ref = self._lookup_reference(label)
        if ref is None:
            return None
        url, title = ref
        return url, title, after

    def _try_parse_link(
        self, text: str, pos: int, base: int, depth: int
    ) -> tuple[Link, int] | None:
        """Try a link at pos.

        Returns (Link, new_position) or None if not a link.
        """
        if Feature.LINK not in self._features.enabled:
            return None

        bracket_pos = _find_closing_bracket(text, pos + 1)
        if bracket_pos == -1:
            return None
        link_text = text[pos + 1 : bracket_pos]

        target = self._resolve_bracket_target(text, link_text, bracket_pos, pos, base)
        if target is None:
            return None
        url, title, end_pos = target

        # Links never nest: a link already built inside the brackets rules this one out
        inner = bisect_right(self._link_starts, base + pos)
        if inner < len(self._link_starts) and self._link_starts[inner] < base + bracket_pos:
            return None

        children = self._parse_inline(link_text, base + pos + 1, depth + 1)
        if _contains_link(children):
            return None
        insort(self._link_starts, base + pos)
        link = Link(location=self._loc(base + pos), url=url, title=title, children=children)
        return link, end_pos

    def _try_parse_image(
        self, text: str, pos: int, base: int, depth: int
    ) -> tuple[Image, int] | None:
        """Try an image at pos (which holds the ``!``).

        The alt text is the plain-text rendering of the parsed bracket content.

        Returns (Image, new_position) or None if not an image.
        """
        if Feature.IMAGE not in self._features.enabled:
            return None
        if not text.startswith("![", pos):
            return None

        bracket_pos = _find_closing_bracket(text, pos + 2)
        if bracket_pos == -1:
            return None
        alt_raw = text[pos + 2 : bracket_pos]

        target = self._resolve_bracket_target(text, alt_raw, bracket_pos, pos, base)
        if target is None:
            return None
        url, title, end_pos = target

        alt = plain_text(self._parse_inline(alt_raw, base + pos + 2, depth + 1))
        image = Image(location=self._loc(base + pos), url=url, alt=alt, title=title)
        return image, end_pos
