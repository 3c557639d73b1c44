"""Special inline parsing: autolinks, emoji shortcodes and entities."""

from __future__ import annotations

import html
import re
from collections.abc import Callable

from hojas.emoji import is_shortcode, resolve_emoji
from hojas.features import Feature, FeatureRegistry
from hojas.location import SourceLocation
from hojas.nodes import Emoji, Link, Text
from hojas.parsing.charsets import DIGITS, HEX_DIGITS

# Scheme is a letter plus 1-31 letters, digits, +, - or .
_URI_AUTOLINK_RE = re.compile(r"^<([a-zA-Z][a-zA-Z0-9+.\-]{1,31}):([^\s<>]*)>$")

_EMAIL_AUTOLINK_RE = re.compile(
    r"^<([a-zA-Z0-9.!#$%&'*+/=?^_`{|}~\-]+@[a-zA-Z0-9]"
    r"(?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?)*)>$"
)

# Longest named entity name worth scanning for
_MAX_ENTITY_NAME = 32


class SpecialInlineMixin:
    """Mixin for autolinks, ``:emoji:`` shortcodes and character references.

    Required Host Attributes:
        - _features: FeatureRegistry
        - _emoji_resolver: Callable[[str], str | None] | None

    """

    _features: FeatureRegistry
    _emoji_resolver: Callable[[str], str | None] | None

    def _loc(self, pos: int) -> SourceLocation:
        raise NotImplementedError

    def _try_parse_autolink(self, text: str, pos: int, base: int) -> tuple[Link, int] | None:
        """Try ``<scheme:...>`` or ``<user@host>`` at pos.

        Returns (Link, new_position) or None if not an autolink.
        """
        if Feature.LINK not in self._features.enabled:
            return None

        close_pos = text.find(">", pos + 1)
        if close_pos == -1:
            return None
        bracketed = text[pos : close_pos + 1]
        inner = bracketed[1:-1]
        if not inner or any(c in inner for c in " \t\n"):
            return None

        location = self._loc(base + pos)
        if _URI_AUTOLINK_RE.match(bracketed):
            children = (Text(location=location, content=inner),)
            return Link(location=location, url=inner, title=None, children=children), close_pos + 1

        if "\\" not in inner:
            email_match = _EMAIL_AUTOLINK_RE.match(bracketed)
            if email_match:
                email = email_match.group(1)
                children = (Text(location=location, content=email),)
                link = Link(location=location, url=f"mailto:{email}", title=None, children=children)
                return link, close_pos + 1

        return None

    def _try_parse_emoji(self, text: str, pos: int, base: int) -> tuple[Emoji, int] | None:
        """Try ``:shortcode:`` at pos.

        Unknown shortcodes are not emoji; the caller keeps the colon literal.
        """
        if Feature.EMOJI not in self._features.enabled:
            return None

        close = text.find(":", pos + 1)
        if close == -1:
            return None
        shortcode = text[pos + 1 : close]
        if not is_shortcode(shortcode):
            return None

        glyph = resolve_emoji(shortcode, self._emoji_resolver)
        if glyph is None:
            return None
        return Emoji(location=self._loc(base + pos), shortcode=shortcode, glyph=glyph), close + 1

    def _try_parse_entity(self, text: str, pos: int) -> tuple[str, int] | None:
        """Decode ``&name;``, ``&#digits;`` or ``&#xhex;`` at pos.

        Returns:
            (decoded_text, new_position), or None if not a valid reference.
        """
        text_len = len(text)
        end = pos + 1

        if end < text_len and text[end] == "#":
            end += 1
            hexadecimal = end < text_len and text[end] in "xX"
            if hexadecimal:
                end += 1
            digits_start = end
            allowed = HEX_DIGITS if hexadecimal else DIGITS
            while end < text_len and text[end] in allowed:
                end += 1
            digit_count = end - digits_start
            if digit_count < 1 or digit_count > (6 if hexadecimal else 7):
                return None
            if end >= text_len or text[end] != ";":
                return None
            codepoint = int(text[digits_start:end], 16 if hexadecimal else 10)
            if codepoint == 0 or codepoint > 0x10FFFF:
                return "�", end + 1
            return chr(codepoint), end + 1

        if end < text_len and text[end].isalpha():
            max_end = min(end + _MAX_ENTITY_NAME, text_len)
            while end < max_end and text[end].isalnum():
                end += 1
            if end < text_len and text[end] == ";":
                entity = text[pos : end + 1]
                decoded = html.unescape(entity)
                if decoded != entity:
                    return decoded, end + 1

        return None
