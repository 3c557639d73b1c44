"""Emoji shortcode resolution.

``:shortcode:`` becomes an Emoji node when the shortcode resolves. The
built-in table below is consulted first; an optional resolver injected
through ``ParseConfig(emoji_resolver=...)`` covers everything else. A
shortcode neither knows stays literal text.

Usage:
    from hojas import Markdown

    def gemoji(name: str) -> str | None:
        return MY_TABLE.get(name)

    md = Markdown(emoji_resolver=gemoji)

Thread Safety:
    The table is an immutable mapping. Resolvers are called from whatever
    thread parses and must be safe to call concurrently.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Protocol

from hojas.parsing.charsets import SHORTCODE_EXTRA


class EmojiResolver(Protocol):
    """Protocol for emoji resolvers.

    Resolvers take a shortcode without colons and return the glyph, or None
    if they don't know it.
    """

    def __call__(self, shortcode: str) -> str | None: ...


EMOJI: Mapping[str, str] = MappingProxyType(
    {
        "+1": "\U0001f44d",
        "-1": "\U0001f44e",
        "100": "\U0001f4af",
        "bug": "\U0001f41b",
        "check": "✔️",
        "heavy_check_mark": "✔️",
        "white_check_mark": "✅",
        "x": "❌",
        "warning": "⚠️",
        "info": "ℹ️",
        "question": "❓",
        "exclamation": "❗",
        "bulb": "\U0001f4a1",
        "memo": "\U0001f4dd",
        "book": "\U0001f4d6",
        "books": "\U0001f4da",
        "link": "\U0001f517",
        "lock": "\U0001f512",
        "key": "\U0001f511",
        "gear": "⚙️",
        "wrench": "\U0001f527",
        "hammer": "\U0001f528",
        "package": "\U0001f4e6",
        "rocket": "\U0001f680",
        "sparkles": "✨",
        "star": "⭐",
        "zap": "⚡",
        "fire": "\U0001f525",
        "boom": "\U0001f4a5",
        "tada": "\U0001f389",
        "trophy": "\U0001f3c6",
        "heart": "❤️",
        "broken_heart": "\U0001f494",
        "smile": "\U0001f604",
        "smiley": "\U0001f603",
        "grin": "\U0001f601",
        "joy": "\U0001f602",
        "laughing": "\U0001f606",
        "wink": "\U0001f609",
        "blush": "\U0001f60a",
        "thinking": "\U0001f914",
        "sunglasses": "\U0001f60e",
        "cry": "\U0001f622",
        "sob": "\U0001f62d",
        "scream": "\U0001f631",
        "eyes": "\U0001f440",
        "wave": "\U0001f44b",
        "clap": "\U0001f44f",
        "pray": "\U0001f64f",
        "muscle": "\U0001f4aa",
        "ok_hand": "\U0001f44c",
        "point_right": "\U0001f449",
        "point_left": "\U0001f448",
        "sun": "☀️",
        "sunny": "☀️",
        "cloud": "☁️",
        "snowflake": "❄️",
        "rainbow": "\U0001f308",
        "moon": "\U0001f319",
        "earth_americas": "\U0001f30e",
        "globe_with_meridians": "\U0001f310",
        "coffee": "☕",
        "pizza": "\U0001f355",
        "cake": "\U0001f370",
        "apple": "\U0001f34e",
        "cat": "\U0001f431",
        "dog": "\U0001f436",
        "crab": "\U0001f980",
        "snake": "\U0001f40d",
        "bird": "\U0001f426",
        "video_game": "\U0001f3ae",
        "art": "\U0001f3a8",
        "musical_note": "\U0001f3b5",
        "computer": "\U0001f4bb",
        "keyboard": "⌨️",
        "mag": "\U0001f50d",
        "clock": "\U0001f570️",
        "hourglass": "⌛",
        "calendar": "\U0001f4c5",
        "email": "\U0001f4e7",
        "bell": "\U0001f514",
        "construction": "\U0001f6a7",
        "recycle": "♻️",
        "arrow_right": "➡️",
        "arrow_left": "⬅️",
        "arrow_up": "⬆️",
        "arrow_down": "⬇️",
    }
)


def is_shortcode(name: str) -> bool:
    """Shortcodes are non-empty runs of alphanumerics, ``_``, ``+`` and ``-``."""
    return bool(name) and all(c.isalnum() or c in SHORTCODE_EXTRA for c in name)


def resolve_emoji(
    shortcode: str, resolver: Callable[[str], str | None] | None = None
) -> str | None:
    """Resolve a shortcode (without colons) to its glyph.

    Args:
        shortcode: Shortcode such as ``"smile"``
        resolver: Fallback consulted when the built-in table has no entry

    Returns:
        The glyph, or None when neither source knows the shortcode.

    Example:
        >>> resolve_emoji("rocket")
        '🚀'
        >>> resolve_emoji("party_parrot") is None
        True
    """
    glyph = EMOJI.get(shortcode)
    if glyph is None and resolver is not None:
        glyph = resolver(shortcode)
    return glyph or None


__all__ = ["EMOJI", "EmojiResolver", "is_shortcode", "resolve_emoji"]
