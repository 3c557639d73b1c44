"""Character sets for O(1) classification.

All sets are module-level frozensets: immutable, shared, never rebuilt.

Usage:
    from hojas.parsing.charsets import ASCII_PUNCTUATION

    if char in ASCII_PUNCTUATION:
        ...
"""

import unicodedata

ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")


def is_unicode_punctuation(char: str) -> bool:
    """Punctuation or symbol (P* and S* categories), ASCII included.

    Used by the delimiter flanking rules.
    """
    if not char:
        return False
    if char in ASCII_PUNCTUATION:
        return True
    cat = unicodedata.category(char)
    return cat.startswith("P") or cat.startswith("S")


WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")


def is_unicode_whitespace(char: str) -> bool:
    """ASCII whitespace or Zs. The empty string (a span boundary) counts too."""
    if not char:
        return True
    if char in WHITESPACE:
        return True
    return unicodedata.category(char) == "Zs"


# Inline characters that stop a text run
INLINE_SPECIAL: frozenset[str] = frozenset("*_`[!\\\n<~=^:&")

# Delimiter run characters and the features that promote them
EMPHASIS_CHARS: frozenset[str] = frozenset("*_")
DELIMITER_CHARS: frozenset[str] = frozenset("*_~=^")

FENCE_CHARS: frozenset[str] = frozenset("`~")

UNORDERED_LIST_MARKERS: frozenset[str] = frozenset("-*+")

THEMATIC_BREAK_CHARS: frozenset[str] = frozenset("-*_")

DIGITS: frozenset[str] = frozenset("0123456789")

HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")

# Characters allowed in footnote identifiers besides alphanumerics
FOOTNOTE_ID_EXTRA: frozenset[str] = frozenset("-_")

# Characters allowed in emoji shortcodes besides alphanumerics
SHORTCODE_EXTRA: frozenset[str] = frozenset("_+-")
