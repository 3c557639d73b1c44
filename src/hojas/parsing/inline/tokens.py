"""Typed inline tokens for the hojas inline parser.

Inline tokens are NamedTuples: immutable (match state lives in the
MatchRegistry, not on the token), cheap, and usable in ``match`` statements.
Every token records ``pos``, its absolute offset into the block's raw text,
so nodes built from it get a source location.

Thread Safety:
All tokens are immutable and safe to share across threads.

Usage:
    token = DelimiterToken(char="*", run_length=2, can_open=True, can_close=False, pos=0)
    match token:
        case DelimiterToken(char="*", run_length=run_length):
            print(f"Asterisk run of {run_length}")

"""

from __future__ import annotations

from typing import Literal, NamedTuple, TypeAlias

from hojas.nodes import Inline

# PEP 695 type alias for delimiter characters
DelimiterChar: TypeAlias = Literal["*", "_", "~", "=", "^"]


class DelimiterToken(NamedTuple):
    """Delimiter run for emphasis-family processing.

    Attributes:
        char: The delimiter character.
        run_length: Number of consecutive delimiter characters.
        can_open: Whether this run can open a span.
        can_close: Whether this run can close a span.
        pos: Offset of the run in the raw text.

    """

    char: DelimiterChar
    run_length: int
    can_open: bool
    can_close: bool
    pos: int


class TextToken(NamedTuple):
    """Plain text."""

    content: str
    pos: int


class CodeSpanToken(NamedTuple):
    """Inline code span, content already normalized."""

    code: str
    pos: int


class NodeToken(NamedTuple):
    """Pre-built inline node (links, images, emoji, autolinks, footnote refs)."""

    node: Inline


class HardBreakToken(NamedTuple):
    """Backslash-newline or two trailing spaces."""

    pos: int


class SoftBreakToken(NamedTuple):
    """Single newline inside a paragraph."""

    pos: int


# PEP 695 type alias for all inline tokens
InlineToken: TypeAlias = (
    DelimiterToken | TextToken | CodeSpanToken | NodeToken | HardBreakToken | SoftBreakToken
)


__all__ = [
    "CodeSpanToken",
    "DelimiterChar",
    "DelimiterToken",
    "HardBreakToken",
    "InlineToken",
    "NodeToken",
    "SoftBreakToken",
    "TextToken",
]
