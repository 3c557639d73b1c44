"""Block quote classifier mixin."""

from __future__ import annotations

from hojas.tokens import Token, TokenType


def strip_quote_marker(content: str, indent: int = 0) -> str:
    """Content of a quote line after ``>`` and one optional space.

    A tab after the marker counts as one column of padding; the rest of its
    width is kept as spaces.

    Args:
        content: Line content starting with ``>``
        indent: Column of the ``>`` marker
    """
    rest = content[1:]
    if rest.startswith(" "):
        return rest[1:]
    if rest.startswith("\t"):
        width = 4 - ((indent + 1) % 4)
        return " " * (width - 1) + rest[1:]
    return rest


class QuoteClassifierMixin:
    """Mixin providing block quote classification."""

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

    def _classify_block_quote(self, content: str, line_start: int, indent: int = 0) -> Token:
        """Emit one BLOCK_QUOTE_MARKER token carrying the quoted content.

        The content is not classified here: the block parser collects the
        quote's lines and lexes them again in a nested parser, so a fence
        inside a quote never changes this lexer's mode.
        """
        return self._make_token(
            TokenType.BLOCK_QUOTE_MARKER,
            strip_quote_marker(content, indent),
            line_start + indent,
            line_indent=indent,
        )
