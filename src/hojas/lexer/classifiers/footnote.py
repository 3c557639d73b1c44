"""Footnote definition classifier mixin."""

from __future__ import annotations

from hojas.parsing.charsets import FOOTNOTE_ID_EXTRA
from hojas.tokens import Token, TokenType


def is_footnote_identifier(identifier: str) -> bool:
    """Identifiers are non-empty runs of alphanumerics, ``-`` and ``_``."""
    return bool(identifier) and all(c.isalnum() or c in FOOTNOTE_ID_EXTRA for c in identifier)


class FootnoteClassifierMixin:
    """Mixin providing footnote definition classification."""

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

    def _try_classify_footnote_def(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as footnote definition.

        Format: [^identifier]: content

        Returns:
            FOOTNOTE_DEF token with value ``identifier:content``, or None.
        """
        if not content.startswith("[^"):
            return None

        bracket_end = content.find("]:")
        if bracket_end < 3:
            return None

        identifier = content[2:bracket_end]
        if not is_footnote_identifier(identifier):
            return None

        # Content after ]: may be empty, with the text on following lines
        fn_content = content[bracket_end + 2 :].strip()
        return self._make_token(
            TokenType.FOOTNOTE_DEF,
            f"{identifier}:{fn_content}",
            line_start + indent,
            line_indent=indent,
        )
