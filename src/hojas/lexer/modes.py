"""Lexer operating modes."""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Lexer operating modes.

    - BLOCK: Between blocks, classifying each line
    - CODE_FENCE: Inside a fenced code block, every line is content until the
      closing fence

    """

    BLOCK = auto()
    CODE_FENCE = auto()
