"""Line-oriented block lexer for hojas.

The lexer scans one line at a time, classifies it, then commits position.
Inline syntax is not lexed here; the inline parser scans a block's text on
demand.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode, tokenize
├── core.py              # Lexer class (mixin composition + navigation)
├── modes.py             # LexerMode enum
├── classifiers/         # Block-type classification mixins
│   ├── heading.py       # ATX heading
│   ├── fence.py         # Fenced code
│   ├── thematic.py      # Horizontal rule
│   ├── quote.py         # Block quote
│   ├── list.py          # List markers
│   ├── footnote.py      # Footnote definitions
│   ├── link_ref.py      # Link reference definitions
│   └── definition.py    # Definition list markers
└── scanners/            # Mode-specific scanners
    ├── block.py         # Block mode (main dispatch)
    └── fence.py         # Code fence mode

Usage:
    >>> from hojas.lexer import Lexer
    >>> for token in Lexer("# Hello\\n\\nWorld").tokenize():
    ...     print(token)
    Token(ATX_HEADING, '# Hello', 1:1)
    Token(BLANK_LINE, '', 2:1)
    Token(PARAGRAPH_LINE, 'World', 3:1)
    Token(EOF, '', 3:6)

"""

from hojas.lexer.core import Lexer, tokenize
from hojas.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode", "tokenize"]
