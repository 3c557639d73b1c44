"""Token and TokenType definitions for the hojas block lexer.

The lexer produces one or two tokens per source line; the block parser
consumes them. Inline syntax is not tokenized here: the inline parser scans
a block's text span on demand (see ``hojas.parsing.inline.tokens``).

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass, field
from enum import Enum, auto

from hojas.location import SourceLocation


class TokenType(Enum):
    """Block-level token kinds produced by the lexer.

    Payload conventions (``Token.value``):
    - ATX_HEADING: the normalized heading line, ``"## text"``
    - FENCED_CODE_START: fence run followed by the info string
    - FENCED_CODE_CONTENT: the raw content line (no newline)
    - INDENTED_CODE: the line with four columns of indent removed
    - BLOCK_QUOTE_MARKER: the line content after ``>`` and one optional space
    - LIST_ITEM_MARKER: the marker plus its trailing padding, ``"- "``, ``"2. "``
    - FOOTNOTE_DEF: ``"identifier:content"``
    - LINK_REFERENCE_DEF: the raw definition line content
    - DEFINITION_MARKER: the definition text after ``": "``
    - PARAGRAPH_LINE: the line content with its indentation stripped

    """

    # Document structure
    EOF = auto()
    BLANK_LINE = auto()

    # Headings and rules
    ATX_HEADING = auto()  # # Heading
    THEMATIC_BREAK = auto()  # ---, ***, ___

    # Code
    FENCED_CODE_START = auto()  # ``` or ~~~
    FENCED_CODE_CONTENT = auto()
    FENCED_CODE_END = auto()
    INDENTED_CODE = auto()  # 4-space indented

    # Containers
    BLOCK_QUOTE_MARKER = auto()  # >
    LIST_ITEM_MARKER = auto()  # -, *, +, 1., 1)

    # Definitions
    FOOTNOTE_DEF = auto()  # [^id]: text
    LINK_REFERENCE_DEF = auto()  # [label]: url "title"
    DEFINITION_MARKER = auto()  # : definition

    # Text
    PARAGRAPH_LINE = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical unit handed from the lexer to the block parser.

    Attributes:
        type: The token kind
        value: Raw text or encoded payload (see TokenType)
        lineno: Line number (1-indexed)
        col: Column of the token start (1-indexed)
        start_offset: Absolute start position in the lexer's source
        end_offset: Absolute end position in the lexer's source
        line_indent: Indentation (in columns) of the token's content
        source_file: Optional source file path

    """

    type: TokenType
    value: str
    lineno: int
    col: int
    start_offset: int
    end_offset: int
    line_indent: int = 0
    source_file: str | None = None
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Source location (created lazily and cached)."""
        if self._location_cache is not None:
            return self._location_cache
        loc = SourceLocation(
            lineno=self.lineno,
            col_offset=self.col,
            offset=self.start_offset,
            end_offset=self.end_offset,
            end_lineno=self.lineno,
            end_col_offset=self.col + (self.end_offset - self.start_offset),
            source_file=self.source_file,
        )
        # Idempotent write into the frozen cache slot
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.lineno}:{self.col})"
