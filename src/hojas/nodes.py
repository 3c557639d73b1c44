"""Typed UI-node descriptors produced by hojas.

Every node is a frozen dataclass with slots, so a parsed tree is an
immutable value that can be shared across threads, compared structurally
and destructured with ``match``. The set of variants is closed: a renderer
maps each class below to one UI primitive.

Node Hierarchy:
Node (base)
├── Block
│   ├── Heading
│   ├── Paragraph
│   ├── BlockQuote
│   ├── List / ListItem
│   ├── CodeBlock
│   ├── Table / TableRow / TableCell
│   ├── HorizontalRule
│   ├── DefinitionList / DefinitionItem / Definition
│   └── FootnoteDefinition
├── Inline
│   ├── Text
│   ├── Emphasis (strong=False: italic, strong=True: bold)
│   ├── Strikethrough, Highlight, Subscript, Superscript
│   ├── CodeSpan
│   ├── Link, Image
│   ├── Emoji
│   ├── FootnoteReference
│   └── LineBreak, SoftBreak
└── Document (root, with footnote and heading side tables)

``InlineSpan`` is the block parser's placeholder for inline text that has not
been inline-parsed yet. The assembler replaces every one of them, so it never
appears in a Document returned by ``hojas.parse``.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

from hojas.diagnostics import Diagnostic
from hojas.location import SourceLocation

Alignment: TypeAlias = Literal["left", "center", "right"] | None

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all nodes.

    All nodes track their source location for diagnostics and for hosts
    that map UI elements back to source lines.

    """

    location: SourceLocation


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text. Adjacent Text nodes are always merged."""

    content: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized text.

    Markdown: *italic* or _italic_ (strong=False),
    **bold** or __bold__ (strong=True)

    """

    children: tuple[Inline, ...]
    strong: bool = False


@dataclass(frozen=True, slots=True)
class Strikethrough(Node):
    """Markdown: ~~deleted~~"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Highlight(Node):
    """Markdown: ==marked=="""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Subscript(Node):
    """Markdown: H~2~O"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Superscript(Node):
    """Markdown: x^2^"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code.

    Markdown: `code`

    """

    code: str


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [text](url "title"), [text][ref], [ref] or <https://url>

    The url is kept as written; resolving it is up to the host.

    """

    url: str
    title: str | None
    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Image(Node):
    """Image.

    Markdown: ![alt](url "title")

    """

    url: str
    alt: str
    title: str | None = None


@dataclass(frozen=True, slots=True)
class Emoji(Node):
    """Emoji shortcode with its resolved glyph.

    Markdown: :smile:

    """

    shortcode: str
    glyph: str


@dataclass(frozen=True, slots=True)
class FootnoteReference(Node):
    """Reference to a footnote; look it up with ``Document.footnote``.

    Markdown: [^1] or [^note]

    """

    identifier: str


@dataclass(frozen=True, slots=True)
class LineBreak(Node):
    """Hard line break.

    Markdown: ``\\`` at end of line or two trailing spaces

    """


@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """Soft line break (single newline in paragraph)."""


@dataclass(frozen=True, slots=True)
class InlineSpan(Node):
    """Unparsed inline text left by the block parser.

    ``literal`` spans are emitted as a single Text node without inline
    parsing (used when the nesting limit was hit).

    """

    raw: str
    literal: bool = False


# PEP 695 type alias for inline elements
Inline: TypeAlias = (
    Text
    | Emphasis
    | Strikethrough
    | Highlight
    | Subscript
    | Superscript
    | CodeSpan
    | Link
    | Image
    | Emoji
    | FootnoteReference
    | LineBreak
    | SoftBreak
)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX heading.

    Markdown: ## Heading or ## Heading {#custom-id}

    ``explicit_id`` is the ``{#...}`` suffix as written; ``id`` is the final,
    document-unique id assigned by the assembler (None when the heading-id
    feature is disabled).

    """

    level: Literal[1, 2, 3, 4, 5, 6]
    children: tuple[Inline, ...]
    id: str | None = None
    explicit_id: str | None = None


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block."""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class CodeBlock(Node):
    """Code block, fenced or indented.

    Markdown: ```lang ... ``` or four-space indented lines

    """

    code: str
    language: str | None = None
    fenced: bool = True


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Markdown: > quoted text"""

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item.

    Tight lists keep an item's leading text as inline children directly;
    loose lists wrap it in Paragraph blocks.

    """

    children: tuple[Block | Inline, ...]
    checked: bool | None = None  # task-list state: True/False/None


@dataclass(frozen=True, slots=True)
class List(Node):
    """Ordered or unordered list. All items share one marker kind."""

    items: tuple[ListItem, ...]
    ordered: bool = False
    start: int = 1
    tight: bool = True


@dataclass(frozen=True, slots=True)
class HorizontalRule(Node):
    """Markdown: ---, *** or ___"""


@dataclass(frozen=True, slots=True)
class TableCell(Node):
    """Table cell (header or body)."""

    children: tuple[Inline, ...]
    is_header: bool = False
    align: Alignment = None


@dataclass(frozen=True, slots=True)
class TableRow(Node):
    """Table row; always has exactly the header's column count."""

    cells: tuple[TableCell, ...]
    is_header: bool = False


@dataclass(frozen=True, slots=True)
class Table(Node):
    """GFM pipe table.

    Markdown:
        | A | B |
        |:--|--:|
        | 1 | 2 |

    """

    head: tuple[TableRow, ...]
    body: tuple[TableRow, ...]
    alignments: tuple[Alignment, ...]


@dataclass(frozen=True, slots=True)
class Definition(Node):
    """One ``: definition`` of a term."""

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class DefinitionItem(Node):
    """A term and its definitions."""

    term: tuple[Inline, ...]
    definitions: tuple[Definition, ...]


@dataclass(frozen=True, slots=True)
class DefinitionList(Node):
    """Markdown:
        Term
        : definition
    """

    items: tuple[DefinitionItem, ...]


@dataclass(frozen=True, slots=True)
class FootnoteDefinition(Node):
    """Footnote definition.

    Markdown: [^1]: Footnote content here.

    Definitions are moved out of the block flow into ``Document.footnotes``.

    """

    identifier: str
    children: tuple[Block, ...]


# PEP 695 type alias for block elements
Block: TypeAlias = (
    Heading
    | Paragraph
    | CodeBlock
    | BlockQuote
    | List
    | ListItem
    | HorizontalRule
    | Table
    | TableRow
    | TableCell
    | DefinitionList
    | DefinitionItem
    | Definition
    | FootnoteDefinition
)


# =============================================================================
# Document
# =============================================================================


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root of a parsed document.

    Cross references are lookups by id through the side tables, never node
    pointers: ``footnotes`` holds each footnote definition once (first
    definition of an id wins) and ``headings`` holds every heading in
    document order.

    """

    children: tuple[Block, ...]
    footnotes: tuple[FootnoteDefinition, ...] = ()
    headings: tuple[Heading, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    def footnote(self, identifier: str) -> FootnoteDefinition | None:
        """Footnote definition for ``identifier``, if any."""
        for definition in self.footnotes:
            if definition.identifier == identifier:
                return definition
        return None

    def footnote_table(self) -> dict[str, FootnoteDefinition]:
        """Footnote id to definition, in definition order."""
        return {d.identifier: d for d in self.footnotes}

    def heading(self, heading_id: str) -> Heading | None:
        """Heading whose assigned id is ``heading_id``, if any."""
        for heading in self.headings:
            if heading.id == heading_id:
                return heading
        return None

    def heading_table(self) -> dict[str, Heading]:
        """Heading id to heading (only headings that have an id)."""
        return {h.id: h for h in self.headings if h.id is not None}


__all__ = [
    "Alignment",
    "Block",
    "BlockQuote",
    "CodeBlock",
    "CodeSpan",
    "Definition",
    "DefinitionItem",
    "DefinitionList",
    "Document",
    "Emoji",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "Heading",
    "Highlight",
    "HorizontalRule",
    "Image",
    "Inline",
    "InlineSpan",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "Paragraph",
    "SoftBreak",
    "Strikethrough",
    "Subscript",
    "Superscript",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
]
