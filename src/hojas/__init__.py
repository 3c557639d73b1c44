"""
Hojas: Markdown to typed document trees

Parses Markdown (CommonMark core plus tables, strikethrough, task lists,
footnotes, definition lists, emoji, highlight, sub/superscript and heading
ids) into an immutable, typed node tree. Rendering is left to the host: the
tree serializes to a deterministic JSON contract, and can be written back
to normalized markdown.

Quick Start:
    >>> from hojas import parse
    >>> doc = parse("# Hello, World!")
    >>> doc.children[0].id
    'hello-world'

    >>> # Or use the high-level Markdown class
    >>> from hojas import Markdown
    >>> md = Markdown(features=["heading", "bold", "italic"])
    >>> doc = md("# Hello **World**")

Feature selection:
    Every syntax extension is a Feature tag. Disabled syntax stays literal
    text, it is never an error. Unknown tags raise UnknownFeatureError.

Installation:
    pip install hojas               # Zero runtime dependencies
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable

from hojas.assembler import assemble
from hojas.config import (
    DEFAULT_MAX_NESTING_DEPTH,
    ParseConfig,
    coerce_features,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from hojas.diagnostics import Diagnostic, DiagnosticCode
from hojas.errors import (
    ConfigurationError,
    HojasError,
    SerializationError,
    UnknownFeatureError,
)
from hojas.features import Feature, FeatureRegistry
from hojas.lexer import Lexer
from hojas.location import SourceLocation
from hojas.nodes import (
    Alignment,
    Block,
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Definition,
    DefinitionItem,
    DefinitionList,
    Document,
    Emoji,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Highlight,
    HorizontalRule,
    Image,
    Inline,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableRow,
    Text,
)
from hojas.parser import Parser, parse_blocks
from hojas.parsing.inline import parse_inline
from hojas.renderers import MarkdownRenderer, Renderer, render_markdown
from hojas.serialization import from_dict, from_json, to_dict, to_json
from hojas.tokens import Token, TokenType
from hojas.utils.logger import get_logger
from hojas.utils.text import normalize_newlines
from hojas.visitor import BaseVisitor, plain_text, transform

__version__ = "0.1.0"

logger = get_logger(__name__)


def _parse_with_active_config(source: str, source_file: str | None) -> Document:
    source = normalize_newlines(source)
    parser = Parser(source, source_file=source_file)
    blocks = parser.parse()
    return assemble(
        blocks,
        link_refs=parser.link_refs,
        diagnostics=parser.diagnostics,
        source_file=source_file,
        source_len=len(source),
    )


def parse(
    source: str,
    *,
    source_file: str | None = None,
    features: FeatureRegistry | Iterable[Feature | str] | None = None,
) -> Document:
    """Parse Markdown source into a Document.

    Args:
        source: Markdown source text (any newline convention)
        source_file: Optional source file path carried in locations
        features: Enabled features for this call; defaults to the active
            configuration (every feature unless a ``parse_config_context``
            says otherwise)

    Returns:
        Document root node

    Raises:
        UnknownFeatureError: If ``features`` names an unknown tag.

    Example:
        >>> doc = parse("Hello ~~world~~", features=["strikethrough"])
        >>> doc.children[0].children[1]
        Strikethrough(...)
    """
    if features is None:
        return _parse_with_active_config(source, source_file)

    config = dataclasses.replace(get_parse_config(), features=coerce_features(features))
    with parse_config_context(config):
        return _parse_with_active_config(source, source_file)


class Markdown:
    """High-level Markdown processor holding one immutable configuration.

    Usage:
        >>> md = Markdown(features=["heading", "table"])
        >>> doc = md("# Title")
        >>> doc.headings[0].id
        'title'

        >>> # Several documents under the same configuration
        >>> docs = md.parse_many(["# One", "# Two"])

    Thread Safety:
        The config is built once and installed through a ContextVar for each
        call. Safe to share one instance between threads.

    """

    __slots__ = ("_config",)

    def __init__(
        self,
        *,
        features: FeatureRegistry | Iterable[Feature | str] | None = None,
        max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH,
        emoji_resolver: Callable[[str], str | None] | None = None,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            features: Enabled features (default: all)
            max_nesting_depth: Container and inline nesting cap
            emoji_resolver: Shortcode lookup consulted after the built-in table

        Raises:
            UnknownFeatureError: If ``features`` names an unknown tag.
            ConfigurationError: If ``max_nesting_depth`` is below 1.
        """
        self._config = ParseConfig(
            features=FeatureRegistry.all() if features is None else coerce_features(features),
            max_nesting_depth=max_nesting_depth,
            emoji_resolver=emoji_resolver,
        )

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str) -> Document:
        """Shortcut for ``self.parse(source)``."""
        return self.parse(source)

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse Markdown source into a Document with this configuration."""
        with parse_config_context(self._config):
            return _parse_with_active_config(source, source_file)

    def parse_many(self, sources: Iterable[str]) -> list[Document]:
        """Parse a batch of documents under one configuration.

        Each document gets its own parser state; nothing leaks between them.
        """
        with parse_config_context(self._config):
            docs = [_parse_with_active_config(source, None) for source in sources]
        logger.debug("parsed batch of %d documents", len(docs))
        return docs

    def render(self, doc: Document) -> str:
        """Write ``doc`` back as normalized markdown."""
        return render_markdown(doc)


__all__ = [
    # Version
    "__version__",
    # Main API
    "Markdown",
    "parse",
    "parse_blocks",
    "parse_inline",
    "assemble",
    "render_markdown",
    # Configuration
    "DEFAULT_MAX_NESTING_DEPTH",
    "Feature",
    "FeatureRegistry",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
    # Diagnostics and errors
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "HojasError",
    "SerializationError",
    "UnknownFeatureError",
    # Low-level
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "SourceLocation",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Rendering
    "MarkdownRenderer",
    "Renderer",
    # Visitor
    "BaseVisitor",
    "plain_text",
    "transform",
    # Nodes
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
