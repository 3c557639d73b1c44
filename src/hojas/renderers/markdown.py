"""Markdown renderer: re-serializes a Document to markdown text.

The output is normalized markdown (ATX headings, ``-`` bullets, backtick
fences, inline links) chosen so that parsing it again with the same
configuration yields a structurally equal tree: the same nodes with the
same attributes, ignoring source locations.

Example:
    >>> from hojas import parse
    >>> from hojas.renderers import render_markdown
    >>> render_markdown(parse("* one\\n* two"))
    '- one\\n- two\\n'

Thread Safety:
MarkdownRenderer holds no per-render state. Safe for concurrent use.

"""

from __future__ import annotations

import re
from collections.abc import Sequence

from hojas.nodes import (
    Alignment,
    BlockQuote,
    CodeBlock,
    CodeSpan,
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
    TableRow,
    Text,
)
from hojas.stringbuilder import StringBuilder

# Characters that start inline syntax anywhere in a line
_ESCAPED_CHARS = frozenset("\\`*_[]<>~=^:&|#")
_ORDERED_MARKER_RE = re.compile(r"(\d{1,9})([.)])")
_BACKTICK_RUN_RE = re.compile(r"`+")

_BLOCK_TYPES = (
    Heading,
    Paragraph,
    CodeBlock,
    BlockQuote,
    List,
    HorizontalRule,
    Table,
    DefinitionList,
    FootnoteDefinition,
)

_DELIMITER_CELLS: dict[Alignment, str] = {
    "left": ":---",
    "center": ":---:",
    "right": "---:",
    None: "---",
}


def escape_text(text: str, *, line_start: bool = False) -> str:
    """Backslash-escape ``text`` so it parses back as the same literal text.

    Args:
        text: Literal text
        line_start: Whether the text begins a line, where ``-``, ``+`` and
            ``1.`` would start a list

    Example:
        >>> escape_text("2 * 3 = 6")
        '2 \\\\* 3 \\\\= 6'
    """
    escaped = "".join("\\" + char if char in _ESCAPED_CHARS else char for char in text)
    if not line_start:
        return escaped
    if escaped[:1] in ("-", "+"):
        return "\\" + escaped
    match = _ORDERED_MARKER_RE.match(escaped)
    if match:
        return f"{match.group(1)}\\{match.group(2)}{escaped[match.end() :]}"
    return escaped


def _prefix_lines(text: str, first: str, rest: str, blank: str = "") -> str:
    """Prefix the first line with ``first`` and later lines with ``rest``.

    Blank lines become ``blank``.
    """
    lines = text.split("\n")
    out = [(first + lines[0]).rstrip() if lines[0] else first.rstrip()]
    out.extend(rest + line if line else blank for line in lines[1:])
    return "\n".join(out)


def _code_span(code: str) -> str:
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(code)), default=0)
    fence = "`" * (longest + 1)
    if code.startswith("`") or code.endswith("`") or (
        code.startswith(" ") and code.endswith(" ") and code.strip()
    ):
        code = f" {code} "
    return f"{fence}{code}{fence}"


def _destination(url: str) -> str:
    url = url.replace("\\", "\\\\")
    if not url or any(char in url for char in " <>()\t"):
        return "<" + url.replace("<", "\\<").replace(">", "\\>") + ">"
    return url


def _title(title: str | None) -> str:
    if title is None:
        return ""
    return ' "' + title.replace("\\", "\\\\").replace('"', '\\"') + '"'


class MarkdownRenderer:
    """Render a Document back to markdown text.

    Consecutive lists of the same kind alternate their marker (``-``/``*``,
    ``.``/``)``) so they stay separate lists when parsed again.
    """

    __slots__ = ()

    def render(self, doc: Document) -> str:
        """Render document blocks, then footnote definitions."""
        parts = [self._render_blocks(doc.children)]
        parts.extend(self._render_footnote(note) for note in doc.footnotes)
        text = "\n\n".join(part for part in parts if part)
        return text + "\n" if text else ""

    # -- Blocks ----------------------------------------------------------------

    def _render_blocks(self, blocks: Sequence[Node], separator: str = "\n\n") -> str:
        rendered: list[str] = []
        previous: Node | None = None
        alternate = False
        for block in blocks:
            if isinstance(block, List):
                alternate = (
                    isinstance(previous, List) and previous.ordered == block.ordered and not alternate
                )
                rendered.append(self._render_list(block, alternate=alternate))
            else:
                alternate = False
                rendered.append(self._render_block(block))
            previous = block
        return separator.join(rendered)

    def _render_block(self, block: Node) -> str:
        match block:
            case Heading(level=level, children=children, explicit_id=explicit_id):
                text = "#" * level
                content = self._render_inlines(children, line_start=False)
                if content:
                    text += " " + content
                if explicit_id:
                    text += f" {{#{explicit_id}}}"
                return text
            case Paragraph(children=children):
                return self._render_inlines(children)
            case CodeBlock():
                return self._render_code(block)
            case BlockQuote(children=children):
                return _prefix_lines(self._render_blocks(children), "> ", "> ", ">")
            case List():
                return self._render_list(block, alternate=False)
            case HorizontalRule():
                return "---"
            case Table():
                return self._render_table(block)
            case DefinitionList():
                return self._render_definition_list(block)
            case FootnoteDefinition():
                return self._render_footnote(block)
            case _:
                return ""

    def _render_code(self, block: CodeBlock) -> str:
        if not block.fenced:
            return "\n".join("    " + line if line else "" for line in block.code.split("\n"))

        language = block.language or ""
        fence_char = "~" if "`" in language else "`"
        longest = 0
        for line in block.code.split("\n"):
            stripped = line.lstrip(" ")
            run = len(stripped) - len(stripped.lstrip(fence_char))
            longest = max(longest, run)
        fence = fence_char * max(3, longest + 1)
        if not block.code:
            return f"{fence}{language}\n{fence}"
        return f"{fence}{language}\n{block.code}\n{fence}"

    def _render_list(self, block: List, *, alternate: bool) -> str:
        if block.ordered:
            delimiter = ")" if alternate else "."
        else:
            bullet = "*" if alternate else "-"

        items: list[str] = []
        for i, item in enumerate(block.items):
            marker = f"{block.start + i}{delimiter}" if block.ordered else bullet
            body = self._render_list_item(item, tight=block.tight)
            items.append(_prefix_lines(body, marker + " ", " " * (len(marker) + 1)))
        return ("\n" if block.tight else "\n\n").join(items)

    def _render_list_item(self, item: ListItem, *, tight: bool) -> str:
        parts: list[str] = []
        inline_run: list[Inline] = []
        for child in item.children:
            if isinstance(child, _BLOCK_TYPES):
                if inline_run:
                    parts.append(self._render_inlines(inline_run))
                    inline_run = []
                parts.append(self._render_blocks([child]))
            else:
                inline_run.append(child)
        if inline_run:
            parts.append(self._render_inlines(inline_run))

        body = ("\n" if tight else "\n\n").join(parts)
        if item.checked is not None:
            task = "[x]" if item.checked else "[ ]"
            body = f"{task} {body}" if body else task
        return body

    def _render_table(self, table: Table) -> str:
        lines = [self._render_row(row) for row in table.head]
        lines.append(
            "| " + " | ".join(_DELIMITER_CELLS[align] for align in table.alignments) + " |"
        )
        lines.extend(self._render_row(row) for row in table.body)
        return "\n".join(lines)

    def _render_row(self, row: TableRow) -> str:
        cells = [self._render_inlines(cell.children, line_start=False) for cell in row.cells]
        return "| " + " | ".join(cells) + " |"

    def _render_definition_list(self, block: DefinitionList) -> str:
        items: list[str] = []
        for item in block.items:
            lines = [self._render_inlines(item.term)]
            lines.extend(
                _prefix_lines(self._render_blocks(definition.children), ": ", "  ")
                for definition in item.definitions
            )
            items.append("\n".join(lines))
        return "\n\n".join(items)

    def _render_footnote(self, note: FootnoteDefinition) -> str:
        return _prefix_lines(self._render_blocks(note.children), f"[^{note.identifier}]: ", "    ")

    # -- Inlines ---------------------------------------------------------------

    def _render_inlines(self, nodes: Sequence[Node], *, line_start: bool = True) -> str:
        sb = StringBuilder()
        at_line_start = line_start
        for node in nodes:
            sb.append(self._render_inline(node, line_start=at_line_start))
            at_line_start = isinstance(node, (LineBreak, SoftBreak))
        return sb.build()

    def _render_children(self, nodes: Sequence[Node], *, in_strong: bool = False) -> str:
        return "".join(self._render_inline(node, in_strong=in_strong) for node in nodes)

    def _render_inline(self, node: Node, *, line_start: bool = False, in_strong: bool = False) -> str:
        match node:
            case Text(content=content):
                return escape_text(content, line_start=line_start)
            case Emphasis(strong=True, children=children):
                return "**" + self._render_children(children, in_strong=True) + "**"
            case Emphasis(children=children):
                # ``_`` keeps ``**_a_**`` apart from ``***a***``
                delimiter = "_" if in_strong else "*"
                return delimiter + self._render_children(children) + delimiter
            case Strikethrough(children=children):
                return "~~" + self._render_children(children) + "~~"
            case Highlight(children=children):
                return "==" + self._render_children(children) + "=="
            case Subscript(children=children):
                return "~" + self._render_children(children) + "~"
            case Superscript(children=children):
                return "^" + self._render_children(children) + "^"
            case CodeSpan(code=code):
                return _code_span(code)
            case Link(url=url, title=title, children=children):
                return f"[{self._render_children(children)}]({_destination(url)}{_title(title)})"
            case Image(url=url, alt=alt, title=title):
                return f"![{escape_text(alt)}]({_destination(url)}{_title(title)})"
            case Emoji(shortcode=shortcode):
                return f":{shortcode}:"
            case FootnoteReference(identifier=identifier):
                return f"[^{identifier}]"
            case LineBreak():
                return "\\\n"
            case SoftBreak():
                return "\n"
            case _:
                return ""


def render_markdown(doc: Document) -> str:
    """Render ``doc`` to markdown text.

    Args:
        doc: Document to render.

    Returns:
        Markdown that parses back into a structurally equal Document.
    """
    return MarkdownRenderer().render(doc)
