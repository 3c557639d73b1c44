"""Core inline parsing: tokenization and AST building.

Inline parsing runs in three phases over the raw text of one block:

1. ``_tokenize_inline`` produces typed tokens. Code spans, links, images,
   autolinks, emoji and footnote references are resolved here and become
   CodeSpanToken/NodeToken; delimiter runs become DelimiterToken.
2. ``_process_emphasis`` (EmphasisMixin) matches delimiter runs into a
   MatchRegistry.
3. ``_build_inline_ast`` walks the tokens and the registry and builds the
   nested inline nodes.

Thread Safety:
All methods use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from bisect import bisect_left

from hojas.diagnostics import DiagnosticCode, DiagnosticSink
from hojas.features import Feature, FeatureRegistry
from hojas.location import SourceLocation
from hojas.nodes import CodeSpan, Inline, LineBreak, SoftBreak, Text
from hojas.parsing.charsets import ASCII_PUNCTUATION, DELIMITER_CHARS, INLINE_SPECIAL
from hojas.parsing.inline.links import find_backtick_closer
from hojas.parsing.inline.match_registry import MatchRegistry
from hojas.parsing.inline.tokens import (
    CodeSpanToken,
    DelimiterToken,
    HardBreakToken,
    InlineToken,
    NodeToken,
    SoftBreakToken,
    TextToken,
)


class InlineParsingCoreMixin:
    """Core inline parsing methods.

    Required Host Attributes:
        - _features: FeatureRegistry
        - _max_depth: int
        - _diagnostics: DiagnosticSink | None
        - _origin: SourceLocation (location of the raw text being parsed)
        - _newlines: list[int] (offsets of newlines in the raw text)
        - _nesting_reported: bool
        - _parsed: dict[tuple[int, int, int], tuple[Inline, ...]] (results by base, length, depth)
        - _reported: set[tuple[DiagnosticCode, int]]

    Required Host Methods (from other mixins):
        - _scan_delimiter_run(text, start, base) -> (token, end)
        - _process_emphasis(tokens) -> MatchRegistry
        - _wrap_delimited(char, count, children, pos) -> Inline
        - _try_parse_footnote_ref(text, pos, base) -> tuple | None
        - _try_parse_link(text, pos, base, depth) -> tuple | None
        - _try_parse_image(text, pos, base, depth) -> tuple | None
        - _try_parse_autolink(text, pos, base) -> tuple | None
        - _try_parse_emoji(text, pos, base) -> tuple | None
        - _try_parse_entity(text, pos) -> tuple | None

    """

    _features: FeatureRegistry
    _max_depth: int
    _diagnostics: DiagnosticSink | None
    _origin: SourceLocation
    _newlines: list[int]
    _nesting_reported: bool
    _parsed: dict[tuple[int, int, int], tuple[Inline, ...]]
    _reported: set[tuple[DiagnosticCode, int]]

    # =========================================================================
    # Locations and diagnostics
    # =========================================================================

    def _loc(self, pos: int) -> SourceLocation:
        """Location of offset ``pos`` in the raw text being parsed."""
        origin = self._origin
        line_idx = bisect_left(self._newlines, pos)
        if line_idx == 0:
            col = origin.col_offset + pos
        else:
            col = pos - self._newlines[line_idx - 1]
        return SourceLocation(
            lineno=origin.lineno + line_idx,
            col_offset=col,
            offset=origin.offset + pos,
            end_offset=origin.offset + pos,
            source_file=origin.source_file,
        )

    def _report(self, code: DiagnosticCode, message: str, pos: int) -> None:
        # Link text can be parsed again after an enclosing link fails
        if self._diagnostics is None or (code, pos) in self._reported:
            return
        self._reported.add((code, pos))
        self._diagnostics.report(code, message, self._loc(pos))

    def _report_nesting(self, pos: int) -> None:
        """Report the nesting limit once per parsed span."""
        if self._nesting_reported:
            return
        self._nesting_reported = True
        self._report(
            DiagnosticCode.NESTING_LIMIT,
            f"inline nesting deeper than {self._max_depth} levels kept as text",
            pos,
        )

    # =========================================================================
    # Parsing
    # =========================================================================

    def _parse_inline(self, text: str, base: int, depth: int) -> tuple[Inline, ...]:
        """Parse ``text``, which starts at offset ``base`` of the raw text.

        Args:
            text: Inline source to parse
            base: Offset of ``text`` within the raw text (for locations)
            depth: Nesting depth of the enclosing node

        Returns:
            Tuple of inline nodes.
        """
        if not text:
            return ()
        if depth > self._max_depth:
            self._report_nesting(base)
            return (Text(location=self._loc(base), content=text),)

        # Nested bracket text is retried by every enclosing link candidate
        key = (base, len(text), depth)
        cached = self._parsed.get(key)
        if cached is not None:
            return cached

        tokens = self._tokenize_inline(text, base, depth)
        registry = self._process_emphasis(tokens)
        result = self._build_inline_ast(tokens, registry, 0, len(tokens), depth)
        self._parsed[key] = result
        return result

    def _tokenize_inline(self, text: str, base: int, depth: int) -> list[InlineToken]:
        """Tokenize inline content into typed token objects."""
        tokens: list[InlineToken] = []
        tokens_append = tokens.append
        pos = 0
        text_len = len(text)
        code_enabled = Feature.CODE in self._features.enabled

        while pos < text_len:
            char = text[pos]

            # Code span first: its content is opaque to every other rule
            if char == "`":
                run_start = pos
                while pos < text_len and text[pos] == "`":
                    pos += 1
                count = pos - run_start
                close = find_backtick_closer(text, pos, count) if code_enabled else -1
                if close == -1:
                    tokens_append(TextToken(content="`" * count, pos=base + run_start))
                    continue
                code = text[pos:close].replace("\n", " ")
                if len(code) >= 2 and code[0] == " " and code[-1] == " " and code.strip():
                    code = code[1:-1]
                tokens_append(CodeSpanToken(code=code, pos=base + run_start))
                pos = close + count
                continue

            if char in DELIMITER_CHARS:
                token, pos = self._scan_delimiter_run(text, pos, base)
                tokens_append(token)
                continue

            if char == "[":
                result = None
                if text.startswith("[^", pos):
                    result = self._try_parse_footnote_ref(text, pos, base)
                if result is None:
                    result = self._try_parse_link(text, pos, base, depth)
                if result is not None:
                    node, pos = result
                    tokens_append(NodeToken(node=node))
                    continue
                tokens_append(TextToken(content="[", pos=base + pos))
                pos += 1
                continue

            if char == "!":
                if text.startswith("![", pos):
                    image = self._try_parse_image(text, pos, base, depth)
                    if image is not None:
                        node, pos = image
                        tokens_append(NodeToken(node=node))
                        continue
                tokens_append(TextToken(content="!", pos=base + pos))
                pos += 1
                continue

            if char == "\\":
                next_char = text[pos + 1] if pos + 1 < text_len else ""
                if next_char == "\n":
                    tokens_append(HardBreakToken(pos=base + pos))
                    pos = self._skip_spaces(text, pos + 2)
                elif next_char and next_char in ASCII_PUNCTUATION:
                    tokens_append(TextToken(content=next_char, pos=base + pos))
                    pos += 2
                else:
                    tokens_append(TextToken(content="\\", pos=base + pos))
                    pos += 1
                continue

            if char == "\n":
                space_count = 0
                check = pos - 1
                while check >= 0 and text[check] == " ":
                    space_count += 1
                    check -= 1
                if space_count and tokens and isinstance(tokens[-1], TextToken):
                    last = tokens[-1]
                    content = last.content.rstrip(" ")
                    if content:
                        tokens[-1] = TextToken(content=content, pos=last.pos)
                    else:
                        tokens.pop()
                if space_count >= 2:
                    tokens_append(HardBreakToken(pos=base + pos))
                else:
                    tokens_append(SoftBreakToken(pos=base + pos))
                pos = self._skip_spaces(text, pos + 1)
                continue

            if char == "<":
                autolink = self._try_parse_autolink(text, pos, base)
                if autolink is not None:
                    node, pos = autolink
                    tokens_append(NodeToken(node=node))
                    continue
                tokens_append(TextToken(content="<", pos=base + pos))
                pos += 1
                continue

            if char == ":":
                emoji = self._try_parse_emoji(text, pos, base)
                if emoji is not None:
                    node, pos = emoji
                    tokens_append(NodeToken(node=node))
                    continue
                tokens_append(TextToken(content=":", pos=base + pos))
                pos += 1
                continue

            if char == "&":
                entity = self._try_parse_entity(text, pos)
                if entity is not None:
                    decoded, new_pos = entity
                    tokens_append(TextToken(content=decoded, pos=base + pos))
                    pos = new_pos
                    continue
                tokens_append(TextToken(content="&", pos=base + pos))
                pos += 1
                continue

            text_start = pos
            while pos < text_len and text[pos] not in INLINE_SPECIAL:
                pos += 1
            if pos == text_start:
                pos += 1
            tokens_append(TextToken(content=text[text_start:pos], pos=base + text_start))

        return tokens

    @staticmethod
    def _skip_spaces(text: str, pos: int) -> int:
        """Skip leading spaces of a continuation line."""
        text_len = len(text)
        while pos < text_len and text[pos] == " ":
            pos += 1
        return pos

    # =========================================================================
    # AST building
    # =========================================================================

    def _token_node(self, token: InlineToken) -> Inline:
        """Node for a non-delimiter token (delimiters become their literal text)."""
        match token:
            case TextToken(content=content, pos=pos):
                return Text(location=self._loc(pos), content=content)
            case CodeSpanToken(code=code, pos=pos):
                return CodeSpan(location=self._loc(pos), code=code)
            case NodeToken(node=node):
                return node
            case HardBreakToken(pos=pos):
                return LineBreak(location=self._loc(pos))
            case SoftBreakToken(pos=pos):
                return SoftBreak(location=self._loc(pos))
            case DelimiterToken(char=char, run_length=run_length, pos=pos):
                return Text(location=self._loc(pos), content=char * run_length)
        raise TypeError(f"unexpected inline token {token!r}")

    def _build_inline_ast(
        self,
        tokens: list[InlineToken],
        registry: MatchRegistry,
        start: int,
        end: int,
        depth: int,
    ) -> tuple[Inline, ...]:
        """Build nodes for ``tokens[start:end]`` using the match registry.

        Uses index bounds instead of list slicing to avoid allocations.

        A delimiter that is both the closer of one pair and the opener of a
        later pair is visited twice: its closing role ends the first node, and
        the walk resumes on it to build the second. Unused delimiters of a run
        are emitted once, as text before its opening node (or after its
        closing node when it opens nothing).
        """
        result: list[Inline] = []
        idx = start

        while idx < end:
            token = tokens[idx]
            if not isinstance(token, DelimiterToken):
                result.append(self._token_node(token))
                idx += 1
                continue

            char = token.char
            matches = registry.get_matches_for_opener(idx)
            if not matches:
                remaining = registry.remaining_count(idx, token.run_length)
                if remaining > 0:
                    result.append(Text(location=self._loc(token.pos), content=char * remaining))
                idx += 1
                continue

            if depth >= self._max_depth:
                self._report_nesting(token.pos)
                result.extend(self._token_node(tokens[i]) for i in range(idx, end))
                break

            remaining = registry.remaining_count(idx, token.run_length)
            ordered = sorted(matches, key=lambda m: m.closer_idx)
            # One run can open many nested nodes; only the innermost fit under the cap
            used = min(len(ordered), self._max_depth - depth)
            capped = ordered[used:]
            if capped:
                self._report_nesting(token.pos)
                remaining += sum(m.match_count for m in capped)
            if remaining > 0:
                result.append(Text(location=self._loc(token.pos), content=char * remaining))

            # Innermost (nearest closer) first; each match wraps the previous one
            wrapped: tuple[Inline, ...] = ()
            boundary = idx + 1
            for level, match in enumerate(ordered[:used]):
                segment: tuple[Inline, ...] = ()
                if boundary < match.closer_idx:
                    segment = self._build_inline_ast(
                        tokens, registry, boundary, match.closer_idx, depth + used - level
                    )
                node = self._wrap_delimited(char, match.match_count, wrapped + segment, token.pos)
                wrapped = (node,)
                boundary = match.closer_idx + 1
            result.extend(wrapped)

            for match in capped:
                if boundary < match.closer_idx:
                    result.extend(
                        self._build_inline_ast(
                            tokens, registry, boundary, match.closer_idx, self._max_depth
                        )
                    )
                closer = tokens[match.closer_idx]
                if isinstance(closer, DelimiterToken):
                    literal = char * match.match_count
                    result.append(Text(location=self._loc(closer.pos), content=literal))
                boundary = match.closer_idx + 1

            last_closer = boundary - 1
            if last_closer >= end:
                # Closer shared with an enclosing pair; the enclosing level owns it
                idx = end
                continue
            if registry.get_matches_for_opener(last_closer):
                idx = last_closer
                continue
            closer = tokens[last_closer]
            if isinstance(closer, DelimiterToken):
                leftover = registry.remaining_count(last_closer, closer.run_length)
                if leftover > 0:
                    result.append(Text(location=self._loc(closer.pos), content=char * leftover))
            idx = last_closer + 1

        return merge_text(result)


def merge_text(nodes: list[Inline] | tuple[Inline, ...]) -> tuple[Inline, ...]:
    """Coalesce adjacent Text nodes, keeping the first one's location."""
    merged: list[Inline] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            previous = merged[-1]
            merged[-1] = Text(location=previous.location, content=previous.content + node.content)
        else:
            merged.append(node)
    return tuple(merged)
