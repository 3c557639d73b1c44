"""Delimiter-run matching for emphasis and its relatives.

One stack-based algorithm handles every delimiter family:

========  ========  ===================  ===============
char      run       node                 feature
========  ========  ===================  ===============
``*``/_   1         Emphasis             italic
``*``/_   2         Emphasis(strong)     bold
``~``     2         Strikethrough        strikethrough
``~``     1         Subscript            subscript
``=``     2         Highlight            highlight
``^``     1         Superscript          superscript
========  ========  ===================  ===============

Runs whose feature is disabled are never tokenized as delimiters, so they
stay literal text. Asterisks count as strong syntax: with bold disabled
every ``*`` run and every ``_`` run longer than one stays literal, and only
``_x_`` still becomes italic. When a pair matches, every delimiter between
them is deactivated, so matched spans are always disjoint or properly nested.

Thread Safety:
All methods use instance-local state only.

"""

from __future__ import annotations

from hojas.features import Feature, FeatureRegistry
from hojas.location import SourceLocation
from hojas.nodes import (
    Emphasis,
    Highlight,
    Inline,
    Strikethrough,
    Subscript,
    Superscript,
)
from hojas.parsing.charsets import (
    DELIMITER_CHARS,
    EMPHASIS_CHARS,
    is_unicode_punctuation,
    is_unicode_whitespace,
)
from hojas.parsing.inline.match_registry import MatchRegistry
from hojas.parsing.inline.tokens import DelimiterToken, InlineToken, TextToken


class EmphasisMixin:
    """Mixin for delimiter classification and matching.

    Required Host Attributes:
        - _features: FeatureRegistry

    """

    _features: FeatureRegistry

    def _loc(self, pos: int) -> SourceLocation:
        raise NotImplementedError

    # =========================================================================
    # Flanking rules
    # =========================================================================

    def _is_left_flanking(self, before: str, after: str) -> bool:
        """Not followed by whitespace, and either not followed by punctuation
        or preceded by whitespace/punctuation."""
        if is_unicode_whitespace(after):
            return False
        if not is_unicode_punctuation(after):
            return True
        return is_unicode_whitespace(before) or is_unicode_punctuation(before)

    def _is_right_flanking(self, before: str, after: str) -> bool:
        """Not preceded by whitespace, and either not preceded by punctuation
        or followed by whitespace/punctuation."""
        if is_unicode_whitespace(before):
            return False
        if not is_unicode_punctuation(before):
            return True
        return is_unicode_whitespace(after) or is_unicode_punctuation(after)

    def _delimiter_enabled(self, char: str, run_length: int) -> bool:
        """Whether a run of ``char`` x ``run_length`` is a delimiter at all."""
        enabled = self._features.enabled
        if char in EMPHASIS_CHARS:
            if Feature.BOLD not in enabled:
                # Asterisks and doubled runs are strong syntax; only `_x_` remains
                return char == "_" and run_length == 1 and Feature.ITALIC in enabled
            if run_length == 1:
                return Feature.ITALIC in enabled
            return True
        if char == "~":
            if run_length == 1:
                return Feature.SUBSCRIPT in enabled
            return run_length == 2 and Feature.STRIKETHROUGH in enabled
        if char == "=":
            return run_length == 2 and Feature.HIGHLIGHT in enabled
        if char == "^":
            return run_length == 1 and Feature.SUPERSCRIPT in enabled
        return False

    def _scan_delimiter_run(
        self, text: str, start: int, base: int
    ) -> tuple[DelimiterToken | TextToken, int]:
        """Scan the run starting at ``text[start]``.

        Returns:
            (token, end_position). Disabled runs come back as TextToken.
        """
        char = text[start]
        end = start
        text_len = len(text)
        while end < text_len and text[end] == char:
            end += 1
        run_length = end - start

        if not self._delimiter_enabled(char, run_length):
            return TextToken(content=char * run_length, pos=base + start), end

        before = text[start - 1] if start > 0 else " "
        after = text[end] if end < text_len else " "
        left_flanking = self._is_left_flanking(before, after)
        right_flanking = self._is_right_flanking(before, after)

        if char == "_":
            # Intraword underscores never open or close
            can_open = left_flanking and (not right_flanking or is_unicode_punctuation(before))
            can_close = right_flanking and (not left_flanking or is_unicode_punctuation(after))
        else:
            can_open = left_flanking
            can_close = right_flanking

        token = DelimiterToken(
            char=char,  # type: ignore[arg-type]
            run_length=run_length,
            can_open=can_open,
            can_close=can_close,
            pos=base + start,
        )
        return token, end

    # =========================================================================
    # Matching
    # =========================================================================

    def _match_count(
        self,
        opener: DelimiterToken,
        closer: DelimiterToken,
        opener_remaining: int,
        closer_remaining: int,
    ) -> int:
        """Delimiters a pair would use, or 0 if the pair is incompatible."""
        if opener.char not in EMPHASIS_CHARS:
            # ~, =, ^ pair only with a run of the same length, used whole
            if opener.run_length != closer.run_length:
                return 0
            if opener_remaining != opener.run_length or closer_remaining != closer.run_length:
                return 0
            return opener.run_length

        # "Multiple of 3" rule
        both_can_open_close = (opener.can_open and opener.can_close) or (
            closer.can_open and closer.can_close
        )
        if (
            both_can_open_close
            and (opener_remaining + closer_remaining) % 3 == 0
            and (opener_remaining % 3 != 0 or closer_remaining % 3 != 0)
        ):
            return 0

        enabled = self._features.enabled
        if opener_remaining >= 2 and closer_remaining >= 2 and Feature.BOLD in enabled:
            return 2
        if Feature.ITALIC in enabled:
            return 1
        return 0

    def _process_emphasis(self, tokens: list[InlineToken]) -> MatchRegistry:
        """Match openers to closers with one stack per delimiter character.

        Args:
            tokens: Tokens from _tokenize_inline().

        Returns:
            MatchRegistry containing all delimiter matches.
        """
        registry = MatchRegistry()
        stacks: dict[str, list[int]] = {char: [] for char in DELIMITER_CHARS}

        closer_idx = 0
        tokens_len = len(tokens)
        while closer_idx < tokens_len:
            closer = tokens[closer_idx]

            if not isinstance(closer, DelimiterToken):
                closer_idx += 1
                continue

            if closer.can_close and registry.is_active(closer_idx):
                stack = stacks[closer.char]
                closer_remaining = registry.remaining_count(closer_idx, closer.run_length)
                opener_idx = -1
                use_count = 0

                # Nearest compatible opener wins
                for i in range(len(stack) - 1, -1, -1):
                    candidate_idx = stack[i]
                    candidate = tokens[candidate_idx]
                    if not isinstance(candidate, DelimiterToken):
                        continue
                    if not registry.is_active(candidate_idx):
                        continue
                    use_count = self._match_count(
                        candidate,
                        closer,
                        registry.remaining_count(candidate_idx, candidate.run_length),
                        closer_remaining,
                    )
                    if use_count:
                        opener_idx = candidate_idx
                        break

                if not use_count:
                    if closer.can_open:
                        stack.append(closer_idx)
                    else:
                        registry.deactivate(closer_idx)
                    closer_idx += 1
                    continue

                registry.record_match(opener_idx, closer_idx, use_count)

                # Delimiters inside the pair can no longer match outside it
                for mid_idx in range(opener_idx + 1, closer_idx):
                    if isinstance(tokens[mid_idx], DelimiterToken):
                        registry.deactivate(mid_idx)
                for char_stack in stacks.values():
                    while char_stack and char_stack[-1] > opener_idx:
                        char_stack.pop()

                opener = tokens[opener_idx]
                assert isinstance(opener, DelimiterToken)
                if registry.remaining_count(opener_idx, opener.run_length) == 0:
                    registry.deactivate(opener_idx)
                    if stack and stack[-1] == opener_idx:
                        stack.pop()

                if registry.remaining_count(closer_idx, closer.run_length) == 0:
                    registry.deactivate(closer_idx)
                    closer_idx += 1
                # Otherwise the rest of the closer run tries again
            elif closer.can_open:
                stacks[closer.char].append(closer_idx)
                closer_idx += 1
            else:
                closer_idx += 1

        return registry

    def _wrap_delimited(
        self, char: str, match_count: int, children: tuple[Inline, ...], pos: int
    ) -> Inline:
        """Node for a matched pair of ``char`` runs."""
        location = self._loc(pos)
        if char == "~":
            if match_count == 2:
                return Strikethrough(location=location, children=children)
            return Subscript(location=location, children=children)
        if char == "=":
            return Highlight(location=location, children=children)
        if char == "^":
            return Superscript(location=location, children=children)
        return Emphasis(location=location, children=children, strong=match_count == 2)
