"""Match registry for delimiter tracking.

Keeps match state out of the (immutable) inline tokens.

Thread Safety:
MatchRegistry instances are single-use per inline parse call.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class DelimiterMatch:
    """A matched opener/closer pair.

    Attributes:
        opener_idx: Index of the opener token in the token list.
        closer_idx: Index of the closer token in the token list.
        match_count: Delimiters used by this pair (1 or 2).

    """

    opener_idx: int
    closer_idx: int
    match_count: int


@dataclass(slots=True)
class MatchRegistry:
    """External tracking for delimiter matches.

    Usage:
        registry = MatchRegistry()
        registry.record_match(opener_idx=0, closer_idx=5, count=2)
        if registry.is_active(3):
            ...

    One opener may have several matches: ``***x***`` matches twice on the
    same closer, ``**a* b*`` matches two different closers.

    """

    matches: list[DelimiterMatch] = field(default_factory=list)
    consumed: dict[int, int] = field(default_factory=dict)
    deactivated: set[int] = field(default_factory=set)
    _by_opener: dict[int, list[DelimiterMatch]] = field(default_factory=dict)

    def record_match(self, opener_idx: int, closer_idx: int, count: int) -> None:
        match = DelimiterMatch(opener_idx, closer_idx, count)
        self.matches.append(match)
        self._by_opener.setdefault(opener_idx, []).append(match)
        self.consumed[opener_idx] = self.consumed.get(opener_idx, 0) + count
        self.consumed[closer_idx] = self.consumed.get(closer_idx, 0) + count

    def is_active(self, idx: int) -> bool:
        return idx not in self.deactivated

    def deactivate(self, idx: int) -> None:
        self.deactivated.add(idx)

    def remaining_count(self, idx: int, original_count: int) -> int:
        """Delimiters of the run at ``idx`` not used by any match."""
        return original_count - self.consumed.get(idx, 0)

    def get_matches_for_opener(self, idx: int) -> list[DelimiterMatch]:
        """All matches where ``idx`` is the opener, in match order."""
        return self._by_opener.get(idx, [])
