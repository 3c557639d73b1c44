"""Feature registry: which markdown constructs are promoted to typed nodes.

Every checklist item of the curated syntax subset is a ``Feature``. A
disabled feature's syntax is left as literal text instead of becoming a
typed node, so documents using syntax that a host has switched off (or that
a renderer can't display yet) still parse.

Usage:
    >>> from hojas.features import Feature, FeatureRegistry
    >>> registry = FeatureRegistry.from_names(["heading", "bold", "italic"])
    >>> registry.is_enabled(Feature.HEADING)
    True
    >>> registry.is_enabled("table")
    False
    >>> FeatureRegistry.from_names(["tabel"])
    Traceback (most recent call last):
        ...
    hojas.errors.UnknownFeatureError: Unknown feature(s): 'tabel'. ...

Thread Safety:
FeatureRegistry is a frozen dataclass over a frozenset. It is built once
before parsing and only read afterwards, so concurrent reads are safe.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from hojas.errors import UnknownFeatureError


class Feature(StrEnum):
    """Recognized feature tags (exactly the syntax checklist)."""

    # Basic syntax
    HEADING = "heading"
    BOLD = "bold"
    ITALIC = "italic"
    BLOCKQUOTE = "blockquote"
    ORDERED_LIST = "ordered-list"
    UNORDERED_LIST = "unordered-list"
    CODE = "code"
    HORIZONTAL_RULE = "horizontal-rule"
    LINK = "link"
    IMAGE = "image"

    # Advanced syntax
    TABLE = "table"
    FENCED_CODE_BLOCK = "fenced-code-block"
    FOOTNOTE = "footnote"
    HEADING_ID = "heading-id"
    DEFINITION_LIST = "definition-list"
    STRIKETHROUGH = "strikethrough"
    TASK_LIST = "task-list"
    EMOJI = "emoji"
    HIGHLIGHT = "highlight"
    SUBSCRIPT = "subscript"
    SUPERSCRIPT = "superscript"


_FEATURE_NAMES: frozenset[str] = frozenset(f.value for f in Feature)


def _coerce(names: Iterable[Feature | str]) -> frozenset[Feature]:
    """Convert tags to Feature members, failing fast on unknown names."""
    resolved: set[Feature] = set()
    unknown: list[str] = []
    for name in names:
        if isinstance(name, Feature):
            resolved.add(name)
        elif isinstance(name, str) and name in _FEATURE_NAMES:
            resolved.add(Feature(name))
        else:
            unknown.append(str(name))
    if unknown:
        raise UnknownFeatureError(unknown, _FEATURE_NAMES)
    return frozenset(resolved)


@dataclass(frozen=True, slots=True)
class FeatureRegistry:
    """Immutable set of enabled features.

    Construct with ``from_names``, ``all`` or ``none``; derive variants with
    ``enable``/``disable`` (each returns a new registry).

    Attributes:
        enabled: The enabled Feature members

    """

    enabled: frozenset[Feature]

    @classmethod
    def from_names(cls, names: Iterable[Feature | str]) -> FeatureRegistry:
        """Build a registry from feature tags.

        Raises:
            UnknownFeatureError: If any tag is outside the checklist.
        """
        return cls(enabled=_coerce(names))

    @classmethod
    def all(cls) -> FeatureRegistry:
        """Registry with every feature enabled."""
        return cls(enabled=frozenset(Feature))

    @classmethod
    def none(cls) -> FeatureRegistry:
        """Registry with every feature disabled (everything stays text)."""
        return cls(enabled=frozenset())

    def is_enabled(self, feature: Feature | str) -> bool:
        """Whether ``feature`` is enabled.

        Raises:
            UnknownFeatureError: If ``feature`` is not a recognized tag.
        """
        if not isinstance(feature, Feature):
            if feature not in _FEATURE_NAMES:
                raise UnknownFeatureError([str(feature)], _FEATURE_NAMES)
            feature = Feature(feature)
        return feature in self.enabled

    def enable(self, *features: Feature | str) -> FeatureRegistry:
        """Return a new registry with ``features`` added."""
        return FeatureRegistry(enabled=self.enabled | _coerce(features))

    def disable(self, *features: Feature | str) -> FeatureRegistry:
        """Return a new registry with ``features`` removed."""
        return FeatureRegistry(enabled=self.enabled - _coerce(features))

    def names(self) -> list[str]:
        """Enabled tags, sorted (stable for logging and hashing)."""
        return sorted(f.value for f in self.enabled)

    def __contains__(self, feature: object) -> bool:
        return isinstance(feature, (Feature, str)) and feature in self.enabled


__all__ = ["Feature", "FeatureRegistry"]
