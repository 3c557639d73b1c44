"""ContextVar-based parse configuration for hojas.

Config is one immutable value built before parsing and injected into every
parser through a ContextVar, so the lexer, block parser, nested container
parsers and the inline parser all read the same settings without passing
them around.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and one thread's config never leaks into another.

Usage:
    from hojas.config import ParseConfig, parse_config_context
    from hojas.features import FeatureRegistry

    config = ParseConfig(features=FeatureRegistry.from_names(["heading"]))
    with parse_config_context(config):
        doc = parse("# Hello *world*")

"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from hojas.errors import ConfigurationError
from hojas.features import Feature, FeatureRegistry

DEFAULT_MAX_NESTING_DEPTH = 64


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Note: source_file is not configuration; it is per-call state passed to
    ``parse``.

    Attributes:
        features: Enabled syntax features (default: all)
        max_nesting_depth: Deepest container or inline nesting that is still
            structured; content beyond it is kept as literal text
        emoji_resolver: Optional callback mapping a shortcode (without colons)
            to a glyph, consulted after the built-in table

    """

    features: FeatureRegistry = field(default_factory=FeatureRegistry.all)
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    emoji_resolver: Callable[[str], str | None] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.features, FeatureRegistry):
            raise ConfigurationError(
                f"features must be a FeatureRegistry, got {type(self.features).__name__}"
            )
        if self.max_nesting_depth < 1:
            raise ConfigurationError(
                f"max_nesting_depth must be at least 1, got {self.max_nesting_depth}"
            )

    def is_enabled(self, feature: Feature | str) -> bool:
        """Shortcut for ``self.features.is_enabled(feature)``."""
        return self.features.is_enabled(feature)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> ParseConfig:
        """Create ParseConfig from a plain mapping (YAML/TOML host config).

        ``features`` may be a list of tags. Unlike unknown top-level keys,
        which are ignored, unknown feature tags fail fast.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "features": ["heading", "table"],
            ...     "max_nesting_depth": 32,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.is_enabled("table")
            True

        Raises:
            UnknownFeatureError: If a feature tag is not recognized.
        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        features = filtered.get("features")
        if features is not None and not isinstance(features, FeatureRegistry):
            filtered["features"] = coerce_features(features)
        return cls(**filtered)


def coerce_features(features: FeatureRegistry | Iterable[Feature | str]) -> FeatureRegistry:
    """Accept a registry or an iterable of tags."""
    if isinstance(features, FeatureRegistry):
        return features
    if isinstance(features, str):
        # A bare string would otherwise be iterated character by character
        return FeatureRegistry.from_names([features])
    return FeatureRegistry.from_names(features)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "hojas_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get the active parse configuration for this thread/context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for the current context only."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration (all features enabled)."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[ParseConfig]:
    """Temporarily install ``config`` for the current context.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(max_nesting_depth=8)):
        ...     get_parse_config().max_nesting_depth
        8

    """
    token = _parse_config.set(config)
    try:
        yield config
    finally:
        _parse_config.reset(token)


__all__ = [
    "DEFAULT_MAX_NESTING_DEPTH",
    "ParseConfig",
    "coerce_features",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
