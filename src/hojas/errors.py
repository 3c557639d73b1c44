"""Exception classes for hojas.

Parsing itself never raises for any input text: syntax problems become
literal text plus a diagnostic on the Document. Exceptions are reserved for
invalid configuration and malformed serialized trees.
"""

from __future__ import annotations

from collections.abc import Iterable


class HojasError(Exception):
    """Base exception for all hojas errors."""

    pass


class ConfigurationError(HojasError):
    """Invalid parse configuration.

    Raised while building a FeatureRegistry or ParseConfig, before any
    parse call can observe the bad value.
    """

    pass


class UnknownFeatureError(ConfigurationError):
    """A feature tag outside the recognized checklist was requested."""

    def __init__(self, names: Iterable[str], known: Iterable[str]) -> None:
        """Initialize with the offending names.

        Args:
            names: Unrecognized feature tags
            known: Recognized feature tags, listed in the message
        """
        self.names = tuple(names)
        available = ", ".join(sorted(known))
        bad = ", ".join(repr(name) for name in self.names)
        super().__init__(f"Unknown feature(s): {bad}. Available: {available}")


class SerializationError(HojasError):
    """A serialized node tree could not be rebuilt."""

    pass
