"""Base classes for configuration sources.

A source is a named, prioritized provider of raw string values. Sources
are queried one key at a time; sources that can also list their keys
implement ``EnumerableSource`` and take part in prefix queries and
case-insensitive probing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable


# =============================================================================
# Priority Conventions
# =============================================================================

PARAMETER_PRIORITY = 80
ENVIRONMENT_PRIORITY = 60
PROCESS_PROPERTY_PRIORITY = 50
YAML_PRIORITY = 35
TOML_PRIORITY = 35
JSON_PRIORITY = 30
PROPERTIES_PRIORITY = 25

# Auto-loaded layers: the layer base plus the format offset.
GLOBAL_LAYER_PRIORITY = 20
GLOBAL_SECTION_PRIORITY = 30
ENVIRONMENT_LAYER_PRIORITY = 40


# =============================================================================
# Source Contracts
# =============================================================================


class ConfigSource(ABC):
    """Abstract base class for configuration sources.

    ``lookup`` is a pure function of the source's state at call time.
    Returning an empty string means the key is set to the empty string;
    only ``None`` means the key is absent.
    """

    def __init__(self, name: str, priority: int = 0) -> None:
        """Initialize config source.

        Args:
            name: Name reported by diagnostics.
            priority: Higher priority sources are consulted first.
        """
        self._name = name
        self._priority = priority

    @property
    def name(self) -> str:
        return self._name

    @property
    def priority(self) -> int:
        return self._priority

    @abstractmethod
    def lookup(self, key: str) -> str | None:
        """Get the raw value for ``key``, or ``None`` if absent."""
        pass

    def reload(self) -> None:
        """Re-read backing state (default: nothing to do)."""
        return None

    @property
    def supports_reload(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, priority={self._priority})"


class EnumerableSource(ConfigSource):
    """A source that can also list every key it holds."""

    @abstractmethod
    def keys(self) -> Iterable[str]:
        """Return all keys currently held by the source."""
        pass

    def lookup_ignore_case(self, key: str) -> str | None:
        """Look ``key`` up, falling back to a case-insensitive key match.

        An exact match always wins over a case-insensitive one.
        """
        value = self.lookup(key)
        if value is not None:
            return value
        folded = key.casefold()
        for candidate in sorted(self.keys()):
            if candidate.casefold() == folded:
                value = self.lookup(candidate)
                if value is not None:
                    return value
        return None
