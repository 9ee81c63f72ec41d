"""Ordered registry of active configuration sources.

Readers take an immutable snapshot; writers build a new snapshot under a
lock and swap it in. A reader therefore never observes a half-updated
ordering, and reads take no lock at all.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, Iterator

from confhound.sources.base import ConfigSource
from confhound.sources.environment import EnvironmentSource, ProcessPropertySource

logger = logging.getLogger(__name__)


def default_sources() -> list[ConfigSource]:
    """The built-in source set: environment variables and process properties."""
    return [EnvironmentSource(), ProcessPropertySource()]


class SourceRegistry:
    """Copy-on-write ordered set of sources.

    Iteration is priority-descending; sources of equal priority keep their
    registration order.

    Example:
        >>> registry = SourceRegistry([])
        >>> registry.add(MapSource({"app.name": "X"}, name="A", priority=30))
        >>> registry.add(MapSource({"app.name": "Y"}, name="B", priority=50))
        >>> [s.name for s in registry]
        ['B', 'A']
    """

    def __init__(
        self,
        sources: Iterable[ConfigSource] | None = None,
        *,
        defaults_factory: Callable[[], list[ConfigSource]] = default_sources,
    ) -> None:
        """Initialize registry.

        Args:
            sources: Initial sources. ``None`` installs the defaults.
            defaults_factory: Builds the set restored by ``reset_to_defaults``.
        """
        self._lock = threading.Lock()
        self._defaults_factory = defaults_factory
        # Registration order; the ordered snapshot is derived from it.
        self._registered: tuple[ConfigSource, ...] = ()
        self._snapshot: tuple[ConfigSource, ...] = ()
        self._publish(list(defaults_factory() if sources is None else sources))

    def _publish(self, registered: list[ConfigSource]) -> None:
        self._registered = tuple(registered)
        # sorted() is stable, so equal priorities keep registration order.
        self._snapshot = tuple(sorted(registered, key=lambda s: -s.priority))

    def snapshot(self) -> tuple[ConfigSource, ...]:
        """Return the current sources in resolution order."""
        return self._snapshot

    def add(self, source: ConfigSource) -> "SourceRegistry":
        with self._lock:
            self._publish([*self._registered, source])
        logger.debug("Registered source %s (priority %d)", source.name, source.priority)
        return self

    def add_all(self, sources: Iterable[ConfigSource]) -> "SourceRegistry":
        with self._lock:
            self._publish([*self._registered, *sources])
        return self

    def remove(self, source: ConfigSource | str) -> bool:
        """Remove a source by identity or every source with the given name.

        Returns:
            True if anything was removed.
        """
        with self._lock:
            if isinstance(source, str):
                kept = [s for s in self._registered if s.name != source]
            else:
                kept = [s for s in self._registered if s is not source]
            removed = len(kept) != len(self._registered)
            if removed:
                self._publish(kept)
        if removed:
            logger.debug("Removed source %s", source if isinstance(source, str) else source.name)
        return removed

    def replace(self, sources: Iterable[ConfigSource]) -> "SourceRegistry":
        """Replace every source in one step."""
        with self._lock:
            self._publish(list(sources))
        return self

    def clear(self) -> "SourceRegistry":
        return self.replace([])

    def reset_to_defaults(self) -> "SourceRegistry":
        """Drop every source and restore the built-in defaults."""
        with self._lock:
            self._publish(self._defaults_factory())
        logger.debug("Source registry reset to defaults")
        return self

    def get(self, name: str) -> ConfigSource | None:
        return next((s for s in self._snapshot if s.name == name), None)

    def names(self) -> list[str]:
        return [s.name for s in self._snapshot]

    def __iter__(self) -> Iterator[ConfigSource]:
        return iter(self._snapshot)

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, source: object) -> bool:
        if isinstance(source, str):
            return any(s.name == source for s in self._snapshot)
        return any(s is source for s in self._snapshot)

    def __repr__(self) -> str:
        return f"SourceRegistry({', '.join(f'{s.name}:{s.priority}' for s in self._snapshot)})"
