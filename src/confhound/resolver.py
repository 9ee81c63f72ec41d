"""Precedence-ordered resolution of configuration keys.

Every call re-queries the sources; nothing is cached between calls, so a
change in a source's backing data is visible on the next resolution.
Sources wrapping expensive I/O cache internally.
"""

from __future__ import annotations

from dataclasses import dataclass

from confhound.keys import KeyLike, as_key
from confhound.registry import SourceRegistry
from confhound.sources.base import ConfigSource, EnumerableSource

DEFAULT_SOURCE_NAME = "Default"


@dataclass(frozen=True)
class ResolvedValue:
    """Outcome of resolving one key.

    Attributes:
        key: Key name.
        value: Raw value, ``None`` when nothing was found.
        source_name: Name of the producing source, ``None`` when defaulted
            or not found.
        is_from_default: The value is the descriptor's default.
        found: A source or the default produced a value.
    """

    key: str
    value: str | None = None
    source_name: str | None = None
    is_from_default: bool = False
    found: bool = False

    @classmethod
    def missing(cls, key: str) -> "ResolvedValue":
        return cls(key=key)


class Resolver:
    """Resolves keys against a ``SourceRegistry``.

    Example:
        >>> resolver = Resolver(registry)
        >>> resolved = resolver.resolve(ConfigKey("app.name", default="demo"))
        >>> resolved.value, resolved.source_name
        ('Y', 'B')
    """

    def __init__(self, registry: SourceRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    def resolve(self, key: KeyLike) -> ResolvedValue:
        """Resolve ``key``: first source hit, else the default, else not found."""
        descriptor = as_key(key)
        resolved = self.resolve_from_sources(descriptor.name)
        if resolved.found:
            return resolved
        if descriptor.default is not None:
            return ResolvedValue(
                key=descriptor.name,
                value=descriptor.default,
                source_name=None,
                is_from_default=True,
                found=True,
            )
        return resolved

    def resolve_from_sources(self, name: str) -> ResolvedValue:
        """Resolve ``name`` against the sources only, ignoring any default."""
        for source in self._registry.snapshot():
            value = source.lookup(name)
            if value is not None:
                return ResolvedValue(key=name, value=value, source_name=source.name, found=True)
        return ResolvedValue.missing(name)

    def resolve_ignore_case(self, name: str) -> ResolvedValue:
        """Resolve ``name`` matching source keys case-insensitively.

        Within one source an exact match beats a case-insensitive one.
        Sources that cannot enumerate keys are only asked for the exact
        name and its upper- and lower-case forms.
        """
        for source in self._registry.snapshot():
            value = _lookup_ignore_case(source, name)
            if value is not None:
                return ResolvedValue(key=name, value=value, source_name=source.name, found=True)
        return ResolvedValue.missing(name)

    def source_for(self, name: str) -> ConfigSource | None:
        """Return the source that currently supplies ``name``."""
        for source in self._registry.snapshot():
            if source.lookup(name) is not None:
                return source
        return None


def _lookup_ignore_case(source: ConfigSource, name: str) -> str | None:
    if isinstance(source, EnumerableSource):
        return source.lookup_ignore_case(name)
    for candidate in dict.fromkeys((name, name.upper(), name.lower())):
        value = source.lookup(candidate)
        if value is not None:
            return value
    return None
