"""Prefix queries across every enumerable source.

Only sources implementing ``EnumerableSource`` contribute key names. Each
value is then resolved the same way point resolution does it, so a key
listed by a file but also answered by a higher-priority source (e.g. an
environment variable under its upper-snake name) takes that source's value.

``by_prefix`` returns raw values. ``by_prefix_for_display`` masks keys
declared sensitive by a descriptor, and keys whose names look like
credentials when no descriptor says otherwise.
"""

from __future__ import annotations

from typing import Iterable

from confhound.keys import KeyDescriptor
from confhound.masking import MASK, looks_sensitive
from confhound.resolver import Resolver
from confhound.sources.base import EnumerableSource


class PrefixIndex:
    """Aggregates keys by prefix over a ``Resolver``'s sources."""

    def __init__(self, resolver: Resolver) -> None:
        self._resolver = resolver

    def keys_with_prefix(self, prefix: str) -> set[str]:
        return set(self.by_prefix(prefix))

    def by_prefix(self, prefix: str) -> dict[str, str]:
        """Map each key starting with ``prefix`` to its resolved raw value.

        The result is sorted by key.
        """
        names: set[str] = set()
        for source in self._resolver.registry.snapshot():
            if isinstance(source, EnumerableSource):
                names.update(k for k in source.keys() if k.startswith(prefix))

        merged: dict[str, str] = {}
        for name in sorted(names):
            value = self._resolver.resolve_from_sources(name).value
            if value is not None:
                merged[name] = value
        return merged

    def by_prefix_for_display(
        self,
        prefix: str,
        keys: Iterable[KeyDescriptor] = (),
    ) -> dict[str, str]:
        declared = {k.name: k.sensitive for k in keys}
        result = {}
        for key, value in self.by_prefix(prefix).items():
            sensitive = declared.get(key)
            if sensitive is None:
                sensitive = looks_sensitive(key)
            result[key] = MASK if sensitive else value
        return result
