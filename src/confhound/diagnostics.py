"""Which source produced a value, without exposing secrets."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from confhound.keys import KeyLike, as_key
from confhound.masking import mask_value
from confhound.resolver import DEFAULT_SOURCE_NAME, Resolver


@dataclass(frozen=True)
class SourceInfo:
    """Diagnostic view of one key.

    ``value`` is already masked for sensitive keys.
    """

    key: str
    value: str | None
    source_name: str | None
    found: bool
    is_from_default: bool
    sensitive: bool

    @property
    def origin(self) -> str:
        """Human-readable origin: source name, ``Default`` or ``Not found``."""
        if self.is_from_default:
            return DEFAULT_SOURCE_NAME
        return self.source_name or "Not found"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        status = "found" if self.found else "missing"
        return f"{self.key} = {self.value} [{self.origin}] ({status})"


def source_info(resolver: Resolver, key: KeyLike) -> SourceInfo:
    descriptor = as_key(key)
    resolved = resolver.resolve(descriptor)
    return SourceInfo(
        key=descriptor.name,
        value=mask_value(resolved.value, descriptor.sensitive),
        source_name=resolved.source_name,
        found=resolved.found,
        is_from_default=resolved.is_from_default,
        sensitive=descriptor.sensitive,
    )


def all_source_info(resolver: Resolver, *keys: KeyLike) -> dict[str, SourceInfo]:
    """Batch ``source_info``; keyed by name in the order given."""
    result: dict[str, SourceInfo] = {}
    for key in keys:
        info = source_info(resolver, key)
        result[info.key] = info
    return result
