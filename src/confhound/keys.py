"""Configuration key descriptors.

A key descriptor is an immutable value object: a dotted name, an optional
default and a sensitivity flag. Descriptors are owned by the caller; the
engine never enforces global uniqueness of names.

Example:
    >>> DB_URL = ConfigKey("database.url", default="jdbc:h2:mem:test")
    >>> DB_PASSWORD = ConfigKey("database.password", sensitive=True)
    >>>
    >>> keys = KeyRegistry("database")
    >>> keys.register(DB_URL, DB_PASSWORD)
    >>> [k.name for k in keys]
    ['database.url', 'database.password']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from confhound.validation import Rule


@runtime_checkable
class KeyDescriptor(Protocol):
    """Structural contract for anything usable as a configuration key."""

    @property
    def name(self) -> str: ...

    @property
    def default(self) -> str | None: ...

    @property
    def sensitive(self) -> bool: ...


@dataclass(frozen=True)
class ConfigKey:
    """Metadata for one configuration item.

    Attributes:
        name: Dotted identifier, e.g. ``database.pool.max-size``.
        default: Value used when no source has one. ``None`` means no default.
        sensitive: Mask the value on every display surface.
        description: Free text for humans; not used in resolution.
        rules: Validation rules checked by ``validate``.
    """

    name: str
    default: str | None = None
    sensitive: bool = False
    description: str = ""
    rules: tuple["Rule", ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Configuration key name must not be empty")

    def __str__(self) -> str:
        return self.name


KeyLike = Union[KeyDescriptor, str]


def as_key(key: KeyLike) -> KeyDescriptor:
    """Accept a descriptor or a bare key name."""
    if isinstance(key, str):
        return ConfigKey(key)
    return key


class KeyRegistry:
    """Ordered, optionally tagged collection of key descriptors.

    Iteration follows registration order. Registering a descriptor whose
    name is already present replaces the earlier one in place.
    """

    def __init__(self, tag: str | None = None, keys: Iterable[KeyDescriptor] = ()) -> None:
        self.tag = tag
        self._keys: dict[str, KeyDescriptor] = {}
        self._tags: dict[str, set[str]] = {}
        self.register(*keys)

    def register(self, *keys: KeyDescriptor, tags: Iterable[str] = ()) -> "KeyRegistry":
        tag_set = set(tags)
        if self.tag:
            tag_set.add(self.tag)
        for key in keys:
            self._keys[key.name] = key
            self._tags.setdefault(key.name, set()).update(tag_set)
        return self

    def get(self, name: str) -> KeyDescriptor | None:
        return self._keys.get(name)

    def tagged(self, tag: str) -> list[KeyDescriptor]:
        """Return the descriptors carrying ``tag``, in registration order."""
        return [k for name, k in self._keys.items() if tag in self._tags.get(name, ())]

    def sensitive(self) -> list[KeyDescriptor]:
        return [k for k in self._keys.values() if k.sensitive]

    def names(self) -> list[str]:
        return list(self._keys)

    def __iter__(self) -> Iterator[KeyDescriptor]:
        return iter(list(self._keys.values()))

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            return key in self._keys
        return getattr(key, "name", None) in self._keys

    def __repr__(self) -> str:
        return f"KeyRegistry(tag={self.tag!r}, keys={len(self._keys)})"
