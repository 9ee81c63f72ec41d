"""In-memory configuration sources."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, MutableMapping

from confhound.sources.base import PARAMETER_PRIORITY, EnumerableSource
from confhound.sources.decoders import stringify


class MapSource(EnumerableSource):
    """Configuration source backed by a mapping.

    The mapping is held by reference, so changes made to it after
    registration are seen by the next lookup. Non-string values are
    rendered the way file values are (``True`` -> ``"true"``).

    Example:
        >>> source = MapSource({"app.name": "X"}, name="A", priority=30)
        >>> source.lookup("app.name")
        'X'
    """

    def __init__(
        self,
        values: MutableMapping[str, Any] | None = None,
        *,
        name: str = "Map",
        priority: int = 0,
    ) -> None:
        super().__init__(name, priority)
        self._values: MutableMapping[str, Any] = values if values is not None else {}

    def lookup(self, key: str) -> str | None:
        value = self._values.get(key)
        if value is None:
            return None
        return stringify(value)

    def keys(self) -> Iterable[str]:
        return [k for k, v in list(self._values.items()) if v is not None]

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class ParameterSource(EnumerableSource):
    """External parameters, e.g. handed over by a test runner or a CLI.

    When ``prefix`` is given, the parameter ``<prefix><key>`` supplies
    ``key``, and unprefixed parameters are ignored unless
    ``include_unprefixed`` is set. The prefixed form wins when both exist.
    """

    def __init__(
        self,
        parameters: Mapping[str, Any],
        *,
        prefix: str | None = None,
        include_unprefixed: bool = False,
        name: str = "Parameters",
        priority: int = PARAMETER_PRIORITY,
    ) -> None:
        super().__init__(name, priority)
        self._parameters = parameters
        self._prefix = prefix
        self._include_unprefixed = include_unprefixed or not prefix

    @property
    def prefix(self) -> str | None:
        return self._prefix

    def lookup(self, key: str) -> str | None:
        if self._prefix:
            value = self._parameters.get(f"{self._prefix}{key}")
            if value is not None:
                return stringify(value)
        if self._include_unprefixed:
            value = self._parameters.get(key)
            if value is not None:
                return stringify(value)
        return None

    def keys(self) -> Iterable[str]:
        result: list[str] = []
        seen: set[str] = set()
        for raw, value in list(self._parameters.items()):
            if value is None:
                continue
            if self._prefix and raw.startswith(self._prefix):
                key = raw[len(self._prefix) :]
            elif self._include_unprefixed:
                key = raw
            else:
                continue
            if key and key not in seen:
                seen.add(key)
                result.append(key)
        return result
