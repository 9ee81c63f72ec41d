"""Process-level sources: environment variables and process properties.

Both read process-wide mutable state. They are ordinary source objects so
that tests can inject a fake mapping or a private property store instead
of the real process state.

Example:
    >>> props = ProcessProperties()
    >>> props.set("app.name", "demo")
    >>> ProcessPropertySource(props).lookup("app.name")
    'demo'
"""

from __future__ import annotations

import os
import platform
import re
import sys
import threading
from pathlib import Path
from typing import Iterable, Iterator, Mapping, MutableMapping

from confhound.sources.base import (
    ENVIRONMENT_PRIORITY,
    PROCESS_PROPERTY_PRIORITY,
    EnumerableSource,
)

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def to_env_name(key: str) -> str:
    """Convert a dotted key to its conventional environment variable name.

    ``database.pool.max-size`` becomes ``DATABASE_POOL_MAX_SIZE``.
    """
    return _NON_ALNUM.sub("_", key).strip("_").upper()


class EnvironmentSource(EnumerableSource):
    """Environment variable configuration source.

    Looks a key up verbatim first, then under its upper-snake form.

    Example:
        DATABASE_URL=jdbc:postgresql://db/app

        ``lookup("database.url")`` returns ``jdbc:postgresql://db/app``.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        *,
        name: str = "EnvironmentVariables",
        priority: int = ENVIRONMENT_PRIORITY,
        translate_keys: bool = True,
    ) -> None:
        """Initialize environment source.

        Args:
            environ: Mapping to read. Defaults to ``os.environ``, read live.
            name: Source name.
            priority: Source priority.
            translate_keys: Also try the upper-snake form of dotted keys.
        """
        super().__init__(name, priority)
        self._environ = environ
        self._translate_keys = translate_keys

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def lookup(self, key: str) -> str | None:
        environ = self.environ
        value = environ.get(key)
        if value is None and self._translate_keys:
            env_name = to_env_name(key)
            if env_name and env_name != key:
                value = environ.get(env_name)
        return value

    def keys(self) -> Iterable[str]:
        return list(self.environ.keys())


# =============================================================================
# Process Properties
# =============================================================================


class ProcessProperties(MutableMapping[str, str]):
    """Thread-safe, process-level settable key/value store.

    The default store is seeded with a few facts about the running
    interpreter (``python.version``, ``os.name``, ``user.home`` ...).
    """

    def __init__(self, initial: Mapping[str, str] | None = None, *, seed: bool = False) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, str] = {}
        if seed:
            self._data.update(_system_facts())
        if initial:
            self._data.update(initial)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Property values must be str, got {type(value).__name__}")
        with self._lock:
            self._data[key] = value

    def clear_property(self, key: str) -> str | None:
        with self._lock:
            return self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._data)

    def __getitem__(self, key: str) -> str:
        with self._lock:
            return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        with self._lock:
            del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


def _system_facts() -> dict[str, str]:
    return {
        "python.version": platform.python_version(),
        "python.implementation": platform.python_implementation(),
        "python.executable": sys.executable,
        "os.name": platform.system(),
        "os.version": platform.release(),
        "os.arch": platform.machine(),
        "user.home": str(Path.home()),
        "user.dir": os.getcwd(),
        "file.separator": os.sep,
        "path.separator": os.pathsep,
        "line.separator": os.linesep,
    }


_process_properties: ProcessProperties | None = None
_properties_lock = threading.Lock()


def get_process_properties() -> ProcessProperties:
    """Get the process-wide property store."""
    global _process_properties

    with _properties_lock:
        if _process_properties is None:
            _process_properties = ProcessProperties(seed=True)
        return _process_properties


def set_property(key: str, value: str) -> None:
    get_process_properties().set(key, value)


def clear_property(key: str) -> str | None:
    return get_process_properties().clear_property(key)


class ProcessPropertySource(EnumerableSource):
    """Configuration source backed by a ``ProcessProperties`` store."""

    def __init__(
        self,
        properties: ProcessProperties | None = None,
        *,
        name: str = "ProcessProperties",
        priority: int = PROCESS_PROPERTY_PRIORITY,
    ) -> None:
        super().__init__(name, priority)
        self._properties = properties

    @property
    def properties(self) -> ProcessProperties:
        if self._properties is None:
            return get_process_properties()
        return self._properties

    def lookup(self, key: str) -> str | None:
        return self.properties.get(key)

    def keys(self) -> Iterable[str]:
        return self.properties.snapshot().keys()
