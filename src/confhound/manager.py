"""Central configuration manager.

``ConfigManager`` ties the pieces together: a ``SourceRegistry`` of active
sources, a ``Resolver`` over it, typed getters, diagnostics, prefix
queries, validation and environment auto-loading.

Example:
    >>> manager = ConfigManager()
    >>> manager.auto_load_config("config/")
    'local'
    >>> manager.get_int(ConfigKey("api.timeout", default="10000"))
    60000
    >>> manager.source_info(DB_PASSWORD).value
    '***MASKED***'
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from confhound.accessors import TypedAccessor
from confhound.diagnostics import SourceInfo, all_source_info, source_info
from confhound.environment import (
    DEFAULT_DISCOVERY_KEYS,
    DEFAULT_ENVIRONMENT,
    EnvironmentLoader,
)
from confhound.keys import KeyDescriptor, KeyLike
from confhound.prefix import PrefixIndex
from confhound.registry import SourceRegistry
from confhound.resolver import ResolvedValue, Resolver
from confhound.sources.base import ConfigSource
from confhound.sources.files import (
    FileSource,
    JsonFileSource,
    PropertiesFileSource,
    TomlFileSource,
    YamlFileSource,
)
from confhound.validation import Rule, ValidationResult, Validator

logger = logging.getLogger(__name__)


class ConfigManager(TypedAccessor):
    """Configuration facade over one source registry.

    Reads are safe from many threads. Registry changes are meant for setup
    boundaries but never expose a half-updated source list to readers.
    """

    def __init__(self, sources: Iterable[ConfigSource] | None = None) -> None:
        """Initialize configuration manager.

        Args:
            sources: Initial sources. ``None`` installs the built-in defaults
                (environment variables and process properties).
        """
        self._registry = SourceRegistry(sources)
        super().__init__(Resolver(self._registry))
        self._prefix_index = PrefixIndex(self._resolver)
        self._validator = Validator(self._resolver)
        self._environment_name = DEFAULT_ENVIRONMENT

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    @property
    def sources(self) -> tuple[ConfigSource, ...]:
        return self._registry.snapshot()

    @property
    def environment_name(self) -> str:
        """Environment detected by the last auto-load."""
        return self._environment_name

    # -- source management ----------------------------------------------------

    def add_source(self, source: ConfigSource) -> "ConfigManager":
        self._registry.add(source)
        return self

    def remove_source(self, source: ConfigSource | str) -> bool:
        return self._registry.remove(source)

    def replace_sources(self, sources: Iterable[ConfigSource]) -> "ConfigManager":
        self._registry.replace(sources)
        return self

    def clear_sources(self) -> "ConfigManager":
        self._registry.clear()
        return self

    def clear_sources_and_use_defaults(self) -> "ConfigManager":
        self._registry.reset_to_defaults()
        self._environment_name = DEFAULT_ENVIRONMENT
        return self

    def load_file(self, source: FileSource) -> FileSource | None:
        """Register a file source; a missing file is skipped."""
        if not source.exists:
            logger.warning("Configuration file %s not found, skipping", source.path)
            return None
        self._registry.add(source)
        return source

    def load_properties(self, path: str | Path, priority: int | None = None) -> FileSource | None:
        return self._load(PropertiesFileSource, path, priority)

    def load_json(self, path: str | Path, priority: int | None = None) -> FileSource | None:
        return self._load(JsonFileSource, path, priority)

    def load_yaml(self, path: str | Path, priority: int | None = None) -> FileSource | None:
        return self._load(YamlFileSource, path, priority)

    def load_toml(self, path: str | Path, priority: int | None = None) -> FileSource | None:
        return self._load(TomlFileSource, path, priority)

    def _load(
        self, cls: type[FileSource], path: str | Path, priority: int | None
    ) -> FileSource | None:
        if not Path(path).is_file():
            logger.warning("Configuration file %s not found, skipping", path)
            return None
        return self.load_file(cls(path, priority=priority))

    def auto_load_config(
        self,
        config_dir: str | Path = ".",
        *,
        discovery_keys: Sequence[str] = DEFAULT_DISCOVERY_KEYS,
        default_environment: str = DEFAULT_ENVIRONMENT,
    ) -> str:
        """Detect the environment and load global plus environment files.

        Args:
            config_dir: Directory holding the configuration files.
            discovery_keys: Keys probed for the environment name.
            default_environment: Name used when no key is set.

        Returns:
            The detected environment name.
        """
        loader = EnvironmentLoader(
            self._registry,
            self._resolver,
            config_dir=config_dir,
            discovery_keys=discovery_keys,
            default_environment=default_environment,
        )
        self._environment_name = loader.auto_load()
        return self._environment_name

    def refresh(self) -> None:
        """Re-read every source that supports reloading."""
        for source in self._registry.snapshot():
            if source.supports_reload:
                source.reload()

    # -- resolution & diagnostics ------------------------------------------

    def resolve(self, key: KeyLike) -> ResolvedValue:
        return self._resolver.resolve(key)

    def source_info(self, key: KeyLike) -> SourceInfo:
        return source_info(self._resolver, key)

    def all_source_info(self, *keys: KeyLike) -> dict[str, SourceInfo]:
        return all_source_info(self._resolver, *keys)

    def by_prefix(self, prefix: str) -> dict[str, str]:
        """Raw values of every key starting with ``prefix``. Not masked."""
        return self._prefix_index.by_prefix(prefix)

    def keys_with_prefix(self, prefix: str) -> set[str]:
        return self._prefix_index.keys_with_prefix(prefix)

    def by_prefix_for_display(
        self, prefix: str, keys: Iterable[KeyDescriptor] = ()
    ) -> dict[str, str]:
        return self._prefix_index.by_prefix_for_display(prefix, keys)

    def validate(
        self,
        *keys: KeyLike,
        rules: Mapping[str, Iterable[Rule]] | None = None,
    ) -> ValidationResult:
        return self._validator.validate(*keys, rules=rules)

    def __repr__(self) -> str:
        return f"ConfigManager(environment={self._environment_name!r}, sources={self._registry.names()})"


# =============================================================================
# Global Manager
# =============================================================================

_global_manager: ConfigManager | None = None
_lock = threading.Lock()


def get_manager() -> ConfigManager:
    """Get the process-wide manager, creating it with default sources."""
    global _global_manager

    with _lock:
        if _global_manager is None:
            _global_manager = ConfigManager()
        return _global_manager


def set_manager(manager: ConfigManager) -> None:
    global _global_manager

    with _lock:
        _global_manager = manager


def reset_manager() -> None:
    """Forget the process-wide manager; the next ``get_manager`` builds a new one."""
    global _global_manager

    with _lock:
        _global_manager = None


def auto_load_config(config_dir: str | Path = ".") -> str:
    """Auto-load into the process-wide manager."""
    return get_manager().auto_load_config(config_dir)
