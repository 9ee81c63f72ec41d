"""Environment detection and layered file loading.

Auto-loading runs once, linearly:

    detect environment name (APP_ENV, ENVIRONMENT, ENV; any case; else "local")
         |
         v
    global layer      global.{properties,json,yaml,toml}, common.{...}
         |            (+ the environment's table from the same file)
         v
    environment layer {env}.{properties,json,yaml,toml}
         |
         v
    return environment name

Layers are registered as ordinary sources at increasing priorities;
overriding is left entirely to the resolver's priority order. Calling
``auto_load`` twice registers the layers twice unless the registry is
cleared first.

Example:
    >>> loader = EnvironmentLoader(registry, config_dir="config")
    >>> loader.auto_load()
    'uat'
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from confhound.errors import ConfigError
from confhound.registry import SourceRegistry
from confhound.resolver import Resolver
from confhound.sources.base import (
    ENVIRONMENT_LAYER_PRIORITY,
    GLOBAL_LAYER_PRIORITY,
    GLOBAL_SECTION_PRIORITY,
)
from confhound.sources.files import FORMAT_SOURCES, FileSource

logger = logging.getLogger(__name__)

DEFAULT_DISCOVERY_KEYS: tuple[str, ...] = ("APP_ENV", "ENVIRONMENT", "ENV")
DEFAULT_ENVIRONMENT = "local"
GLOBAL_BASENAMES: tuple[str, ...] = ("global", "common")
# Preference order; a later format gets a higher priority within its layer.
FORMAT_ORDER: tuple[str, ...] = ("properties", "json", "yaml", "toml")


class EnvironmentLoader:
    """Detects the active environment and loads the matching config files."""

    def __init__(
        self,
        registry: SourceRegistry,
        resolver: Resolver | None = None,
        *,
        config_dir: str | Path = ".",
        discovery_keys: Sequence[str] = DEFAULT_DISCOVERY_KEYS,
        default_environment: str = DEFAULT_ENVIRONMENT,
    ) -> None:
        """Initialize loader.

        Args:
            registry: Registry to probe and to register layers into.
            resolver: Resolver over ``registry`` (created if omitted).
            config_dir: Directory holding the configuration files.
            discovery_keys: Keys probed, in order, for the environment name.
            default_environment: Name used when no key is set.
        """
        self._registry = registry
        self._resolver = resolver or Resolver(registry)
        self._config_dir = Path(config_dir)
        self._discovery_keys = tuple(discovery_keys)
        self._default_environment = default_environment
        self._loaded: list[FileSource] = []

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def loaded_sources(self) -> list[FileSource]:
        """Sources registered by the last ``auto_load``."""
        return list(self._loaded)

    def detect_environment(self) -> str:
        """Probe the discovery keys case-insensitively; first hit wins.

        The name is trimmed and lower-cased. Blank values are ignored.
        """
        for probe in self._discovery_keys:
            resolved = self._resolver.resolve_ignore_case(probe)
            if resolved.found and resolved.value and resolved.value.strip():
                name = _normalize(resolved.value)
                logger.info(
                    "Detected environment '%s' from %s (%s)", name, probe, resolved.source_name
                )
                return name
        logger.info("No environment key set, using '%s'", self._default_environment)
        return _normalize(self._default_environment)

    def load_global_layer(self, environment: str) -> list[FileSource]:
        """Register every existing global/common file, plus env tables inside them."""
        loaded: list[FileSource] = []
        for basename in GLOBAL_BASENAMES:
            for offset, fmt in enumerate(FORMAT_ORDER):
                path = self._config_dir / f"{basename}.{fmt}"
                if not path.is_file():
                    continue
                cls = FORMAT_SOURCES[fmt]
                source = cls(path, priority=GLOBAL_LAYER_PRIORITY + offset)
                loaded.append(source)
                if source.has_section(environment):
                    loaded.append(
                        cls(
                            path,
                            priority=GLOBAL_SECTION_PRIORITY + offset,
                            section=environment,
                        )
                    )
        self._register(loaded, "global")
        return loaded

    def load_environment_layer(self, environment: str) -> list[FileSource]:
        loaded: list[FileSource] = []
        for offset, fmt in enumerate(FORMAT_ORDER):
            path = self._config_dir / f"{environment}.{fmt}"
            if path.is_file():
                loaded.append(
                    FORMAT_SOURCES[fmt](path, priority=ENVIRONMENT_LAYER_PRIORITY + offset)
                )
        self._register(loaded, environment)
        return loaded

    def auto_load(self) -> str:
        """Detect the environment, load both layers, return the name.

        Raises:
            SourceLoadError: If a present file cannot be parsed. Nothing from
                the failing layer is registered.
        """
        environment = self.detect_environment()
        self._loaded = []
        self._loaded.extend(self.load_global_layer(environment))
        self._loaded.extend(self.load_environment_layer(environment))
        return environment

    def _register(self, sources: list[FileSource], layer: str) -> None:
        if not sources:
            logger.debug("No %s configuration files in %s", layer, self._config_dir)
            return
        self._registry.add_all(sources)
        logger.info(
            "Loaded %s layer: %s", layer, ", ".join(s.name for s in sources)
        )


def _normalize(name: str) -> str:
    name = name.strip().lower()
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise ConfigError(f"Invalid environment name: {name!r}")
    return name
