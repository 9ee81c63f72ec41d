"""File-backed configuration sources.

Files are decoded once on construction and again on ``reload``. Nested
trees are flattened to dot-notation keys (``database.primary.url``) and
leaf values are rendered as strings.

Example:
    >>> source = YamlFileSource("config/application.yaml")
    >>> source.lookup("database.primary.url")
    'jdbc:postgresql://primary/app'
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, ClassVar, Iterable, Mapping

from confhound.errors import SourceLoadError
from confhound.sources.base import (
    JSON_PRIORITY,
    PROPERTIES_PRIORITY,
    TOML_PRIORITY,
    YAML_PRIORITY,
    EnumerableSource,
)
from confhound.sources.decoders import (
    Decoder,
    decode_json,
    decode_properties,
    decode_toml,
    decode_yaml,
    decoder_for,
    flatten,
    stringify,
)

logger = logging.getLogger(__name__)


class FileSource(EnumerableSource):
    """Configuration source backed by a decoded file.

    A missing file yields an empty source unless ``required`` is set. A
    file that exists but cannot be decoded raises ``SourceLoadError``.
    """

    label: ClassVar[str] = "File"
    default_priority: ClassVar[int] = 30
    default_decoder: ClassVar[Decoder | None] = None

    def __init__(
        self,
        path: str | Path,
        *,
        priority: int | None = None,
        name: str | None = None,
        decoder: Decoder | None = None,
        required: bool = False,
        section: str | None = None,
    ) -> None:
        """Initialize file source.

        Args:
            path: Path to the configuration file.
            priority: Source priority (defaults to the format's priority).
            name: Source name (defaults to ``LABEL(path)``).
            decoder: Decoder override; otherwise chosen by class or suffix.
            required: Raise ``SourceLoadError`` if the file is missing.
            section: Expose only this top-level table, matched ignoring case.
        """
        self._path = Path(path)
        self._section = section
        default_name = f"{self.label}({self._path})"
        if section:
            default_name += f"[{section}]"
        super().__init__(
            name or default_name,
            self.default_priority if priority is None else priority,
        )
        resolved = decoder or type(self).default_decoder or decoder_for(self._path)
        if resolved is None:
            raise SourceLoadError(self._path, f"unsupported file format '{self._path.suffix}'")
        self._decoder = resolved
        self._required = required
        self._tree: Mapping[str, Any] = {}
        self._values: dict[str, str] = {}
        self.reload()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def section(self) -> str | None:
        return self._section

    @property
    def exists(self) -> bool:
        return self._path.is_file()

    def reload(self) -> None:
        """Re-read and decode the file."""
        if not self._path.is_file():
            if self._required:
                raise SourceLoadError(self._path, "file not found")
            logger.debug("Config file %s does not exist, source is empty", self._path)
            self._tree, self._values = {}, {}
            return

        try:
            text = self._path.read_text(encoding="utf-8")
            tree = self._decoder(text)
        except Exception as e:
            raise SourceLoadError(self._path, str(e)) from e

        if not isinstance(tree, Mapping):
            raise SourceLoadError(
                self._path, f"root must be a mapping, got {type(tree).__name__}"
            )

        if self._section is not None:
            tree = _find_section(tree, self._section) or {}

        values = {
            key: stringify(value)
            for key, value in flatten(tree).items()
            if value is not None
        }
        self._tree, self._values = tree, values
        logger.debug("Loaded %d keys from %s", len(values), self.name)

    @property
    def supports_reload(self) -> bool:
        return True

    def lookup(self, key: str) -> str | None:
        return self._values.get(key)

    def keys(self) -> Iterable[str]:
        return list(self._values)

    def sections(self) -> list[str]:
        """Top-level keys whose values are tables."""
        return [str(k) for k, v in self._tree.items() if isinstance(v, Mapping)]

    def has_section(self, section: str) -> bool:
        return _find_section(self._tree, section) is not None


def _find_section(tree: Mapping[str, Any], section: str) -> Mapping[str, Any] | None:
    value = tree.get(section)
    if not isinstance(value, Mapping):
        folded = section.casefold()
        value = next(
            (v for k, v in tree.items() if str(k).casefold() == folded and isinstance(v, Mapping)),
            None,
        )
    return value


class PropertiesFileSource(FileSource):
    label = "Properties"
    default_priority = PROPERTIES_PRIORITY
    default_decoder = staticmethod(decode_properties)


class JsonFileSource(FileSource):
    label = "JSON"
    default_priority = JSON_PRIORITY
    default_decoder = staticmethod(decode_json)


class YamlFileSource(FileSource):
    label = "YAML"
    default_priority = YAML_PRIORITY
    default_decoder = staticmethod(decode_yaml)


class TomlFileSource(FileSource):
    label = "TOML"
    default_priority = TOML_PRIORITY
    default_decoder = staticmethod(decode_toml)


FORMAT_SOURCES: dict[str, type[FileSource]] = {
    "properties": PropertiesFileSource,
    "json": JsonFileSource,
    "yaml": YamlFileSource,
    "toml": TomlFileSource,
}


def file_source(path: str | Path, **kwargs: Any) -> FileSource:
    """Create the file source matching the path's suffix."""
    suffix = Path(path).suffix.lower().lstrip(".")
    if suffix == "yml":
        suffix = "yaml"
    cls = FORMAT_SOURCES.get(suffix, FileSource)
    return cls(path, **kwargs)
