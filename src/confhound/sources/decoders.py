"""File decoders and value-tree helpers.

A decoder turns file text into a string-keyed value tree. File sources
flatten that tree to dot-notation keys and render leaf values as strings.

Supported formats:
    - Java-style ``.properties`` (``key=value``, ``key: value``, ``key value``)
    - JSON (``.json``)
    - YAML (``.yaml``, ``.yml``)
    - TOML (``.toml``)
"""

from __future__ import annotations

import json
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

Decoder = Callable[[str], Mapping[str, Any]]


# =============================================================================
# Value Rendering
# =============================================================================


def stringify(value: Any) -> str:
    """Render a decoded leaf value as a configuration string.

    Booleans render lower-case, sequences render comma-joined so that list
    access splits them back, mappings render as JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value if v is not None)
    if isinstance(value, Mapping):
        return json.dumps(value, sort_keys=True, default=str)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def flatten(data: Mapping[str, Any], parent_key: str = "", sep: str = ".") -> dict[str, Any]:
    """Flatten nested mappings to dot notation.

    Example:
        {"database": {"host": "localhost"}} -> {"database.host": "localhost"}
    """
    items: dict[str, Any] = {}
    for key, value in data.items():
        new_key = f"{parent_key}{sep}{key}" if parent_key else str(key)
        if isinstance(value, Mapping):
            items.update(flatten(value, new_key, sep=sep))
        else:
            items[new_key] = value
    return items


# =============================================================================
# Decoders
# =============================================================================

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _unescape(text: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 >= len(text):
            out.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u" and i + 6 <= len(text):
            try:
                out.append(chr(int(text[i + 2 : i + 6], 16)))
                i += 6
                continue
            except ValueError:
                pass
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _logical_lines(text: str) -> list[str]:
    lines: list[str] = []
    pending = ""
    for raw in text.splitlines():
        line = raw.strip()
        if not pending and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        lines.append(pending + line)
        pending = ""
    if pending:
        lines.append(pending)
    return lines


def decode_properties(text: str) -> dict[str, str]:
    """Decode Java ``.properties`` text into a flat mapping."""
    result: dict[str, str] = {}
    for line in _logical_lines(text):
        key_end = len(line)
        i = 0
        while i < len(line):
            ch = line[i]
            if ch == "\\":
                i += 2
                continue
            if ch in "=:" or ch.isspace():
                key_end = i
                break
            i += 1
        key = line[:key_end]
        rest = line[key_end:].lstrip(" \t\f")
        if rest[:1] in ("=", ":"):
            rest = rest[1:].lstrip(" \t\f")
        result[_unescape(key)] = _unescape(rest)
    return result


def decode_json(text: str) -> Mapping[str, Any]:
    return json.loads(text) if text.strip() else {}


def decode_yaml(text: str) -> Mapping[str, Any]:
    return yaml.safe_load(text) or {}


def decode_toml(text: str) -> Mapping[str, Any]:
    return tomllib.loads(text)


DECODERS: dict[str, Decoder] = {
    ".properties": decode_properties,
    ".json": decode_json,
    ".yaml": decode_yaml,
    ".yml": decode_yaml,
    ".toml": decode_toml,
}


def decoder_for(path: str | Path) -> Decoder | None:
    """Return the decoder registered for the file's suffix."""
    return DECODERS.get(Path(path).suffix.lower())
