"""Typed access to resolved configuration values.

Defaults apply only when a value is missing. A value that is present but
malformed raises ``TypeConversionError`` and never falls back to the
default.

Example:
    >>> config = TypedAccessor(resolver)
    >>> config.get_int(ConfigKey("database.pool.max-size", default="20"))
    20
    >>> config.get_duration(ConfigKey("cache.ttl", default="5m"))
    datetime.timedelta(seconds=300)
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any, Callable, TypeVar

from confhound.errors import MissingRequiredConfigError, TypeConversionError
from confhound.keys import KeyDescriptor, KeyLike, as_key
from confhound.masking import display_value
from confhound.resolver import Resolver

T = TypeVar("T")

INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_DURATION = re.compile(r"([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+))(ms|s|m|h)?", re.IGNORECASE)

_DURATION_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
}

_LENIENT_TRUE = frozenset({"true", "yes", "1", "on"})
_LENIENT_FALSE = frozenset({"false", "no", "0", "off"})


# =============================================================================
# Conversions
# =============================================================================


def parse_integer(raw: str, lower: int = LONG_MIN, upper: int = LONG_MAX) -> int:
    """Parse an ASCII base-10 signed integer within ``[lower, upper]``.

    Surrounding whitespace is not accepted.
    """
    if not _INTEGER.fullmatch(raw):
        raise ValueError("not a base-10 integer")
    value = int(raw)
    if not lower <= value <= upper:
        raise ValueError(f"out of range [{lower}, {upper}]")
    return value


def parse_float(raw: str) -> float:
    if not _DECIMAL.fullmatch(raw):
        raise ValueError("not a decimal number")
    return float(raw)


def parse_bool(raw: str) -> bool:
    """Strict boolean: only ``true`` / ``false``, ignoring case."""
    text = raw.lower()
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError("expected 'true' or 'false'")


def parse_bool_lenient(raw: str) -> bool:
    text = raw.lower()
    if text in _LENIENT_TRUE:
        return True
    if text in _LENIENT_FALSE:
        return False
    raise ValueError("expected one of true/false, yes/no, 1/0, on/off")


def parse_list(raw: str, delimiter: str = ",") -> list[str]:
    """Split on ``delimiter``, trim each item and drop empty ones."""
    return [item.strip() for item in raw.split(delimiter) if item.strip()]


def parse_duration(raw: str) -> timedelta:
    """Parse ``250``, ``250ms``, ``30s``, ``5m`` or ``2h``.

    A bare number must be an integer and counts milliseconds.
    """
    match = _DURATION.fullmatch(raw)
    if not match:
        raise ValueError("expected a number with optional unit ms, s, m or h")
    number, unit = match.groups()
    if unit is None:
        if not _INTEGER.fullmatch(number):
            raise ValueError("a duration without unit must be whole milliseconds")
        return timedelta(milliseconds=int(number))
    return _DURATION_UNITS[unit.lower()] * float(number)


# =============================================================================
# Typed Accessor
# =============================================================================


class TypedAccessor:
    """Typed getters over a ``Resolver``.

    Every typed getter raises ``MissingRequiredConfigError`` when neither a
    source nor the descriptor default supplies a value.
    """

    def __init__(self, resolver: Resolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> Resolver:
        return self._resolver

    # -- raw access ----------------------------------------------------------

    def get(self, key: KeyLike) -> str | None:
        """Get the raw value (never masked), or ``None`` if not found."""
        return self._resolver.resolve(key).value

    def get_optional(self, key: KeyLike) -> str | None:
        """Same as ``get``; never raises."""
        resolved = self._resolver.resolve(key)
        return resolved.value if resolved.found else None

    def get_required(self, key: KeyLike) -> str:
        descriptor = as_key(key)
        resolved = self._resolver.resolve(descriptor)
        if not resolved.found or resolved.value is None:
            raise MissingRequiredConfigError(descriptor.name)
        return resolved.value

    def get_or_default(self, key: KeyLike, fallback: T) -> str | T:
        """Get the value from the sources, else ``fallback``.

        The descriptor's own default is bypassed.
        """
        resolved = self._resolver.resolve_from_sources(as_key(key).name)
        return resolved.value if resolved.found and resolved.value is not None else fallback

    def get_str(self, key: KeyLike) -> str:
        return self.get_required(key)

    # -- typed access --------------------------------------------------------

    def get_int(self, key: KeyLike) -> int:
        """Get a 32-bit signed integer."""
        return self._convert(key, "int", lambda raw: parse_integer(raw, INT_MIN, INT_MAX))

    def get_long(self, key: KeyLike) -> int:
        """Get a 64-bit signed integer."""
        return self._convert(key, "long", parse_integer)

    def get_float(self, key: KeyLike) -> float:
        return self._convert(key, "float", parse_float)

    get_double = get_float

    def get_bool(self, key: KeyLike) -> bool:
        """Get a boolean; only ``true``/``false`` are accepted."""
        return self._convert(key, "bool", parse_bool)

    def get_bool_lenient(self, key: KeyLike) -> bool:
        """Get a boolean also accepting yes/no, 1/0 and on/off."""
        return self._convert(key, "bool", parse_bool_lenient)

    def get_list(self, key: KeyLike, delimiter: str = ",") -> list[str]:
        return self._convert(key, "list", lambda raw: parse_list(raw, delimiter))

    def get_duration(self, key: KeyLike) -> timedelta:
        return self._convert(key, "duration", parse_duration)

    def get_as(self, key: KeyLike, converter: Callable[[str], T], target: str | None = None) -> T:
        """Convert with a caller-supplied function.

        ``ValueError`` and ``TypeError`` raised by ``converter`` become
        ``TypeConversionError``.
        """
        return self._convert(key, target or getattr(converter, "__name__", "value"), converter)

    # -- display -------------------------------------------------------------

    def get_for_display(self, key: KeyLike) -> str:
        """Get the value with sensitive keys masked."""
        descriptor = as_key(key)
        return display_value(self._resolver.resolve(descriptor).value, descriptor.sensitive)

    def get_all_for_display(self, *keys: KeyLike) -> str:
        """Render ``name = value`` lines, masked, marking sensitive keys."""
        lines = []
        for key in keys:
            descriptor = as_key(key)
            line = f"{descriptor.name} = {self.get_for_display(descriptor)}"
            if descriptor.sensitive:
                line += " (sensitive)"
            lines.append(line)
        return "\n".join(lines)

    # -- internals -----------------------------------------------------------

    def _convert(self, key: KeyLike, target: str, converter: Callable[[str], Any]) -> Any:
        descriptor: KeyDescriptor = as_key(key)
        raw = self.get_required(descriptor)
        try:
            return converter(raw)
        except (ValueError, TypeError, OverflowError) as e:
            raise TypeConversionError(
                descriptor.name,
                raw,
                target,
                sensitive=descriptor.sensitive,
                reason=str(e),
            ) from e
