"""Exception hierarchy for configuration resolution.

Absence of a value is not an error by itself: resolution reports it as a
value-level state. Only the required-access paths and malformed values
raise.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from confhound.masking import MASK


class ConfigError(Exception):
    """Base configuration error."""

    pass


class MissingRequiredConfigError(ConfigError):
    """Raised when a key has no value in any source and no default."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Required configuration '{key}' not found in any source and has no default")


class TypeConversionError(ConfigError):
    """Raised when a resolved value cannot be converted to the requested type.

    The raw value is kept on the exception. When the key is sensitive the
    message shows the mask instead of the raw value.
    """

    def __init__(
        self,
        key: str,
        raw_value: str,
        target: str,
        *,
        sensitive: bool = False,
        reason: str | None = None,
    ) -> None:
        self.key = key
        self.raw_value = raw_value
        self.target = target
        self.sensitive = sensitive
        shown = MASK if sensitive else repr(raw_value)
        msg = f"Cannot convert configuration '{key}' value {shown} to {target}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class SourceLoadError(ConfigError):
    """Raised when a configuration file exists but cannot be read or parsed."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to load configuration from {self.path}: {reason}")


class ConfigValidationError(ConfigError):
    """Configuration validation error.

    Only raised on request, see ``ValidationResult.raise_if_invalid``.
    """

    def __init__(self, errors: list[Any]) -> None:
        self.errors = errors
        super().__init__(
            "Configuration validation failed: "
            + ", ".join(f"{e.key}: {e.message}" for e in errors)
        )
