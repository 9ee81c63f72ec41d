"""Display-time masking of sensitive configuration values."""

from __future__ import annotations

import re

MASK = "***MASKED***"
NOT_SET = "<not set>"

# Key names that look like credentials. Used only where no descriptor is
# available to say whether a key is sensitive.
_SENSITIVE_NAME = re.compile(
    r"(password|passwd|secret|token|credential|private[._-]?key|api[._-]?key|access[._-]?key)",
    re.IGNORECASE,
)


def mask_value(value: str | None, sensitive: bool) -> str | None:
    """Return the mask for a present sensitive value, otherwise the value."""
    if value is not None and sensitive:
        return MASK
    return value


def display_value(value: str | None, sensitive: bool) -> str:
    if value is None:
        return NOT_SET
    return MASK if sensitive else value


def looks_sensitive(key: str) -> bool:
    """Guess whether a bare key name refers to a secret."""
    return bool(_SENSITIVE_NAME.search(key))
