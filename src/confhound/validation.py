"""Declarative validation of resolved configuration.

Rules are attached to a ``ConfigKey`` (``rules=...``) or passed to
``Validator.validate`` per key name. Every rule of every key runs; all
violations are collected, in key order, into a ``ValidationResult``.
Validation never raises unless ``raise_if_invalid`` is called.

Example:
    >>> PORT = ConfigKey("server.port", rules=(Required(), Range(1, 65535)))
    >>> result = Validator(resolver).validate(PORT)
    >>> result.valid
    True
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from confhound.accessors import parse_float
from confhound.errors import ConfigValidationError
from confhound.keys import KeyDescriptor, KeyLike, as_key
from confhound.resolver import ResolvedValue, Resolver


# =============================================================================
# Rules
# =============================================================================


class Rule(ABC):
    """A single check against a resolved value."""

    #: Skip the rule when the key resolved to nothing.
    requires_value: bool = True

    @abstractmethod
    def check(self, key: KeyDescriptor, resolved: ResolvedValue) -> str | None:
        """Return an error message, or ``None`` when the value passes."""
        pass


@dataclass(frozen=True)
class Required(Rule):
    requires_value = False

    def check(self, key: KeyDescriptor, resolved: ResolvedValue) -> str | None:
        if not resolved.found:
            return "is required but has no value and no default"
        return None


@dataclass(frozen=True)
class NotEmpty(Rule):
    """Present and non-blank; a missing value fails too."""

    requires_value = False

    def check(self, key: KeyDescriptor, resolved: ResolvedValue) -> str | None:
        if not resolved.found or not (resolved.value or "").strip():
            return "must not be empty"
        return None


@dataclass(frozen=True)
class Pattern(Rule):
    """The whole value must match ``regex``."""

    regex: str
    flags: int = 0
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.regex, self.flags))

    def check(self, key: KeyDescriptor, resolved: ResolvedValue) -> str | None:
        if not self._compiled.fullmatch(resolved.value or ""):
            return f"must match pattern '{self.regex}'"
        return None


@dataclass(frozen=True)
class Range(Rule):
    """Numeric value within the inclusive range ``[min, max]``."""

    min: float | None = None
    max: float | None = None

    def check(self, key: KeyDescriptor, resolved: ResolvedValue) -> str | None:
        try:
            number = parse_float(resolved.value or "")
        except ValueError:
            return "must be a number"
        if self.min is not None and number < self.min:
            return f"must be >= {_fmt(self.min)}"
        if self.max is not None and number > self.max:
            return f"must be <= {_fmt(self.max)}"
        return None


@dataclass(frozen=True)
class OneOf(Rule):
    choices: tuple[str, ...]
    ignore_case: bool = False

    def check(self, key: KeyDescriptor, resolved: ResolvedValue) -> str | None:
        value = resolved.value or ""
        if self.ignore_case:
            ok = value.casefold() in {c.casefold() for c in self.choices}
        else:
            ok = value in self.choices
        if not ok:
            return f"must be one of {list(self.choices)}"
        return None


def _fmt(number: float) -> str:
    return str(int(number)) if float(number).is_integer() else str(number)


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class ValidationError:
    """One violation. Collected, never raised."""

    key: str
    message: str

    def __str__(self) -> str:
        return f"{self.key}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[ValidationError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def errors_for(self, key: str) -> list[ValidationError]:
        return [e for e in self.errors if e.key == key]

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ConfigValidationError(list(self.errors))

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [{"key": e.key, "message": e.message} for e in self.errors],
        }


# =============================================================================
# Validator
# =============================================================================


class Validator:
    """Runs rules against values produced by a ``Resolver``."""

    def __init__(self, resolver: Resolver) -> None:
        self._resolver = resolver

    def validate(
        self,
        *keys: KeyLike,
        rules: Mapping[str, Iterable[Rule]] | None = None,
    ) -> ValidationResult:
        """Validate ``keys``.

        Args:
            *keys: Descriptors (or names) to check, in reporting order.
            rules: Extra rules per key name, run after the key's own rules.

        Returns:
            ValidationResult with every violation found.
        """
        errors: list[ValidationError] = []
        for key in keys:
            descriptor = as_key(key)
            key_rules: Sequence[Rule] = [
                *getattr(descriptor, "rules", ()),
                *((rules or {}).get(descriptor.name, ())),
            ]
            if not key_rules:
                continue
            resolved = self._resolver.resolve(descriptor)
            for rule in key_rules:
                if rule.requires_value and not resolved.found:
                    continue
                message = rule.check(descriptor, resolved)
                if message is not None:
                    errors.append(ValidationError(descriptor.name, message))
        return ValidationResult(tuple(errors))
