"""Severity definitions for scanner findings."""

from __future__ import annotations

from enum import Enum

from .errors import ConfigurationError


class Severity(str, Enum):
    """Enumerate the supported severity levels for findings."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"

    @property
    def exit_priority(self) -> int:
        """Return an integer ranking to drive exit code decisions."""

        ordering = {
            Severity.CRITICAL: 2,
            Severity.HIGH: 2,
            Severity.MEDIUM: 1,
            Severity.LOW: 0,
            Severity.INFO: 0,
        }
        return ordering[self]

    @classmethod
    def parse(cls, value: object) -> "Severity":
        """Resolve a case-insensitive severity name, failing as a configuration error."""

        if isinstance(value, Severity):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            allowed = ", ".join(level.value for level in cls)
            raise ConfigurationError(f"Unknown severity {value!r}; expected one of {allowed}") from exc
