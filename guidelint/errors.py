"""Exception types raised by the scanner."""

from __future__ import annotations


class GuidelintError(Exception):
    """Base class for scanner errors."""


class ConfigurationError(GuidelintError, ValueError):
    """A rule or configuration entry is malformed; the scan cannot start."""


class FileAccessError(GuidelintError, OSError):
    """A single source file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
