"""Detect exception handlers that silently swallow errors."""

from __future__ import annotations

from guidelint.severity import Severity

from . import LineRule

EMPTY_CATCH_PATTERN = r"\bcatch\b\s*(?:\([^)]*\))?\s*\{\s*\}"


def get_rule() -> LineRule:
    return LineRule(
        id="empty-catch",
        pattern=EMPTY_CATCH_PATTERN,
        message="Empty catch block found",
        severity=Severity.MEDIUM,
    )
