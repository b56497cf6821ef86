"""Report leftover TODO/FIXME/HACK markers."""

from __future__ import annotations

from guidelint.severity import Severity

from . import LineRule

MARKER_PATTERN = r"TODO|FIXME|HACK"


def get_rule() -> LineRule:
    return LineRule(
        id="todo-marker",
        pattern=MARKER_PATTERN,
        message="TODO/FIXME/HACK comment found",
        severity=Severity.LOW,
    )
