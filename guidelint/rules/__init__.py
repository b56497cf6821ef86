"""Rule model shared by the built-in catalog and configured rules.

A rule is either a *line rule*, tested independently against every line
of a file, or a *whole-file rule*, evaluated once against the full text.
Rules are built once and not mutated afterwards; :meth:`with_severity`
returns a copy.
"""

from __future__ import annotations

import copy
import re
import string
from enum import Enum
from typing import FrozenSet, Iterator, Optional, Protocol, Tuple

from guidelint.errors import ConfigurationError
from guidelint.severity import Severity
from guidelint.source import SourceFile

LINE_TEMPLATE_FIELDS: FrozenSet[str] = frozenset({"match"})
FILE_TEMPLATE_FIELDS: FrozenSet[str] = frozenset({"match", "name"})


class Scope(str, Enum):
    LINE = "line"
    FILE = "file"

    @classmethod
    def parse(cls, value: object) -> "Scope":
        text = str(value).strip().lower()
        if text in {"whole-file", "whole_file"}:
            return cls.FILE
        try:
            return cls(text)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown rule scope {value!r}; expected 'line' or 'file'") from exc


class Rule(Protocol):
    """Protocol implemented by all rules."""

    id: str
    scope: Scope
    severity: Severity

    def with_severity(self, severity: Severity) -> "Rule":
        """Return a copy of the rule reporting at ``severity``."""


def compile_pattern(rule_id: str, pattern: str, flags: int = 0) -> re.Pattern:
    """Compile ``pattern`` or fail with a :class:`ConfigurationError` naming the rule."""

    try:
        return re.compile(pattern, flags)
    except (re.error, TypeError) as exc:
        raise ConfigurationError(f"Rule '{rule_id}': invalid pattern {pattern!r}: {exc}") from exc


def check_template(rule_id: str, template: str, allowed: FrozenSet[str]) -> str:
    """Validate the placeholders in a message template."""

    try:
        fields = {name for _, name, _, _ in string.Formatter().parse(template) if name is not None}
    except ValueError as exc:
        raise ConfigurationError(f"Rule '{rule_id}': malformed message template {template!r}: {exc}") from exc
    unknown = sorted(fields - allowed)
    if unknown:
        raise ConfigurationError(
            f"Rule '{rule_id}': unknown placeholder(s) {', '.join(unknown)} in message template"
        )
    return template


class _BaseRule:
    scope: Scope

    def __init__(self, id: str, message: str, severity: Severity) -> None:
        if not id or not str(id).strip():
            raise ConfigurationError("Rule id must be a non-empty string")
        self.id = str(id).strip()
        self.severity = Severity.parse(severity)
        self.message = message

    def with_severity(self, severity: Severity):
        clone = copy.copy(self)
        clone.severity = Severity.parse(severity)
        return clone

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, severity={self.severity.value})"


class LineRule(_BaseRule):
    """Regex rule tested against each line, optionally skipped when ``exclude`` also matches."""

    scope = Scope.LINE

    def __init__(
        self,
        id: str,
        pattern: str,
        message: str,
        severity: Severity = Severity.MEDIUM,
        exclude: Optional[str] = None,
        ignore_case: bool = False,
    ) -> None:
        super().__init__(id, check_template(id, message, LINE_TEMPLATE_FIELDS), severity)
        flags = re.IGNORECASE if ignore_case else 0
        self.pattern = compile_pattern(self.id, pattern, flags)
        self.exclude = compile_pattern(self.id, exclude, flags) if exclude else None

    def match(self, source: SourceFile, line_no: int) -> Optional[re.Match]:
        """Return the match on ``line_no`` (1-indexed), or ``None`` if the rule does not fire."""

        text = source.line(line_no)
        found = self.pattern.search(text)
        if found is None:
            return None
        if self.exclude is not None and self.exclude.search(text):
            return None
        return found

    def render(self, found: re.Match) -> str:
        return self.message.format(match=found.group(0))


class FileRule(_BaseRule):
    """Rule evaluated once against a whole file."""

    scope = Scope.FILE

    def __init__(self, id: str, message: str, severity: Severity = Severity.MEDIUM) -> None:
        super().__init__(id, check_template(id, message, FILE_TEMPLATE_FIELDS), severity)

    def evaluate(self, source: SourceFile) -> Iterator[Tuple[int, str]]:
        """Yield ``(line, message)`` for each violating entity; line 0 when no line applies."""

        raise NotImplementedError


class PatternFileRule(FileRule):
    """Whole-file regex rule reporting each match on the line where it starts."""

    def __init__(
        self,
        id: str,
        pattern: str,
        message: str,
        severity: Severity = Severity.MEDIUM,
        ignore_case: bool = False,
    ) -> None:
        super().__init__(id, message, severity)
        flags = re.MULTILINE | (re.IGNORECASE if ignore_case else 0)
        self.pattern = compile_pattern(self.id, pattern, flags)

    def evaluate(self, source: SourceFile) -> Iterator[Tuple[int, str]]:
        for found in self.pattern.finditer(source.text):
            if not found.group(0):
                continue
            name = (found.group(1) if found.re.groups else None) or found.group(0)
            yield source.line_of_offset(found.start()), self.message.format(match=found.group(0), name=name)
