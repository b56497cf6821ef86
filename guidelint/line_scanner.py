"""Apply a rule set to a single source file."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Union

from .result import Finding
from .rules import FileRule, LineRule, Rule
from .source import SourceFile, load_source


def scan(source: SourceFile, rules: Sequence[Rule]) -> List[Finding]:
    """Return the findings for ``source``, ordered by line then by rule declaration order.

    Line rules are tested against every line; whole-file rules are
    evaluated once against the full text. An empty file yields no findings.
    """

    if not source.lines:
        return []

    keyed: List[tuple] = []
    for rank, rule in enumerate(rules):
        if isinstance(rule, LineRule):
            for line_no in range(1, len(source.lines) + 1):
                found = rule.match(source, line_no)
                if found is not None:
                    keyed.append((rank, _finding(source, line_no, rule, rule.render(found))))
        elif isinstance(rule, FileRule):
            for line_no, message in rule.evaluate(source):
                keyed.append((rank, _finding(source, line_no, rule, message)))
        else:
            raise TypeError(f"Unsupported rule type: {type(rule).__name__}")

    keyed.sort(key=lambda item: (item[1].line, item[0]))
    return [finding for _, finding in keyed]


def scan_path(path: Union[str, Path], rules: Sequence[Rule]) -> List[Finding]:
    """Load ``path`` and scan it; raises :class:`~guidelint.errors.FileAccessError` if unreadable."""

    return scan(load_source(path), rules)


def _finding(source: SourceFile, line_no: int, rule: Rule, message: str) -> Finding:
    if not 0 <= line_no <= len(source.lines):
        raise ValueError(
            f"Rule '{rule.id}' reported line {line_no} outside {source.path} ({len(source.lines)} lines)"
        )
    return Finding(path=source.path, line=line_no, rule=rule.id, message=message, severity=rule.severity)
