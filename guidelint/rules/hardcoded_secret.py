"""Detect string literals that look like embedded credentials."""

from __future__ import annotations

import re
from typing import Optional

from guidelint.severity import Severity
from guidelint.source import SourceFile

from . import LineRule

SENSITIVE_WORDS = ("password", "secret", "key")
SENSITIVE_PATTERN = re.compile("|".join(SENSITIVE_WORDS), re.IGNORECASE)
LITERAL_PATTERN = r"\"(?:[^\"\\\n]|\\.)*\"|'(?:[^'\\\n]|\\.)*'"
COMMENT_PATTERN = r"^\s*(?://|/\*|\*)"


class HardcodedSecretRule(LineRule):
    """Flag a line holding a quoted literal whose own text mentions a sensitive word."""

    def __init__(self, severity: Severity = Severity.HIGH) -> None:
        super().__init__(
            id="hardcoded-secret",
            pattern=LITERAL_PATTERN,
            message="Potential hardcoded sensitive information",
            severity=severity,
            exclude=COMMENT_PATTERN,
        )

    def match(self, source: SourceFile, line_no: int) -> Optional[re.Match]:
        text = source.line(line_no)
        if self.exclude is not None and self.exclude.search(text):
            return None
        for found in self.pattern.finditer(text):
            if SENSITIVE_PATTERN.search(found.group(0)[1:-1]):
                return found
        return None


def get_rule() -> HardcodedSecretRule:
    return HardcodedSecretRule()
