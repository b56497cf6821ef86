"""Flag control-flow statements whose body is not wrapped in braces."""

from __future__ import annotations

import re
from typing import Optional, Tuple

from guidelint.severity import Severity
from guidelint.source import SourceFile

from . import LineRule

HEADER_PATTERN = r"(?<![\w#@])(if|for|foreach|while)\s*\("
COMMENT_PATTERN = r"^\s*(?://|/\*|\*)"
LITERAL = re.compile(r"\"(?:[^\"\\\n]|\\.)*\"|'(?:[^'\\\n]|\\.)*'")
INLINE_COMMENT = re.compile(r"/\*.*?\*/")
MAX_HEADER_LINES = 10


def code_only(text: str) -> str:
    """Blank string literals and inline comments, drop a trailing ``//`` comment.

    Column positions are preserved so offsets into the result are offsets into ``text``.
    """

    text = LITERAL.sub(lambda m: m.group(0)[0] + " " * (len(m.group(0)) - 2) + m.group(0)[-1], text)
    text = INLINE_COMMENT.sub(lambda m: " " * len(m.group(0)), text)
    cut = text.find("//")
    return text if cut < 0 else text[:cut]


class MissingBracesRule(LineRule):
    """Warn when an ``if``/``for``/``foreach``/``while`` header is not followed by ``{``."""

    def __init__(self, severity: Severity = Severity.MEDIUM) -> None:
        super().__init__(
            id="missing-braces",
            pattern=HEADER_PATTERN,
            message="Missing braces for control statement",
            severity=severity,
            exclude=COMMENT_PATTERN,
        )

    def match(self, source: SourceFile, line_no: int) -> Optional[re.Match]:
        text = source.line(line_no)
        if self.exclude is not None and self.exclude.search(text):
            return None
        code = code_only(text)
        for found in self.pattern.finditer(code):
            if self._is_flagged(source, line_no, code, found):
                return found
        return None

    def _is_flagged(self, source: SourceFile, line_no: int, code: str, found: re.Match) -> bool:
        keyword = found.group(1)
        before = code[: found.start()].rstrip()
        # A "} while (...)" closes a do/while loop rather than opening a body.
        if keyword == "while" and before.endswith("}"):
            return False

        closing = self._close_header(source, line_no, code, found.end() - 1)
        if closing is None:
            return False
        close_line, tail = closing
        tail = tail.strip()

        if tail.startswith("{"):
            return False
        if not tail and self._next_code_line(source, close_line).startswith("{"):
            return False
        if keyword == "while" and tail == ";" and not before and self._previous_code_line(source, line_no).endswith("}"):
            return False
        return True

    def _close_header(
        self, source: SourceFile, line_no: int, code: str, open_index: int
    ) -> Optional[Tuple[int, str]]:
        """Follow the header's parentheses to their close; return the closing line and the code after it."""

        depth = 0
        start = open_index
        last_line = min(len(source.lines), line_no + MAX_HEADER_LINES - 1)
        for current in range(line_no, last_line + 1):
            text = code if current == line_no else code_only(source.line(current))
            for idx in range(start, len(text)):
                char = text[idx]
                if char == "(":
                    depth += 1
                elif char == ")":
                    depth -= 1
                    if depth == 0:
                        return current, text[idx + 1 :]
            start = 0
        return None

    def _next_code_line(self, source: SourceFile, line_no: int) -> str:
        for current in range(line_no + 1, len(source.lines) + 1):
            text = code_only(source.line(current)).strip()
            if text:
                return text
        return ""

    def _previous_code_line(self, source: SourceFile, line_no: int) -> str:
        for current in range(line_no - 1, 0, -1):
            text = code_only(source.line(current)).strip()
            if text:
                return text
        return ""


def get_rule() -> MissingBracesRule:
    return MissingBracesRule()
