"""Require XML documentation on public type declarations."""

from __future__ import annotations

import re
from typing import Iterator, Tuple

from guidelint.severity import Severity
from guidelint.source import SourceFile

from . import FileRule

MODIFIERS = ("static", "sealed", "abstract", "partial", "readonly", "ref", "unsafe", "new")
DECLARATION_PATTERN = re.compile(
    r"\bpublic\s+(?:(?:" + "|".join(MODIFIERS) + r")\s+)*"
    r"(?:class|interface|struct|enum|record(?:\s+(?:class|struct))?)\s+@?([A-Za-z_]\w*)"
)
COMMENT_LINE = re.compile(r"^\s*(?://|/\*|\*)")
DOC_LINE = re.compile(r"^\s*///")
ATTRIBUTE_LINE = re.compile(r"^\s*\[.*\]\s*$")


class MissingDocCommentRule(FileRule):
    """Flag public types with no ``///`` block above them and no doc comment naming them.

    A type counts as documented when the nearest code above its
    declaration (skipping blank lines and attributes) is a ``///`` line,
    or when any ``///`` line in the file mentions the type name.
    """

    def __init__(self, severity: Severity = Severity.LOW) -> None:
        super().__init__(
            id="missing-doc-comment",
            message="Public type '{name}' missing documentation",
            severity=severity,
        )

    def evaluate(self, source: SourceFile) -> Iterator[Tuple[int, str]]:
        doc_text = "\n".join(line for line in source.lines if DOC_LINE.match(line))
        for line_no, text in enumerate(source.lines, start=1):
            if COMMENT_LINE.match(text):
                continue
            for found in DECLARATION_PATTERN.finditer(text):
                name = found.group(1)
                if self._has_doc_block(source, line_no) or re.search(rf"\b{re.escape(name)}\b", doc_text):
                    continue
                yield line_no, self.message.format(name=name, match=found.group(0))

    def _has_doc_block(self, source: SourceFile, line_no: int) -> bool:
        for current in range(line_no - 1, 0, -1):
            text = source.line(current)
            if not text.strip() or ATTRIBUTE_LINE.match(text):
                continue
            return bool(DOC_LINE.match(text))
        return False


def get_rule() -> MissingDocCommentRule:
    return MissingDocCommentRule()
