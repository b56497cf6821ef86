"""Source file loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from .errors import FileAccessError


@dataclass(frozen=True)
class SourceFile:
    """A scanned file: its path and raw text, addressable by 1-indexed line."""

    path: str
    text: str
    lines: List[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Only "\n" ends a line; line_of_offset counts the same way.
        lines = self.text.split("\n")
        if lines[-1] == "":
            lines.pop()
        object.__setattr__(self, "lines", [line[:-1] if line.endswith("\r") else line for line in lines])

    def line(self, line_no: int) -> str:
        """Return the text of ``line_no`` (1-indexed), or an empty string when out of range."""

        idx = line_no - 1
        if 0 <= idx < len(self.lines):
            return self.lines[idx]
        return ""

    def line_of_offset(self, offset: int) -> int:
        """Map a character offset in ``text`` to its 1-indexed line number."""

        return self.text.count("\n", 0, offset) + 1


def load_source(path: Union[str, Path]) -> SourceFile:
    """Read ``path`` as UTF-8 text (BOM tolerated).

    Raises :class:`FileAccessError` when the file is missing, is not a
    regular file, cannot be read, or is not valid UTF-8.
    """

    file_path = Path(path)
    if not file_path.exists():
        raise FileAccessError(str(path), "file not found")
    if not file_path.is_file():
        raise FileAccessError(str(path), "not a regular file")
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FileAccessError(str(path), f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    except OSError as exc:
        raise FileAccessError(str(path), exc.strerror or str(exc)) from exc
    return SourceFile(path=str(path), text=text)
