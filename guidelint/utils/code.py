"""Source discovery helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Generator, Iterable, Sequence


def iter_code_files(
    root_paths: Iterable[str],
    extensions: Sequence[str] = (".cs",),
    exclude_dirs: Sequence[str] = (),
) -> Generator[Path, None, None]:
    """Yield source files beneath the provided directories, in sorted order.

    Paths that are not directories are yielded unchanged, so a missing file
    named explicitly still reaches the scanner and is reported there.
    """

    wanted = {ext.lower() for ext in extensions}
    excluded = set(exclude_dirs)
    for root in root_paths:
        base = Path(root)
        if not base.is_dir():
            yield base
            continue
        for path in sorted(base.rglob("*")):
            if any(part in excluded for part in path.relative_to(base).parts[:-1]):
                continue
            if path.suffix.lower() in wanted and path.is_file():
                yield path
