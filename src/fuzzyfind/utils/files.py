"""Utility helpers for walking a project tree."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Callable, Iterator, Sequence


def is_ignored(relative: str, patterns: Sequence[str]) -> bool:
    """Check a ``/`` separated relative path against glob ignore patterns.

    A pattern matches either the whole relative path or any single segment,
    so ``node_modules`` and ``build/*.o`` both work.
    """
    if not patterns:
        return False
    segments = relative.split("/")
    for pattern in patterns:
        if fnmatch.fnmatchcase(relative, pattern):
            return True
        if any(fnmatch.fnmatchcase(segment, pattern) for segment in segments):
            return True
    return False


def iter_file_paths(
    root: Path,
    *,
    ignores: Sequence[str] = (),
    on_error: Callable[[OSError], None] | None = None,
    on_skip: Callable[[str], None] | None = None,
) -> Iterator[str]:
    """Yield regular files under ``root`` as ``/`` separated relative paths.

    Directories and files are visited in sorted order. Directory symlinks are
    not followed; entries that are not regular files (dangling links, fifos,
    sockets) are reported to ``on_skip``. Unreadable subtrees are reported to
    ``on_error`` and skipped.
    """
    for current, dirnames, filenames in os.walk(root, onerror=on_error):
        base = Path(current).relative_to(root)
        dirnames.sort()
        if ignores:
            dirnames[:] = [
                name for name in dirnames if not is_ignored((base / name).as_posix(), ignores)
            ]
        for filename in sorted(filenames):
            relative = (base / filename).as_posix()
            if ignores and is_ignored(relative, ignores):
                continue
            if not os.path.isfile(os.path.join(current, filename)):
                if on_skip is not None:
                    on_skip(relative)
                continue
            yield relative
