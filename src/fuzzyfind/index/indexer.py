"""Project tree indexing."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List

from fuzzyfind.config import AppConfig
from fuzzyfind.models import Candidate, Corpus
from fuzzyfind.utils.files import iter_file_paths

LOGGER = logging.getLogger(__name__)


class IndexingError(Exception):
    """Raised when a project root cannot be indexed at all."""

    def __init__(self, root: Path, message: str) -> None:
        super().__init__(message)
        self.root = root


class RootNotFoundError(IndexingError):
    def __init__(self, root: Path) -> None:
        super().__init__(root, f"Root directory not found: {root}")


class RootUnreadableError(IndexingError):
    def __init__(self, root: Path, reason: str = "permission denied") -> None:
        super().__init__(root, f"Root directory is not readable: {root} ({reason})")


@dataclass(slots=True)
class IndexStats:
    files: int = 0
    skipped: int = 0
    errors: int = 0
    truncated: bool = False
    elapsed: float = 0.0


def check_root(root: Path) -> Path:
    """Expand ``root`` and make sure it is a readable directory."""
    resolved = Path(root).expanduser()
    if not resolved.is_dir():
        raise RootNotFoundError(resolved)
    try:
        with os.scandir(resolved):
            pass
    except OSError as exc:
        raise RootUnreadableError(resolved, exc.strerror or str(exc)) from exc
    return resolved


class Indexer:
    """Builds the immutable corpus of a project root."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.stats = IndexStats()

    def build(self, root: Path) -> Corpus:
        """Collect up to ``max_files`` file paths beneath ``root``."""
        resolved = check_root(root)
        self.stats = IndexStats()
        started = time.perf_counter()
        max_files = self.config.max_files

        LOGGER.info("Indexing %s", resolved)
        candidates: List[Candidate] = []
        paths = iter_file_paths(
            resolved,
            ignores=self.config.ignores,
            on_error=self._on_error,
            on_skip=self._on_skip,
        )
        for path in paths:
            if len(candidates) >= max_files:
                self.stats.truncated = True
                LOGGER.warning("Reached maximum file limit: %d", max_files)
                break
            candidates.append(Candidate.from_path(path))
        paths.close()

        self.stats.files = len(candidates)
        self.stats.elapsed = time.perf_counter() - started
        LOGGER.info(
            "Indexed %d files in %.2fs (skipped: %d, errors: %d)",
            self.stats.files,
            self.stats.elapsed,
            self.stats.skipped,
            self.stats.errors,
        )
        return Corpus(candidates, root=str(resolved))

    def _on_error(self, error: OSError) -> None:
        LOGGER.warning("Skipping unreadable directory %s: %s", error.filename, error.strerror or error)
        self.stats.errors += 1

    def _on_skip(self, path: str) -> None:
        LOGGER.debug("Skipping non-regular file %s", path)
        self.stats.skipped += 1
