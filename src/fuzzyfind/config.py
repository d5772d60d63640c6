"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_MAX_FILES = 50_000
DEFAULT_MAX_RESULTS = 50


@dataclass(slots=True)
class AppConfig:
    max_files: int = DEFAULT_MAX_FILES
    max_results: int = DEFAULT_MAX_RESULTS
    ignores: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.max_files < 1:
            raise ValueError(f"max_files must be positive, got {self.max_files}")
        if self.max_results < 1:
            raise ValueError(f"max_results must be positive, got {self.max_results}")
        self.ignores = tuple(self.ignores)

    def clamp_limit(self, limit: int | None) -> int:
        """Return ``limit`` bounded to ``[1, max_results]``."""
        if limit is None:
            return self.max_results
        return max(1, min(limit, self.max_results))
