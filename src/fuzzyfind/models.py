"""Core fuzzyfind data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Set, Tuple

from fuzzyfind.utils.text import SEPARATOR, WORD_DELIMITERS, fold_case, split_segments

BONUS_BOUNDARY = 8
BONUS_WORD = 6
BONUS_FILENAME = 2


def compute_bonuses(path: str, boundaries: Sequence[int]) -> Tuple[int, ...]:
    """Per-position bonus earned by a query character matched at that offset."""
    name_start = boundaries[-1] if boundaries else 0
    starts = set(boundaries)
    bonuses = []
    for index, char in enumerate(path):
        if index in starts:
            bonus = BONUS_BOUNDARY
        else:
            previous = path[index - 1]
            if previous in WORD_DELIMITERS or (previous.islower() and char.isupper()):
                bonus = BONUS_WORD
            else:
                bonus = 0
        if index >= name_start:
            bonus += BONUS_FILENAME
        bonuses.append(bonus)
    return tuple(bonuses)


@dataclass(frozen=True, slots=True)
class Candidate:
    """One indexed file, relative to the project root."""

    path: str
    lower: str
    segments: Tuple[str, ...]
    boundaries: Tuple[int, ...]
    bonuses: Tuple[int, ...] = field(repr=False, compare=False)

    @classmethod
    def from_path(cls, path: str) -> "Candidate":
        segments, boundaries = split_segments(path)
        return cls(
            path=path,
            lower=fold_case(path),
            segments=segments,
            boundaries=boundaries,
            bonuses=compute_bonuses(path, boundaries),
        )

    @property
    def name(self) -> str:
        return self.segments[-1]

    @property
    def name_start(self) -> int:
        return self.boundaries[-1]


class Corpus(Sequence[Candidate]):
    """Ordered, duplicate-free and read-only collection of candidates."""

    __slots__ = ("_candidates", "root")

    def __init__(self, candidates: Iterable[Candidate] = (), *, root: str | None = None) -> None:
        seen = set()
        unique: List[Candidate] = []
        for candidate in candidates:
            if candidate.path in seen:
                continue
            seen.add(candidate.path)
            unique.append(candidate)
        self._candidates = tuple(unique)
        self.root = root

    @classmethod
    def from_paths(
        cls,
        paths: Iterable[str],
        *,
        max_files: int | None = None,
        root: str | None = None,
    ) -> "Corpus":
        candidates: List[Candidate] = []
        seen = set()
        for path in paths:
            if max_files is not None and len(candidates) >= max_files:
                break
            if path in seen:
                continue
            seen.add(path)
            candidates.append(Candidate.from_path(path))
        return cls(candidates, root=root)

    def __getitem__(self, index):
        return self._candidates[index]

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates)

    def __repr__(self) -> str:
        return f"Corpus(root={self.root!r}, size={len(self)})"

    @property
    def paths(self) -> List[str]:
        return [candidate.path for candidate in self._candidates]

    @property
    def longest(self) -> int:
        return max((len(candidate.path) for candidate in self._candidates), default=0)


@dataclass(slots=True)
class MatchResult:
    """A scored match of a query against one candidate."""

    candidate: Candidate
    score: float
    positions: Tuple[int, ...] = ()

    @property
    def path(self) -> str:
        return self.candidate.path

    def highlighted(self, left: str = "(", right: str = ")") -> str:
        """Render the path with every matched run wrapped in markers.

        ``src/(main).rs`` is the highlighted form of ``src/main.rs`` matched
        against ``main``.
        """
        path = self.candidate.path
        return _highlight_span(path, range(len(path)), set(self.positions), left, right)

    def abbreviated(self, left: str = "(", right: str = ")") -> str:
        """Highlighted path with unmatched directories cut to their first character."""
        candidate = self.candidate
        matched = set(self.positions)
        parts = []
        for segment, start in zip(candidate.segments[:-1], candidate.boundaries[:-1]):
            span = range(start, start + len(segment))
            if matched.intersection(span):
                parts.append(_highlight_span(candidate.path, span, matched, left, right))
            else:
                parts.append(segment[:1])
        name_span = range(candidate.name_start, len(candidate.path))
        parts.append(_highlight_span(candidate.path, name_span, matched, left, right))
        return SEPARATOR.join(parts)


def _highlight_span(path: str, span: range, matched: Set[int], left: str, right: str) -> str:
    out = []
    inside = False
    for index in span:
        hit = index in matched
        if hit and not inside:
            out.append(left)
        elif inside and not hit:
            out.append(right)
        inside = hit
        out.append(path[index])
    if inside:
        out.append(right)
    return "".join(out)
