"""Fuzzy subsequence scoring of a query against one candidate path.

The score of a matching candidate comes from an alignment of the query
characters onto the path, found by dynamic programming over
(query index, path index). Each cell keeps only its best score and the
run length behind it, so the alignment is deterministic but not always
the globally best one. Every matched character earns ``SCORE_MATCH``
plus the position bonus precomputed on the candidate (segment start,
word start, filename). Characters matched back to back form a run whose
``L``-th character earns ``BONUS_CONSECUTIVE * (L - 1)`` on top, so long
runs grow super-linearly. Gaps between matched characters are penalised,
text before the first match is free.

Two small terms are then added: an earlier first match is worth a little
more, and a longer path costs a little. Both are far below one matched
character, so they only separate otherwise equivalent matches.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from fuzzyfind.models import Candidate
from fuzzyfind.utils.text import is_subsequence

SCORE_MATCH = 16
BONUS_CONSECUTIVE = 6
PENALTY_GAP_START = 3
PENALTY_GAP_EXTENSION = 1
FIRST_MATCH_WEIGHT = 1.0
LENGTH_WEIGHT = 0.01
BASELINE_SCORE = 0.0

_UNREACHABLE = float("-inf")

Score = Tuple[float, Tuple[int, ...]]


def score_candidate(query: str, candidate: Candidate) -> Optional[Score]:
    """Score ``candidate`` against an already lowercased ``query``.

    Returns ``(score, positions)`` or ``None`` when the query is not a
    subsequence of the candidate path. The empty query matches everything
    with ``BASELINE_SCORE`` and no positions.
    """
    if not query:
        return BASELINE_SCORE, ()
    text = candidate.lower
    if len(query) > len(text) or not is_subsequence(query, text):
        return None

    alignment, positions = align(query, text, candidate.bonuses)
    score = alignment + FIRST_MATCH_WEIGHT / (1 + positions[0]) - LENGTH_WEIGHT * len(text)
    return score, positions


def align(query: str, text: str, bonuses: Sequence[int]) -> Tuple[float, Tuple[int, ...]]:
    """Alignment score and matched offsets of ``query`` inside ``text``.

    ``query`` must be a non-empty subsequence of ``text``.
    """
    m, n = len(query), len(text)
    back: List[List[int]] = []
    prev_scores: List[float] = []
    prev_runs: List[int] = []

    for i, char in enumerate(query):
        scores = [_UNREACHABLE] * n
        runs = [0] * n
        origins = [-1] * n
        last = n - (m - i)

        if i == 0:
            for j in range(last + 1):
                if text[j] == char:
                    scores[j] = SCORE_MATCH + bonuses[j]
                    runs[j] = 1
        else:
            # best predecessor at k <= j - 2, already charged for the gap up to j
            gap_best = _UNREACHABLE
            gap_from = -1
            for j in range(i, last + 1):
                if j >= 2:
                    opened = prev_scores[j - 2] - PENALTY_GAP_START
                    decayed = gap_best - PENALTY_GAP_EXTENSION
                    if opened > decayed:
                        gap_best, gap_from = opened, j - 2
                    else:
                        gap_best = decayed
                if text[j] != char:
                    continue

                gain = SCORE_MATCH + bonuses[j]
                best = _UNREACHABLE
                if prev_scores[j - 1] > _UNREACHABLE:
                    best = prev_scores[j - 1] + gain + BONUS_CONSECUTIVE * prev_runs[j - 1]
                    origins[j] = j - 1
                    runs[j] = prev_runs[j - 1] + 1
                if gap_best + gain > best:
                    best = gap_best + gain
                    origins[j] = gap_from
                    runs[j] = 1
                scores[j] = best

        back.append(origins)
        prev_scores, prev_runs = scores, runs

    end = -1
    total = _UNREACHABLE
    for j, value in enumerate(prev_scores):
        if value > total:
            total, end = value, j

    positions = [end]
    for i in range(m - 1, 0, -1):
        end = back[i][end]
        positions.append(end)
    positions.reverse()
    return total, tuple(positions)
