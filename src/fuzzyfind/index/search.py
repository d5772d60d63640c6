"""Fuzzy path search over an indexed corpus."""

from __future__ import annotations

import heapq
import logging
from typing import Iterable, List

from fuzzyfind.config import AppConfig
from fuzzyfind.models import Corpus, MatchResult
from fuzzyfind.index.scoring import score_candidate
from fuzzyfind.utils.text import normalize_query

LOGGER = logging.getLogger(__name__)


def ranking_key(result: MatchResult) -> tuple[float, str]:
    return (-result.score, result.path)


def rank(results: Iterable[MatchResult], limit: int) -> List[MatchResult]:
    """Return the ``limit`` best results, highest score first, ties by path."""
    return heapq.nsmallest(limit, results, key=ranking_key)


class Finder:
    """Holds the corpus snapshot and answers queries against it."""

    def __init__(self, corpus: Corpus, config: AppConfig | None = None) -> None:
        self.corpus = corpus
        self.config = config or AppConfig()

    def match(self, query: str) -> Iterable[MatchResult]:
        """Yield every candidate matching the normalized ``query``, unranked."""
        for candidate in self.corpus:
            scored = score_candidate(query, candidate)
            if scored is None:
                continue
            score, positions = scored
            yield MatchResult(candidate=candidate, score=score, positions=positions)

    def search(self, query: str, *, limit: int | None = None) -> List[MatchResult]:
        """Rank the corpus against a raw query line."""
        normalized = normalize_query(query)
        top_k = self.config.clamp_limit(limit)
        results = rank(self.match(normalized), top_k)
        LOGGER.debug("Query %r matched %d result(s)", normalized, len(results))
        return results
