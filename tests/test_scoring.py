"""Tests for fuzzy scoring."""

from __future__ import annotations

import pytest

from fuzzyfind.index.scoring import (
    BASELINE_SCORE,
    BONUS_CONSECUTIVE,
    SCORE_MATCH,
    align,
    score_candidate,
)
from fuzzyfind.models import Candidate
from fuzzyfind.utils.text import is_subsequence


def _score(query: str, path: str) -> float:
    scored = score_candidate(query, Candidate.from_path(path))
    assert scored is not None
    return scored[0]


class TestScoreCandidate:
    """Test score_candidate function."""

    def test_empty_query_baseline(self) -> None:
        """Should match with the baseline score and no positions."""
        assert score_candidate("", Candidate.from_path("src/main.rs")) == (BASELINE_SCORE, ())

    def test_non_matching(self) -> None:
        """Should reject candidates that do not contain the query in order."""
        assert score_candidate("main", Candidate.from_path("src/lib.rs")) is None
        assert score_candidate("niam", Candidate.from_path("src/main.rs")) is None

    def test_query_longer_than_path(self) -> None:
        """Should reject without error."""
        assert score_candidate("abcdef", Candidate.from_path("abc")) is None

    def test_positions_and_score(self) -> None:
        """Should find the filename run and score it."""
        score, positions = score_candidate("main", Candidate.from_path("src/main.rs"))

        assert positions == (4, 5, 6, 7)
        # 4 matches, segment start + filename bonuses, runs of 2, 3 and 4
        assert score == pytest.approx(116 + 1 / 5 - 0.11)

    def test_case_insensitive(self) -> None:
        """Should match the lowercased query against the lowercased path."""
        scored = score_candidate("main", Candidate.from_path("SRC/Main.RS"))

        assert scored is not None
        assert scored[1] == (4, 5, 6, 7)

    def test_prefers_segment_boundary(self) -> None:
        """Should pick the occurrence right after a separator."""
        _, positions = score_candidate("a", Candidate.from_path("xa/a"))

        assert positions == (3,)

    def test_filename_beats_directory(self) -> None:
        """Should favour matches inside the file name."""
        assert _score("foo", "bar/foo") > _score("foo", "foo/bar")

    def test_exact_filename_beats_scattered(self) -> None:
        """Should rank an exact file name above characters spread over directories."""
        assert _score("main", "src/main") >= _score("main", "m/a/i/n")
        assert _score("main", "x/main") > _score("main", "m/a/i/n/x")

    def test_contiguous_beats_gaps(self) -> None:
        """Should reward a compact run over a spread out match."""
        assert _score("abc", "abc.txt") > _score("abc", "axbxc.txt")

    def test_shorter_path_wins_otherwise_equal(self) -> None:
        """Should give a slightly higher score to the shorter path."""
        assert _score("main", "src/main.rs") > _score("main", "src/main.rs.bak")

    def test_earlier_first_match_wins_otherwise_equal(self) -> None:
        """Should give a slightly higher score to the earlier match."""
        assert _score("x", "a/xy") > _score("x", "ay/x")

    def test_deterministic(self) -> None:
        """Should return identical results for identical inputs."""
        candidate = Candidate.from_path("lib/fuzzy_finder/scoring.py")

        assert score_candidate("ffsc", candidate) == score_candidate("ffsc", candidate)

    @pytest.mark.parametrize("query", ["", "m", "main", "s/m", "rs", "mt", "zz", "tests/main", "ain_t"])
    def test_matches_iff_subsequence(self, query: str) -> None:
        """Should match exactly the candidates containing the query in order."""
        for path in ["src/main.rs", "src/lib.rs", "tests/main_test.rs", "README"]:
            candidate = Candidate.from_path(path)
            matched = score_candidate(query, candidate) is not None

            assert matched == is_subsequence(query, candidate.lower)

    def test_positions_spell_the_query(self) -> None:
        """Should report increasing offsets whose characters form the query."""
        candidate = Candidate.from_path("tests/unit/test_fuzzy_matcher.py")
        _, positions = score_candidate("tfm", candidate)

        assert list(positions) == sorted(set(positions))
        assert "".join(candidate.lower[i] for i in positions) == "tfm"


class TestAlign:
    """Test the alignment dynamic program."""

    def test_run_is_super_linear(self) -> None:
        """Should make a run of L characters worth more than L single matches."""
        total, positions = align("abc", "abc", [0, 0, 0])

        assert positions == (0, 1, 2)
        assert total == 3 * SCORE_MATCH + BONUS_CONSECUTIVE * (1 + 2)
        assert total > 3 * SCORE_MATCH

    def test_gap_penalty(self) -> None:
        """Should charge for skipped characters between matches."""
        compact, _ = align("ab", "ab", [0, 0])
        spread, positions = align("ab", "axxb", [0, 0, 0, 0])

        assert positions == (0, 3)
        assert spread < compact

    def test_leading_characters_are_free(self) -> None:
        """Should not penalise text before the first match."""
        total, positions = align("a", "xxxa", [0, 0, 0, 0])

        assert positions == (3,)
        assert total == SCORE_MATCH

    def test_prefers_run_over_bonus_hopping(self) -> None:
        """Should keep a long run instead of jumping between boundaries."""
        candidate = Candidate.from_path("m/a/i/n/main")
        _, positions = score_candidate("main", candidate)

        assert positions == (8, 9, 10, 11)

    def test_query_equals_text(self) -> None:
        total, positions = align("ab", "ab", [1, 1])

        assert positions == (0, 1)
        assert total == 2 * (SCORE_MATCH + 1) + BONUS_CONSECUTIVE


class TestCaseFoldedPaths:
    """Test scoring of paths holding characters that grow when lowercased."""

    def test_scores_without_error(self) -> None:
        scored = score_candidate("txt", Candidate.from_path("İstanbul.txt"))

        assert scored is not None
        assert scored[1] == (9, 10, 11)

    def test_positions_point_into_path(self) -> None:
        """Should report offsets of the original path."""
        _, positions = score_candidate("main", Candidate.from_path("İx/main.rs"))

        assert positions == (3, 4, 5, 6)

    def test_matches_character_itself(self) -> None:
        assert score_candidate("İ", Candidate.from_path("İstanbul.txt")) is not None
