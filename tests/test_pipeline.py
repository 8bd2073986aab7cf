"""
Tests for the Pipeline — one query run end to end (no git)

Covers the main query shapes:
- multi-token AND picks the file matching every token
- contiguous match outranks a gapped one
- a glob matching nothing is a no-match, not an error
- no candidates short-circuits before any token is evaluated
"""

from unittest.mock import Mock

from fad.core.aggregator import NoMatchReason
from fad.core.matcher import TokenMatcher
from fad.core.pipeline import Candidate, QueryStatus, build_candidates, run_query


def run(tokens, paths, matcher=None):
    return run_query(tokens, build_candidates(paths), matcher)


class TestBuildCandidates:

    def test_ordinals_follow_enumeration(self):
        candidates = build_candidates(["b", "a"])
        assert candidates == [Candidate(index=0, path="b"), Candidate(index=1, path="a")]


class TestQueryShapes:

    def test_all_tokens_must_match(self):
        outcome = run(["src", "mod"], ["src/main.x", "src/git/mod.x", "README"])
        assert outcome.status is QueryStatus.SELECTED
        assert outcome.selection.path == "src/git/mod.x"
        assert outcome.selection.index == 1

    def test_contiguous_beats_gapped(self):
        outcome = run(["ab"], ["a/b.x", "ab.x"])
        assert outcome.selection.path == "ab.x"

    def test_glob_matching_nothing(self):
        outcome = run(["*.md"], ["foo.txt", "bar.txt"])
        assert outcome.status is QueryStatus.NO_MATCH
        assert outcome.failed_token == "*.md"
        assert outcome.reason is NoMatchReason.TOKEN_UNMATCHED
        assert outcome.selection is None

    def test_no_candidates_skips_matching(self):
        matcher = Mock(spec=TokenMatcher)
        outcome = run(["anything"], [], matcher)
        assert outcome.status is QueryStatus.NO_CANDIDATES
        matcher.match.assert_not_called()


class TestOutcomes:

    def test_no_tokens_is_noop(self):
        outcome = run([], ["a.py"])
        assert outcome.status is QueryStatus.NO_QUERY
        assert not outcome.selected

    def test_exact_full_path_is_unique_winner(self):
        paths = ["lib/src/main.x", "src/main.x.orig", "src/main.x", "src/mainx"]
        outcome = run(["src/main.x"], paths)
        assert outcome.selection.path == "src/main.x"

    def test_aggregate_score_is_sum(self):
        paths = ["src/git/mod.x", "src/main.x"]
        only_src = run(["src"], paths).ranking
        only_mod = run(["mod"], paths).ranking
        both = run(["src", "mod"], paths).selection
        src_score = {s.path: s.aggregate_score for s in only_src}["src/git/mod.x"]
        mod_score = {s.path: s.aggregate_score for s in only_mod}["src/git/mod.x"]
        assert both.aggregate_score == src_score + mod_score

    def test_mixed_glob_and_fuzzy(self):
        paths = ["src/mod.rs", "src/mod.py", "tests/test_mod.py"]
        outcome = run(["*.py", "mod"], paths)
        assert outcome.selection.path == "src/mod.py"

    def test_glob_only_ties_fall_to_path_order(self):
        outcome = run(["*.py"], ["pkg/b.py", "pkg/a.py", "zz.py"])
        assert outcome.selection.path == "zz.py"
        assert outcome.selection.aggregate_score == 1

    def test_elimination_reported(self):
        outcome = run(["readme", "docs"], ["README", "docs/guide.md"])
        assert outcome.status is QueryStatus.NO_MATCH
        assert outcome.reason is NoMatchReason.ELIMINATED
        assert outcome.tokens == ["readme", "docs"]

    def test_ranking_lists_all_survivors_best_first(self):
        outcome = run(["mod"], ["a/mod.x", "mod.x", "zzz"])
        assert [s.path for s in outcome.ranking] == ["mod.x", "a/mod.x"]
        assert outcome.ranking[0] == outcome.selection
