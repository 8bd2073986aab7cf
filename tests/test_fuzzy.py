"""
Tests for Fuzzy — path-tuned subsequence scoring

These tests validate:
- Subsequence semantics (order matters, gaps allowed)
- Bonuses: contiguous runs, segment starts, camelCase humps
- Case and normalization policies

Pure Python logic, no git required.
"""

import pytest

from fad.core.fuzzy import (
    FuzzyMatcher, CaseMatching, Normalization,
    SCORE_MATCH, BONUS_BOUNDARY, BONUS_FIRST_CHAR_MULTIPLIER,
)


@pytest.fixture
def matcher():
    return FuzzyMatcher()


class TestSubsequence:
    """A needle matches when its chars appear in order."""

    def test_single_char_at_start(self, matcher):
        # Start of string counts as a segment start
        expected = SCORE_MATCH + (BONUS_BOUNDARY + 1) * BONUS_FIRST_CHAR_MULTIPLIER
        assert matcher.score("a", "a") == expected

    def test_gapped_subsequence_matches(self, matcher):
        assert matcher.score("smr", "src/main.rs") is not None

    def test_wrong_order_does_not_match(self, matcher):
        assert matcher.score("ba", "ab") is None

    def test_missing_char_does_not_match(self, matcher):
        assert matcher.score("xyz", "src/main.rs") is None

    def test_needle_longer_than_haystack(self, matcher):
        assert matcher.score("abcdef", "abc") is None

    def test_empty_needle_scores_zero(self, matcher):
        assert matcher.score("", "anything") == 0

    def test_long_gap_score_stays_non_negative(self, matcher):
        score = matcher.score("az", "a" + "b" * 100 + "z")
        assert score is not None
        assert score >= 0


class TestBonuses:
    """Match quality ordering."""

    def test_contiguous_beats_gapped_across_segments(self, matcher):
        assert matcher.score("ab", "ab.x") == 59
        assert matcher.score("ab", "a/b.x") == 56

    def test_contiguous_word_beats_scattered_chars(self, matcher):
        assert matcher.score("main", "src/main.rs") == 109
        assert matcher.score("main", "m/a/i/n.rs") == 100

    def test_segment_start_beats_mid_word(self, matcher):
        assert matcher.score("mod", "src/git/mod.x") > matcher.score("mod", "src/xmodx.x")

    def test_camel_case_hump_bonus(self, matcher):
        assert matcher.score("fb", "FooBar.py") > matcher.score("fb", "foobar.py")

    def test_exact_path_scores_at_least_as_high_as_any_superstring(self, matcher):
        exact = matcher.score("src/main.x", "src/main.x")
        for other in ["src/main.x.bak", "lib/src/main.x", "src/xmain.x"]:
            other_score = matcher.score("src/main.x", other)
            assert other_score is None or other_score <= exact


class TestCaseMatching:
    """Case policies."""

    def test_ignore_is_default(self, matcher):
        assert matcher.score("readme", "README") is not None
        assert matcher.score("README", "readme") is not None

    def test_respect(self):
        m = FuzzyMatcher(case=CaseMatching.RESPECT)
        assert m.score("readme", "README") is None
        assert m.score("README", "README.md") is not None

    def test_smart_lowercase_needle_ignores_case(self):
        m = FuzzyMatcher(case=CaseMatching.SMART)
        assert m.score("readme", "README") is not None

    def test_smart_uppercase_needle_respects_case(self):
        m = FuzzyMatcher(case=CaseMatching.SMART)
        assert m.score("Readme", "readme") is None
        assert m.score("Readme", "Readme.md") is not None


class TestNormalization:
    """Accent and width folding."""

    def test_accents_folded_by_default(self, matcher):
        assert matcher.score("cafe", "café.txt") is not None

    def test_fullwidth_folded(self, matcher):
        assert matcher.score("abc", "ＡＢＣ.txt") is not None

    def test_accented_needle_matches_literally(self, matcher):
        assert matcher.score("café", "cafe.txt") is None
        assert matcher.score("café", "café.txt") is not None

    def test_never_disables_folding(self):
        m = FuzzyMatcher(normalization=Normalization.NEVER)
        assert m.score("cafe", "café.txt") is None

    def test_cached_bonuses_do_not_leak_between_policies(self, matcher):
        first = matcher.score("cafe", "café")
        matcher.score("café", "café")
        assert matcher.score("cafe", "café") == first


class TestMatchList:
    """Scoring a whole candidate list."""

    def test_only_matches_are_keyed_by_index(self, matcher):
        scores = matcher.match_list("mod", ["src/main.x", "src/git/mod.x", "README"])
        assert list(scores) == [1]
        assert scores[1] > 0

    def test_empty_list(self, matcher):
        assert matcher.match_list("a", []) == {}
