"""
Tests for namesake.core.matcher — pair enumeration, pruning, scoring,
and the ScopeMatcher error boundary.
"""

import pytest
from namesake.core import matcher as matcher_module
from namesake.core.matcher import (
    Comparison,
    MatchResult,
    Name,
    ScopeCollection,
    ScopeMatcher,
    compare,
    iter_pairs,
    match_scope,
)
from namesake.exceptions import ConfigError, MatchError


def _names(*texts):
    return [Name(t, origin=("origin", i)) for i, t in enumerate(texts)]


# =============================================================================
# iter_pairs
# =============================================================================

class TestIterPairs:
    """Upper-triangular enumeration."""

    @pytest.mark.parametrize("n", [0, 1, 2, 3, 7, 12])
    def test_pair_count(self, n):
        names = _names(*[f"n{i}" for i in range(n)])
        assert len(list(iter_pairs(names))) == n * (n - 1) // 2

    def test_each_pair_once_without_self_pairs(self):
        names = _names("a", "b", "c", "d")
        pairs = [(x.origin[1], y.origin[1]) for x, y in iter_pairs(names)]
        assert pairs == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]

    def test_identical_texts_still_distinct_pairs(self):
        names = _names("x", "x", "x")
        assert len(list(iter_pairs(names))) == 3


# =============================================================================
# match_scope
# =============================================================================

class TestMatchScope:
    """Pruner -> scorer -> extractor over one scope."""

    def test_foo_foobar_barbaz_default_threshold(self):
        assert match_scope(_names("foo", "foobar", "barbaz"), 0.75) == []

    def test_foo_foobar_barbaz_low_threshold(self):
        results = match_scope(_names("foo", "foobar", "barbaz"), 0.4)
        assert [(r.first.text, r.second.text) for r in results] == [
            ("foo", "foobar"),
            ("foobar", "barbaz"),
        ]
        assert [r.score for r in results] == [0.5, 0.5]
        assert [r.evidence for r in results] == ["foo", "bar"]

    def test_score_equal_to_threshold_is_not_a_match(self):
        # foo/foobar scores exactly 0.5.
        assert match_scope(_names("foo", "foobar"), 0.5) == []

    def test_similar_names_match(self):
        results = match_scope(_names("customer_name", "customer_names"))
        assert len(results) == 1
        match = results[0]
        assert match.score == pytest.approx(13 / 14)
        assert match.evidence == "customer_name"
        assert match.percentage == 92

    def test_origin_is_carried_through(self):
        names = _names("ALEXANDRE", "ALEKSANDRE")
        match = match_scope(names)[0]
        assert match.first is names[0]
        assert match.second is names[1]
        assert match.first.origin == ("origin", 0)

    @pytest.mark.parametrize("texts", [(), ("only",)])
    def test_fewer_than_two_names_is_empty(self, texts):
        assert match_scope(_names(*texts)) == []

    def test_accepts_scope_collection(self):
        collection = ScopeCollection("scope", tuple(_names("index", "indexes")))
        results = match_scope(collection, 0.7)
        assert len(results) == 1

    def test_identical_names_match_fully(self):
        results = match_scope(_names("value", "value"))
        assert results[0].score == 1.0
        assert results[0].evidence == "value"

    def test_results_keep_enumeration_order(self):
        names = _names("alpha1", "beta", "alpha2", "alpha3")
        results = match_scope(names)
        assert [(r.first.text, r.second.text) for r in results] == [
            ("alpha1", "alpha2"),
            ("alpha1", "alpha3"),
            ("alpha2", "alpha3"),
        ]

    def test_repeated_calls_are_identical(self):
        names = _names("ALEXANDRE", "ALEKSANDER", "ALEKSANDRE", "ALEXANDER")
        first = match_scope(names, 0.6)
        for _ in range(3):
            assert match_scope(names, 0.6) == first

    def test_considers_every_pair_once(self, monkeypatch):
        seen = []
        real = matcher_module.may_exceed_threshold

        def spy(len_a, len_b, threshold):
            seen.append((len_a, len_b))
            return real(len_a, len_b, threshold)

        monkeypatch.setattr(matcher_module, "may_exceed_threshold", spy)
        match_scope(_names("a", "bb", "ccc", "dddd", "eeeee"))
        assert len(seen) == 10

    def test_pruned_pairs_are_never_scored(self, monkeypatch):
        scored = []
        real = matcher_module.similarity_score

        def spy(a, b):
            scored.append((a, b))
            return real(a, b)

        monkeypatch.setattr(matcher_module, "similarity_score", spy)
        match_scope(_names("ab", "abcdefgh", "abcdefgi"), 0.75)
        assert scored == [("abcdefgh", "abcdefgi")]

    @pytest.mark.parametrize("threshold", [0.0, -0.1, 1.5, float("nan")])
    def test_invalid_threshold_rejected(self, threshold):
        with pytest.raises(ConfigError):
            match_scope(_names("a", "b"), threshold)

    def test_threshold_of_one_never_matches(self):
        # Identical names score 1.0, which does not strictly exceed 1.0.
        results = match_scope(_names("same", "same", "sane"), 1.0)
        assert results == []


# =============================================================================
# compare
# =============================================================================

class TestCompare:
    """Two-string comparison regardless of threshold."""

    def test_compare_below_threshold(self):
        result = compare("ALEXANDRE", "ALEKSANDER")
        assert isinstance(result, Comparison)
        assert result.score == pytest.approx(0.7)
        assert result.evidence == "ALEANDE"
        assert result.exceeds_threshold is False

    def test_compare_above_threshold(self):
        result = compare("ALEXANDRE", "ALEKSANDRE", 0.75)
        assert result.exceeds_threshold is True

    def test_compare_empty(self):
        result = compare("", "name")
        assert result.score == 0.0
        assert result.evidence == ""


# =============================================================================
# ScopeMatcher
# =============================================================================

class TestScopeMatcher:
    """Threshold validation and per-scope error boundary."""

    def test_invalid_threshold_rejected_on_construction(self):
        with pytest.raises(ConfigError):
            ScopeMatcher(0.0)

    def test_match_returns_results(self):
        matcher = ScopeMatcher(0.75)
        results = matcher.match(ScopeCollection("s", tuple(_names("count", "counts"))))
        assert [type(r) for r in results] == [MatchResult]

    def test_failure_is_wrapped_in_match_error(self, monkeypatch):
        def boom(a, b):
            raise MemoryError("table too large")

        monkeypatch.setattr(matcher_module, "similarity_score", boom)
        matcher = ScopeMatcher(0.75)
        with pytest.raises(MatchError, match="scope 'big'") as excinfo:
            matcher.match(ScopeCollection("big", tuple(_names("abcd", "abce"))))
        assert isinstance(excinfo.value.__cause__, MemoryError)

    def test_previous_results_survive_a_failed_scope(self, monkeypatch):
        matcher = ScopeMatcher(0.75)
        good = matcher.match(ScopeCollection("good", tuple(_names("count", "counts"))))

        def boom(a, b):
            raise RuntimeError("broken")

        monkeypatch.setattr(matcher_module, "similarity_score", boom)
        with pytest.raises(MatchError):
            matcher.match(ScopeCollection("bad", tuple(_names("count", "counts"))))
        assert len(good) == 1
        assert good[0].evidence == "count"
