"""Unit tests for the fuzzy team matcher.

Test Strategy:
1. Test Levenshtein similarity edge cases
2. Test each tier (exact, alias, pattern, fuzzy, none) and its confidence
3. Test threshold handling and suggestions on failure
4. Test batch matching and quality statistics

Each test follows the pattern:
- Given: A raw team name and sport code
- When: fuzzy_match_team() is called
- Then: match, method and confidence follow the tier rules
"""
import math

import pytest

from app.services.matching.matchers.fuzzy_team_matcher import (
    FuzzyMethod,
    batch_fuzzy_match,
    fuzzy_match_team,
    get_match_quality_stats,
    get_similar_teams,
    levenshtein_similarity,
)


class TestLevenshteinSimilarity:
    """Test suite for levenshtein_similarity()."""

    def test_identical(self):
        """Should return 1.0 for identical strings."""
        assert levenshtein_similarity("rangers", "rangers") == 1.0

    def test_empty_strings(self):
        """Should treat two empty strings as identical and one as disjoint."""
        assert levenshtein_similarity("", "") == 1.0
        assert levenshtein_similarity("", "rangers") == 0.0
        assert levenshtein_similarity("rangers", "") == 0.0

    def test_known_distance(self):
        """Should normalize edit distance by the longer string."""
        assert levenshtein_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)

    def test_symmetric(self):
        """Should not depend on argument order."""
        assert levenshtein_similarity("leafs", "leaves") == levenshtein_similarity("leaves", "leafs")


class TestFuzzyMatchTiers:
    """Test suite for the matching tiers."""

    # Exact Tier
    # ─────────────────────────────────────────────────────────────

    def test_exact_abbreviation(self):
        """Should match team map abbreviations with confidence 100."""
        result = fuzzy_match_team("NYR", "nhl")

        assert result.match == "New York Rangers"
        assert result.method == FuzzyMethod.EXACT
        assert result.confidence == 100
        assert result.fuzzy_score == 1.0
        assert result.original_input == "NYR"

    def test_exact_official_name(self):
        """Should match normalized official names."""
        result = fuzzy_match_team("st. louis blues", "nhl")
        assert result.match == "St. Louis Blues"
        assert result.method == FuzzyMethod.EXACT

    def test_uppercase_sport_code(self):
        """Should accept sport codes in any case."""
        assert fuzzy_match_team("nyr", "NHL").match == "New York Rangers"

    # Alias Tier
    # ─────────────────────────────────────────────────────────────

    def test_alias_exact(self):
        """Should match curated aliases with confidence 95."""
        result = fuzzy_match_team("buds", "nhl")

        assert result.match == "Toronto Maple Leafs"
        assert result.method == FuzzyMethod.ALIAS
        assert result.confidence == 95

    def test_alias_maps_to_official_spelling(self):
        """Should return the configured spelling for alias keys."""
        assert fuzzy_match_team("saint louis", "nhl").match == "St. Louis Blues"

    def test_alias_substring_scaled(self):
        """Should scale substring confidence by the length ratio."""
        result = fuzzy_match_team("penguin", "nhl")

        assert result.match == "Pittsburgh Penguins"
        assert result.method == FuzzyMethod.ALIAS
        assert result.fuzzy_score == pytest.approx(7 / 8)
        assert result.confidence == 74

    # Pattern Tier
    # ─────────────────────────────────────────────────────────────

    def test_pattern_expansion(self):
        """Should expand abbreviations and retry the alias tier at a penalty."""
        result = fuzzy_match_team("LA Kings", "nhl")

        assert result.match == "Los Angeles Kings"
        assert result.method == FuzzyMethod.PATTERN
        assert result.confidence == 85

    def test_soccer_prefix_stripping(self):
        """Should drop club prefixes for soccer leagues."""
        result = fuzzy_match_team("Real Betis FC", "laliga")

        assert result.match == "Real Betis"
        assert result.method == FuzzyMethod.PATTERN
        assert result.confidence == 85

    # Fuzzy Tier
    # ─────────────────────────────────────────────────────────────

    def test_fuzzy_typo(self):
        """Should match a misspelling by edit distance."""
        result = fuzzy_match_team("torontoo maple leafs", "nhl")

        assert result.match == "Toronto Maple Leafs"
        assert result.method == FuzzyMethod.FUZZY
        assert result.fuzzy_score == pytest.approx(0.95)
        assert result.confidence == math.floor(result.fuzzy_score * 100)

    def test_fuzzy_alternatives_are_other_teams(self):
        """Should list distinct runner-up teams, never the matched team."""
        result = fuzzy_match_team("new york rangerz", "nhl")

        assert result.match == "New York Rangers"
        assert result.method == FuzzyMethod.FUZZY
        assert "New York Rangers" not in result.alternatives
        assert "New York Islanders" in result.alternatives
        assert len(set(result.alternatives)) == len(result.alternatives)

    def test_fuzzy_typo_has_no_self_alternative(self):
        """Should not offer the matched team's alias key as a runner-up."""
        result = fuzzy_match_team("Torronto Mapel Leafs", "nhl")

        assert result.match == "Toronto Maple Leafs"
        assert all(alt.lower() != "toronto maple leafs" for alt in result.alternatives)

    def test_threshold_blocks_weak_match(self):
        """Should refuse fuzzy matches below the threshold."""
        result = fuzzy_match_team("torontoo maple leafs", "nhl", threshold=0.99)
        assert result.method == FuzzyMethod.NONE

    # No Match
    # ─────────────────────────────────────────────────────────────

    def test_none_with_suggestions(self):
        """Should return no match with up to three suggestions."""
        result = fuzzy_match_team("zzzzzz", "nhl")

        assert result.match is None
        assert result.method == FuzzyMethod.NONE
        assert result.confidence == 0
        assert result.fuzzy_score == 0.0
        assert len(result.alternatives) == 3

    def test_unknown_sport(self):
        """Should return no match and no suggestions for an unknown sport."""
        result = fuzzy_match_team("Rangers", "curling")

        assert result.match is None
        assert result.alternatives == []

    def test_to_dict(self):
        """Should serialize the method as its string value."""
        data = fuzzy_match_team("buds", "nhl").to_dict()
        assert data["method"] == "alias"
        assert data["original_input"] == "buds"


class TestSimilarTeams:
    """Test suite for get_similar_teams()."""

    def test_limit(self):
        """Should return at most the requested number of names."""
        assert len(get_similar_teams("rangers", "nhl", limit=2)) == 2

    def test_nearest_first(self):
        """Should rank the closest name first."""
        assert get_similar_teams("New York Rangerz", "nhl")[0] == "New York Rangers"

    def test_suggestions_are_distinct_teams(self):
        """Should not spend suggestion slots on one team twice."""
        suggestions = get_similar_teams("xyzzy", "nhl")

        assert len(suggestions) == 3
        assert len({s.lower() for s in suggestions}) == 3


class TestBatchAndStats:
    """Test suite for batch matching and quality statistics."""

    def test_batch(self):
        """Should match every input in order."""
        results = batch_fuzzy_match(["nyr", "buds", "zzzzzz"], "nhl")
        assert [r.method for r in results] == [FuzzyMethod.EXACT, FuzzyMethod.ALIAS, FuzzyMethod.NONE]

    def test_quality_stats(self):
        """Should aggregate counts, confidence and success rate."""
        stats = get_match_quality_stats(batch_fuzzy_match(["nyr", "buds", "zzzzzz"], "nhl"))

        assert stats["total"] == 3
        assert stats["successful"] == 2
        assert stats["by_method"] == {"exact": 1, "alias": 1, "pattern": 0, "fuzzy": 0, "none": 1}
        assert stats["avg_confidence"] == 97.5
        assert stats["low_confidence"] == 0
        assert stats["success_rate"] == pytest.approx(200 / 3)

    def test_low_confidence_counted(self):
        """Should count successful results under 80 confidence."""
        stats = get_match_quality_stats([fuzzy_match_team("penguin", "nhl")])
        assert stats["low_confidence"] == 1

    def test_empty_batch(self):
        """Should report zeros for an empty batch."""
        stats = get_match_quality_stats([])

        assert stats["total"] == 0
        assert stats["avg_confidence"] == 0
        assert stats["success_rate"] == 0.0
