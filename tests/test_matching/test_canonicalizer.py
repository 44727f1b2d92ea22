"""Unit tests for event canonicalization.

Test Strategy:
1. Test order independence of the canonical event
2. Test league lookup (case-insensitive, aliases, extended sports)
3. Test failure when either team does not resolve
4. Test "Team A vs Team B" title parsing
5. Test the flattened resolution map

Each test follows the pattern:
- Given: A league and two raw team names (or a market title)
- When: canonicalize_event() / split_teams() is called
- Then: The canonical event (or None) matches expectations
"""
import pytest

from app.services.matching.canonicalizer import (
    CanonicalEvent,
    build_resolution_map,
    canonicalize_event,
    split_teams,
)


class TestCanonicalizeEvent:
    """Test suite for canonicalize_event()."""

    # Canonical Form Tests
    # ─────────────────────────────────────────────────────────────

    def test_builds_canonical_event(self):
        """Should resolve both teams and order them by ID."""
        event = canonicalize_event("NHL", "Leafs", "Hurricanes")

        assert event == CanonicalEvent(
            league="NHL",
            team_a_id="carolina_hurricanes",
            team_b_id="toronto_maple_leafs",
            team_set_key="carolina_hurricanes|toronto_maple_leafs",
            team_a_full="Carolina Hurricanes",
            team_b_full="Toronto Maple Leafs",
        )

    def test_order_independent(self):
        """Should produce the same event whichever team comes first."""
        forward = canonicalize_event("NHL", "nyr", "tor")
        backward = canonicalize_event("NHL", "tor", "nyr")

        assert forward == backward
        assert forward.team_set_key == "new_york_rangers|toronto_maple_leafs"

    def test_mixed_spellings_agree(self):
        """Should canonicalize abbreviation and nickname spellings alike."""
        book = canonicalize_event("NBA", "lal", "bos")
        poly = canonicalize_event("NBA", "Celtics", "Lakers")

        assert book.team_set_key == poly.team_set_key

    def test_to_dict(self):
        """Should serialize every field."""
        data = canonicalize_event("NHL", "nyr", "tor").to_dict()
        assert data["team_a_full"] == "New York Rangers"
        assert data["team_set_key"] == "new_york_rangers|toronto_maple_leafs"

    # League Lookup Tests
    # ─────────────────────────────────────────────────────────────

    def test_league_case_insensitive(self):
        """Should pick the team map regardless of league case, keeping the given league."""
        event = canonicalize_event("nhl", "nyr", "tor")

        assert event is not None
        assert event.league == "nhl"

    def test_multi_word_league(self):
        """Should resolve multi-word display names."""
        event = canonicalize_event("La Liga", "rma", "bar")
        assert event.team_set_key == "barcelona|real_madrid"

    def test_extended_league(self):
        """Should resolve teams for extended sports."""
        event = canonicalize_event("MLS", "lag", "lafc")
        assert event is not None
        assert {event.team_a_full, event.team_b_full} == {"LA Galaxy", "LAFC"}

    def test_unknown_league(self):
        """Should return None when the league has no team map."""
        assert canonicalize_event("XFL", "nyr", "tor") is None

    # Failure Tests
    # ─────────────────────────────────────────────────────────────

    def test_one_unresolved_team(self):
        """Should return None when either team fails to resolve."""
        assert canonicalize_event("NHL", "Habs", "Leafs") is None
        assert canonicalize_event("NHL", "Leafs", "Habs") is None

    def test_user_mappings(self):
        """Should resolve through user mappings."""
        event = canonicalize_event("NHL", "Habs", "Leafs", user_mappings={"habs": "Montreal Canadiens"})
        assert event.team_set_key == "montreal_canadiens|toronto_maple_leafs"


class TestSplitTeams:
    """Test suite for split_teams()."""

    @pytest.mark.parametrize("title,expected", [
        ("Rangers vs. Maple Leafs", ("Rangers", "Maple Leafs")),
        ("Rangers vs Maple Leafs", ("Rangers", "Maple Leafs")),
        ("Rangers @ Maple Leafs", ("Rangers", "Maple Leafs")),
        ("Arsenal v Chelsea", ("Arsenal", "Chelsea")),
        ("Arsenal v. Chelsea", ("Arsenal", "Chelsea")),
        ("Lakers vs. Celtics - Game 7", ("Lakers", "Celtics")),
        ("LAKERS VS CELTICS", ("LAKERS", "CELTICS")),
    ])
    def test_recognised_shapes(self, title, expected):
        """Should split every supported separator."""
        assert split_teams(title) == expected

    @pytest.mark.parametrize("title", [
        "Will the Lakers win the championship?",
        "Lakers",
        "",
        None,
    ])
    def test_unrecognised_shapes(self, title):
        """Should return None for titles without two teams."""
        assert split_teams(title) is None


class TestResolutionMap:
    """Test suite for build_resolution_map()."""

    def test_contains_every_alias_kind(self):
        """Should include abbreviation, full name, nickname and city."""
        lookup = build_resolution_map({"tor": "Toronto Maple Leafs"})

        assert lookup["tor"] == "Toronto Maple Leafs"
        assert lookup["toronto maple leafs"] == "Toronto Maple Leafs"
        assert lookup["leafs"] == "Toronto Maple Leafs"
        assert lookup["toronto maple"] == "Toronto Maple Leafs"

    def test_later_entries_win(self):
        """Should let later teams overwrite shared aliases."""
        lookup = build_resolution_map({
            "nyr": "New York Rangers",
            "nyi": "New York Islanders",
        })
        assert lookup["new york"] == "New York Islanders"
