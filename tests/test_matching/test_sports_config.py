"""Unit tests for sport configuration and the alias tables.

Test Strategy:
1. Test config lookups (core vs extended, case handling, league aliases)
2. Test free-text sport detection order
3. Test Odds API endpoint builders
4. Test pattern expansion used by the fuzzy matcher
"""
import pytest

from app.services.matching.sports_config import (
    ALL_SPORT_CODES,
    SPORT_CODES,
    build_outright_endpoints,
    build_sport_endpoints,
    detect_sport_from_text,
    get_all_h2h_sports,
    get_all_outright_sports,
    get_league_name,
    get_sport_code_from_league,
    get_sport_code_from_name,
    get_sport_config,
    get_team_map,
)
from app.services.matching.team_aliases import expand_patterns, get_aliases


class TestSportConfig:
    """Test suite for configuration lookups."""

    # Lookup Tests
    # ─────────────────────────────────────────────────────────────

    def test_core_and_extended_codes(self):
        """Should keep extended sports out of the core list."""
        assert SPORT_CODES == ["nhl", "nba", "nfl", "epl", "laliga", "seriea", "bundesliga", "ucl", "cbb"]
        assert "mls" in ALL_SPORT_CODES
        assert "mls" not in SPORT_CODES

    def test_get_sport_config(self):
        """Should find configs case-insensitively and return None otherwise."""
        assert get_sport_config("NHL").name == "NHL"
        assert get_sport_config("curling") is None
        assert get_sport_config(None) is None

    def test_team_map_read_only(self):
        """Should expose team maps as read-only mappings."""
        with pytest.raises(TypeError):
            get_team_map("nhl")["xxx"] = "Nobody"

    def test_team_map_unknown_sport(self):
        """Should return an empty map for unknown sports."""
        assert len(get_team_map("curling")) == 0

    def test_league_name(self):
        """Should use the display name, falling back to upper case."""
        assert get_league_name("laliga") == "La Liga"
        assert get_league_name("xfl") == "XFL"

    @pytest.mark.parametrize("league,expected", [
        ("NHL", "nhl"),
        ("nhl", "nhl"),
        ("La Liga", "laliga"),
        ("NCAA", "cbb"),
        ("CBB", "cbb"),
        ("MLS", None),
        ("XFL", None),
        ("", None),
    ])
    def test_sport_code_from_league(self, league, expected):
        """Should match display names case-insensitively among core sports."""
        assert get_sport_code_from_league(league) == expected

    def test_sport_code_from_league_extended(self):
        """Should include extended sports and their aliases on request."""
        assert get_sport_code_from_league("MLS", include_extended=True) == "mls"
        assert get_sport_code_from_league("MMA", include_extended=True) == "ufc"
        assert get_sport_code_from_league("WTA", include_extended=True) == "wta"

    def test_sport_code_from_name(self):
        """Should require the exact display name."""
        assert get_sport_code_from_name("Serie A") == "seriea"
        assert get_sport_code_from_name("serie a") is None

    # Detection Tests
    # ─────────────────────────────────────────────────────────────

    @pytest.mark.parametrize("text,expected", [
        ("Blackhawks vs. Red Wings", "NHL"),
        ("Lakers vs. Celtics", "NBA"),
        ("Chiefs vs. Eagles", "NFL"),
        ("Arsenal vs. Chelsea", "EPL"),
        ("March Madness: Duke vs UNC", "NCAA"),
        ("Who will win the election?", None),
        ("", None),
    ])
    def test_detect_sport(self, text, expected):
        """Should classify titles by the first matching sport."""
        assert detect_sport_from_text(text) == expected

    def test_detect_extended(self):
        """Should only detect extended sports on request."""
        assert detect_sport_from_text("UFC 300 main event") is None
        assert detect_sport_from_text("UFC 300 main event", include_extended=True) == "UFC"

    # Endpoint Tests
    # ─────────────────────────────────────────────────────────────

    def test_sport_endpoints(self):
        """Should key h2h endpoints by display name."""
        endpoints = build_sport_endpoints()

        assert endpoints["NBA"] == {"sport": "basketball_nba", "markets": "h2h,totals"}
        assert "MLS" not in endpoints
        assert "MLS" in build_sport_endpoints(include_extended=True)

    def test_outright_endpoints(self):
        """Should map game sport keys to futures keys."""
        assert build_outright_endpoints()["icehockey_nhl"] == "icehockey_nhl_championship_winner"

    def test_all_sport_lists(self):
        """Should list every configured sport."""
        assert len(get_all_h2h_sports()) == len(ALL_SPORT_CODES)
        assert "soccer_usa_mls_winner" in get_all_outright_sports()


class TestPatternExpansion:
    """Test suite for expand_patterns()."""

    @pytest.mark.parametrize("value,sport_code,expected", [
        ("ny rangers", "nhl", "new york rangers"),
        ("la kings", "nhl", "los angeles kings"),
        ("tbl", "nhl", "tampa bay lightning"),
        ("real betis fc", "laliga", "real betis"),
        ("man city", "epl", "manchester city"),
        ("fc cincinnati", "mls", "cincinnati"),
        ("rangers", "nhl", "rangers"),
    ])
    def test_expand(self, value, sport_code, expected):
        """Should expand shorthand and drop club prefixes."""
        assert expand_patterns(value, sport_code) == expected

    def test_soccer_rules_not_applied_elsewhere(self):
        """Should keep club prefixes for non-soccer sports."""
        assert expand_patterns("fc dallas", "nhl") == "fc dallas"

    def test_get_aliases(self):
        """Should return the curated table or an empty dict."""
        assert "buds" in get_aliases("NHL")["toronto maple leafs"]
        assert get_aliases("curling") == {}
