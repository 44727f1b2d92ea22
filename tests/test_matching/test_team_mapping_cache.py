"""Unit tests for the user team mapping cache.

Test Strategy:
1. Test key normalization and per-sport isolation
2. Test TTL expiry with an injected clock
3. Test stale-on-error fallback and empty maps on first failure
4. Test get_all() keying and clear()
5. Test the SQL-backed store against the test database

Each test follows the pattern:
- Given: A store with (or without) corrections and a fake clock
- When: The cache is read, the clock advanced or the store broken
- Then: The cache refetches only when the entry has expired
"""
import logging

import pytest

from app.repositories import TeamMappingRepository
from app.services.matching.team_mapping_cache import (
    EMPTY_MAPPINGS,
    SqlTeamMappingStore,
    TeamMappingCache,
)

LOGGER_NAME = "app.services.matching.team_mapping_cache"

NHL_ROW = {"source_name": "N.Y. Rangers", "canonical_name": "New York Rangers", "sport_code": "nhl"}
NBA_ROW = {"source_name": "Dubs", "canonical_name": "Golden State Warriors", "sport_code": "nba"}


class TestTeamMappingCache:
    """Test suite for TeamMappingCache."""

    # Loading Tests
    # ─────────────────────────────────────────────────────────────

    def test_normalizes_source_names(self, mapping_store, mapping_cache):
        """Should key mappings by normalized source name."""
        mapping_store.rows = [NHL_ROW]
        assert dict(mapping_cache.get("nhl")) == {"ny rangers": "New York Rangers"}

    def test_sports_isolated(self, mapping_store, mapping_cache):
        """Should only return mappings for the requested sport."""
        mapping_store.rows = [NHL_ROW, NBA_ROW]

        assert dict(mapping_cache.get("nba")) == {"dubs": "Golden State Warriors"}
        assert "dubs" not in mapping_cache.get("nhl")

    def test_empty_store(self, mapping_cache):
        """Should return an empty map when no corrections exist."""
        assert len(mapping_cache.get("nhl")) == 0

    def test_entries_immutable(self, mapping_store, mapping_cache):
        """Should hand out read-only mappings."""
        mapping_store.rows = [NHL_ROW]
        mappings = mapping_cache.get("nhl")

        with pytest.raises(TypeError):
            mappings["habs"] = "Montreal Canadiens"

    def test_logs_load(self, mapping_store, mapping_cache, caplog):
        """Should log how many mappings were loaded."""
        mapping_store.rows = [NHL_ROW]
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            mapping_cache.get("nhl")

        assert "[TEAM-MAPPING-CACHE] Loaded 1 mappings for nhl" in caplog.text

    # TTL Tests
    # ─────────────────────────────────────────────────────────────

    def test_no_refetch_while_fresh(self, mapping_store, mapping_cache, fake_clock):
        """Should serve the cached entry before the TTL elapses."""
        mapping_cache.get("nhl")
        fake_clock.advance(299)
        mapping_cache.get("nhl")

        assert mapping_store.fetch_calls == 1
        assert mapping_cache.age_of("nhl") == 299

    def test_refetch_at_ttl(self, mapping_store, mapping_cache, fake_clock):
        """Should refetch once the entry is TTL seconds old."""
        mapping_cache.get("nhl")
        mapping_store.rows = [NHL_ROW]
        fake_clock.advance(300)

        assert dict(mapping_cache.get("nhl")) == {"ny rangers": "New York Rangers"}
        assert mapping_store.fetch_calls == 2
        assert mapping_cache.age_of("nhl") == 0

    def test_each_sport_has_own_ttl(self, mapping_store, mapping_cache, fake_clock):
        """Should track freshness per sport code."""
        mapping_cache.get("nhl")
        fake_clock.advance(200)
        mapping_cache.get("nba")
        fake_clock.advance(100)

        mapping_cache.get("nba")
        assert mapping_store.fetch_calls == 2
        mapping_cache.get("nhl")
        assert mapping_store.fetch_calls == 3

    def test_age_of_uncached(self, mapping_cache):
        """Should return None for sports never fetched."""
        assert mapping_cache.age_of("nhl") is None

    def test_default_ttl(self, mapping_store):
        """Should default to a five minute TTL."""
        assert TeamMappingCache(mapping_store).ttl_seconds == 300

    # Failure Tests
    # ─────────────────────────────────────────────────────────────

    def test_first_failure_returns_empty(self, mapping_store, mapping_cache):
        """Should return an empty map when the first fetch fails."""
        mapping_store.fail = True
        assert mapping_cache.get("nhl") is EMPTY_MAPPINGS

    def test_stale_on_error(self, mapping_store, mapping_cache, fake_clock, caplog):
        """Should keep serving the previous entry when a refresh fails."""
        mapping_store.rows = [NHL_ROW]
        mapping_cache.get("nhl")

        mapping_store.fail = True
        fake_clock.advance(301)
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            mappings = mapping_cache.get("nhl")

        assert dict(mappings) == {"ny rangers": "New York Rangers"}
        assert "[TEAM-MAPPING-CACHE] Failed to fetch mappings for nhl" in caplog.text

    def test_retries_after_failure(self, mapping_store, mapping_cache):
        """Should retry on the next read after a failed refresh."""
        mapping_store.fail = True
        mapping_cache.get("nhl")

        mapping_store.fail = False
        mapping_store.rows = [NHL_ROW]
        assert "ny rangers" in mapping_cache.get("nhl")

    # get_all() / clear() Tests
    # ─────────────────────────────────────────────────────────────

    def test_get_all(self, mapping_store, mapping_cache):
        """Should key every mapping by sport code and normalized name."""
        mapping_store.rows = [NHL_ROW, NBA_ROW]

        assert dict(mapping_cache.get_all()) == {
            "nhl|ny rangers": "New York Rangers",
            "nba|dubs": "Golden State Warriors",
        }

    def test_get_all_failure(self, mapping_store, mapping_cache):
        """Should return an empty map when fetching everything fails."""
        mapping_store.fail = True
        assert len(mapping_cache.get_all()) == 0

    def test_clear(self, mapping_store, mapping_cache):
        """Should force a refetch after clear()."""
        mapping_cache.get("nhl")
        mapping_cache.clear()
        mapping_store.rows = [NHL_ROW]

        assert "ny rangers" in mapping_cache.get("nhl")
        assert mapping_store.fetch_calls == 2


class TestSqlTeamMappingStore:
    """Test suite for the database-backed store."""

    def test_reads_team_mappings(self, db_session, session_factory):
        """Should return the rows stored for one sport."""
        repo = TeamMappingRepository(db_session)
        repo.upsert_mapping("Broadway", "New York Rangers", "nhl")
        repo.upsert_mapping("Dubs", "Golden State Warriors", "nba")

        rows = SqlTeamMappingStore(session_factory).fetch_mappings("nhl")

        assert rows == [
            {"source_name": "Broadway", "canonical_name": "New York Rangers", "sport_code": "nhl"}
        ]

    def test_cache_over_database(self, db_session, sql_mapping_cache):
        """Should serve normalized corrections from the database."""
        TeamMappingRepository(db_session).upsert_mapping("Broadway", "New York Rangers", "nhl")

        assert dict(sql_mapping_cache.get("nhl")) == {"broadway": "New York Rangers"}
        assert len(sql_mapping_cache.get_all()) == 1

    def test_upsert_updates_existing(self, db_session, sql_mapping_cache):
        """Should update the canonical name of an existing correction."""
        repo = TeamMappingRepository(db_session)
        repo.upsert_mapping("Broadway", "New York Islanders", "nhl")
        repo.upsert_mapping("Broadway", "New York Rangers", "nhl")

        assert repo.count() == 1
        assert sql_mapping_cache.get("nhl")["broadway"] == "New York Rangers"
