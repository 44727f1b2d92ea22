"""
HTTP endpoint integration tests for the matching API.

These tests verify that FastAPI endpoints:
- Return correct HTTP status codes
- Validate request/response schemas
- Handle unknown sports and failure ids gracefully
- Close the self-healing loop over HTTP

Uses FastAPI TestClient for in-memory HTTP testing.
"""
import pytest

BOOK_ROWS = [
    {"home_team": "nyr", "away_team": "tor", "commence_time": "2025-01-10T19:00:00Z", "id": "evt-1"},
]


def _post_match(client, markets, rows=BOOK_ROWS):
    return client.post("/api/v1/matching/match", json={
        "sport_code": "nhl",
        "rows": rows,
        "markets": markets,
    })


# =============================================================================
# APPLICATION
# =============================================================================

class TestApplication:
    """Tests for root, health and middleware."""

    def test_health(self, client):
        """GET /health returns healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_lists_sports(self, client):
        """GET / lists core and extended sports."""
        data = client.get("/").json()

        assert "nhl" in data["sports"]
        assert "mls" in data["extended_sports"]
        assert data["endpoints"]["matching"]["resolve"] == "/api/v1/matching/resolve"

    def test_correlation_id_echoed(self, client):
        """Incoming X-Correlation-ID is echoed in the response."""
        response = client.get("/health", headers={"X-Correlation-ID": "test-correlation-123"})
        assert response.headers["X-Correlation-ID"] == "test-correlation-123"

    def test_correlation_id_generated(self, client):
        """A correlation id is generated when none is sent."""
        response = client.get("/health")
        assert response.headers.get("X-Correlation-ID")

    def test_request_id_fallback(self, client):
        """X-Request-ID is used when no correlation id is sent."""
        response = client.get("/health", headers={"X-Request-ID": "upstream-42"})
        assert response.headers["X-Correlation-ID"] == "upstream-42"


# =============================================================================
# RESOLUTION
# =============================================================================

class TestResolveEndpoints:
    """Tests for /resolve, /fuzzy and /index-stats."""

    @pytest.mark.parametrize("raw_name,resolved,tier", [
        ("nyr", "New York Rangers", "abbreviation"),
        ("Leafs", "Toronto Maple Leafs", "nickname"),
        ("Springfield Isotopes", None, None),
    ])
    def test_resolve(self, client, raw_name, resolved, tier):
        """POST /resolve returns the official name and tier."""
        response = client.post("/api/v1/matching/resolve", json={
            "raw_name": raw_name,
            "sport_code": "nhl",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["resolved"] == resolved
        assert data["tier"] == tier

    def test_resolve_unknown_sport(self, client):
        """POST /resolve with unknown sport returns 404."""
        response = client.post("/api/v1/matching/resolve", json={
            "raw_name": "nyr",
            "sport_code": "curling",
        })
        assert response.status_code == 404

    def test_resolve_missing_field(self, client):
        """POST /resolve without raw_name returns 422."""
        response = client.post("/api/v1/matching/resolve", json={"sport_code": "nhl"})
        assert response.status_code == 422

    def test_fuzzy(self, client):
        """POST /fuzzy returns match, method and confidence."""
        response = client.post("/api/v1/matching/fuzzy", json={"input": "buds", "sport_code": "nhl"})

        assert response.status_code == 200
        data = response.json()
        assert data["match"] == "Toronto Maple Leafs"
        assert data["method"] == "alias"
        assert data["confidence"] == 95

    def test_fuzzy_threshold_validated(self, client):
        """POST /fuzzy rejects thresholds outside 0..1."""
        response = client.post("/api/v1/matching/fuzzy", json={
            "input": "buds",
            "sport_code": "nhl",
            "threshold": 1.5,
        })
        assert response.status_code == 422

    def test_index_stats(self, client):
        """POST /index-stats reports indexed and unresolved rows."""
        response = client.post("/api/v1/matching/index-stats", json={
            "sport_code": "nhl",
            "rows": BOOK_ROWS + [
                {"home_team": "Springfield Isotopes", "away_team": "tor", "commence_time": "2025-01-10T19:00:00Z"},
            ],
        })

        assert response.status_code == 200
        assert response.json() == {
            "total_rows": 2,
            "indexed": 1,
            "failed": 1,
            "failed_teams": ["Springfield Isotopes"],
        }

    def test_index_stats_non_string_team(self, client):
        """POST /index-stats counts a non-string team name as unresolved."""
        response = client.post("/api/v1/matching/index-stats", json={
            "sport_code": "nhl",
            "rows": [{"home_team": 5, "away_team": "tor", "commence_time": "2025-01-10T19:00:00Z"}],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["indexed"] == 0
        assert data["failed"] == 1
        assert data["failed_teams"] == ["5"]


# =============================================================================
# MATCHING AND REVIEW QUEUE
# =============================================================================

class TestMatchEndpoints:
    """Tests for /match, /failures and /mappings."""

    def test_match(self, client):
        """POST /match indexes rows and matches markets."""
        response = _post_match(client, [
            {"title": "Rangers vs. Maple Leafs", "event_date": "2025-01-10T19:00:00Z", "condition_id": "0xabc"},
        ])

        assert response.status_code == 200
        data = response.json()
        assert data["matched"] == 1
        outcome = data["outcomes"][0]
        assert outcome["condition_id"] == "0xabc"
        assert outcome["method"] == "canonical_exact"
        assert outcome["match"]["id"] == "evt-1"

    def test_match_unknown_sport(self, client):
        """POST /match with unknown sport returns 404."""
        response = client.post("/api/v1/matching/match", json={"sport_code": "curling"})
        assert response.status_code == 404

    def test_failures_listed(self, client):
        """GET /failures lists pending failures after a failed match."""
        _post_match(client, [{"title": "Broadway vs. Maple Leafs", "event_date": "2025-01-10T19:00:00Z"}])

        response = client.get("/api/v1/matching/failures", params={"sport_code": "nhl"})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        failure = data["failures"][0]
        assert failure["poly_team_a"] == "Broadway"
        assert failure["failure_reason"] == "TEAM_ALIAS_MISSING"
        assert failure["resolution_status"] == "pending"

    def test_failures_limit_validated(self, client):
        """GET /failures rejects a zero limit."""
        response = client.get("/api/v1/matching/failures", params={"limit": 0})
        assert response.status_code == 422

    def test_resolve_failure_flow(self, client):
        """POST /failures/{id}/resolve saves a mapping that the next match uses."""
        market = {"title": "Broadway vs. Maple Leafs", "event_date": "2025-01-10T19:00:00Z"}
        _post_match(client, [market])
        failure_id = client.get("/api/v1/matching/failures").json()["failures"][0]["id"]

        response = client.post(f"/api/v1/matching/failures/{failure_id}/resolve", json={
            "team_field": "team_a",
            "canonical_name": "New York Rangers",
        })

        assert response.status_code == 200
        assert response.json()["resolution_status"] == "resolved"
        assert response.json()["resolved_mapping"] == "Broadway -> New York Rangers"

        mappings = client.get("/api/v1/matching/mappings/nhl").json()
        assert mappings["mappings"] == {"broadway": "New York Rangers"}
        assert mappings["count"] == 1

        assert _post_match(client, [market]).json()["matched"] == 1
        assert client.get("/api/v1/matching/failures").json()["count"] == 0

    def test_resolve_failure_not_found(self, client):
        """POST /failures/{id}/resolve with unknown id returns 404."""
        response = client.post("/api/v1/matching/failures/missing-id/resolve", json={
            "team_field": "team_a",
            "canonical_name": "New York Rangers",
        })
        assert response.status_code == 404

    def test_resolve_failure_bad_field(self, client):
        """POST /failures/{id}/resolve with an unknown team field returns 400."""
        response = client.post("/api/v1/matching/failures/missing-id/resolve", json={
            "team_field": "home",
            "canonical_name": "New York Rangers",
        })
        assert response.status_code == 400

    def test_mappings_empty(self, client):
        """GET /mappings/{sport_code} is empty before any correction."""
        response = client.get("/api/v1/matching/mappings/nba")

        assert response.status_code == 200
        assert response.json() == {"sport_code": "nba", "count": 0, "mappings": {}}

    def test_mappings_unknown_sport(self, client):
        """GET /mappings/{sport_code} with unknown sport returns 404."""
        assert client.get("/api/v1/matching/mappings/curling").status_code == 404
