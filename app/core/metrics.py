"""
Prometheus metrics for the event matching service.

This module defines all Prometheus metrics used for monitoring and observability.

Metrics exposed:
- Bookmaker index row outcomes (indexed / failed) per league
- Poly-to-book match outcomes (method or failure reason) per league
- Team mapping cache refresh failures per sport code
- Fuzzy matcher confidence distribution
"""
from prometheus_client import Counter, Histogram

# Bookmaker Index Metrics
book_index_rows_total = Counter(
    "book_index_rows_total",
    "Total bookmaker rows processed by the index builder",
    ["league", "outcome"]
)

# Poly-to-Book Matcher Metrics
poly_match_results_total = Counter(
    "poly_match_results_total",
    "Total poly-to-book match attempts by outcome (method or failure reason)",
    ["league", "outcome"]
)

# Team Mapping Cache Metrics
team_mapping_cache_refresh_failures_total = Counter(
    "team_mapping_cache_refresh_failures_total",
    "Total failed refreshes of the user team mapping cache",
    ["sport_code"]
)

team_mapping_cache_refreshes_total = Counter(
    "team_mapping_cache_refreshes_total",
    "Total successful refreshes of the user team mapping cache",
    ["sport_code"]
)

# Fuzzy Matcher Metrics
fuzzy_match_confidence = Histogram(
    "fuzzy_match_confidence",
    "Confidence (0-100) of fuzzy team matches",
    ["method"],
    buckets=(0, 50, 70, 75, 80, 85, 90, 95, 100)
)


def record_book_index(league: str, indexed: int, failed: int):
    """Record the outcome counts of one indexing pass."""
    if indexed:
        book_index_rows_total.labels(league=league, outcome="indexed").inc(indexed)
    if failed:
        book_index_rows_total.labels(league=league, outcome="failed").inc(failed)


def record_match_result(league: str, outcome: str):
    """Record a single poly-to-book match outcome."""
    poly_match_results_total.labels(league=league, outcome=outcome).inc()


def record_cache_refresh(sport_code: str, success: bool):
    """Record a team mapping cache refresh attempt."""
    if success:
        team_mapping_cache_refreshes_total.labels(sport_code=sport_code).inc()
    else:
        team_mapping_cache_refresh_failures_total.labels(sport_code=sport_code).inc()


def record_fuzzy_match(method: str, confidence: float):
    """Record the confidence of a fuzzy match result."""
    fuzzy_match_confidence.labels(method=method).observe(confidence)
