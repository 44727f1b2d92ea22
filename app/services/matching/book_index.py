"""
Bookmaker index builder.

Pre-indexes one sport's bookmaker rows for constant-time lookups by
canonical matchup:

    "NHL|carolina_hurricanes|toronto_maple_leafs" → [row, row, ...]

The key carries no date. Several rows may share a key (home-and-away
series, doubleheaders, duplicated feeds); the matcher picks among them by
start time.

A row is only indexed when both teams resolve. Half-resolved rows are
dropped and the unresolved raw names reported, because they are exactly the
names an operator needs to add to the team_mappings table.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from app.core.metrics import record_book_index
from app.services.matching.matchers.team_resolver import resolve_team_name
from app.services.matching.sports_config import get_league_name, get_team_map
from app.services.matching.utils.name_normalizer import team_id, team_set_key

logger = logging.getLogger(__name__)

BookEvent = Dict[str, Any]
BookIndex = Dict[str, List[BookEvent]]

# Unresolved names shown in the summary log line
MAX_LOGGED_FAILED_TEAMS = 5


@dataclass
class IndexStats:
    total_rows: int = 0
    indexed: int = 0
    failed: int = 0
    failed_teams: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_rows": self.total_rows,
            "indexed": self.indexed,
            "failed": self.failed,
            "failed_teams": list(self.failed_teams),
        }


def make_index_key(league: str, set_key: str) -> str:
    """Composite index key: "{League}|{team_set_key}"."""
    return f"{league}|{set_key}"


def _track_failed(failed_teams: List[str], raw_name: Any):
    name = str(raw_name)
    if name not in failed_teams:
        failed_teams.append(name)


def format_index_summary(league: str, stats: IndexStats) -> str:
    """The [BOOK-INDEX] summary line consumed by alerting."""
    if stats.failed > 0 and stats.failed_teams:
        sample = ', '.join(stats.failed_teams[:MAX_LOGGED_FAILED_TEAMS])
        more = '...' if len(stats.failed_teams) > MAX_LOGGED_FAILED_TEAMS else ''
        return (
            f"[BOOK-INDEX] {league}: indexed {stats.indexed}, failed {stats.failed}. "
            f"Unresolved teams: {sample}{more}"
        )
    return f"[BOOK-INDEX] {league}: indexed {stats.indexed}/{stats.total_rows} games"


def index_bookmaker_events(
    rows: Iterable[BookEvent],
    sport_code: str,
    team_map: Optional[Mapping[str, str]] = None,
    user_mappings: Optional[Mapping[str, str]] = None
) -> BookIndex:
    """
    Build the canonical lookup index for a batch of bookmaker rows.

    Each indexed row is a shallow copy of the input, enriched with
    _homeTeamResolved, _awayTeamResolved and _teamSetKey. Input rows are
    never mutated.

    Args:
        rows: Bookmaker rows with home_team, away_team, commence_time
        sport_code: Sport code ("nhl"); its display name prefixes every key
        team_map: Explicit team map (defaults to the sport's configured map)
        user_mappings: Operator corrections, checked before any heuristic

    Returns:
        Dict of index key → rows sharing that matchup, in input order
    """
    resolved_map = team_map if team_map is not None else get_team_map(sport_code)
    league = get_league_name(sport_code)

    index: BookIndex = {}
    stats = IndexStats()

    for row in rows:
        stats.total_rows += 1
        home_raw = row.get("home_team")
        away_raw = row.get("away_team")

        if not home_raw or not away_raw:
            stats.failed += 1
            continue

        home_resolved = resolve_team_name(home_raw, sport_code, resolved_map, user_mappings)
        if not home_resolved:
            stats.failed += 1
            _track_failed(stats.failed_teams, home_raw)
            continue

        away_resolved = resolve_team_name(away_raw, sport_code, resolved_map, user_mappings)
        if not away_resolved:
            stats.failed += 1
            _track_failed(stats.failed_teams, away_raw)
            continue

        set_key = team_set_key(team_id(home_resolved), team_id(away_resolved))

        enriched = dict(row)
        enriched["_homeTeamResolved"] = home_resolved
        enriched["_awayTeamResolved"] = away_resolved
        enriched["_teamSetKey"] = set_key

        index.setdefault(make_index_key(league, set_key), []).append(enriched)
        stats.indexed += 1

    logger.info(format_index_summary(league, stats))
    record_book_index(league, stats.indexed, stats.failed)

    return index


def get_index_stats(
    rows: Iterable[BookEvent],
    sport_code: str,
    team_map: Optional[Mapping[str, str]] = None,
    user_mappings: Optional[Mapping[str, str]] = None
) -> IndexStats:
    """
    Resolution statistics for a batch without building an index.

    Unlike indexing, both unresolved names of a row are reported.
    """
    resolved_map = team_map if team_map is not None else get_team_map(sport_code)
    stats = IndexStats()

    for row in rows:
        stats.total_rows += 1
        home_raw = row.get("home_team")
        away_raw = row.get("away_team")

        if not home_raw or not away_raw:
            stats.failed += 1
            continue

        home_resolved = resolve_team_name(home_raw, sport_code, resolved_map, user_mappings)
        away_resolved = resolve_team_name(away_raw, sport_code, resolved_map, user_mappings)

        if home_resolved and away_resolved:
            stats.indexed += 1
            continue

        stats.failed += 1
        if not home_resolved:
            _track_failed(stats.failed_teams, home_raw)
        if not away_resolved:
            _track_failed(stats.failed_teams, away_raw)

    return stats
