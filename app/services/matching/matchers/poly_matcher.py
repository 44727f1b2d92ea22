"""Poly-to-book matcher.

Matches a prediction market to a bookmaker event through the canonical index:

1. Resolve both market team names (user corrections first)
2. Build the lookup key "{League}|{team_set_key}"
3. Fetch candidates from the bookmaker index
4. Keep candidates strictly inside the time window
   (±36h, ±48h when the market date is a placeholder)
5. Pick the candidate closest in time (first seen wins exact ties)

Every result is either a match with a method tag or a typed failure reason,
never both:

- TEAM_ALIAS_MISSING: a team name did not resolve (or the title did not parse)
- NO_BOOK_GAME_FOUND: no bookmaker row for that matchup
- START_TIME_MISMATCH: rows exist but none is inside the window
- MULTIPLE_GAMES_AMBIGUOUS: near-tied candidates at different start times
  (only when an ambiguity epsilon is configured)
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from app.core.config import settings
from app.core.metrics import record_match_result
from app.services.matching.book_index import BookEvent, BookIndex, make_index_key
from app.services.matching.canonicalizer import split_teams
from app.services.matching.matchers.team_resolver import resolve_team_name
from app.services.matching.sports_config import (
    get_league_name,
    get_sport_code_from_league,
    get_team_map,
)
from app.services.matching.utils.name_normalizer import (
    extract_nickname,
    normalize,
    team_id,
    team_set_key,
)
from app.services.matching.utils.time_utils import hours_between, parse_datetime

logger = logging.getLogger(__name__)


class MatchMethod(str, Enum):
    CANONICAL_EXACT = "canonical_exact"
    CANONICAL_TIME = "canonical_time"


class FailureReason(str, Enum):
    TEAM_ALIAS_MISSING = "TEAM_ALIAS_MISSING"
    NO_BOOK_GAME_FOUND = "NO_BOOK_GAME_FOUND"
    START_TIME_MISMATCH = "START_TIME_MISMATCH"
    MULTIPLE_GAMES_AMBIGUOUS = "MULTIPLE_GAMES_AMBIGUOUS"


@dataclass
class MatchDebug:
    poly_teams: Tuple[str, str]
    resolved_teams: Tuple[Optional[str], Optional[str]] = (None, None)
    lookup_key: Optional[str] = None
    candidates_found: int = 0
    time_filter_passed: int = 0
    time_diff_hours: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "poly_teams": list(self.poly_teams),
            "resolved_teams": list(self.resolved_teams),
            "lookup_key": self.lookup_key,
            "candidates_found": self.candidates_found,
            "time_filter_passed": self.time_filter_passed,
            "time_diff_hours": self.time_diff_hours,
        }


@dataclass
class MatchResult:
    """
    Outcome of one market lookup.

    Exactly one of these holds:
    - match and method are set, failure_reason is None
    - match and method are None, failure_reason is set
    """
    match: Optional[BookEvent]
    method: Optional[MatchMethod]
    failure_reason: Optional[FailureReason]
    debug: MatchDebug = field(default_factory=lambda: MatchDebug(poly_teams=("", "")))

    def __post_init__(self):
        if (self.match is None) == (self.failure_reason is None):
            raise ValueError("MatchResult needs exactly one of match or failure_reason")
        if (self.match is None) != (self.method is None):
            raise ValueError("MatchResult method must be set if and only if match is set")

    @property
    def matched(self) -> bool:
        return self.match is not None

    @property
    def outcome(self) -> str:
        """Method value on success, failure reason otherwise."""
        return self.method.value if self.match is not None else self.failure_reason.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match": self.match,
            "method": self.method.value if self.method else None,
            "failure_reason": self.failure_reason.value if self.failure_reason else None,
            "debug": self.debug.to_dict(),
        }


def is_placeholder_time(value: Union[str, datetime, None]) -> bool:
    """
    Check whether a market date carries a placeholder time of day.

    Scrapers that only know the date write midnight or end-of-day
    (T00:00:00Z / T23:59:59Z). Such dates get the wider match window.
    """
    dt = parse_datetime(value)
    if dt is None:
        return False
    hms = (dt.hour, dt.minute, dt.second)
    return hms == (0, 0, 0) or hms == (23, 59, 59)


def _lookup_league(league: str) -> str:
    sport_code = get_sport_code_from_league(league, include_extended=True)
    return get_league_name(sport_code) if sport_code else league


def _finish(league: str, result: MatchResult) -> MatchResult:
    record_match_result(league, result.outcome)
    if not result.matched:
        logger.debug(
            f"[POLY-MATCH] {league}: {result.failure_reason.value} "
            f"teams={list(result.debug.poly_teams)} key={result.debug.lookup_key} "
            f"candidates={result.debug.candidates_found} "
            f"time_diff_hours={result.debug.time_diff_hours}"
        )
    return result


def _failure(league: str, reason: FailureReason, debug: MatchDebug) -> MatchResult:
    return _finish(league, MatchResult(match=None, method=None, failure_reason=reason, debug=debug))


def match_poly_market(
    book_index: BookIndex,
    league: str,
    poly_yes_team: str,
    poly_no_team: str,
    poly_date: Union[str, datetime, None],
    team_map: Optional[Mapping[str, str]] = None,
    is_placeholder_time: bool = False,
    user_mappings: Optional[Mapping[str, str]] = None,
    ambiguity_epsilon_hours: Optional[float] = None
) -> MatchResult:
    """
    Match one market against the bookmaker index.

    Args:
        book_index: Index built by index_bookmaker_events for the same sport
        league: League display name ("NHL")
        poly_yes_team: First team in the market title
        poly_no_team: Second team in the market title
        poly_date: Market start time; None skips time filtering
        team_map: Explicit team map (defaults to the league's configured map)
        is_placeholder_time: poly_date only carries a placeholder time of day
        user_mappings: Operator corrections, checked before any heuristic
        ambiguity_epsilon_hours: When set, near-tied candidates at different
            start times yield MULTIPLE_GAMES_AMBIGUOUS instead of a pick

    Returns:
        MatchResult
    """
    debug = MatchDebug(poly_teams=(poly_yes_team, poly_no_team))
    key_league = _lookup_league(league)

    sport_code = get_sport_code_from_league(league, include_extended=True)
    resolved_map = team_map if team_map is not None else get_team_map(sport_code)

    team1 = resolve_team_name(poly_yes_team, sport_code, resolved_map, user_mappings)
    team2 = resolve_team_name(poly_no_team, sport_code, resolved_map, user_mappings)
    debug.resolved_teams = (team1, team2)

    if not team1 or not team2:
        return _failure(key_league, FailureReason.TEAM_ALIAS_MISSING, debug)

    lookup_key = make_index_key(key_league, team_set_key(team_id(team1), team_id(team2)))
    debug.lookup_key = lookup_key

    candidates = book_index.get(lookup_key) or []
    if not candidates:
        return _failure(key_league, FailureReason.NO_BOOK_GAME_FOUND, debug)

    debug.candidates_found = len(candidates)

    target = parse_datetime(poly_date)
    if target is None:
        # Date-blind best effort
        debug.time_filter_passed = 1
        return _finish(key_league, MatchResult(
            match=candidates[0],
            method=MatchMethod.CANONICAL_EXACT,
            failure_reason=None,
            debug=debug,
        ))

    window = settings.get_match_window_hours(is_placeholder_time)

    in_window: List[Tuple[float, datetime, BookEvent]] = []
    nearest_diff: Optional[float] = None
    for candidate in candidates:
        commence = parse_datetime(candidate.get("commence_time"))
        if commence is None:
            continue
        diff = hours_between(commence, target)
        if nearest_diff is None or diff < nearest_diff:
            nearest_diff = diff
        if diff < window:
            in_window.append((diff, commence, candidate))

    debug.time_filter_passed = len(in_window)

    if not in_window:
        debug.time_diff_hours = nearest_diff
        return _failure(key_league, FailureReason.START_TIME_MISMATCH, debug)

    best_diff, best_commence, best = in_window[0]
    for diff, commence, candidate in in_window[1:]:
        if diff < best_diff:
            best_diff, best_commence, best = diff, commence, candidate

    debug.time_diff_hours = best_diff

    if ambiguity_epsilon_hours is not None:
        for diff, commence, candidate in in_window:
            if candidate is best or commence == best_commence:
                continue
            if abs(diff - best_diff) <= ambiguity_epsilon_hours:
                return _failure(key_league, FailureReason.MULTIPLE_GAMES_AMBIGUOUS, debug)

    method = (
        MatchMethod.CANONICAL_EXACT
        if best_diff < settings.EXACT_MATCH_HOURS
        else MatchMethod.CANONICAL_TIME
    )
    return _finish(key_league, MatchResult(match=best, method=method, failure_reason=None, debug=debug))


def match_with_canonical_primary(
    book_index: BookIndex,
    league: str,
    event_name: str,
    poly_date: Union[str, datetime, None],
    team_map: Optional[Mapping[str, str]] = None,
    is_placeholder_time: bool = False,
    user_mappings: Optional[Mapping[str, str]] = None,
    ambiguity_epsilon_hours: Optional[float] = None
) -> MatchResult:
    """
    Split a "Team A vs Team B" title and match it.

    An unparseable title is reported as TEAM_ALIAS_MISSING without
    attempting resolution.
    """
    parsed = split_teams(event_name)
    if parsed is None:
        debug = MatchDebug(poly_teams=(event_name or "", ""))
        return _failure(_lookup_league(league), FailureReason.TEAM_ALIAS_MISSING, debug)

    return match_poly_market(
        book_index,
        league,
        parsed[0],
        parsed[1],
        poly_date,
        team_map=team_map,
        is_placeholder_time=is_placeholder_time,
        user_mappings=user_mappings,
        ambiguity_epsilon_hours=ambiguity_epsilon_hours,
    )


def validate_matched_teams(event_name: str, match: BookEvent) -> bool:
    """
    Sanity-check a match against the market title.

    At least one matched team's nickname must appear in the title; a False
    result means the match should be discarded.
    """
    event_norm = normalize(event_name)

    home = match.get("_homeTeamResolved") or match.get("home_team") or ""
    away = match.get("_awayTeamResolved") or match.get("away_team") or ""

    home_nickname = extract_nickname(home)
    away_nickname = extract_nickname(away)

    home_in_event = len(home_nickname) > 2 and home_nickname in event_norm
    away_in_event = len(away_nickname) > 2 and away_nickname in event_norm

    return home_in_event or away_in_event
