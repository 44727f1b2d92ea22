"""
Event canonicalization.

Turns two raw team names into an order-independent canonical event:

    canonicalize_event("NHL", "Leafs", "Hurricanes")
    → CanonicalEvent(league="NHL",
                     team_a_id="carolina_hurricanes",
                     team_b_id="toronto_maple_leafs",
                     team_set_key="carolina_hurricanes|toronto_maple_leafs", ...)

Team A is always the lexicographically smaller ID, so the event is the same
whichever side either source calls "home".
"""
import logging
import re
from dataclasses import asdict, dataclass
from typing import Dict, Mapping, Optional, Tuple

from app.services.matching.matchers.team_resolver import resolve_team_name
from app.services.matching.sports_config import get_sport_code_from_league, get_team_map
from app.services.matching.utils.name_normalizer import (
    extract_city,
    extract_nickname,
    normalize,
    team_id,
    team_set_key,
)

logger = logging.getLogger(__name__)

# "X vs Y", "X vs. Y", "X @ Y", "X v Y", "X v. Y", optional " - suffix"
TITLE_RE = re.compile(
    r'^(.+?)\s+(?:vs\.?|@|v\.?)\s+(.+?)(?:\s*[-–—]\s*.*)?$',
    re.IGNORECASE
)


@dataclass(frozen=True)
class CanonicalEvent:
    league: str
    team_a_id: str
    team_b_id: str
    team_set_key: str
    team_a_full: str
    team_b_full: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def split_teams(title: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Parse a "Team A vs Team B" style title into its two team names.

    Returns:
        (first_team, second_team) in title order, or None if the title does
        not have a recognised shape

    Examples:
        >>> split_teams("Lakers vs. Celtics - Game 7")
        ('Lakers', 'Celtics')
        >>> split_teams("Rangers @ Maple Leafs")
        ('Rangers', 'Maple Leafs')
        >>> split_teams("Will the Lakers win?") is None
        True
    """
    if not title:
        return None

    match = TITLE_RE.match(title.strip())
    if not match:
        return None

    first, second = match.group(1).strip(), match.group(2).strip()
    if not first or not second:
        return None

    return first, second


def canonicalize_event(
    league: str,
    team1_raw: str,
    team2_raw: str,
    team_map: Optional[Mapping[str, str]] = None,
    user_mappings: Optional[Mapping[str, str]] = None
) -> Optional[CanonicalEvent]:
    """
    Resolve both raw team names and build the canonical event.

    The league display name is matched case-insensitively against the sport
    configuration to pick the team map. Both teams must resolve; a single
    unresolved name yields None.
    """
    sport_code = get_sport_code_from_league(league, include_extended=True)
    resolved_map = team_map if team_map is not None else get_team_map(sport_code)

    team1_full = resolve_team_name(team1_raw, sport_code, resolved_map, user_mappings)
    team2_full = resolve_team_name(team2_raw, sport_code, resolved_map, user_mappings)

    if not team1_full or not team2_full:
        return None

    team1_id = team_id(team1_full)
    team2_id = team_id(team2_full)

    if team1_id < team2_id:
        team_a_id, team_b_id, team_a_full, team_b_full = team1_id, team2_id, team1_full, team2_full
    else:
        team_a_id, team_b_id, team_a_full, team_b_full = team2_id, team1_id, team2_full, team1_full

    return CanonicalEvent(
        league=league,
        team_a_id=team_a_id,
        team_b_id=team_b_id,
        team_set_key=team_set_key(team_a_id, team_b_id),
        team_a_full=team_a_full,
        team_b_full=team_b_full,
    )


def build_resolution_map(team_map: Mapping[str, str]) -> Dict[str, str]:
    """
    Flatten a team map into alias → official name for fast lookups.

    Adds abbreviation, normalized full name, nickname and city for every
    team. Later teams overwrite earlier ones on shared aliases (two New York
    teams share a city), so this is a shortcut, not a replacement for
    resolve_team_name.
    """
    lookup: Dict[str, str] = {}

    for abbr, official in team_map.items():
        lookup[abbr.lower()] = official
        lookup[normalize(official)] = official

        nickname = extract_nickname(official)
        if len(nickname) > 2:
            lookup[nickname] = official

        city = extract_city(official)
        if len(city) > 2:
            lookup[city] = official

    return lookup
