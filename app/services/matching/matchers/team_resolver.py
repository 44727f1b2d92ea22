"""Team resolver: raw team name → official full name for a sport.

Resolution runs as an ordered list of independent tiers, cheapest and most
precise first. The first tier that returns a name wins:

1. user_mapping  - operator corrections (self-healing, overrides everything)
2. exact         - normalized official name
3. abbreviation  - team map key ("nyr", "lak")
4. nickname      - last significant word ("Leafs")
5. city          - everything but the nickname ("Toronto", "Los Angeles")
6. substring     - containment either way, raw names longer than 4 chars
7. loose_token   - any raw word longer than 3 chars equal to a nickname

Blank input and an empty team map short-circuit to None. General edit
distance search lives in the fuzzy matcher, never here.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional, Tuple

from app.services.matching.sports_config import get_team_map
from app.services.matching.utils.name_normalizer import (
    extract_city,
    extract_nickname,
    normalize,
)

logger = logging.getLogger(__name__)


@dataclass
class ResolutionContext:
    """Inputs shared by every resolution tier."""
    raw_name: str
    normalized: str
    team_map: Mapping[str, str]
    user_mappings: Optional[Mapping[str, str]] = None
    official_names: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.official_names:
            self.official_names = list(dict.fromkeys(self.team_map.values()))


def _user_mapping(ctx: ResolutionContext) -> Optional[str]:
    if not ctx.user_mappings:
        return None
    return ctx.user_mappings.get(ctx.normalized) or None


def _exact(ctx: ResolutionContext) -> Optional[str]:
    for official in ctx.official_names:
        if normalize(official) == ctx.normalized:
            return official
    return None


def _abbreviation(ctx: ResolutionContext) -> Optional[str]:
    for abbr, official in ctx.team_map.items():
        if abbr.lower() == ctx.normalized:
            return official
    return None


def _nickname(ctx: ResolutionContext) -> Optional[str]:
    raw_nickname = extract_nickname(ctx.normalized)
    if len(raw_nickname) <= 2:
        return None
    for official in ctx.official_names:
        if extract_nickname(normalize(official)) == raw_nickname:
            return official
    return None


def _city(ctx: ResolutionContext) -> Optional[str]:
    raw_city = extract_city(ctx.normalized)
    if len(raw_city) <= 2:
        return None
    for official in ctx.official_names:
        if extract_city(normalize(official)) == raw_city:
            return official
    return None


def _substring(ctx: ResolutionContext) -> Optional[str]:
    if len(ctx.normalized) <= 4:
        return None
    for official in ctx.official_names:
        official_norm = normalize(official)
        if ctx.normalized in official_norm or official_norm in ctx.normalized:
            return official
    return None


def _loose_token(ctx: ResolutionContext) -> Optional[str]:
    for word in ctx.normalized.split():
        if len(word) <= 3:
            continue
        for official in ctx.official_names:
            if extract_nickname(normalize(official)) == word:
                return official
    return None


Strategy = Callable[[ResolutionContext], Optional[str]]

# Map-based tiers, run after user corrections. Order is load-bearing.
RESOLUTION_TIERS: Tuple[Tuple[str, Strategy], ...] = (
    ("exact", _exact),
    ("abbreviation", _abbreviation),
    ("nickname", _nickname),
    ("city", _city),
    ("substring", _substring),
    ("loose_token", _loose_token),
)


def resolve_with_tier(
    raw_name: Optional[str],
    sport_code: Optional[str],
    team_map: Optional[Mapping[str, str]] = None,
    user_mappings: Optional[Mapping[str, str]] = None
) -> Tuple[Optional[str], Optional[str]]:
    """
    Resolve a raw team name and report which tier matched.

    Returns:
        (official_name, tier_name), or (None, None) when nothing matched
    """
    if not isinstance(raw_name, str) or not raw_name.strip():
        return None, None

    ctx = ResolutionContext(
        raw_name=raw_name,
        normalized=normalize(raw_name),
        team_map=team_map if team_map is not None else get_team_map(sport_code),
        user_mappings=user_mappings,
    )

    resolved = _user_mapping(ctx)
    if resolved:
        return resolved, "user_mapping"

    if not ctx.team_map:
        return None, None

    for tier_name, strategy in RESOLUTION_TIERS:
        resolved = strategy(ctx)
        if resolved:
            return resolved, tier_name

    logger.debug(f"No resolution for {raw_name!r} ({sport_code})")
    return None, None


def resolve_team_name(
    raw_name: Optional[str],
    sport_code: Optional[str],
    team_map: Optional[Mapping[str, str]] = None,
    user_mappings: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """
    Resolve a raw team name to its official full name.

    Args:
        raw_name: Name as written by the source ("nyr", "Leafs", "N.Y. Rangers")
        sport_code: Sport code used to pick the team map ("nhl")
        team_map: Explicit abbreviation → official name map (overrides config)
        user_mappings: normalized source name → canonical name corrections

    Returns:
        Official name, or None if no tier matched

    Examples:
        >>> resolve_team_name("nyr", "nhl")
        'New York Rangers'
        >>> resolve_team_name("Leafs", "nhl")
        'Toronto Maple Leafs'
    """
    return resolve_with_tier(raw_name, sport_code, team_map, user_mappings)[0]
