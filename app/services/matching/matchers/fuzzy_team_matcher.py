"""Fuzzy team matcher with confidence scoring.

Supplementary to the deterministic team resolver. Used where a confidence
score is the desired output (operator review queues, data-quality reports)
and where near misses should be surfaced instead of a bare None.

Matching tiers (first hit wins):
1. exact   (100): team map abbreviation or official name
2. alias   (95 exact, scaled by length ratio for substrings): curated aliases
3. pattern (max(75, alias - 10)): abbreviation expansion ("ny" → "new york"),
   then the alias tier again
4. fuzzy   (floor(similarity * 100)): Levenshtein similarity over every known
   name and alias, best candidate at or above the threshold
5. none    (0): up to 3 nearest names as suggestions
"""
import logging
import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from rapidfuzz.distance import Levenshtein

from app.core.config import settings
from app.core.metrics import record_fuzzy_match
from app.services.matching.sports_config import get_sport_config
from app.services.matching.team_aliases import expand_patterns, get_aliases
from app.services.matching.utils.name_normalizer import normalize

logger = logging.getLogger(__name__)

EXACT_CONFIDENCE = 100
ALIAS_EXACT_CONFIDENCE = 95
ALIAS_SUBSTRING_CONFIDENCE = 85
PATTERN_MIN_CONFIDENCE = 75
PATTERN_PENALTY = 10
LOW_CONFIDENCE = 80

MAX_ALTERNATIVES = 3
# Runner-ups must reach this fraction of the threshold
ALTERNATIVE_FACTOR = 0.8


class FuzzyMethod(str, Enum):
    EXACT = "exact"
    ALIAS = "alias"
    PATTERN = "pattern"
    FUZZY = "fuzzy"
    NONE = "none"


@dataclass
class FuzzyMatchResult:
    match: Optional[str]
    confidence: int
    method: FuzzyMethod
    fuzzy_score: float
    alternatives: List[str] = field(default_factory=list)
    original_input: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["method"] = self.method.value
        return data


def levenshtein_similarity(a: str, b: str) -> float:
    """
    Normalized Levenshtein similarity: 1 - distance / max(len(a), len(b)).

    Unit-cost insertions, deletions and substitutions. Two empty strings
    are identical (1.0); one empty string shares nothing (0.0).

    Examples:
        >>> levenshtein_similarity("kitten", "sitting")
        0.5714285714285714
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1 - Levenshtein.distance(a, b) / max(len(a), len(b))


def _official_names(sport_code: str) -> List[str]:
    config = get_sport_config(sport_code)
    return config.official_names if config else []


def _to_official(name: str, sport_code: str) -> str:
    """Map a lowercase alias key back to the configured official spelling."""
    wanted = normalize(name)
    for official in _official_names(sport_code):
        if normalize(official) == wanted:
            return official
    return name


def _try_exact(value: str, sport_code: str) -> Optional[str]:
    config = get_sport_config(sport_code)
    if not config or not config.team_map:
        return None

    official = config.team_map.get(value)
    if official:
        return official

    for official in config.official_names:
        if normalize(official) == value:
            return official
    return None


def _try_alias(value: str, sport_code: str) -> Optional[Tuple[str, int, float]]:
    """Returns (canonical alias key, confidence, fuzzy_score)."""
    aliases = get_aliases(sport_code)

    for canonical, team_aliases in aliases.items():
        if value == canonical or value in team_aliases:
            return canonical, ALIAS_EXACT_CONFIDENCE, 1.0

    if len(value) < 3:
        return None

    for canonical, team_aliases in aliases.items():
        for alias in team_aliases:
            if value in alias:
                ratio = len(value) / len(alias)
                return canonical, int(ALIAS_SUBSTRING_CONFIDENCE * ratio), ratio

    return None


def _candidate_names(sport_code: str, include_aliases: bool = True) -> List[str]:
    names = list(_official_names(sport_code))
    aliases = get_aliases(sport_code)
    names.extend(aliases.keys())
    if include_aliases:
        for team_aliases in aliases.values():
            names.extend(team_aliases)
    return list(dict.fromkeys(names))


def _canonical_for(candidate: str, sport_code: str) -> str:
    """Resolve a fuzzy candidate (official name, alias key or alias) to a team."""
    if candidate in _official_names(sport_code):
        return candidate

    lowered = candidate.lower()
    for canonical, team_aliases in get_aliases(sport_code).items():
        if lowered == canonical or lowered in team_aliases:
            return _to_official(canonical, sport_code)

    config = get_sport_config(sport_code)
    if config and lowered in config.team_map:
        return config.team_map[lowered]

    return candidate


def _rank(value: str, names: Iterable[str]) -> List[Tuple[str, float]]:
    scored = [(name, levenshtein_similarity(value, name.lower())) for name in names]
    # Stable: equal scores keep candidate order
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


def _rank_teams(value: str, sport_code: str, include_aliases: bool = True) -> List[Tuple[str, float]]:
    """Rank distinct teams by their best-scoring candidate name."""
    best: Dict[str, float] = {}
    for name, score in _rank(value, _candidate_names(sport_code, include_aliases)):
        team = _canonical_for(name, sport_code)
        if team not in best:
            best[team] = score
    return list(best.items())


def _try_fuzzy(value: str, sport_code: str, threshold: float) -> Optional[FuzzyMatchResult]:
    ranked = _rank_teams(value, sport_code)
    if not ranked:
        return None

    best_team, best_score = ranked[0]
    if best_score < threshold:
        return None

    alternatives = [
        team for team, score in ranked[1:]
        if score >= threshold * ALTERNATIVE_FACTOR
    ][:MAX_ALTERNATIVES]

    return FuzzyMatchResult(
        match=best_team,
        confidence=math.floor(best_score * 100),
        method=FuzzyMethod.FUZZY,
        fuzzy_score=best_score,
        alternatives=alternatives,
    )


def get_similar_teams(value: str, sport_code: str, limit: int = MAX_ALTERNATIVES) -> List[str]:
    """Nearest distinct teams, for operator suggestions."""
    ranked = _rank_teams(normalize(value), sport_code, include_aliases=False)
    return [team for team, _ in ranked[:limit]]


def fuzzy_match_team(
    input: str,
    sport_code: str,
    threshold: Optional[float] = None
) -> FuzzyMatchResult:
    """
    Match a team name with a confidence score.

    Args:
        input: Raw team name
        sport_code: Any configured sport code, core or extended
        threshold: Minimum Levenshtein similarity for the fuzzy tier
            (defaults to FUZZY_MATCH_THRESHOLD, 0.7)

    Returns:
        FuzzyMatchResult; method "none" carries suggestions in alternatives
    """
    if threshold is None:
        threshold = settings.FUZZY_MATCH_THRESHOLD

    code = (sport_code or "").lower()
    value = normalize(input)
    result = _match(value, code, threshold)
    result.original_input = input

    record_fuzzy_match(result.method.value, result.confidence)
    return result


def _match(value: str, sport_code: str, threshold: float) -> FuzzyMatchResult:
    exact = _try_exact(value, sport_code) if value else None
    if exact:
        return FuzzyMatchResult(
            match=exact,
            confidence=EXACT_CONFIDENCE,
            method=FuzzyMethod.EXACT,
            fuzzy_score=1.0,
        )

    alias = _try_alias(value, sport_code) if value else None
    if alias:
        canonical, confidence, score = alias
        return FuzzyMatchResult(
            match=_to_official(canonical, sport_code),
            confidence=confidence,
            method=FuzzyMethod.ALIAS,
            fuzzy_score=score,
        )

    expanded = expand_patterns(value, sport_code)
    if expanded and expanded != value:
        alias = _try_alias(expanded, sport_code)
        if alias:
            canonical, confidence, score = alias
            return FuzzyMatchResult(
                match=_to_official(canonical, sport_code),
                confidence=max(PATTERN_MIN_CONFIDENCE, confidence - PATTERN_PENALTY),
                method=FuzzyMethod.PATTERN,
                fuzzy_score=score,
            )

    fuzzy = _try_fuzzy(value, sport_code, threshold)
    if fuzzy:
        return fuzzy

    return FuzzyMatchResult(
        match=None,
        confidence=0,
        method=FuzzyMethod.NONE,
        fuzzy_score=0.0,
        alternatives=get_similar_teams(value, sport_code),
    )


def batch_fuzzy_match(
    inputs: Iterable[str],
    sport_code: str,
    threshold: Optional[float] = None
) -> List[FuzzyMatchResult]:
    """Match several names for one sport."""
    return [fuzzy_match_team(value, sport_code, threshold) for value in inputs]


def get_match_quality_stats(results: List[FuzzyMatchResult]) -> Dict[str, Any]:
    """
    Aggregate a batch of fuzzy results for monitoring.

    Returns:
        total, successful, by_method counts, avg_confidence (over non-zero
        confidences), low_confidence (below 80) and success_rate (percent)
    """
    total = len(results)
    successful = sum(1 for r in results if r.match is not None)
    scored = [r.confidence for r in results if r.confidence > 0]

    by_method: Mapping[str, int] = {
        method.value: sum(1 for r in results if r.method == method)
        for method in FuzzyMethod
    }

    return {
        "total": total,
        "successful": successful,
        "by_method": dict(by_method),
        "avg_confidence": sum(scored) / max(1, len(scored)),
        "low_confidence": sum(1 for c in scored if c < LOW_CONFIDENCE),
        "success_rate": (successful / total) * 100 if total else 0.0,
    }
