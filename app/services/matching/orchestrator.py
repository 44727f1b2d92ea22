"""Matching orchestrator for one polling cycle.

Coordinates:
- Fetching user corrections from the team mapping cache
- Building the bookmaker index for a sport
- Matching every market against it
- Recording failures in the match_failures review queue
- Turning an operator's correction into a team mapping (self-healing loop)

The index is built once per cycle and treated as read-only by every match
against it.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models import MatchFailure
from app.repositories import MatchFailureRepository, TeamMappingRepository
from app.services.matching.book_index import BookEvent, BookIndex, index_bookmaker_events
from app.services.matching.matchers.poly_matcher import (
    FailureReason,
    MatchResult,
    is_placeholder_time,
    match_poly_market,
    match_with_canonical_primary,
    validate_matched_teams,
)
from app.services.matching.sports_config import get_league_name
from app.services.matching.team_mapping_cache import TeamMappingCache, get_team_mapping_cache

logger = logging.getLogger(__name__)

TEAM_FIELDS = ("team_a", "team_b")


def _rejection_note(result: MatchResult) -> str:
    match = result.match
    return (
        f"Rejected by title validation: matched "
        f"{match.get('_awayTeamResolved')} @ {match.get('_homeTeamResolved')} "
        f"(key {result.debug.lookup_key})"
    )


@dataclass
class MarketOutcome:
    title: str
    condition_id: Optional[str]
    result: MatchResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "condition_id": self.condition_id,
            **self.result.to_dict(),
        }


@dataclass
class CycleReport:
    sport_code: str
    total: int = 0
    matched: int = 0
    rejected: int = 0
    failures: Dict[str, int] = field(default_factory=dict)
    outcomes: List[MarketOutcome] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sport_code": self.sport_code,
            "total": self.total,
            "matched": self.matched,
            "rejected": self.rejected,
            "failures": dict(self.failures),
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


class MatchingOrchestrator:
    """
    Runs indexing and matching for one sport per cycle.

    Args:
        db: SQLAlchemy session used for the failure log and corrections
        mapping_cache: User mapping cache (defaults to the process-wide one)
    """

    def __init__(self, db: Session, mapping_cache: Optional[TeamMappingCache] = None):
        self.db = db
        self.mapping_cache = mapping_cache or get_team_mapping_cache()
        self.failure_repo = MatchFailureRepository(db)
        self.mapping_repo = TeamMappingRepository(db)

    def build_index(self, rows: Iterable[BookEvent], sport_code: str) -> BookIndex:
        """Index bookmaker rows with the sport's current user corrections."""
        user_mappings = self.mapping_cache.get(sport_code)
        return index_bookmaker_events(rows, sport_code, user_mappings=user_mappings)

    def match_markets(
        self,
        book_index: BookIndex,
        sport_code: str,
        markets: Iterable[Dict[str, Any]]
    ) -> CycleReport:
        """
        Match markets against an index and log every failure.

        Each market is a dict with "title" and optionally "team_a", "team_b",
        "event_date" and "condition_id". Teams are parsed from the title when
        not given. Matches whose teams do not appear in the title are
        discarded when VALIDATE_MATCHED_TEAMS is on.
        """
        league = get_league_name(sport_code)
        user_mappings = self.mapping_cache.get(sport_code)
        report = CycleReport(sport_code=sport_code)
        failures: Counter = Counter()

        for market in markets:
            report.total += 1
            title = market.get("title") or ""
            condition_id = market.get("condition_id")

            result = self._match_market(book_index, league, market, title, user_mappings)
            note = None

            if result.matched and settings.VALIDATE_MATCHED_TEAMS and title:
                if not validate_matched_teams(title, result.match):
                    note = _rejection_note(result)
                    logger.warning(f"[MATCH-CYCLE] Discarding match for {title!r}: {note}")
                    report.rejected += 1
                    result = MatchResult(
                        match=None,
                        method=None,
                        failure_reason=FailureReason.NO_BOOK_GAME_FOUND,
                        debug=result.debug,
                    )

            if result.matched:
                report.matched += 1
            else:
                failures[result.failure_reason.value] += 1
                self._record_failure(title, sport_code, result, condition_id, note)

            report.outcomes.append(MarketOutcome(title=title, condition_id=condition_id, result=result))

        report.failures = dict(failures)
        logger.info(
            f"[MATCH-CYCLE] {league}: matched {report.matched}/{report.total}, "
            f"rejected {report.rejected}, failures {report.failures}"
        )
        return report

    def _match_market(
        self,
        book_index: BookIndex,
        league: str,
        market: Dict[str, Any],
        title: str,
        user_mappings
    ) -> MatchResult:
        team_a, team_b = market.get("team_a"), market.get("team_b")
        event_date = market.get("event_date")
        placeholder = is_placeholder_time(event_date)

        if not team_a or not team_b:
            return match_with_canonical_primary(
                book_index,
                league,
                title,
                event_date,
                is_placeholder_time=placeholder,
                user_mappings=user_mappings,
                ambiguity_epsilon_hours=settings.AMBIGUITY_EPSILON_HOURS,
            )

        return match_poly_market(
            book_index,
            league,
            team_a,
            team_b,
            event_date,
            is_placeholder_time=placeholder,
            user_mappings=user_mappings,
            ambiguity_epsilon_hours=settings.AMBIGUITY_EPSILON_HOURS,
        )

    def _record_failure(
        self,
        title: str,
        sport_code: str,
        result: MatchResult,
        condition_id: Optional[str],
        note: Optional[str] = None
    ):
        team_a, team_b = result.debug.poly_teams
        self.failure_repo.record_failure(
            poly_event_title=title,
            poly_team_a=team_a,
            poly_team_b=team_b,
            sport_code=sport_code,
            failure_reason=result.failure_reason.value,
            poly_condition_id=condition_id,
            note=note,
        )

    def resolve_failure(
        self,
        failure_id: str,
        team_field: str,
        canonical_name: str
    ) -> Optional[MatchFailure]:
        """
        Turn an operator correction into a team mapping.

        Saves source name → canonical name for the failure's sport, closes
        the failure and clears the mapping cache so the next lookup uses it.

        Returns:
            The resolved failure, or None if the id is unknown

        Raises:
            ValueError: For an unknown team field or a failure with no name
                recorded in that field
        """
        if team_field not in TEAM_FIELDS:
            raise ValueError(f"team_field must be one of {TEAM_FIELDS}, got {team_field!r}")

        failure = self.failure_repo.find_by_id(failure_id)
        if failure is None:
            return None

        source_name = failure.poly_team_a if team_field == "team_a" else failure.poly_team_b
        if not source_name:
            raise ValueError(f"Failure {failure_id} has no {team_field} name to map")

        self.mapping_repo.upsert_mapping(
            source_name=source_name,
            canonical_name=canonical_name,
            sport_code=failure.sport_code,
        )
        self.failure_repo.mark_resolved(failure, f"{source_name} -> {canonical_name}")
        self.mapping_cache.clear()

        logger.info(
            f"[MATCH-CYCLE] Resolved failure {failure_id}: "
            f"{failure.sport_code}:{source_name!r} -> {canonical_name!r}"
        )
        return failure
