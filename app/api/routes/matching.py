"""Matching API routes for diagnostics and the self-healing review queue.

Provides endpoints for:
- Resolving a single raw team name (with the tier that matched)
- Fuzzy matching with confidence scores and suggestions
- Index statistics for a batch of bookmaker rows
- Running a full index + match pass over posted rows and markets
- Reviewing and resolving match failures
- Inspecting cached user mappings
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models import MatchFailure
from app.repositories import MatchFailureRepository
from app.services.matching.book_index import get_index_stats
from app.services.matching.matchers.fuzzy_team_matcher import fuzzy_match_team
from app.services.matching.matchers.team_resolver import resolve_with_tier
from app.services.matching.orchestrator import MatchingOrchestrator
from app.services.matching.sports_config import get_sport_config
from app.services.matching.team_mapping_cache import TeamMappingCache, get_team_mapping_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matching", tags=["matching"])


# Request models
class ResolveRequest(BaseModel):
    """Raw team name to resolve."""
    raw_name: str = Field(..., description="Team name as written by the source")
    sport_code: str = Field(..., description="Sport code (nhl, nba, epl, ...)")


class FuzzyRequest(BaseModel):
    """Team name to fuzzy match."""
    input: str = Field(..., description="Team name as written by the source")
    sport_code: str = Field(..., description="Sport code, core or extended")
    threshold: Optional[float] = Field(None, ge=0, le=1, description="Minimum similarity (default 0.7)")


class BookRowsRequest(BaseModel):
    """A batch of bookmaker rows for one sport."""
    sport_code: str
    rows: List[Dict[str, Any]] = Field(default_factory=list, description="Bookmaker event rows")


class MarketIn(BaseModel):
    """A prediction market to match."""
    title: str = Field(..., description="Market title, e.g. 'Rangers vs. Maple Leafs'")
    team_a: Optional[str] = None
    team_b: Optional[str] = None
    event_date: Optional[str] = Field(None, description="Market start time (ISO format)")
    condition_id: Optional[str] = None


class MatchRequest(BookRowsRequest):
    """Bookmaker rows plus the markets to match against them."""
    markets: List[MarketIn] = Field(default_factory=list)


class ResolveFailureRequest(BaseModel):
    """Operator correction for a failed match."""
    team_field: str = Field(..., description="Which market team to map: team_a or team_b")
    canonical_name: str = Field(..., min_length=1, description="Official team name to map to")


# Dependencies
def get_mapping_cache() -> TeamMappingCache:
    """Dependency to get the shared team mapping cache."""
    return get_team_mapping_cache()


def get_orchestrator(
    db: Session = Depends(get_db),
    cache: TeamMappingCache = Depends(get_mapping_cache)
) -> MatchingOrchestrator:
    """Dependency to get a matching orchestrator instance."""
    return MatchingOrchestrator(db, mapping_cache=cache)


def _require_sport(sport_code: str) -> str:
    code = sport_code.lower()
    if get_sport_config(code) is None:
        raise HTTPException(status_code=404, detail=f"Unknown sport code: {sport_code}")
    return code


def _failure_to_dict(failure: MatchFailure) -> Dict[str, Any]:
    return {
        "id": failure.id,
        "poly_event_title": failure.poly_event_title,
        "poly_team_a": failure.poly_team_a,
        "poly_team_b": failure.poly_team_b,
        "poly_condition_id": failure.poly_condition_id,
        "sport_code": failure.sport_code,
        "failure_reason": failure.failure_reason,
        "note": failure.note,
        "resolution_status": failure.resolution_status,
        "resolved_mapping": failure.resolved_mapping,
        "occurrence_count": failure.occurrence_count,
        "first_seen_at": failure.first_seen_at.isoformat() if failure.first_seen_at else None,
        "last_seen_at": failure.last_seen_at.isoformat() if failure.last_seen_at else None,
        "resolved_at": failure.resolved_at.isoformat() if failure.resolved_at else None,
    }


@router.post("/resolve")
async def resolve_team(
    request: ResolveRequest,
    cache: TeamMappingCache = Depends(get_mapping_cache)
) -> Dict:
    """
    Resolve a raw team name to its official name.

    User corrections from the team_mappings table are applied first.
    """
    sport_code = _require_sport(request.sport_code)
    resolved, tier = resolve_with_tier(
        request.raw_name,
        sport_code,
        user_mappings=cache.get(sport_code)
    )
    return {
        "raw_name": request.raw_name,
        "sport_code": sport_code,
        "resolved": resolved,
        "tier": tier,
    }


@router.post("/fuzzy")
async def fuzzy_match(request: FuzzyRequest) -> Dict:
    """Fuzzy match a team name, returning confidence and suggestions."""
    sport_code = _require_sport(request.sport_code)
    return fuzzy_match_team(request.input, sport_code, request.threshold).to_dict()


@router.post("/index-stats")
async def index_stats(
    request: BookRowsRequest,
    cache: TeamMappingCache = Depends(get_mapping_cache)
) -> Dict:
    """Resolution statistics for a batch of bookmaker rows (no index built)."""
    sport_code = _require_sport(request.sport_code)
    stats = get_index_stats(request.rows, sport_code, user_mappings=cache.get(sport_code))
    return stats.to_dict()


@router.post("/match")
async def match_markets(
    request: MatchRequest,
    orchestrator: MatchingOrchestrator = Depends(get_orchestrator)
) -> Dict:
    """
    Index the posted bookmaker rows and match every market against them.

    Failures are recorded in the review queue.
    """
    sport_code = _require_sport(request.sport_code)
    book_index = orchestrator.build_index(request.rows, sport_code)
    report = orchestrator.match_markets(
        book_index,
        sport_code,
        [market.model_dump() for market in request.markets]
    )
    return report.to_dict()


@router.get("/failures")
async def list_failures(
    limit: int = Query(20, ge=1, le=200, description="Maximum failures to return"),
    sport_code: Optional[str] = Query(None, description="Filter by sport code"),
    db: Session = Depends(get_db)
) -> Dict:
    """Pending match failures, most frequent first."""
    failures = MatchFailureRepository(db).find_pending(limit=limit, sport_code=sport_code)
    return {
        "count": len(failures),
        "failures": [_failure_to_dict(f) for f in failures],
    }


@router.post("/failures/{failure_id}/resolve")
async def resolve_failure(
    failure_id: str,
    request: ResolveFailureRequest,
    orchestrator: MatchingOrchestrator = Depends(get_orchestrator)
) -> Dict:
    """
    Save an operator correction for a failed match.

    The correction is written to team_mappings and takes effect on the next
    lookup.
    """
    try:
        failure = orchestrator.resolve_failure(failure_id, request.team_field, request.canonical_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if failure is None:
        raise HTTPException(status_code=404, detail=f"Match failure {failure_id} not found")

    return _failure_to_dict(failure)


@router.get("/mappings/{sport_code}")
async def get_mappings(
    sport_code: str,
    cache: TeamMappingCache = Depends(get_mapping_cache)
) -> Dict:
    """Cached user mappings (normalized source name → canonical name)."""
    code = _require_sport(sport_code)
    mappings = cache.get(code)
    return {
        "sport_code": code,
        "count": len(mappings),
        "mappings": dict(mappings),
    }
