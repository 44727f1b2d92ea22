"""
Repository layer for data access.

Usage:
    from app.repositories import TeamMappingRepository
    from app.core.database import get_session_factory

    db = get_session_factory()()
    repo = TeamMappingRepository(db)
    mappings = repo.find_by_sport("nhl")
    db.close()
"""

from app.repositories.base import BaseRepository
from app.repositories.team_mapping_repository import TeamMappingRepository
from app.repositories.match_failure_repository import MatchFailureRepository

__all__ = [
    "BaseRepository",
    "TeamMappingRepository",
    "MatchFailureRepository",
]
