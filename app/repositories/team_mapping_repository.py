"""
Repository for user-curated team mappings.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import TeamMapping
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class TeamMappingRepository(BaseRepository[TeamMapping]):
    """Data access for the team_mappings table."""

    def __init__(self, db: Session):
        super().__init__(TeamMapping, db)

    def find_by_sport(self, sport_code: str) -> List[TeamMapping]:
        """All corrections for one sport code."""
        return self.where(TeamMapping.sport_code == sport_code)

    def find_by_source_name(self, source_name: str, sport_code: str) -> Optional[TeamMapping]:
        """Find the correction for an exact (source_name, sport_code) pair."""
        return self.where_first(
            TeamMapping.source_name == source_name,
            TeamMapping.sport_code == sport_code
        )

    def upsert_mapping(
        self,
        source_name: str,
        canonical_name: str,
        sport_code: str,
        source: str = 'manual',
        confidence: float = 1.0
    ) -> TeamMapping:
        """
        Create or update a correction.

        Uses the check-then-insert pattern with IntegrityError handling so two
        operators saving the same correction at once end up with a single row.
        """
        mapping = self.find_by_source_name(source_name, sport_code)

        if not mapping:
            try:
                mapping = self.create(
                    id=str(uuid.uuid4()),
                    source_name=source_name,
                    canonical_name=canonical_name,
                    sport_code=sport_code,
                    source=source,
                    confidence=confidence,
                    created_at=datetime.utcnow()
                )
                self.flush()
                logger.debug(f"Created team mapping {sport_code}:{source_name!r}")
            except IntegrityError:
                self.rollback()
                mapping = self.find_by_source_name(source_name, sport_code)
                if mapping is None:
                    raise

        mapping.canonical_name = canonical_name
        mapping.source = source
        mapping.confidence = confidence
        self.save()

        logger.info(f"Team mapping saved: {sport_code}:{source_name!r} -> {canonical_name!r}")
        return mapping
