"""
Repository for unmatched market records (the self-healing review queue).
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models import MatchFailure
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class MatchFailureRepository(BaseRepository[MatchFailure]):
    """Data access for the match_failures table."""

    def __init__(self, db: Session):
        super().__init__(MatchFailure, db)

    def find_pending(self, limit: int = 20, sport_code: Optional[str] = None) -> List[MatchFailure]:
        """Pending failures, most frequent first."""
        query = self.query().filter(MatchFailure.resolution_status == 'pending')
        if sport_code:
            query = query.filter(MatchFailure.sport_code == sport_code)
        return query.order_by(
            MatchFailure.occurrence_count.desc(),
            MatchFailure.last_seen_at.desc()
        ).limit(limit).all()

    def record_failure(
        self,
        poly_event_title: str,
        poly_team_a: str,
        poly_team_b: str,
        sport_code: Optional[str],
        failure_reason: str,
        poly_condition_id: Optional[str] = None,
        note: Optional[str] = None
    ) -> MatchFailure:
        """
        Record an unmatched market.

        A pending row for the same title and sport is reused: its
        occurrence_count is incremented and the latest reason and note kept.
        """
        now = datetime.utcnow()
        failure = self.where_first(
            MatchFailure.poly_event_title == poly_event_title,
            MatchFailure.sport_code == sport_code,
            MatchFailure.resolution_status == 'pending'
        )

        if failure:
            failure.occurrence_count = (failure.occurrence_count or 0) + 1
            failure.last_seen_at = now
            failure.failure_reason = failure_reason
            failure.note = note
            if poly_condition_id and not failure.poly_condition_id:
                failure.poly_condition_id = poly_condition_id
        else:
            failure = self.create(
                id=str(uuid.uuid4()),
                poly_event_title=poly_event_title,
                poly_team_a=poly_team_a,
                poly_team_b=poly_team_b,
                poly_condition_id=poly_condition_id,
                sport_code=sport_code,
                failure_reason=failure_reason,
                note=note,
                resolution_status='pending',
                occurrence_count=1,
                first_seen_at=now,
                last_seen_at=now
            )

        self.save()
        return failure

    def mark_resolved(self, failure: MatchFailure, resolved_mapping: str) -> MatchFailure:
        """Close a failure once a correction has been saved for it."""
        failure.resolution_status = 'resolved'
        failure.resolved_at = datetime.utcnow()
        failure.resolved_mapping = resolved_mapping
        self.save()
        return failure
