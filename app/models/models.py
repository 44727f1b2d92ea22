"""
Database models for the event matching service.

Only the self-healing loop is persisted here:
- team_mappings: operator-curated corrections (raw source name -> canonical name)
- match_failures: unmatched markets awaiting a correction
"""
from datetime import datetime
from sqlalchemy import Column, String, Float, Integer, DateTime, Text, Index, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class TeamMapping(Base):
    """User-curated team name correction.

    Rows take the highest priority in team resolution: a raw source name that
    normalizes to a stored source_name resolves to canonical_name before any
    abbreviation, nickname, city or substring heuristic runs.

    Key fields:
    - source_name: Raw name as seen in a feed (e.g., "Man Utd", "LA Kings")
    - canonical_name: Official full name from the sport's team map
    - sport_code: Sport code the correction applies to (e.g., "nhl", "epl")
    """
    __tablename__ = "team_mappings"

    id = Column(String(36), primary_key=True)
    source_name = Column(String(128), nullable=False)
    canonical_name = Column(String(128), nullable=False)
    sport_code = Column(String(32), nullable=False, index=True)
    confidence = Column(Float, nullable=True, default=1.0)
    source = Column(String(32), nullable=True, default='manual')  # manual, fuzzy_review, import
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('source_name', 'sport_code', name='uq_team_mappings_source_sport'),
        Index('ix_team_mappings_lookup', 'source_name', 'sport_code'),
    )

    def __repr__(self):
        return f"<TeamMapping {self.sport_code}:{self.source_name!r} -> {self.canonical_name!r}>"


class MatchFailure(Base):
    """An unmatched prediction-market event, aggregated by title and sport.

    Repeated failures for the same title bump occurrence_count and
    last_seen_at instead of inserting a new row, so the pending queue is
    ordered by how often a missing alias costs us a match.
    """
    __tablename__ = "match_failures"

    id = Column(String(36), primary_key=True)
    poly_event_title = Column(Text, nullable=False)
    poly_team_a = Column(String(128), nullable=False)
    poly_team_b = Column(String(128), nullable=False)
    poly_condition_id = Column(String(128), nullable=True)
    sport_code = Column(String(32), nullable=True, index=True)
    failure_reason = Column(String(32), nullable=False, default='TEAM_ALIAS_MISSING')
    resolution_status = Column(String(16), nullable=False, default='pending', index=True)  # pending, resolved, ignored
    resolved_mapping = Column(Text, nullable=True)
    note = Column(Text, nullable=True)
    occurrence_count = Column(Integer, nullable=False, default=1)
    first_seen_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    last_seen_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    resolved_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index('ix_match_failures_title_sport', 'poly_event_title', 'sport_code'),
    )

    def __repr__(self):
        return (f"<MatchFailure {self.sport_code}:{self.poly_event_title!r} "
                f"{self.failure_reason} x{self.occurrence_count}>")
