"""
User Mapping Cache.

Caches operator-curated team corrections (raw source name → canonical name)
per sport code. These corrections take the highest priority in team
resolution, which closes the self-healing loop: a name that failed to match
is corrected once in the team_mappings table and is picked up by every
consumer on the next refresh.

Cache semantics:
- Entries live for ttl_seconds (5 minutes by default) and are re-fetched after
- A refresh replaces the whole entry with a new immutable mapping; readers
  holding the old one are unaffected, so no lock is needed
- A failed refresh logs a warning and keeps serving the previous entry
  (or an empty map) instead of raising
"""
import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Protocol

from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.core.metrics import record_cache_refresh
from app.repositories.team_mapping_repository import TeamMappingRepository
from app.services.matching.utils.name_normalizer import normalize

logger = logging.getLogger(__name__)

EMPTY_MAPPINGS: Mapping[str, str] = MappingProxyType({})


class TeamMappingStore(Protocol):
    """Backing store for user-curated corrections."""

    def fetch_mappings(self, sport_code: str) -> Iterable[Dict[str, Any]]:
        ...

    def fetch_all_mappings(self) -> Iterable[Dict[str, Any]]:
        ...


class SqlTeamMappingStore:
    """TeamMappingStore over the team_mappings table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def fetch_mappings(self, sport_code: str):
        db = self.session_factory()
        try:
            return [_row_to_dict(m) for m in TeamMappingRepository(db).find_by_sport(sport_code)]
        finally:
            db.close()

    def fetch_all_mappings(self):
        db = self.session_factory()
        try:
            return [_row_to_dict(m) for m in TeamMappingRepository(db).find_all()]
        finally:
            db.close()


def _row_to_dict(mapping) -> Dict[str, Any]:
    return {
        "source_name": mapping.source_name,
        "canonical_name": mapping.canonical_name,
        "sport_code": mapping.sport_code,
    }


@dataclass(frozen=True)
class CacheEntry:
    mappings: Mapping[str, str]
    fetched_at: float


class TeamMappingCache:
    """
    Per-sport TTL cache of user team mappings.

    Args:
        store: TeamMappingStore to fetch corrections from
        ttl_seconds: Entry lifetime
        clock: Monotonic clock in seconds (injectable for tests)
    """

    def __init__(
        self,
        store: TeamMappingStore,
        ttl_seconds: float = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.store = store
        self.ttl_seconds = settings.TEAM_MAPPING_CACHE_TTL if ttl_seconds is None else ttl_seconds
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, sport_code: str) -> Mapping[str, str]:
        """
        Get normalized source name → canonical name for a sport code.

        Never raises: a failed refresh returns the previous (possibly stale)
        entry, or an empty map when nothing was ever cached.
        """
        now = self.clock()
        cached = self._entries.get(sport_code)
        if cached is not None and now - cached.fetched_at < self.ttl_seconds:
            return cached.mappings

        try:
            rows = self.store.fetch_mappings(sport_code)
            mappings = MappingProxyType({
                normalize(row["source_name"]): row["canonical_name"]
                for row in rows or []
                if row.get("source_name")
            })
        except Exception as e:
            logger.warning(
                f"[TEAM-MAPPING-CACHE] Failed to fetch mappings for {sport_code}: {e}"
            )
            record_cache_refresh(sport_code, success=False)
            return cached.mappings if cached is not None else EMPTY_MAPPINGS

        self._entries[sport_code] = CacheEntry(mappings=mappings, fetched_at=now)
        record_cache_refresh(sport_code, success=True)
        logger.info(f"[TEAM-MAPPING-CACHE] Loaded {len(mappings)} mappings for {sport_code}")
        return mappings

    def get_all(self) -> Mapping[str, str]:
        """
        Get every correction keyed by "sport_code|normalized_source_name".

        Not cached. Intended for batch tooling; a failure returns an empty map.
        """
        try:
            rows = self.store.fetch_all_mappings()
            mappings = {
                f"{row['sport_code']}|{normalize(row['source_name'])}": row["canonical_name"]
                for row in rows or []
                if row.get("source_name")
            }
        except Exception as e:
            logger.warning(f"[TEAM-MAPPING-CACHE] Failed to fetch all mappings: {e}")
            return EMPTY_MAPPINGS

        logger.info(f"[TEAM-MAPPING-CACHE] Loaded {len(mappings)} total mappings across all sports")
        return MappingProxyType(mappings)

    def clear(self):
        """Drop every cached entry."""
        self._entries = {}

    def age_of(self, sport_code: str) -> Optional[float]:
        """Seconds since the entry for a sport code was fetched, if cached."""
        entry = self._entries.get(sport_code)
        return None if entry is None else self.clock() - entry.fetched_at


@lru_cache()
def get_team_mapping_cache() -> TeamMappingCache:
    """Process-wide cache backed by the application database."""
    from app.core.database import get_session_factory

    return TeamMappingCache(SqlTeamMappingStore(get_session_factory()))
