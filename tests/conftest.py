"""Shared pytest fixtures for event-matching tests."""
import sys
from pathlib import Path
from typing import Dict, Generator, List

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Isolated in-memory database shared by every connection of one test."""
    from app.models import Base

    # StaticPool keeps a single connection so sessions opened by TestClient
    # threads and by the mapping store see the same data
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine) -> sessionmaker:
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="function")
def db_session(session_factory) -> Generator[Session, None, None]:
    """Create fresh test database session."""
    session = session_factory()
    yield session
    session.close()


# =============================================================================
# MAPPING CACHE
# =============================================================================

class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeMappingStore:
    """In-memory TeamMappingStore that can be told to fail."""

    def __init__(self, rows: List[Dict[str, str]] = None):
        self.rows = list(rows or [])
        self.fail = False
        self.fetch_calls = 0

    def fetch_mappings(self, sport_code: str):
        self.fetch_calls += 1
        if self.fail:
            raise ConnectionError("mapping store unreachable")
        return [dict(r) for r in self.rows if r["sport_code"] == sport_code]

    def fetch_all_mappings(self):
        self.fetch_calls += 1
        if self.fail:
            raise ConnectionError("mapping store unreachable")
        return [dict(r) for r in self.rows]


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mapping_store() -> FakeMappingStore:
    return FakeMappingStore()


@pytest.fixture
def mapping_cache(mapping_store, fake_clock):
    """Team mapping cache over the in-memory store with a 300s TTL."""
    from app.services.matching.team_mapping_cache import TeamMappingCache

    return TeamMappingCache(mapping_store, ttl_seconds=300, clock=fake_clock)


@pytest.fixture
def sql_mapping_cache(session_factory, fake_clock):
    """Team mapping cache backed by the test database."""
    from app.services.matching.team_mapping_cache import SqlTeamMappingStore, TeamMappingCache

    return TeamMappingCache(SqlTeamMappingStore(session_factory), ttl_seconds=300, clock=fake_clock)


# =============================================================================
# BOOKMAKER DATA
# =============================================================================

@pytest.fixture
def nhl_rows() -> List[Dict]:
    """One NHL bookmaker row: Rangers at Maple Leafs."""
    return [
        {
            "event_name": "NYR @ TOR",
            "commence_time": "2025-01-10T19:00:00Z",
            "home_team": "nyr",
            "away_team": "tor",
            "bookmakers": [],
        }
    ]


@pytest.fixture
def nhl_index(nhl_rows):
    from app.services.matching.book_index import index_bookmaker_events

    return index_bookmaker_events(nhl_rows, "nhl")


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture(scope="function")
def client(db_session: Session, sql_mapping_cache):
    """TestClient with the database and mapping cache pointed at the test DB."""
    from fastapi.testclient import TestClient

    from app.main import app
    from app.core.database import get_db
    from app.api.routes.matching import get_mapping_cache

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mapping_cache] = lambda: sql_mapping_cache

    yield TestClient(app)

    app.dependency_overrides.clear()
