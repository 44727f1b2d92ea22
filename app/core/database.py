"""
Database configuration and session management.

The matching core itself never touches the database; only the team mapping
store (user-curated corrections) and the match failure log live here.
"""
import os
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from app.core.config import settings

_engine = None
_SessionLocal = None


def _create_engine(database_url: str) -> Engine:
    """Create an engine with pooling suited to the backend."""
    echo = os.getenv("SQL_ECHO", "false").lower() == "true"

    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo
        )

    return create_engine(
        database_url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before using
        echo=echo
    )


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine, _SessionLocal

    if _engine is None:
        _engine = _create_engine(settings.DATABASE_URL)
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)

    return _engine


def get_session_factory() -> sessionmaker:
    """Get the session factory bound to the application engine."""
    get_engine()
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.

    Usage in FastAPI:
    ```python
    @router.get("/endpoint")
    def endpoint(db: Session = Depends(get_db)):
        # Use db here
        pass
    ```
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    from app.models import Base
    # checkfirst=True will only create tables that don't exist
    Base.metadata.create_all(bind=get_engine(), checkfirst=True)
