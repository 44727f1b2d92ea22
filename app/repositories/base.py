"""
Base repository class for data access layer.

The repository pattern provides:
1. Separation of data access logic from business logic
2. Single place for query logic (easier to maintain)
3. Easier testing (can mock repositories)
4. Consistent interface for data operations

Example:
    class TeamMappingRepository(BaseRepository[TeamMapping]):
        def find_by_sport(self, sport_code: str) -> List[TeamMapping]:
            return self.where(TeamMapping.sport_code == sport_code)
"""
from abc import ABC
from typing import TypeVar, Generic, Type, Optional, List
from sqlalchemy import desc, func
from sqlalchemy.orm import Query, Session

T = TypeVar("T")


class BaseRepository(Generic[T], ABC):
    """
    Base repository class providing common data access methods.

    All repositories should extend this class and specify their model type.

    Attributes:
        model_type: The SQLAlchemy model class this repository manages
        db: The database session
    """

    def __init__(self, model_type: Type[T], db: Session):
        self.model_type = model_type
        self.db = db

    # ========================================================================
    # CRUD Operations
    # ========================================================================

    def find_by_id(self, id: str) -> Optional[T]:
        """Find a single record by ID."""
        return self.db.query(self.model_type).filter(self.model_type.id == id).first()

    def find_all(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order_by: Optional[str] = None
    ) -> List[T]:
        """
        Find all records with optional pagination.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
            order_by: Column name to order by (prefix with '-' for descending)
        """
        query = self.db.query(self.model_type)

        if order_by:
            if order_by.startswith('-'):
                query = query.order_by(desc(getattr(self.model_type, order_by[1:])))
            else:
                query = query.order_by(getattr(self.model_type, order_by))

        if offset is not None:
            query = query.offset(offset)

        if limit is not None:
            query = query.limit(limit)

        return query.all()

    def create(self, **kwargs) -> T:
        """
        Create a new record.

        Returns:
            The created record (not yet committed to database)
        """
        instance = self.model_type(**kwargs)
        self.db.add(instance)
        return instance

    # ========================================================================
    # Query Builders
    # ========================================================================

    def query(self) -> Query:
        """Get a new query object for this model."""
        return self.db.query(self.model_type)

    def where(self, *criterion) -> List[T]:
        """Filter records using SQLAlchemy expressions."""
        return self.db.query(self.model_type).filter(*criterion).all()

    def where_first(self, *criterion) -> Optional[T]:
        """Filter records using SQLAlchemy expressions and return first match."""
        return self.db.query(self.model_type).filter(*criterion).first()

    def count(self, *criterion) -> int:
        """Count records matching optional criterion."""
        query = self.db.query(func.count(self.model_type.id))
        if criterion:
            query = query.filter(*criterion)
        return query.scalar() or 0

    # ========================================================================
    # Save Operations
    # ========================================================================

    def save(self) -> None:
        """Commit pending changes to the database."""
        self.db.commit()

    def flush(self) -> None:
        """Flush pending changes without committing."""
        self.db.flush()

    def rollback(self) -> None:
        """Rollback pending changes."""
        self.db.rollback()
