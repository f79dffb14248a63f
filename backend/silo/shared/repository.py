"""
Base repository with common CRUD operations.

Provides generic database operations for all feature repositories.
Uses a synchronous SQLAlchemy session: every caller is a short request
handler working on a single local database.

Usage:
    class MappingRepository(BaseRepository[MappingEntry]):
        def __init__(self, db: Session):
            super().__init__(db, MappingEntry)
"""

from typing import TypeVar, Generic, Type
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database operations.

    Provides common CRUD methods that can be inherited by feature repositories.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def get_by(self, **kwargs) -> T | None:
        """
        Get single entity by arbitrary field values.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            First matching entity or None
        """
        query = select(self.model)
        for key, value in kwargs.items():
            query = query.where(getattr(self.model, key) == value)
        return self.db.execute(query).scalars().first()

    def get_all(self, **kwargs) -> list[T]:
        """
        Get all entities matching criteria.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            List of matching entities
        """
        query = select(self.model)
        for key, value in kwargs.items():
            query = query.where(getattr(self.model, key) == value)
        return list(self.db.execute(query).scalars().all())

    def create(self, **kwargs) -> T:
        """
        Create new entity.

        Args:
            **kwargs: Field values for new entity

        Returns:
            Created entity
        """
        entity = self.model(**kwargs)
        self.db.add(entity)
        self.db.flush()
        return entity

    def delete_all(self) -> int:
        """
        Delete every row of the model's table.

        Returns:
            Number of deleted rows
        """
        result = self.db.execute(delete(self.model))
        self.db.flush()
        return result.rowcount or 0

    def count(self, **kwargs) -> int:
        """
        Count entities matching criteria.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            Number of matching entities
        """
        query = select(func.count()).select_from(self.model)
        for key, value in kwargs.items():
            query = query.where(getattr(self.model, key) == value)
        return self.db.execute(query).scalar() or 0
