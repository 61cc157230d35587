"""
Base Repository implementation.
Provides common data access patterns: filtered, ordered listing and lookup by id.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TypeVar, Generic, Sequence
from sqlalchemy.orm import Session
from sqlalchemy import Select, select, func

from shared.config.constants import Limits
from shared.utils.validators import sanitize_search_term


ModelT = TypeVar("ModelT")


@dataclass
class RepositoryFilters:
    """Base filters for repository queries."""

    # Free-text search (substring match on the entity's name column)
    search: str | None = None

    def __post_init__(self):
        """Normalize filters."""
        if self.search:
            self.search = sanitize_search_term(self.search, Limits.MAX_SEARCH_TERM_LENGTH) or None


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: The SQLAlchemy model class
    - _base_query(): Base select with eager loading and default ordering
    - _apply_filters(): Entity-specific filters
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    @abstractmethod
    def _base_query(self) -> Select:
        """Return base query with eager loading and default ordering."""
        ...

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply entity-specific filters to query. No-op by default."""
        return query

    def find_all(self, filters: RepositoryFilters | None = None) -> Sequence[ModelT]:
        """Find all entities matching filters, in the repository's default order."""
        query = self._base_query()
        if filters is not None:
            query = self._apply_filters(query, filters)
        return self._db.execute(query).scalars().unique().all()

    def find_by_id(self, entity_id: str) -> ModelT | None:
        """Find entity by ID."""
        query = self._base_query().where(self.model.id == entity_id)
        return self._db.scalar(query)

    def count(self) -> int:
        """Count all rows of the entity."""
        query = select(func.count()).select_from(self.model)
        return self._db.scalar(query) or 0

    def exists(self, entity_id: str) -> bool:
        """Check if entity exists."""
        query = select(func.count()).select_from(self.model).where(self.model.id == entity_id)
        return (self._db.scalar(query) or 0) > 0

    def add(self, entity: ModelT) -> ModelT:
        """Stage a new entity and flush to obtain defaults."""
        self._db.add(entity)
        self._db.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        """Hard delete entity."""
        self._db.delete(entity)
        self._db.flush()
