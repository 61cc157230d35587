"""
Base Service Classes.

Provides the one CRUD pipeline every resource goes through:

    Router (thin) → Service (validation hooks, audit, commit) → Repository (data access) → Model

Usage:
    from rest_api.services.base_service import BaseCRUDService

    class EventService(BaseCRUDService[Event, EventOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                model=Event,
                output_schema=EventOutput,
                entity_name="Event",
                repository=EventRepository(db),
                audit_target="event",
            )
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, Type

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.repositories.base import BaseRepository, RepositoryFilters
from rest_api.services.audit import log_change, serialize_model, snapshot
from shared.config.constants import AuditAction
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.security.auth import Principal
from shared.utils.exceptions import DatabaseError, DuplicateEntityError, NotFoundError, ValidationError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


def actor_id(actor: Principal | None) -> str | None:
    """User id of the acting principal, if any."""
    return actor.user_id if actor is not None else None


# SQLSTATE for unique_violation (PostgreSQL); SQLite only reports it in the message
UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """True when an IntegrityError comes from a unique or primary key constraint."""
    orig = error.orig
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    message = str(orig if orig is not None else error).lower()
    return "unique constraint" in message or "duplicate key" in message


class BaseCRUDService(Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD operations.

    Responsibilities:
    - Data access via Repository
    - DTO transformation via output schema
    - Audit trail for every mutation, committed with the mutation itself
    - Business rule validation through overridable hooks
    - Translating store failures (unique violations, driver errors) into API errors
    """

    # Field used to name the conflicting value in duplicate-entity errors
    unique_field: str | None = None
    # NOT NULL columns that a partial update may not clear
    REQUIRED_ON_UPDATE: tuple[str, ...] = ()

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        repository: BaseRepository[ModelT],
        *,
        audit_target: str,
    ):
        self._db = db
        self._model = model
        self._output_schema = output_schema
        self._entity_name = entity_name
        self._repo = repository
        self._audit_target = audit_target

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> BaseRepository[ModelT]:
        """Repository for data access."""
        return self._repo

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def list_all(self, filters: RepositoryFilters | None = None) -> list[OutputT]:
        """List entities matching filters in the repository's default order."""
        try:
            entities = self._repo.find_all(filters)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {self._entity_name}", error=str(e), exc_info=True)
            raise DatabaseError(f"list {self._entity_name.lower()} records")
        return [self.to_output(e) for e in entities]

    def get_entity(self, entity_id: str) -> ModelT | None:
        """Get raw entity (for internal use)."""
        return self._repo.find_by_id(entity_id)

    def get_entity_or_404(self, entity_id: str) -> ModelT:
        entity = self._repo.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def get_by_id(self, entity_id: str) -> OutputT:
        """
        Get entity by ID.

        Raises:
            NotFoundError: If entity not found.
        """
        return self.to_output(self.get_entity_or_404(entity_id))

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any], actor: Principal | None = None) -> OutputT:
        """
        Create new entity.

        Raises:
            ValidationError: If a business rule rejects the data.
            DuplicateEntityError: If a unique column already holds the value.
            DatabaseError: If the store fails otherwise.
        """
        self._validate_create(data)
        data = self._prepare_create(data)

        entity = self._model(**data)

        try:
            self._repo.add(entity)
            log_change(
                self._db,
                actor_user_id=actor_id(actor),
                target_type=self._audit_target,
                target_id=str(entity.id),
                action=AuditAction.CREATE,
                new_values=serialize_model(entity),
            )
        except IntegrityError as e:
            self._db.rollback()
            self._raise_integrity(e, data)
        self._commit("create", data)
        self._db.refresh(entity)

        logger.info(f"{self._entity_name} created", entity_id=entity.id, actor=actor_id(actor))
        self._after_create(entity, actor)

        return self.to_output(entity)

    def update(
        self,
        entity_id: str,
        data: dict[str, Any],
        actor: Principal | None = None,
    ) -> OutputT:
        """
        Partially update an existing entity with the fields present in `data`.

        Raises:
            NotFoundError: If entity not found.
            ValidationError: If a business rule rejects the data.
            DuplicateEntityError: If a unique column already holds the value.
            DatabaseError: If the store fails otherwise.
        """
        entity = self.get_entity_or_404(entity_id)

        for field_name in self.REQUIRED_ON_UPDATE:
            if field_name in data and data[field_name] is None:
                raise ValidationError(f"Field '{field_name}' cannot be null")
        self._validate_update(entity, data)
        data = self._prepare_update(entity, data)

        old_values = snapshot({k: getattr(entity, k) for k in data if hasattr(entity, k)})

        for field_name, value in data.items():
            if hasattr(entity, field_name):
                setattr(entity, field_name, value)

        try:
            self._db.flush()
            log_change(
                self._db,
                actor_user_id=actor_id(actor),
                target_type=self._audit_target,
                target_id=str(entity.id),
                action=AuditAction.UPDATE,
                old_values=old_values,
                new_values=snapshot({k: getattr(entity, k) for k in data if hasattr(entity, k)}),
            )
        except IntegrityError as e:
            self._db.rollback()
            self._raise_integrity(e, data)
        self._commit("update", data)
        self._db.refresh(entity)

        logger.info(f"{self._entity_name} updated", entity_id=entity.id, fields=sorted(data))
        self._after_update(entity, old_values, actor)

        return self.to_output(entity)

    def delete(self, entity_id: str, actor: Principal | None = None) -> None:
        """
        Hard delete an entity.

        Raises:
            NotFoundError: If entity not found.
            ConflictError/ValidationError: If a business rule forbids the deletion.
        """
        entity = self.get_entity_or_404(entity_id)

        self._validate_delete(entity, actor)

        old_values = serialize_model(entity)

        try:
            log_change(
                self._db,
                actor_user_id=actor_id(actor),
                target_type=self._audit_target,
                target_id=str(entity_id),
                action=AuditAction.DELETE,
                old_values=old_values,
            )
            self._repo.delete(entity)
        except IntegrityError as e:
            self._db.rollback()
            self._raise_integrity(e, {})
        self._commit("delete", {})

        logger.info(f"{self._entity_name} deleted", entity_id=entity_id, actor=actor_id(actor))
        self._after_delete(old_values, actor)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """
        Convert entity to output DTO.

        Override this method for custom transformation logic.
        """
        return self._output_schema.model_validate(entity)

    # =========================================================================
    # Commit / error translation
    # =========================================================================

    def _commit(self, operation: str, data: dict[str, Any]) -> None:
        try:
            safe_commit(self._db)
        except IntegrityError as e:
            self._raise_integrity(e, data)
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to {operation} {self._entity_name}",
                error=str(e),
                exc_info=True,
            )
            raise DatabaseError(f"{operation} {self._entity_name.lower()}")

    def _raise_integrity(self, error: IntegrityError, data: dict[str, Any]) -> None:
        """
        Translate a constraint violation.

        Unique violations become DuplicateEntityError (400); NOT NULL, foreign
        key and check violations are store failures (DatabaseError, 500).
        """
        detail = str(error.orig) if error.orig is not None else str(error)
        if not is_unique_violation(error):
            logger.error(f"Constraint violation on {self._entity_name}", error=detail)
            raise DatabaseError(f"save {self._entity_name.lower()}")

        identifier = None
        if self.unique_field and data.get(self.unique_field) is not None:
            identifier = str(data[self.unique_field])
        logger.warning(f"Unique violation on {self._entity_name}", error=detail)
        raise DuplicateEntityError(self._entity_name, identifier)

    # =========================================================================
    # Validation Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        """
        Validate data before create.

        Raises:
            ValidationError: If validation fails.
        """
        pass

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        """
        Validate data before update.

        Raises:
            ValidationError: If validation fails.
        """
        pass

    def _validate_delete(self, entity: ModelT, actor: Principal | None) -> None:
        """
        Validate before delete.

        Override to check for dependent entities, etc.
        """
        pass

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Transform validated data into model constructor arguments."""
        return data

    def _prepare_update(self, entity: ModelT, data: dict[str, Any]) -> dict[str, Any]:
        """Transform validated data into attribute assignments."""
        return data

    # =========================================================================
    # Lifecycle Hooks (override in subclasses)
    # =========================================================================

    def _after_create(self, entity: ModelT, actor: Principal | None) -> None:
        """Hook called after entity creation."""
        pass

    def _after_update(
        self,
        entity: ModelT,
        old_values: dict[str, Any],
        actor: Principal | None,
    ) -> None:
        """Hook called after entity update."""
        pass

    def _after_delete(self, old_values: dict[str, Any], actor: Principal | None) -> None:
        """Hook called after entity deletion."""
        pass
