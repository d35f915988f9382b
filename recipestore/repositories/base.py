"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.

Repositories never commit: the DataStore owns the transaction and commits or rolls
back the whole unit of work. Integrity checks run in a fixed order so callers get a
predictable error: uniqueness first, then foreign keys.
"""

import logging
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from sqlalchemy import Integer
from sqlalchemy.orm import Session

from recipestore.domain.models.database import model_for_table, utcnow
from recipestore.domain.schemas.common import INT_MAX, INT_MIN
from recipestore.exceptions import (
    ConflictError,
    InvalidReferenceError,
    ServiceValidationError,
)

ModelType = TypeVar("ModelType")

logger = logging.getLogger("recipestore.repositories")


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing common CRUD operations and integrity checks.
    Entities without special rules use it directly; the rest subclass it.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    @property
    def table(self):
        return self.model.__table__

    def coerce_id(self, entity_id: Any) -> Optional[Any]:
        """
        Convert an incoming identifier to the primary key type.
        Returns None when it cannot be converted, which callers treat as absent.
        """
        if entity_id is None or isinstance(entity_id, bool):
            return None
        pk = self.table.primary_key.columns.values()[0]
        if not isinstance(pk.type, Integer):
            return str(entity_id)
        if isinstance(entity_id, float) and not entity_id.is_integer():
            return None
        try:
            key = int(entity_id)
        except (TypeError, ValueError, OverflowError):
            return None
        if not INT_MIN <= key <= INT_MAX:
            return None
        return key

    def get_by_id(self, entity_id: Any) -> Optional[ModelType]:
        """
        Get entity by ID.

        Args:
            entity_id: primary key, any value convertible to the key type

        Returns:
            Entity or None if not found
        """
        key = self.coerce_id(entity_id)
        if key is None:
            return None
        return self.db.get(self.model, key)

    def order_clause(self) -> list:
        """Default listing order: insertion order"""
        return [self.model.id]

    def get_all(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """Get all entities with pagination"""
        return (
            self.db.query(self.model)
            .order_by(*self.order_clause())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def list_by(self, column: str, value: Any) -> List[ModelType]:
        """All rows whose `column` equals `value`, in listing order"""
        return (
            self.db.query(self.model)
            .filter(getattr(self.model, column) == value)
            .order_by(*self.order_clause())
            .all()
        )

    # ------------------------------------------------------------------
    # Integrity checks
    # ------------------------------------------------------------------

    def unique_columns(self) -> List[str]:
        return [column.key for column in self.table.columns if column.unique]

    def references(self) -> Dict[str, type]:
        """Foreign-key columns mapped to the model they point at"""
        refs = {}
        for column in self.table.columns:
            for fk in column.foreign_keys:
                refs[column.key] = model_for_table(fk.column.table)
        return refs

    def check_unique(self, values: Mapping[str, Any], exclude_id: Any = None) -> None:
        """Raise ConflictError if a unique column value is already taken"""
        for name in self.unique_columns():
            if name not in values or values[name] is None:
                continue
            query = self.db.query(self.model.id).filter(
                getattr(self.model, name) == values[name]
            )
            if exclude_id is not None:
                query = query.filter(self.model.id != exclude_id)
            if query.first() is not None:
                logger.warning(
                    f"unique_violation table={self.table.name} field={name}"
                )
                raise ConflictError(
                    f"{self.table.name}.{name} '{values[name]}' already exists",
                    details={"field": name, "value": values[name]},
                    code=f"duplicate_{name}",
                )

    def check_references(self, values: Mapping[str, Any]) -> None:
        """Raise InvalidReferenceError if a foreign key points at nothing"""
        for name, target in self.references().items():
            if name not in values or values[name] is None:
                continue
            if self.db.get(target, values[name]) is None:
                logger.warning(
                    f"dangling_reference table={self.table.name} field={name} value={values[name]}"
                )
                raise InvalidReferenceError(
                    f"{target.__tablename__} {values[name]} referenced by "
                    f"{self.table.name}.{name} does not exist",
                    details={"field": name, "value": values[name]},
                    code="invalid_reference",
                )

    def check_nullable(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            if value is None and not self.table.columns[name].nullable:
                raise ServiceValidationError(
                    f"{self.table.name}.{name} cannot be null",
                    details={"field": name},
                    code="null_value",
                )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, values: Mapping[str, Any]) -> ModelType:
        """Create new entity from whitelisted values"""
        self.check_unique(values)
        self.check_references(values)
        entity = self.model(**values)
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelType, values: Mapping[str, Any]) -> ModelType:
        """Apply changed fields to an existing entity and refresh updated_at"""
        if not values:
            return entity
        self.check_nullable(values)
        self.check_unique(values, exclude_id=entity.id)
        self.check_references(values)
        for name, value in values.items():
            setattr(entity, name, value)
        if hasattr(entity, "updated_at"):
            entity.updated_at = utcnow()
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: Any) -> bool:
        """Delete entity by ID; owned rows go with it"""
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.flush()
        return True
