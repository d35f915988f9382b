"""
DataStore - the explicit handle through which callers reach persistent storage.

Opened once at process start, closed on shutdown, stateless between calls. Every
operation runs in its own transaction; failures roll back and surface as one of
the store's error kinds.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Type, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.orm import Session

from recipestore.config import Settings, get_settings
from recipestore.domain.enums import EntityKind
from recipestore.domain.models import (
    create_session_factory,
    create_store_engine,
    init_database,
)
from recipestore.domain.registry import get_contract
from recipestore.exceptions import (
    ConflictError,
    InvalidReferenceError,
    NotFoundError,
    ServiceValidationError,
    StorageUnavailableError,
    StoreError,
)
from recipestore.repositories import RecipeRepository, TagRepository, CategoryRepository

logger = logging.getLogger("recipestore.store")

Kind = Union[EntityKind, str]


def parse_payload(schema: Type[BaseModel], fields: Any) -> BaseModel:
    """
    Validate caller-supplied fields against an input contract.

    Raises:
        ServiceValidationError: missing, unknown or malformed fields
    """
    if isinstance(fields, schema):
        return fields
    if isinstance(fields, BaseModel):
        fields = fields.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(fields if fields is not None else {})
    except PydanticValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        raise ServiceValidationError(
            f"Invalid {schema.__name__} data",
            details={"errors": errors},
            code="invalid_fields",
        ) from exc


def translate_error(exc: Exception) -> Optional[StoreError]:
    """Map a SQLAlchemy failure onto the store's error taxonomy"""
    if isinstance(exc, StoreError):
        return None
    if isinstance(exc, IntegrityError):
        message = str(exc.orig)
        if "foreign key" in message.lower():
            return InvalidReferenceError(
                "Referenced entity does not exist", details={"error": message}
            )
        return ConflictError("Constraint violated", details={"error": message})
    if isinstance(exc, DataError):
        return ServiceValidationError(
            "Value rejected by the database", details={"error": str(exc.orig)}
        )
    if isinstance(exc, (OperationalError, InterfaceError, PoolTimeoutError)) or (
        isinstance(exc, DBAPIError) and exc.connection_invalidated
    ):
        logger.error(f"storage_unavailable error={exc}")
        return StorageUnavailableError(
            "Storage unavailable or timed out", details={"error": str(exc)}
        )
    return None


class DataStore:
    """
    Domain data store.

    Usage:
        store = DataStore().open()
        user = store.insert("user", {"username": "sarah", "email": "sarah@example.com"})
        store.close()
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        *,
        timeout_sec: Optional[float] = None,
        echo: Optional[bool] = None,
        config: Optional[Settings] = None,
    ):
        overrides = {}
        if database_url is not None:
            overrides["database_url"] = database_url
        if timeout_sec is not None:
            overrides["db_timeout_sec"] = timeout_sec
        if echo is not None:
            overrides["db_echo"] = echo
        self.config = (config or get_settings()).model_copy(update=overrides)
        self._engine: Optional[Engine] = None
        self._session_factory = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StorageUnavailableError("Data store is not open", code="store_closed")
        return self._engine

    def open(self, create_schema: bool = False) -> "DataStore":
        """Build the engine and session factory; optionally create missing tables"""
        if self._engine is None:
            self._engine = create_store_engine(self.config)
            self._session_factory = create_session_factory(self._engine)
            logger.info(f"Data store opened ({self._engine.url.get_backend_name()})")
        if create_schema:
            try:
                init_database(
                    self._engine,
                    attempts=self.config.db_init_attempts,
                    delay_sec=self.config.db_init_delay_sec,
                )
            except SQLAlchemyError as exc:
                raise StorageUnavailableError(
                    "Could not create database schema", details={"error": str(exc)}
                ) from exc
        return self

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Data store closed")
        self._engine = None
        self._session_factory = None

    def __enter__(self) -> "DataStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        One transaction: commit on success, roll back and translate on failure.
        """
        if self._session_factory is None:
            raise StorageUnavailableError("Data store is not open", code="store_closed")
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception as exc:
            session.rollback()
            translated = translate_error(exc)
            if translated is None:
                raise
            raise translated from exc
        finally:
            session.close()

    def ping(self) -> bool:
        """Round-trip to the database; raises StorageUnavailableError on failure"""
        with self.session_scope() as db:
            db.execute(text("SELECT 1"))
        return True

    # ------------------------------------------------------------------
    # Entity CRUD
    # ------------------------------------------------------------------

    def insert(self, kind: Kind, fields: Any) -> BaseModel:
        """
        Insert a new entity.

        Args:
            kind: entity kind
            fields: mapping (or schema instance) restricted to the insertable whitelist

        Returns:
            Read model with the assigned id and defaulted fields

        Raises:
            ServiceValidationError: missing/unknown field or bad value
            ConflictError: uniqueness violation (checked before references)
            InvalidReferenceError: dangling foreign key
        """
        contract = get_contract(kind)
        payload = parse_payload(contract.create_schema, fields)
        values = payload.model_dump(exclude_none=True)
        with self.session_scope() as db:
            entity = contract.repository_for(db).create(values)
            result = contract.read_schema.model_validate(entity)
        logger.info(f"entity_created kind={contract.kind.value} id={result.id}")
        return result

    def get(self, kind: Kind, entity_id: Any) -> BaseModel:
        contract = get_contract(kind)
        with self.session_scope() as db:
            entity = self._require(contract, db, entity_id)
            return contract.read_schema.model_validate(entity)

    def update(self, kind: Kind, entity_id: Any, fields: Any) -> BaseModel:
        """
        Apply a partial update to the mutable surface of an entity.

        Raises:
            ServiceValidationError: immutable entity, unknown field, null in a
                required column, bad value
            ConflictError: uniqueness violation
            NotFoundError: no such entity
        """
        contract = get_contract(kind)
        if not contract.mutable:
            with self.session_scope() as db:
                self._require(contract, db, entity_id)
            raise ServiceValidationError(
                f"{contract.kind.value} cannot be updated; delete and insert instead",
                code="immutable_entity",
            )
        payload = parse_payload(contract.update_schema, fields)
        values = payload.model_dump(exclude_unset=True)
        with self.session_scope() as db:
            repo = contract.repository_for(db)
            entity = self._require(contract, db, entity_id)
            entity = repo.update(entity, values)
            result = contract.read_schema.model_validate(entity)
        logger.info(
            f"entity_updated kind={contract.kind.value} id={result.id} fields={sorted(values)}"
        )
        return result

    def delete(self, kind: Kind, entity_id: Any) -> None:
        """Delete an entity and everything it owns. Not idempotent."""
        contract = get_contract(kind)
        with self.session_scope() as db:
            if not contract.repository_for(db).delete(entity_id):
                raise self._not_found(contract, entity_id)
        logger.info(f"entity_deleted kind={contract.kind.value} id={entity_id}")

    # ------------------------------------------------------------------
    # Relationship queries
    # ------------------------------------------------------------------

    def list_by_parent(
        self, child_kind: Kind, parent_id: Any, parent_kind: Optional[Kind] = None
    ) -> List[BaseModel]:
        """
        All children of a parent, in insertion order (instructions by step order).

        `parent_kind` picks the foreign key for children with several parents;
        by default the owning one is used.
        """
        contract = get_contract(child_kind)
        resolved_parent, column = contract.parent_column(parent_kind)
        parent_contract = get_contract(resolved_parent)
        with self.session_scope() as db:
            parent = self._require(parent_contract, db, parent_id)
            rows = contract.repository_for(db).list_by(column, parent.id)
            return [contract.read_schema.model_validate(row) for row in rows]

    def list_recipes_by_tag(self, tag_id: Any) -> List[BaseModel]:
        recipe_contract = get_contract(EntityKind.RECIPE)
        with self.session_scope() as db:
            tag = self._require(get_contract(EntityKind.TAG), db, tag_id)
            recipes = RecipeRepository(db).list_by_tag(tag.id)
            return [recipe_contract.read_schema.model_validate(r) for r in recipes]

    def list_recipes_by_category(self, category_id: Any) -> List[BaseModel]:
        recipe_contract = get_contract(EntityKind.RECIPE)
        with self.session_scope() as db:
            category = self._require(get_contract(EntityKind.CATEGORY), db, category_id)
            recipes = RecipeRepository(db).list_by_category(category.id)
            return [recipe_contract.read_schema.model_validate(r) for r in recipes]

    def get_tag_by_name(self, name: str) -> BaseModel:
        with self.session_scope() as db:
            tag = TagRepository(db).get_by_name(name)
            if tag is None:
                raise NotFoundError(f"tag '{name}' not found", code="not_found")
            return get_contract(EntityKind.TAG).read_schema.model_validate(tag)

    def get_category_by_slug(self, slug: str) -> BaseModel:
        with self.session_scope() as db:
            category = CategoryRepository(db).get_by_slug(slug)
            if category is None:
                raise NotFoundError(f"category '{slug}' not found", code="not_found")
            return get_contract(EntityKind.CATEGORY).read_schema.model_validate(category)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require(self, contract, db: Session, entity_id: Any):
        entity = contract.repository_for(db).get_by_id(entity_id)
        if entity is None:
            raise self._not_found(contract, entity_id)
        return entity

    @staticmethod
    def _not_found(contract, entity_id: Any) -> NotFoundError:
        logger.warning(f"entity_not_found kind={contract.kind.value} id={entity_id}")
        return NotFoundError(
            f"{contract.kind.value} {entity_id} not found",
            details={"kind": contract.kind.value, "id": str(entity_id)},
            code="not_found",
        )
