"""
Database configuration: declarative base, engine factory and schema creation.
"""

import logging
import time
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import func

from recipestore.config import Settings

logger = logging.getLogger("recipestore.database")

# Create SQLAlchemy Base
Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat a naive datetime as UTC; SQLite hands back naive values"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CreatedAtMixin:
    """Adds a creation timestamp defaulting to insert time."""

    created_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


class TimestampMixin(CreatedAtMixin):
    """Adds created_at and updated_at; the store refreshes updated_at on every update."""

    updated_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


def model_for_table(table):
    """Return the mapped class whose table is `table`"""
    for mapper in Base.registry.mappers:
        if mapper.local_table is table:
            return mapper.class_
    raise LookupError(f"No model mapped to table {table.name}")


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def create_store_engine(config: Settings) -> Engine:
    """
    Build an engine whose every storage call is bounded by config.db_timeout_sec.

    SQLite gets foreign keys switched on per connection; an in-memory database is
    shared through a single static connection so every session sees the same data.
    """
    url = config.database_url
    timeout = config.db_timeout_sec

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"timeout": timeout, "check_same_thread": False}}
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=config.db_echo, future=True, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    connect_args = {}
    if url.startswith("postgresql"):
        connect_args = {
            "connect_timeout": max(1, int(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        }
    return create_engine(
        url,
        echo=config.db_echo,
        future=True,
        pool_size=config.db_pool_size,
        pool_timeout=timeout,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False, future=True
    )


def init_database(engine: Engine, attempts: int = 1, delay_sec: float = 0.0) -> list:
    """
    Create every table that does not exist yet.

    Retries up to `attempts` times, waiting `delay_sec` between attempts, so a store
    opened while the database container is still starting does not fail outright.
    Returns the table names present afterwards.
    """
    # Registers every model on Base.metadata
    import recipestore.domain.models  # noqa: F401

    last_exc = None
    for attempt in range(1, attempts + 1):
        try:
            with engine.begin() as conn:
                Base.metadata.create_all(bind=conn)
            tables = inspect(engine).get_table_names()
            logger.info(f"Database tables ready: {len(tables)} tables")
            return tables
        except Exception as exc:
            last_exc = exc
            logger.warning(
                "Database init attempt %d/%d failed: %s", attempt, attempts, exc
            )
            if attempt < attempts:
                time.sleep(delay_sec)
    logger.error("Database initialization failed after %d attempts", attempts)
    raise last_exc
