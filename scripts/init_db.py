#!/usr/bin/env python3
"""
Standalone database initialization script.
Creates every missing table for local development; production databases are
managed with `alembic upgrade head`.
"""

import logging
import sys

from recipestore.config import configure_logging, settings
from recipestore.exceptions import StorageUnavailableError
from recipestore.store import DataStore

logger = logging.getLogger("init_db")


def main() -> int:
    configure_logging(settings)
    logger.info("=" * 60)
    logger.info("Initializing database...")
    logger.info("=" * 60)

    store = DataStore()
    try:
        store.open(create_schema=True)
        store.ping()
    except StorageUnavailableError as e:
        logger.error(f"✗ Failed to initialize database: {e}")
        return 1
    finally:
        store.close()

    logger.info("✓ Database tables created successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
