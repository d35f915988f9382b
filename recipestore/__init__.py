"""
recipestore - relational data store for the recipe and meal-planning application.
"""

from recipestore.domain.enums import EntityKind
from recipestore.exceptions import (
    StoreError,
    ServiceValidationError,
    ConflictError,
    InvalidReferenceError,
    NotFoundError,
    StorageUnavailableError,
)
from recipestore.store import DataStore

__version__ = "1.0.0"

__all__ = [
    "DataStore",
    "EntityKind",
    "StoreError",
    "ServiceValidationError",
    "ConflictError",
    "InvalidReferenceError",
    "NotFoundError",
    "StorageUnavailableError",
]
