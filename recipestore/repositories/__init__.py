"""
Repositories package - Data access layer.
"""

from recipestore.repositories.base import BaseRepository
from recipestore.repositories.user_repository import UserRepository
from recipestore.repositories.recipe_repository import (
    RecipeRepository,
    InstructionRepository,
    TagRepository,
    CategoryRepository,
)
from recipestore.repositories.billing_repository import (
    SubscriptionRepository,
    PaymentHistoryRepository,
)

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RecipeRepository",
    "InstructionRepository",
    "TagRepository",
    "CategoryRepository",
    "SubscriptionRepository",
    "PaymentHistoryRepository",
]
