"""
Services package - multi-row writes that run in one transaction.
"""

from recipestore.services.recipe_service import RecipeService
from recipestore.services.user_service import UserService
from recipestore.services.billing_service import BillingService

__all__ = ["RecipeService", "UserService", "BillingService"]
