"""
Domain models package - SQLAlchemy ORM models.
"""

from recipestore.domain.models.database import (
    Base,
    create_store_engine,
    create_session_factory,
    init_database,
    model_for_table,
)
from recipestore.domain.models.user import User, DietaryPreference, SavedRecipe
from recipestore.domain.models.billing import Subscription, PaymentHistory
from recipestore.domain.models.recipe import (
    Recipe,
    Ingredient,
    Instruction,
    NutritionalInfo,
    Tag,
    RecipeTag,
    Category,
    RecipeCategory,
)
from recipestore.domain.models.meal_plan import (
    MealPlan,
    MealPlanItem,
    ShoppingList,
    ShoppingListItem,
)

__all__ = [
    # Database
    "Base",
    "create_store_engine",
    "create_session_factory",
    "init_database",
    "model_for_table",
    # User models
    "User",
    "DietaryPreference",
    "SavedRecipe",
    # Billing models
    "Subscription",
    "PaymentHistory",
    # Recipe models
    "Recipe",
    "Ingredient",
    "Instruction",
    "NutritionalInfo",
    "Tag",
    "RecipeTag",
    "Category",
    "RecipeCategory",
    # Planning models
    "MealPlan",
    "MealPlanItem",
    "ShoppingList",
    "ShoppingListItem",
]
