"""
Domain schemas package - Pydantic input contracts and read models.
"""

from recipestore.domain.schemas.user_schemas import (
    UserCreate,
    UserUpsert,
    UserUpdate,
    UserRead,
    DietaryPreferenceCreate,
    DietaryPreferenceUpdate,
    DietaryPreferenceRead,
    SavedRecipeCreate,
    SavedRecipeRead,
)
from recipestore.domain.schemas.billing_schemas import (
    SubscriptionCreate,
    SubscriptionUpdate,
    SubscriptionRead,
    PaymentHistoryCreate,
    PaymentHistoryUpdate,
    PaymentHistoryRead,
)
from recipestore.domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeUpdate,
    RecipeRead,
    IngredientDraft,
    IngredientCreate,
    IngredientUpdate,
    IngredientRead,
    InstructionCreate,
    InstructionUpdate,
    InstructionRead,
    NutritionalInfoDraft,
    NutritionalInfoCreate,
    NutritionalInfoUpdate,
    NutritionalInfoRead,
    TagCreate,
    TagUpdate,
    TagRead,
    RecipeTagCreate,
    RecipeTagRead,
    CategoryCreate,
    CategoryUpdate,
    CategoryRead,
    RecipeCategoryCreate,
    RecipeCategoryRead,
    RecipeDetailsCreate,
    RecipeDetails,
)
from recipestore.domain.schemas.plan_schemas import (
    MealPlanCreate,
    MealPlanUpdate,
    MealPlanRead,
    MealPlanItemCreate,
    MealPlanItemUpdate,
    MealPlanItemRead,
    ShoppingListCreate,
    ShoppingListUpdate,
    ShoppingListRead,
    ShoppingListItemCreate,
    ShoppingListItemUpdate,
    ShoppingListItemRead,
)

__all__ = [
    # User schemas
    "UserCreate",
    "UserUpsert",
    "UserUpdate",
    "UserRead",
    "DietaryPreferenceCreate",
    "DietaryPreferenceUpdate",
    "DietaryPreferenceRead",
    "SavedRecipeCreate",
    "SavedRecipeRead",
    # Billing schemas
    "SubscriptionCreate",
    "SubscriptionUpdate",
    "SubscriptionRead",
    "PaymentHistoryCreate",
    "PaymentHistoryUpdate",
    "PaymentHistoryRead",
    # Recipe schemas
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeRead",
    "IngredientDraft",
    "IngredientCreate",
    "IngredientUpdate",
    "IngredientRead",
    "InstructionCreate",
    "InstructionUpdate",
    "InstructionRead",
    "NutritionalInfoDraft",
    "NutritionalInfoCreate",
    "NutritionalInfoUpdate",
    "NutritionalInfoRead",
    "TagCreate",
    "TagUpdate",
    "TagRead",
    "RecipeTagCreate",
    "RecipeTagRead",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryRead",
    "RecipeCategoryCreate",
    "RecipeCategoryRead",
    "RecipeDetailsCreate",
    "RecipeDetails",
    # Planning schemas
    "MealPlanCreate",
    "MealPlanUpdate",
    "MealPlanRead",
    "MealPlanItemCreate",
    "MealPlanItemUpdate",
    "MealPlanItemRead",
    "ShoppingListCreate",
    "ShoppingListUpdate",
    "ShoppingListRead",
    "ShoppingListItemCreate",
    "ShoppingListItemUpdate",
    "ShoppingListItemRead",
]
