from datetime import datetime
from typing import List, Optional

from pydantic import Field

from recipestore.domain.enums import Difficulty
from recipestore.domain.schemas.common import DbInt, INT_MAX, InsertSchema, UpdateSchema, ReadSchema

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


# =============================================================================
# RECIPE
# =============================================================================


class RecipeCreate(InsertSchema):
    title: str = Field(..., min_length=1, max_length=300)
    description: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)
    prep_time: int = Field(..., ge=0, le=INT_MAX, description="Minutes")
    cook_time: int = Field(..., ge=0, le=INT_MAX, description="Minutes")
    total_time: int = Field(..., ge=0, le=INT_MAX, description="Minutes")
    servings: int = Field(..., ge=1, le=INT_MAX)
    difficulty: Difficulty
    cuisine: str = Field(..., min_length=1)
    meal_type: str = Field(..., min_length=1)
    is_premium: bool = False
    chef: str = Field(..., min_length=1)
    chef_notes: Optional[str] = None


class RecipeUpdate(UpdateSchema):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    description: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = Field(None, min_length=1)
    prep_time: Optional[int] = Field(None, ge=0, le=INT_MAX)
    cook_time: Optional[int] = Field(None, ge=0, le=INT_MAX)
    total_time: Optional[int] = Field(None, ge=0, le=INT_MAX)
    servings: Optional[int] = Field(None, ge=1, le=INT_MAX)
    difficulty: Optional[Difficulty] = None
    cuisine: Optional[str] = Field(None, min_length=1)
    meal_type: Optional[str] = Field(None, min_length=1)
    is_premium: Optional[bool] = None
    chef: Optional[str] = Field(None, min_length=1)
    chef_notes: Optional[str] = None


class RecipeRead(ReadSchema):
    id: int
    title: str
    description: str
    image_url: str
    prep_time: int
    cook_time: int
    total_time: int
    servings: int
    difficulty: Difficulty
    cuisine: str
    meal_type: str
    is_premium: bool
    chef: str
    chef_notes: Optional[str]
    created_at: datetime
    updated_at: datetime


# =============================================================================
# INGREDIENTS AND INSTRUCTIONS
# =============================================================================


class IngredientDraft(InsertSchema):
    """Ingredient as part of a recipe that does not exist yet"""

    name: str = Field(..., min_length=1)
    quantity: str = Field(..., min_length=1, description="Free text, e.g. '1 1/2'")
    unit: str


class IngredientCreate(IngredientDraft):
    recipe_id: DbInt


class IngredientUpdate(UpdateSchema):
    name: Optional[str] = Field(None, min_length=1)
    quantity: Optional[str] = Field(None, min_length=1)
    unit: Optional[str] = None


class IngredientRead(ReadSchema):
    id: int
    recipe_id: int
    name: str
    quantity: str
    unit: str


class InstructionCreate(InsertSchema):
    recipe_id: DbInt
    order: int = Field(..., ge=1, le=INT_MAX, description="1-based step position")
    text: str = Field(..., min_length=1)


class InstructionUpdate(UpdateSchema):
    order: Optional[int] = Field(None, ge=1, le=INT_MAX)
    text: Optional[str] = Field(None, min_length=1)


class InstructionRead(ReadSchema):
    id: int
    recipe_id: int
    order: int
    text: str


# =============================================================================
# NUTRITION
# =============================================================================


class NutritionalInfoDraft(InsertSchema):
    calories: int = Field(..., ge=0, le=INT_MAX)
    protein: float = Field(..., ge=0, description="Grams")
    carbs: float = Field(..., ge=0, description="Grams")
    fat: float = Field(..., ge=0, description="Grams")
    fiber: float = Field(..., ge=0, description="Grams")
    sugar: float = Field(..., ge=0, description="Grams")


class NutritionalInfoCreate(NutritionalInfoDraft):
    recipe_id: DbInt


class NutritionalInfoUpdate(UpdateSchema):
    calories: Optional[int] = Field(None, ge=0, le=INT_MAX)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)
    fiber: Optional[float] = Field(None, ge=0)
    sugar: Optional[float] = Field(None, ge=0)


class NutritionalInfoRead(ReadSchema):
    id: int
    recipe_id: int
    calories: int
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: float


# =============================================================================
# TAGS AND CATEGORIES
# =============================================================================


class TagCreate(InsertSchema):
    name: str = Field(..., min_length=1, max_length=100)


class TagUpdate(UpdateSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=100)


class TagRead(ReadSchema):
    id: int
    name: str


class RecipeTagCreate(InsertSchema):
    recipe_id: DbInt
    tag_id: DbInt


class RecipeTagRead(ReadSchema):
    id: int
    recipe_id: int
    tag_id: int


class CategoryCreate(InsertSchema):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)
    slug: str = Field(..., pattern=SLUG_PATTERN)


class CategoryUpdate(UpdateSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = Field(None, pattern=SLUG_PATTERN)


class CategoryRead(ReadSchema):
    id: int
    name: str
    description: str
    image_url: str
    slug: str


class RecipeCategoryCreate(InsertSchema):
    recipe_id: DbInt
    category_id: DbInt


class RecipeCategoryRead(ReadSchema):
    id: int
    recipe_id: int
    category_id: int


# =============================================================================
# COMPOSITE RECIPE
# =============================================================================


class RecipeDetailsCreate(RecipeCreate):
    """A recipe with everything it owns, written in one transaction"""

    ingredients: List[IngredientDraft] = Field(default_factory=list)
    instructions: List[str] = Field(
        default_factory=list, description="Step texts in cooking order"
    )
    nutritional_info: Optional[NutritionalInfoDraft] = None
    tag_ids: List[DbInt] = Field(default_factory=list)
    category_ids: List[DbInt] = Field(default_factory=list)


class RecipeDetails(ReadSchema):
    recipe: RecipeRead
    ingredients: List[IngredientRead]
    instructions: List[InstructionRead]
    nutritional_info: Optional[NutritionalInfoRead] = None
    tags: List[TagRead]
    categories: List[CategoryRead]
