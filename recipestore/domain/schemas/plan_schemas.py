from datetime import datetime
from typing import Optional

from pydantic import Field

from recipestore.domain.enums import MealSlot
from recipestore.domain.schemas.common import DbInt, INT_MAX, InsertSchema, UpdateSchema, ReadSchema


class MealPlanCreate(InsertSchema):
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)


class MealPlanUpdate(UpdateSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=200)


class MealPlanRead(ReadSchema):
    id: int
    user_id: str
    name: str
    created_at: datetime
    updated_at: datetime


class MealPlanItemCreate(InsertSchema):
    meal_plan_id: DbInt
    recipe_id: DbInt
    date: datetime
    meal_type: MealSlot
    notes: Optional[str] = None
    servings: int = Field(default=1, ge=1, le=INT_MAX)


class MealPlanItemUpdate(UpdateSchema):
    recipe_id: Optional[DbInt] = None
    date: Optional[datetime] = None
    meal_type: Optional[MealSlot] = None
    notes: Optional[str] = None
    servings: Optional[int] = Field(None, ge=1, le=INT_MAX)


class MealPlanItemRead(ReadSchema):
    id: int
    meal_plan_id: int
    recipe_id: int
    date: datetime
    meal_type: MealSlot
    notes: Optional[str]
    servings: int


class ShoppingListCreate(InsertSchema):
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)


class ShoppingListUpdate(UpdateSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=200)


class ShoppingListRead(ReadSchema):
    id: int
    user_id: str
    name: str
    created_at: datetime
    updated_at: datetime


class ShoppingListItemCreate(InsertSchema):
    shopping_list_id: DbInt
    name: str = Field(..., min_length=1)
    quantity: str = Field(..., min_length=1)
    unit: Optional[str] = None
    category: str = Field(default="Other", min_length=1)
    checked: bool = False


class ShoppingListItemUpdate(UpdateSchema):
    name: Optional[str] = Field(None, min_length=1)
    quantity: Optional[str] = Field(None, min_length=1)
    unit: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    checked: Optional[bool] = None


class ShoppingListItemRead(ReadSchema):
    id: int
    shopping_list_id: int
    name: str
    quantity: str
    unit: Optional[str]
    category: Optional[str]
    checked: bool
