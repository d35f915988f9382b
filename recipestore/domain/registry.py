"""
Per-entity contract table.

Binds every EntityKind to its ORM model, its input contracts (create/update),
its read schema, the repository that writes it and the foreign keys that make
it a child of other entities. The first parent listed is the owner.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Type, Union

from pydantic import BaseModel
from sqlalchemy.orm import Session

from recipestore.domain.enums import EntityKind
from recipestore.domain import models
from recipestore.domain import schemas
from recipestore.exceptions import ServiceValidationError
from recipestore.repositories import (
    BaseRepository,
    UserRepository,
    RecipeRepository,
    InstructionRepository,
    TagRepository,
    CategoryRepository,
    SubscriptionRepository,
    PaymentHistoryRepository,
)


@dataclass(frozen=True)
class EntityContract:
    kind: EntityKind
    model: type
    create_schema: Type[BaseModel]
    read_schema: Type[BaseModel]
    update_schema: Optional[Type[BaseModel]] = None
    repository: Optional[type] = None
    parents: Tuple[Tuple[EntityKind, str], ...] = ()

    @property
    def mutable(self) -> bool:
        return self.update_schema is not None

    def repository_for(self, db: Session) -> BaseRepository:
        if self.repository is None:
            return BaseRepository(db, self.model)
        return self.repository(db)

    def parent_column(self, parent_kind: Optional[EntityKind] = None) -> Tuple[EntityKind, str]:
        """Resolve which foreign key links this entity to `parent_kind` (default: owner)"""
        if not self.parents:
            raise ServiceValidationError(
                f"{self.kind.value} has no parent entity",
                code="no_parent",
            )
        if parent_kind is None:
            return self.parents[0]
        parent_kind = resolve_kind(parent_kind)
        for kind, column in self.parents:
            if kind == parent_kind:
                return kind, column
        raise ServiceValidationError(
            f"{parent_kind.value} is not a parent of {self.kind.value}",
            details={"parents": [kind.value for kind, _ in self.parents]},
            code="invalid_parent",
        )


K = EntityKind

CONTRACTS = {
    contract.kind: contract
    for contract in (
        EntityContract(
            K.USER, models.User,
            schemas.UserCreate, schemas.UserRead, schemas.UserUpdate,
            repository=UserRepository,
        ),
        EntityContract(
            K.SUBSCRIPTION, models.Subscription,
            schemas.SubscriptionCreate, schemas.SubscriptionRead, schemas.SubscriptionUpdate,
            repository=SubscriptionRepository,
            parents=((K.USER, "user_id"),),
        ),
        EntityContract(
            K.PAYMENT_HISTORY, models.PaymentHistory,
            schemas.PaymentHistoryCreate, schemas.PaymentHistoryRead, schemas.PaymentHistoryUpdate,
            repository=PaymentHistoryRepository,
            parents=((K.USER, "user_id"),),
        ),
        EntityContract(
            K.DIETARY_PREFERENCE, models.DietaryPreference,
            schemas.DietaryPreferenceCreate, schemas.DietaryPreferenceRead,
            schemas.DietaryPreferenceUpdate,
            parents=((K.USER, "user_id"),),
        ),
        EntityContract(
            K.RECIPE, models.Recipe,
            schemas.RecipeCreate, schemas.RecipeRead, schemas.RecipeUpdate,
            repository=RecipeRepository,
        ),
        EntityContract(
            K.INGREDIENT, models.Ingredient,
            schemas.IngredientCreate, schemas.IngredientRead, schemas.IngredientUpdate,
            parents=((K.RECIPE, "recipe_id"),),
        ),
        EntityContract(
            K.INSTRUCTION, models.Instruction,
            schemas.InstructionCreate, schemas.InstructionRead, schemas.InstructionUpdate,
            repository=InstructionRepository,
            parents=((K.RECIPE, "recipe_id"),),
        ),
        EntityContract(
            K.TAG, models.Tag,
            schemas.TagCreate, schemas.TagRead, schemas.TagUpdate,
            repository=TagRepository,
        ),
        EntityContract(
            K.RECIPE_TAG, models.RecipeTag,
            schemas.RecipeTagCreate, schemas.RecipeTagRead,
            parents=((K.RECIPE, "recipe_id"), (K.TAG, "tag_id")),
        ),
        EntityContract(
            K.CATEGORY, models.Category,
            schemas.CategoryCreate, schemas.CategoryRead, schemas.CategoryUpdate,
            repository=CategoryRepository,
        ),
        EntityContract(
            K.RECIPE_CATEGORY, models.RecipeCategory,
            schemas.RecipeCategoryCreate, schemas.RecipeCategoryRead,
            parents=((K.RECIPE, "recipe_id"), (K.CATEGORY, "category_id")),
        ),
        EntityContract(
            K.NUTRITIONAL_INFO, models.NutritionalInfo,
            schemas.NutritionalInfoCreate, schemas.NutritionalInfoRead,
            schemas.NutritionalInfoUpdate,
            parents=((K.RECIPE, "recipe_id"),),
        ),
        EntityContract(
            K.SAVED_RECIPE, models.SavedRecipe,
            schemas.SavedRecipeCreate, schemas.SavedRecipeRead,
            parents=((K.USER, "user_id"), (K.RECIPE, "recipe_id")),
        ),
        EntityContract(
            K.MEAL_PLAN, models.MealPlan,
            schemas.MealPlanCreate, schemas.MealPlanRead, schemas.MealPlanUpdate,
            parents=((K.USER, "user_id"),),
        ),
        EntityContract(
            K.MEAL_PLAN_ITEM, models.MealPlanItem,
            schemas.MealPlanItemCreate, schemas.MealPlanItemRead, schemas.MealPlanItemUpdate,
            parents=((K.MEAL_PLAN, "meal_plan_id"), (K.RECIPE, "recipe_id")),
        ),
        EntityContract(
            K.SHOPPING_LIST, models.ShoppingList,
            schemas.ShoppingListCreate, schemas.ShoppingListRead, schemas.ShoppingListUpdate,
            parents=((K.USER, "user_id"),),
        ),
        EntityContract(
            K.SHOPPING_LIST_ITEM, models.ShoppingListItem,
            schemas.ShoppingListItemCreate, schemas.ShoppingListItemRead,
            schemas.ShoppingListItemUpdate,
            parents=((K.SHOPPING_LIST, "shopping_list_id"),),
        ),
    )
}


def resolve_kind(kind: Union[EntityKind, str]) -> EntityKind:
    try:
        return EntityKind(kind)
    except ValueError:
        raise ServiceValidationError(
            f"Unknown entity kind: {kind}",
            details={"kinds": [k.value for k in EntityKind]},
            code="unknown_entity_kind",
        )


def get_contract(kind: Union[EntityKind, str]) -> EntityContract:
    return CONTRACTS[resolve_kind(kind)]
