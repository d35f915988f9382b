"""Recipe service: multi-row writes that keep a recipe family consistent"""

import logging
from typing import Any, List, Sequence

from sqlalchemy.orm import Session

from recipestore.domain.enums import EntityKind
from recipestore.domain.models import Recipe
from recipestore.domain.models.database import utcnow
from recipestore.domain.registry import get_contract
from recipestore.domain.schemas import (
    CategoryRead,
    IngredientRead,
    InstructionRead,
    NutritionalInfoRead,
    RecipeCreate,
    RecipeDetails,
    RecipeDetailsCreate,
    RecipeRead,
    TagCreate,
    TagRead,
)
from recipestore.exceptions import NotFoundError, ServiceValidationError
from recipestore.repositories import (
    CategoryRepository,
    InstructionRepository,
    RecipeRepository,
    TagRepository,
)
from recipestore.store import DataStore, parse_payload

logger = logging.getLogger("recipestore.services.recipes")


class RecipeService:
    """Business logic for recipes and everything they own."""

    @staticmethod
    def create_recipe(store: DataStore, details: Any) -> RecipeDetails:
        """
        Create a recipe together with its ingredients, steps, nutrition and
        tag/category links in a single transaction.

        Steps are numbered 1..n in list order. If any part fails (unknown tag id,
        bad nutrition values, ...) nothing is written.

        Args:
            store: open data store
            details: RecipeDetailsCreate or an equivalent mapping

        Returns:
            RecipeDetails of the stored recipe

        Raises:
            ServiceValidationError: invalid recipe data
            InvalidReferenceError: a tag or category id does not exist
        """
        details = parse_payload(RecipeDetailsCreate, details)
        RecipeService._check_steps(details.instructions)
        recipe_fields = details.model_dump(
            include=set(RecipeCreate.model_fields), exclude_none=True
        )

        with store.session_scope() as db:
            recipe = RecipeRepository(db).create(recipe_fields)

            ingredients = get_contract(EntityKind.INGREDIENT).repository_for(db)
            for draft in details.ingredients:
                ingredients.create({**draft.model_dump(), "recipe_id": recipe.id})

            InstructionRepository(db).replace_all(recipe.id, details.instructions)

            if details.nutritional_info is not None:
                get_contract(EntityKind.NUTRITIONAL_INFO).repository_for(db).create(
                    {**details.nutritional_info.model_dump(), "recipe_id": recipe.id}
                )

            recipe_tags = get_contract(EntityKind.RECIPE_TAG).repository_for(db)
            for tag_id in dict.fromkeys(details.tag_ids):
                recipe_tags.create({"recipe_id": recipe.id, "tag_id": tag_id})

            recipe_categories = get_contract(EntityKind.RECIPE_CATEGORY).repository_for(db)
            for category_id in dict.fromkeys(details.category_ids):
                recipe_categories.create(
                    {"recipe_id": recipe.id, "category_id": category_id}
                )

            result = RecipeService._details(db, recipe)

        logger.info(
            f"recipe_created id={result.recipe.id} ingredients={len(result.ingredients)} "
            f"steps={len(result.instructions)}"
        )
        return result

    @staticmethod
    def get_recipe_details(store: DataStore, recipe_id: Any) -> RecipeDetails:
        """Recipe with ingredients, ordered steps, nutrition, tags and categories"""
        with store.session_scope() as db:
            recipe = RecipeService._require_recipe(db, recipe_id)
            return RecipeService._details(db, recipe)

    @staticmethod
    def replace_instructions(
        store: DataStore, recipe_id: Any, steps: Sequence[str]
    ) -> List[InstructionRead]:
        """Atomically replace every step of a recipe, renumbering them 1..n"""
        steps = [step.strip() if isinstance(step, str) else step for step in steps]
        RecipeService._check_steps(steps)
        with store.session_scope() as db:
            recipe = RecipeService._require_recipe(db, recipe_id)
            rows = InstructionRepository(db).replace_all(recipe.id, steps)
            recipe.updated_at = utcnow()
            result = [InstructionRead.model_validate(row) for row in rows]
        return result

    @staticmethod
    def tag_recipe(store: DataStore, recipe_id: Any, tag_name: str) -> TagRead:
        """
        Attach a tag by name, creating the tag if needed.
        Tagging a recipe twice with the same tag is a no-op.
        """
        name = parse_payload(TagCreate, {"name": tag_name}).name
        with store.session_scope() as db:
            recipe = RecipeService._require_recipe(db, recipe_id)
            tags = TagRepository(db)
            tag = tags.get_or_create(name)
            if not tags.is_linked(recipe.id, tag.id):
                get_contract(EntityKind.RECIPE_TAG).repository_for(db).create(
                    {"recipe_id": recipe.id, "tag_id": tag.id}
                )
                logger.info(f"recipe_tagged recipe_id={recipe.id} tag={name}")
            result = TagRead.model_validate(tag)
        return result

    # ------------------------------------------------------------------

    @staticmethod
    def _check_steps(steps: Sequence[Any]) -> None:
        for position, step in enumerate(steps, start=1):
            if not isinstance(step, str) or not step.strip():
                raise ServiceValidationError(
                    f"Step {position} must be non-empty text",
                    details={"field": "instructions", "position": position},
                    code="invalid_step",
                )

    @staticmethod
    def _require_recipe(db: Session, recipe_id: Any) -> Recipe:
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if recipe is None:
            logger.warning(f"recipe_not_found id={recipe_id}")
            raise NotFoundError(f"recipe {recipe_id} not found", code="not_found")
        return recipe

    @staticmethod
    def _details(db: Session, recipe: Recipe) -> RecipeDetails:
        ingredients = get_contract(EntityKind.INGREDIENT).repository_for(db)
        nutrition = get_contract(EntityKind.NUTRITIONAL_INFO).repository_for(db)
        info = nutrition.list_by("recipe_id", recipe.id)
        return RecipeDetails(
            recipe=RecipeRead.model_validate(recipe),
            ingredients=[
                IngredientRead.model_validate(row)
                for row in ingredients.list_by("recipe_id", recipe.id)
            ],
            instructions=[
                InstructionRead.model_validate(row)
                for row in InstructionRepository(db).list_by("recipe_id", recipe.id)
            ],
            nutritional_info=NutritionalInfoRead.model_validate(info[0]) if info else None,
            tags=[
                TagRead.model_validate(tag)
                for tag in TagRepository(db).list_for_recipe(recipe.id)
            ],
            categories=[
                CategoryRead.model_validate(category)
                for category in CategoryRepository(db).list_for_recipe(recipe.id)
            ],
        )
