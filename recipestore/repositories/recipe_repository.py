"""
Recipe Repository - Data access layer for recipes, steps, tags and categories
"""

import logging
from typing import Any, List, Mapping, Optional
from sqlalchemy.orm import Session

from recipestore.repositories.base import BaseRepository
from recipestore.domain.models import (
    Recipe,
    Instruction,
    Tag,
    RecipeTag,
    Category,
    RecipeCategory,
)
from recipestore.exceptions import ServiceValidationError

logger = logging.getLogger("recipestore.repositories")


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipe data access"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def list_by_tag(self, tag_id: int) -> List[Recipe]:
        """Distinct recipes carrying a tag, in insertion order"""
        return (
            self.db.query(Recipe)
            .join(RecipeTag, RecipeTag.recipe_id == Recipe.id)
            .filter(RecipeTag.tag_id == tag_id)
            .distinct()
            .order_by(Recipe.id)
            .all()
        )

    def list_by_category(self, category_id: int) -> List[Recipe]:
        """Distinct recipes filed under a category, in insertion order"""
        return (
            self.db.query(Recipe)
            .join(RecipeCategory, RecipeCategory.recipe_id == Recipe.id)
            .filter(RecipeCategory.category_id == category_id)
            .distinct()
            .order_by(Recipe.id)
            .all()
        )


class InstructionRepository(BaseRepository[Instruction]):
    """
    Repository for recipe steps.

    Keeps `order` a gapless 1..n sequence per recipe: inserting at a position
    pushes later steps down, moving a step shifts the ones in between, deleting a
    step closes the gap.
    """

    def __init__(self, db: Session):
        super().__init__(db, Instruction)

    def order_clause(self) -> list:
        return [Instruction.order, Instruction.id]

    def count_for_recipe(self, recipe_id: int) -> int:
        return (
            self.db.query(Instruction).filter(Instruction.recipe_id == recipe_id).count()
        )

    def _shift(self, recipe_id: int, start: int, end: Optional[int], delta: int) -> None:
        query = self.db.query(Instruction).filter(
            Instruction.recipe_id == recipe_id, Instruction.order >= start
        )
        if end is not None:
            query = query.filter(Instruction.order <= end)
        query.update(
            {Instruction.order: Instruction.order + delta},
            synchronize_session="fetch",
        )

    def _check_position(self, position: int, highest: int) -> None:
        if not 1 <= position <= highest:
            raise ServiceValidationError(
                f"Step order must be between 1 and {highest}, got {position}",
                details={"field": "order", "value": position, "max": highest},
                code="invalid_step_order",
            )

    def create(self, values: Mapping[str, Any]) -> Instruction:
        self.check_references(values)
        recipe_id = values["recipe_id"]
        position = values["order"]
        self._check_position(position, self.count_for_recipe(recipe_id) + 1)
        self._shift(recipe_id, position, None, 1)
        return super().create(values)

    def update(self, instruction: Instruction, values: Mapping[str, Any]) -> Instruction:
        target = values.get("order")
        if target is not None and target != instruction.order:
            current = instruction.order
            self._check_position(target, self.count_for_recipe(instruction.recipe_id))
            if target < current:
                self._shift(instruction.recipe_id, target, current - 1, 1)
            else:
                self._shift(instruction.recipe_id, current + 1, target, -1)
        return super().update(instruction, values)

    def delete(self, entity_id: Any) -> bool:
        instruction = self.get_by_id(entity_id)
        if instruction is None:
            return False
        recipe_id, position = instruction.recipe_id, instruction.order
        self.db.delete(instruction)
        self.db.flush()
        self._shift(recipe_id, position + 1, None, -1)
        return True

    def replace_all(self, recipe_id: int, steps: List[str]) -> List[Instruction]:
        """Drop every step of a recipe and write `steps` as orders 1..n"""
        deleted = (
            self.db.query(Instruction)
            .filter(Instruction.recipe_id == recipe_id)
            .delete(synchronize_session="fetch")
        )
        instructions = [
            Instruction(recipe_id=recipe_id, order=position, text=text)
            for position, text in enumerate(steps, start=1)
        ]
        self.db.add_all(instructions)
        self.db.flush()
        logger.info(
            f"instructions_replaced recipe_id={recipe_id} removed={deleted} added={len(instructions)}"
        )
        return self.list_by("recipe_id", recipe_id)


class TagRepository(BaseRepository[Tag]):
    """Repository for tag data access"""

    def __init__(self, db: Session):
        super().__init__(db, Tag)

    def get_by_name(self, name: str) -> Optional[Tag]:
        return self.db.query(Tag).filter(Tag.name == name).first()

    def get_or_create(self, name: str) -> Tag:
        tag = self.get_by_name(name)
        if tag is None:
            tag = self.create({"name": name})
        return tag

    def list_for_recipe(self, recipe_id: int) -> List[Tag]:
        return (
            self.db.query(Tag)
            .join(RecipeTag, RecipeTag.tag_id == Tag.id)
            .filter(RecipeTag.recipe_id == recipe_id)
            .distinct()
            .order_by(Tag.id)
            .all()
        )

    def is_linked(self, recipe_id: int, tag_id: int) -> bool:
        return (
            self.db.query(RecipeTag.id)
            .filter(RecipeTag.recipe_id == recipe_id, RecipeTag.tag_id == tag_id)
            .first()
            is not None
        )


class CategoryRepository(BaseRepository[Category]):
    """Repository for category data access"""

    def __init__(self, db: Session):
        super().__init__(db, Category)

    def get_by_slug(self, slug: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.slug == slug).first()

    def list_for_recipe(self, recipe_id: int) -> List[Category]:
        return (
            self.db.query(Category)
            .join(RecipeCategory, RecipeCategory.category_id == Category.id)
            .filter(RecipeCategory.recipe_id == recipe_id)
            .distinct()
            .order_by(Category.id)
            .all()
        )
