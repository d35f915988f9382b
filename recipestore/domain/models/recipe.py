"""
Recipe catalogue models: recipes with their ingredients, steps, nutrition,
tags and categories.
"""

from sqlalchemy import Column, Text, Integer, Float, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from recipestore.domain.models.database import Base, TimestampMixin


class Recipe(TimestampMixin, Base):
    """Recipe aggregate root; deleting it deletes everything listed below"""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)
    prep_time = Column(Integer, nullable=False)  # minutes
    cook_time = Column(Integer, nullable=False)  # minutes
    total_time = Column(Integer, nullable=False)  # minutes
    servings = Column(Integer, nullable=False)
    difficulty = Column(Text, nullable=False)  # Easy, Medium, Advanced
    cuisine = Column(Text, nullable=False)
    meal_type = Column(Text, nullable=False)
    is_premium = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    chef = Column(Text, nullable=False)
    chef_notes = Column(Text)

    ingredients = relationship(
        "Ingredient", back_populates="recipe", cascade="all, delete-orphan"
    )
    instructions = relationship(
        "Instruction",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="Instruction.order",
    )
    tags = relationship("RecipeTag", back_populates="recipe", cascade="all, delete-orphan")
    categories = relationship(
        "RecipeCategory", back_populates="recipe", cascade="all, delete-orphan"
    )
    nutritional_info = relationship(
        "NutritionalInfo",
        back_populates="recipe",
        uselist=False,
        cascade="all, delete-orphan",
    )
    saved_by = relationship(
        "SavedRecipe", back_populates="recipe", cascade="all, delete-orphan"
    )
    meal_plan_items = relationship(
        "MealPlanItem", back_populates="recipe", cascade="all, delete-orphan"
    )


class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(Text, nullable=False)
    quantity = Column(Text, nullable=False)  # free text, e.g. "1 1/2"
    unit = Column(Text, nullable=False)

    recipe = relationship("Recipe", back_populates="ingredients")


class Instruction(Base):
    """
    One step of a recipe.

    `order` runs 1..n per recipe without gaps or repeats. The database does not
    enforce it; InstructionRepository does.
    """

    __tablename__ = "instructions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    order = Column("order", Integer, nullable=False)
    text = Column(Text, nullable=False)

    recipe = relationship("Recipe", back_populates="instructions")


class NutritionalInfo(Base):
    """Per-recipe nutrition; recipe_id is unique so a recipe has at most one"""

    __tablename__ = "nutritional_info"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    calories = Column(Integer, nullable=False)
    protein = Column(Float, nullable=False)  # grams
    carbs = Column(Float, nullable=False)  # grams
    fat = Column(Float, nullable=False)  # grams
    fiber = Column(Float, nullable=False)  # grams
    sugar = Column(Float, nullable=False)  # grams

    recipe = relationship("Recipe", back_populates="nutritional_info")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)

    recipes = relationship("RecipeTag", back_populates="tag", cascade="all, delete-orphan")


class RecipeTag(Base):
    __tablename__ = "recipe_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tag_id = Column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False, index=True
    )

    recipe = relationship("Recipe", back_populates="tags")
    tag = relationship("Tag", back_populates="recipes")


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)
    description = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)

    recipes = relationship(
        "RecipeCategory", back_populates="category", cascade="all, delete-orphan"
    )


class RecipeCategory(Base):
    __tablename__ = "recipe_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )

    recipe = relationship("Recipe", back_populates="categories")
    category = relationship("Category", back_populates="recipes")
