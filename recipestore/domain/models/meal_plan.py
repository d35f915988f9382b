"""
Planning models: meal plans with their items and shopping lists with their items.
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from recipestore.domain.models.database import Base, TimestampMixin


class MealPlan(TimestampMixin, Base):
    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(Text, nullable=False)

    user = relationship("User", back_populates="meal_plans")
    items = relationship(
        "MealPlanItem", back_populates="meal_plan", cascade="all, delete-orphan"
    )


class MealPlanItem(Base):
    """A recipe scheduled for a day and slot of a meal plan"""

    __tablename__ = "meal_plan_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_plan_id = Column(
        Integer, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(DateTime(timezone=True), nullable=False)
    meal_type = Column(Text, nullable=False)  # breakfast, lunch, dinner, snack
    notes = Column(Text)
    servings = Column(Integer, nullable=False, default=1, server_default="1")

    meal_plan = relationship("MealPlan", back_populates="items")
    recipe = relationship("Recipe", back_populates="meal_plan_items")


class ShoppingList(TimestampMixin, Base):
    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(Text, nullable=False)

    user = relationship("User", back_populates="shopping_lists")
    items = relationship(
        "ShoppingListItem", back_populates="shopping_list", cascade="all, delete-orphan"
    )


class ShoppingListItem(Base):
    __tablename__ = "shopping_list_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    shopping_list_id = Column(
        Integer,
        ForeignKey("shopping_lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(Text, nullable=False)
    quantity = Column(Text, nullable=False)
    unit = Column(Text)
    category = Column(Text, default="Other", server_default="Other")
    checked = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )

    shopping_list = relationship("ShoppingList", back_populates="items")
