"""
User account models: users, dietary preferences and saved recipes.
"""

import uuid

from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from recipestore.domain.enums import AuthProvider, INACTIVE_SUBSCRIPTION
from recipestore.domain.models.database import Base, CreatedAtMixin, TimestampMixin


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(TimestampMixin, Base):
    """
    Application user.

    The id is either a generated UUID string or the identifier handed out by an
    external auth provider. Subscription columns are a denormalised copy of the
    user's current billing subscription.
    """

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=_new_user_id)
    username = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String)
    first_name = Column(String)
    last_name = Column(String)
    profile_image_url = Column(String)
    auth_provider = Column(
        String,
        nullable=False,
        default=AuthProvider.EMAIL.value,
        server_default=AuthProvider.EMAIL.value,
    )
    is_premium = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    stripe_customer_id = Column(String)
    stripe_subscription_id = Column(String)
    subscription_status = Column(
        String, default=INACTIVE_SUBSCRIPTION, server_default=INACTIVE_SUBSCRIPTION
    )
    subscription_plan = Column(String)
    subscription_end_date = Column(DateTime(timezone=True))

    dietary_preferences = relationship(
        "DietaryPreference", back_populates="user", cascade="all, delete-orphan"
    )
    saved_recipes = relationship(
        "SavedRecipe", back_populates="user", cascade="all, delete-orphan"
    )
    meal_plans = relationship(
        "MealPlan", back_populates="user", cascade="all, delete-orphan"
    )
    shopping_lists = relationship(
        "ShoppingList", back_populates="user", cascade="all, delete-orphan"
    )
    subscriptions = relationship(
        "Subscription", back_populates="user", cascade="all, delete-orphan"
    )
    payments = relationship(
        "PaymentHistory", back_populates="user", cascade="all, delete-orphan"
    )


class DietaryPreference(Base):
    """Free-text dietary preference (e.g. "vegetarian", "no nuts")"""

    __tablename__ = "dietary_preferences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    preference = Column(Text, nullable=False)

    user = relationship("User", back_populates="dietary_preferences")


class SavedRecipe(CreatedAtMixin, Base):
    """Join row: a user bookmarked a recipe"""

    __tablename__ = "saved_recipes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user = relationship("User", back_populates="saved_recipes")
    recipe = relationship("Recipe", back_populates="saved_by")
