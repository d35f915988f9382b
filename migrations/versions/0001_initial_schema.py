"""Initial schema - all tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list:
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())
        )
    return columns


def _fk(column: str, target: str, type_=sa.Integer) -> sa.Column:
    return sa.Column(column, type_, sa.ForeignKey(target, ondelete="CASCADE"), nullable=False, index=True)


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("username", sa.String, nullable=False),
        sa.Column("email", sa.String, nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.String),
        sa.Column("first_name", sa.String),
        sa.Column("last_name", sa.String),
        sa.Column("profile_image_url", sa.String),
        sa.Column("auth_provider", sa.String, nullable=False, server_default="email"),
        sa.Column("is_premium", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("stripe_customer_id", sa.String),
        sa.Column("stripe_subscription_id", sa.String),
        sa.Column("subscription_status", sa.String, server_default="inactive"),
        sa.Column("subscription_plan", sa.String),
        sa.Column("subscription_end_date", sa.DateTime(timezone=True)),
        *_timestamps(),
    )

    # --- subscriptions ---
    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("user_id", "users.id", sa.String),
        sa.Column("stripe_subscription_id", sa.String, nullable=False, index=True),
        sa.Column("stripe_price_id", sa.String, nullable=False),
        sa.Column("status", sa.String, nullable=False),
        sa.Column("plan_name", sa.String, nullable=False),
        sa.Column("current_period_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("current_period_end", sa.DateTime(timezone=True), nullable=False),
        sa.Column("cancel_at_period_end", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    # --- payment_history ---
    op.create_table(
        "payment_history",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("user_id", "users.id", sa.String),
        sa.Column("stripe_invoice_id", sa.String, nullable=False),
        sa.Column("amount", sa.Integer, nullable=False),
        sa.Column("currency", sa.String, nullable=False),
        sa.Column("status", sa.String, nullable=False),
        sa.Column("invoice_url", sa.String),
        sa.Column("description", sa.Text),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(updated=False),
    )

    # --- dietary_preferences ---
    op.create_table(
        "dietary_preferences",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("user_id", "users.id", sa.String),
        sa.Column("preference", sa.Text, nullable=False),
    )

    # --- recipes ---
    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("image_url", sa.Text, nullable=False),
        sa.Column("prep_time", sa.Integer, nullable=False),
        sa.Column("cook_time", sa.Integer, nullable=False),
        sa.Column("total_time", sa.Integer, nullable=False),
        sa.Column("servings", sa.Integer, nullable=False),
        sa.Column("difficulty", sa.Text, nullable=False),
        sa.Column("cuisine", sa.Text, nullable=False),
        sa.Column("meal_type", sa.Text, nullable=False),
        sa.Column("is_premium", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("chef", sa.Text, nullable=False),
        sa.Column("chef_notes", sa.Text),
        *_timestamps(),
    )

    # --- ingredients / instructions ---
    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("recipe_id", "recipes.id"),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("quantity", sa.Text, nullable=False),
        sa.Column("unit", sa.Text, nullable=False),
    )
    op.create_table(
        "instructions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("recipe_id", "recipes.id"),
        sa.Column("order", sa.Integer, nullable=False),
        sa.Column("text", sa.Text, nullable=False),
    )

    # --- nutritional_info (one per recipe) ---
    op.create_table(
        "nutritional_info",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "recipe_id", sa.Integer, sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False, unique=True,
        ),
        sa.Column("calories", sa.Integer, nullable=False),
        sa.Column("protein", sa.Float, nullable=False),
        sa.Column("carbs", sa.Float, nullable=False),
        sa.Column("fat", sa.Float, nullable=False),
        sa.Column("fiber", sa.Float, nullable=False),
        sa.Column("sugar", sa.Float, nullable=False),
    )

    # --- tags / categories and their join tables ---
    op.create_table(
        "tags",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False, unique=True),
    )
    op.create_table(
        "recipe_tags",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("recipe_id", "recipes.id"),
        _fk("tag_id", "tags.id"),
    )
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False, unique=True),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("image_url", sa.Text, nullable=False),
        sa.Column("slug", sa.Text, nullable=False, unique=True),
    )
    op.create_table(
        "recipe_categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("recipe_id", "recipes.id"),
        _fk("category_id", "categories.id"),
    )

    # --- saved_recipes ---
    op.create_table(
        "saved_recipes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("user_id", "users.id", sa.String),
        _fk("recipe_id", "recipes.id"),
        *_timestamps(updated=False),
    )

    # --- meal plans ---
    op.create_table(
        "meal_plans",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("user_id", "users.id", sa.String),
        sa.Column("name", sa.Text, nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "meal_plan_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("meal_plan_id", "meal_plans.id"),
        _fk("recipe_id", "recipes.id"),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("meal_type", sa.Text, nullable=False),
        sa.Column("notes", sa.Text),
        sa.Column("servings", sa.Integer, nullable=False, server_default="1"),
    )

    # --- shopping lists ---
    op.create_table(
        "shopping_lists",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("user_id", "users.id", sa.String),
        sa.Column("name", sa.Text, nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "shopping_list_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("shopping_list_id", "shopping_lists.id"),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("quantity", sa.Text, nullable=False),
        sa.Column("unit", sa.Text),
        sa.Column("category", sa.Text, server_default="Other"),
        sa.Column("checked", sa.Boolean, nullable=False, server_default=sa.false()),
    )


def downgrade() -> None:
    op.drop_table("shopping_list_items")
    op.drop_table("shopping_lists")
    op.drop_table("meal_plan_items")
    op.drop_table("meal_plans")
    op.drop_table("saved_recipes")
    op.drop_table("recipe_categories")
    op.drop_table("categories")
    op.drop_table("recipe_tags")
    op.drop_table("tags")
    op.drop_table("nutritional_info")
    op.drop_table("instructions")
    op.drop_table("ingredients")
    op.drop_table("recipes")
    op.drop_table("dietary_preferences")
    op.drop_table("payment_history")
    op.drop_table("subscriptions")
    op.drop_table("users")
