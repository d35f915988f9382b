"""
Service layer tests: multi-row writes and their transaction boundaries.
"""

from datetime import datetime

import pytest

from test_fixtures import (
    store,
    user,
    recipe,
    user_fields,
    recipe_fields,
    category_fields,
    nutrition_fields,
    unique_email,
)
from recipestore.exceptions import (
    ConflictError,
    InvalidReferenceError,
    NotFoundError,
    ServiceValidationError,
)
from recipestore.repositories import RecipeRepository
from recipestore.services import BillingService, RecipeService, UserService


# =============================================================================
# RECIPES
# =============================================================================


def recipe_details(**overrides):
    details = recipe_fields(
        ingredients=[
            {"name": "chicken thighs", "quantity": "6", "unit": "pieces"},
            {"name": "lemon", "quantity": "1", "unit": "whole"},
            {"name": "garlic", "quantity": "4", "unit": "cloves"},
        ],
        instructions=["Season the chicken.", "Sear until golden.", "Add lemon and garlic."],
        nutritional_info={k: v for k, v in nutrition_fields(0).items() if k != "recipe_id"},
    )
    details.update(overrides)
    return details


def test_create_recipe_writes_whole_family(store):
    """
    Verifies:
    - recipe, ingredients, numbered steps, nutrition and links are stored together
    - duplicate tag ids are linked once
    """
    tag = store.insert("tag", {"name": "weeknight"})
    category = store.insert("category", category_fields())

    details = RecipeService.create_recipe(
        store, recipe_details(tag_ids=[tag.id, tag.id], category_ids=[category.id])
    )

    assert details.recipe.title == "Lemon Garlic Chicken"
    assert [i.name for i in details.ingredients] == ["chicken thighs", "lemon", "garlic"]
    assert [(s.order, s.text) for s in details.instructions] == [
        (1, "Season the chicken."),
        (2, "Sear until golden."),
        (3, "Add lemon and garlic."),
    ]
    assert details.nutritional_info.calories == 420
    assert [t.id for t in details.tags] == [tag.id]
    assert [c.slug for c in details.categories] == ["quick-dinners"]
    assert len(store.list_by_parent("recipe_tag", details.recipe.id)) == 1


def test_create_recipe_rolls_back_on_missing_tag(store):
    with pytest.raises(InvalidReferenceError):
        RecipeService.create_recipe(store, recipe_details(tag_ids=[999]))

    with store.session_scope() as db:
        assert RecipeRepository(db).get_all() == []


def test_create_recipe_rejects_blank_step(store):
    with pytest.raises(ServiceValidationError) as exc_info:
        RecipeService.create_recipe(store, recipe_details(instructions=["Chop.", "   "]))

    assert exc_info.value.code == "invalid_step"


def test_create_recipe_without_extras(store):
    details = RecipeService.create_recipe(store, recipe_fields())

    assert details.ingredients == []
    assert details.instructions == []
    assert details.nutritional_info is None
    assert details.tags == []


def test_get_recipe_details(store, recipe):
    store.insert("instruction", {"recipe_id": recipe.id, "order": 1, "text": "Marinate."})
    store.insert("instruction", {"recipe_id": recipe.id, "order": 1, "text": "Mix the marinade."})

    details = RecipeService.get_recipe_details(store, recipe.id)

    assert details.recipe.id == recipe.id
    assert [s.text for s in details.instructions] == ["Mix the marinade.", "Marinate."]

    with pytest.raises(NotFoundError):
        RecipeService.get_recipe_details(store, recipe.id + 100)


def test_replace_instructions(store, recipe):
    store.insert("instruction", {"recipe_id": recipe.id, "order": 1, "text": "Old step."})

    steps = RecipeService.replace_instructions(store, recipe.id, ["Prep.", "Cook.", "Plate."])

    assert [(s.order, s.text) for s in steps] == [(1, "Prep."), (2, "Cook."), (3, "Plate.")]
    assert [s.text for s in store.list_by_parent("instruction", recipe.id)] == [
        "Prep.",
        "Cook.",
        "Plate.",
    ]
    assert store.get("recipe", recipe.id).updated_at >= recipe.updated_at


def test_replace_instructions_missing_recipe(store):
    with pytest.raises(NotFoundError):
        RecipeService.replace_instructions(store, 12345, ["Prep."])


def test_tag_recipe_is_idempotent(store, recipe):
    first = RecipeService.tag_recipe(store, recipe.id, "comfort food")
    second = RecipeService.tag_recipe(store, recipe.id, "comfort food")

    assert first.id == second.id
    assert len(store.list_by_parent("recipe_tag", recipe.id)) == 1
    assert store.get_tag_by_name("comfort food").id == first.id
    assert [r.id for r in store.list_recipes_by_tag(first.id)] == [recipe.id]


def test_tag_recipe_reuses_existing_tag(store, recipe):
    existing = store.insert("tag", {"name": "gluten-free"})

    assert RecipeService.tag_recipe(store, recipe.id, "gluten-free").id == existing.id


# =============================================================================
# USERS
# =============================================================================


def test_upsert_user_creates_then_updates(store):
    email = unique_email("lee")
    profile = {"id": "google-oauth2|1001", "username": "lee", "email": email, "auth_provider": "google"}

    created, was_created = UserService.upsert_user(store, profile)
    assert was_created is True
    assert created.id == "google-oauth2|1001"
    assert created.auth_provider == "google"
    assert created.subscription_status == "inactive"

    updated, was_created = UserService.upsert_user(
        store, {**profile, "first_name": "Lee", "profile_image_url": "https://img.example.com/lee.png"}
    )
    assert was_created is False
    assert updated.id == created.id
    assert updated.first_name == "Lee"
    assert updated.created_at == created.created_at


def test_upsert_user_leaves_billing_fields(store, user):
    store.update("user", user.id, {"is_premium": True, "subscription_status": "active"})

    refreshed, _ = UserService.upsert_user(
        store, {"id": user.id, "username": user.username, "email": user.email}
    )

    assert refreshed.is_premium is True
    assert refreshed.subscription_status == "active"


def test_upsert_user_email_conflict(store, user):
    with pytest.raises(ConflictError):
        UserService.upsert_user(store, {"id": "other-id", "username": "x", "email": user.email})


def test_get_by_email(store, user):
    assert UserService.get_by_email(store, user.email).id == user.id

    with pytest.raises(NotFoundError):
        UserService.get_by_email(store, "nobody@example.com")


# =============================================================================
# BILLING
# =============================================================================


def subscription_fields(user_id, **overrides):
    fields = {
        "user_id": user_id,
        "stripe_subscription_id": "sub_1NqXyz",
        "stripe_price_id": "price_monthly",
        "status": "active",
        "plan_name": "monthly",
        "current_period_start": datetime(2026, 10, 1),
        "current_period_end": datetime(2026, 11, 1),
    }
    fields.update(overrides)
    return fields


def test_record_subscription_mirrors_onto_user(store, user):
    subscription = BillingService.record_subscription(store, subscription_fields(user.id))

    assert subscription.status == "active"
    refreshed = store.get("user", user.id)
    assert refreshed.is_premium is True
    assert refreshed.subscription_status == "active"
    assert refreshed.subscription_plan == "monthly"
    assert refreshed.stripe_subscription_id == "sub_1NqXyz"
    assert refreshed.subscription_end_date == datetime(2026, 11, 1)


def test_record_subscription_update_cancels_premium(store, user):
    first = BillingService.record_subscription(store, subscription_fields(user.id))
    second = BillingService.record_subscription(
        store, subscription_fields(user.id, status="canceled", cancel_at_period_end=True)
    )

    assert second.id == first.id
    assert second.cancel_at_period_end is True
    assert len(store.list_by_parent("subscription", user.id)) == 1
    refreshed = store.get("user", user.id)
    assert refreshed.is_premium is False
    assert refreshed.subscription_status == "canceled"


def test_record_subscription_for_another_user(store, user):
    BillingService.record_subscription(store, subscription_fields(user.id))
    other = store.insert("user", user_fields(username="kim"))

    with pytest.raises(ConflictError):
        BillingService.record_subscription(store, subscription_fields(other.id))

    assert store.get("user", other.id).is_premium is False


def test_record_subscription_unknown_user(store):
    with pytest.raises(InvalidReferenceError):
        BillingService.record_subscription(store, subscription_fields("ghost"))


def test_record_payment(store, user):
    payment_fields = {
        "user_id": user.id,
        "stripe_invoice_id": "in_1OaBc",
        "amount": 1299,
        "currency": "EUR",
        "status": "paid",
        "payment_date": datetime(2026, 10, 1, 12, 0),
    }
    payment = BillingService.record_payment(store, payment_fields)
    assert payment.currency == "eur"
    assert [p.id for p in store.list_by_parent("payment_history", user.id)] == [payment.id]

    with pytest.raises(ConflictError):
        BillingService.record_payment(store, payment_fields)

    with pytest.raises(InvalidReferenceError):
        BillingService.record_payment(
            store, {**payment_fields, "user_id": "ghost", "stripe_invoice_id": "in_2"}
        )
