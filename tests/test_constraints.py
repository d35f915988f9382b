"""
Integrity constraint tests.

- Unique fields: users.email, tags.name, categories.name, categories.slug,
  nutritional_info.recipe_id
- Foreign keys: every insert referencing a missing parent fails
- Field-level validation on billing rows
"""

from datetime import datetime, timezone

import pytest

from test_fixtures import (
    store,
    user,
    recipe,
    user_fields,
    recipe_fields,
    category_fields,
    nutrition_fields,
    meal_plan_item_fields,
    unique_email,
)
from recipestore.exceptions import (
    ConflictError,
    InvalidReferenceError,
    ServiceValidationError,
)


# =============================================================================
# UNIQUENESS
# =============================================================================


def test_duplicate_email_rejected(store):
    """
    Scenario: insert User{email:"a@example.com"} twice.

    Verifies:
    - first insert succeeds
    - second fails with a ServiceValidationError (ConflictError)
    """
    store.insert("user", user_fields(email="a@example.com"))

    with pytest.raises(ServiceValidationError) as exc_info:
        store.insert("user", user_fields(username="other", email="a@example.com"))

    assert isinstance(exc_info.value, ConflictError)
    assert exc_info.value.code == "duplicate_email"
    assert exc_info.value.http_status == 409


def test_duplicate_tag_name_rejected(store):
    store.insert("tag", {"name": "vegetarian"})

    with pytest.raises(ConflictError):
        store.insert("tag", {"name": "vegetarian"})


@pytest.mark.parametrize(
    "field,first,second",
    [
        ("name", {"slug": "weeknight"}, {"slug": "weeknight-2"}),
        ("slug", {"name": "Weeknight"}, {"name": "Weeknight Meals"}),
    ],
)
def test_duplicate_category_fields_rejected(store, field, first, second):
    store.insert("category", category_fields(**first))

    with pytest.raises(ConflictError) as exc_info:
        store.insert("category", category_fields(**second))

    assert exc_info.value.details["field"] == field


def test_second_nutritional_info_rejected(store, recipe):
    """
    Scenario: insert NutritionalInfo for recipe R twice.

    Verifies:
    - the 1:1 recipe/nutrition invariant holds
    - the original record is untouched
    """
    first = store.insert("nutritional_info", nutrition_fields(recipe.id))

    with pytest.raises(ServiceValidationError):
        store.insert("nutritional_info", nutrition_fields(recipe.id, calories=999))

    rows = store.list_by_parent("nutritional_info", recipe.id)
    assert [r.id for r in rows] == [first.id]
    assert rows[0].calories == 420


def test_update_to_taken_email_rejected(store, user):
    other = store.insert("user", user_fields(username="emma", email=unique_email("emma")))

    with pytest.raises(ConflictError):
        store.update("user", other.id, {"email": user.email})


def test_update_keeping_own_unique_value(store):
    tag = store.insert("tag", {"name": "spicy"})

    assert store.update("tag", tag.id, {"name": "spicy"}).name == "spicy"


def test_update_to_taken_slug_rejected(store):
    store.insert("category", category_fields())
    other = store.insert(
        "category", category_fields(name="Desserts", slug="desserts")
    )

    with pytest.raises(ConflictError):
        store.update("category", other.id, {"slug": "quick-dinners"})


def test_slug_format_enforced(store):
    with pytest.raises(ServiceValidationError):
        store.insert("category", category_fields(slug="Quick Dinners"))


# =============================================================================
# FOREIGN KEYS
# =============================================================================


def test_instruction_with_missing_recipe(store):
    with pytest.raises(InvalidReferenceError) as exc_info:
        store.insert("instruction", {"recipe_id": 31337, "order": 1, "text": "Preheat oven."})

    assert exc_info.value.details["field"] == "recipe_id"


@pytest.mark.parametrize(
    "kind,fields",
    [
        ("dietary_preference", {"user_id": "ghost", "preference": "vegan"}),
        ("meal_plan", {"user_id": "ghost", "name": "Week 1"}),
        ("shopping_list", {"user_id": "ghost", "name": "Groceries"}),
        ("ingredient", {"recipe_id": 404, "name": "salt", "quantity": "1", "unit": "tsp"}),
        ("shopping_list_item", {"shopping_list_id": 404, "name": "Milk", "quantity": "1"}),
        ("recipe_tag", {"recipe_id": 404, "tag_id": 404}),
    ],
)
def test_dangling_references_rejected(store, kind, fields):
    with pytest.raises(InvalidReferenceError):
        store.insert(kind, fields)


def test_saved_recipe_requires_both_parents(store, user, recipe):
    with pytest.raises(InvalidReferenceError):
        store.insert("saved_recipe", {"user_id": user.id, "recipe_id": recipe.id + 1})
    with pytest.raises(InvalidReferenceError):
        store.insert("saved_recipe", {"user_id": "nobody", "recipe_id": recipe.id})


def test_meal_plan_item_requires_existing_plan(store, recipe):
    with pytest.raises(InvalidReferenceError):
        store.insert("meal_plan_item", meal_plan_item_fields(999, recipe.id))


def test_failed_insert_leaves_no_row(store, user):
    with pytest.raises(InvalidReferenceError):
        store.insert("meal_plan", {"user_id": "ghost", "name": "Week 1"})

    assert store.list_by_parent("meal_plan", user.id) == []


# =============================================================================
# FIELD VALIDATION
# =============================================================================


def test_payment_amount_and_currency(store, user):
    payment = store.insert(
        "payment_history",
        {
            "user_id": user.id,
            "stripe_invoice_id": "in_1001",
            "amount": 999,
            "currency": "USD",
            "status": "paid",
            "payment_date": datetime(2026, 10, 1, 9, 0),
        },
    )

    assert payment.amount == 999
    assert payment.currency == "usd"

    with pytest.raises(ServiceValidationError):
        store.insert(
            "payment_history",
            {
                "user_id": user.id,
                "stripe_invoice_id": "in_1002",
                "amount": -5,
                "currency": "usd",
                "status": "paid",
                "payment_date": datetime(2026, 10, 2),
            },
        )


def test_subscription_period_must_be_ordered(store, user):
    fields = {
        "user_id": user.id,
        "stripe_subscription_id": "sub_1",
        "stripe_price_id": "price_monthly",
        "status": "active",
        "plan_name": "monthly",
        "current_period_start": datetime(2026, 10, 1),
        "current_period_end": datetime(2026, 9, 1),
    }
    with pytest.raises(ServiceValidationError):
        store.insert("subscription", fields)

    fields["current_period_end"] = datetime(2026, 11, 1)
    subscription = store.insert("subscription", fields)
    assert subscription.cancel_at_period_end is False

    with pytest.raises(ServiceValidationError):
        store.update("subscription", subscription.id, {"current_period_end": datetime(2026, 8, 1)})


def test_subscription_period_with_mixed_timezones(store, user):
    """
    A naive bound is read as UTC when the other bound carries a timezone.
    """
    fields = {
        "user_id": user.id,
        "stripe_subscription_id": "sub_2",
        "stripe_price_id": "price_monthly",
        "status": "active",
        "plan_name": "monthly",
        "current_period_start": datetime(2026, 10, 1, tzinfo=timezone.utc),
        "current_period_end": "2026-09-01T00:00:00",
    }
    with pytest.raises(ServiceValidationError) as exc_info:
        store.insert("subscription", fields)
    assert exc_info.value.code == "invalid_fields"

    fields["current_period_end"] = "2026-11-01T00:00:00"
    subscription = store.insert("subscription", fields)
    assert subscription.current_period_end == datetime(2026, 11, 1)


def test_user_subscription_status_vocabulary(store):
    with pytest.raises(ServiceValidationError):
        store.insert("user", user_fields(subscription_status="gold"))

    created = store.insert("user", user_fields(subscription_status="past_due"))
    assert created.subscription_status == "past_due"


def test_recipe_servings_must_be_positive(store, recipe):
    with pytest.raises(ServiceValidationError):
        store.update("recipe", recipe.id, {"servings": 0})


@pytest.mark.parametrize("fields", [{"servings": 2**31}, {"prep_time": 10**20}])
def test_recipe_integers_bounded(store, fields):
    with pytest.raises(ServiceValidationError) as exc_info:
        store.insert("recipe", recipe_fields(**fields))

    assert exc_info.value.code == "invalid_fields"


def test_out_of_range_integers_rejected(store, user, recipe):
    with pytest.raises(ServiceValidationError):
        store.insert("nutritional_info", nutrition_fields(recipe.id, calories=10**20))
    with pytest.raises(ServiceValidationError):
        store.insert("instruction", {"recipe_id": 10**20, "order": 1, "text": "Whisk."})
    with pytest.raises(ServiceValidationError):
        store.insert(
            "payment_history",
            {
                "user_id": user.id,
                "stripe_invoice_id": "in_big",
                "amount": 2**40,
                "currency": "usd",
                "status": "paid",
                "payment_date": datetime(2026, 10, 3),
            },
        )
    with pytest.raises(ServiceValidationError):
        store.update("recipe", recipe.id, {"cook_time": 2**31})

    assert store.list_by_parent("nutritional_info", recipe.id) == []
