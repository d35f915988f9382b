"""
Instruction ordering tests.

Steps of a recipe always form a gapless 1..n sequence and list in ascending order.
"""

import pytest

from test_fixtures import store, recipe, recipe_fields
from recipestore.exceptions import ServiceValidationError


def add_step(store, recipe_id, order, text):
    return store.insert("instruction", {"recipe_id": recipe_id, "order": order, "text": text})


def step_texts(store, recipe_id):
    return [(s.order, s.text) for s in store.list_by_parent("instruction", recipe_id)]


@pytest.fixture
def three_steps(store, recipe):
    return [
        add_step(store, recipe.id, 1, "Season the chicken."),
        add_step(store, recipe.id, 2, "Sear until golden."),
        add_step(store, recipe.id, 3, "Deglaze with lemon juice."),
    ]


def test_steps_listed_in_order_not_insertion_order(store, recipe):
    """
    Scenario: insert steps 1, then 2, then a new step at 1.

    Verifies:
    - list_by_parent returns steps ascending by order
    - the earlier steps were pushed down
    """
    add_step(store, recipe.id, 1, "Boil water.")
    add_step(store, recipe.id, 2, "Cook pasta.")
    add_step(store, recipe.id, 1, "Fill the pot.")

    assert step_texts(store, recipe.id) == [
        (1, "Fill the pot."),
        (2, "Boil water."),
        (3, "Cook pasta."),
    ]


def test_append_at_end(store, recipe, three_steps):
    add_step(store, recipe.id, 4, "Serve.")

    assert [order for order, _ in step_texts(store, recipe.id)] == [1, 2, 3, 4]


@pytest.mark.parametrize("position", [5, 42])
def test_insert_past_end_rejected(store, recipe, three_steps, position):
    with pytest.raises(ServiceValidationError) as exc_info:
        add_step(store, recipe.id, position, "Too far.")

    assert exc_info.value.code == "invalid_step_order"
    assert len(step_texts(store, recipe.id)) == 3


def test_order_zero_rejected(store, recipe):
    with pytest.raises(ServiceValidationError):
        add_step(store, recipe.id, 0, "Step zero.")


def test_first_step_must_be_one(store, recipe):
    with pytest.raises(ServiceValidationError):
        add_step(store, recipe.id, 2, "Skipped a step.")


def test_move_step_up(store, recipe, three_steps):
    store.update("instruction", three_steps[2].id, {"order": 1})

    assert step_texts(store, recipe.id) == [
        (1, "Deglaze with lemon juice."),
        (2, "Season the chicken."),
        (3, "Sear until golden."),
    ]


def test_move_step_down(store, recipe, three_steps):
    moved = store.update("instruction", three_steps[0].id, {"order": 3})

    assert moved.order == 3
    assert step_texts(store, recipe.id) == [
        (1, "Sear until golden."),
        (2, "Deglaze with lemon juice."),
        (3, "Season the chicken."),
    ]


def test_move_step_out_of_range(store, recipe, three_steps):
    with pytest.raises(ServiceValidationError):
        store.update("instruction", three_steps[0].id, {"order": 4})

    assert [s.id for s in store.list_by_parent("instruction", recipe.id)] == [
        s.id for s in three_steps
    ]


def test_edit_text_keeps_position(store, recipe, three_steps):
    store.update("instruction", three_steps[1].id, {"text": "Sear skin-side down until golden."})

    assert step_texts(store, recipe.id)[1] == (2, "Sear skin-side down until golden.")


def test_delete_closes_gap(store, recipe, three_steps):
    store.delete("instruction", three_steps[1].id)

    assert step_texts(store, recipe.id) == [
        (1, "Season the chicken."),
        (2, "Deglaze with lemon juice."),
    ]


def test_recipes_number_steps_independently(store, recipe, three_steps):
    other = store.insert("recipe", recipe_fields(title="Shakshuka"))
    add_step(store, other.id, 1, "Warm the sauce.")

    assert step_texts(store, other.id) == [(1, "Warm the sauce.")]
    assert [order for order, _ in step_texts(store, recipe.id)] == [1, 2, 3]
