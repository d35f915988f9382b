"""
Domain enums for the recipe store.
Contains the enumeration types used across models, schemas and the store API.
"""

import enum


class EntityKind(str, enum.Enum):
    """Every entity the store can insert, fetch, update or delete"""

    USER = "user"
    SUBSCRIPTION = "subscription"
    PAYMENT_HISTORY = "payment_history"
    DIETARY_PREFERENCE = "dietary_preference"
    RECIPE = "recipe"
    INGREDIENT = "ingredient"
    INSTRUCTION = "instruction"
    TAG = "tag"
    RECIPE_TAG = "recipe_tag"
    CATEGORY = "category"
    RECIPE_CATEGORY = "recipe_category"
    NUTRITIONAL_INFO = "nutritional_info"
    SAVED_RECIPE = "saved_recipe"
    MEAL_PLAN = "meal_plan"
    MEAL_PLAN_ITEM = "meal_plan_item"
    SHOPPING_LIST = "shopping_list"
    SHOPPING_LIST_ITEM = "shopping_list_item"


class AuthProvider(str, enum.Enum):
    """How a user signs in"""

    EMAIL = "email"
    GOOGLE = "google"
    REPLIT = "replit"


class Difficulty(str, enum.Enum):
    """Recipe difficulty"""

    EASY = "Easy"
    MEDIUM = "Medium"
    ADVANCED = "Advanced"


class MealSlot(str, enum.Enum):
    """Slot of a meal plan item within a day"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class SubscriptionStatus(str, enum.Enum):
    """Billing subscription status (mirrors the payment processor's values)"""

    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    TRIALING = "trialing"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"
    PAUSED = "paused"


# Statuses that grant premium access
PREMIUM_STATUSES = frozenset(
    {SubscriptionStatus.ACTIVE.value, SubscriptionStatus.TRIALING.value}
)

# Value stored on users that never subscribed
INACTIVE_SUBSCRIPTION = "inactive"


class PaymentStatus(str, enum.Enum):
    """Invoice payment status"""

    DRAFT = "draft"
    OPEN = "open"
    PAID = "paid"
    UNPAID = "unpaid"
    REFUNDED = "refunded"
    UNCOLLECTIBLE = "uncollectible"
    VOID = "void"
