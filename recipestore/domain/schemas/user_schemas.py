from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, EmailStr, Field

from recipestore.domain.enums import AuthProvider, SubscriptionStatus, INACTIVE_SUBSCRIPTION
from recipestore.domain.schemas.common import DbInt, InsertSchema, UpdateSchema, ReadSchema

_USER_SUBSCRIPTION_STATUSES = {INACTIVE_SUBSCRIPTION} | {s.value for s in SubscriptionStatus}


def _check_subscription_status(v: str) -> str:
    if v not in _USER_SUBSCRIPTION_STATUSES:
        raise ValueError(f"Unknown subscription status: {v}")
    return v


UserSubscriptionStatus = Annotated[str, AfterValidator(_check_subscription_status)]


class UserCreate(InsertSchema):
    id: Optional[str] = Field(None, min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password_hash: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    auth_provider: AuthProvider = AuthProvider.EMAIL
    is_premium: bool = False
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    subscription_status: UserSubscriptionStatus = INACTIVE_SUBSCRIPTION
    subscription_plan: Optional[str] = None
    subscription_end_date: Optional[datetime] = None


class UserUpsert(InsertSchema):
    """Profile fields supplied by an auth provider on every login"""

    id: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    auth_provider: AuthProvider = AuthProvider.EMAIL


class UserUpdate(UpdateSchema):
    username: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password_hash: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    auth_provider: Optional[AuthProvider] = None
    is_premium: Optional[bool] = None
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    subscription_status: Optional[UserSubscriptionStatus] = None
    subscription_plan: Optional[str] = None
    subscription_end_date: Optional[datetime] = None


class UserRead(ReadSchema):
    id: str
    username: str
    email: str
    password_hash: Optional[str] = Field(None, repr=False)
    first_name: Optional[str]
    last_name: Optional[str]
    profile_image_url: Optional[str]
    auth_provider: str
    is_premium: bool
    stripe_customer_id: Optional[str]
    stripe_subscription_id: Optional[str]
    subscription_status: Optional[str]
    subscription_plan: Optional[str]
    subscription_end_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class DietaryPreferenceCreate(InsertSchema):
    user_id: str = Field(..., min_length=1)
    preference: str = Field(..., min_length=1, max_length=500)


class DietaryPreferenceUpdate(UpdateSchema):
    preference: Optional[str] = Field(None, min_length=1, max_length=500)


class DietaryPreferenceRead(ReadSchema):
    id: int
    user_id: str
    preference: str


class SavedRecipeCreate(InsertSchema):
    user_id: str = Field(..., min_length=1)
    recipe_id: DbInt


class SavedRecipeRead(ReadSchema):
    id: int
    user_id: str
    recipe_id: int
    created_at: datetime
