from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from recipestore.domain.enums import SubscriptionStatus, PaymentStatus
from recipestore.domain.models.database import as_utc
from recipestore.domain.schemas.common import INT_MAX, InsertSchema, UpdateSchema, ReadSchema


class SubscriptionCreate(InsertSchema):
    user_id: str = Field(..., min_length=1)
    stripe_subscription_id: str = Field(..., min_length=1)
    stripe_price_id: str = Field(..., min_length=1)
    status: SubscriptionStatus
    plan_name: str = Field(..., min_length=1)
    current_period_start: datetime
    current_period_end: datetime
    cancel_at_period_end: bool = False

    @model_validator(mode="after")
    def check_period(self):
        if as_utc(self.current_period_end) < as_utc(self.current_period_start):
            raise ValueError("current_period_end precedes current_period_start")
        return self


class SubscriptionUpdate(UpdateSchema):
    stripe_price_id: Optional[str] = Field(None, min_length=1)
    status: Optional[SubscriptionStatus] = None
    plan_name: Optional[str] = Field(None, min_length=1)
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: Optional[bool] = None


class SubscriptionRead(ReadSchema):
    id: int
    user_id: str
    stripe_subscription_id: str
    stripe_price_id: str
    status: str
    plan_name: str
    current_period_start: datetime
    current_period_end: datetime
    cancel_at_period_end: bool
    created_at: datetime
    updated_at: datetime


class PaymentHistoryCreate(InsertSchema):
    user_id: str = Field(..., min_length=1)
    stripe_invoice_id: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0, le=INT_MAX, description="Amount in minor currency units")
    currency: str = Field(..., pattern=r"^[a-z]{3}$")
    status: PaymentStatus
    invoice_url: Optional[str] = None
    description: Optional[str] = None
    payment_date: datetime

    @field_validator("currency", mode="before")
    @classmethod
    def normalize_currency(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class PaymentHistoryUpdate(UpdateSchema):
    status: Optional[PaymentStatus] = None
    invoice_url: Optional[str] = None
    description: Optional[str] = None


class PaymentHistoryRead(ReadSchema):
    id: int
    user_id: str
    stripe_invoice_id: str
    amount: int
    currency: str
    status: str
    invoice_url: Optional[str]
    description: Optional[str]
    payment_date: datetime
    created_at: datetime
